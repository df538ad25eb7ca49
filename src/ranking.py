"""Cosine similarity and top-N ranking of document vectors against a query vector."""

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike
from sklearn.metrics.pairwise import linear_kernel


@dataclass(frozen=True)
class RankedResult:
    """A document label with its similarity to the query.

    ``index`` is the document's row in the corpus matrix.
    """

    label: str
    score: float
    index: int


def cosine_similarity(a: ArrayLike, b: ArrayLike) -> float:
    """``dot(a, b) / (|a| * |b|)``, or ``0.0`` when either vector has zero norm.

    Capped at 1.0 so rounding never pushes self-similarity above it.

    Raises ``ValueError`` when the vectors have different lengths, which means
    they were built against different vocabularies.
    """
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    if a.shape != b.shape:
        raise ValueError(f"Vector lengths differ: {a.shape[0]} != {b.shape[0]}")

    norm_a = float(np.linalg.norm(a))
    norm_b = float(np.linalg.norm(b))
    if norm_a <= 0 or norm_b <= 0:
        return 0.0
    return min(float(np.dot(a, b) / (norm_a * norm_b)), 1.0)


def similarities(query_vector: ArrayLike, corpus_matrix: ArrayLike) -> np.ndarray:
    """Cosine similarity of *query_vector* against every row of *corpus_matrix*.

    Dot products come from ``linear_kernel`` and are divided by the L2 norms.
    Zero-norm rows (and a zero query) score 0, as in :func:`cosine_similarity`.
    """
    query = np.asarray(query_vector, dtype=np.float64).reshape(1, -1)
    matrix = np.asarray(corpus_matrix, dtype=np.float64)
    if matrix.size == 0 and matrix.ndim < 2:
        matrix = matrix.reshape(0, query.shape[1])
    if matrix.ndim != 2 or matrix.shape[1] != query.shape[1]:
        raise ValueError(
            f"Query length {query.shape[1]} does not match"
            f" corpus matrix of shape {matrix.shape}"
        )

    n_documents, n_terms = matrix.shape
    if n_documents == 0 or n_terms == 0:
        return np.zeros(n_documents, dtype=np.float64)
    dots = linear_kernel(query, matrix).ravel()
    denominator = np.linalg.norm(matrix, axis=1) * np.linalg.norm(query)
    scores = np.divide(
        dots, denominator, out=np.zeros_like(dots), where=denominator > 0
    )
    return np.minimum(scores, 1.0)


def rank(
    query_vector: ArrayLike,
    corpus_matrix: ArrayLike,
    labels: Sequence[str],
    top_n: int,
) -> list[RankedResult]:
    """Return at most *top_n* documents with positive similarity, best first.

    Equal scores keep corpus order. A query that matches nothing gives ``[]``.
    Raises ``ValueError`` for a negative *top_n* or when *labels* and the
    matrix rows do not line up.
    """
    if top_n < 0:
        raise ValueError(f"top_n must be >= 0, got {top_n}")

    scores = similarities(query_vector, corpus_matrix)
    if len(labels) != len(scores):
        raise ValueError(
            f"Got {len(labels)} labels for a corpus matrix of {len(scores)} documents"
        )

    results: list[RankedResult] = []
    if top_n == 0:
        return results

    for index in np.argsort(-scores, kind="stable"):
        score = float(scores[index])
        if score <= 0:
            break
        results.append(RankedResult(label=labels[index], score=score, index=int(index)))
        if len(results) == top_n:
            break
    return results
