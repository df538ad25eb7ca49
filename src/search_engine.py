"""In-memory TF-IDF search engine over a fixed list of documents."""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

import numpy as np

from analysis import preprocess
from config import DEFAULT_TOP_N
from ranking import rank
from vectorizer import FittedModel, fit, transform, transform_one

logger = logging.getLogger(__name__)

Analyzer = Callable[[str], list[str]]


@dataclass
class SearchResult:
    """A single search hit."""

    rank: int
    index: int
    document: str
    score: float


@dataclass
class TermWeight:
    """A query term that matched the fitted vocabulary."""

    term: str
    weight: float
    idf: float


class SearchEngine:
    """Fit TF-IDF over *documents* once and rank them against queries by cosine score.

    The fitted model and corpus matrix are read-only; :meth:`refit` builds a
    new engine instead of changing this one.
    """

    def __init__(
        self, documents: Sequence[str], analyzer: Analyzer | None = None
    ) -> None:
        self._documents: tuple[str, ...] = tuple(documents)
        self._analyzer: Analyzer = analyzer or preprocess

        term_sequences = [self._analyzer(document) for document in self._documents]
        self._model: FittedModel = fit(term_sequences)
        self._corpus_matrix: np.ndarray = transform(term_sequences, self._model)
        self._corpus_matrix.flags.writeable = False
        logger.info(
            "Indexed %d documents over %d terms", len(self._documents), len(self._model)
        )

    @property
    def documents(self) -> tuple[str, ...]:
        return self._documents

    @property
    def model(self) -> FittedModel:
        return self._model

    @property
    def corpus_matrix(self) -> np.ndarray:
        return self._corpus_matrix

    def refit(self, documents: Sequence[str]) -> "SearchEngine":
        """Return a new engine over *documents* using the same analyzer."""
        return SearchEngine(documents, analyzer=self._analyzer)

    def vectorize_query(self, query: str) -> np.ndarray:
        """TF-IDF vector of *query* in this engine's vocabulary space."""
        return transform_one(self._analyzer(query), self._model)

    def search(self, query: str, top_n: int = DEFAULT_TOP_N) -> list[SearchResult]:
        """Return the *top_n* documents most similar to *query*.

        Results are ordered by descending score, ties in corpus order.
        Documents with zero similarity are excluded, so the returned list may
        be shorter than *top_n*, or empty. A negative *top_n* raises ``ValueError``.
        """
        hits = rank(
            self.vectorize_query(query),
            self._corpus_matrix,
            self._documents,
            top_n,
        )
        logger.debug("Query %r matched %d document(s)", query, len(hits))
        return [
            SearchResult(
                rank=position + 1, index=hit.index, document=hit.label, score=hit.score
            )
            for position, hit in enumerate(hits)
        ]

    def explain(self, query: str) -> list[TermWeight]:
        """Show which query terms matched the vocabulary, with their weight and IDF.

        Terms come back in vocabulary-index order. A term with a zero weight
        (IDF of zero) is still listed, since it did match.
        """
        terms = self._analyzer(query)
        vector = transform_one(terms, self._model)
        vocabulary = self._model.vocabulary
        matched = sorted(
            {term for term in terms if term in vocabulary}, key=vocabulary.__getitem__
        )
        return [
            TermWeight(
                term=term,
                weight=float(vector[vocabulary[term]]),
                idf=self._model.idf[term],
            )
            for term in matched
        ]

    def unmatched_terms(self, query: str) -> list[str]:
        """Query terms absent from the vocabulary, in query order, without repeats."""
        return [
            term
            for term in dict.fromkeys(self._analyzer(query))
            if term not in self._model.vocabulary
        ]
