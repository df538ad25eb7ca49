"""Vocabulary/IDF fitting and TF-IDF vectors for tokenised documents and queries.

Weights follow the smoothed form used throughout the project:

    tf(t)  = count(t) / len(sequence)
    idf(t) = ln(N / (1 + df(t)))

IDF is not clamped: a term present in N-1 or more documents gets an IDF of
zero or below, which removes it from (or pushes it against) every score.
"""

import logging
from collections import Counter
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType

import numpy as np

logger = logging.getLogger(__name__)

TermSequence = Sequence[str]


class Vocabulary(Mapping[str, int]):
    """Term -> dense index in ``[0, len(vocabulary))``, assigned in first-seen order.

    The only way to add a term is :meth:`intern_or_lookup`, and only until the
    vocabulary is frozen. ``fit`` freezes it before handing it out.
    """

    def __init__(self) -> None:
        self._index: dict[str, int] = {}
        self._frozen = False

    def intern_or_lookup(self, term: str) -> int:
        """Return the index of *term*, assigning the next free one if it is new."""
        index = self._index.get(term)
        if index is not None:
            return index
        if self._frozen:
            raise RuntimeError(f"vocabulary is frozen; cannot add term {term!r}")
        index = len(self._index)
        self._index[term] = index
        return index

    def freeze(self) -> "Vocabulary":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def terms(self) -> list[str]:
        """Terms in index order."""
        return list(self._index)

    def __getitem__(self, term: str) -> int:
        return self._index[term]

    def __iter__(self) -> Iterator[str]:
        return iter(self._index)

    def __len__(self) -> int:
        return len(self._index)

    def __repr__(self) -> str:
        return f"Vocabulary({self._index!r})"


@dataclass(frozen=True)
class FittedModel:
    """Vocabulary and IDF table produced by one :func:`fit` call.

    Never mutated after construction: re-fitting yields a new model, so
    vectors computed against this one stay valid for it.
    """

    vocabulary: Vocabulary
    idf: Mapping[str, float]
    n_documents: int
    idf_vector: np.ndarray = field(repr=False, compare=False)

    def __len__(self) -> int:
        return len(self.vocabulary)


def _read_only(array: np.ndarray) -> np.ndarray:
    array.flags.writeable = False
    return array


def fit(documents: Sequence[TermSequence]) -> FittedModel:
    """Build the vocabulary and IDF table for *documents*.

    Index assignment depends only on document order and first occurrence
    within each document. An empty corpus yields an empty model.
    """
    n_documents = len(documents)
    vocabulary = Vocabulary()

    if n_documents == 0:
        logger.warning("Fitting an empty corpus; the model has no terms")
        return FittedModel(
            vocabulary=vocabulary.freeze(),
            idf=MappingProxyType({}),
            n_documents=0,
            idf_vector=_read_only(np.zeros(0, dtype=np.float64)),
        )

    for document in documents:
        for term in dict.fromkeys(document):  # distinct, first-occurrence order
            vocabulary.intern_or_lookup(term)
    vocabulary.freeze()

    document_frequency = Counter(
        term for document in documents for term in set(document)
    )
    df = np.array([document_frequency[term] for term in vocabulary], dtype=np.float64)
    idf_vector = np.log(n_documents / (1.0 + df))

    logger.debug("Fitted %d documents, %d terms", n_documents, len(vocabulary))
    return FittedModel(
        vocabulary=vocabulary,
        idf=MappingProxyType(
            {term: float(idf_vector[index]) for term, index in vocabulary.items()}
        ),
        n_documents=n_documents,
        idf_vector=_read_only(idf_vector),
    )


def transform_one(terms: TermSequence, model: FittedModel) -> np.ndarray:
    """TF-IDF vector of length ``len(model)`` for a single term sequence.

    Out-of-vocabulary terms still count towards the sequence length but get
    no coordinate. An empty sequence gives the zero vector.
    """
    vector = np.zeros(len(model), dtype=np.float64)
    if not terms:
        return vector

    length = len(terms)
    for term, count in Counter(terms).items():
        index = model.vocabulary.get(term)
        if index is None:
            continue
        vector[index] = (count / length) * model.idf_vector[index]
    return vector


def transform(term_sequences: Sequence[TermSequence], model: FittedModel) -> np.ndarray:
    """Stack :func:`transform_one` rows into an ``(n, len(model))`` array."""
    matrix = np.zeros((len(term_sequences), len(model)), dtype=np.float64)
    for row, terms in enumerate(term_sequences):
        matrix[row] = transform_one(terms, model)
    logger.debug("Transformed %d term sequences into %s", len(term_sequences), matrix.shape)
    return matrix
