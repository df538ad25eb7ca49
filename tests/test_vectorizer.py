"""Tests for vocabulary/IDF fitting and TF-IDF transformation."""

import math

import numpy as np
import pytest

from vectorizer import FittedModel, Vocabulary, fit, transform, transform_one

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

ANIMALS = [["cat", "dog"], ["dog", "dog", "fish"], ["fish", "bird"]]


@pytest.fixture()
def model() -> FittedModel:
    return fit(ANIMALS)


# ---------------------------------------------------------------------------
# Vocabulary
# ---------------------------------------------------------------------------


class TestVocabulary:
    def test_intern_assigns_dense_indices(self) -> None:
        vocab = Vocabulary()
        assert vocab.intern_or_lookup("a") == 0
        assert vocab.intern_or_lookup("b") == 1
        assert vocab.intern_or_lookup("a") == 0
        assert len(vocab) == 2

    def test_terms_in_index_order(self) -> None:
        vocab = Vocabulary()
        for term in ["z", "y", "x"]:
            vocab.intern_or_lookup(term)
        assert vocab.terms() == ["z", "y", "x"]

    def test_frozen_vocabulary_rejects_new_terms(self) -> None:
        vocab = Vocabulary()
        vocab.intern_or_lookup("a")
        vocab.freeze()
        assert vocab.intern_or_lookup("a") == 0
        with pytest.raises(RuntimeError):
            vocab.intern_or_lookup("b")

    def test_fit_returns_frozen_vocabulary(self, model: FittedModel) -> None:
        assert model.vocabulary.frozen


# ---------------------------------------------------------------------------
# fit()
# ---------------------------------------------------------------------------


class TestFit:
    def test_first_seen_index_order(self, model: FittedModel) -> None:
        assert dict(model.vocabulary) == {"cat": 0, "dog": 1, "fish": 2, "bird": 3}

    def test_idf_values(self, model: FittedModel) -> None:
        assert model.idf["cat"] == pytest.approx(math.log(3 / 2))
        assert model.idf["dog"] == pytest.approx(0.0)
        assert model.idf["fish"] == pytest.approx(0.0)
        assert model.idf["bird"] == pytest.approx(math.log(3 / 2))

    def test_one_idf_entry_per_term(self, model: FittedModel) -> None:
        assert set(model.idf) == set(model.vocabulary)
        assert len(model.idf_vector) == len(model.vocabulary)

    def test_idf_vector_aligned_with_indices(self, model: FittedModel) -> None:
        for term, index in model.vocabulary.items():
            assert model.idf_vector[index] == pytest.approx(model.idf[term])

    @pytest.mark.parametrize("k", [1, 2, 3, 4])
    def test_idf_formula(self, k: int) -> None:
        n = 5
        docs = [["t", "filler"] if i < k else ["filler"] for i in range(n)]
        assert fit(docs).idf["t"] == pytest.approx(math.log(n / (1 + k)))

    def test_negative_idf_is_not_clamped(self) -> None:
        model = fit([["common"], ["common"]])
        assert model.idf["common"] == pytest.approx(math.log(2 / 3))
        assert model.idf["common"] < 0

    def test_repeated_term_counts_once_for_df(self) -> None:
        model = fit([["a", "a", "a"], ["b"], ["c"]])
        assert model.idf["a"] == pytest.approx(math.log(3 / 2))

    def test_n_documents(self, model: FittedModel) -> None:
        assert model.n_documents == 3

    def test_empty_corpus_gives_empty_model(self) -> None:
        model = fit([])
        assert len(model) == 0
        assert len(model.vocabulary) == 0
        assert dict(model.idf) == {}
        assert model.n_documents == 0

    def test_empty_documents_are_allowed(self) -> None:
        model = fit([[], ["a"], []])
        assert dict(model.vocabulary) == {"a": 0}
        assert model.idf["a"] == pytest.approx(math.log(3 / 2))

    def test_fit_is_deterministic(self) -> None:
        first = fit(ANIMALS)
        second = fit(ANIMALS)
        assert list(first.vocabulary.items()) == list(second.vocabulary.items())
        assert dict(first.idf) == dict(second.idf)

    def test_refit_leaves_old_model_untouched(self, model: FittedModel) -> None:
        fit([["zebra"], ["cat"]])
        assert dict(model.vocabulary) == {"cat": 0, "dog": 1, "fish": 2, "bird": 3}

    def test_model_is_read_only(self, model: FittedModel) -> None:
        with pytest.raises(TypeError):
            model.idf["cat"] = 1.0  # type: ignore[index]
        with pytest.raises(ValueError):
            model.idf_vector[0] = 1.0


# ---------------------------------------------------------------------------
# transform() / transform_one()
# ---------------------------------------------------------------------------


class TestTransform:
    def test_query_vector(self, model: FittedModel) -> None:
        vector = transform_one(["dog", "bird"], model)
        np.testing.assert_allclose(vector, [0.0, 0.0, 0.0, 0.5 * math.log(3 / 2)])

    def test_output_length_matches_vocabulary(self, model: FittedModel) -> None:
        assert transform_one(["cat"], model).shape == (4,)

    def test_empty_sequence_gives_zero_vector(self, model: FittedModel) -> None:
        vector = transform_one([], model)
        assert vector.shape == (4,)
        assert not vector.any()

    def test_out_of_vocabulary_terms_are_dropped(self, model: FittedModel) -> None:
        vector = transform_one(["unicorn", "dragon"], model)
        assert vector.shape == (4,)
        assert not vector.any()

    def test_oov_terms_count_towards_length(self, model: FittedModel) -> None:
        vector = transform_one(["cat", "unicorn"], model)
        assert vector[0] == pytest.approx(0.5 * math.log(3 / 2))

    def test_matrix_shape_and_rows(self, model: FittedModel) -> None:
        matrix = transform(ANIMALS, model)
        assert matrix.shape == (3, 4)
        for row, terms in zip(matrix, ANIMALS, strict=True):
            np.testing.assert_allclose(row, transform_one(terms, model))

    def test_transform_of_no_sequences(self, model: FittedModel) -> None:
        assert transform([], model).shape == (0, 4)

    def test_tf_sums_to_one(self) -> None:
        docs = [["a", "b", "b"], ["c", "a"], ["d"], ["e", "c"]]
        model = fit(docs)
        matrix = transform(docs, model)
        for row, terms in zip(matrix, docs, strict=True):
            total = sum(row[model.vocabulary[t]] / model.idf[t] for t in set(terms))
            assert total == pytest.approx(1.0)

    def test_empty_model_gives_empty_vectors(self) -> None:
        model = fit([])
        assert transform_one(["anything"], model).shape == (0,)
        assert transform([["a"], []], model).shape == (2, 0)
