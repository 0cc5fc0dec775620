"""Tests for cosine similarity."""

import numpy as np
import pytest

from people_albums.clustering.similarity import cosine_similarity


def test_identical_vectors_score_one():
    rng = np.random.default_rng(42)
    v = rng.standard_normal(512).astype(np.float32)
    assert cosine_similarity(v, v) == pytest.approx(1.0, abs=1e-6)


def test_scaled_vector_scores_one():
    assert cosine_similarity([1.0, 2.0, 3.0], [2.0, 4.0, 6.0]) == pytest.approx(1.0)


def test_orthogonal_and_opposite():
    assert cosine_similarity([1.0, 0.0], [0.0, 1.0]) == pytest.approx(0.0)
    assert cosine_similarity([1.0, 0.0], [-1.0, 0.0]) == pytest.approx(-1.0)


def test_symmetric():
    a = [0.3, -0.2, 0.9]
    b = [0.1, 0.5, 0.4]
    assert cosine_similarity(a, b) == cosine_similarity(b, a)


def test_length_mismatch_scores_zero():
    assert cosine_similarity([1.0, 0.0], [1.0, 0.0, 0.0]) == 0.0


def test_empty_vectors_score_zero():
    assert cosine_similarity([], []) == 0.0
    assert cosine_similarity([], [1.0]) == 0.0


def test_zero_vector_scores_zero():
    assert cosine_similarity([0.0, 0.0], [1.0, 0.0]) == 0.0


def test_result_is_bounded():
    v = np.full(768, 1e-3, dtype=np.float32)
    score = cosine_similarity(v, v)
    assert -1.0 <= score <= 1.0


def test_non_finite_vectors_score_zero():
    assert cosine_similarity([float("nan"), 0.0], [1.0, 0.0]) == 0.0
    assert cosine_similarity([1.0, 0.0], [float("inf"), 0.0]) == 0.0
    assert cosine_similarity([float("-inf"), 1.0], [float("inf"), 1.0]) == 0.0


def test_huge_values_do_not_overflow():
    assert cosine_similarity([1e200, 0.0], [-1e200, 0.0]) == pytest.approx(-1.0)
    assert cosine_similarity([1e200, 1e200], [1e200, 1e200]) == pytest.approx(1.0)
