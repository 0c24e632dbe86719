"""Tests for cosine similarity."""
from __future__ import annotations

import math
import unittest

from domain.similarity import cosine_similarity


class TestCosineSimilarity(unittest.TestCase):
    def test_identical_vectors_score_one(self):
        for vector in ([1.0, 0.0], [0.3, -2.0, 5.5], [1e-3, 1e3]):
            self.assertAlmostEqual(cosine_similarity(vector, vector), 1.0, places=12)

    def test_symmetry(self):
        a = [0.1, 0.7, -0.2, 3.0]
        b = [1.5, -0.4, 0.0, 2.2]
        self.assertEqual(cosine_similarity(a, b), cosine_similarity(b, a))

    def test_orthogonal_and_opposite(self):
        self.assertAlmostEqual(cosine_similarity([1.0, 0.0], [0.0, 1.0]), 0.0)
        self.assertAlmostEqual(cosine_similarity([1.0, 2.0], [-1.0, -2.0]), -1.0)

    def test_zero_vector_yields_nan(self):
        self.assertTrue(math.isnan(cosine_similarity([0.0, 0.0], [1.0, 0.0])))
        self.assertTrue(math.isnan(cosine_similarity([0.0, 0.0], [0.0, 0.0])))

    def test_length_mismatch_raises(self):
        with self.assertRaises(ValueError):
            cosine_similarity([1.0, 0.0], [1.0, 0.0, 0.0])

    def test_returns_python_float(self):
        self.assertIsInstance(cosine_similarity([1, 2], [3, 4]), float)


if __name__ == "__main__":
    unittest.main()
