"""Tests for scaled isometries."""

import pytest
from sage.matrix.constructor import matrix
from sage.matrix.special import identity_matrix
from sage.rings.integer_ring import ZZ

from ternarygenus import Isometry, TernaryForm


def test_identity_is_isometry():
    q = TernaryForm([1, 1, 3, 1, 0, 0])
    s = Isometry.identity()
    assert s.matrix() == identity_matrix(ZZ, 3)
    assert s.is_isometry(q, q, 1)
    assert s.is_proper()


def test_composition_multiplies_scales():
    q = TernaryForm([1, 1, 1, 0, 0, 0])
    s = Isometry(2 * identity_matrix(ZZ, 3))
    t = Isometry(3 * identity_matrix(ZZ, 3))
    assert (s * t).is_isometry(q, q, 36)
    assert not (s * t).is_isometry(q, q, 6)


def test_inverse_round_trip():
    s = Isometry(matrix(ZZ, [[3, 0, 0], [0, 3, 0], [0, 0, 3]]))
    assert s.inverse(3) == s
    t = Isometry(matrix(ZZ, [[1, 1, 0], [0, 1, 0], [0, 0, 1]]))
    assert (t * t.inverse(1)).matrix() == identity_matrix(ZZ, 3)


def test_inverse_with_wrong_scale_raises():
    s = Isometry(matrix(ZZ, [[3, 0, 0], [0, 3, 0], [0, 0, 3]]))
    with pytest.raises(ValueError):
        s.inverse(2)


def test_proper_negates_improper_isometries():
    s = Isometry(matrix(ZZ, [[0, 1, 0], [1, 0, 0], [0, 0, 1]]))
    assert not s.is_proper()
    t = s.proper()
    assert t.is_proper()
    assert t.matrix() == -s.matrix()
    assert Isometry().proper() == Isometry()
