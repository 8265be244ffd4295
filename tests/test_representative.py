"""Tests for genus representatives and path exponents."""

from ternarygenus import GenusRep, Isometry, PathExponents, TernaryForm


def test_path_exponents():
    e = PathExponents()
    assert len(e) == 0
    assert e.power() == 1
    f = e.incremented(3).incremented(5).incremented(3)
    assert len(e) == 0
    assert f[3] == 2 and f[5] == 1 and f[7] == 0
    assert f.items() == [(3, 2), (5, 1)]
    assert f.power() == 45
    assert f == PathExponents({3: 2, 5: 1})


def test_path_exponents_change_ring():
    f = PathExponents({3: 2, 5: 1}).change_ring(int)
    assert all(type(p) is int for p, _ in f.items())
    assert f.power() == 45


def test_genus_rep_defaults():
    q = TernaryForm([1, 1, 3, 1, 0, 0])
    rep = GenusRep(q)
    assert rep.to_mother == Isometry() and rep.from_mother == Isometry()
    assert rep.parent is None
    assert rep.prime == 1
    assert rep.exponents.power() == 1
    assert rep == GenusRep(TernaryForm([3, 1, 1, 0, 0, 1]))
    assert hash(rep) == hash(q)
    assert type(rep.change_ring(int).prime) is int
