"""Tests for genus enumeration and Hecke matrices."""

import pytest
from sage.matrix.constructor import matrix
from sage.matrix.special import identity_matrix
from sage.rings.integer_ring import ZZ
from sage.rings.rational_field import QQ

from ternarygenus import Genus, PrimeSymbol, TernaryForm

A3 = [[2, -1, 0], [-1, 2, -1], [0, -1, 2]]
DISC_11 = [1, 1, 3, 1, 0, 0]
DISC_23 = [1, 1, 6, 1, 0, 0]
DISC_39 = [1, 1, 10, 1, 0, 0]


@pytest.fixture(scope = 'module')
def genus_11():
    return Genus(DISC_11, seed = 1)


@pytest.fixture(scope = 'module')
def genus_23():
    return Genus(DISC_23, seed = 5)


def _sparse_to_dense(csr, dim):
    data, indices, indptr = csr
    x = [0] * (dim * dim)
    for i in range(dim):
        for j in range(indptr[i], indptr[i + 1]):
            x[i * dim + indices[j]] = data[j]
    return x


def test_single_class_genus():
    g = Genus(A3, seed = 1)
    assert len(g) == g.size() == 1
    assert g.discriminant() == 2
    assert g.mass_x24() == 1
    assert g.mass() == QQ(1) / 48
    assert g.conductors() == [1, 2]
    assert g.dimension_map() == {1: 1, 2: 0}
    assert g.lookup_table(1) == [0]
    assert g.lookup_table(2) == [None]
    assert g.spinor_primes() == []
    assert g.hecke_matrix_dense(3) == {1: [4], 2: []}
    assert g.hecke_matrix_dense(5) == {1: [6], 2: []}
    assert g.hecke_matrix_sparse(3) == {1: ([4], [0], [0, 1]), 2: ([], [], [0])}


def test_bad_hecke_primes():
    g = Genus(A3, seed = 1)
    for p in [2, 4, 9]:
        with pytest.raises(ValueError):
            g.hecke_matrix_dense(p)
        with pytest.raises(ValueError):
            g.hecke_matrix_sparse(p)
    with pytest.raises(ValueError):
        g.lookup_table(3)


def test_enumeration(genus_11):
    g = genus_11
    assert len(g) == 2
    assert g.prime_divisors() == [11]
    assert g.conductors() == [1, 11]
    assert g.spinor_primes() == [2]
    reps = g.representatives()
    assert reps[0].form == TernaryForm(DISC_11)
    assert reps[0].form.gram_matrix() == TernaryForm(DISC_11).gram_matrix()
    assert sorted(r.form.number_of_automorphisms() for r in reps) == [8, 12]
    assert sum(48 // r.form.number_of_automorphisms() for r in reps) == g.mass_x24() == 10
    assert reps[0].form != reps[1].form
    assert all(r.form.discriminant() == 11 for r in reps)


def test_isometries_to_mother(genus_11, genus_23):
    for g in [genus_11, genus_23]:
        mother = g.representative(0).form
        for n, rep in enumerate(g.representatives()):
            c = rep.exponents.power()
            scalar = c * c
            assert rep.to_mother.is_isometry(mother, rep.form, scalar)
            assert rep.from_mother.is_isometry(rep.form, mother, scalar)
            assert rep.to_mother.matrix() * rep.from_mother.matrix() == scalar * identity_matrix(ZZ, 3)
            if n:
                parent = g.representative(rep.parent)
                assert rep.parent < n
                assert rep.exponents == parent.exponents.incremented(rep.prime)


def test_lookup_tables(genus_11, genus_23):
    for g in [genus_11, genus_23]:
        dims = g.dimension_map()
        assert dims[1] == len(g)
        assert g.lookup_table(1) == list(range(len(g)))
        for d in g.conductors():
            lut = g.lookup_table(d)
            assert len(lut) == len(g)
            assert sorted(x for x in lut if x is not None) == list(range(dims[d]))


@pytest.mark.parametrize("p, trace", [(2, 1), (3, 3), (5, 7), (7, 6)])
def test_hecke_traces(genus_11, p, trace):
    T = genus_11.hecke_matrix(p)
    assert T.trace() == trace
    assert all(sum(row) == p + 1 for row in T.rows())


def test_hecke_matrix_at_two(genus_11):
    assert genus_11.hecke_matrix_dense(2)[1] == [1, 2, 3, 0]


def test_hecke_weighted_symmetry(genus_11, genus_23):
    for g, p in [(genus_11, 3), (genus_23, 2), (genus_23, 5)]:
        T = g.hecke_matrix(p)
        auts = [r.form.number_of_automorphisms() for r in g.representatives()]
        for i in range(len(g)):
            for j in range(len(g)):
                assert T[i, j] * auts[j] == T[j, i] * auts[i]


def test_dense_agrees_with_sparse(genus_11, genus_23):
    for g, p in [(genus_11, 3), (genus_11, 5), (genus_23, 3)]:
        dense = g.hecke_matrix_dense(p)
        sparse = g.hecke_matrix_sparse(p)
        dims = g.dimension_map()
        assert set(dense) == set(sparse) == set(g.conductors())
        for d in g.conductors():
            assert len(sparse[d][2]) == dims[d] + 1
            assert 0 not in sparse[d][0]
            assert _sparse_to_dense(sparse[d], dims[d]) == dense[d]
        assert g.hecke_matrix(p, sparse = True) == g.hecke_matrix(p)


def test_genus_with_three_classes(genus_23):
    g = genus_23
    assert len(g) == 3
    assert g.mass_x24() == 22
    assert sorted(r.form.number_of_automorphisms() for r in g.representatives()) == [4, 8, 12]
    assert g.hecke_matrix(2).trace() == 2


def test_seed_does_not_change_the_genus(genus_11):
    g = Genus(DISC_11, seed = 987654321)
    assert g.seed() == 987654321
    assert len(g) == len(genus_11)
    assert g.dimension_map() == genus_11.dimension_map()
    assert g.hecke_matrix(3).charpoly() == genus_11.hecke_matrix(3).charpoly()


def test_check_mode():
    g = Genus(DISC_23, seed = 11, check = True)
    assert len(g) == 3
    assert g.hecke_matrix(3).trace() == Genus(DISC_23, seed = 12).hecke_matrix(3).trace()


def test_change_ring(genus_11):
    h = genus_11.change_ring(int)
    assert h.ring() is int
    assert type(h.discriminant()) is int
    assert all(type(d) is int for d in h.conductors())
    assert all(type(p) is int for p in h.prime_divisors())
    assert h.hecke_matrix_dense(3) == genus_11.hecke_matrix_dense(3)
    k = h.change_ring(ZZ)
    assert k.dimension_map() == genus_11.dimension_map()
    assert k.mass_x24() == genus_11.mass_x24()
    assert [k.lookup_table(d) for d in k.conductors()] == [genus_11.lookup_table(d) for d in genus_11.conductors()]
    assert k.hecke_matrix_sparse(5) == genus_11.hecke_matrix_sparse(5)


def test_explicit_symbols():
    g = Genus(DISC_11, symbols = [PrimeSymbol(11)], seed = 3)
    assert len(g) == 2
    with pytest.raises(ValueError):
        Genus(A3, symbols = [PrimeSymbol(3)], seed = 1)
    with pytest.raises(ValueError):
        Genus(A3, symbols = [PrimeSymbol(2)] * 64, seed = 1)


def test_verbose(capsys):
    Genus(DISC_11, seed = 1, verbose = True)
    out = capsys.readouterr().out
    assert 'I found all 2 classes.' in out


def test_non_squarefree_discriminant_is_rejected():
    with pytest.raises(ValueError):
        Genus([1, 1, 3, 0, 0, 0], seed = 1)


@pytest.mark.parametrize("seed", [1, 2, 3, 4])
def test_spinor_character_subspace(seed):
    g = Genus(DISC_39, seed = seed)
    assert g.conductors() == [1, 3, 13, 39]
    assert g.mass_x24() == 14
    assert g.dimension_map() == {1: 3, 3: 0, 13: 0, 39: 1}
    assert g.hecke_matrix(5, conductor = 39) == matrix(ZZ, [[2]])
    assert g.hecke_matrix(7, conductor = 39) == matrix(ZZ, [[-4]])
    assert g.hecke_matrix(7, conductor = 39, sparse = True) == matrix(ZZ, [[-4]])
    assert g.hecke_matrix(5).charpoly() == Genus(DISC_39, seed = seed + 10).hecke_matrix(5).charpoly()


def test_twisted_dense_agrees_with_sparse():
    g = Genus(DISC_39, seed = 7, check = True)
    dense = g.hecke_matrix_dense(5)
    sparse = g.hecke_matrix_sparse(5)
    assert dense[39] == [2]
    assert sparse[39] == ([2], [0], [0, 1])
    assert _sparse_to_dense(sparse[1], 3) == dense[1]
    assert all(sum(dense[1][3 * i:3 * i + 3]) == 6 for i in range(3))


def test_restricted_conductors():
    g = Genus(DISC_39, seed = 2)
    assert g.hecke_matrix_dense(7, conductors = [39]) == {39: [-4]}
    assert g.hecke_matrix_sparse(7, conductors = [39]) == {39: ([-4], [0], [0, 1])}
    assert g.hecke_matrix_dense(7, conductors = [1, 39]) == {d: x for d, x in g.hecke_matrix_dense(7).items() if d in [1, 39]}
    with pytest.raises(ValueError):
        g.hecke_matrix_dense(7, conductors = [5])
    with pytest.raises(ValueError):
        g.hecke_matrix(7, conductor = 2)
