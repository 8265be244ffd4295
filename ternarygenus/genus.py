r"""

Genera of ternary quadratic forms and Hecke operators on spinor character subspaces

AUTHORS:

- Brandon Williams

"""

# ****************************************************************************
#       Copyright (C) 2020-2024 Brandon Williams
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 2 of the License, or
# (at your option) any later version.
#                  https://www.gnu.org/licenses/
# ****************************************************************************

from sage.arith.misc import is_prime, next_prime
from sage.matrix.constructor import matrix
from sage.misc.prandom import randrange
from sage.rings.integer import Integer
from sage.rings.integer_ring import ZZ
from sage.rings.rational_field import QQ

from .class_store import ClassStore
from .finite_field import prime_field
from .mass import default_symbols, mass_x24
from .neighbors import NeighborManager
from .quadratic_form import TernaryForm
from .representative import GenusRep
from .spinor import Spinor


def _rep_equivalence(x, y):
    return x.form.isometry(y.form)

def _rep_hash(x):
    return hash(x.form)

def _char_val(x):
    r"""
    (-1)^(number of bits set in x)
    """
    return -1 if bin(x).count('1') % 2 else 1


class Genus(object):
    r"""
    This class represents the genus of a positive-definite ternary quadratic form, together with its decomposition into spinor character subspaces.

    The representatives of the genus are computed with p-neighbors when the Genus is constructed. The i-th representative comes with isometries to and from the first one (the "mother form") which are used to compute spinor characters of isometries between arbitrary classes.

    For every squarefree product ("conductor") d of the primes in ``symbols``, the space of functions on the genus that transform under the spinor character attached to d has a basis indexed by the classes none of whose proper automorphisms have nontrivial character. Hecke operators act on each of these spaces.

    INPUT: a Genus is constructed by calling ``Genus(q)``, where
    - ``q`` -- a TernaryForm (or anything that TernaryForm accepts)
    - ``symbols`` -- optional: a list of PrimeSymbol's, one for every prime dividing the discriminant. If not given then these are computed from the discriminant.
    - ``seed`` -- optional: a nonzero integer seed for the random choices made over finite fields. Any seed gives the same genus, but the representatives and their numbering may change.
    - ``R`` -- the integer type used for primes, conductors and the discriminant (default ZZ)
    - ``check`` -- boolean (default False); if True then we verify the isometries computed along the way
    - ``verbose`` -- boolean (default False); if True then we add commentary throughout the computation

    EXAMPLES::

        sage: from ternarygenus import *
        sage: g = Genus([1, 1, 3, 1, 0, 0], seed = 1)
        sage: len(g)
        2
        sage: g.dimension_map()[1]
        2
        sage: g.hecke_matrix(2).trace()
        1

        sage: from ternarygenus import *
        sage: g = Genus(CartanMatrix(['A', 3]), seed = 1)
        sage: g.hecke_matrix_dense(3)
        {1: [4], 2: []}
    """

    def __init__(self, q, symbols = None, seed = None, R = ZZ, check = False, verbose = False):
        if not isinstance(q, TernaryForm):
            q = TernaryForm(q)
        if symbols is None:
            symbols = default_symbols(q)
        if len(symbols) > 63:
            raise ValueError('Must have 63 or fewer prime divisors.')
        if not seed:
            seed = randrange(1, 2 ** 63)
        self.__R = R
        self.__disc = R(q.discriminant())
        self.__seed = seed
        self.__check = check
        self.__prime_divisors = [R(symb.p) for symb in symbols]
        self.__spinor = Spinor(self.__prime_divisors)
        self.__conductors = self._compute_conductors(self.__prime_divisors, R)
        self.__mass_x24 = mass_x24(q, symbols)
        self.__hash = ClassStore(hash_function = _rep_hash, equivalence = _rep_equivalence)
        self.__hash.add(GenusRep(q))
        self.__spinor_primes = set()
        self._enumerate(verbose = verbose)
        self._finalize_isometries()
        self._compute_subspaces()

    def __repr__(self):
        return 'Genus of discriminant %s with %d classes, represented by\n%s'%(self.__disc, len(self.__hash), str(self.__hash[0].form.gram_matrix()))

    def __len__(self):
        return len(self.__hash)

    ## Construction

    @staticmethod
    def _compute_conductors(primes, R = ZZ):
        r"""
        List the products of subsets of ``primes``, indexed by bitmasks.
        """
        conductors = [R(1)]
        bits = 0
        mask = 1
        for n in range(1, 1 << len(primes)):
            if n == 2 * mask:
                bits += 1
                mask = 1 << bits
            conductors.append(primes[bits] * conductors[n ^ mask])
        return conductors

    def _enumerate(self, verbose = False):
        r"""
        Find representatives of all classes in the genus with p-neighbors.

        The mass 48 / |Aut(L)| of every new class L is added up until the total reaches mass_x24.
        """
        reps = self.__hash
        mass = self.__mass_x24
        mother = reps[0].form
        sum_mass_x24 = Integer(48) // mother.number_of_automorphisms()
        done = sum_mass_x24 == mass
        p = Integer(1)
        while not done:
            p = next_prime(p)
            while self.__disc % p == 0:
                p = next_prime(p)
            GF = prime_field(p, self.__seed)
            if verbose:
                print('I am computing %s-neighbors.'%p)
            current = 0
            while not done and current < len(reps):
                q = reps[current].form
                manager = NeighborManager(q, GF)
                for t in range(p + 1):
                    foo, s = manager.get_neighbor(t)
                    if self.__check:
                        if foo.discriminant() != q.discriminant():
                            raise RuntimeError('The %s-neighbor %s of\n%s\nhas the wrong discriminant.'%(p, t, str(q.gram_matrix())))
                        if not s.is_isometry(q, foo, p * p):
                            raise RuntimeError('Invalid %s-neighbor isometry.'%p)
                    foo, s = TernaryForm.reduce(foo, s)
                    if reps.add(GenusRep(foo, to_mother = s, parent = current, prime = self.__R(p))):
                        sum_mass_x24 += Integer(48) // foo.number_of_automorphisms()
                        self.__spinor_primes.add(self.__R(p))
                        if verbose:
                            print('I found class number %d as a %s-neighbor of class number %d.'%(len(reps), p, current + 1))
                        if sum_mass_x24 > mass:
                            raise RuntimeError('The classes found have total mass %s/48, which exceeds the mass %s/48 of the genus.'%(sum_mass_x24, mass))
                        done = sum_mass_x24 == mass
                        if done:
                            break
                current += 1
        if verbose:
            print('I found all %d classes.'%len(reps))

    def _finalize_isometries(self):
        r"""
        Replace the isometries from the parents by isometries from the mother form.

        Parents are always found before their children, so one pass in order of discovery suffices.
        """
        reps = self.__hash
        mother = reps[0].form
        for n in range(1, len(reps)):
            rep = reps[n]
            parent = reps[rep.parent]
            edge = rep.to_mother
            rep.from_mother = edge.inverse(rep.prime) * parent.from_mother
            rep.to_mother = parent.to_mother * edge
            rep.exponents = parent.exponents.incremented(rep.prime)
            if self.__check:
                scalar = rep.exponents.power() ** 2
                if not rep.to_mother.is_isometry(mother, rep.form, scalar):
                    raise RuntimeError('Invalid isometry to class number %d.'%(n + 1))
                if not rep.from_mother.is_isometry(rep.form, mother, scalar):
                    raise RuntimeError('Invalid isometry from class number %d.'%(n + 1))

    def _compute_subspaces(self):
        r"""
        Decide which classes contribute to which spinor character subspaces.

        A class is ignored for the conductor k if it has a proper automorphism whose spinor character has odd parity on k.
        """
        num_conductors = len(self.__conductors)
        reps = self.__hash
        dims = [0] * num_conductors
        lut_positions = [[None] * len(reps) for _ in range(num_conductors)]
        for n, rep in enumerate(reps):
            ignore = [False] * num_conductors
            for s in rep.form.proper_automorphisms():
                vals = self.__spinor.norm(rep.form, s, 1)
                for k in range(num_conductors):
                    if not ignore[k] and _char_val(vals & k) == -1:
                        ignore[k] = True
            for k in range(num_conductors):
                if not ignore[k]:
                    lut_positions[k][n] = dims[k]
                    dims[k] += 1
        self.__dims = dims
        self.__lut_positions = lut_positions

    def change_ring(self, R):
        r"""
        Return a copy of self whose primes, conductors and discriminant are of the integer type R.

        Nothing is recomputed except for the spinor character evaluator.

        EXAMPLES::

            sage: from ternarygenus import *
            sage: g = Genus([1, 1, 3, 1, 0, 0], seed = 1)
            sage: h = g.change_ring(int)
            sage: type(h.discriminant())
            <class 'int'>
            sage: h.change_ring(ZZ).dimension_map() == g.dimension_map()
            True
        """
        genus = Genus.__new__(Genus)
        genus.__R = R
        genus.__disc = R(self.__disc)
        genus.__prime_divisors = [R(p) for p in self.__prime_divisors]
        genus.__conductors = [R(d) for d in self.__conductors]
        genus.__dims = list(self.__dims)
        genus.__lut_positions = [list(x) for x in self.__lut_positions]
        genus.__mass_x24 = self.__mass_x24
        genus.__spinor_primes = set(R(p) for p in self.__spinor_primes)
        genus.__hash = ClassStore(hash_function = _rep_hash, equivalence = _rep_equivalence)
        for rep in self.__hash:
            genus.__hash.add(rep.change_ring(R))
        genus.__spinor = Spinor([R(p) for p in self.__spinor.primes()])
        genus.__seed = self.__seed
        genus.__check = self.__check
        return genus

    ## Attributes

    def conductors(self):
        return self.__conductors

    def dimension_map(self):
        r"""
        Return a dictionary mapping each conductor to the dimension of its subspace.
        """
        return {d: self.__dims[k] for k, d in enumerate(self.__conductors)}

    def discriminant(self):
        return self.__disc

    def lookup_table(self, conductor):
        r"""
        Return the list whose n-th entry is the position of the n-th class in the basis of the subspace attached to ``conductor``, or None if the class does not contribute.
        """
        try:
            k = self.__conductors.index(conductor)
        except ValueError:
            raise ValueError('%s is not a conductor of this genus.'%conductor) from None
        return self.__lut_positions[k]

    def mass(self):
        r"""
        Compute the mass of self, i.e. the sum of 1 / |Aut(L)| over all classes L.
        """
        return QQ(self.__mass_x24) / 48

    def mass_x24(self):
        return self.__mass_x24

    def prime_divisors(self):
        return self.__prime_divisors

    def representative(self, i):
        return self.__hash[i]

    def representatives(self):
        return list(self.__hash)

    def ring(self):
        return self.__R

    def seed(self):
        return self.__seed

    def size(self):
        return len(self.__hash)

    def spinor_primes(self):
        r"""
        Return the primes whose neighbors were needed to find all classes.
        """
        return sorted(self.__spinor_primes)

    ## Hecke operators

    def _check_prime(self, p):
        p = Integer(p)
        if not is_prime(p):
            raise ValueError('%s is not prime.'%p)
        if self.__disc % p == 0:
            raise ValueError('Prime must not divide the discriminant.')
        return p

    def _conductor_indices(self, conductors):
        r"""
        Return the bitmasks of the given conductors (all conductors if None).
        """
        if conductors is None:
            return list(range(len(self.__conductors)))
        ks = []
        for d in conductors:
            try:
                ks.append(self.__conductors.index(d))
            except ValueError:
                raise ValueError('%s is not a conductor of this genus.'%d) from None
        return ks

    def _neighbor_transitions(self, p, rows = None):
        r"""
        Iterate through the p-neighbors of all classes (or only the classes whose indices are in ``rows``).

        For the n-th class this yields the pair (n, X), where X contains for every p-neighbor the integer (r << num_primes) | vals; here r is the index of the class of the neighbor, and vals is the spinor character of the isometry from the n-th class to the neighbor (transported to the mother form).
        """
        reps = self.__hash
        num_primes = len(self.__prime_divisors)
        mother = reps[0]
        spinor = self.__spinor
        check = self.__check
        GF = prime_field(p, self.__seed)
        for n, cur in enumerate(reps):
            if rows is not None and n not in rows:
                continue
            manager = NeighborManager(cur.form, GF)
            all_spin_vals = []
            for t in range(p + 1):
                foo = manager.get_reduced_neighbor_rep(t)
                try:
                    r, s = reps.find(foo)
                except KeyError:
                    raise RuntimeError('The %s-neighbor %s of class number %d does not belong to any known class.'%(p, t, n + 1)) from None
                rep = reps[r]
                s = foo.to_mother * s
                if check and not s.is_isometry(cur.form, rep.form, p * p):
                    raise RuntimeError('Invalid %s-neighbor isometry.'%p)
                if r == n:
                    spin_vals = spinor.norm(rep.form, s, p)
                else:
                    s = cur.to_mother * s * rep.from_mother
                    scalar = p * cur.exponents.power() * rep.exponents.power()
                    if check and not s.is_isometry(mother.form, mother.form, scalar * scalar):
                        raise RuntimeError('Invalid isometry between class numbers %d and %d.'%(n + 1, r + 1))
                    spin_vals = spinor.norm(mother.form, s, scalar)
                all_spin_vals.append((r << num_primes) | spin_vals)
            yield n, all_spin_vals

    def hecke_matrix_dense(self, p, conductors = None, verbose = False):
        r"""
        Compute the Hecke operator T_p on spinor character subspaces.

        INPUT:
        - ``p`` -- a prime not dividing the discriminant
        - ``conductors`` -- optional: a list of conductors of self. If not given then all conductors are used. Neighbors are only computed for classes that contribute to one of these subspaces.

        OUTPUT: a dictionary that maps each conductor to its Hecke matrix, as a flat list in row-major order (the dimension is given by .dimension_map())
        """
        p = self._check_prime(p)
        ks = self._conductor_indices(conductors)
        luts = self.__lut_positions
        rows = set(n for k in ks for n, x in enumerate(luts[k]) if x is not None)
        num_primes = len(self.__prime_divisors)
        dims = self.__dims
        hecke_matrices = {k: [0] * (dims[k] * dims[k]) for k in ks}
        for n, all_spin_vals in self._neighbor_transitions(p, rows = rows):
            if verbose:
                print('I am computing row %d of the Hecke matrices.'%(n + 1))
            for k in ks:
                lut = luts[k]
                npos = lut[n]
                if npos is None:
                    continue
                row = hecke_matrices[k]
                offset = npos * dims[k]
                for x in all_spin_vals:
                    rpos = lut[x >> num_primes]
                    if rpos is None:
                        continue
                    row[offset + rpos] += _char_val(x & k)
        return {self.__conductors[k]: hecke_matrices[k] for k in ks}

    def hecke_matrix_sparse(self, p, conductors = None, verbose = False):
        r"""
        Compute the Hecke operator T_p on spinor character subspaces as sparse matrices.

        INPUT:
        - ``p`` -- a prime not dividing the discriminant
        - ``conductors`` -- optional: a list of conductors of self (default: all of them)

        OUTPUT: a dictionary that maps each conductor to the compressed sparse row representation (data, indices, indptr) of its Hecke matrix
        """
        p = self._check_prime(p)
        ks = self._conductor_indices(conductors)
        luts = self.__lut_positions
        rows = set(n for k in ks for n, x in enumerate(luts[k]) if x is not None)
        num_primes = len(self.__prime_divisors)
        dims = self.__dims
        data = {k: [] for k in ks}
        indices = {k: [] for k in ks}
        indptr = {k: [0] * (dims[k] + 1) for k in ks}
        rowdata = {k: [0] * dims[k] for k in ks}
        for n, all_spin_vals in self._neighbor_transitions(p, rows = rows):
            if verbose:
                print('I am computing row %d of the Hecke matrices.'%(n + 1))
            for k in ks:
                lut = luts[k]
                npos = lut[n]
                if npos is None:
                    continue
                row = rowdata[k]
                for x in all_spin_vals:
                    rpos = lut[x >> num_primes]
                    if rpos is None:
                        continue
                    row[rpos] += _char_val(x & k)
                nnz = 0
                for pos, x in enumerate(row):
                    if x:
                        data[k].append(x)
                        indices[k].append(pos)
                        row[pos] = 0
                        nnz += 1
                indptr[k][npos + 1] = indptr[k][npos] + nnz
        return {self.__conductors[k]: (data[k], indices[k], indptr[k]) for k in ks}

    def hecke_matrix(self, p, conductor = 1, sparse = False):
        r"""
        Compute the Hecke operator T_p on the subspace attached to ``conductor`` as a matrix.

        Only the neighbors of the classes that contribute to this subspace are computed.

        INPUT:
        - ``p`` -- a prime not dividing the discriminant
        - ``conductor`` -- a conductor of self (default 1)
        - ``sparse`` -- boolean (default False); if True then the matrix is assembled from the sparse representation

        OUTPUT: a matrix over ZZ

        EXAMPLES::

            sage: from ternarygenus import *
            sage: g = Genus([1, 1, 10, 1, 0, 0], seed = 1)
            sage: g.hecke_matrix(5, conductor = 39)
            [2]
        """
        k, = self._conductor_indices([conductor])
        dim = self.__dims[k]
        if sparse:
            data, indices, indptr = self.hecke_matrix_sparse(p, conductors = [conductor])[conductor]
            entries = {(i, indices[j]): data[j] for i in range(dim) for j in range(indptr[i], indptr[i + 1])}
            return matrix(ZZ, dim, dim, entries, sparse = True)
        return matrix(ZZ, dim, dim, self.hecke_matrix_dense(p, conductors = [conductor])[conductor])
