r"""

p-neighbors of ternary quadratic forms

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

from sage.matrix.constructor import matrix
from sage.matrix.special import identity_matrix
from sage.modules.free_module_element import vector
from sage.rings.integer import Integer
from sage.rings.integer_ring import ZZ

from .isometry import Isometry
from .quadratic_form import TernaryForm
from .representative import GenusRep


class NeighborManager(object):
    r"""
    Construct the p-neighbors of a ternary form.

    If p does not divide the discriminant of Q, then the conic Q = 0 over GF(p) has exactly p+1 points. Each point (an isotropic line) determines a p-neighbor of Q. We label the points by t = 0, ..., p as follows: fix one isotropic vector v_0 (which is found at random), and a line W not containing it; then t runs through the points of W and the isotropic vector attached to t is the second intersection of the line through v_0 and W[t] with the conic.

    INPUT:
    - ``q`` -- a TernaryForm
    - ``GF`` -- a PrimeField, whose prime does not divide the discriminant of q

    EXAMPLES::

        sage: from ternarygenus import *
        sage: q = TernaryForm([1, 1, 3, 1, 0, 0])
        sage: m = NeighborManager(q, prime_field(3, 1))
        sage: all(q.evaluate(m.isotropic_vector(t)) % 3 == 0 for t in range(4))
        True
    """

    def __init__(self, q, GF):
        self.__q = q
        self.__GF = GF
        p = GF.prime()
        K = GF.field()
        self.__prime = p
        self.__gram_matrix_mod_p = matrix(K, q.gram_matrix())
        v = isotropic_vector_mod_p(q, GF, GF.randomizer())
        j = next(i for i, x in enumerate(v) if x)
        e = identity_matrix(K, 3).rows()
        self.__w = [e[i] for i in range(3) if i != j]
        self.__v = v

    def __repr__(self):
        return 'Neighbor manager for %s-neighbors of\n%s'%(self.__prime, str(self.__q.gram_matrix()))

    def form(self):
        return self.__q

    def prime(self):
        return self.__prime

    def isotropic_vector(self, t):
        r"""
        Compute the isotropic vector mod p labelled by t.

        INPUT:
        - ``t`` -- an integer 0 <= t <= p

        OUTPUT: an integral vector with entries in [0, p), isotropic mod p
        """
        p = self.__prime
        GF = self.__GF
        w0, w1 = self.__w
        v = self.__v
        if t < p:
            y = w0 + GF(t) * w1
        else:
            y = w1
        b = v * self.__gram_matrix_mod_p * y
        if b:
            y = y - (GF(self.__q.evaluate(_lift(y))) / b) * v
        else:
            y = v
        return _lift(y)

    def get_neighbor(self, t):
        r"""
        Compute the p-neighbor labelled by t.

        OUTPUT: a tuple (q', s), where q' is the TernaryForm of the neighbor lattice and s is a proper Isometry from self's form to q' with scale p
        """
        p = self.__prime
        q = self.__q
        S = q.gram_matrix()
        v = self.isotropic_vector(t)
        Sv = S * v
        j = next(i for i, x in enumerate(Sv) if x % p)
        c = (-(q.evaluate(v) // p) * Integer(Sv[j]).inverse_mod(p)) % p
        v = v + c * p * identity_matrix(ZZ, 3).rows()[j]
        U = matrix(self.__GF.field(), [Sv]).transpose().kernel().basis_matrix().lift()
        X = matrix(ZZ, [v]).stack(p * U).stack(p * p * identity_matrix(ZZ, 3))
        B = X.hermite_form()[:3, :]
        Bt = B.transpose()
        S1 = ((B * S * Bt) / (p * p)).change_ring(ZZ)
        return TernaryForm(S1), Isometry(Bt).proper()

    def get_reduced_neighbor_rep(self, t):
        r"""
        Compute the reduced p-neighbor labelled by t.

        OUTPUT: a GenusRep whose ``to_mother`` is an isometry from self's form to the reduced neighbor with scale p
        """
        q, s = self.get_neighbor(t)
        q, s = TernaryForm.reduce(q, s)
        return GenusRep(q, to_mother = s, prime = self.__prime)


def _lift(v):
    return vector(ZZ, [x.lift() for x in v])

def isotropic_vector_mod_p(q, GF, rng):
    r"""
    Find a nonzero vector v over GF(p) with Q(v) = 0.

    INPUT:
    - ``q`` -- a TernaryForm
    - ``GF`` -- a PrimeField
    - ``rng`` -- a random number generator

    We try vectors of the form x*e_0 + y with y random in span(e_1, e_2) and solve the quadratic equation for x. About half of the lines through e_0 meet the conic, so this does not take long.

    WARNING: if p divides the discriminant then the conic may be degenerate; we do not check this.
    """
    K = GF.field()
    S = q.gram_matrix()
    e = identity_matrix(K, 3).rows()
    for i, a in enumerate([q.a(), q.b(), q.c()]):
        if K(a) == 0:
            return e[i]
    a = q.a()
    while 1:
        y1 = GF.random_element(rng)
        y2 = GF.random_element(rng)
        if not (y1 or y2):
            continue
        y = vector(K, [0, y1, y2])
        b = K(S[0, 1]) * y1 + K(S[0, 2]) * y2
        x = GF.solve_quadratic(a, b, q.evaluate(_lift(y)))
        if x is not None:
            return vector(K, [x, y1, y2])
