r"""

Positive-definite ternary quadratic forms

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

import cypari2
pari = cypari2.Pari()

from sage.matrix.constructor import matrix
from sage.matrix.special import identity_matrix
from sage.rings.integer import Integer
from sage.rings.integer_ring import ZZ

from .isometry import Isometry

#number of theta series coefficients used to hash equivalence classes
THETA_BOUND = 6


class TernaryForm(object):
    r"""
    This class represents a positive-definite integral ternary quadratic form

    Q(x, y, z) = a*x^2 + b*y^2 + c*z^2 + f*y*z + g*x*z + h*x*y.

    Two TernaryForm's compare equal if and only if they are equivalent (over ZZ). The hash is an invariant of the equivalence class.

    INPUT: a TernaryForm is constructed by calling ``TernaryForm(S)``, where:
    - ``S`` -- a symmetric 3x3 Gram matrix with even diagonal, i.e. Q(x) = x * S * x / 2; or
    - ``S`` -- a Sage QuadraticForm in three variables; or
    - ``S`` -- a list of the six coefficients [a, b, c, f, g, h]

    EXAMPLES::

        sage: from ternarygenus import *
        sage: q = TernaryForm([1, 1, 3, 1, 0, 0])
        sage: q.gram_matrix()
        [2 0 0]
        [0 2 1]
        [0 1 6]
        sage: q.discriminant()
        11
    """

    def __init__(self, S):
        try:
            S = S.Hessian_matrix()
        except AttributeError:
            pass
        try:
            if len(S) == 6 and all(x in ZZ for x in S):
                a, b, c, f, g, h = S
                S = [[2 * a, h, g], [h, 2 * b, f], [g, f, 2 * c]]
        except TypeError:
            pass
        S = matrix(ZZ, S)
        if S.nrows() != 3 or S.ncols() != 3:
            raise ValueError('Ternary forms need a 3x3 Gram matrix.')
        if not S.is_symmetric():
            raise ValueError('The Gram matrix is not symmetric.')
        if any(S[i, i] % 2 for i in range(3)):
            raise ValueError('The Gram matrix must have even diagonal.')
        if not S.is_positive_definite():
            raise ValueError('This lattice is not positive-definite.')
        S.set_immutable()
        self.__gram_matrix = S

    def __repr__(self):
        return 'Ternary quadratic form with Gram matrix\n%s'%str(self.__gram_matrix)

    ## Attributes

    def gram_matrix(self):
        return self.__gram_matrix

    def coefficients(self):
        r"""
        Return the coefficients [a, b, c, f, g, h] of self.
        """
        S = self.__gram_matrix
        return [S[0, 0] // 2, S[1, 1] // 2, S[2, 2] // 2, S[1, 2], S[0, 2], S[0, 1]]

    def a(self):
        return self.__gram_matrix[0, 0] // 2

    def b(self):
        return self.__gram_matrix[1, 1] // 2

    def c(self):
        return self.__gram_matrix[2, 2] // 2

    def f(self):
        return self.__gram_matrix[1, 2]

    def g(self):
        return self.__gram_matrix[0, 2]

    def h(self):
        return self.__gram_matrix[0, 1]

    def discriminant(self):
        r"""
        Compute the discriminant 4abc + fgh - af^2 - bg^2 - ch^2.

        This is half of the determinant of the Gram matrix.
        """
        try:
            return self.__disc
        except AttributeError:
            d = self.__gram_matrix.determinant() // 2
            self.__disc = d
            return d

    def evaluate(self, v):
        r"""
        Evaluate self at the integral vector v.
        """
        S = self.__gram_matrix
        return (v * S * v) // 2

    def theta_invariant(self):
        r"""
        Compute the numbers of vectors v with Q(v) = 1, ..., THETA_BOUND (counted up to sign).

        This is an invariant of the equivalence class of self and we use it as a hash.
        """
        try:
            return self.__theta
        except AttributeError:
            x = tuple(int(n) for n in pari(self.__gram_matrix).qfrep(THETA_BOUND, 1))
            self.__theta = x
            return x

    ## Automorphisms

    def automorphisms(self):
        r"""
        Compute the automorphism group of self as a list of matrices A with A.transpose() * S * A = S.

        EXAMPLES::

            sage: from ternarygenus import *
            sage: q = TernaryForm(CartanMatrix(['A', 3]))
            sage: len(q.automorphisms())
            48
        """
        try:
            return self.__auts
        except AttributeError:
            pass
        S = self.__gram_matrix
        o, gens = pari(S).qfauto()
        gens = [matrix(ZZ, g.sage()) for g in gens]
        I = identity_matrix(ZZ, 3)
        I.set_immutable()
        auts = [I]
        seen = {I}
        i = 0
        while i < len(auts):
            x = auts[i]
            for g in gens:
                y = x * g
                y.set_immutable()
                if y not in seen:
                    seen.add(y)
                    auts.append(y)
            i += 1
        if len(auts) != Integer(o):
            raise RuntimeError('Failed to generate the automorphism group of\n%s'%str(S))
        self.__auts = auts
        return auts

    def number_of_automorphisms(self):
        try:
            return self.__num_auts
        except AttributeError:
            n = Integer(pari(self.__gram_matrix).qfauto()[0])
            self.__num_auts = n
            return n

    def proper_automorphisms(self):
        r"""
        Compute the automorphisms of self with determinant 1, as Isometry's.
        """
        try:
            return self.__proper_auts
        except AttributeError:
            x = [Isometry(a) for a in self.automorphisms() if a.determinant() == 1]
            self.__proper_auts = x
            return x

    ## Equivalence

    def isometry(self, other):
        r"""
        Find a proper isometry from self to ``other``.

        OUTPUT: an Isometry s with s.transpose() * S * s = S_other, or None if self and other are not equivalent

        EXAMPLES::

            sage: from ternarygenus import *
            sage: q1 = TernaryForm([1, 1, 3, 1, 0, 0])
            sage: q2 = TernaryForm([3, 1, 1, 0, 0, 1])
            sage: s = q1.isometry(q2)
            sage: s.is_isometry(q1, q2, 1)
            True
        """
        S1 = self.__gram_matrix
        S2 = other.gram_matrix()
        if S1 == S2:
            return Isometry()
        if self.discriminant() != other.discriminant() or self.theta_invariant() != other.theta_invariant():
            return None
        x = pari(S2).qfisom(pari(S1))
        if not x:
            return None
        return Isometry(x.sage()).proper()

    @staticmethod
    def reduce(q, s):
        r"""
        Reduce the form q.

        INPUT:
        - ``q`` -- a TernaryForm
        - ``s`` -- an Isometry into q

        OUTPUT: a pair (r, s * u), where r is an LLL-reduced form equivalent to q and u is a proper isometry from q to r
        """
        S = q.gram_matrix()
        u = Isometry(pari(S).qflllgram().sage()).proper()
        U = u.matrix()
        return TernaryForm(U.transpose() * S * U), s * u

    def __eq__(self, other):
        if not isinstance(other, TernaryForm):
            return False
        return self.isometry(other) is not None

    def __ne__(self, other):
        return not self.__eq__(other)

    def __hash__(self):
        return hash((self.discriminant(), self.theta_invariant()))
