r"""

Spinor norms and spinor characters

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
from sage.rings.integer import Integer
from sage.rings.rational_field import QQ


class Spinor(object):
    r"""
    Evaluate spinor characters.

    For a list of primes p_0, ..., p_{k-1}, the spinor character of an isometry is the bit vector whose i-th bit is the parity of the p_i-adic valuation of its spinor norm.

    INPUT:
    - ``primes`` -- a list of primes

    EXAMPLES::

        sage: from ternarygenus import *
        sage: q = TernaryForm(CartanMatrix(['A', 3]))
        sage: s = Spinor([2])
        sage: sorted(set(s.norm(q, x, 1) for x in q.proper_automorphisms()))
        [0, 1]
    """

    def __init__(self, primes):
        self.__primes = list(primes)

    def __repr__(self):
        return 'Spinor characters at the primes %s'%str(self.__primes)

    def primes(self):
        return self.__primes

    def norm(self, q, s, scale):
        r"""
        Compute the spinor character of s / scale.

        INPUT:
        - ``q`` -- a TernaryForm
        - ``s`` -- a proper Isometry from q to itself with scale ``scale``
        - ``scale`` -- the scale

        OUTPUT: an integer, whose i-th bit is set if the spinor norm of s / scale has odd valuation at the i-th prime
        """
        N = spinor_norm(q.gram_matrix(), s.matrix() / scale)
        vals = 0
        for i, p in enumerate(self.__primes):
            if N.valuation(p) % 2:
                vals |= 1 << i
        return vals


def spinor_norm(S, A):
    r"""
    Compute spinor norms.

    INPUT:
    -- "S" - a Gram matrix for the quadratic form
    -- "A" - an element of the orthogonal group O(S) over QQ

    OUTPUT: the spinor norm of A (an element of Q^x / (Q^x)^2), as a squarefree rational number

    We write A as a product of reflections: if v = A*e - e is nonzero for a basis vector e then the reflection along v maps A*e to e.
    """
    A = matrix(QQ, A)
    n = A.nrows()
    I = identity_matrix(QQ, n)
    s = Integer(1)
    i = 0
    bound = n + 2
    while 1:
        try:
            i += 1
            v = next(v for v in (A - I).columns() if v)
            N = v * S * v / 2
            v = matrix(v)
            s *= N
            R = I - v.transpose() * v * S / N
            A = R * A
            if i > bound:
                raise RuntimeError('Failed to decompose\n%s\ninto reflections.'%str(A))
        except StopIteration:
            return s.squarefree_part()
