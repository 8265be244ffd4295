r"""

Mass formula for genera of ternary forms

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

from sage.arith.misc import hilbert_symbol, is_prime, prime_divisors
from sage.rings.integer import Integer
from sage.rings.integer_ring import ZZ
from sage.rings.rational_field import QQ


class PrimeSymbol(object):
    r"""
    Local data at a prime dividing the discriminant.

    INPUT:
    - ``p`` -- a prime
    - ``power`` -- the exponent of p in the discriminant (default 1)
    - ``ramified`` -- whether the associated quaternion algebra is ramified at p (default True)
    """

    def __init__(self, p, power = 1, ramified = True):
        p = Integer(p)
        if not is_prime(p):
            raise ValueError('%s is not prime.'%p)
        self.p = p
        self.power = power
        self.ramified = ramified

    def __repr__(self):
        return 'Prime symbol at %s'%self.p

    def __eq__(self, other):
        if not isinstance(other, PrimeSymbol):
            return False
        return (self.p, self.power, self.ramified) == (other.p, other.power, other.ramified)

    def __hash__(self):
        return hash((self.p, self.power, self.ramified))


def default_symbols(q):
    r"""
    Return one PrimeSymbol for each prime dividing the discriminant of q.

    The mass formula is only implemented for squarefree discriminants, so we raise a ValueError otherwise.
    """
    d = q.discriminant()
    symbols = [PrimeSymbol(p, power = d.valuation(p)) for p in prime_divisors(d)]
    if any(symb.power > 1 for symb in symbols):
        raise ValueError('The discriminant %s is not squarefree.'%d)
    return symbols

def mass_x24(q, symbols):
    r"""
    Compute the mass of the genus of q, scaled so that it is an integer.

    The result is 2 * disc * prod_p (p + (a', b')_p) / (2p), the product running over the primes of ``symbols``, where a' = h^2 - 4ab, b' = -a * disc and (,)_p is the Hilbert symbol.
    It equals the sum of 48 / |Aut(L)| over the classes L in the genus, i.e. 48 times the mass.

    INPUT:
    - ``q`` -- a TernaryForm
    - ``symbols`` -- a list of PrimeSymbol's

    EXAMPLES::

        sage: from ternarygenus import *
        sage: q = TernaryForm([1, 1, 3, 1, 0, 0])
        sage: mass_x24(q, [PrimeSymbol(11)])
        10
    """
    d = q.discriminant()
    a = q.h() * q.h() - 4 * q.a() * q.b()
    b = -q.a() * d
    mass = QQ(2 * d)
    for symb in symbols:
        p = symb.p
        if d % p:
            raise ValueError('The prime %s does not divide the discriminant %s.'%(p, d))
        if symb.power != 1 or d.valuation(p) != 1:
            raise ValueError('The mass formula requires %s to divide the discriminant %s exactly once.'%(p, d))
        mass *= (p + hilbert_symbol(a, b, p))
        mass /= 2 * p
    if mass not in ZZ:
        raise ValueError('The symbols %s do not describe the genus of\n%s'%(str(symbols), str(q.gram_matrix())))
    return ZZ(mass)
