r"""

Prime fields used to construct p-neighbors

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

import random

from sage.rings.finite_rings.finite_field_constructor import FiniteField as GF
from sage.rings.integer import Integer


class PrimeField(object):
    r"""
    This class represents the prime field Z/pZ together with a seed for the random elements drawn from it.

    Instances are never modified after construction, so one PrimeField can be shared among all neighbor computations at the prime p.

    INPUT:
    - ``p`` -- an odd prime
    - ``seed`` -- an integer
    """

    def __init__(self, p, seed):
        self.__prime = Integer(p)
        self.__seed = int(seed)
        self.__field = GF(p)

    def __repr__(self):
        return 'Prime field of characteristic %s with seed %s'%(self.__prime, self.__seed)

    def prime(self):
        return self.__prime

    def seed(self):
        return self.__seed

    def field(self):
        return self.__field

    def __call__(self, x):
        return self.__field(x)

    def randomizer(self):
        r"""
        Return a new random number generator initialized with self's seed.
        """
        return random.Random(self.__seed)

    def random_element(self, rng):
        return self.__field(rng.randrange(int(self.__prime)))

    def sqrt(self, x):
        r"""
        Compute a square root of x, or return None if x is not a square.
        """
        x = self.__field(x)
        if x.is_square():
            return x.sqrt()
        return None

    def solve_quadratic(self, a, b, c):
        r"""
        Find a root of a*x^2 + b*x + c, with a nonzero; or return None if there is none.
        """
        K = self.__field
        a, b, c = K(a), K(b), K(c)
        d = self.sqrt(b * b - 4 * a * c)
        if d is None:
            return None
        return (d - b) / (a + a)


class BinaryField(PrimeField):
    r"""
    This class represents the field with two elements.

    In characteristic two every element is a square and we cannot complete the square, so square roots and quadratic equations are handled separately.
    """

    def __init__(self, seed):
        super(BinaryField, self).__init__(2, seed)

    def sqrt(self, x):
        return self.field()(x)

    def solve_quadratic(self, a, b, c):
        K = self.field()
        a, b, c = K(a), K(b), K(c)
        return next((x for x in K if a * x * x + b * x + c == 0), None)


def prime_field(p, seed):
    r"""
    Construct the PrimeField of characteristic p.
    """
    if p == 2:
        return BinaryField(seed)
    return PrimeField(p, seed)
