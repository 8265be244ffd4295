r"""

Genus representatives and their paths through the neighbor graph

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

from sage.misc.misc_c import prod
from sage.rings.integer import Integer

from .isometry import Isometry


class PathExponents(object):
    r"""
    The multiplicities of the primes along a path in the neighbor graph.

    This maps each prime p to the number of p-neighbor steps taken. The only thing we ever need from it is its power(), the product of p^e over all entries, which is the scale of the isometry along the path.

    EXAMPLES::

        sage: from ternarygenus import *
        sage: e = PathExponents().incremented(2).incremented(3).incremented(2)
        sage: e.power()
        12
    """

    def __init__(self, exponents = None):
        self.__exponents = dict(exponents or {})

    def __repr__(self):
        return 'Path exponents %s'%str(dict(sorted(self.__exponents.items())))

    def __getitem__(self, p):
        return self.__exponents.get(p, 0)

    def __len__(self):
        return len(self.__exponents)

    def __eq__(self, other):
        if not isinstance(other, PathExponents):
            return False
        return self.__exponents == other._PathExponents__exponents

    def items(self):
        return sorted(self.__exponents.items())

    def incremented(self, p):
        r"""
        Return a copy of self in which the multiplicity of p is increased by one.
        """
        e = dict(self.__exponents)
        e[p] = e.get(p, 0) + 1
        return PathExponents(e)

    def power(self):
        return prod(p ** e for p, e in self.__exponents.items()) if self.__exponents else Integer(1)

    def change_ring(self, R):
        return PathExponents({R(p): e for p, e in self.__exponents.items()})


class GenusRep(object):
    r"""
    A representative of an equivalence class in a genus.

    Attributes:
    - ``form`` -- the (reduced) TernaryForm
    - ``to_mother``, ``from_mother`` -- isometries from the mother form to ``form`` and back. Before the genus is finalized, ``to_mother`` is the isometry from the parent instead.
    - ``parent`` -- index of the representative of which ``form`` was found as a neighbor (None for the mother form)
    - ``prime`` -- the prime p such that ``form`` was found as a p-neighbor (1 for the mother form)
    - ``exponents`` -- PathExponents of the path from the mother form

    GenusRep's compare equal if their forms are equivalent.
    """

    def __init__(self, form, to_mother = None, from_mother = None, parent = None, prime = 1, exponents = None):
        self.form = form
        self.to_mother = to_mother if to_mother is not None else Isometry()
        self.from_mother = from_mother if from_mother is not None else Isometry()
        self.parent = parent
        self.prime = prime
        self.exponents = exponents if exponents is not None else PathExponents()

    def __repr__(self):
        return 'Genus representative\n%s'%str(self.form.gram_matrix())

    def __eq__(self, other):
        if not isinstance(other, GenusRep):
            return False
        return self.form == other.form

    def __hash__(self):
        return hash(self.form)

    def change_ring(self, R):
        return GenusRep(self.form, to_mother = self.to_mother, from_mother = self.from_mother, parent = self.parent, prime = R(self.prime), exponents = self.exponents.change_ring(R))
