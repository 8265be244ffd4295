r"""

Scaled isometries between ternary quadratic forms

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
from sage.rings.integer_ring import ZZ


class Isometry(object):
    r"""
    This class represents (scaled) isometries between ternary quadratic forms.

    An Isometry is an integral 3x3 matrix M. We say that M is an isometry from the form with Gram matrix S_1 to the form with Gram matrix S_2 with scale c if
    M.transpose() * S_1 * M = c^2 * S_2,
    i.e. the columns of M are a basis of c times the second lattice written in coordinates of the first.

    Composition is matrix multiplication: if M_1 is an isometry from A to B with scale c_1 and M_2 from B to C with scale c_2, then M_1 * M_2 is an isometry from A to C with scale c_1 * c_2.

    INPUT:
    - ``M`` -- an integral 3x3 matrix (default: the identity)
    """

    def __init__(self, M = None):
        if M is None:
            M = identity_matrix(ZZ, 3)
        else:
            M = matrix(ZZ, M)
        M.set_immutable()
        self.__matrix = M

    def __repr__(self):
        return 'Isometry given by the matrix\n%s'%str(self.__matrix)

    @classmethod
    def identity(cls):
        return cls()

    def matrix(self):
        return self.__matrix

    def determinant(self):
        return self.__matrix.determinant()

    def is_proper(self):
        return self.determinant() > 0

    def proper(self):
        r"""
        Return self or -self, whichever has positive determinant.

        -I is an automorphism of every ternary form, so -self is an isometry between the same forms as self with the same scale.
        """
        if self.is_proper():
            return self
        return Isometry(-self.__matrix)

    def inverse(self, scale):
        r"""
        Compute the inverse isometry.

        If self is an isometry from A to B with scale c = ``scale`` then this returns the isometry c^2 * self^(-1) from B to A, also with scale c.

        EXAMPLES::

            sage: from ternarygenus import *
            sage: s = Isometry(matrix([[3, 0, 0], [0, 3, 0], [0, 0, 3]]))
            sage: s.inverse(3).matrix()
            [3 0 0]
            [0 3 0]
            [0 0 3]
        """
        c = scale * scale
        try:
            return Isometry((c * self.__matrix.inverse()).change_ring(ZZ))
        except TypeError:
            raise ValueError('The matrix\n%s\nis not an isometry with scale %s.'%(str(self.__matrix), scale)) from None

    def is_isometry(self, a, b, scalar):
        r"""
        Determine whether self is an isometry from ``a`` to ``b`` with squared scale ``scalar``.

        INPUT:
        - ``a``, ``b`` -- TernaryForm's
        - ``scalar`` -- the square of the scale

        OUTPUT: True or False
        """
        M = self.__matrix
        return M.transpose() * a.gram_matrix() * M == scalar * b.gram_matrix()

    def __mul__(self, other):
        if not isinstance(other, Isometry):
            return NotImplemented
        return Isometry(self.__matrix * other.matrix())

    def __eq__(self, other):
        if not isinstance(other, Isometry):
            return False
        return self.__matrix == other.matrix()

    def __hash__(self):
        return hash(self.__matrix)
