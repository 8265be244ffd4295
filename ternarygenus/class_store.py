r"""

Ordered storage of equivalence classes

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


class ClassStore(object):
    r"""
    An insertion-ordered set of objects up to an equivalence relation.

    Objects are placed into buckets according to ``hash_function`` and compared within a bucket using ``equivalence``. The hash function must be constant on equivalence classes.

    INPUT:
    - ``hash_function`` -- a function of one object (default: hash)
    - ``equivalence`` -- a function of two objects x, y that returns a true value (a witness, for example an isometry from x to y) if x and y are equivalent, and None or False otherwise. Default: ==

    EXAMPLES::

        sage: from ternarygenus import *
        sage: X = ClassStore(hash_function = lambda x: x % 5, equivalence = lambda x, y: (x - y) % 5 == 0)
        sage: X.add(3), X.add(8), X.add(4)
        (True, False, True)
        sage: X.keys()
        [3, 4]
        sage: X.index(13)
        0
    """

    def __init__(self, hash_function = None, equivalence = None):
        self.__hash = hash_function or hash
        self.__equivalence = equivalence or (lambda x, y: x == y)
        self.__keys = []
        self.__buckets = {}

    def __repr__(self):
        return 'Class store of size %d'%len(self.__keys)

    def __len__(self):
        return len(self.__keys)

    def __getitem__(self, i):
        return self.__keys[i]

    def __iter__(self):
        return iter(self.__keys)

    def __contains__(self, x):
        try:
            _ = self.find(x)
            return True
        except KeyError:
            return False

    def size(self):
        return len(self.__keys)

    def keys(self):
        return self.__keys

    def last(self):
        return self.__keys[-1]

    def find(self, x):
        r"""
        Find the class of x.

        OUTPUT: a tuple (i, w) where i is the index of the stored object equivalent to x and w is the witness returned by the equivalence test (x, self[i]).

        Raises a KeyError if x is not equivalent to any stored object.
        """
        for i in self.__buckets.get(self.__hash(x), []):
            w = self.__equivalence(x, self.__keys[i])
            if w:
                return i, w
        raise KeyError(x)

    def index(self, x):
        return self.find(x)[0]

    def add(self, x):
        r"""
        Insert x unless an equivalent object is already stored.

        OUTPUT: True if x was inserted, False otherwise
        """
        h = self.__hash(x)
        bucket = self.__buckets.setdefault(h, [])
        keys = self.__keys
        if any(self.__equivalence(x, keys[i]) for i in bucket):
            return False
        bucket.append(len(keys))
        keys.append(x)
        return True
