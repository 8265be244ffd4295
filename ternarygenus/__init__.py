from .class_store import ClassStore
from .finite_field import BinaryField, prime_field, PrimeField
from .genus import Genus
from .isometry import Isometry
from .mass import default_symbols, mass_x24, PrimeSymbol
from .neighbors import isotropic_vector_mod_p, NeighborManager
from .quadratic_form import TernaryForm
from .representative import GenusRep, PathExponents
from .spinor import Spinor, spinor_norm
