from .ternarygenus.genus import Genus
from .ternarygenus.isometry import Isometry
from .ternarygenus.mass import mass_x24, PrimeSymbol
from .ternarygenus.neighbors import NeighborManager
from .ternarygenus.quadratic_form import TernaryForm
from .ternarygenus.spinor import Spinor
