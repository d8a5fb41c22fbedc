from gaussfit.models.base import MODELS, ModelFunction, get_model
from gaussfit.models.constants import ModelID
from gaussfit.models.grid import GridShape
from gaussfit.models.jacobian import JacobianView
from gaussfit.models.mainfunctions import CPU_calculate_models, init_numba_CPU
