from typing import Callable, Optional, Union

import numpy as np

from . import CPU
from .constants import *


def as_user_info(user_info: Optional[np.ndarray]) -> tuple[np.ndarray, int]:
    '''
    Normalize the user info blob handed to the point evaluators.

    Parameters
    ----------
    user_info : np.ndarray | None
        auxiliary per-fit constants, interpreted as float32 values

    Returns
    -------
    tuple[np.ndarray, int]
        (float32 array, size in bytes), an empty array and 0 if None.
    '''
    if user_info is None:
        return np.zeros(0, np.float32), 0

    user_info = np.ascontiguousarray(user_info, dtype=np.float32).ravel()
    return user_info, user_info.nbytes


class ModelFunction:
    '''
    A model shape that can be evaluated point by point.

    Every model function wraps a compiled point evaluator sharing the
    signature of :mod:`gaussfit.models.CPU.CPUfunctions`, so any of them
    can be selected through :data:`MODELS` by its :class:`ModelID`.

    Parameters
    ----------
    model_id : ModelID
        model-kind tag
    parameter_names : tuple[str, ...]
        parameter names in the order of the parameter vector
    kernel : Callable
        compiled point evaluator
    grid_2d : bool
        True if the points are decoded on a square 2D grid
    '''

    def __init__(
            self, model_id: ModelID, parameter_names: tuple,
            kernel: Callable, grid_2d: bool = True):
        self.model_id = ModelID(model_id)
        self.parameter_names = tuple(parameter_names)
        self.kernel = kernel
        self.grid_2d = grid_2d

    @property
    def name(self) -> str:
        return self.model_id.name

    @property
    def n_parameters(self) -> int:
        return len(self.parameter_names)

    def evaluate_point(
            self, parameters: np.ndarray, n_points: int, point_index: int,
            value: np.ndarray, derivative: np.ndarray,
            fit_index: int = 0, chunk_index: int = 0, n_fits: int = 1,
            user_info: Optional[np.ndarray] = None):
        '''
        Evaluate the model and its derivatives at a single point.

        Writes ``value[point_index]`` and the ``n_parameters`` slots
        ``derivative[k * n_points + point_index]``, nothing else.
        No validation is performed, degenerate parameters propagate as
        non-finite values.

        Parameters
        ----------
        parameters : np.ndarray
            parameter vector of the fit
        n_points : int
            number of points of the fit
        point_index : int
            linear index of the point
        value : np.ndarray
            value region of the fit, length n_points, float32 or float64,
            parameters are cast to its dtype
        derivative : np.ndarray
            flat derivative region of the fit,
            length n_parameters * n_points, same dtype as value
        fit_index : int, optional
            index of the fit in its chunk, by default 0
        chunk_index : int, optional
            index of the chunk, by default 0
        n_fits : int, optional
            number of fits per chunk, by default 1
        user_info : np.ndarray, optional
            auxiliary float32 constants, by default None
        '''
        user_info, user_info_size = as_user_info(user_info)
        self.kernel(
            np.asarray(parameters, dtype=value.dtype), n_fits, n_points,
            value, derivative, point_index, fit_index, chunk_index,
            user_info, user_info_size)

    def __repr__(self):
        return f'ModelFunction({self.name}, {self.parameter_names})'


MODELS = {
    ModelID.GAUSS_1D: ModelFunction(
        ModelID.GAUSS_1D,
        ('amplitude', 'x0', 'sigma', 'offset'),
        CPU.kernel_gauss_1d, grid_2d=False),
    ModelID.GAUSS_2D: ModelFunction(
        ModelID.GAUSS_2D,
        ('amplitude', 'x0', 'y0', 'sigma', 'offset'),
        CPU.kernel_gauss_2d),
    ModelID.GAUSS_2D_ELLIPTIC: ModelFunction(
        ModelID.GAUSS_2D_ELLIPTIC,
        ('amplitude', 'x0', 'y0', 'sigma_x', 'sigma_y', 'offset'),
        CPU.kernel_gauss_2d_elliptic),
    ModelID.GAUSS_2D_ROTATED: ModelFunction(
        ModelID.GAUSS_2D_ROTATED,
        ('amplitude', 'x0', 'y0', 'sigma_x', 'sigma_y', 'offset', 'theta'),
        CPU.kernel_gauss_2d_rotated),
}


def get_model(model_id: Union[ModelID, int, str]) -> ModelFunction:
    '''
    Look up a model function by its tag.

    Parameters
    ----------
    model_id : ModelID | int | str
        the tag, its integer value or its name (case insensitive)

    Returns
    -------
    ModelFunction
        the registered model function

    Raises
    ------
    KeyError
        if no model is registered under the tag.
    '''
    try:
        if isinstance(model_id, str):
            model_id = ModelID[model_id.upper()]
        else:
            model_id = ModelID(model_id)
    except (KeyError, ValueError):
        raise KeyError(f'Unknown model {model_id!r}.') from None

    return MODELS[model_id]
