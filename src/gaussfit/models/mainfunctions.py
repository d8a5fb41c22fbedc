import logging
import time
from typing import Optional, Union

import numba as nb
import numpy as np

from . import CPU
from .base import MODELS, as_user_info, get_model
from .constants import *
from .grid import GridShape


def CPU_calculate_models(
        model_id: Union[ModelID, int, str], parameters: np.ndarray,
        n_points: int, user_info: Optional[np.ndarray] = None,
        values: Optional[np.ndarray] = None,
        derivatives: Optional[np.ndarray] = None):
    '''
    CPU evaluation of a model and its derivatives for a batch of fits

    Every (fit, point) pair is evaluated independently by the point
    evaluator of the model, fits are distributed over threads.

    Parameters
    ----------
    model_id : ModelID | int | str
        model-kind tag:

            0. GAUSS_1D: A, x0, sigma, B.
            1. GAUSS_2D: A, x0, y0, sigma, B.
            2. GAUSS_2D_ELLIPTIC: A, x0, y0, sigmax, sigmay, B.
            3. GAUSS_2D_ROTATED: A, x0, y0, sigmax, sigmay, B, theta.

    parameters : np.ndarray
        parameters in shape (fit_index, parameter_index),
        a single parameter vector is treated as one fit.
    n_points : int
        number of points per fit, must be a perfect square for 2D models.
    user_info : np.ndarray, optional
        float32 x coordinates for GAUSS_1D, either n_points values shared
        by all fits or n_fits * n_points values, by default None.
    values : np.ndarray, optional
        float32 output in shape (fit_index, n_points),
        allocated if None.
    derivatives : np.ndarray, optional
        float32 output in shape (fit_index, n_parameters * n_points),
        parameter-major per fit, allocated if None.

    Returns
    -------
    values : np.ndarray
        model values in shape (fit_index, n_points).
    derivatives : np.ndarray
        derivatives in shape (fit_index, n_parameters * n_points),
        the derivative with respect to parameter k at point p of a fit
        is at column k * n_points + p.

    Raises
    ------
    ValueError
        on malformed parameters, grid, user info or output buffers.
    '''
    model = get_model(model_id)

    parameters = np.ascontiguousarray(parameters, dtype=np.float32)
    if parameters.ndim == 1:
        parameters = parameters[np.newaxis, :]
    if parameters.ndim != 2 or parameters.shape[1] != model.n_parameters:
        raise ValueError(
            f'{model.name} expects parameters in shape '
            f'(n_fits, {model.n_parameters}), got {parameters.shape}.')

    n_points = int(n_points)
    if model.grid_2d:
        GridShape.from_n_points(n_points)
    elif n_points < 1:
        raise ValueError(f'n_points must be positive, got {n_points}.')

    n_fits = parameters.shape[0]

    user_info, user_info_size = as_user_info(user_info)
    n_coordinates = user_info_size // REAL_SIZE
    if (0 < n_coordinates < n_points
            or n_points < n_coordinates < n_fits * n_points):
        raise ValueError(
            f'user_info holds {n_coordinates} values, expected {n_points} '
            f'shared or {n_fits * n_points} per-fit coordinates.')

    values = _check_output(
        values, (n_fits, n_points), 'values')
    derivatives = _check_output(
        derivatives, (n_fits, model.n_parameters * n_points), 'derivatives')

    start = time.perf_counter_ns()

    CPU_parallel_models(
        int(model.model_id), parameters, n_points,
        user_info, user_info_size, values, derivatives)

    stop = time.perf_counter_ns()
    logging.info(
        'Evaluated {} for {:d} fits x {:d} points in {:.3f}ms.'.format(
            model.name, n_fits, n_points, (stop - start) / 1e6))

    return values, derivatives


def _check_output(buffer, shape, name):
    if buffer is None:
        return np.zeros(shape, np.float32)

    if buffer.shape != shape:
        raise ValueError(
            f'{name} must have shape {shape}, got {buffer.shape}.')
    if buffer.dtype != np.float32 or not buffer.flags.c_contiguous:
        raise ValueError(f'{name} must be a C-contiguous float32 array.')
    return buffer


@nb.njit(parallel=True, error_model='numpy')
def CPU_parallel_models(
        model_id, parameters, n_points,
        user_info, user_info_size, values, derivatives):
    n_fits = parameters.shape[0]
    if model_id == 0:  # GAUSS_1D
        for ii in nb.prange(n_fits):
            for jj in range(n_points):
                CPU.kernel_gauss_1d(
                    parameters[ii, :], n_fits, n_points,
                    values[ii, :], derivatives[ii, :],
                    jj, ii, 0, user_info, user_info_size)
    elif model_id == 1:  # GAUSS_2D
        for ii in nb.prange(n_fits):
            for jj in range(n_points):
                CPU.kernel_gauss_2d(
                    parameters[ii, :], n_fits, n_points,
                    values[ii, :], derivatives[ii, :],
                    jj, ii, 0, user_info, user_info_size)
    elif model_id == 2:  # GAUSS_2D_ELLIPTIC
        for ii in nb.prange(n_fits):
            for jj in range(n_points):
                CPU.kernel_gauss_2d_elliptic(
                    parameters[ii, :], n_fits, n_points,
                    values[ii, :], derivatives[ii, :],
                    jj, ii, 0, user_info, user_info_size)
    elif model_id == 3:  # GAUSS_2D_ROTATED
        for ii in nb.prange(n_fits):
            for jj in range(n_points):
                CPU.kernel_gauss_2d_rotated(
                    parameters[ii, :], n_fits, n_points,
                    values[ii, :], derivatives[ii, :],
                    jj, ii, 0, user_info, user_info_size)


def init_numba_CPU():
    '''compile the point evaluators and the batch kernel once'''
    n = 9
    for model in MODELS.values():
        parameters = np.ones((1, model.n_parameters), np.float32)
        CPU_calculate_models(model.model_id, parameters, n)
