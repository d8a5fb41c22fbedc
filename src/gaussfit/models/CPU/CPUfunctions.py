'''
Point evaluators of the gaussian models.

Every kernel shares the signature

    (parameters, n_fits, n_points, value, derivative,
     point_index, fit_index, chunk_index, user_info, user_info_size)

where `parameters`, `value` and `derivative` are the regions of the current
fit. The derivative with respect to parameter k at point_index is written
to derivative[k * n_points + point_index].
'''
import math

import numba as nb

from ..constants import *


def _point_signature(real):
    return nb.void(
        real[:], nb.int64, nb.int64, real[:], real[:],
        nb.int64, nb.int64, nb.int64, nb.float32[:], nb.int64)


POINT_SIGNATURES = [
    _point_signature(nb.float32),
    _point_signature(nb.float64),
]


@nb.njit(
    nb.types.UniTuple(nb.int64, 2)(nb.int64, nb.int64),
    error_model='numpy')
def kernel_grid_coordinates(n_points, point_index):
    '''decode the (x, y) coordinates of a point on the implicit square grid

    Parameters
    ----------
    n_points : int
        number of points of the fit, side length is floor(sqrt(n_points))
    point_index : int
        linear index of the point

    Returns
    -------
    tuple[int, int]
        (x, y) integer grid coordinates
    '''
    n_points_x = int(math.sqrt(n_points))
    point_index_y = point_index // n_points_x
    point_index_x = point_index - point_index_y * n_points_x

    return point_index_x, point_index_y


@nb.njit(POINT_SIGNATURES, error_model='numpy')
def kernel_gauss_1d(
        parameters, n_fits, n_points, value, derivative,
        point_index, fit_index, chunk_index, user_info, user_info_size):
    '''1D gaussian, parameters (A, x0, sigma, B)

    The independent variable is taken from user_info when it holds float32
    coordinates, either one set shared by all fits (n_points values) or
    one set per fit of every chunk (n_fits * n_points values per chunk).
    Otherwise the point index itself is used.
    '''
    n_coordinates = user_info_size // REAL_SIZE

    if n_coordinates == n_points:
        x = float(user_info[point_index])
    elif n_coordinates > n_points:
        chunk_begin = chunk_index * n_fits * n_points
        fit_begin = fit_index * n_points
        x = float(user_info[chunk_begin + fit_begin + point_index])
    else:
        x = float(point_index)

    argx = (x - parameters[1]) * (x - parameters[1]) / (
        2.0 * parameters[2] * parameters[2])
    ex = math.exp(-argx)

    value[point_index] = parameters[0] * ex + parameters[3]

    derivative[0 * n_points + point_index] = ex
    derivative[1 * n_points + point_index] = \
        parameters[0] * ex * (x - parameters[1]) / (
            parameters[2] * parameters[2])
    derivative[2 * n_points + point_index] = \
        parameters[0] * ex * (x - parameters[1]) * (x - parameters[1]) / (
            parameters[2] * parameters[2] * parameters[2])
    derivative[3 * n_points + point_index] = 1.0


@nb.njit(POINT_SIGNATURES, error_model='numpy')
def kernel_gauss_2d(
        parameters, n_fits, n_points, value, derivative,
        point_index, fit_index, chunk_index, user_info, user_info_size):
    '''symmetric 2D gaussian, parameters (A, x0, y0, sigma, B)'''
    x, y = kernel_grid_coordinates(n_points, point_index)

    dx = x - parameters[1]
    dy = y - parameters[2]
    s2 = parameters[3] * parameters[3]
    r2 = dx * dx + dy * dy
    ex = math.exp(-0.5 * r2 / s2)

    value[point_index] = parameters[0] * ex + parameters[4]

    derivative[0 * n_points + point_index] = ex
    derivative[1 * n_points + point_index] = parameters[0] * ex * dx / s2
    derivative[2 * n_points + point_index] = parameters[0] * ex * dy / s2
    derivative[3 * n_points + point_index] = \
        parameters[0] * ex * r2 / (s2 * parameters[3])
    derivative[4 * n_points + point_index] = 1.0


@nb.njit(POINT_SIGNATURES, error_model='numpy')
def kernel_gauss_2d_elliptic(
        parameters, n_fits, n_points, value, derivative,
        point_index, fit_index, chunk_index, user_info, user_info_size):
    '''elliptic 2D gaussian aligned with the grid axes,
    parameters (A, x0, y0, sigma_x, sigma_y, B)'''
    x, y = kernel_grid_coordinates(n_points, point_index)

    dx = x - parameters[1]
    dy = y - parameters[2]
    sx2 = parameters[3] * parameters[3]
    sy2 = parameters[4] * parameters[4]
    ex = math.exp(-0.5 * (dx * dx / sx2 + dy * dy / sy2))

    value[point_index] = parameters[0] * ex + parameters[5]

    derivative[0 * n_points + point_index] = ex
    derivative[1 * n_points + point_index] = parameters[0] * ex * dx / sx2
    derivative[2 * n_points + point_index] = parameters[0] * ex * dy / sy2
    derivative[3 * n_points + point_index] = \
        parameters[0] * ex * dx * dx / (sx2 * parameters[3])
    derivative[4 * n_points + point_index] = \
        parameters[0] * ex * dy * dy / (sy2 * parameters[4])
    derivative[5 * n_points + point_index] = 1.0


@nb.njit(POINT_SIGNATURES, error_model='numpy')
def kernel_gauss_2d_rotated(
        parameters, n_fits, n_points, value, derivative,
        point_index, fit_index, chunk_index, user_info, user_info_size):
    '''compute the rotated elliptic 2D gaussian and its derivatives

    V = A * exp(-0.5 * ((a / sx)^2 + (b / sy)^2)) + B

    where (a, b) is the offset from the center rotated by theta into the
    frame of the ellipse.

    Parameters
    ----------
    parameters : float32[]
        (A, x0, y0, sigma_x, sigma_y, B, theta) of the current fit
    n_fits : int
        number of fits, not used
    n_points : int
        number of points per fit, the grid side is floor(sqrt(n_points))
    value : float32[]
        model values of the current fit, written at point_index
    derivative : float32[]
        parameter-major derivatives of the current fit,
        7 slots written at k * n_points + point_index
    point_index : int
        linear index of the point to evaluate
    fit_index : int
        not used
    chunk_index : int
        not used
    user_info : float32[]
        not used
    user_info_size : int
        not used
    '''
    x, y = kernel_grid_coordinates(n_points, point_index)

    amplitude = parameters[P_A]
    sx = parameters[P_SX]
    sy = parameters[P_SY]

    cos_theta = math.cos(parameters[P_THETA])
    sin_theta = math.sin(parameters[P_THETA])

    dx = x - parameters[P_X0]
    dy = y - parameters[P_Y0]

    a = dx * cos_theta - dy * sin_theta
    b = dx * sin_theta + dy * cos_theta

    sx2 = sx * sx
    sy2 = sy * sy

    ex = math.exp(-0.5 * (math.pow(a / sx, 2) + math.pow(b / sy, 2)))

    value[point_index] = amplitude * ex + parameters[P_B]

    derivative[P_A * n_points + point_index] = ex
    derivative[P_X0 * n_points + point_index] = \
        (amplitude * cos_theta * a / sx2
         + amplitude * sin_theta * b / sy2) * ex
    derivative[P_Y0 * n_points + point_index] = \
        (-amplitude * sin_theta * a / sx2
         + amplitude * cos_theta * b / sy2) * ex
    derivative[P_SX * n_points + point_index] = \
        amplitude * a * a / (sx2 * sx) * ex
    derivative[P_SY * n_points + point_index] = \
        amplitude * b * b / (sy2 * sy) * ex
    derivative[P_B * n_points + point_index] = 1.0
    derivative[P_THETA * n_points + point_index] = \
        amplitude * a * b * (1.0 / sx2 - 1.0 / sy2) * ex
