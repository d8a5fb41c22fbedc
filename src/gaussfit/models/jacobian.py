import numpy as np


class JacobianView:
    '''
    Two dimensional view on a parameter-major derivative buffer.

    The derivative of the model with respect to parameter ``k`` at
    ``point_index`` lives at ``k * n_points + point_index``, i.e. the
    buffer is a (n_parameters, n_points) matrix with a row stride of
    ``n_points`` elements. A Jacobian column (one parameter, all points)
    is therefore a contiguous slice of the buffer.

    Parameters
    ----------
    buffer : np.ndarray
        flat derivative buffer of a single fit,
        length n_parameters * n_points
    n_parameters : int
        number of model parameters
    n_points : int
        number of points of the fit
    '''

    def __init__(self, buffer: np.ndarray, n_parameters: int, n_points: int):
        buffer = np.asarray(buffer)
        if buffer.ndim != 1:
            raise ValueError(
                f'Derivative buffer must be flat, got shape {buffer.shape}.')
        if buffer.size != n_parameters * n_points:
            raise ValueError(
                f'Derivative buffer holds {buffer.size} values, expected '
                f'{n_parameters} x {n_points} = {n_parameters * n_points}.')

        self.buffer = buffer
        self.n_parameters = n_parameters
        self.n_points = n_points

    @property
    def stride(self) -> int:
        '''number of elements between two parameters of the same point'''
        return self.n_points

    def offset(self, parameter: int, point_index: int) -> int:
        '''flat buffer offset of one (parameter, point) entry'''
        if not 0 <= parameter < self.n_parameters:
            raise IndexError(
                f'parameter {parameter} out of range '
                f'[0, {self.n_parameters}).')
        if not 0 <= point_index < self.n_points:
            raise IndexError(
                f'point_index {point_index} out of range '
                f'[0, {self.n_points}).')
        return parameter * self.n_points + point_index

    def column(self, parameter: int) -> np.ndarray:
        '''derivatives with respect to one parameter at every point'''
        if not 0 <= parameter < self.n_parameters:
            raise IndexError(
                f'parameter {parameter} out of range '
                f'[0, {self.n_parameters}).')
        start = parameter * self.n_points
        return self.buffer[start:start + self.n_points]

    @property
    def matrix(self) -> np.ndarray:
        '''(n_parameters, n_points) view, no copy'''
        return self.buffer.reshape((self.n_parameters, self.n_points))

    def __getitem__(self, key):
        parameter, point_index = key
        return self.buffer[self.offset(parameter, point_index)]

    def __repr__(self):
        return (
            f'JacobianView(n_parameters={self.n_parameters}, '
            f'n_points={self.n_points})')
