import math
from dataclasses import dataclass


@dataclass(frozen=True)
class GridShape:
    '''
    Shape of the implicit point grid of a single fit.

    The point evaluators decode a linear point index as
    ``y = index // n_points_x`` and ``x = index - y * n_points_x``
    with ``n_points_x = floor(sqrt(n_points))``. This class carries the
    same mapping but refuses point counts that are not perfect squares,
    which the compiled kernels would silently misalign.
    '''
    n_points_x: int
    n_points_y: int

    def __post_init__(self):
        if self.n_points_x < 1 or self.n_points_y < 1:
            raise ValueError(
                f'Grid sides must be positive, got '
                f'{self.n_points_x}x{self.n_points_y}.')

    @classmethod
    def from_n_points(cls, n_points: int) -> 'GridShape':
        '''
        Build the square grid of a fit from its number of points.

        Parameters
        ----------
        n_points : int
            number of data points of the fit

        Returns
        -------
        GridShape
            square grid with side sqrt(n_points)

        Raises
        ------
        ValueError
            if n_points is not a positive perfect square.
        '''
        n_points = int(n_points)
        if n_points < 1:
            raise ValueError(f'n_points must be positive, got {n_points}.')

        side = math.isqrt(n_points)
        if side * side != n_points:
            raise ValueError(
                f'n_points={n_points} is not a perfect square, '
                'only square grids are supported.')
        return cls(side, side)

    @property
    def n_points(self) -> int:
        return self.n_points_x * self.n_points_y

    def coordinates(self, point_index: int) -> tuple[int, int]:
        '''(x, y) grid coordinates of a linear point index'''
        if not 0 <= point_index < self.n_points:
            raise IndexError(
                f'point_index {point_index} out of range '
                f'[0, {self.n_points}).')
        y = point_index // self.n_points_x
        return point_index - y * self.n_points_x, y

    def point_index(self, x: int, y: int) -> int:
        '''linear point index of the (x, y) grid coordinates'''
        if not (0 <= x < self.n_points_x and 0 <= y < self.n_points_y):
            raise IndexError(
                f'({x}, {y}) outside of the '
                f'{self.n_points_x}x{self.n_points_y} grid.')
        return y * self.n_points_x + x
