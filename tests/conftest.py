"""Pytest configuration and fixtures for gaussfit tests."""

import numpy as np
import pytest


@pytest.fixture
def rotated_parameters():
    """Anisotropic, rotated spot on a 7x7 grid."""
    return np.array([12.0, 3.2, 2.7, 1.6, 0.9, 2.5, 0.4])


@pytest.fixture
def evaluate_grid():
    """Evaluate a point kernel at every point of a fit, in float64."""

    def evaluate(kernel, parameters, n_points, user_info=None):
        parameters = np.asarray(parameters, dtype=np.float64)
        if user_info is None:
            user_info = np.zeros(0, np.float32)
        values = np.zeros(n_points)
        derivatives = np.zeros(parameters.size * n_points)
        for point_index in range(n_points):
            kernel(
                parameters, 1, n_points, values, derivatives,
                point_index, 0, 0, user_info, user_info.nbytes)
        return values, derivatives.reshape((parameters.size, n_points))

    return evaluate
