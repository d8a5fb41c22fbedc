'''
Fit a rotated elliptic gaussian spot with scipy's least_squares, using the
model values and the parameter-major Jacobian of gaussfit.

requires: pip install gaussfit[examples]
'''
import numpy as np
from scipy.optimize import least_squares

from gaussfit.models import CPU_calculate_models, JacobianView, ModelID

n_points = 15 * 15
truth = np.array([120.0, 7.3, 6.8, 2.4, 1.2, 10.0, 0.6], np.float32)

values, _ = CPU_calculate_models(ModelID.GAUSS_2D_ROTATED, truth, n_points)
rng = np.random.default_rng(0)
data = rng.poisson(values[0]).astype(np.float32)


def residuals(p):
    model, _ = CPU_calculate_models(ModelID.GAUSS_2D_ROTATED, p, n_points)
    return model[0] - data


def jacobian(p):
    _, derivatives = CPU_calculate_models(
        ModelID.GAUSS_2D_ROTATED, p, n_points)
    # least_squares expects (n_points, n_parameters)
    return JacobianView(derivatives[0], 7, n_points).matrix.T


start = np.array([data.max(), 7.0, 7.0, 2.0, 2.0, data.min(), 0.3])
result = least_squares(residuals, start, jac=jacobian, method='lm')

print('truth :', truth)
print('fitted:', np.round(result.x, 3))
