"""Tests for the model function interface and the sibling models."""

import math

import numpy as np
import pytest

from gaussfit.models import CPU, MODELS, ModelFunction, ModelID, get_model


class TestDispatchTable:

    def test_every_model_registered(self):
        assert set(MODELS) == set(ModelID)
        for model_id, model in MODELS.items():
            assert isinstance(model, ModelFunction)
            assert model.model_id is model_id

    @pytest.mark.parametrize('tag', [
        ModelID.GAUSS_2D_ROTATED, 3, 'GAUSS_2D_ROTATED', 'gauss_2d_rotated'])
    def test_get_model_tags(self, tag):
        model = get_model(tag)
        assert model.name == 'GAUSS_2D_ROTATED'
        assert model.n_parameters == 7
        assert model.parameter_names[-1] == 'theta'

    @pytest.mark.parametrize('tag', [42, 'CAUCHY_2D', -1])
    def test_unknown_model_raises(self, tag):
        with pytest.raises(KeyError, match='Unknown model'):
            get_model(tag)

    def test_parameter_counts(self):
        counts = {m.model_id: m.n_parameters for m in MODELS.values()}
        assert counts == {
            ModelID.GAUSS_1D: 4,
            ModelID.GAUSS_2D: 5,
            ModelID.GAUSS_2D_ELLIPTIC: 6,
            ModelID.GAUSS_2D_ROTATED: 7,
        }


class TestSiblingModels:

    def test_rotated_at_zero_angle_is_elliptic(self, evaluate_grid):
        elliptic = [8.0, 2.3, 3.4, 1.7, 0.6, 1.0]
        values_e, derivatives_e = evaluate_grid(
            CPU.kernel_gauss_2d_elliptic, elliptic, 49)
        values_r, derivatives_r = evaluate_grid(
            CPU.kernel_gauss_2d_rotated, elliptic + [0.0], 49)

        np.testing.assert_allclose(values_r, values_e, rtol=1e-12)
        np.testing.assert_allclose(
            derivatives_r[:6], derivatives_e, rtol=1e-12, atol=1e-15)

    def test_elliptic_with_equal_widths_is_symmetric(self, evaluate_grid):
        values_s, derivatives_s = evaluate_grid(
            CPU.kernel_gauss_2d, [8.0, 2.3, 3.4, 1.2, 1.0], 49)
        values_e, derivatives_e = evaluate_grid(
            CPU.kernel_gauss_2d_elliptic, [8.0, 2.3, 3.4, 1.2, 1.2, 1.0], 49)

        np.testing.assert_allclose(values_s, values_e, rtol=1e-12)
        np.testing.assert_allclose(derivatives_s[:3], derivatives_e[:3])
        # d/dsigma of the symmetric model is the sum of both widths
        np.testing.assert_allclose(
            derivatives_s[3], derivatives_e[3] + derivatives_e[4])
        np.testing.assert_array_equal(derivatives_s[4], 1.0)

    @pytest.mark.parametrize('kernel, parameters', [
        (CPU.kernel_gauss_1d, [6.0, 4.3, 1.7, 0.5]),
        (CPU.kernel_gauss_2d, [6.0, 2.3, 3.1, 1.4, 0.5]),
        (CPU.kernel_gauss_2d_elliptic, [6.0, 2.3, 3.1, 1.4, 0.8, 0.5]),
    ])
    def test_finite_differences(self, evaluate_grid, kernel, parameters):
        parameters = np.array(parameters)
        _, analytic = evaluate_grid(kernel, parameters, 36)

        for k in range(parameters.size):
            step = 1e-5 * max(1.0, abs(parameters[k]))
            upper = parameters.copy()
            lower = parameters.copy()
            upper[k] += step
            lower[k] -= step
            numeric = (
                evaluate_grid(kernel, upper, 36)[0]
                - evaluate_grid(kernel, lower, 36)[0]) / (2 * step)
            np.testing.assert_allclose(
                analytic[k], numeric, rtol=1e-3, atol=1e-5)


class TestGauss1DUserInfo:

    parameters = [1.0, 2.0, 1.0, 0.0]

    def test_point_index_without_user_info(self, evaluate_grid):
        values, _ = evaluate_grid(CPU.kernel_gauss_1d, self.parameters, 5)
        assert values[2] == pytest.approx(1.0)
        assert values[0] == pytest.approx(math.exp(-2.0))

    def test_shared_coordinates(self, evaluate_grid):
        x = np.arange(5, dtype=np.float32) * 0.5
        values, _ = evaluate_grid(
            CPU.kernel_gauss_1d, self.parameters, 5, user_info=x)
        assert values[4] == pytest.approx(1.0)
        assert values[0] == pytest.approx(math.exp(-2.0))

    def test_per_fit_coordinates_by_chunk(self):
        n_points = 4
        # chunk 0 then chunk 1, one fit per chunk
        x = np.array([0, 0, 0, 0, 2, 3, 4, 5], np.float32)
        value = np.zeros(n_points)
        derivative = np.zeros(4 * n_points)
        CPU.kernel_gauss_1d(
            np.array(self.parameters), 1, n_points, value, derivative,
            0, 0, 1, x, x.nbytes)
        assert value[0] == pytest.approx(1.0)
        assert derivative[1 * n_points] == pytest.approx(0.0)


class TestModelFunction:

    def test_evaluate_point_writes_fit_regions(self):
        model = get_model('GAUSS_2D')
        value = np.zeros(9, np.float32)
        derivative = np.zeros(5 * 9, np.float32)
        model.evaluate_point([3.0, 1.0, 1.0, 1.0, 2.0], 9, 4, value, derivative)
        assert value[4] == pytest.approx(5.0)
        assert derivative[4] == pytest.approx(1.0)
        assert derivative[4 * 9 + 4] == 1.0
        assert np.count_nonzero(value) == 1

    def test_evaluate_point_user_info(self):
        model = get_model(ModelID.GAUSS_1D)
        value = np.zeros(3, np.float32)
        derivative = np.zeros(4 * 3, np.float32)
        model.evaluate_point(
            [2.0, 10.0, 1.0, 0.0], 3, 1, value, derivative,
            user_info=np.array([0.0, 10.0, 20.0]))
        assert value[1] == pytest.approx(2.0)

    def test_repr(self):
        assert 'GAUSS_2D_ELLIPTIC' in repr(get_model(2))


class TestCompiledSignatures:

    @pytest.mark.parametrize('kernel', [
        CPU.kernel_gauss_1d, CPU.kernel_gauss_2d,
        CPU.kernel_gauss_2d_elliptic, CPU.kernel_gauss_2d_rotated])
    def test_float32_and_float64_overloads(self, kernel):
        dtypes = {str(signature[0].dtype) for signature in kernel.signatures}
        assert dtypes == {'float32', 'float64'}

    def test_evaluate_point_float64_buffers(self):
        model = get_model(ModelID.GAUSS_2D_ROTATED)
        value = np.zeros(9)
        derivative = np.zeros(7 * 9)
        model.evaluate_point(
            np.array([10, 1, 1, 1, 1, 0, 0], np.float32), 9, 0,
            value, derivative)
        assert value[0] == pytest.approx(10.0 * math.exp(-1.0))
