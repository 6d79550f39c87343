from hypothesis import given, strategies as st
import numpy as np
import pytest

from swice.lib.att import IceAttenuationMethod
from swice.lib.constants import PI_2
from swice.lib.errors import IceConfigurationError
import swice.model.model as md
from swice.model.source import IceSourceConfig, IceSourceTerm
from tests.model_strategies import coefficients, grid_and_inputs
from tests.physical_strategies import PHYSICAL_STRATEGIES

# Methods usable with arbitrary coefficients
free_methods = st.sampled_from(
    [
        method
        for method in IceAttenuationMethod
        if method
        not in (
            IceAttenuationMethod.VARYING_STEPS,
            IceAttenuationMethod.STATIONARY_STEPS,
        )
    ]
)


def make_kernel(grid, method, step_table=None) -> IceSourceTerm:
    return IceSourceTerm(IceSourceConfig(grid, method, step_table))


class TestStructure:
    @staticmethod
    @given(inputs=grid_and_inputs(), method=free_methods, coefs=coefficients)
    def test_isotropic(inputs, method, coefs):
        grid, spectrum, group_velocities = inputs
        kernel = make_kernel(grid, method)
        with np.errstate(over="ignore"):
            term = kernel.compute(spectrum, 10.0, group_velocities, coefs)
        assert term.diagonal.shape == term.source.shape == spectrum.shape
        per_frequency = term.diagonal.reshape(grid.n_frequencies, grid.n_directions)
        assert np.array_equal(
            per_frequency, np.repeat(per_frequency[:, :1], grid.n_directions, axis=1)
        )

    @staticmethod
    @given(inputs=grid_and_inputs(), method=free_methods, coefs=coefficients)
    def test_source_is_product(inputs, method, coefs):
        grid, spectrum, group_velocities = inputs
        kernel = make_kernel(grid, method)
        with np.errstate(over="ignore", invalid="ignore"):
            term = kernel.compute(spectrum, 10.0, group_velocities, coefs)
            product = term.diagonal * spectrum
        assert np.array_equal(term.source, product, equal_nan=True)

    @staticmethod
    @given(inputs=grid_and_inputs(), method=free_methods, coefs=coefficients)
    def test_diagonal(inputs, method, coefs):
        grid, spectrum, group_velocities = inputs
        kernel = make_kernel(grid, method)
        with np.errstate(over="ignore", invalid="ignore"):
            term = kernel.compute(spectrum, 10.0, group_velocities, coefs)
            attenuations = kernel.attenuation(spectrum, group_velocities, coefs)
            expected = -2 * group_velocities * attenuations
        assert np.array_equal(
            term.diagonal[:: grid.n_directions], expected, equal_nan=True
        )

    @staticmethod
    @given(
        inputs=grid_and_inputs(),
        method=free_methods,
        coefs=coefficients,
        depths=st.tuples(
            PHYSICAL_STRATEGIES[("ocean", "depth")],
            PHYSICAL_STRATEGIES[("ocean", "depth")],
        ),
    )
    def test_idempotent_and_depth_independent(inputs, method, coefs, depths):
        grid, spectrum, group_velocities = inputs
        kernel = make_kernel(grid, method)
        with np.errstate(over="ignore", invalid="ignore"):
            first = kernel.compute(spectrum, depths[0], group_velocities, coefs)
            second = kernel.compute(spectrum, depths[1], group_velocities, coefs)
        for lhs, rhs in zip(first, second):
            assert np.array_equal(lhs, rhs, equal_nan=True)

    @staticmethod
    def test_two_dimensional_spectrum():
        grid = md.SpectralGrid.from_geometric(0.05, 1.1, 5, 3)
        kernel = make_kernel(grid, IceAttenuationMethod.DOBLE_2015)
        spectrum = np.ones((5, 3))
        term = kernel.compute(spectrum, 10.0, np.ones(5), md.IceCoefficients(1.0))
        assert term.diagonal.shape == (5, 3)
        assert np.all(term.diagonal[:, 0] == term.diagonal[:, 2])

    @staticmethod
    def test_invalid_shapes():
        grid = md.SpectralGrid.from_geometric(0.05, 1.1, 5, 3)
        kernel = make_kernel(grid, IceAttenuationMethod.DEFAULT)
        coefs = md.IceCoefficients(1e-4)
        with pytest.raises(ValueError):
            kernel.compute(np.ones(14), 10.0, np.ones(5), coefs)
        with pytest.raises(ValueError):
            kernel.compute(np.ones(15), 10.0, np.ones(4), coefs)


class TestMethods:
    grid = md.SpectralGrid(PI_2 * np.array([0.05, 0.11, 0.5]), 4)
    spectrum = np.linspace(0, 1, 12)
    group_velocities = np.array([15.0, 7.0, 1.5])

    def diagonal(self, method, coefs, step_table=None):
        kernel = make_kernel(self.grid, method, step_table)
        term = kernel.compute(self.spectrum, 50.0, self.group_velocities, coefs)
        return term.diagonal[:: self.grid.n_directions]

    def test_wadhams_zero(self):
        diagonal = self.diagonal(
            IceAttenuationMethod.WADHAMS_1988, md.IceCoefficients()
        )
        assert np.all(diagonal == -self.group_velocities)

    def test_default(self):
        diagonal = self.diagonal(
            IceAttenuationMethod.DEFAULT, md.IceCoefficients(2e-5, 3.0)
        )
        assert np.all(diagonal == -2 * self.group_velocities * 2e-5)

    def test_unknown_code_is_default(self):
        with pytest.warns(UserWarning):
            config = IceSourceConfig(self.grid, 12)
        assert config.method is IceAttenuationMethod.DEFAULT

    def test_stationary_steps(self):
        table = md.StepTable([5e-6, 7e-6, 15e-6, 0.10], [0.10, 0.12, 0.16, 99.0])
        diagonal = self.diagonal(
            IceAttenuationMethod.STATIONARY_STEPS, md.IceCoefficients(), table
        )
        assert np.allclose(
            diagonal, -2 * self.group_velocities * np.array([5e-6, 7e-6, 0.10])
        )

    def test_varying_steps(self):
        coefs = md.IceCoefficients(1e-5, 2e-5, 3e-5, 4e-5, 0.06, 0.2, 0.4)
        diagonal = self.diagonal(IceAttenuationMethod.VARYING_STEPS, coefs)
        assert np.allclose(
            diagonal, -2 * self.group_velocities * np.array([1e-5, 2e-5, 4e-5])
        )

    def test_varying_steps_incomplete(self):
        kernel = make_kernel(self.grid, IceAttenuationMethod.VARYING_STEPS)
        coefs = md.IceCoefficients(1e-5, 2e-5, 3e-5, 4e-5, 0.06, 0.0, 0.4)
        with pytest.raises(IceConfigurationError) as excinfo:
            kernel.compute(self.spectrum, 50.0, self.group_velocities, coefs)
        assert excinfo.value.code == 201


class TestKohout2014:
    # With the group velocities equal to the energy weights, and power of two
    # action densities, the mean energy is exactly 0.5 + 0.0625 = 0.5625,
    # that is a significant wave height of exactly 3 m.
    grid = md.SpectralGrid([0.5, 1.0], 2)
    spectrum = np.array([0.25, 0.25, 0.03125, 0.03125])
    coefs = md.IceCoefficients(1e-5, 6e-3)

    def test_boundary_is_calm(self):
        kernel = make_kernel(self.grid, IceAttenuationMethod.KOHOUT_2014)
        attenuations = kernel.attenuation(
            self.spectrum, self.grid.energy_weights, self.coefs
        )
        assert np.all(attenuations == 1e-5)

    def test_rough(self):
        kernel = make_kernel(self.grid, IceAttenuationMethod.KOHOUT_2014)
        spectrum = 4 * self.spectrum
        attenuations = kernel.attenuation(
            spectrum, self.grid.energy_weights, self.coefs
        )
        assert np.allclose(attenuations, 6e-3 / 6)

    def test_non_positive_group_velocity(self):
        kernel = make_kernel(self.grid, IceAttenuationMethod.KOHOUT_2014)
        with pytest.warns(UserWarning):
            kernel.attenuation(self.spectrum, np.array([1.0, 0.0]), self.coefs)


class TestConfig:
    grid = md.SpectralGrid.from_geometric(0.04, 1.1, 25, 24)

    def test_stationary_steps_without_table(self):
        with pytest.raises(IceConfigurationError) as excinfo:
            IceSourceConfig(self.grid, IceAttenuationMethod.STATIONARY_STEPS)
        assert excinfo.value.code == 201

    def test_stationary_steps_incomplete(self):
        table = md.StepTable([5e-6, 0.0, 15e-6], [0.10, 0.12])
        with pytest.raises(IceConfigurationError) as excinfo:
            IceSourceConfig(self.grid, 6, table)
        assert excinfo.value.code == 201

    def test_duplicate_mud_fields(self):
        with pytest.raises(IceConfigurationError) as excinfo:
            IceSourceConfig(self.grid, 1, mud_source_active=True)
        assert excinfo.value.code == 202

    def test_from_parameters(self):
        config = IceSourceConfig.from_parameters(
            self.grid,
            [6, 0, 0, 0],
            [5e-6, 7e-6, 15e-6, 0.10],
            [0.10, 0.12, 0.16, 99.0],
        )
        assert config.method is IceAttenuationMethod.STATIONARY_STEPS
        assert config.step_table.rates[3] == 0.10

    def test_from_parameters_without_table(self):
        config = IceSourceConfig.from_parameters(self.grid, [3.0])
        assert config.method is IceAttenuationMethod.KOHOUT_MEYLAN_2008
        assert config.step_table is None
