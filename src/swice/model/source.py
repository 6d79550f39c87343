"""Dissipation of wave energy by sea ice, as a linear source term."""

from __future__ import annotations

from collections import namedtuple
from collections.abc import Sequence
import typing

import attrs
import numpy as np

from ..lib import att, errors
from . import model as md

SourceTerm = namedtuple("SourceTerm", ["source", "diagonal"])


def _to_method(raw) -> att.IceAttenuationMethod:
    if isinstance(raw, att.IceAttenuationMethod):
        return raw
    return att.IceAttenuationMethod.from_code(int(raw))


@attrs.define(frozen=True)
class IceSourceConfig:
    """Run-wide settings of the ice source term.

    Instances are immutable, and can be shared by concurrent evaluations of
    the source term over different grid cells.

    Parameters
    ----------
    grid : md.SpectralGrid
        Spectral discretisation
    method : att.IceAttenuationMethod | int
        Attenuation parameterisation. Integer codes without a matching method
        select the uniform attenuation.
    step_table : md.StepTable | None
        Required by the stationary step function, ignored otherwise
    mud_source_active : bool
        Whether a mud dissipation source term also reads the fields feeding
        coefficients 6 to 8

    Raises
    ------
    errors.IceConfigurationError
        If the stationary step function is selected without a complete table
        (code 201), or if the mud fields are used twice (code 202).

    """

    grid: md.SpectralGrid
    method: att.IceAttenuationMethod = attrs.field(
        default=att.IceAttenuationMethod.DEFAULT, converter=_to_method
    )
    step_table: md.StepTable | None = attrs.field(default=None, eq=False)
    mud_source_active: bool = False

    def __attrs_post_init__(self):
        if self.mud_source_active:
            raise errors.IceConfigurationError(
                "DUPLICATE USE OF MUD PARAMETERS", errors.DUPLICATE_MUD_PARAMETERS
            )
        if self.method == att.IceAttenuationMethod.STATIONARY_STEPS:
            if self.step_table is None:
                raise errors.missing_parameters("ICE STEP FUNCTION TABLE")
            self.step_table.check()

    @classmethod
    def from_parameters(
        cls,
        grid: md.SpectralGrid,
        ic4pars: Sequence[float],
        ic4_ki: Sequence[float] | None = None,
        ic4_fc: Sequence[float] | None = None,
    ) -> typing.Self:
        """Build a configuration from raw parameter arrays.

        Parameters
        ----------
        grid : md.SpectralGrid
        ic4pars : sequence of float
            Parameters of the source term, the first being the method code
        ic4_ki : sequence of float, optional
            Rates of the stationary step function, in m^-1
        ic4_fc : sequence of float, optional
            Cutoffs of the stationary step function, in Hz

        Returns
        -------
        IceSourceConfig

        """
        step_table = None
        if ic4_ki is not None or ic4_fc is not None:
            step_table = md.StepTable(
                () if ic4_ki is None else ic4_ki, () if ic4_fc is None else ic4_fc
            )
        return cls(grid, int(ic4pars[0]), step_table)


@attrs.define(frozen=True)
class IceSourceTerm:
    """Evaluate the ice source term, one grid cell at a time.

    Attenuation is isotropic: the diagonal of the source term only depends
    on frequency.

    """

    config: IceSourceConfig

    def _check_shapes(self, spectrum: np.ndarray, group_velocities: np.ndarray):
        grid = self.config.grid
        if spectrum.size != grid.n_spectral:
            raise ValueError(
                f"Spectrum (size {spectrum.size}) does not match the grid "
                f"({grid.n_frequencies} frequencies, {grid.n_directions} directions)"
            )
        if group_velocities.size != grid.n_frequencies:
            raise ValueError(
                f"Group velocities (size {group_velocities.size}) do not match "
                f"the {grid.n_frequencies} frequencies"
            )

    def parameterisation(
        self, coefficients: md.IceCoefficients
    ) -> md.Parameterisation:
        return md.build_parameterisation(
            self.config.method, coefficients, self.config.step_table
        )

    def attenuation(
        self,
        spectrum: np.ndarray,
        group_velocities: np.ndarray,
        coefficients: md.IceCoefficients,
    ) -> np.ndarray:
        """Amplitude attenuation rates, one per frequency, in m^-1."""
        spectrum = np.asarray(spectrum, dtype=float)
        group_velocities = np.ravel(np.asarray(group_velocities, dtype=float))
        self._check_shapes(spectrum, group_velocities)
        return self.parameterisation(coefficients).attenuation(
            self.config.grid, spectrum.ravel(), group_velocities
        )

    def compute(
        self,
        spectrum: np.ndarray,
        depth: float,
        group_velocities: np.ndarray,
        coefficients: md.IceCoefficients,
    ) -> SourceTerm:
        """Compute the source term and its diagonal.

        Parameters
        ----------
        spectrum : array_like of float
            Action density, of size `config.grid.n_spectral`, the direction
            index varying fastest
        depth : float
            Water depth, in m. Not used by any parameterisation.
        group_velocities : 1d array_like of float
            Group velocities, in m s^-1, one per frequency
        coefficients : md.IceCoefficients
            Ice coefficients of the grid cell

        Returns
        -------
        SourceTerm
            `diagonal` holds `-2 * cg * attenuation` for every spectral
            component, and `source` the product of the diagonal and the
            spectrum. Both have the shape of `spectrum`.

        Raises
        ------
        ValueError
            If the sizes of the inputs do not match the grid.
        errors.IceConfigurationError
            If coefficients required by the parameterisation are missing.

        """
        spectrum = np.asarray(spectrum, dtype=float)
        group_velocities = np.ravel(np.asarray(group_velocities, dtype=float))
        attenuations = self.attenuation(spectrum, group_velocities, coefficients)

        diagonal_1d = -2 * group_velocities * attenuations
        diagonal = np.repeat(diagonal_1d, self.config.grid.n_directions).reshape(
            spectrum.shape
        )
        return SourceTerm(diagonal * spectrum, diagonal)
