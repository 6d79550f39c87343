from __future__ import annotations

import functools
import typing
import warnings

import attrs
import numpy as np

from ..lib import att, errors
from ..lib import physics as ph
from ..lib.constants import MAX_STEPS, PI_2


def _as_float_array(raw) -> np.ndarray:
    return np.atleast_1d(np.asarray(raw, dtype=float))


def _check_increasing(instance, attribute, value: np.ndarray):
    if value.ndim != 1 or value.size == 0:
        raise ValueError(f"`{attribute.name}` must be a non-empty 1D array")
    if np.any(value <= 0):
        raise ValueError(f"`{attribute.name}` must be positive")
    if np.any(np.diff(value) <= 0):
        raise ValueError(f"`{attribute.name}` must be strictly increasing")


@attrs.define(frozen=True, eq=False)
class SpectralGrid:
    """The frequency-direction discretisation of a wave spectrum.

    Spectra are flattened with the direction index varying fastest, so that
    component `k * n_directions + d` belongs to frequency bin `k`.

    Parameters
    ----------
    angular_frequencies : 1d array_like of float
        Strictly increasing angular frequencies, in rad s^-1
    n_directions : int
        Number of direction bins, evenly spread over a full circle
    bandwidths : 1d array_like of float, optional
        Width of the frequency bins, in rad s^-1. Derived from the
        frequencies if not provided.

    Attributes
    ----------
    frequencies : np.ndarray
        Frequencies, in Hz
    periods : np.ndarray
        Periods, in s
    energy_weights : np.ndarray
        Products of the directional resolution, the bin width and the angular
        frequency, used to integrate action density into energy

    """

    angular_frequencies: np.ndarray = attrs.field(
        converter=_as_float_array, validator=_check_increasing
    )
    n_directions: int = attrs.field(converter=int)
    bandwidths: np.ndarray = attrs.field(
        default=attrs.Factory(
            lambda self: ph.frequency_bandwidths(self.angular_frequencies),
            takes_self=True,
        ),
        converter=_as_float_array,
    )

    @n_directions.validator
    def _check_directions(self, attribute, value):
        if value < 1:
            raise ValueError("At least one direction is required")

    def __attrs_post_init__(self):
        if self.bandwidths.shape != self.angular_frequencies.shape:
            raise ValueError(
                f"Bandwidths (size {self.bandwidths.size}) do not match "
                f"the frequencies (size {self.angular_frequencies.size})"
            )

    @classmethod
    def from_geometric(
        cls,
        first_frequency: float,
        increment: float,
        n_frequencies: int,
        n_directions: int,
    ) -> typing.Self:
        """Build a grid of geometrically spaced frequencies.

        Parameters
        ----------
        first_frequency : float
            Lowest frequency, in Hz
        increment : float
            Ratio between consecutive frequencies, greater than 1
        n_frequencies : int
        n_directions : int

        Returns
        -------
        SpectralGrid

        """
        if increment <= 1:
            raise ValueError("The frequency increment must be greater than 1")
        angular_frequencies = (
            PI_2 * first_frequency * increment ** np.arange(n_frequencies)
        )
        return cls(angular_frequencies, n_directions)

    @property
    def n_frequencies(self) -> int:
        return self.angular_frequencies.size

    @property
    def n_spectral(self) -> int:
        return self.n_frequencies * self.n_directions

    @property
    def directional_resolution(self) -> float:
        return PI_2 / self.n_directions

    @functools.cached_property
    def frequencies(self) -> np.ndarray:
        return self.angular_frequencies / PI_2

    @functools.cached_property
    def periods(self) -> np.ndarray:
        return PI_2 / self.angular_frequencies

    @functools.cached_property
    def energy_weights(self) -> np.ndarray:
        return (
            self.directional_resolution * self.bandwidths * self.angular_frequencies
        )


@attrs.frozen
class IceCoefficients:
    """The eight ice coefficients of a grid cell.

    Their meaning depends on the attenuation method. Unset coefficients
    are zero.

    """

    ic1: float = attrs.field(default=0.0, converter=float)
    ic2: float = attrs.field(default=0.0, converter=float)
    ic3: float = attrs.field(default=0.0, converter=float)
    ic4: float = attrs.field(default=0.0, converter=float)
    ic5: float = attrs.field(default=0.0, converter=float)
    ic6: float = attrs.field(default=0.0, converter=float)
    ic7: float = attrs.field(default=0.0, converter=float)
    ic8: float = attrs.field(default=0.0, converter=float)


def _optional_field(raw) -> np.ndarray | None:
    if raw is None:
        return None
    return np.asarray(raw, dtype=float)


@attrs.define(frozen=True, eq=False)
class IceFields:
    """Horizontal fields from which ice coefficients are read.

    Each field is a 2D array indexed by `(ix, iy)`, or None when the field is
    not provided by the model inputs. `ic6`, `ic7` and `ic8` are typically fed
    by the mud density, thickness and viscosity inputs.

    """

    ic1: np.ndarray | None = attrs.field(default=None, converter=_optional_field)
    ic2: np.ndarray | None = attrs.field(default=None, converter=_optional_field)
    ic3: np.ndarray | None = attrs.field(default=None, converter=_optional_field)
    ic4: np.ndarray | None = attrs.field(default=None, converter=_optional_field)
    ic5: np.ndarray | None = attrs.field(default=None, converter=_optional_field)
    ic6: np.ndarray | None = attrs.field(default=None, converter=_optional_field)
    ic7: np.ndarray | None = attrs.field(default=None, converter=_optional_field)
    ic8: np.ndarray | None = attrs.field(default=None, converter=_optional_field)

    @property
    def supplied(self) -> tuple[bool, ...]:
        return tuple(
            field is not None for field in attrs.astuple(self, recurse=False)
        )

    def coefficients_at(self, ix: int, iy: int) -> IceCoefficients:
        """Read the coefficients of one grid cell.

        Parameters
        ----------
        ix, iy : int
            Indices of the grid cell

        Returns
        -------
        IceCoefficients
            Coefficients of unsupplied fields are zero.

        """
        return IceCoefficients(
            *(
                0.0 if field is None else field[ix, iy]
                for field in attrs.astuple(self, recurse=False)
            )
        )


def _padded_steps(raw) -> np.ndarray:
    values = np.ravel(np.asarray(raw, dtype=float))
    if values.size > MAX_STEPS:
        raise ValueError(f"A step function has at most {MAX_STEPS} steps")
    return np.pad(values, (0, MAX_STEPS - values.size))


@attrs.define(frozen=True, eq=False)
class StepTable:
    """Stationary, spatially uniform step function.

    Parameters
    ----------
    rates : 1d array_like of float
        Amplitude attenuation of each step, in m^-1
    cutoffs : 1d array_like of float
        Upper frequency bound of each step, in Hz

    Both are zero-padded to `MAX_STEPS` entries.

    """

    rates: np.ndarray = attrs.field(converter=_padded_steps)
    cutoffs: np.ndarray = attrs.field(converter=_padded_steps)

    def check(self):
        """Raise if the three first rates or two first cutoffs are not set."""
        if np.any(self.rates[:3] == 0) or np.any(self.cutoffs[:2] == 0):
            raise errors.missing_parameters()


@attrs.frozen
class UniformRate:
    rate: float

    def attenuation(self, grid, spectrum, group_velocities):
        return att.uniform(self.rate, grid.angular_frequencies)


@attrs.frozen
class Wadhams1988:
    slope: float
    offset: float

    def attenuation(self, grid, spectrum, group_velocities):
        return att.wadhams1988(self.slope, self.offset, grid.angular_frequencies)


@attrs.frozen
class PeriodPolynomial:
    coefficients: tuple[float, float, float, float, float]

    def attenuation(self, grid, spectrum, group_velocities):
        return att.period_polynomial(self.coefficients, grid.angular_frequencies)


@attrs.frozen
class KohoutMeylan2008:
    thickness: float

    def attenuation(self, grid, spectrum, group_velocities):
        return att.kohout_meylan2008(self.thickness, grid.angular_frequencies)


@attrs.frozen
class Kohout2014:
    calm_rate: float
    rough_slope: float

    def attenuation(self, grid, spectrum, group_velocities):
        if np.any(np.asarray(group_velocities) <= 0):
            warnings.warn(
                "Non-positive group velocities, the wave height is meaningless",
                stacklevel=2,
            )
        hs = ph.significant_wave_height(spectrum, grid, group_velocities)
        return att.kohout2014(
            self.calm_rate, self.rough_slope, hs, grid.angular_frequencies
        )


@attrs.frozen
class VaryingStepFunction:
    """Step function read from the ice coefficients of a grid cell.

    All four rates and three cutoffs must be non-zero.

    """

    rates: tuple[float, float, float, float]
    cutoffs: tuple[float, float, float]

    def __attrs_post_init__(self):
        if 0 in self.rates or 0 in self.cutoffs:
            raise errors.missing_parameters()

    def attenuation(self, grid, spectrum, group_velocities):
        # The last rate applies to every frequency above the last cutoff.
        cutoffs = (*self.cutoffs, np.inf)
        return att.step_function(self.rates, cutoffs, grid.angular_frequencies)


@attrs.frozen
class StationaryStepFunction:
    table: StepTable

    def __attrs_post_init__(self):
        self.table.check()

    def attenuation(self, grid, spectrum, group_velocities):
        return att.step_function(
            self.table.rates, self.table.cutoffs, grid.angular_frequencies
        )


@attrs.frozen
class Doble2015:
    thickness: float

    def attenuation(self, grid, spectrum, group_velocities):
        return att.doble2015(self.thickness, grid.angular_frequencies)


@attrs.frozen
class FloeSizeFit:
    thickness: float
    floe_diameter: float

    def attenuation(self, grid, spectrum, group_velocities):
        return att.floe_size_fit(
            self.thickness, self.floe_diameter, grid.angular_frequencies
        )


Parameterisation: typing.TypeAlias = (
    UniformRate
    | Wadhams1988
    | PeriodPolynomial
    | KohoutMeylan2008
    | Kohout2014
    | VaryingStepFunction
    | StationaryStepFunction
    | Doble2015
    | FloeSizeFit
)


def build_parameterisation(
    method: att.IceAttenuationMethod,
    coefficients: IceCoefficients,
    step_table: StepTable | None = None,
) -> Parameterisation:
    """Select the parameterisation of a method and bind its coefficients.

    Parameters
    ----------
    method : att.IceAttenuationMethod
    coefficients : IceCoefficients
        Coefficients of the grid cell
    step_table : StepTable | None
        Only used, and then required, by `STATIONARY_STEPS`

    Returns
    -------
    Parameterisation

    Raises
    ------
    errors.IceConfigurationError
        If a step function is missing required coefficients.

    """
    c = coefficients
    match method:
        case att.IceAttenuationMethod.WADHAMS_1988:
            return Wadhams1988(c.ic1, c.ic2)
        case att.IceAttenuationMethod.PERIOD_POLYNOMIAL:
            return PeriodPolynomial((c.ic1, c.ic2, c.ic3, c.ic4, c.ic5))
        case att.IceAttenuationMethod.KOHOUT_MEYLAN_2008:
            return KohoutMeylan2008(c.ic1)
        case att.IceAttenuationMethod.KOHOUT_2014:
            return Kohout2014(c.ic1, c.ic2)
        case att.IceAttenuationMethod.VARYING_STEPS:
            return VaryingStepFunction(
                (c.ic1, c.ic2, c.ic3, c.ic4), (c.ic5, c.ic6, c.ic7)
            )
        case att.IceAttenuationMethod.STATIONARY_STEPS:
            if step_table is None:
                raise errors.missing_parameters("ICE STEP FUNCTION TABLE")
            return StationaryStepFunction(step_table)
        case att.IceAttenuationMethod.DOBLE_2015:
            return Doble2015(c.ic1)
        case att.IceAttenuationMethod.FLOE_SIZE_FIT:
            return FloeSizeFit(c.ic1, c.ic5)
        case _:
            return UniformRate(c.ic1)
