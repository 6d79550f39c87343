"""Attenuation parameterisations.

All functions return amplitude attenuation rates (the `WN_I` profile), in
m^-1, one per angular frequency. Most parameterisations are fits of the
energy attenuation rate, which is twice the amplitude attenuation rate.

"""

import enum
import warnings

import numpy as np

from .constants import MEYLAN_A, MEYLAN_B, PI_2


def uniform(rate: float, angular_frequencies: np.ndarray) -> np.ndarray:
    r"""Attenuation independent of frequency.

    Parameters
    ----------
    rate : float
        Amplitude attenuation, in m^-1
    angular_frequencies : np.ndarray
        Angular frequencies, in rad s^-1

    Returns
    -------
    np.ndarray
        Amplitude attenuation, in m^-1

    """
    return np.full(np.shape(angular_frequencies), rate, dtype=float)


def wadhams1988(
    slope: float, offset: float, angular_frequencies: np.ndarray
) -> np.ndarray:
    r"""Exponential fit in wave period.

    Parameters
    ----------
    slope : float
        Period coefficient, in s^-1
    offset : float
        Constant term
    angular_frequencies : np.ndarray
        Angular frequencies, in rad s^-1

    Returns
    -------
    np.ndarray
        Amplitude attenuation, in m^-1

    Notes
    -----
    The energy attenuation is defined as:

    .. math::

        \alpha_j = \exp(-c_1 T_j - c_2).

    References
    ----------
    .. [1] Wadhams, P., V. A. Squire, D. J. Goodman, A. M. Cowan, and S. C.
    Moore (1988). The attenuation rates of ocean waves in the marginal ice
    zone. Journal of Geophysical Research 93(C6), pp. 6799-6818.

    """
    alpha = np.exp(-slope * PI_2 / angular_frequencies - offset)
    return alpha / 2


def period_polynomial(
    coefficients: tuple[float, float, float, float, float],
    angular_frequencies: np.ndarray,
) -> np.ndarray:
    r"""Quartic polynomial in wave period.

    Parameters
    ----------
    coefficients : tuple of 5 float
        Polynomial coefficients, by increasing degree
    angular_frequencies : np.ndarray
        Angular frequencies, in rad s^-1

    Returns
    -------
    np.ndarray
        Amplitude attenuation, in m^-1

    Notes
    -----
    The energy attenuation is defined as:

    .. math::

        \alpha_j = c_1 + c_2 T_j + c_3 {T_j}^2 + c_4 {T_j}^3 + c_5 {T_j}^4.

    """
    c1, c2, c3, c4, c5 = coefficients
    periods = PI_2 / angular_frequencies
    alpha = (c1 + c2 * periods + c3 * periods**2) + (
        c4 * periods**3 + c5 * periods**4
    )
    return alpha / 2


def kohout_meylan2008(
    thickness: float, angular_frequencies: np.ndarray
) -> np.ndarray:
    r"""Quadratic fit in thickness and period.

    Parameters
    ----------
    thickness : float
        Ice thickness, in m
    angular_frequencies : np.ndarray
        Angular frequencies, in rad s^-1

    Returns
    -------
    np.ndarray
        Amplitude attenuation, in m^-1

    Notes
    -----
    The fit of Horvat and Tziperman (2015) to the model of Kohout and Meylan
    (2008) reads

    .. math::

        \ln\alpha_j = -0.3203 + 2.058 h - 0.9375 T_j - 0.4269 h^2
        + 0.1566 h T_j + 0.0006 {T_j}^2.

    """
    periods = PI_2 / angular_frequencies
    karg1 = -0.3203 + 2.058 * thickness - 0.9375 * periods
    karg2 = -0.4269 * thickness**2 + 0.1566 * thickness * periods
    karg3 = 0.0006 * periods**2
    alpha = np.exp(karg1 + karg2 + karg3)
    return alpha / 2


def kohout2014(
    calm_rate: float,
    rough_slope: float,
    significant_wave_height: float,
    angular_frequencies: np.ndarray,
) -> np.ndarray:
    r"""Wave-height dependent attenuation.

    Kohout et al. (2014) observed a linear decay of the significant wave
    height with distance for large waves, and an exponential decay for
    smaller waves.

    Parameters
    ----------
    calm_rate : float
        Amplitude attenuation when the significant wave height is at most
        3 m, in m^-1
    rough_slope : float
        Rate of decrease of the significant wave height with distance when
        it exceeds 3 m, dimensionless
    significant_wave_height : float
        Significant wave height, in m
    angular_frequencies : np.ndarray
        Angular frequencies, in rad s^-1

    Returns
    -------
    np.ndarray
        Amplitude attenuation, in m^-1

    References
    ----------
    .. [1] Kohout, A. L., M. J. M. Williams, S. M. Dean, and M. H. Meylan
    (2014). Storm-induced sea-ice breakup and the implications for ice extent.
    Nature 509, pp. 604-607.

    """
    if significant_wave_height <= 3:
        rate = calm_rate
    else:
        rate = rough_slope / significant_wave_height
    return uniform(rate, angular_frequencies)


def step_function(
    rates: np.ndarray, cutoffs: np.ndarray, angular_frequencies: np.ndarray
) -> np.ndarray:
    """Piecewise constant attenuation in frequency.

    For each frequency, the rate is that of the first cutoff strictly above
    the frequency. Frequencies above every cutoff are not attenuated.

    Parameters
    ----------
    rates : np.ndarray
        Amplitude attenuation of each step, in m^-1
    cutoffs : np.ndarray
        Upper frequency bound of each step, in Hz, same size as `rates`
    angular_frequencies : np.ndarray
        Angular frequencies, in rad s^-1

    Returns
    -------
    np.ndarray
        Amplitude attenuation, in m^-1

    """
    rates, cutoffs = np.asarray(rates, dtype=float), np.asarray(cutoffs, dtype=float)
    frequencies = np.asarray(angular_frequencies) / PI_2
    if cutoffs.size == 0:
        return np.zeros(frequencies.shape)
    below = frequencies[:, None] < cutoffs[None, :]
    matched = below.any(axis=1)
    first = below.argmax(axis=1)
    return np.where(matched, rates[first], 0.0)


def doble2015(thickness: float, angular_frequencies: np.ndarray) -> np.ndarray:
    r"""Power law in frequency, linear in thickness.

    Parameters
    ----------
    thickness : float
        Ice thickness, in m
    angular_frequencies : np.ndarray
        Angular frequencies, in rad s^-1

    Returns
    -------
    np.ndarray
        Amplitude attenuation, in m^-1

    Notes
    -----
    The energy attenuation is defined as:

    .. math::

        \alpha_j = 0.2 {f_j}^{2.13} h.

    References
    ----------
    .. [1] Doble, M. J., G. De Carolis, M. H. Meylan, J.-R. Bidlot, and P.
    Wadhams (2015). Relating wave attenuation to pancake ice thickness, using
    field measurements and model results. Geophysical Research Letters 42,
    pp. 4473-4481.

    """
    frequencies = angular_frequencies / PI_2
    alpha = 0.2 * frequencies**2.13 * thickness
    return alpha / 2


def _floe_size_polynomial(period, radius, thickness):
    return (
        -0.26982
        + 1.5043 * thickness
        - 0.70112 * thickness**2
        + 0.011037 * radius
        - 0.0073178 * radius * thickness
        + 0.00036604 * radius * thickness**2
        - 0.00045789 * radius**2
        + 1.8034e-05 * radius**2 * thickness
        - 0.7246 * period
        + 0.12068 * period * thickness
        - 0.0051311 * period * thickness**2
        + 0.0059241 * period * radius
        + 0.00010771 * period * radius * thickness
        - 1.0171e-05 * period * radius**2
        + 0.0035412 * period**2
        - 0.0031893 * period**2 * thickness
        - 0.00010791 * period**2 * radius
        + 0.00031073 * period**3
        + 1.5996e-06 * radius**3
        + 0.090994 * thickness**3
    )


def floe_size_fit(
    thickness: float, floe_diameter: float, angular_frequencies: np.ndarray
) -> np.ndarray:
    r"""Cubic fit in thickness, floe radius and period.

    Thickness is bounded to [0.1, 3.5] m and floe radius to [2.5, 100] m,
    the range of the fitted data. The fit is blended with the long-period
    attenuation of Meylan et al. (2014).

    Parameters
    ----------
    thickness : float
        Ice thickness, in m
    floe_diameter : float
        Floe diameter, in m
    angular_frequencies : np.ndarray
        Angular frequencies, in rad s^-1

    Returns
    -------
    np.ndarray
        Amplitude attenuation, in m^-1

    Notes
    -----
    With :math:`P` the cubic polynomial fit and :math:`T_j` the period,

    .. math::

        \alpha_j = 10^{\min(P, 0)} + \frac{a}{{T_j}^2} + \frac{b}{{T_j}^4}
        \quad \text{if } 5 < T_j < 20,

    :math:`\alpha_j = a {T_j}^{-2} + b {T_j}^{-4}` if :math:`T_j > 20`, and
    :math:`\alpha_j = 10^{\min(P, 0)}` otherwise. The value is used as the
    amplitude attenuation directly.

    """
    thickness = min(max(thickness, 0.1), 3.5)
    radius = min(max(floe_diameter / 2, 2.5), 100.0)
    periods = PI_2 / np.asarray(angular_frequencies, dtype=float)

    exponents = np.minimum(_floe_size_polynomial(periods, radius, thickness), 0.0)
    attenuations = 10.0**exponents
    meylan = MEYLAN_A / periods**2 + MEYLAN_B / periods**4

    mid = (periods > 5.0) & (periods < 20.0)
    attenuations[mid] = attenuations[mid] + meylan[mid]
    long_periods = periods > 20.0
    attenuations[long_periods] = meylan[long_periods]
    return attenuations


class IceAttenuationMethod(enum.IntEnum):
    DEFAULT = 0
    WADHAMS_1988 = 1
    PERIOD_POLYNOMIAL = 2
    KOHOUT_MEYLAN_2008 = 3
    KOHOUT_2014 = 4
    VARYING_STEPS = 5
    STATIONARY_STEPS = 6
    DOBLE_2015 = 7
    FLOE_SIZE_FIT = 8

    @classmethod
    def from_code(cls, code: int) -> "IceAttenuationMethod":
        """Return the method matching an integer selector.

        Selectors without a matching method fall back to `DEFAULT`, a
        uniform attenuation read from the first ice coefficient.

        """
        try:
            return cls(code)
        except ValueError:
            warnings.warn(
                f"Unknown attenuation method {code}, using uniform attenuation",
                stacklevel=2,
            )
            return cls.DEFAULT
