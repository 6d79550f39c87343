"""Integral quantities of discretised wave spectra."""

from __future__ import annotations

import typing

import numpy as np

if typing.TYPE_CHECKING:
    from ..model import model


def frequency_bandwidths(angular_frequencies: np.ndarray) -> np.ndarray:
    """Width of the frequency bins.

    Interior bins extend halfway to their neighbours. The first and last bins
    only extend halfway to their single neighbour. On a geometric grid of
    increment `r`, this gives `0.5 * sigma * (r - 1 / r)` in the interior.

    Parameters
    ----------
    angular_frequencies : np.ndarray
        Increasing angular frequencies, in rad s^-1

    Returns
    -------
    np.ndarray
        Bin widths, in rad s^-1

    """
    sigma = np.asarray(angular_frequencies, dtype=float)
    if sigma.size < 2:
        # A single bin has no neighbour to measure against.
        return np.ones(sigma.size)
    steps = np.diff(sigma)
    widths = np.empty_like(sigma)
    widths[0] = steps[0] / 2
    widths[-1] = steps[-1] / 2
    widths[1:-1] = (steps[:-1] + steps[1:]) / 2
    return widths


def frequency_spectrum(
    spectrum: np.ndarray, n_frequencies: int, n_directions: int
) -> np.ndarray:
    """Sum a frequency-direction spectrum over directions.

    Parameters
    ----------
    spectrum : np.ndarray
        Action density, of size `n_frequencies * n_directions`, the direction
        index varying fastest
    n_frequencies : int
    n_directions : int

    Returns
    -------
    np.ndarray
        One value per frequency

    """
    return np.reshape(spectrum, (n_frequencies, n_directions)).sum(axis=1)


def mean_energy(
    spectrum: np.ndarray, grid: model.SpectralGrid, group_velocities: np.ndarray
) -> float:
    eb = frequency_spectrum(spectrum, grid.n_frequencies, grid.n_directions)
    return float(np.sum(eb * grid.energy_weights / group_velocities))


def significant_wave_height(
    spectrum: np.ndarray, grid: model.SpectralGrid, group_velocities: np.ndarray
) -> float:
    """Significant wave height of an action density spectrum.

    Parameters
    ----------
    spectrum : np.ndarray
        Action density, of size `grid.n_spectral`
    grid : model.SpectralGrid
        Spectral discretisation
    group_velocities : np.ndarray
        Group velocities, in m s^-1, one per frequency

    Returns
    -------
    float
        Four times the square root of the mean energy, in m. A negative mean
        energy is treated as zero.

    """
    return 4 * np.sqrt(max(0.0, mean_energy(spectrum, grid, group_velocities)))
