from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from ..model import model as md
from ..model.source import IceSourceConfig, IceSourceTerm, SourceTerm


def ice_source_term(
    spectrum: np.ndarray,
    depth: float,
    group_velocities: np.ndarray,
    config: IceSourceConfig,
    coefficients: md.IceCoefficients | None = None,
) -> SourceTerm:
    """Compute the ice source term of a single spectrum.

    Parameters
    ----------
    spectrum : array_like of float
        Action density, the direction index varying fastest
    depth : float
        Water depth, in m
    group_velocities : 1d array_like of float
        Group velocities, in m s^-1, one per frequency
    config : IceSourceConfig
        Run-wide settings
    coefficients : md.IceCoefficients | None
        Ice coefficients. If `None`, all coefficients are zero.

    Returns
    -------
    SourceTerm

    See Also
    --------
    model.source.IceSourceTerm.compute

    """
    if coefficients is None:
        coefficients = md.IceCoefficients()
    return IceSourceTerm(config).compute(
        spectrum, depth, group_velocities, coefficients
    )


def ice_source_term_at(
    spectrum: np.ndarray,
    depth: float,
    group_velocities: np.ndarray,
    ix: int,
    iy: int,
    config: IceSourceConfig,
    fields: md.IceFields,
) -> SourceTerm:
    """Compute the ice source term of grid cell `(ix, iy)`.

    The coefficients of the cell are read from `fields`; fields that are not
    supplied read as zero.

    """
    return ice_source_term(
        spectrum, depth, group_velocities, config, fields.coefficients_at(ix, iy)
    )


def ice_source_terms(
    spectra: np.ndarray,
    depths: np.ndarray | float,
    group_velocities: np.ndarray,
    cells: Sequence[tuple[int, int]],
    config: IceSourceConfig,
    fields: md.IceFields,
) -> SourceTerm:
    """Compute the ice source terms of several grid cells.

    Cells are evaluated independently of each other.

    Parameters
    ----------
    spectra : 2d array_like of float
        One action density spectrum per cell, shape `(n_cells, n_spectral)`
    depths : array_like of float
        Water depths, in m, one per cell or a single value
    group_velocities : 2d array_like of float
        Group velocities, in m s^-1, shape `(n_cells, n_frequencies)`
    cells : sequence of (int, int)
        Indices of the grid cells
    config : IceSourceConfig
    fields : md.IceFields

    Returns
    -------
    SourceTerm
        Sources and diagonals stacked along the first axis.

    Raises
    ------
    ValueError
        If the number of spectra, group velocities and cells differ.

    """
    spectra = np.asarray(spectra, dtype=float)
    group_velocities = np.asarray(group_velocities, dtype=float)
    n_cells = len(cells)
    if n_cells == 0:
        raise ValueError("At least one cell is required")
    if len(spectra) != n_cells or len(group_velocities) != n_cells:
        raise ValueError(
            f"Got {len(spectra)} spectra and {len(group_velocities)} group "
            f"velocity profiles for {n_cells} cells"
        )
    depths = np.broadcast_to(np.asarray(depths, dtype=float), (n_cells,))

    kernel = IceSourceTerm(config)
    terms = [
        kernel.compute(_spec, _depth, _cg, fields.coefficients_at(ix, iy))
        for _spec, _depth, _cg, (ix, iy) in zip(
            spectra, depths, group_velocities, cells
        )
    ]
    return SourceTerm(
        np.stack([term.source for term in terms]),
        np.stack([term.diagonal for term in terms]),
    )
