"""
Batch and gridded transforms.

Point-by-point transforms raise on the first failure. Over an array, one
bad point should not discard the rest, so these helpers report failures as
values: each point gets a `TransformStatus`, and failed points are NaN.

Inputs may be anything numpy can broadcast, or `xarray.DataArray`s, in
which case the outputs are DataArrays on the same coordinates.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Callable, Tuple, Union
import numpy as np
from numpy.typing import NDArray
import xarray as xr

from common.logging_config import get_logger
from projections.envelope import Projection
from projections.exceptions import ConvergenceFailure, OutOfDomain

logger = get_logger(__name__)

ArrayLike = Union[NDArray[np.float64], xr.DataArray, Any]


class TransformStatus(IntEnum):
    """Outcome of transforming a single point."""
    OK = 0
    OUT_OF_DOMAIN = 1
    NO_CONVERGENCE = 2


@dataclass
class BatchResult:
    """Result of a batch transform.

    Attributes
    ----------
    first, second : ndarray or DataArray
        Output coordinates: (x, y) for a forward transform, (lon, lat) for
        an inverse one. NaN where the point failed.
    status : ndarray or DataArray
        `TransformStatus` code per point.
    """
    first: ArrayLike
    second: ArrayLike
    status: ArrayLike

    @property
    def ok(self) -> NDArray[np.bool_]:
        """Boolean mask of successfully transformed points."""
        return np.asarray(self.status) == TransformStatus.OK

    @property
    def failure_count(self) -> int:
        return int(np.count_nonzero(~self.ok))

    def __iter__(self):
        return iter((self.first, self.second))


def _run(
    transform: Callable[[float, float], Tuple[float, float]],
    first_in: ArrayLike,
    second_in: ArrayLike,
    label: str,
) -> BatchResult:
    if isinstance(first_in, xr.DataArray) and isinstance(second_in, xr.DataArray):
        first_in, second_in = xr.broadcast(first_in, second_in)
        template = first_in
    elif isinstance(first_in, xr.DataArray):
        template = first_in
        second_in = np.broadcast_to(np.asarray(second_in, dtype=np.float64), template.shape)
    elif isinstance(second_in, xr.DataArray):
        template = second_in
        first_in = np.broadcast_to(np.asarray(first_in, dtype=np.float64), template.shape)
    else:
        template = None

    a, b = np.broadcast_arrays(
        np.asarray(first_in, dtype=np.float64), np.asarray(second_in, dtype=np.float64)
    )
    out_first = np.full(a.shape, np.nan)
    out_second = np.full(a.shape, np.nan)
    status = np.zeros(a.shape, dtype=np.int8)

    for index in np.ndindex(a.shape):
        try:
            out_first[index], out_second[index] = transform(float(a[index]), float(b[index]))
        except OutOfDomain as exc:
            status[index] = TransformStatus.OUT_OF_DOMAIN
            logger.debug("%s failed at %s: %s", label, index, exc)
        except ConvergenceFailure as exc:
            status[index] = TransformStatus.NO_CONVERGENCE
            logger.debug("%s failed at %s: %s", label, index, exc)

    failures = int(np.count_nonzero(status))
    if failures:
        logger.warning("%s: %d of %d points failed", label, failures, status.size)

    if template is not None:
        def wrap(values):
            return xr.DataArray(values, coords=template.coords, dims=template.dims)
        return BatchResult(wrap(out_first), wrap(out_second), wrap(status))
    return BatchResult(out_first, out_second, status)


def forward_batch(projection: Projection, lons: ArrayLike, lats: ArrayLike) -> BatchResult:
    """Project arrays of coordinates.

    Parameters
    ----------
    projection : Projection
        Projection to use.
    lons, lats : array-like or DataArray
        Coordinates in radians; broadcast against each other.

    Returns
    -------
    BatchResult
        (x, y) in the projection's linear unit plus per-point status.
    """
    return _run(projection.forward, lons, lats, f"{projection.name or 'projection'} forward")


def inverse_batch(projection: Projection, xs: ArrayLike, ys: ArrayLike) -> BatchResult:
    """Inverse-project arrays of planar coordinates to (lon, lat) radians."""
    return _run(projection.inverse, xs, ys, f"{projection.name or 'projection'} inverse")


def forward_batch_degrees(projection: Projection, lons_deg: ArrayLike, lats_deg: ArrayLike) -> BatchResult:
    """`forward_batch` taking degrees."""
    return forward_batch(projection, np.radians(lons_deg), np.radians(lats_deg))
