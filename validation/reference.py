"""
Comparison against the PROJ library.

For families that PROJ defines with the same formulas, the forward
transform must agree with PROJ to well below a millimetre. The comparison
goes through pyproj, using the projection's own parameter text so both
sides see the same definition.
"""

from typing import Tuple
import numpy as np
from numpy.typing import NDArray
from pyproj import CRS, Transformer

from common.logging_config import get_logger
from projections.batch import forward_batch
from projections.envelope import Projection
from validation.projection_checks import ValidationResult

logger = get_logger(__name__)

# Keys that fix the figure of the Earth. PROJ and this package default to
# different ellipsoids when none is given.
_FIGURE_KEYS = ("R", "a", "b", "rf", "f", "es", "e", "ellps")


def proj_definition(projection: Projection) -> str:
    """PROJ definition string equivalent to `projection`."""
    params = projection.params
    text = params.store.to_text()
    if not any(key in params.store for key in _FIGURE_KEYS) and params.ellipsoid_name:
        text += f" +ellps={params.ellipsoid_name}"
    return text


def reference_transformer(projection: Projection) -> Transformer:
    """pyproj transformer from the projection's geographic CRS to the projection."""
    crs = CRS.from_proj4(proj_definition(projection))
    return Transformer.from_crs(crs.geodetic_crs, crs, always_xy=True)


def reference_forward(
    projection: Projection,
    lons_deg: NDArray[np.float64],
    lats_deg: NDArray[np.float64],
) -> Tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Forward transform computed by PROJ, inputs in degrees."""
    transformer = reference_transformer(projection)
    x, y = transformer.transform(np.asarray(lons_deg, dtype=np.float64),
                                 np.asarray(lats_deg, dtype=np.float64))
    return np.asarray(x), np.asarray(y)


def compare_with_reference(
    projection: Projection,
    lons_deg: NDArray[np.float64],
    lats_deg: NDArray[np.float64],
    tolerance: float = 1e-6,
) -> ValidationResult:
    """Compare the forward transform against PROJ.

    Parameters
    ----------
    projection : Projection
        Projection under test.
    lons_deg, lats_deg : ndarray
        Sample points in degrees.
    tolerance : float
        Maximum allowed difference, in the projection's linear unit.

    Returns
    -------
    ValidationResult
        Passed if every point inside the domain agrees within `tolerance`.
    """
    lons_deg = np.asarray(lons_deg, dtype=np.float64).ravel()
    lats_deg = np.asarray(lats_deg, dtype=np.float64).ravel()

    ours = forward_batch(projection, np.radians(lons_deg), np.radians(lats_deg))
    ref_x, ref_y = reference_forward(projection, lons_deg, lats_deg)

    ok = ours.ok & np.isfinite(ref_x) & np.isfinite(ref_y)
    difference = np.hypot(ours.first[ok] - ref_x[ok], ours.second[ok] - ref_y[ok])
    max_difference = float(np.max(difference)) if difference.size else 0.0
    passed = bool(difference.size) and max_difference <= tolerance

    logger.info("Reference comparison for %s: max difference %.3e over %d points",
                projection.name, max_difference, int(difference.size))

    return ValidationResult(
        test_name="reference_comparison",
        passed=passed,
        message=f"PROJ comparison: max difference {max_difference:.3e}",
        details={
            'definition': proj_definition(projection),
            'max_difference': max_difference,
            'tolerance': tolerance,
            'num_compared': int(difference.size),
        }
    )
