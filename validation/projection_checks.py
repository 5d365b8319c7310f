"""
Consistency Tests for Projection Families.

This module provides checks that any projection, built in or added later,
must satisfy regardless of its formulas.

Test Categories
---------------
1. Round trip (inverse of forward recovers the input)
2. Finiteness (successful transforms never produce NaN or infinity)
3. Statelessness (concurrent use gives the same results as sequential use)
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple, Union
import numpy as np
from numpy.typing import NDArray

from common.logging_config import get_logger
from projections.batch import forward_batch, inverse_batch
from projections.envelope import Projection
from projections.exceptions import ConvergenceFailure, OutOfDomain

logger = get_logger(__name__)

Outcome = Union[Tuple[float, float], str]


@dataclass
class ValidationResult:
    """Result of a validation check.

    Attributes
    ----------
    test_name : str
        Name of the test.
    passed : bool
        Whether the test passed.
    message : str
        Description of result.
    details : dict
        Additional details.
    """
    test_name: str
    passed: bool
    message: str
    details: Dict[str, Any]


class ConsistencyViolation(AssertionError):
    """Raised by a strict checker when a check fails."""


def sample_grid(
    lon_range_deg: Tuple[float, float] = (-180.0, 180.0),
    lat_range_deg: Tuple[float, float] = (-90.0, 90.0),
    num_lon: int = 37,
    num_lat: int = 19,
) -> Tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Regular lon/lat sample grid, flattened, in radians."""
    lons, lats = np.meshgrid(
        np.radians(np.linspace(*lon_range_deg, num_lon)),
        np.radians(np.linspace(*lat_range_deg, num_lat)),
    )
    return lons.ravel(), lats.ravel()


def _forward_outcome(projection: Projection, lon: float, lat: float) -> Outcome:
    try:
        return projection.forward(lon, lat)
    except (OutOfDomain, ConvergenceFailure) as exc:
        return type(exc).__name__


class ProjectionConsistencyChecker:
    """Checker for the internal consistency of a projection.

    Points outside the projection's domain are not violations; they are
    excluded from the comparison and counted in the result details.
    """

    def __init__(
        self,
        strict_mode: bool = False,
        log_violations: bool = True
    ):
        """Initialize projection checker.

        Parameters
        ----------
        strict_mode : bool
            If True, raise `ConsistencyViolation` on failed checks.
        log_violations : bool
            Whether to log failed checks.
        """
        self.strict_mode = strict_mode
        self.log_violations = log_violations
        self._logger = get_logger("ProjectionConsistencyChecker")

    def _report(self, result: ValidationResult) -> ValidationResult:
        if result.passed:
            self._logger.debug("%s passed: %s", result.test_name, result.message)
            return result
        if self.log_violations:
            self._logger.warning("%s failed: %s", result.test_name, result.message)
        if self.strict_mode:
            raise ConsistencyViolation(f"{result.test_name}: {result.message}")
        return result

    def check_all(
        self,
        projection: Projection,
        lons: NDArray[np.float64],
        lats: NDArray[np.float64],
        tolerance_rad: float = 1e-9,
    ) -> List[ValidationResult]:
        """Run all consistency checks on a set of sample points.

        Parameters
        ----------
        projection : Projection
            Projection under test.
        lons, lats : ndarray
            Sample coordinates in radians.
        tolerance_rad : float
            Round-trip tolerance in radians.

        Returns
        -------
        List[ValidationResult]
            Results of all checks.
        """
        return [
            self.check_round_trip(projection, lons, lats, tolerance_rad),
            self.check_finite_output(projection, lons, lats),
            self.check_concurrent_statelessness(projection, lons, lats),
        ]

    def check_round_trip(
        self,
        projection: Projection,
        lons: NDArray[np.float64],
        lats: NDArray[np.float64],
        tolerance_rad: float = 1e-9,
    ) -> ValidationResult:
        """Check that inverse(forward(p)) recovers p within `tolerance_rad`.

        The longitude error is scaled by cos(lat), so it is measured as a
        great-circle angle and vanishes at the poles where longitude is
        undefined.
        """
        lons = np.asarray(lons, dtype=np.float64).ravel()
        lats = np.asarray(lats, dtype=np.float64).ravel()

        projected = forward_batch(projection, lons, lats)
        ok = projected.ok
        recovered = inverse_batch(projection, projected.first[ok], projected.second[ok])
        inverse_failures = recovered.failure_count

        dlat = np.abs(recovered.second - lats[ok])
        dlon = np.abs(np.angle(np.exp(1j * (recovered.first - lons[ok]))))
        error = np.fmax(dlat, dlon * np.cos(lats[ok]))
        max_error = float(np.nanmax(error)) if error.size else 0.0
        num_violations = int(np.count_nonzero(error > tolerance_rad)) + inverse_failures

        return self._report(ValidationResult(
            test_name="round_trip",
            passed=num_violations == 0,
            message=f"Round trip check: {num_violations} violations, max error {max_error:.3e} rad",
            details={
                'max_error_rad': max_error,
                'tolerance_rad': tolerance_rad,
                'num_checked': int(np.count_nonzero(ok)),
                'num_out_of_domain': projected.failure_count,
                'num_inverse_failures': inverse_failures,
                'num_violations': num_violations,
            }
        ))

    def check_finite_output(
        self,
        projection: Projection,
        lons: NDArray[np.float64],
        lats: NDArray[np.float64],
    ) -> ValidationResult:
        """Check that every successful forward transform is finite."""
        projected = forward_batch(projection, lons, lats)
        ok = projected.ok
        finite = np.isfinite(projected.first[ok]) & np.isfinite(projected.second[ok])
        num_violations = int(np.count_nonzero(~finite))

        return self._report(ValidationResult(
            test_name="finite_output",
            passed=num_violations == 0,
            message=f"Finite output check: {num_violations} violations",
            details={
                'num_checked': int(np.count_nonzero(ok)),
                'num_out_of_domain': projected.failure_count,
                'num_violations': num_violations,
            }
        ))

    def check_concurrent_statelessness(
        self,
        projection: Projection,
        lons: NDArray[np.float64],
        lats: NDArray[np.float64],
        max_workers: int = 8,
    ) -> ValidationResult:
        """Check that one projection shared by many threads behaves as if used alone."""
        points = list(zip(np.asarray(lons, dtype=np.float64).ravel().tolist(),
                          np.asarray(lats, dtype=np.float64).ravel().tolist()))
        sequential = [_forward_outcome(projection, lon, lat) for lon, lat in points]

        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            concurrent = list(pool.map(lambda p: _forward_outcome(projection, *p), points))

        mismatches = [i for i, (a, b) in enumerate(zip(sequential, concurrent)) if a != b]

        return self._report(ValidationResult(
            test_name="concurrent_statelessness",
            passed=not mismatches,
            message=f"Concurrency check: {len(mismatches)} mismatches over {len(points)} points",
            details={
                'num_points': len(points),
                'max_workers': max_workers,
                'mismatched_indices': mismatches[:10],
            }
        ))
