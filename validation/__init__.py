"""
Validation Framework for the Projection Engine.

This module provides consistency checks for projection families and a
comparison against the PROJ library.
"""

from validation.projection_checks import (
    ValidationResult,
    ConsistencyViolation,
    ProjectionConsistencyChecker,
    sample_grid,
)

from validation.reference import (
    proj_definition,
    reference_forward,
    compare_with_reference,
)

__all__ = [
    "ValidationResult",
    "ConsistencyViolation",
    "ProjectionConsistencyChecker",
    "sample_grid",
    "proj_definition",
    "reference_forward",
    "compare_with_reference",
]
