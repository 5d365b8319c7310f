"""
Projection Engine.

Converts geographic coordinates to planar coordinates under a named map
projection, and back. All transforms in the system go through this
package:

- Parameter Store: parsing of ``+key=value`` parameter lists
- Projection Parameters: figure of the Earth, scale, offsets, units
- Forward/Inverse Envelope: `Projection`, shared by every family
- Factory Registry: projection name to constructor
- Projection families: bipolar oblique conic (``bipc``), Mercator (``merc``)

The process-wide `default_registry` is populated when this package is
imported and frozen immediately after.

Examples
--------
>>> import math
>>> from projections import create_projection
>>> projection = create_projection("+proj=bipc +bns")
>>> x, y = projection.forward(math.radians(-100.0), math.radians(40.0))
"""

from projections.exceptions import (
    ProjectionError,
    MalformedParameter,
    UnknownProjection,
    OutOfDomain,
    ConvergenceFailure,
    RegistryError,
)

from projections.parameters import (
    ParameterToken,
    ParameterStore,
    parse_parameters,
)

from projections.projection_parameters import ProjectionParameters
from projections.strategy import ProjectionStrategy, clamped_acos, clamped_asin
from projections.envelope import Projection

from projections.registry import (
    ProjectionRegistry,
    family_constructor,
    create_projection,
    create_from_store,
)

from projections.families import register_builtin_families

default_registry = ProjectionRegistry()
register_builtin_families(default_registry)
default_registry.freeze()

__all__ = [
    # Errors
    "ProjectionError",
    "MalformedParameter",
    "UnknownProjection",
    "OutOfDomain",
    "ConvergenceFailure",
    "RegistryError",
    # Parameters
    "ParameterToken",
    "ParameterStore",
    "parse_parameters",
    "ProjectionParameters",
    # Strategy and envelope
    "ProjectionStrategy",
    "clamped_acos",
    "clamped_asin",
    "Projection",
    # Registry
    "ProjectionRegistry",
    "family_constructor",
    "create_projection",
    "create_from_store",
    "default_registry",
]
