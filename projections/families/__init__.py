"""
Built-in projection families.

Each family module exposes ``NAME``, ``DESCRIPTION`` and its strategy
factories; `register_builtin_families` adds them all to a registry.
"""

from projections.families import bipc, merc
from projections.registry import ProjectionRegistry, family_constructor


def register_builtin_families(registry: ProjectionRegistry) -> None:
    """Register every built-in family in `registry`."""
    registry.register(
        bipc.NAME,
        family_constructor(bipc.NAME, spheroid=bipc.create_strategy, description=bipc.DESCRIPTION),
        bipc.DESCRIPTION,
    )
    registry.register(
        merc.NAME,
        family_constructor(
            merc.NAME,
            spheroid=merc.create_spherical,
            ellipsoid=merc.create_ellipsoidal,
            description=merc.DESCRIPTION,
        ),
        merc.DESCRIPTION,
    )


__all__ = ["register_builtin_families", "bipc", "merc"]
