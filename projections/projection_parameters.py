"""
Projection Parameters: the setup shared by every projection family.

`ProjectionParameters` is extracted once from a `ParameterStore` and is
immutable afterwards; every strategy built from it reads the same frozen
value. The figure of the Earth is resolved in the following order:

1. ``R=`` selects a sphere of that radius.
2. ``ellps=`` (default WGS84) selects a named ellipsoid.
3. ``a=`` overrides the semi-major axis. Given alone, without ``ellps=``
   and without a shape parameter, it describes a sphere.
4. One of ``b``, ``rf``, ``f``, ``es``, ``e`` overrides the shape.
"""

from dataclasses import dataclass, field, replace
import math

from common.logging_config import get_logger
from common.units import linear_unit_to_meter, UnitLookupError
from projections.ellipsoids import ELLIPSOIDS, WGS84Ellipsoid
from projections.exceptions import MalformedParameter
from projections.parameters import ParameterStore, parse_parameters

logger = get_logger(__name__)

_SHAPE_KEYS = ("b", "rf", "f", "es", "e")


@dataclass(frozen=True)
class ProjectionParameters:
    """Setup common to all projections.

    Attributes
    ----------
    semi_major_axis : float
        Equatorial radius (or sphere radius), in meters.
    eccentricity_squared : float
        First eccentricity squared; 0 for a sphere.
    scale_factor : float
        Scale factor k0 applied to the raw projected coordinates.
    false_easting, false_northing : float
        Offsets added after scaling, in meters.
    central_meridian : float
        Longitude of the projection origin (``lon_0``), radians.
    latitude_of_origin : float
        Latitude of the projection origin (``lat_0``), radians. Neither
        built-in family reads it (Mercator and bipc fix their own origins);
        it is resolved for families that need one and reaches PROJ through
        the store text in `validation.reference.proj_definition`.
    to_meter : float
        Meters per output linear unit.
    over : bool
        Disable longitude wrapping to [-π, π].
    name : str
        Projection name (``proj=``), if given.
    ellipsoid_name : str
        Name of the resolved figure of the Earth.
    store : ParameterStore
        The parameter list this value was built from; strategies read their
        own configuration from it.
    """
    semi_major_axis: float
    eccentricity_squared: float = 0.0
    scale_factor: float = 1.0
    false_easting: float = 0.0
    false_northing: float = 0.0
    central_meridian: float = 0.0
    latitude_of_origin: float = 0.0
    to_meter: float = 1.0
    over: bool = False
    name: str = ""
    ellipsoid_name: str = ""
    store: ParameterStore = field(default_factory=ParameterStore, compare=False, repr=False)

    def __post_init__(self):
        if not math.isfinite(self.semi_major_axis) or self.semi_major_axis <= 0:
            raise MalformedParameter(
                f"Semi-major axis must be positive, got {self.semi_major_axis}", key="a"
            )
        if not 0.0 <= self.eccentricity_squared < 1.0:
            raise MalformedParameter(
                f"Eccentricity squared must be in [0, 1), got {self.eccentricity_squared}",
                key="es"
            )
        if not math.isfinite(self.scale_factor) or self.scale_factor <= 0:
            raise MalformedParameter(
                f"Scale factor must be positive, got {self.scale_factor}", key="k_0"
            )
        if not math.isfinite(self.to_meter) or self.to_meter <= 0:
            raise MalformedParameter(
                f"Unit conversion factor must be positive, got {self.to_meter}", key="to_meter"
            )

    @property
    def is_spherical(self) -> bool:
        return self.eccentricity_squared == 0.0

    @property
    def eccentricity(self) -> float:
        return math.sqrt(self.eccentricity_squared)

    @property
    def flattening(self) -> float:
        return 1.0 - math.sqrt(1.0 - self.eccentricity_squared)

    @property
    def semi_minor_axis(self) -> float:
        return self.semi_major_axis * math.sqrt(1.0 - self.eccentricity_squared)

    def as_sphere(self) -> 'ProjectionParameters':
        """Copy of these parameters with the eccentricity forced to zero."""
        if self.is_spherical:
            return self
        return replace(self, eccentricity_squared=0.0)

    @classmethod
    def from_store(cls, store: ParameterStore) -> 'ProjectionParameters':
        """Extract the common setup from a parameter store.

        Raises
        ------
        MalformedParameter
            For an unknown ellipsoid or unit name, or an invalid shape.
        """
        a, es, ellipsoid_name = _resolve_figure(store)

        to_meter = store.as_real("to_meter")
        if to_meter is None:
            unit_id = store.as_string("units", "m")
            try:
                to_meter = linear_unit_to_meter(unit_id)
            except UnitLookupError as exc:
                raise MalformedParameter(str(exc), key="units", value=unit_id) from exc

        scale_factor = store.as_real("k_0")
        if scale_factor is None:
            scale_factor = store.as_real("k", 1.0)

        return cls(
            semi_major_axis=a,
            eccentricity_squared=es,
            scale_factor=scale_factor,
            false_easting=store.as_real("x_0", 0.0),
            false_northing=store.as_real("y_0", 0.0),
            central_meridian=store.as_angle("lon_0", 0.0),
            latitude_of_origin=store.as_angle("lat_0", 0.0),
            to_meter=to_meter,
            over=store.as_flag("over"),
            name=store.as_string("proj", ""),
            ellipsoid_name=ellipsoid_name,
            store=store,
        )

    @classmethod
    def from_text(cls, text: str) -> 'ProjectionParameters':
        return cls.from_store(parse_parameters(text))


def _resolve_figure(store: ParameterStore):
    """Return (a, es, name) for the figure of the Earth described by `store`."""
    radius = store.as_real("R")
    if radius is not None:
        return radius, 0.0, "sphere"

    name = store.as_string("ellps")
    if name is None:
        base = WGS84Ellipsoid
    else:
        try:
            base = ELLIPSOIDS[name]
        except KeyError:
            raise MalformedParameter(
                f"Unknown ellipsoid '{name}'. Known: {', '.join(sorted(ELLIPSOIDS))}",
                key="ellps", value=name
            ) from None

    a = store.as_real("a", base.a)
    es = base.e2

    if "b" in store:
        b = store.as_real("b")
        if b <= 0 or b > a:
            raise MalformedParameter(f"Semi-minor axis {b} invalid for a={a}", key="b")
        es = 1.0 - (b / a) ** 2
    elif "rf" in store:
        rf = store.as_real("rf")
        if rf <= 0:
            raise MalformedParameter(f"Inverse flattening must be positive, got {rf}", key="rf")
        f = 1.0 / rf
        es = f * (2.0 - f)
    elif "f" in store:
        f = store.as_real("f")
        es = f * (2.0 - f)
    elif "es" in store:
        es = store.as_real("es")
    elif "e" in store:
        es = store.as_real("e") ** 2
    elif "a" in store and name is None:
        logger.debug("Only a=%s given, using a sphere of that radius", a)
        return a, 0.0, "sphere"

    if es < 0:
        raise MalformedParameter(f"Eccentricity squared must not be negative, got {es}", key="es")
    return a, es, base.name if not any(k in store for k in _SHAPE_KEYS) else "custom"
