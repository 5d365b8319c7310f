"""
Factory Registry: projection name to constructor.

Each projection family registers a constructor, a callable turning
`ProjectionParameters` into a ready `Projection`, under its name. The
process-wide registry is filled while `projections` is imported and frozen
right after, so lookups afterwards are plain reads of an unchanging dict.

Registering new families after the registry froze is not supported. Code
that needs its own set of families builds a separate `ProjectionRegistry`.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from common.logging_config import get_logger
from projections.envelope import Projection
from projections.exceptions import MalformedParameter, RegistryError, UnknownProjection
from projections.parameters import ParameterStore, parse_parameters
from projections.projection_parameters import ProjectionParameters
from projections.strategy import ProjectionStrategy

logger = get_logger(__name__)

Constructor = Callable[[ProjectionParameters], Projection]
StrategyFactory = Callable[[ProjectionParameters], ProjectionStrategy]


@dataclass(frozen=True)
class RegistryEntry:
    """A registered projection family."""
    name: str
    constructor: Constructor
    description: str = ""


class ProjectionRegistry:
    """Mapping from projection name to constructor.

    Examples
    --------
    >>> registry = ProjectionRegistry()
    >>> registry.register("bipc", bipc_constructor, "Bipolar conic of western hemisphere")
    >>> projection = registry.create("bipc", params)
    """

    def __init__(self):
        self._entries: Dict[str, RegistryEntry] = {}
        self._frozen = False

    def register(self, name: str, constructor: Constructor, description: str = "") -> None:
        """Register a projection family.

        Raises
        ------
        RegistryError
            If `name` is already registered or the registry is frozen.
        """
        if self._frozen:
            raise RegistryError(f"Cannot register '{name}': registry is frozen")
        if name in self._entries:
            raise RegistryError(f"Projection '{name}' is already registered")
        self._entries[name] = RegistryEntry(name, constructor, description)
        logger.debug("Registered projection '%s'", name)

    def freeze(self) -> None:
        """Refuse further registrations."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def create(self, name: str, params: ProjectionParameters) -> Projection:
        """Construct the projection registered under `name`.

        Raises
        ------
        UnknownProjection
            If `name` is not registered.
        """
        entry = self._entries.get(name)
        if entry is None:
            raise UnknownProjection(name)
        return entry.constructor(params)

    def describe(self, name: str) -> str:
        entry = self._entries.get(name)
        if entry is None:
            raise UnknownProjection(name)
        return entry.description

    def names(self) -> List[str]:
        return sorted(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)


def family_constructor(
    name: str,
    spheroid: StrategyFactory,
    ellipsoid: Optional[StrategyFactory] = None,
    description: str = "",
) -> Constructor:
    """Build a constructor that dispatches on the figure of the Earth.

    Parameters
    ----------
    name : str
        Family name, stored on the created projection.
    spheroid : callable
        Builds the spherical strategy from parameters.
    ellipsoid : callable, optional
        Builds the ellipsoidal strategy. A family without one is
        spherical only: ellipsoidal parameters are coerced to a sphere of
        the same semi-major axis.
    description : str
        Human-readable description.

    Returns
    -------
    callable
        ``(ProjectionParameters) -> Projection``
    """
    def construct(params: ProjectionParameters) -> Projection:
        if params.is_spherical:
            strategy = spheroid(params)
        elif ellipsoid is not None:
            strategy = ellipsoid(params)
        else:
            logger.info(
                "Projection '%s' is spherical only; ignoring eccentricity %.6g",
                name, params.eccentricity
            )
            params = params.as_sphere()
            strategy = spheroid(params)
        return Projection(params=params, strategy=strategy, name=name, description=description)

    return construct


def create_projection(text: str, registry: Optional[ProjectionRegistry] = None) -> Projection:
    """Parse a parameter list and build the projection it names with ``proj=``.

    Parameters
    ----------
    text : str
        Parameter list, e.g. ``"+proj=bipc +bns"``.
    registry : ProjectionRegistry, optional
        Registry to look the name up in; defaults to the process-wide one.

    Raises
    ------
    MalformedParameter
        If ``proj=`` is missing or a value does not parse.
    UnknownProjection
        If the name is not registered.
    """
    store = parse_parameters(text)
    return create_from_store(store, registry)


def create_from_store(store: ParameterStore, registry: Optional[ProjectionRegistry] = None) -> Projection:
    name = store.as_string("proj")
    if not name:
        raise MalformedParameter("Parameter list does not name a projection (proj=)", key="proj")
    if registry is None:
        from projections import default_registry as registry
    params = ProjectionParameters.from_store(store)
    return registry.create(name, params)
