"""
Error kinds raised by the projection engine.

Every error derives from `ProjectionError` and also from the built-in
exception a caller would naturally catch for it, so ``except ValueError``
around a transform keeps working.
"""

from typing import Optional


class ProjectionError(Exception):
    """Base class for all projection engine errors."""


class MalformedParameter(ProjectionError, ValueError):
    """A parameter value could not be parsed as the type its key requires."""

    def __init__(self, message: str, key: Optional[str] = None, value: Optional[str] = None):
        super().__init__(message)
        self.key = key
        self.value = value


class UnknownProjection(ProjectionError, LookupError):
    """A projection name is not present in the registry."""

    def __init__(self, name: str):
        super().__init__(f"Unknown projection '{name}'")
        self.name = name


class OutOfDomain(ProjectionError, ValueError):
    """A coordinate or an inverse-trig argument lies outside its legal range.

    Attributes
    ----------
    value : float, optional
        The offending value.
    limit : float, optional
        The bound it exceeded.
    """

    def __init__(self, message: str, value: Optional[float] = None, limit: Optional[float] = None):
        super().__init__(message)
        self.value = value
        self.limit = limit


class ConvergenceFailure(ProjectionError, ArithmeticError):
    """An iterative inverse did not reach its tolerance within the iteration cap.

    Attributes
    ----------
    iterations : int
        Number of iterations performed.
    residual : float
        Last change between successive iterates.
    """

    def __init__(self, message: str, iterations: int, residual: float):
        super().__init__(message)
        self.iterations = iterations
        self.residual = residual


class RegistryError(ProjectionError, RuntimeError):
    """A projection family was registered twice or after the registry froze."""
