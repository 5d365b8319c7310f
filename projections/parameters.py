"""
Parameter Store: parsing of projection parameter lists.

A parameter list is a flat sequence of ``key`` and ``key=value`` tokens,
delimited by whitespace or ``+``::

    +proj=bipc +bns +a=6400000 +lon_0=-90

The store is built once, is immutable afterwards, and hands out typed
values on request. Keys it does not know are kept and ignored; keys with a
known numeric type are validated as soon as the list is parsed so that a
typo surfaces at setup time, not at the first transform.

Grammar Notes
-------------
- A ``+`` right after ``=`` (``x_0=+500``) or inside a numeric exponent
  (``1e+5``) belongs to the value.
- A key given without a value is a flag: it reads as ``True``.
- Duplicate keys: the last occurrence wins.
- Angles accept decimal degrees, DMS (``12d30'15"W``) or radians with an
  ``r`` suffix (``0.5r``).
"""

import math
import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional

from common.units import angle_to_radians
from projections.exceptions import MalformedParameter


# Keys whose value type is known up front and checked at parse time.
KNOWN_PARAMETER_TYPES: Mapping[str, str] = MappingProxyType({
    "a": "real",
    "b": "real",
    "R": "real",
    "es": "real",
    "e": "real",
    "rf": "real",
    "f": "real",
    "k": "real",
    "k_0": "real",
    "x_0": "real",
    "y_0": "real",
    "to_meter": "real",
    "lat_ts": "angle",
    "lon_0": "angle",
    "lat_0": "angle",
})

_TOKEN_SPLIT = re.compile(r"\s+|(?<!=)(?<![0-9.][eE])\+")

_NUMBER = r"(?:\d+(?:\.\d*)?|\.\d+)"
_EXPONENT = r"(?:[eE][+-]?\d+)"
_DMS_PATTERN = re.compile(
    rf"^(?P<sign>[+-])?(?P<deg>{_NUMBER}{_EXPONENT}?)"
    rf"(?:[dD°](?:(?P<min>{_NUMBER})'(?:(?P<sec>{_NUMBER})\")?)?)?"
    r"(?P<hemi>[NSEWnsew])?$"
)
_RADIANS_PATTERN = re.compile(rf"^(?P<value>[+-]?{_NUMBER}{_EXPONENT}?)[rR]$")


@dataclass(frozen=True)
class ParameterToken:
    """One ``key`` or ``key=value`` entry of a parameter list.

    Attributes
    ----------
    key : str
        Parameter name.
    value : str, optional
        Raw value text, or None for a bare flag.
    """
    key: str
    value: Optional[str] = None

    @classmethod
    def parse(cls, text: str) -> 'ParameterToken':
        """Split a single token at its first ``=``."""
        key, sep, value = text.partition("=")
        key = key.strip()
        if not key:
            raise MalformedParameter(f"Parameter token '{text}' has no key", value=text)
        return cls(key=key, value=value.strip() if sep else None)

    def to_text(self) -> str:
        return self.key if self.value is None else f"{self.key}={self.value}"


def parse_real(text: str, key: str = "") -> float:
    """Parse a real number, accepting a ``numerator/denominator`` form."""
    try:
        if "/" in text:
            numerator, denominator = text.split("/", 1)
            value = float(numerator) / float(denominator)
        else:
            value = float(text)
    except (ValueError, ZeroDivisionError):
        raise MalformedParameter(
            f"Parameter '{key}' expects a real number, got '{text}'", key=key, value=text
        ) from None
    if not math.isfinite(value):
        raise MalformedParameter(
            f"Parameter '{key}' must be finite, got '{text}'", key=key, value=text
        )
    return value


def parse_int(text: str, key: str = "") -> int:
    """Parse an integer value."""
    try:
        return int(text)
    except ValueError:
        raise MalformedParameter(
            f"Parameter '{key}' expects an integer, got '{text}'", key=key, value=text
        ) from None


def parse_angle(text: str, key: str = "") -> float:
    """Parse an angle and return it in radians.

    Parameters
    ----------
    text : str
        Decimal degrees (``-90.5``, ``1e+1``), DMS (``12d30'15"W``) or radians
        (``1.2r``).
    key : str
        Key name used in error messages.

    Returns
    -------
    float
        The angle in radians.
    """
    text = text.strip()
    match = _RADIANS_PATTERN.match(text)
    if match:
        return float(match.group("value"))

    match = _DMS_PATTERN.match(text)
    if match is None:
        raise MalformedParameter(
            f"Parameter '{key}' expects an angle, got '{text}'", key=key, value=text
        )

    degrees = float(match.group("deg"))
    if not math.isfinite(degrees):
        raise MalformedParameter(
            f"Parameter '{key}' must be finite, got '{text}'", key=key, value=text
        )
    if match.group("min"):
        degrees += float(match.group("min")) / 60.0
    if match.group("sec"):
        degrees += float(match.group("sec")) / 3600.0

    negative = match.group("sign") == "-"
    if match.group("hemi") and match.group("hemi").upper() in "SW":
        negative = not negative

    radians = angle_to_radians(degrees, "degree")
    return -radians if negative else radians


_PARSERS = {
    "real": parse_real,
    "int": parse_int,
    "angle": parse_angle,
}


def tokenize(text: str) -> List[ParameterToken]:
    """Split parameter text into tokens, in input order."""
    return [ParameterToken.parse(chunk) for chunk in _TOKEN_SPLIT.split(text) if chunk.strip()]


class ParameterStore:
    """Immutable, typed lookup over a parameter list.

    Missing keys never raise: flags read as False and typed accessors
    return the supplied default. A present key whose value does not parse
    as the requested type raises `MalformedParameter`.

    Examples
    --------
    >>> store = parse_parameters("+proj=bipc +bns +a=6400000")
    >>> store.as_flag("bns"), store.as_real("a")
    (True, 6400000.0)
    >>> store.as_flag("over")
    False
    """

    def __init__(self, tokens: Iterable[ParameterToken] = ()):
        entries: Dict[str, ParameterToken] = {}
        for token in tokens:
            entries.pop(token.key, None)
            entries[token.key] = token
            expected = KNOWN_PARAMETER_TYPES.get(token.key)
            if expected is not None:
                self._convert(token, expected)
        self._entries = MappingProxyType(entries)

    @classmethod
    def from_tokens(cls, tokens: Iterable[ParameterToken]) -> 'ParameterStore':
        return cls(tokens)

    @classmethod
    def from_mapping(cls, values: Mapping[str, object]) -> 'ParameterStore':
        """Build from a dict; a value of True (or None) makes a flag."""
        tokens = []
        for key, value in values.items():
            if value is False:
                continue
            text = None if value is True or value is None else str(value)
            tokens.append(ParameterToken(key=key, value=text))
        return cls(tokens)

    @staticmethod
    def _convert(token: ParameterToken, expected: str):
        if token.value is None or token.value == "":
            raise MalformedParameter(
                f"Parameter '{token.key}' requires a value", key=token.key
            )
        return _PARSERS[expected](token.value, token.key)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParameterStore):
            return NotImplemented
        return dict(self._entries) == dict(other._entries)

    def __hash__(self) -> int:
        return hash(tuple(self._entries.values()))

    def __repr__(self) -> str:
        return f"ParameterStore({self.to_text()!r})"

    @property
    def tokens(self) -> List[ParameterToken]:
        """Tokens after duplicate resolution, in order of last occurrence."""
        return list(self._entries.values())

    def get(self, key: str) -> Optional[ParameterToken]:
        return self._entries.get(key)

    def as_flag(self, key: str) -> bool:
        """True iff `key` is present, regardless of any value given."""
        return key in self._entries

    def as_string(self, key: str, default: Optional[str] = None) -> Optional[str]:
        token = self._entries.get(key)
        if token is None:
            return default
        return token.value if token.value is not None else ""

    def as_real(self, key: str, default: Optional[float] = None) -> Optional[float]:
        token = self._entries.get(key)
        if token is None:
            return default
        return self._convert(token, "real")

    def as_int(self, key: str, default: Optional[int] = None) -> Optional[int]:
        token = self._entries.get(key)
        if token is None:
            return default
        return self._convert(token, "int")

    def as_angle(self, key: str, default: Optional[float] = None) -> Optional[float]:
        """Angle value in radians."""
        token = self._entries.get(key)
        if token is None:
            return default
        return self._convert(token, "angle")

    def to_text(self) -> str:
        """Serialize back to ``+key=value`` form."""
        return " ".join(f"+{token.to_text()}" for token in self._entries.values())


def parse_parameters(text: str) -> ParameterStore:
    """Parse a parameter list into a `ParameterStore`.

    Parameters
    ----------
    text : str
        Whitespace- or ``+``-delimited ``key`` / ``key=value`` tokens.

    Returns
    -------
    ParameterStore
        The typed, immutable store.

    Raises
    ------
    MalformedParameter
        If a token has no key, or a key of known numeric type holds text
        that does not parse.
    """
    return ParameterStore(tokenize(text))
