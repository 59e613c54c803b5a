"""Parameters or meta information associated with a property.

Property parameters are additional modifiers on a property that specify
extra information about the value (e.g. the value type, a language, the
format of an image, or how strongly the user prefers one email address over
another).

Parameters are stored as an ordered multi-map from a case-insensitive name to
a list of string values. A name is never mapped to an empty list, it is
removed instead. Derived parameters such as VALUE and ENCODING are computed
by a transcoder at write time and are usually not stored here.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
import logging
import re
from typing import NamedTuple

from .parameter_values import Encoding, lookup_versions
from .types.data_types import VCardDataType
from .types.version import VCardVersion

__all__ = [
    "Pid",
    "VCardParameters",
]

_LOGGER = logging.getLogger(__name__)

ALTID = "ALTID"
CALSCALE = "CALSCALE"
CHARSET = "CHARSET"
ENCODING = "ENCODING"
GEO = "GEO"
INDEX = "INDEX"
LABEL = "LABEL"
LANGUAGE = "LANGUAGE"
LEVEL = "LEVEL"
MEDIATYPE = "MEDIATYPE"
PID = "PID"
PREF = "PREF"
SORT_AS = "SORT-AS"
TYPE = "TYPE"
TZ = "TZ"
VALUE = "VALUE"

PREF_MIN = 1
PREF_MAX = 100

_PID_RE = re.compile(r"^(\d+)(\.(\d+))?$")
_RE_CONTROL_CHARS = re.compile("[\x00-\x08\x0b-\x0c\x0e-\x1f\x7f]")

# Parameters that only exist in some versions of the format.
_PARAMETER_VERSIONS: dict[str, frozenset[VCardVersion]] = {
    ALTID: frozenset({VCardVersion.V4_0}),
    CALSCALE: frozenset({VCardVersion.V4_0}),
    CHARSET: frozenset({VCardVersion.V2_1}),
    ENCODING: frozenset({VCardVersion.V2_1, VCardVersion.V3_0}),
    GEO: frozenset({VCardVersion.V4_0}),
    INDEX: frozenset({VCardVersion.V4_0}),
    LABEL: frozenset({VCardVersion.V4_0}),
    LEVEL: frozenset({VCardVersion.V4_0}),
    MEDIATYPE: frozenset({VCardVersion.V4_0}),
    PID: frozenset({VCardVersion.V4_0}),
    PREF: frozenset({VCardVersion.V4_0}),
    SORT_AS: frozenset({VCardVersion.V4_0}),
    TZ: frozenset({VCardVersion.V4_0}),
}

# Characters that may not appear in a parameter value, by version. Version
# 4.0 has caret encoding for everything except control characters.
_ILLEGAL_CHARS: dict[VCardVersion, str] = {
    VCardVersion.V2_1: ',:;"\r\n',
    VCardVersion.V3_0: '"\r\n',
    VCardVersion.V4_0: "",
}


class Pid(NamedTuple):
    """A PID parameter value identifying a property across synchronization."""

    local_id: int
    client_pid_map_ref: int | None = None

    @classmethod
    def parse(cls, value: str) -> Pid:
        """Parse a PID value such as `1` or `1.2`."""
        if not (match := _PID_RE.fullmatch(value.strip())):
            raise ValueError(f"Expected PID value to match `id[.ref]`: {value}")
        local_id, _, ref = match.groups()
        return Pid(int(local_id), int(ref) if ref is not None else None)

    def __str__(self) -> str:
        if self.client_pid_map_ref is None:
            return str(self.local_id)
        return f"{self.local_id}.{self.client_pid_map_ref}"


class VCardParameters:
    """An ordered multi-map of property parameters."""

    def __init__(
        self, values: dict[str, Iterable[str]] | Iterable[tuple[str, str]] | None = None
    ) -> None:
        """Initialize VCardParameters from a dict of lists or (name, value) pairs."""
        self._params: dict[str, list[str]] = {}
        if values is None:
            return
        if isinstance(values, dict):
            for name, param_values in values.items():
                for value in param_values:
                    self.add(name, value)
        else:
            for name, value in values:
                self.add(name, value)

    def get(self, name: str) -> str | None:
        """Return the first value of the parameter, if present."""
        if values := self._params.get(name.upper()):
            return values[0]
        return None

    def get_all(self, name: str) -> list[str]:
        """Return all values of the parameter, empty if not present."""
        return list(self._params.get(name.upper(), []))

    def put(self, name: str, value: str | None) -> None:
        """Replace all values of the parameter with a single value.

        A value of None removes the parameter.
        """
        if value is None:
            self.remove_all(name)
            return
        self._params[name.upper()] = [value]

    def replace(self, name: str, values: Iterable[str]) -> None:
        """Replace all values of the parameter."""
        if values := list(values):
            self._params[name.upper()] = values
        else:
            self.remove_all(name)

    def add(self, name: str, value: str) -> None:
        """Append a value to the parameter."""
        self._params.setdefault(name.upper(), []).append(value)

    def remove(self, name: str, value: str) -> None:
        """Remove a single value of the parameter, ignoring case."""
        key = name.upper()
        if (values := self._params.get(key)) is None:
            return
        values[:] = [existing for existing in values if existing.lower() != value.lower()]
        if not values:
            del self._params[key]

    def remove_all(self, name: str) -> list[str]:
        """Remove the parameter and return the values it held."""
        return self._params.pop(name.upper(), [])

    def names(self) -> list[str]:
        """Return the parameter names in insertion order."""
        return list(self._params)

    def items(self) -> Iterator[tuple[str, list[str]]]:
        """Return the (name, values) pairs in insertion order."""
        for name, values in self._params.items():
            yield name, list(values)

    def copy(self) -> VCardParameters:
        """Return a copy of these parameters that can be modified independently."""
        result = VCardParameters()
        for name, values in self._params.items():
            result._params[name] = list(values)
        return result

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.upper() in self._params

    def __iter__(self) -> Iterator[tuple[str, list[str]]]:
        return self.items()

    def __len__(self) -> int:
        return len(self._params)

    def __bool__(self) -> bool:
        return bool(self._params)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VCardParameters):
            return NotImplemented
        return self._params == other._params

    def __repr__(self) -> str:
        return f"VCardParameters({self._params!r})"

    @property
    def types(self) -> list[str]:
        """Return the TYPE values."""
        return self.get_all(TYPE)

    def add_type(self, value: str) -> None:
        """Add a TYPE value."""
        self.add(TYPE, value)

    def remove_type(self, value: str) -> None:
        """Remove a TYPE value, ignoring case."""
        self.remove(TYPE, value)

    def has_type(self, value: str) -> bool:
        """Return True if the TYPE parameter has the value, ignoring case."""
        return any(existing.lower() == value.lower() for existing in self.types)

    @property
    def pids(self) -> list[Pid]:
        """Return the PID values, skipping any that are malformed."""
        result = []
        for value in self.get_all(PID):
            try:
                result.append(Pid.parse(value))
            except ValueError:
                _LOGGER.debug("Ignoring malformed PID parameter value: %s", value)
        return result

    def add_pid(self, local_id: int, client_pid_map_ref: int | None = None) -> None:
        """Add a PID value."""
        self.add(PID, str(Pid(local_id, client_pid_map_ref)))

    def remove_pids(self) -> None:
        """Remove all PID values."""
        self.remove_all(PID)

    @property
    def pref(self) -> int | None:
        """Return the PREF value, or None if absent or not an integer."""
        if (value := self.get(PREF)) is None:
            return None
        try:
            return int(value)
        except ValueError:
            _LOGGER.debug("Ignoring malformed PREF parameter value: %s", value)
            return None

    @pref.setter
    def pref(self, value: int | None) -> None:
        """Set the PREF value, which must be between 1 and 100."""
        if value is not None and not PREF_MIN <= value <= PREF_MAX:
            raise ValueError(
                f"PREF must be between {PREF_MIN} and {PREF_MAX}, got {value}"
            )
        self.put(PREF, str(value) if value is not None else None)

    @property
    def alt_id(self) -> str | None:
        """Return the ALTID value grouping alternative representations."""
        return self.get(ALTID)

    @alt_id.setter
    def alt_id(self, value: str | None) -> None:
        self.put(ALTID, value)

    @property
    def value(self) -> VCardDataType | None:
        """Return the data type declared in the VALUE parameter."""
        return VCardDataType.find(self.get(VALUE))

    @value.setter
    def value(self, value: VCardDataType | None) -> None:
        self.put(VALUE, value.value if value is not None else None)

    @property
    def encoding(self) -> Encoding | None:
        """Return the ENCODING value."""
        return Encoding.find(self.get(ENCODING))

    @encoding.setter
    def encoding(self, value: Encoding | None) -> None:
        self.put(ENCODING, value.value if value is not None else None)

    @property
    def media_type(self) -> str | None:
        """Return the MEDIATYPE value, e.g. `image/png`."""
        return self.get(MEDIATYPE)

    @media_type.setter
    def media_type(self, value: str | None) -> None:
        self.put(MEDIATYPE, value)

    @property
    def language(self) -> str | None:
        """Return the LANGUAGE value."""
        return self.get(LANGUAGE)

    @language.setter
    def language(self, value: str | None) -> None:
        self.put(LANGUAGE, value)

    @property
    def charset(self) -> str | None:
        """Return the CHARSET value used by version 2.1."""
        return self.get(CHARSET)

    @charset.setter
    def charset(self, value: str | None) -> None:
        self.put(CHARSET, value)

    def validate(
        self, version: VCardVersion, property_name: str | None = None
    ) -> list[str]:
        """Return warnings for parameters that are not legal in the version.

        These checks are generic and apply to any property. Parameter values
        that are unknown to the legality table are allowed.
        """
        warnings = []
        illegal_chars = _ILLEGAL_CHARS[version]
        for name, values in self._params.items():
            if (versions := _PARAMETER_VERSIONS.get(name)) and version not in versions:
                warnings.append(
                    f"{name} parameter is not supported in version {version.value}."
                )
            for value in values:
                if _RE_CONTROL_CHARS.search(value) or any(
                    char in value for char in illegal_chars
                ):
                    warnings.append(
                        f"{name} parameter value contains characters that are "
                        f"not allowed in version {version.value}: {value!r}"
                    )
                versions = lookup_versions(property_name, name, value)
                if versions is not None and version not in versions:
                    warnings.append(
                        f"{name} parameter value \"{value}\" is not supported in "
                        f"version {version.value}."
                    )
        if (pref := self.get(PREF)) is not None:
            try:
                pref_value = int(pref)
            except ValueError:
                warnings.append(f"PREF parameter value must be an integer: {pref}")
            else:
                if not PREF_MIN <= pref_value <= PREF_MAX:
                    warnings.append(
                        f"PREF parameter value must be between {PREF_MIN} and "
                        f"{PREF_MAX}: {pref}"
                    )
        for pid in self.get_all(PID):
            if not _PID_RE.fullmatch(pid.strip()):
                warnings.append(f"PID parameter value is malformed: {pid}")
        return warnings
