"""jCard (RFC 7095) decoding and convenient access to common vCard properties."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

_MAX_NESTING_DEPTH = 3


class VCardError(ValueError):
    """Raised when a document is not a valid jCard."""

    def __init__(self, message: str) -> None:
        super().__init__(f"jCard error: {message}")


def _format_number(number: float) -> str:
    """Format a number in plain decimal notation with the fewest digits needed."""
    return format(Decimal(repr(float(number))).normalize(), "f")


def _flatten(value: Any) -> list[str]:
    if value is None:
        return [""]
    if isinstance(value, bool):
        return ["true" if value else "false"]
    if isinstance(value, (int, float)):
        return [_format_number(value)]
    if isinstance(value, str):
        return [value]
    if isinstance(value, list):
        return [text for item in value for text in _flatten(item)]
    raise TypeError(f"unsupported jCard value type: {type(value).__name__}")


def _display(value: Any) -> str:
    if value is None:
        return "<nil>"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return _format_number(value)
    if isinstance(value, list):
        return "[" + " ".join(_display(item) for item in value) + "]"
    if isinstance(value, dict):
        items = (f"{key}:{_display(value[key])}" for key in sorted(value))
        return "map[" + " ".join(items) + "]"
    return str(value)


@dataclass
class VCardProperty:
    """A single vCard property: name, parameters, value type and value.

    Parameters are always lists of strings. The value is a string, number,
    bool, None, or a (possibly nested) list of those.
    """

    name: str
    parameters: dict[str, list[str]] = field(default_factory=dict)
    type: str = ""
    value: Any = None

    def values(self) -> list[str]:
        """Return the value flattened into a list of strings."""
        return _flatten(self.value)

    def __str__(self) -> str:
        return (
            f"  {self.name} (type={self.type}, "
            f"parameters={_display(self.parameters)}): {_display(self.value)}"
        )


@dataclass
class VCard:
    """A decoded jCard: an ordered list of properties."""

    properties: list[VCardProperty] = field(default_factory=list)

    def __str__(self) -> str:
        body = "\n".join(str(prop) for prop in self.properties)
        return "vCard[\n" + body + "\n]"

    def get(self, name: str) -> list[VCardProperty]:
        """Return every property called ``name``, in document order."""
        return [prop for prop in self.properties if prop.name == name]

    def get_first(self, name: str) -> VCardProperty | None:
        """Return the first property called ``name``, or None."""
        return next((prop for prop in self.properties if prop.name == name), None)

    def _first_as_string(self, name: str) -> str:
        prop = self.get_first(name)
        return "" if prop is None else " ".join(prop.values())

    def _address_field(self, index: int) -> str:
        adr = self.get_first("adr")
        if adr is None:
            return ""
        values = adr.values()
        return values[index] if index < len(values) else ""

    def name(self) -> str:
        """The formatted name (``fn``)."""
        return self._first_as_string("fn")

    def po_box(self) -> str:
        return self._address_field(0)

    def extended_address(self) -> str:
        """The extended address, e.g. an apartment or suite number."""
        return self._address_field(1)

    def street_address(self) -> str:
        return self._address_field(2)

    def locality(self) -> str:
        return self._address_field(3)

    def region(self) -> str:
        """The address region, e.g. state or province."""
        return self._address_field(4)

    def postal_code(self) -> str:
        return self._address_field(5)

    def country(self) -> str:
        """The full country name of the address."""
        return self._address_field(6)

    def tel(self) -> str:
        """The first voice telephone number, or an empty string."""
        for prop in self.get("tel"):
            types = prop.parameters.get("type")
            is_voice = types is None or "voice" in types
            values = prop.values()
            if is_voice and values:
                return values[0]
        return ""

    def fax(self) -> str:
        """The first fax number, or an empty string."""
        for prop in self.get("tel"):
            if "fax" in prop.parameters.get("type", []):
                values = prop.values()
                if values:
                    return values[0]
        return ""

    def email(self) -> str:
        return self._first_as_string("email")

    def org(self) -> str:
        return self._first_as_string("org")


def _read_parameters(raw: Any) -> dict[str, list[str]]:
    if not isinstance(raw, dict):
        raise VCardError("jCard parameters invalid")

    params: dict[str, list[str]] = {}
    for key, value in raw.items():
        if isinstance(value, str):
            params.setdefault(key, []).append(value)
        elif isinstance(value, list):
            for item in value:
                if isinstance(item, str):
                    params.setdefault(key, []).append(item)
    return params


def _read_value(value: Any, depth: int) -> Any:
    if value is None or isinstance(value, (str, bool)):
        return value
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, list):
        if depth == _MAX_NESTING_DEPTH:
            raise VCardError("Structured value too deep")
        return [_read_value(item, depth + 1) for item in value]
    raise VCardError("Unknown JSON datatype in jCard value")


def _decode_property(raw: Any) -> VCardProperty:
    if not isinstance(raw, list):
        raise VCardError("jCard property was not an array")
    if len(raw) < 4:
        raise VCardError("jCard property too short (>=4 array elements required)")

    name = raw[0]
    if not isinstance(name, str):
        raise VCardError("jCard property name invalid")

    parameters = _read_parameters(raw[1])

    property_type = raw[2]
    if not isinstance(property_type, str):
        raise VCardError("jCard property type invalid")

    value = _read_value(raw[3] if len(raw) == 4 else raw[3:], 0)

    return VCardProperty(name=name, parameters=parameters, type=property_type, value=value)


def decode_vcard(src: Any, ignore_invalid_properties: bool = False) -> VCard:
    """Build a VCard from an already parsed jCard structure.

    Invalid properties raise VCardError unless ``ignore_invalid_properties``
    is set, in which case they are skipped.
    """
    if not isinstance(src, list) or len(src) != 2:
        raise VCardError("structure is not a jCard (expected len=2 top level array)")
    if src[0] != "vcard" or not isinstance(src[0], str):
        raise VCardError("structure is not a jCard (missing 'vcard')")
    if not isinstance(src[1], list):
        raise VCardError("structure is not a jCard (bad properties array)")

    properties = []
    for raw in src[1]:
        try:
            properties.append(_decode_property(raw))
        except VCardError:
            if not ignore_invalid_properties:
                raise
    return VCard(properties=properties)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON constant {name}")


def parse_vcard(json_blob: str | bytes, ignore_invalid_properties: bool = False) -> VCard:
    """Parse a jCard JSON document."""
    try:
        top = json.loads(json_blob, parse_constant=_reject_constant)
    except ValueError as exc:
        raise VCardError(f"invalid JSON: {exc}") from exc
    return decode_vcard(top, ignore_invalid_properties)