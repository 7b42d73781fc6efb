"""Best-effort decoding of RDAP JSON responses into response objects.

Serious problems (malformed JSON, an unusable ``objectClassName``) raise
DecoderError. Minor problems such as a number given as a string, or a
value of the wrong JSON type, do not stop decoding: the value is converted
where possible, skipped otherwise, and a note is recorded in the
DecodeData of the enclosing object.
"""

from __future__ import annotations

import dataclasses
import functools
import json
import re
import types
import typing
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from .models import (
    Autnum,
    DecodeData,
    Domain,
    DomainSearchResults,
    DSData,
    Entity,
    EntitySearchResults,
    ErrorResponse,
    Event,
    Help,
    IPAddressSet,
    IPNetwork,
    KeyData,
    Link,
    Nameserver,
    NameserverSearchResults,
    Notice,
    PublicID,
    Remark,
    SecureDNS,
    Variant,
    VariantName,
)
from .vcard import VCard, VCardError, VCardProperty, decode_vcard

_INT64 = (-(2**63), 2**63 - 1)
_UINT64_MAX = 2**64 - 1

_OBJECT_CLASSES: dict[str, type] = {
    "autnum": Autnum,
    "domain": Domain,
    "entity": Entity,
    "ip network": IPNetwork,
    "nameserver": Nameserver,
}

_SEARCH_RESULTS: tuple[tuple[str, type], ...] = (
    ("domainSearchResults", DomainSearchResults),
    ("entitySearchResults", EntitySearchResults),
    ("nameserverSearchResults", NameserverSearchResults),
)

# Names that may appear in the string annotations of the response classes.
_TYPE_NAMES: dict[str, Any] = {
    "None": type(None),
    "str": str,
    "int": int,
    "float": float,
    "bool": bool,
    "list": list,
    "List": list,
    "dict": dict,
    "Dict": dict,
    "Any": Any,
    "VCard": VCard,
    "VCardProperty": VCardProperty,
    "DecodeData": DecodeData,
    "Link": Link,
    "Event": Event,
    "Notice": Notice,
    "Remark": Remark,
    "PublicID": PublicID,
    "VariantName": VariantName,
    "Variant": Variant,
    "DSData": DSData,
    "KeyData": KeyData,
    "SecureDNS": SecureDNS,
    "IPAddressSet": IPAddressSet,
    "Nameserver": Nameserver,
    "IPNetwork": IPNetwork,
    "Autnum": Autnum,
    "Entity": Entity,
    "Domain": Domain,
    "ErrorResponse": ErrorResponse,
    "Help": Help,
    "DomainSearchResults": DomainSearchResults,
    "EntitySearchResults": EntitySearchResults,
    "NameserverSearchResults": NameserverSearchResults,
}

_TRUE_STRINGS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_STRINGS = frozenset({"0", "f", "F", "FALSE", "false", "False"})
_FLOAT_RE = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf|infinity|nan)", re.IGNORECASE
)
_INF_RE = re.compile(r"[+-]?(?:inf|infinity)", re.IGNORECASE)
_SIGNED_RE = re.compile(r"[+-]?[0-9]+")
_UNSIGNED_RE = re.compile(r"[0-9]+")
_TYPE_TOKEN_RE = re.compile(r"\s*([A-Za-z_][\w.]*|\[|\]|,|\|)")

# Marks a value that must not be assigned, leaving the destination as it was.
_UNSET: Any = object()


class DecoderError(ValueError):
    """A fatal error encountered while decoding an RDAP response."""


@dataclass(frozen=True)
class _FieldSpec:
    attr: str
    type: Any
    int_range: tuple[int, int] | None


@dataclass(frozen=True)
class _StructSpec:
    fields: dict[str, _FieldSpec]
    decode_data_attr: str | None


class _TypeParser:
    """Resolves a string annotation such as ``list[Entity] | None``."""

    _GENERICS = {"list": list, "List": list, "dict": dict, "Dict": dict}

    def __init__(self, text: str, names: dict[str, Any]) -> None:
        self._tokens = self._tokenize(text)
        self._pos = 0
        self._names = names
        self._text = text

    @staticmethod
    def _tokenize(text: str) -> list[str]:
        tokens = []
        pos = 0
        stripped = text.rstrip()
        while pos < len(stripped):
            match = _TYPE_TOKEN_RE.match(stripped, pos)
            if match is None:
                raise TypeError(f"unsupported annotation {text!r}")
            tokens.append(match.group(1))
            pos = match.end()
        return tokens

    def parse(self) -> Any:
        result = self._union()
        if self._pos != len(self._tokens):
            raise TypeError(f"unsupported annotation {self._text!r}")
        return result

    def _peek(self) -> str | None:
        return self._tokens[self._pos] if self._pos < len(self._tokens) else None

    def _take(self, expected: str | None = None) -> str:
        token = self._peek()
        if token is None or (expected is not None and token != expected):
            raise TypeError(f"unsupported annotation {self._text!r}")
        self._pos += 1
        return token

    def _union(self) -> Any:
        members = [self._atom()]
        while self._peek() == "|":
            self._take("|")
            members.append(self._atom())
        if len(members) == 1:
            return members[0]
        return typing.Union[tuple(members)]

    def _atom(self) -> Any:
        name = self._take()
        if name in ("[", "]", ",", "|"):
            raise TypeError(f"unsupported annotation {self._text!r}")
        name = name.removeprefix("typing.")
        if self._peek() != "[":
            return self._lookup(name)
        self._take("[")
        args = [self._union()]
        while self._peek() == ",":
            self._take(",")
            args.append(self._union())
        self._take("]")

        if name in self._GENERICS:
            base = self._GENERICS[name]
            return base[tuple(args)] if len(args) > 1 else base[args[0]]
        if name == "Optional" and len(args) == 1:
            return typing.Optional[args[0]]
        if name == "Union":
            return typing.Union[tuple(args)]
        raise TypeError(f"unsupported generic {name!r} in {self._text!r}")

    def _lookup(self, name: str) -> Any:
        try:
            return self._names[name]
        except KeyError:
            raise TypeError(f"cannot resolve {name!r} in annotation {self._text!r}") from None


def _resolve_type(annotation: Any) -> Any:
    if not isinstance(annotation, str):
        return annotation
    return _TypeParser(annotation, _TYPE_NAMES).parse()


def _optional_inner(tp: Any) -> Any:
    """Return X for ``X | None``, or None if ``tp`` is not optional."""
    if typing.get_origin(tp) in (typing.Union, types.UnionType):
        args = typing.get_args(tp)
        if type(None) in args:
            rest = [arg for arg in args if arg is not type(None)]
            if len(rest) != 1:
                raise TypeError(f"unsupported union type {tp!r}")
            return rest[0]
    return None


def _camel_case(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


@functools.lru_cache(maxsize=None)
def _struct_spec(cls: type) -> _StructSpec:
    if not dataclasses.is_dataclass(cls):
        raise TypeError(f"{cls!r} is not a dataclass")

    fields: dict[str, _FieldSpec] = {}
    decode_data_attr: str | None = None

    for f in dataclasses.fields(cls):
        tp = _resolve_type(f.type)
        if f.metadata.get("decode_data") or (_optional_inner(tp) or tp) is DecodeData:
            if decode_data_attr is not None:
                raise TypeError(f"multiple DecodeData fields in {cls.__name__}")
            decode_data_attr = f.name
            continue

        if f.name.startswith("_"):
            if "rdap" in f.metadata:
                raise TypeError(f"rdap name on private field {f.name}")
            continue

        name = f.metadata.get("rdap") or _camel_case(f.name)
        if name in fields:
            raise TypeError(f"duplicate field {name} in {cls.__name__}")
        fields[name] = _FieldSpec(f.name, tp, f.metadata.get("range"))

    return _StructSpec(fields, decode_data_attr)


def _format_number(number: int | float) -> str:
    if isinstance(number, int):
        return str(number)
    return format(Decimal(repr(number)).normalize(), "f")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _zero(tp: Any) -> Any:
    if tp is str:
        return ""
    if tp is bool:
        return False
    if tp is int:
        return 0
    if tp is float:
        return 0.0
    origin = typing.get_origin(tp)
    if origin is list:
        return []
    if origin is dict:
        return {}
    if _optional_inner(tp) is not None:
        return None
    if dataclasses.is_dataclass(tp):
        return tp()
    raise TypeError(f"unsupported field type {tp!r}")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON constant {name}")


def _note(decode_data: DecodeData | None, key: str, message: str) -> None:
    if decode_data is not None:
        decode_data.messages.setdefault(key, []).append(message)


def _choose_target(src: dict[str, Any]) -> type:
    if "errorCode" in src:
        return ErrorResponse
    if "objectClassName" in src:
        object_class_name = src["objectClassName"]
        if not isinstance(object_class_name, str):
            raise DecoderError("objectClassName is not a string")
        try:
            return _OBJECT_CLASSES[object_class_name]
        except KeyError:
            raise DecoderError("objectClassName is not recognised") from None
    for key, cls in _SEARCH_RESULTS:
        if key in src:
            return cls
    # Anything else is taken to be a help response: there is no way to tell
    # a help response from other valid JSON.
    return Help


class Decoder:
    """Decodes one RDAP JSON document.

    ``target`` forces the class to decode into; by default it is chosen
    from the document (errorCode, objectClassName, search result members,
    otherwise Help).
    """

    def __init__(self, json_blob: str | bytes, target: type | None = None) -> None:
        self._data = json_blob
        self._target = target

    def decode(self) -> Any:
        """Decode the document and return the response object."""
        try:
            src = json.loads(self._data, parse_constant=_reject_constant)
        except ValueError as exc:
            raise DecoderError(f"invalid JSON: {exc}") from exc

        if src is None:
            src = {}
        if not isinstance(src, dict):
            raise DecoderError("JSON document is not an object")

        target = self._target or _choose_target(src)
        result = target()
        self._fill(result, src)
        return result

    def _fill(self, obj: Any, src: dict[str, Any]) -> None:
        spec = _struct_spec(type(obj))

        decode_data: DecodeData | None = None
        if spec.decode_data_attr is not None:
            decode_data = DecodeData(raw_values=dict(src), known=set(spec.fields))
            setattr(obj, spec.decode_data_attr, decode_data)

        for name, value in src.items():
            entry = spec.fields.get(name)
            if entry is None:
                continue
            _, result = self._decode(name, value, entry.type, decode_data, entry.int_range)
            if result is not _UNSET:
                setattr(obj, entry.attr, result)

    def _decode(self, key: str, src: Any, tp: Any, dd: DecodeData | None,
                int_range: tuple[int, int] | None) -> tuple[bool, Any]:
        """Decode ``src`` as type ``tp``; return (success, value or _UNSET)."""
        if tp is VCard:
            return self._decode_vcard(key, src, dd)

        inner = _optional_inner(tp)
        if inner is not None:
            if inner is VCard:
                return self._decode_vcard(key, src, dd)
            ok, value = self._decode(key, src, inner, dd, int_range)
            return ok, (_zero(inner) if value is _UNSET else value)

        if tp is bool:
            return self._decode_bool(key, src, dd)
        if tp is int:
            return self._decode_int(key, src, dd, int_range or _INT64)
        if tp is float:
            return self._decode_float(key, src, dd)
        if tp is str:
            return self._decode_str(key, src, dd)

        origin = typing.get_origin(tp)
        if origin is list:
            (elem,) = typing.get_args(tp)
            return self._decode_list(key, src, elem, dd, int_range)
        if origin is dict:
            key_type, elem = typing.get_args(tp)
            if key_type is not str:
                raise TypeError(f"map key type is not str in {tp!r}")
            return self._decode_dict(key, src, elem, dd, int_range)
        if isinstance(tp, type) and dataclasses.is_dataclass(tp):
            return self._decode_struct(key, src, tp, dd)

        raise TypeError(f"unsupported field type {tp!r}")

    def _decode_vcard(self, key: str, src: Any, dd: DecodeData | None) -> tuple[bool, Any]:
        try:
            return True, decode_vcard(src)
        except VCardError as exc:
            _note(dd, key, str(exc))
            return False, _UNSET

    def _decode_struct(self, key: str, src: Any, cls: type,
                       dd: DecodeData | None) -> tuple[bool, Any]:
        if not isinstance(src, dict):
            _note(dd, key, "invalid JSON type, expecting object")
            return False, _UNSET
        obj = cls()
        self._fill(obj, src)
        return True, obj

    def _decode_list(self, key: str, src: Any, elem: Any, dd: DecodeData | None,
                     int_range: tuple[int, int] | None) -> tuple[bool, Any]:
        if not isinstance(src, list):
            _note(dd, key, "invalid JSON type, expecting array")
            return False, _UNSET
        result = []
        for item in src:
            ok, value = self._decode(key, item, elem, dd, int_range)
            if ok:
                result.append(_zero(elem) if value is _UNSET else value)
        return True, result

    def _decode_dict(self, key: str, src: Any, elem: Any, dd: DecodeData | None,
                     int_range: tuple[int, int] | None) -> tuple[bool, Any]:
        if not isinstance(src, dict):
            _note(dd, key, "invalid JSON type, expecting object")
            return False, _UNSET
        result = {}
        for name, item in src.items():
            ok, value = self._decode(f"{key}:{name}", item, elem, dd, int_range)
            if ok:
                result[name] = _zero(elem) if value is _UNSET else value
        return True, result

    def _decode_int(self, key: str, src: Any, dd: DecodeData | None,
                    int_range: tuple[int, int]) -> tuple[bool, Any]:
        low, high = int_range
        unsigned = low >= 0
        kind = "uint" if unsigned else "int"

        if isinstance(src, bool):
            result = 1 if src else 0
            _note(dd, key, f"bool to {kind} conversion")
        elif _is_number(src):
            result = int(src)
            _note(dd, key, f"float64 to {kind} conversion")
        elif isinstance(src, str):
            pattern = _UNSIGNED_RE if unsigned else _SIGNED_RE
            parsed = int(src) if pattern.fullmatch(src) else None
            limits = (0, _UINT64_MAX) if unsigned else _INT64
            if parsed is None or not limits[0] <= parsed <= limits[1]:
                _note(dd, key, f"error converting string to {kind}")
                return False, _UNSET
            result = parsed
            _note(dd, key, f"string to {kind} conversion")
        elif src is None:
            result = 0
            _note(dd, key, f"null to {kind} conversion")
        else:
            _note(dd, key, "invalid JSON type, expecting float")
            return False, _UNSET

        if not low <= result <= high:
            message = "error: number too large" if unsigned else "error: number too small or large"
            _note(dd, key, message)
            return False, _UNSET
        return True, result

    def _decode_float(self, key: str, src: Any, dd: DecodeData | None) -> tuple[bool, Any]:
        if isinstance(src, bool):
            _note(dd, key, "bool to float64 conversion")
            return True, 1.0 if src else 0.0
        if _is_number(src):
            return True, float(src)
        if isinstance(src, str):
            if _FLOAT_RE.fullmatch(src):
                result = float(src)
                if result not in (float("inf"), float("-inf")) or _INF_RE.fullmatch(src):
                    _note(dd, key, "string to float64 conversion")
                    return True, result
            _note(dd, key, "error converting string to float64")
            return False, 0.0
        if src is None:
            _note(dd, key, "null to float64 conversion")
            return True, 0.0
        _note(dd, key, "invalid JSON type, expecting float")
        return False, 0.0

    def _decode_str(self, key: str, src: Any, dd: DecodeData | None) -> tuple[bool, Any]:
        if isinstance(src, bool):
            _note(dd, key, "bool to string conversion")
            return True, "true" if src else "false"
        if _is_number(src):
            _note(dd, key, "float64 to string conversion")
            return True, _format_number(src)
        if isinstance(src, str):
            return True, src
        if src is None:
            _note(dd, key, "null to empty string conversion")
            return True, ""
        _note(dd, key, "invalid JSON type, expecting string")
        return False, ""

    def _decode_bool(self, key: str, src: Any, dd: DecodeData | None) -> tuple[bool, Any]:
        if isinstance(src, bool):
            return True, src
        if _is_number(src):
            _note(dd, key, "float64 to bool conversion")
            return True, src != 0
        if isinstance(src, str):
            if src in _TRUE_STRINGS or src in _FALSE_STRINGS:
                _note(dd, key, "string to bool conversion")
                return True, src in _TRUE_STRINGS
            _note(dd, key, "error converting string to bool")
            return False, False
        if src is None:
            _note(dd, key, "null to bool conversion")
            return True, False
        _note(dd, key, "invalid JSON type, expecting bool")
        return False, False


def decode(json_blob: str | bytes) -> Any:
    """Decode an RDAP JSON document into a response object."""
    return Decoder(json_blob).decode()