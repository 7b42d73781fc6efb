"""RDAP response objects.

Every field that maps to a JSON member carries its RDAP member name in the
dataclass field metadata under ``"rdap"``. Bounded integer fields also carry
an inclusive ``"range"`` (minimum, maximum). The ``decode_data`` field is
marked with ``"decode_data"`` in its metadata.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .vcard import VCard

_UINT8 = (0, 2**8 - 1)
_UINT16 = (0, 2**16 - 1)
_UINT32 = (0, 2**32 - 1)
_UINT64 = (0, 2**64 - 1)


def _member(key: str, *, default: Any = None, factory: Any = None,
            int_range: tuple[int, int] | None = None) -> Any:
    metadata: dict[str, Any] = {"rdap": key}
    if int_range is not None:
        metadata["range"] = int_range
    if factory is not None:
        return field(default_factory=factory, metadata=metadata)
    return field(default=default, metadata=metadata)


def _text(key: str) -> Any:
    return _member(key, default="")


def _many(key: str) -> Any:
    return _member(key, factory=list)


def _decode_data() -> Any:
    return field(default=None, compare=False, repr=False, metadata={"decode_data": True})


@dataclass
class DecodeData:
    """Raw JSON members of an object, with notes about minor decoding problems."""

    raw_values: dict[str, Any] = field(default_factory=dict)
    known: set[str] = field(default_factory=set)
    messages: dict[str, list[str]] = field(default_factory=dict)
    overridden: set[str] = field(default_factory=set)

    def notes(self, name: str) -> list[str]:
        """Notes recorded while decoding the member ``name``."""
        return list(self.messages.get(name, []))

    def fields(self) -> list[str]:
        """Names of every JSON member present in the object."""
        return list(self.raw_values)

    def unknown_fields(self) -> list[str]:
        """Names of JSON members with no matching object field."""
        return [
            name
            for name in self.raw_values
            if name not in self.known or name in self.overridden
        ]

    def value(self, name: str) -> Any:
        """The raw JSON value of member ``name``, or None if absent."""
        return self.raw_values.get(name)


@dataclass(kw_only=True)
class Link:
    decode_data: DecodeData | None = _decode_data()
    value: str = _text("value")
    rel: str = _text("rel")
    href: str = _text("href")
    href_lang: list[str] = _many("hreflang")
    title: str = _text("title")
    media: str = _text("media")
    type: str = _text("type")


@dataclass(kw_only=True)
class Event:
    decode_data: DecodeData | None = _decode_data()
    action: str = _text("eventAction")
    actor: str = _text("eventActor")
    date: str = _text("eventDate")
    links: list[Link] = _many("links")


@dataclass(kw_only=True)
class Notice:
    decode_data: DecodeData | None = _decode_data()
    title: str = _text("title")
    type: str = _text("type")
    description: list[str] = _many("description")
    links: list[Link] = _many("links")


@dataclass(kw_only=True)
class Remark:
    decode_data: DecodeData | None = _decode_data()
    title: str = _text("title")
    type: str = _text("type")
    description: list[str] = _many("description")
    links: list[Link] = _many("links")


@dataclass(kw_only=True)
class PublicID:
    decode_data: DecodeData | None = _decode_data()
    type: str = _text("type")
    identifier: str = _text("identifier")


@dataclass(kw_only=True)
class VariantName:
    decode_data: DecodeData | None = _decode_data()
    ldh_name: str = _text("ldhName")
    unicode_name: str = _text("unicodeName")


@dataclass(kw_only=True)
class Variant:
    decode_data: DecodeData | None = _decode_data()
    relation: list[str] = _many("relation")
    idn_table: str = _text("idnTable")
    variant_names: list[VariantName] = _many("variantNames")


@dataclass(kw_only=True)
class DSData:
    decode_data: DecodeData | None = _decode_data()
    key_tag: int | None = _member("keyTag", int_range=_UINT64)
    algorithm: int | None = _member("algorithm", int_range=_UINT8)
    digest: str = _text("digest")
    digest_type: int | None = _member("digestType", int_range=_UINT8)
    events: list[Event] = _many("events")
    links: list[Link] = _many("links")


@dataclass(kw_only=True)
class KeyData:
    decode_data: DecodeData | None = _decode_data()
    flags: int | None = _member("flags", int_range=_UINT16)
    protocol: int | None = _member("protocol", int_range=_UINT8)
    algorithm: int | None = _member("algorithm", int_range=_UINT8)
    public_key: str = _text("publicKey")
    events: list[Event] = _many("events")
    links: list[Link] = _many("links")


@dataclass(kw_only=True)
class SecureDNS:
    decode_data: DecodeData | None = _decode_data()
    zone_signed: bool | None = _member("zoneSigned")
    delegation_signed: bool | None = _member("delegationSigned")
    max_sig_life: int | None = _member("maxSigLife", int_range=_UINT64)
    ds: list[DSData] = _many("dsData")
    keys: list[KeyData] = _many("keyData")


@dataclass(kw_only=True)
class IPAddressSet:
    decode_data: DecodeData | None = _decode_data()
    v6: list[str] = _many("v6")
    v4: list[str] = _many("v4")


@dataclass(kw_only=True)
class Nameserver:
    """Information about a DNS nameserver."""

    decode_data: DecodeData | None = _decode_data()
    conformance: list[str] = _many("rdapConformance")
    object_class_name: str = _text("objectClassName")
    notices: list[Notice] = _many("notices")
    handle: str = _text("handle")
    ldh_name: str = _text("ldhName")
    unicode_name: str = _text("unicodeName")
    ip_addresses: IPAddressSet | None = _member("ipAddresses")
    entities: list[Entity] = _many("entities")
    status: list[str] = _many("status")
    remarks: list[Remark] = _many("remarks")
    links: list[Link] = _many("links")
    port43: str = _text("port43")
    events: list[Event] = _many("events")


@dataclass(kw_only=True)
class IPNetwork:
    """Information about an IP network."""

    decode_data: DecodeData | None = _decode_data()
    conformance: list[str] = _many("rdapConformance")
    object_class_name: str = _text("objectClassName")
    notices: list[Notice] = _many("notices")
    handle: str = _text("handle")
    start_address: str = _text("startAddress")
    end_address: str = _text("endAddress")
    ip_version: str = _text("ipVersion")
    name: str = _text("name")
    type: str = _text("type")
    country: str = _text("country")
    parent_handle: str = _text("parentHandle")
    status: list[str] = _many("status")
    entities: list[Entity] = _many("entities")
    remarks: list[Remark] = _many("remarks")
    links: list[Link] = _many("links")
    port43: str = _text("port43")
    events: list[Event] = _many("events")


@dataclass(kw_only=True)
class Autnum:
    """Information about an autonomous system number range."""

    decode_data: DecodeData | None = _decode_data()
    conformance: list[str] = _many("rdapConformance")
    object_class_name: str = _text("objectClassName")
    notices: list[Notice] = _many("notices")
    handle: str = _text("handle")
    start_autnum: int | None = _member("startAutnum", int_range=_UINT32)
    end_autnum: int | None = _member("endAutnum", int_range=_UINT32)
    ip_version: str = _text("ipVersion")
    name: str = _text("name")
    type: str = _text("type")
    status: list[str] = _many("status")
    country: str = _text("country")
    entities: list[Entity] = _many("entities")
    remarks: list[Remark] = _many("remarks")
    links: list[Link] = _many("links")
    port43: str = _text("port43")
    events: list[Event] = _many("events")


@dataclass(kw_only=True)
class Entity:
    """Information about an organisation or person."""

    decode_data: DecodeData | None = _decode_data()
    conformance: list[str] = _many("rdapConformance")
    object_class_name: str = _text("objectClassName")
    notices: list[Notice] = _many("notices")
    handle: str = _text("handle")
    vcard: VCard | None = _member("vcardArray")
    roles: list[str] = _many("roles")
    public_ids: list[PublicID] = _many("publicIds")
    entities: list[Entity] = _many("entities")
    remarks: list[Remark] = _many("remarks")
    links: list[Link] = _many("links")
    events: list[Event] = _many("events")
    as_event_actor: list[Event] = _many("asEventActor")
    status: list[str] = _many("status")
    port43: str = _text("port43")
    networks: list[IPNetwork] = _many("networks")
    autnums: list[Autnum] = _many("autnums")


@dataclass(kw_only=True)
class Domain:
    """Information about a DNS name and point of delegation."""

    decode_data: DecodeData | None = _decode_data()
    conformance: list[str] = _many("rdapConformance")
    object_class_name: str = _text("objectClassName")
    notices: list[Notice] = _many("notices")
    handle: str = _text("handle")
    ldh_name: str = _text("ldhName")
    unicode_name: str = _text("unicodeName")
    variants: list[Variant] = _many("variants")
    nameservers: list[Nameserver] = _many("nameservers")
    secure_dns: SecureDNS | None = _member("secureDNS")
    entities: list[Entity] = _many("entities")
    status: list[str] = _many("status")
    public_ids: list[PublicID] = _many("publicIds")
    remarks: list[Remark] = _many("remarks")
    links: list[Link] = _many("links")
    port43: str = _text("port43")
    events: list[Event] = _many("events")
    network: IPNetwork | None = _member("network")


@dataclass(kw_only=True)
class ErrorResponse:
    """An RDAP error response."""

    decode_data: DecodeData | None = _decode_data()
    conformance: list[str] = _many("rdapConformance")
    notices: list[Notice] = _many("notices")
    error_code: int | None = _member("errorCode", int_range=_UINT16)
    title: str = _text("title")
    description: list[str] = _many("description")


@dataclass(kw_only=True)
class Help:
    """An RDAP help response."""

    decode_data: DecodeData | None = _decode_data()
    conformance: list[str] = _many("rdapConformance")
    notices: list[Notice] = _many("notices")


@dataclass(kw_only=True)
class DomainSearchResults:
    decode_data: DecodeData | None = _decode_data()
    conformance: list[str] = _many("rdapConformance")
    notices: list[Notice] = _many("notices")
    domains: list[Domain] = _many("domainSearchResults")


@dataclass(kw_only=True)
class EntitySearchResults:
    decode_data: DecodeData | None = _decode_data()
    conformance: list[str] = _many("rdapConformance")
    notices: list[Notice] = _many("notices")
    entities: list[Entity] = _many("entitySearchResults")


@dataclass(kw_only=True)
class NameserverSearchResults:
    decode_data: DecodeData | None = _decode_data()
    conformance: list[str] = _many("rdapConformance")
    notices: list[Notice] = _many("notices")
    nameservers: list[Nameserver] = _many("nameserverSearchResults")