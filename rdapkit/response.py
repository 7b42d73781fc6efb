"""RDAP query responses and their WHOIS-style summary."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .models import Domain, Entity

_EVENT_KEYS = {
    "last changed": "Updated Date",
    "registration": "Creation Date",
    "expiration": "Expiration Date",
}


@dataclass
class HTTPResponse:
    """One HTTP exchange made while answering a request.

    ``duration`` is in seconds.
    """

    url: str
    response: Any = None
    body: bytes = b""
    error: BaseException | None = None
    duration: float = 0.0


@dataclass
class WhoisStyleResponse:
    """WHOIS-style key/values, with keys in the order they were first seen."""

    key_display_order: list[str] = field(default_factory=list)
    data: dict[str, list[str]] = field(default_factory=dict)

    def _add(self, key: str, value: str) -> None:
        if value == "":
            return
        if key not in self.data:
            self.key_display_order.append(key)
            self.data[key] = [value]
        else:
            self.data[key].append(value)


def _find_first_entity(role: str, entities: list[Entity]) -> Entity | None:
    return next((entity for entity in entities if role in entity.roles), None)


def _add_entity_fields(whois: WhoisStyleResponse, prefix: str, entity: Entity | None) -> None:
    if entity is None or entity.vcard is None:
        return
    vcard = entity.vcard
    whois._add(f"{prefix} Name", vcard.name())
    whois._add(f"{prefix} PO Box", vcard.po_box())
    whois._add(f"{prefix} Extended Address", vcard.extended_address())
    whois._add(f"{prefix} Street", vcard.street_address())
    whois._add(f"{prefix} Locality", vcard.locality())
    whois._add(f"{prefix} Post Code", vcard.postal_code())
    whois._add(f"{prefix} Country", vcard.country())
    whois._add(f"{prefix} Tel", vcard.tel())
    whois._add(f"{prefix} Fax", vcard.fax())
    whois._add(f"{prefix} Email", vcard.email())


@dataclass
class Response:
    """The result of an RDAP query: the decoded object and how it was obtained."""

    object: Any = None
    bootstrap_answer: Any = None
    http: list[HTTPResponse] = field(default_factory=list)

    def to_whois_style_response(self) -> WhoisStyleResponse:
        """Summarise a domain response as WHOIS-style fields.

        Other response types give an empty result.
        """
        whois = WhoisStyleResponse()
        domain = self.object
        if not isinstance(domain, Domain):
            return whois

        whois._add("Domain Name", domain.ldh_name)
        whois._add("Handle", domain.handle)
        whois._add("Registrar WHOIS Server", domain.port43)

        for event in domain.events:
            key = _EVENT_KEYS.get(event.action)
            if key is not None:
                whois._add(key, event.date)

        registrar = _find_first_entity("registrar", domain.entities)
        if registrar is not None:
            if registrar.vcard is not None:
                whois._add("Registrar", registrar.vcard.name())
            for public_id in registrar.public_ids:
                if public_id.type == "IANA Registrar ID":
                    whois._add("Registrar IANA ID", public_id.identifier)

        for status in domain.status:
            whois._add("Domain Status", status)

        _add_entity_fields(whois, "Registrant", _find_first_entity("registrant", domain.entities))
        _add_entity_fields(whois, "Admin", _find_first_entity("administrative", domain.entities))
        _add_entity_fields(whois, "Tech", _find_first_entity("technical", domain.entities))
        _add_entity_fields(whois, "Abuse", _find_first_entity("abuse", domain.entities))

        for nameserver in domain.nameservers:
            whois._add("Name Server", nameserver.ldh_name)

        return whois