"""Human readable, WHOIS-like text output of RDAP response objects."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Callable, Iterable, TextIO

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

_BAD_CHARACTERS = str.maketrans("", "", "\n\r\0")


def _clean(text: str) -> str:
    return text.translate(_BAD_CHARACTERS)


def _format_number(number: int | float) -> str:
    if isinstance(number, int):
        return str(number)
    return format(Decimal(repr(number)).normalize(), "f")


def _format_bool(flag: bool) -> str:
    return "true" if flag else "false"


@dataclass
class Printer:
    """Writes RDAP objects as indented text resembling a WHOIS response.

    ``writer`` defaults to standard output, ``indent_char`` to a space and
    ``indent_size`` to 2. ``brief_output`` omits conformance, notices,
    remarks, events, port43, variants and secure DNS. ``brief_links``
    prints each link as a single line.
    """

    writer: TextIO | None = None
    indent_char: str = " "
    indent_size: int = 2
    omit_notices: bool = False
    omit_remarks: bool = False
    brief_output: bool = False
    brief_links: bool = False

    def print(self, obj: Any) -> None:
        """Write ``obj``; objects of unknown types produce no output."""
        if self.writer is None:
            self.writer = sys.stdout
        if self.indent_size == 0:
            self.indent_size = 2
        if not self.indent_char or self.indent_char == "\0":
            self.indent_char = " "
        self._print_object(obj, 0)

    def _print_object(self, obj: Any, level: int) -> None:
        if obj is None:
            return
        handlers: dict[type, Callable[[Any, int], None]] = {
            Domain: self._print_domain,
            Entity: self._print_entity,
            Nameserver: self._print_nameserver,
            Autnum: self._print_autnum,
            IPNetwork: self._print_ip_network,
            Help: self._print_help,
            ErrorResponse: self._print_error,
            DomainSearchResults: self._print_domain_search_results,
            EntitySearchResults: self._print_entity_search_results,
            NameserverSearchResults: self._print_nameserver_search_results,
        }
        handler = handlers.get(type(obj))
        if handler is not None:
            handler(obj, level)

    # Shared sections.

    @property
    def _show_notices(self) -> bool:
        return not self.brief_output or self.omit_notices

    @property
    def _show_remarks(self) -> bool:
        return not self.brief_output or self.omit_remarks

    def _print_conformance(self, conformance: Iterable[str], level: int) -> None:
        if not self.brief_output:
            for item in conformance:
                self._print_value("Conformance", item, level)

    def _print_notices(self, notices: Iterable[Notice], level: int) -> None:
        if self._show_notices:
            for notice in notices:
                self._print_notice(notice, level)

    def _print_remarks(self, remarks: Iterable[Remark], level: int) -> None:
        if self._show_remarks:
            for remark in remarks:
                self._print_remark(remark, level)

    def _print_links(self, links: Iterable[Link], level: int) -> None:
        for link in links:
            self._print_link(link, level)

    def _print_events(self, events: Iterable[Event], level: int) -> None:
        if not self.brief_output:
            for event in events:
                self._print_event(event, level, as_event_actor=False)

    def _print_port43(self, port43: str, level: int) -> None:
        if not self.brief_output:
            self._print_value("Port43", port43, level)

    def _print_values(self, name: str, values: Iterable[str], level: int) -> None:
        for value in values:
            self._print_value(name, value, level)

    def _print_optional_number(self, name: str, number: int | None, level: int) -> None:
        if number is not None:
            self._print_value(name, str(number), level)

    # Top level objects.

    def _print_search_results(self, heading: str, results: Any, items: Iterable[Any],
                              print_item: Callable[[Any, int], None], level: int) -> None:
        self._print_heading(heading, level)
        level += 1
        self._print_conformance(results.conformance, level)
        self._print_notices(results.notices, level)
        for item in items:
            print_item(item, level)
        self._print_unknowns(results.decode_data, level)

    def _print_nameserver_search_results(self, sr: NameserverSearchResults, level: int) -> None:
        self._print_search_results("Nameserver Search Results", sr, sr.nameservers,
                                   self._print_nameserver, level)

    def _print_entity_search_results(self, sr: EntitySearchResults, level: int) -> None:
        self._print_search_results("Entity Search Results", sr, sr.entities,
                                   self._print_entity, level)

    def _print_domain_search_results(self, sr: DomainSearchResults, level: int) -> None:
        self._print_search_results("Domain Search Results", sr, sr.domains,
                                   self._print_domain, level)

    def _print_error(self, error: ErrorResponse, level: int) -> None:
        self._print_heading("Error", level)
        level += 1
        self._print_conformance(error.conformance, level)
        self._print_notices(error.notices, level)
        self._print_optional_number("Error Code", error.error_code, level)
        self._print_value("Title", error.title, level)
        self._print_values("Description", error.description, level)
        self._print_unknowns(error.decode_data, level)

    def _print_help(self, help_response: Help, level: int) -> None:
        self._print_heading("Help", level)
        level += 1
        self._print_conformance(help_response.conformance, level)
        self._print_notices(help_response.notices, level)
        self._print_unknowns(help_response.decode_data, level)

    def _print_domain(self, domain: Domain, level: int) -> None:
        self._print_heading("Domain", level)
        level += 1
        self._print_value("Domain Name", domain.ldh_name, level)
        self._print_value("Domain Name (Unicode)", domain.unicode_name, level)
        self._print_value("Handle", domain.handle, level)
        self._print_values("Status", domain.status, level)
        self._print_port43(domain.port43, level)
        for public_id in domain.public_ids:
            self._print_public_id(public_id, level)
        self._print_conformance(domain.conformance, level)
        self._print_notices(domain.notices, level)
        self._print_remarks(domain.remarks, level)
        self._print_links(domain.links, level)
        if not self.brief_output:
            self._print_events(domain.events, level)
            for variant in domain.variants:
                self._print_variant(variant, level)
            if domain.secure_dns is not None:
                self._print_secure_dns(domain.secure_dns, level)
        for entity in domain.entities:
            self._print_entity(entity, level)
        for nameserver in domain.nameservers:
            self._print_nameserver(nameserver, level)
        if domain.network is not None:
            self._print_ip_network(domain.network, level)
        self._print_unknowns(domain.decode_data, level)

    def _print_autnum(self, autnum: Autnum, level: int) -> None:
        self._print_heading("Autnum", level)
        level += 1
        self._print_value("Handle", autnum.handle, level)
        self._print_value("Name", autnum.name, level)
        self._print_value("Type", autnum.type, level)
        self._print_values("Status", autnum.status, level)
        self._print_value("IP Version", autnum.ip_version, level)
        self._print_value("Country", autnum.country, level)
        self._print_optional_number("StartAutnum", autnum.start_autnum, level)
        self._print_optional_number("EndAutnum", autnum.end_autnum, level)
        self._print_conformance(autnum.conformance, level)
        self._print_port43(autnum.port43, level)
        self._print_notices(autnum.notices, level)
        self._print_remarks(autnum.remarks, level)
        self._print_links(autnum.links, level)
        self._print_events(autnum.events, level)
        for entity in autnum.entities:
            self._print_entity(entity, level)
        self._print_unknowns(autnum.decode_data, level)

    def _print_nameserver(self, nameserver: Nameserver, level: int) -> None:
        self._print_heading("Nameserver", level)
        level += 1
        self._print_value("Nameserver", nameserver.ldh_name, level)
        self._print_value("Nameserver (Unicode)", nameserver.unicode_name, level)
        self._print_value("Handle", nameserver.handle, level)
        self._print_values("Status", nameserver.status, level)
        self._print_port43(nameserver.port43, level)
        self._print_conformance(nameserver.conformance, level)
        self._print_notices(nameserver.notices, level)
        self._print_remarks(nameserver.remarks, level)
        self._print_links(nameserver.links, level)
        self._print_events(nameserver.events, level)
        if nameserver.ip_addresses is not None:
            self._print_ip_address_set(nameserver.ip_addresses, level)
        for entity in nameserver.entities:
            self._print_entity(entity, level)
        self._print_unknowns(nameserver.decode_data, level)

    def _print_ip_address_set(self, addresses: IPAddressSet, level: int) -> None:
        self._print_heading("IP Addresses", level)
        level += 1
        self._print_values("IPv6", addresses.v6, level)
        self._print_values("IPv4", addresses.v4, level)
        self._print_unknowns(addresses.decode_data, level)

    def _print_entity(self, entity: Entity, level: int) -> None:
        self._print_heading("Entity", level)
        level += 1
        self._print_value("Handle", entity.handle, level)
        self._print_values("Status", entity.status, level)
        self._print_port43(entity.port43, level)
        for public_id in entity.public_ids:
            self._print_public_id(public_id, level)
        self._print_conformance(entity.conformance, level)
        self._print_notices(entity.notices, level)
        self._print_remarks(entity.remarks, level)
        self._print_links(entity.links, level)
        if not self.brief_output:
            for event in entity.events:
                self._print_event(event, level, as_event_actor=False)
            for event in entity.as_event_actor:
                self._print_event(event, level, as_event_actor=True)
        self._print_values("Role", entity.roles, level)
        if entity.vcard is not None:
            for prop in entity.vcard.properties:
                self._print_values("vCard " + prop.name, prop.values(), level)
        if not self.brief_output:
            for network in entity.networks:
                self._print_ip_network(network, level)
            for autnum in entity.autnums:
                self._print_autnum(autnum, level)
            for child in entity.entities:
                self._print_entity(child, level)
        self._print_unknowns(entity.decode_data, level)

    def _print_ip_network(self, network: IPNetwork, level: int) -> None:
        self._print_heading("IP Network", level)
        level += 1
        self._print_value("Handle", network.handle, level)
        self._print_value("Start Address", network.start_address, level)
        self._print_value("End Address", network.end_address, level)
        self._print_value("IP Version", network.ip_version, level)
        self._print_value("Name", network.name, level)
        self._print_value("Type", network.type, level)
        self._print_value("Country", network.country, level)
        self._print_value("ParentHandle", network.parent_handle, level)
        self._print_values("Status", network.status, level)
        self._print_port43(network.port43, level)
        self._print_notices(network.notices, level)
        self._print_remarks(network.remarks, level)
        for entity in network.entities:
            self._print_entity(entity, level)
        self._print_links(network.links, level)
        self._print_events(network.events, level)
        self._print_unknowns(network.decode_data, level)

    # Nested objects.

    def _print_public_id(self, public_id: PublicID, level: int) -> None:
        self._print_heading("Public ID", level)
        level += 1
        self._print_value("Type", public_id.type, level)
        self._print_value("Identifier", public_id.identifier, level)
        self._print_unknowns(public_id.decode_data, level)

    def _print_secure_dns(self, secure_dns: SecureDNS, level: int) -> None:
        self._print_heading("Secure DNS", level)
        level += 1
        if secure_dns.zone_signed is not None:
            self._print_value("Zone Signed", _format_bool(secure_dns.zone_signed), level)
        if secure_dns.delegation_signed is not None:
            self._print_value("Delegation Signed",
                              _format_bool(secure_dns.delegation_signed), level)
        self._print_optional_number("Max Signature Life", secure_dns.max_sig_life, level)
        for ds in secure_dns.ds:
            self._print_ds_data(ds, level)
        for key in secure_dns.keys:
            self._print_key_data(key, level)
        self._print_unknowns(secure_dns.decode_data, level)

    def _print_key_data(self, key: KeyData, level: int) -> None:
        self._print_heading("Key", level)
        level += 1
        self._print_optional_number("Flags", key.flags, level)
        self._print_optional_number("Protocol", key.protocol, level)
        self._print_optional_number("Algorithm", key.algorithm, level)
        self._print_value("Public Key", key.public_key, level)
        self._print_events(key.events, level)
        self._print_links(key.links, level)
        self._print_unknowns(key.decode_data, level)

    def _print_ds_data(self, ds: DSData, level: int) -> None:
        self._print_heading("DSData", level)
        level += 1
        self._print_optional_number("Key Tag", ds.key_tag, level)
        self._print_optional_number("Algorithm", ds.algorithm, level)
        self._print_value("Digest", ds.digest, level)
        self._print_optional_number("DigestType", ds.digest_type, level)
        self._print_events(ds.events, level)
        self._print_links(ds.links, level)
        self._print_unknowns(ds.decode_data, level)

    def _print_variant(self, variant: Variant, level: int) -> None:
        self._print_heading("Variant", level)
        level += 1
        self._print_values("Relation", variant.relation, level)
        self._print_value("IDN Table", variant.idn_table, level)
        for name in variant.variant_names:
            self._print_variant_name(name, level)
        self._print_unknowns(variant.decode_data, level)

    def _print_variant_name(self, name: VariantName, level: int) -> None:
        self._print_heading("Variant Name", level)
        level += 1
        self._print_value("Domain Name", name.ldh_name, level)
        self._print_value("Domain Name (Unicode)", name.unicode_name, level)
        self._print_unknowns(name.decode_data, level)

    def _print_remark(self, remark: Remark, level: int) -> None:
        self._print_titled("Remark", remark, level)

    def _print_notice(self, notice: Notice, level: int) -> None:
        self._print_titled("Notice", notice, level)

    def _print_titled(self, heading: str, item: Notice | Remark, level: int) -> None:
        self._print_heading(heading, level)
        level += 1
        self._print_value("Title", item.title, level)
        self._print_value("Type", item.type, level)
        self._print_values("Description", item.description, level)
        self._print_links(item.links, level)
        self._print_unknowns(item.decode_data, level)

    def _print_link(self, link: Link, level: int) -> None:
        if self.brief_links:
            self._print_value("Link", link.href, level)
            return
        self._print_heading("Link", level)
        level += 1
        self._print_value("Title", link.title, level)
        self._print_value("Href", link.href, level)
        self._print_value("Value", link.value, level)
        self._print_value("Rel", link.rel, level)
        self._print_value("Media", link.media, level)
        self._print_value("Type", link.type, level)
        self._print_values("HrefLang", link.href_lang, level)
        self._print_unknowns(link.decode_data, level)

    def _print_event(self, event: Event, level: int, as_event_actor: bool) -> None:
        if self.brief_output:
            return
        self._print_heading("AsEventActor" if as_event_actor else "Event", level)
        level += 1
        self._print_value("Action", event.action, level)
        self._print_value("Actor", event.actor, level)
        self._print_value("Date", event.date, level)
        self._print_links(event.links, level)
        self._print_unknowns(event.decode_data, level)

    # Low level output.

    def _indent(self, level: int) -> str:
        return self.indent_char * (level * self.indent_size)

    def _print_heading(self, heading: str, level: int) -> None:
        self.writer.write(f"{self._indent(level)}{_clean(heading)}:\n")

    def _print_value(self, name: str, value: str, level: int) -> None:
        if value == "":
            return
        self.writer.write(f"{self._indent(level)}{_clean(name)}: {_clean(value)}\n")

    def _print_unknowns(self, decode_data: DecodeData | None, level: int) -> None:
        if decode_data is None:
            return
        for name in decode_data.unknown_fields():
            self._print_unknown(name, decode_data.value(name), level)

    def _print_unknown(self, key: str, value: Any, level: int) -> None:
        if isinstance(value, bool):
            self._print_value(key, _format_bool(value), level)
        elif isinstance(value, (int, float)):
            self._print_value(key, _format_number(value), level)
        elif isinstance(value, str):
            self._print_value(key, value, level)
        elif isinstance(value, list):
            for item in value:
                self._print_unknown(key, item, level)
        elif isinstance(value, dict):
            self._print_heading(key, level)
            for inner_key, inner_value in value.items():
                self._print_unknown(inner_key, inner_value, level + 1)
        else:
            self._print_value(key, "[unprintable value]", level)