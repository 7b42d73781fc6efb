"""RDAP request descriptions and request URL construction."""

from __future__ import annotations

import dataclasses
import enum
import ipaddress
import re
from dataclasses import dataclass, field
from urllib.parse import quote_plus, urlsplit, urlunsplit

_MAX_AUTNUM = 2**32 - 1
_HEX_DIGITS = "0123456789ABCDEF"
_PATH_SAFE = frozenset(
    b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_.~$&+:=@"
)


class RequestType(enum.Enum):
    """The kind of RDAP request; the value is its short textual name."""

    AUTNUM = "autnum"
    DOMAIN = "domain"
    ENTITY = "entity"
    HELP = "help"
    IP = "ip"
    NAMESERVER = "nameserver"
    DOMAIN_SEARCH = "domain-search"
    DOMAIN_SEARCH_BY_NAMESERVER = "domain-search-by-nameserver"
    DOMAIN_SEARCH_BY_NAMESERVER_IP = "domain-search-by-nameserver-ip"
    NAMESERVER_SEARCH = "nameserver-search"
    NAMESERVER_SEARCH_BY_NAMESERVER_IP = "nameserver-search-by-ip"
    ENTITY_SEARCH = "entity-search"
    ENTITY_SEARCH_BY_HANDLE = "entity-search-by-handle"
    RAW = "url"

    def __str__(self) -> str:
        return self.value


_OBJECT_PATHS = {
    RequestType.AUTNUM: "autnum",
    RequestType.DOMAIN: "domain",
    RequestType.ENTITY: "entity",
    RequestType.NAMESERVER: "nameserver",
}

_SEARCH_PATHS = {
    RequestType.DOMAIN_SEARCH: ("domains", "name"),
    RequestType.DOMAIN_SEARCH_BY_NAMESERVER: ("domains", "nsLdhName"),
    RequestType.DOMAIN_SEARCH_BY_NAMESERVER_IP: ("domains", "nsIp"),
    RequestType.NAMESERVER_SEARCH: ("nameservers", "name"),
    RequestType.NAMESERVER_SEARCH_BY_NAMESERVER_IP: ("nameservers", "ip"),
    RequestType.ENTITY_SEARCH: ("entities", "fn"),
    RequestType.ENTITY_SEARCH_BY_HANDLE: ("entities", "handle"),
}


def escape_path(text: str) -> str:
    """Percent-encode ``text`` for use as a single URL path segment."""
    pieces = []
    for byte in text.encode("utf-8"):
        if byte in _PATH_SAFE:
            pieces.append(chr(byte))
        else:
            pieces.append("%" + _HEX_DIGITS[byte >> 4] + _HEX_DIGITS[byte & 0xF])
    return "".join(pieces)


def _encode_query(values: dict[str, list[str]]) -> str:
    return "&".join(
        f"{quote_plus(key)}={quote_plus(value)}"
        for key in sorted(values)
        for value in values[key]
    )


@dataclass
class Request:
    """An RDAP request.

    ``server`` is the base URL of the RDAP server, or None to leave the
    choice to bootstrapping. For RAW requests it is the complete request URL.
    ``fetch_roles`` lists contact roles for which extra fetches may be made
    ("all" for every role). ``timeout`` is in seconds; None means no timeout.
    """

    type: RequestType
    query: str = ""
    params: dict[str, list[str]] = field(default_factory=dict)
    server: str | None = None
    fetch_roles: list[str] = field(default_factory=list)
    timeout: float | None = None

    def _path_and_values(self) -> tuple[str, dict[str, list[str]]]:
        if self.type in _OBJECT_PATHS:
            return f"{_OBJECT_PATHS[self.type]}/{escape_path(self.query)}", {}
        if self.type is RequestType.IP:
            return f"ip/{self.query}", {}
        if self.type is RequestType.HELP:
            return "help", {}
        if self.type in _SEARCH_PATHS:
            path, key = _SEARCH_PATHS[self.type]
            return path, {key: [self.query]}
        if self.type is RequestType.RAW:
            return "", {}
        raise ValueError(f"unknown request type: {self.type!r}")

    def url(self) -> str | None:
        """Return the full request URL, or None if no server is set.

        RAW requests return the server URL unchanged. Otherwise the query
        and fragment of the server URL are dropped, the request path is
        appended, and ``params`` plus the search parameters form the query.
        """
        if self.server is None:
            return None

        path, values = self._path_and_values()
        if self.type is RequestType.RAW:
            return self.server

        try:
            server = urlsplit(self.server)
            base = urlunsplit((server.scheme, server.netloc, server.path, "", ""))
            if not base.endswith("/"):
                base += "/"
            combined = urlsplit(base + path)
        except ValueError:
            return None

        query = {key: list(vals) for key, vals in self.params.items()}
        query.update(values)
        return urlunsplit(
            (combined.scheme, combined.netloc, combined.path, _encode_query(query), "")
        )

    def with_server(self, server: str | None) -> Request:
        """Return a copy of this request using ``server``."""
        return dataclasses.replace(
            self,
            server=server,
            params={key: list(vals) for key, vals in self.params.items()},
            fetch_roles=list(self.fetch_roles),
        )


def _format_ip(ip: ipaddress.IPv4Address | ipaddress.IPv6Address) -> str:
    if isinstance(ip, ipaddress.IPv6Address) and ip.ipv4_mapped is not None:
        return str(ip.ipv4_mapped)
    return str(ip)


def help_request() -> Request:
    """A help request; the server must be set before use."""
    return Request(type=RequestType.HELP)


def autnum_request(asn: int) -> Request:
    """A request for the AS number ``asn``."""
    if not 0 <= asn <= _MAX_AUTNUM:
        raise ValueError(f"AS number out of range: {asn}")
    return Request(type=RequestType.AUTNUM, query=str(asn))


def ip_request(ip: str | ipaddress.IPv4Address | ipaddress.IPv6Address) -> Request:
    """A request for a single IP address."""
    return Request(type=RequestType.IP, query=_format_ip(ipaddress.ip_address(ip)))


def ip_net_request(network: str | ipaddress.IPv4Network | ipaddress.IPv6Network) -> Request:
    """A request for an IP network; host bits of the address are cleared."""
    net = ipaddress.ip_network(network, strict=False)
    return Request(type=RequestType.IP, query=str(net))


def domain_request(domain: str) -> Request:
    return Request(type=RequestType.DOMAIN, query=domain)


def entity_request(entity: str) -> Request:
    """An entity request; the server must be set before use."""
    return Request(type=RequestType.ENTITY, query=entity)


def nameserver_request(nameserver: str) -> Request:
    """A nameserver request; the server must be set before use."""
    return Request(type=RequestType.NAMESERVER, query=nameserver)


def raw_request(rdap_url: str) -> Request:
    """A request that fetches ``rdap_url`` as is."""
    return Request(type=RequestType.RAW, server=rdap_url)


def _parse_autnum(text: str) -> int | None:
    text = text.upper()
    if text.startswith("AS"):
        text = text[2:]
    if not re.fullmatch(r"[0-9]+", text):
        return None
    number = int(text)
    return number if number <= _MAX_AUTNUM else None


def auto_request(query_text: str) -> Request:
    """Guess the request type for ``query_text``.

    HTTP(S) URLs become RAW requests, or domain requests when they have no
    path; then IP addresses, IP networks and AS numbers are recognised;
    anything containing a dot is a domain, everything else an entity.
    """
    try:
        parsed = urlsplit(query_text)
    except ValueError:
        parsed = None
    if parsed is not None and parsed.scheme in ("http", "https"):
        if parsed.path in ("", "/"):
            return domain_request(parsed.netloc.rpartition("@")[2])
        return raw_request(query_text)

    try:
        return ip_request(query_text)
    except ValueError:
        pass

    if "/" in query_text:
        try:
            return ip_net_request(query_text)
        except ValueError:
            pass

    autnum = _parse_autnum(query_text)
    if autnum is not None:
        return autnum_request(autnum)

    if "." in query_text:
        return domain_request(query_text)

    return entity_request(query_text)