# rdapkit

Tools for working with the Registration Data Access Protocol (RDAP), the
structured successor to WHOIS:

- build RDAP request URLs for domains, IP addresses and networks, AS numbers,
  entities, nameservers, searches and help queries (`rdapkit.request`);
- decode RDAP JSON responses into Python objects (`rdapkit.decoder`,
  `rdapkit.models`). Unknown members are kept, and minor type problems are
  recorded instead of being treated as fatal;
- parse jCard (vCard in JSON) contact data (`rdapkit.vcard`);
- print decoded responses as indented, WHOIS-like text (`rdapkit.printer`),
  or reduce a domain response to WHOIS-style key/value pairs
  (`rdapkit.response`).

Python 3.10 or later is required. The package has no third-party
dependencies. To install it from a checkout together with the test
requirements:

```
pip install ".[test]"
```

## Building requests

```python
from rdapkit.request import auto_request, domain_request, RequestType

req = domain_request("example.com").with_server("https://rdap.example.com/rdap")
print(req.url())  # https://rdap.example.com/rdap/domain/example.com

req = auto_request("AS2856")
print(req.type is RequestType.AUTNUM)  # True
```

The helpers `help_request`, `autnum_request`, `ip_request`, `ip_net_request`,
`domain_request`, `entity_request`, `nameserver_request` and `raw_request`
each return a `Request`. Search requests are built directly, for example
`Request(type=RequestType.DOMAIN_SEARCH, query="exampl*.com")`.

`Request.url()` returns `None` while no server is set. For a `RAW` request
the server URL is the whole request URL and is returned unchanged. For every
other type, the server's query and fragment are dropped, the request path is
appended, and `params` together with the search parameter form the query
string.

`auto_request` works out the request type from the query text. HTTP(S) URLs
become raw requests, or domain requests when they have no path. IP addresses
and networks, and AS numbers (`AS1234`, `as1234`, `1234`) are recognised next.
Anything else that contains a dot is a domain, and all other text is an
entity handle.

## Decoding responses

```python
from rdapkit.decoder import decode
from rdapkit.models import Domain

obj = decode(b'{"objectClassName": "domain", "ldhName": "example.com"}')
if isinstance(obj, Domain):
    print(obj.ldh_name)
```

The response class is picked from the document:

| Document contains                          | Result                    |
|--------------------------------------------|---------------------------|
| `errorCode`                                | `ErrorResponse`           |
| `objectClassName` "autnum"                 | `Autnum`                  |
| `objectClassName` "domain"                 | `Domain`                  |
| `objectClassName` "entity"                 | `Entity`                  |
| `objectClassName` "ip network"             | `IPNetwork`               |
| `objectClassName` "nameserver"             | `Nameserver`              |
| `domainSearchResults`                      | `DomainSearchResults`     |
| `entitySearchResults`                      | `EntitySearchResults`     |
| `nameserverSearchResults`                  | `NameserverSearchResults` |
| anything else                              | `Help`                    |

`Decoder(json_blob, target=SomeClass).decode()` decodes into a class of your
choice instead. Malformed JSON, a non-object document, or an `objectClassName`
that is not a string or not recognised raises `DecoderError`.

Each decoded object has a `decode_data` member holding a `DecodeData`. Its
`fields()`, `unknown_fields()`, `value(name)` and `notes(name)` give the raw
JSON members and the conversions that were applied while decoding, such as a
number given as a string.

## vCards

```python
from rdapkit.vcard import parse_vcard

card = parse_vcard(b'["vcard", [["fn", {}, "text", "Joe Appleseed"]]]')
print(card.name())  # Joe Appleseed
```

`VCard` offers `get`, `get_first` and shortcuts for common properties:
`name`, `po_box`, `extended_address`, `street_address`, `locality`, `region`,
`postal_code`, `country`, `tel`, `fax`, `email` and `org`.
`VCardProperty.values()` flattens a property value into a list of strings.
An invalid jCard raises `VCardError`. Pass `ignore_invalid_properties=True` to
`parse_vcard` or `decode_vcard` to skip bad properties instead.

## Output

```python
from rdapkit.printer import Printer

Printer(brief_links=True).print(obj)
```

`Printer` writes to `writer` (standard output by default). The options are
`indent_char`, `indent_size`, `brief_output`, `brief_links`, `omit_notices`
and `omit_remarks`.

`Response(object=obj).to_whois_style_response()` summarises a `Domain` as a
`WhoisStyleResponse`. Its `data` maps keys such as "Domain Name",
"Creation Date", "Registrar" or "Registrant Email" to lists of values, and
`key_display_order` lists the keys in the order they were first seen. Any
other kind of object gives an empty result.

## What the package does not do

rdapkit does not send requests over the network, and it does not look up
which RDAP server is responsible for a query (bootstrapping). `Request.url()`
gives you the URL to fetch with an HTTP client of your choice. The JSON you
get back goes to `decode`. The `fetch_roles` and `timeout` fields of
`Request`, and the `bootstrap_answer` and `http` fields of `Response`, are
only carried along: nothing in the package acts on them. There is no
command-line tool.

## Running the tests

```
pytest
```