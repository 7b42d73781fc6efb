import io
import json

import pytest

from rdapkit.decoder import decode
from rdapkit.models import Domain, Link
from rdapkit.printer import Printer


def _render(obj, **options):
    out = io.StringIO()
    Printer(writer=out, **options).print(obj)
    return out.getvalue()


DOMAIN_JSON = json.dumps({
    "objectClassName": "domain",
    "ldhName": "example.cz",
    "handle": "EX",
    "status": ["active"],
    "port43": "whois.example",
    "links": [{"href": "https://example.com/x", "rel": "self"}],
    "notices": [{"title": "Terms", "description": ["Use nicely"]}],
    "extra": "yes",
})


def test_print_domain_brief_links():
    obj = decode(DOMAIN_JSON)
    assert _render(obj, brief_links=True) == (
        "Domain:\n"
        "  Domain Name: example.cz\n"
        "  Handle: EX\n"
        "  Status: active\n"
        "  Port43: whois.example\n"
        "  Notice:\n"
        "    Title: Terms\n"
        "    Description: Use nicely\n"
        "  Link: https://example.com/x\n"
        "  extra: yes\n"
    )


def test_print_domain_brief_output_omits_port43_and_notices():
    obj = decode(DOMAIN_JSON)
    output = _render(obj, brief_links=True, brief_output=True)
    assert "Port43" not in output
    assert "Notice" not in output
    assert "  Domain Name: example.cz\n" in output


def test_print_full_link():
    obj = decode(DOMAIN_JSON)
    output = _render(obj)
    assert "  Link:\n    Href: https://example.com/x\n    Rel: self\n" in output


def test_custom_indent():
    obj = decode(json.dumps({"objectClassName": "domain", "ldhName": "a.cz"}))
    assert _render(obj, indent_char="-", indent_size=1) == "Domain:\n-Domain Name: a.cz\n"


def test_zero_indent_size_defaults_to_two():
    obj = decode(json.dumps({"objectClassName": "domain", "ldhName": "a.cz"}))
    assert _render(obj, indent_size=0) == "Domain:\n  Domain Name: a.cz\n"


def test_values_are_cleaned():
    obj = Domain(ldh_name="a\nb\rc\0d")
    assert _render(obj) == "Domain:\n  Domain Name: abcd\n"


def test_unknown_nested_values():
    obj = decode(json.dumps({
        "objectClassName": "domain",
        "extra": {"k": 1.5, "flag": True},
        "many": ["x", "y"],
        "nothing": None,
    }))
    assert _render(obj) == (
        "Domain:\n"
        "  extra:\n"
        "    k: 1.5\n"
        "    flag: true\n"
        "  many: x\n"
        "  many: y\n"
        "  nothing: [unprintable value]\n"
    )


def test_print_error():
    obj = decode(json.dumps({"errorCode": 404, "title": "Not Found", "description": ["x"]}))
    assert _render(obj) == (
        "Error:\n"
        "  Error Code: 404\n"
        "  Title: Not Found\n"
        "  Description: x\n"
    )


def test_print_help():
    obj = decode(json.dumps({
        "rdapConformance": ["rdap_level_0"],
        "notices": [{"title": "T", "description": ["d"]}],
    }))
    assert _render(obj) == (
        "Help:\n"
        "  Conformance: rdap_level_0\n"
        "  Notice:\n"
        "    Title: T\n"
        "    Description: d\n"
    )


def test_print_entity_with_vcard_and_events():
    obj = decode(json.dumps({
        "objectClassName": "entity",
        "handle": "H1",
        "roles": ["registrant"],
        "events": [{"eventAction": "registration", "eventDate": "2020"}],
        "vcardArray": ["vcard", [["version", {}, "text", "4.0"], ["fn", {}, "text", "Joe"]]],
    }))
    assert _render(obj) == (
        "Entity:\n"
        "  Handle: H1\n"
        "  Event:\n"
        "    Action: registration\n"
        "    Date: 2020\n"
        "  Role: registrant\n"
        "  vCard version: 4.0\n"
        "  vCard fn: Joe\n"
    )


def test_brief_output_skips_events():
    obj = decode(json.dumps({
        "objectClassName": "entity",
        "handle": "H1",
        "events": [{"eventAction": "registration", "eventDate": "2020"}],
    }))
    assert _render(obj, brief_output=True) == "Entity:\n  Handle: H1\n"


def test_nameserver_search_results():
    obj = decode(json.dumps({
        "nameserverSearchResults": [
            {"objectClassName": "nameserver", "ldhName": "ns1.example.com",
             "ipAddresses": {"v4": ["192.0.2.1"], "v6": ["2001:db8::1"]}},
        ],
    }))
    assert _render(obj) == (
        "Nameserver Search Results:\n"
        "  Nameserver:\n"
        "    Nameserver: ns1.example.com\n"
        "    IP Addresses:\n"
        "      IPv6: 2001:db8::1\n"
        "      IPv4: 192.0.2.1\n"
    )


def test_secure_dns():
    obj = decode(json.dumps({
        "objectClassName": "domain",
        "secureDNS": {"zoneSigned": True, "dsData": [{"keyTag": 7, "digest": "AB"}]},
    }))
    assert _render(obj) == (
        "Domain:\n"
        "  Secure DNS:\n"
        "    Zone Signed: true\n"
        "    DSData:\n"
        "      Key Tag: 7\n"
        "      Digest: AB\n"
    )


@pytest.mark.parametrize("obj", [None, "not an object", Link(href="x")])
def test_unknown_objects_print_nothing(obj):
    assert _render(obj) == ""


def test_default_writer_is_stdout(capsys):
    Printer().print(Domain(handle="H"))
    assert capsys.readouterr().out == "Domain:\n  Handle: H\n"