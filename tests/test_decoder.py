from dataclasses import dataclass, field
from typing import Dict, List, Optional

import pytest

from rdapkit.decoder import Decoder, DecoderError, decode
from rdapkit.models import (
    DecodeData,
    Domain,
    DomainSearchResults,
    Entity,
    ErrorResponse,
    Help,
    Nameserver,
)
from rdapkit.vcard import VCard


def _bounded(bits, signed=False):
    if signed:
        int_range = (-(2 ** (bits - 1)), 2 ** (bits - 1) - 1)
    else:
        int_range = (0, 2**bits - 1)
    return field(default=0, metadata={"range": int_range})


@dataclass
class Empty:
    pass


@dataclass
class WithDecodeData:
    decode_data: Optional[DecodeData] = field(default=None, compare=False)
    s1: str = ""
    s2: str = field(default="", metadata={"rdap": "s2Name"})
    s_f: str = ""


@dataclass
class WithVCard:
    v_card: Optional[VCard] = None


@dataclass
class WithSlice:
    s: List[str] = field(default_factory=list)


@dataclass
class WithMap:
    m: Dict[str, str] = field(default_factory=dict)


@dataclass
class Uints:
    a: int = _bounded(8)
    a_overflow: int = _bounded(8)
    b: int = _bounded(16)
    c: int = _bounded(32)
    d: int = _bounded(64)
    s: int = _bounded(8)
    b_f: int = _bounded(8)
    b_t: int = _bounded(8)
    n: int = _bounded(8)


@dataclass
class Ints:
    a: int = _bounded(8, signed=True)
    a_underflow: int = _bounded(8, signed=True)
    a_overflow: int = _bounded(8, signed=True)
    b: int = _bounded(16, signed=True)
    c: int = _bounded(32, signed=True)
    d: int = _bounded(64, signed=True)
    s: int = _bounded(8, signed=True)
    b_f: int = _bounded(8, signed=True)
    b_t: int = _bounded(8, signed=True)
    n: int = _bounded(8, signed=True)


@dataclass
class Floats:
    f: float = 0.0
    f_ptr: Optional[float] = None
    s1: float = 0.0
    s2: float = 0.0
    b_f: float = 0.0
    b_t: float = 0.0
    n: float = 0.0


@dataclass
class Bools:
    b: bool = False
    b_ptr: Optional[bool] = None
    s_f: bool = False
    s_t: bool = False
    f_f: bool = False
    f_t: bool = False
    n: bool = False


@dataclass
class Strings:
    s: str = ""
    s_ptr: Optional[str] = None
    b_t: str = ""
    b_f: str = ""
    f1: str = ""
    f2: str = ""
    n: str = ""


@dataclass
class Mismatched:
    a: List[str] = field(default_factory=list)
    b: Dict[str, str] = field(default_factory=dict)
    c: Empty = field(default_factory=Empty)


@dataclass
class Notes:
    decode_data: Optional[DecodeData] = field(default=None, compare=False)
    u: int = _bounded(8)
    flag: bool = False
    ratio: float = 0.0
    counts: Dict[str, int] = field(default_factory=dict)
    names: List[str] = field(default_factory=list)


def run(target, blob):
    return Decoder(blob, target=target).decode()


def test_decode_empty():
    assert run(Empty, "{}") == Empty()


def test_decode_decode_data():
    result = run(WithDecodeData, """
        {"s1": "S1", "s2Name": "S2", "sF": 1.5, "unknown": "value"}
    """)
    assert (result.s1, result.s2, result.s_f) == ("S1", "S2", "1.5")
    dd = result.decode_data
    assert dd.notes("sF") == ["float64 to string conversion"]
    assert len(dd.fields()) == 4
    assert dd.unknown_fields() == ["unknown"]
    assert dd.value("unknown") == "value"


def test_decode_vcard():
    result = run(WithVCard, """
        {"vCard": ["vcard", [["version", {}, "text", "4.0"], ["fn", {}, "text", "First Last"]]]}
    """)
    assert len(result.v_card.properties) == 2
    assert result.v_card.name() == "First Last"


def test_decode_slice():
    assert run(WithSlice, '{"s": ["a", "b"]}') == WithSlice(s=["a", "b"])


def test_decode_slice_drops_invalid_elements():
    assert run(WithSlice, '{"s": ["a", [1], "b", {}]}') == WithSlice(s=["a", "b"])


def test_decode_map():
    result = run(WithMap, '{"m": {"a": "av", "b": "bv"}}')
    assert result == WithMap(m={"a": "av", "b": "bv"})


def test_decode_uints():
    result = run(Uints, """
        {"a": 100, "aOverflow": 256, "b": 200, "c": 42, "d": 43,
         "s": "10", "bF": false, "bT": true, "n": null}
    """)
    assert result == Uints(a=100, a_overflow=0, b=200, c=42, d=43, s=10, b_f=0, b_t=1, n=0)


def test_decode_ints():
    result = run(Ints, """
        {"a": 100, "aUnderflow": -129, "aOverflow": 128, "b": 200, "c": 42, "d": 43,
         "s": "10", "bF": false, "bT": true, "n": null}
    """)
    assert result == Ints(
        a=100, a_underflow=0, a_overflow=0, b=200, c=42, d=43, s=10, b_f=0, b_t=1, n=0
    )


def test_decode_float64():
    result = run(Floats, """
        {"f": 1.5, "fPtr": 1.5, "s1": "1.5", "s2": "-1.5", "bF": false, "bT": true, "n": null}
    """)
    assert result == Floats(f=1.5, f_ptr=1.5, s1=1.5, s2=-1.5, b_f=0.0, b_t=1.0, n=0.0)


def test_decode_bool():
    result = run(Bools, """
        {"b": true, "bPtr": true, "sF": "false", "sT": "true", "fF": 0, "fT": 1, "n": null}
    """)
    assert result == Bools(b=True, b_ptr=True, s_f=False, s_t=True, f_f=False, f_t=True, n=False)


def test_decode_string():
    result = run(Strings, """
        {"s": "test", "sPtr": "sptr", "bT": true, "bF": false,
         "f1": 1.0, "f2": -3.14, "n2": null}
    """)
    assert result == Strings(s="test", s_ptr="sptr", b_t="true", b_f="false",
                             f1="1", f2="-3.14", n="")


def test_decode_mismatched_types():
    result = run(Mismatched, '{"a": {}, "b": [1, 2, 3], "c": false}')
    assert result == Mismatched()


def test_float_truncated_to_int():
    result = run(Notes, '{"u": 100.9}')
    assert result.u == 100


def test_negative_string_rejected_for_unsigned():
    result = run(Notes, '{"u": "-1"}')
    assert result.u == 0
    assert result.decode_data.notes("u") == ["error converting string to uint"]


def test_domain_response():
    result = decode("""
    {
      "objectClassName": "domain",
      "rdapConformance": ["rdap_level_0"],
      "handle": "EXAMPLECOM",
      "ldhName": "example.com",
      "entities": [
        {"objectClassName": "entity", "handle": "E1", "roles": ["registrant"],
         "vcardArray": ["vcard", [["fn", {}, "text", "Jane Doe"]]]}
      ],
      "nameservers": [{"ldhName": "ns1.example.com", "ipAddresses": {"v4": ["192.0.2.1"]}}],
      "secureDNS": {"delegationSigned": true,
                    "dsData": [{"keyTag": "12345", "algorithm": 300}]},
      "customField": "x"
    }
    """)
    assert isinstance(result, Domain)
    assert result.conformance == ["rdap_level_0"]
    assert result.handle == "EXAMPLECOM"
    assert result.ldh_name == "example.com"
    assert result.entities[0].roles == ["registrant"]
    assert result.entities[0].vcard.name() == "Jane Doe"
    assert result.nameservers[0].ip_addresses.v4 == ["192.0.2.1"]
    assert result.secure_dns.delegation_signed is True
    assert result.secure_dns.zone_signed is None
    ds = result.secure_dns.ds[0]
    assert ds.key_tag == 12345
    assert ds.algorithm == 0
    assert ds.decode_data.notes("keyTag") == ["string to uint conversion"]
    assert ds.decode_data.notes("algorithm") == [
        "float64 to uint conversion",
        "error: number too large",
    ]
    assert result.decode_data.unknown_fields() == ["customField"]


def test_invalid_vcard_is_noted():
    result = decode('{"objectClassName": "entity", "handle": "H", "vcardArray": ["nope"]}')
    assert isinstance(result, Entity)
    assert result.vcard is None
    assert result.decode_data.notes("vcardArray") == [
        "jCard error: structure is not a jCard (expected len=2 top level array)"
    ]


def test_nameserver_response():
    result = decode('{"objectClassName": "nameserver", "ldhName": "ns.example"}')
    assert isinstance(result, Nameserver)
    assert result.ldh_name == "ns.example"


def test_error_response_takes_precedence():
    result = decode("""
        {"errorCode": 404, "objectClassName": "bogus", "title": "Not Found",
         "description": ["missing"]}
    """)
    assert isinstance(result, ErrorResponse)
    assert result.error_code == 404
    assert result.title == "Not Found"
    assert result.description == ["missing"]


def test_search_results_response():
    result = decode('{"domainSearchResults": [{"ldhName": "a.example"}, {"ldhName": "b.example"}]}')
    assert isinstance(result, DomainSearchResults)
    assert [d.ldh_name for d in result.domains] == ["a.example", "b.example"]


def test_help_is_default():
    result = decode('{"rdapConformance": ["rdap_level_0"], "notices": [{"title": "T"}]}')
    assert isinstance(result, Help)
    assert result.conformance == ["rdap_level_0"]
    assert result.notices[0].title == "T"


def test_null_document_is_empty_help():
    result = decode("null")
    assert isinstance(result, Help)
    assert result.conformance == []


@pytest.mark.parametrize(
    "blob, message",
    [
        ('{"objectClassName": 5}', "objectClassName is not a string"),
        ('{"objectClassName": "widget"}', "objectClassName is not recognised"),
    ],
)
def test_bad_object_class_name(blob, message):
    with pytest.raises(DecoderError, match=message):
        decode(blob)


@pytest.mark.parametrize("blob", ["{", "[1, 2]", '{"a": NaN}', '"text"'])
def test_invalid_documents(blob):
    with pytest.raises(DecoderError):
        decode(blob)


def test_bytes_input():
    result = decode(b'{"objectClassName": "domain", "ldhName": "example.org"}')
    assert result.ldh_name == "example.org"