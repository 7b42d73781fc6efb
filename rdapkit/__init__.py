"""RDAP request URLs, response decoding, jCard parsing and WHOIS-style text output."""

__version__ = "0.1.0"
__all__ = ["decoder", "models", "printer", "request", "response", "vcard"]