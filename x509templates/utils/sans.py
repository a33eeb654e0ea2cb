"""Subject Alternative Name helpers."""

import ipaddress
from typing import NamedTuple, Union
from urllib.parse import urlparse

from cryptography import x509

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]


class SplitSANs(NamedTuple):
    """SAN strings sorted by kind, each in input order."""

    dns_names: list[str]
    ip_addresses: list[IPAddress]
    email_addresses: list[str]
    uris: list[str]


def split_sans(sans: list[str]) -> SplitSANs:
    """
    Classify SAN strings into DNS names, IP addresses, emails and URIs.

    IP literals are IP addresses, values with a URI scheme (``https://...``,
    ``urn:...``, ``mailto:...``) are URIs, values containing "@" are emails
    and everything else is a DNS name. A remaining value containing ":",
    such as a bare ``host:port``, is rejected.

    Args:
        sans: SAN strings

    Returns:
        SplitSANs with one list per kind

    Raises:
        ValueError: If a value is neither a URI nor a DNS name

    Example:
        >>> split_sans(["example.com", "1.2.3.4", "a@example.com"]).email_addresses
        ['a@example.com']
    """
    result = SplitSANs([], [], [], [])
    for san in sans:
        try:
            result.ip_addresses.append(ipaddress.ip_address(san))
            continue
        except ValueError:
            pass

        parsed = urlparse(san)
        host_port = parsed.scheme and not parsed.netloc and parsed.path.isdigit()
        if parsed.scheme and not host_port:
            result.uris.append(san)
        elif "@" in san:
            result.email_addresses.append(san)
        elif ":" in san:
            raise ValueError(f"{san} is neither a URI nor a DNS name")
        else:
            result.dns_names.append(san)
    return result


def build_general_names(
    dns_names: list[str],
    ip_addresses: list[IPAddress],
    email_addresses: list[str],
    uris: list[str],
) -> list[x509.GeneralName]:
    """Return the general names of a SubjectAlternativeName extension."""
    names: list[x509.GeneralName] = []
    names.extend(x509.DNSName(name) for name in dns_names)
    names.extend(x509.IPAddress(ip) for ip in ip_addresses)
    names.extend(x509.RFC822Name(email) for email in email_addresses)
    names.extend(x509.UniformResourceIdentifier(uri) for uri in uris)
    return names
