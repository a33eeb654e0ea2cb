"""Signature algorithm names.

Templates refer to signature algorithms by a canonical name such as
``ECDSA-SHA256`` instead of by OID. The registry below is the only place the
names are defined; it is built at import time and never modified.
"""

import json
from enum import IntEnum
from types import MappingProxyType
from typing import Any, NamedTuple, Optional, Union

from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.x509.oid import SignatureAlgorithmOID
from pydantic_core import core_schema

from x509templates.exceptions import AlgorithmTypeError, TemplateError, UnsupportedAlgorithmError
from x509templates.models.keys import KeyType


class AlgorithmIdentifier(IntEnum):
    """Signature algorithm identifiers."""

    UNKNOWN = 0
    MD2_WITH_RSA = 1
    MD5_WITH_RSA = 2
    SHA1_WITH_RSA = 3
    SHA256_WITH_RSA = 4
    SHA384_WITH_RSA = 5
    SHA512_WITH_RSA = 6
    DSA_WITH_SHA1 = 7
    DSA_WITH_SHA256 = 8
    ECDSA_WITH_SHA1 = 9
    ECDSA_WITH_SHA256 = 10
    ECDSA_WITH_SHA384 = 11
    ECDSA_WITH_SHA512 = 12
    SHA256_WITH_RSAPSS = 13
    SHA384_WITH_RSAPSS = 14
    SHA512_WITH_RSAPSS = 15
    PURE_ED25519 = 16


class AlgorithmEntry(NamedTuple):
    """One registry row."""

    identifier: AlgorithmIdentifier
    name: str
    oid: x509.ObjectIdentifier
    hash_name: Optional[str]  # cryptography hash name, None for pure signatures


# cryptography has no constant for md2WithRSAEncryption
MD2_WITH_RSA_OID = x509.ObjectIdentifier("1.2.840.113549.1.1.2")

_ID = AlgorithmIdentifier
_OID = SignatureAlgorithmOID

ALGORITHMS = (
    AlgorithmEntry(_ID.MD2_WITH_RSA, "MD2-RSA", MD2_WITH_RSA_OID, "md2"),
    AlgorithmEntry(_ID.MD5_WITH_RSA, "MD5-RSA", _OID.RSA_WITH_MD5, "md5"),
    AlgorithmEntry(_ID.SHA1_WITH_RSA, "SHA1-RSA", _OID.RSA_WITH_SHA1, "sha1"),
    AlgorithmEntry(_ID.SHA256_WITH_RSA, "SHA256-RSA", _OID.RSA_WITH_SHA256, "sha256"),
    AlgorithmEntry(_ID.SHA384_WITH_RSA, "SHA384-RSA", _OID.RSA_WITH_SHA384, "sha384"),
    AlgorithmEntry(_ID.SHA512_WITH_RSA, "SHA512-RSA", _OID.RSA_WITH_SHA512, "sha512"),
    AlgorithmEntry(_ID.SHA256_WITH_RSAPSS, "SHA256-RSAPSS", _OID.RSASSA_PSS, "sha256"),
    AlgorithmEntry(_ID.SHA384_WITH_RSAPSS, "SHA384-RSAPSS", _OID.RSASSA_PSS, "sha384"),
    AlgorithmEntry(_ID.SHA512_WITH_RSAPSS, "SHA512-RSAPSS", _OID.RSASSA_PSS, "sha512"),
    AlgorithmEntry(_ID.DSA_WITH_SHA1, "DSA-SHA1", _OID.DSA_WITH_SHA1, "sha1"),
    AlgorithmEntry(_ID.DSA_WITH_SHA256, "DSA-SHA256", _OID.DSA_WITH_SHA256, "sha256"),
    AlgorithmEntry(_ID.ECDSA_WITH_SHA1, "ECDSA-SHA1", _OID.ECDSA_WITH_SHA1, "sha1"),
    AlgorithmEntry(_ID.ECDSA_WITH_SHA256, "ECDSA-SHA256", _OID.ECDSA_WITH_SHA256, "sha256"),
    AlgorithmEntry(_ID.ECDSA_WITH_SHA384, "ECDSA-SHA384", _OID.ECDSA_WITH_SHA384, "sha384"),
    AlgorithmEntry(_ID.ECDSA_WITH_SHA512, "ECDSA-SHA512", _OID.ECDSA_WITH_SHA512, "sha512"),
    AlgorithmEntry(_ID.PURE_ED25519, "Ed25519", _OID.ED25519, None),
)

ALGORITHMS_BY_IDENTIFIER = MappingProxyType({entry.identifier: entry for entry in ALGORITHMS})
ALGORITHMS_BY_NAME = MappingProxyType({entry.name: entry for entry in ALGORITHMS})

_HASHES = MappingProxyType(
    {
        "md5": hashes.MD5,
        "sha1": hashes.SHA1,
        "sha256": hashes.SHA256,
        "sha384": hashes.SHA384,
        "sha512": hashes.SHA512,
    }
)

# Default algorithm per elliptic curve, keyed by cryptography's curve name
_ECDSA_BY_CURVE = MappingProxyType(
    {
        "secp256r1": AlgorithmIdentifier.ECDSA_WITH_SHA256,
        "secp384r1": AlgorithmIdentifier.ECDSA_WITH_SHA384,
        "secp521r1": AlgorithmIdentifier.ECDSA_WITH_SHA512,
    }
)


def lookup_name(name: str) -> AlgorithmEntry:
    """
    Find the registry entry for a canonical name, ignoring case.

    Args:
        name: Algorithm name, e.g. "ecdsa-sha256"

    Returns:
        Matching registry entry

    Raises:
        UnsupportedAlgorithmError: If no canonical name matches
    """
    wanted = name.lower()
    for entry in ALGORITHMS:
        if entry.name.lower() == wanted:
            return entry
    raise UnsupportedAlgorithmError(name)


def lookup_oid(oid: x509.ObjectIdentifier, hash_name: Optional[str] = None) -> Optional[AlgorithmEntry]:
    """
    Find the registry entry for a signature OID.

    RSASSA-PSS uses a single OID for every hash, so for PSS the hash name is
    needed to pick the entry.

    Args:
        oid: Signature algorithm OID
        hash_name: cryptography hash name ("sha256", ...), if known

    Returns:
        Matching registry entry, or None
    """
    for entry in ALGORITHMS:
        if entry.oid != oid:
            continue
        if oid == SignatureAlgorithmOID.RSASSA_PSS and entry.hash_name != hash_name:
            continue
        return entry
    return None


class SignatureAlgorithm:
    """Immutable wrapper around an algorithm identifier.

    Serializes to its canonical name, or to "" when the algorithm is unknown.
    Can be used directly as a pydantic field type.
    """

    __slots__ = ("_identifier",)

    def __init__(self, identifier: Union[int, AlgorithmIdentifier] = AlgorithmIdentifier.UNKNOWN):
        object.__setattr__(self, "_identifier", AlgorithmIdentifier(identifier))

    def __setattr__(self, name, value):
        raise AttributeError("SignatureAlgorithm is immutable")

    @property
    def identifier(self) -> AlgorithmIdentifier:
        return self._identifier

    @property
    def entry(self) -> Optional[AlgorithmEntry]:
        return ALGORITHMS_BY_IDENTIFIER.get(self._identifier)

    @property
    def oid(self) -> Optional[x509.ObjectIdentifier]:
        entry = self.entry
        return entry.oid if entry else None

    @property
    def is_unknown(self) -> bool:
        return self._identifier == AlgorithmIdentifier.UNKNOWN

    @property
    def is_pss(self) -> bool:
        return self.oid == SignatureAlgorithmOID.RSASSA_PSS

    def __eq__(self, other):
        if isinstance(other, SignatureAlgorithm):
            return self._identifier == other._identifier
        return NotImplemented

    def __hash__(self):
        return hash((SignatureAlgorithm, self._identifier))

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __reduce__(self):
        return (SignatureAlgorithm, (int(self._identifier),))

    def __repr__(self):
        return f"SignatureAlgorithm({self._identifier.name})"

    def __str__(self):
        return self.to_text()

    def set(self, target: Any) -> None:
        """Write this algorithm into the target's ``signature_algorithm`` field."""
        target.signature_algorithm = self

    def to_text(self) -> str:
        """Return the canonical name, "" if unknown."""
        entry = self.entry
        return entry.name if entry else ""

    def marshal_json(self) -> bytes:
        """Return the JSON string literal of the canonical name."""
        return json.dumps(self.to_text()).encode("utf-8")

    @classmethod
    def from_text(cls, data: Any) -> "SignatureAlgorithm":
        """
        Build a value from a decoded JSON/YAML scalar.

        None and "" give the unknown algorithm. Any other string is matched
        case-insensitively against the canonical names.

        Args:
            data: Decoded value

        Returns:
            New SignatureAlgorithm

        Raises:
            AlgorithmTypeError: If data is neither None nor a string
            UnsupportedAlgorithmError: If no canonical name matches
        """
        if data is None:
            return cls()
        if not isinstance(data, str):
            raise AlgorithmTypeError(data)
        if data == "":
            return cls()
        return cls(lookup_name(data).identifier)

    @classmethod
    def unmarshal_json(cls, data: Union[str, bytes]) -> "SignatureAlgorithm":
        """Build a value from raw JSON text, e.g. ``b'"SHA256-RSA"'``."""
        return cls.from_text(json.loads(data))

    @classmethod
    def from_oid(
        cls, oid: x509.ObjectIdentifier, hash_algorithm: Optional[hashes.HashAlgorithm] = None
    ) -> "SignatureAlgorithm":
        """Build a value from a signature OID; unknown OIDs give the unknown algorithm."""
        entry = lookup_oid(oid, hash_algorithm.name if hash_algorithm is not None else None)
        return cls(entry.identifier) if entry else cls()

    @classmethod
    def from_x509(cls, obj) -> "SignatureAlgorithm":
        """Read the signature algorithm of a parsed certificate or CSR."""
        try:
            hash_algorithm = obj.signature_hash_algorithm
        except UnsupportedAlgorithm:
            hash_algorithm = None
        return cls.from_oid(obj.signature_algorithm_oid, hash_algorithm)

    @classmethod
    def for_key(cls, key) -> "SignatureAlgorithm":
        """
        Pick the default signature algorithm for a key.

        Args:
            key: Public or private key object

        Returns:
            Default algorithm, unknown for Ed448, unnamed curves and other keys
        """
        key_type = KeyType.of(key)
        if key_type == KeyType.RSA:
            return cls(AlgorithmIdentifier.SHA256_WITH_RSA)
        elif key_type == KeyType.EC:
            return cls(_ECDSA_BY_CURVE.get(key.curve.name, AlgorithmIdentifier.UNKNOWN))
        elif key_type == KeyType.ED25519:
            return cls(AlgorithmIdentifier.PURE_ED25519)
        elif key_type == KeyType.DSA:
            return cls(AlgorithmIdentifier.DSA_WITH_SHA256)
        return cls()

    def hash_algorithm(self) -> Optional[hashes.HashAlgorithm]:
        """
        Return the hash to sign with.

        Returns:
            cryptography hash instance, None for unknown and pure algorithms

        Raises:
            UnsupportedAlgorithmError: If cryptography cannot hash with it (MD2)
        """
        entry = self.entry
        if entry is None or entry.hash_name is None:
            return None
        hash_cls = _HASHES.get(entry.hash_name)
        if hash_cls is None:
            raise UnsupportedAlgorithmError(entry.name)
        return hash_cls()

    @classmethod
    def _validate(cls, value: Any) -> "SignatureAlgorithm":
        if isinstance(value, SignatureAlgorithm):
            return value
        try:
            return cls.from_text(value)
        except TemplateError as e:
            # pydantic only wraps ValueError into ValidationError
            raise ValueError(str(e)) from e

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type, handler):
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(lambda value: value.to_text()),
        )
