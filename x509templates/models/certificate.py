"""Certificate template data models."""

from enum import Enum, IntFlag
from typing import Any, ClassVar, Optional

from cryptography import x509
from cryptography.x509.oid import ExtendedKeyUsageOID, ExtensionOID
from pydantic import BaseModel, ConfigDict, Field, IPvAnyAddress, field_serializer, field_validator, model_validator

from .algorithms import SignatureAlgorithm
from .extension import Extension
from .keys import PublicKeyAlgorithm
from .subject import Subject
from x509templates.utils.sans import build_general_names


class KeyUsage(IntFlag):
    """Key Usage bits, in the order of the X.509 bit string."""

    DIGITAL_SIGNATURE = 1 << 0
    CONTENT_COMMITMENT = 1 << 1
    KEY_ENCIPHERMENT = 1 << 2
    DATA_ENCIPHERMENT = 1 << 3
    KEY_AGREEMENT = 1 << 4
    CERT_SIGN = 1 << 5
    CRL_SIGN = 1 << 6
    ENCIPHER_ONLY = 1 << 7
    DECIPHER_ONLY = 1 << 8

    @classmethod
    def from_names(cls, names: list[str]) -> "KeyUsage":
        """
        Combine Key Usage names such as "digitalSignature".

        Raises:
            ValueError: If a name is not a Key Usage
        """
        usage = cls(0)
        for name in names:
            try:
                usage |= _KEY_USAGE_BY_NAME[name.lower()]
            except KeyError:
                raise ValueError(f"unsupported key usage '{name}'")
        return usage

    def names(self) -> list[str]:
        """Return the names of the bits that are set."""
        return [name for bit, name in _KEY_USAGE_NAMES if bit in self]

    def to_x509(self) -> x509.KeyUsage:
        return x509.KeyUsage(
            digital_signature=KeyUsage.DIGITAL_SIGNATURE in self,
            content_commitment=KeyUsage.CONTENT_COMMITMENT in self,
            key_encipherment=KeyUsage.KEY_ENCIPHERMENT in self,
            data_encipherment=KeyUsage.DATA_ENCIPHERMENT in self,
            key_agreement=KeyUsage.KEY_AGREEMENT in self,
            key_cert_sign=KeyUsage.CERT_SIGN in self,
            crl_sign=KeyUsage.CRL_SIGN in self,
            encipher_only=KeyUsage.ENCIPHER_ONLY in self,
            decipher_only=KeyUsage.DECIPHER_ONLY in self,
        )


# Names as used by OpenSSL and in templates
_KEY_USAGE_NAMES = (
    (KeyUsage.DIGITAL_SIGNATURE, "digitalSignature"),
    (KeyUsage.CONTENT_COMMITMENT, "contentCommitment"),
    (KeyUsage.KEY_ENCIPHERMENT, "keyEncipherment"),
    (KeyUsage.DATA_ENCIPHERMENT, "dataEncipherment"),
    (KeyUsage.KEY_AGREEMENT, "keyAgreement"),
    (KeyUsage.CERT_SIGN, "keyCertSign"),
    (KeyUsage.CRL_SIGN, "cRLSign"),
    (KeyUsage.ENCIPHER_ONLY, "encipherOnly"),
    (KeyUsage.DECIPHER_ONLY, "decipherOnly"),
)

_KEY_USAGE_BY_NAME = {name.lower(): bit for bit, name in _KEY_USAGE_NAMES}
_KEY_USAGE_BY_NAME["nonrepudiation"] = KeyUsage.CONTENT_COMMITMENT


class ExtKeyUsage(str, Enum):
    """Extended Key Usage purposes."""

    SERVER_AUTH = "serverAuth"
    CLIENT_AUTH = "clientAuth"
    CODE_SIGNING = "codeSigning"
    EMAIL_PROTECTION = "emailProtection"
    TIME_STAMPING = "timeStamping"
    OCSP_SIGNING = "OCSPSigning"

    @property
    def oid(self) -> x509.ObjectIdentifier:
        return _EKU_OIDS[self]


_EKU_OIDS = {
    ExtKeyUsage.SERVER_AUTH: ExtendedKeyUsageOID.SERVER_AUTH,
    ExtKeyUsage.CLIENT_AUTH: ExtendedKeyUsageOID.CLIENT_AUTH,
    ExtKeyUsage.CODE_SIGNING: ExtendedKeyUsageOID.CODE_SIGNING,
    ExtKeyUsage.EMAIL_PROTECTION: ExtendedKeyUsageOID.EMAIL_PROTECTION,
    ExtKeyUsage.TIME_STAMPING: ExtendedKeyUsageOID.TIME_STAMPING,
    ExtKeyUsage.OCSP_SIGNING: ExtendedKeyUsageOID.OCSP_SIGNING,
}


def _to_list(v):
    """Accept a single value or a list of values."""
    if v is None:
        return []
    if isinstance(v, (str, bytes)) or not isinstance(v, (list, tuple)):
        return [v]
    return list(v)


class TemplateFields(BaseModel):
    """Fields shared by request and certificate templates.

    ``public_key`` and ``public_key_algorithm`` are in-memory only: they are
    never written out, and template input cannot set them. Use
    ``set_public_key`` instead.
    """

    model_config = ConfigDict(populate_by_name=True)

    # Input keys dropped before validation
    memory_only_keys: ClassVar[frozenset[str]] = frozenset(
        {"publicKey", "public_key", "publicKeyAlgorithm", "public_key_algorithm"}
    )

    subject: Subject = Field(default_factory=Subject)
    dns_names: list[str] = Field(default_factory=list, alias="dnsNames")
    email_addresses: list[str] = Field(default_factory=list, alias="emailAddresses")
    ip_addresses: list[IPvAnyAddress] = Field(default_factory=list, alias="ipAddresses")
    uris: list[str] = Field(default_factory=list)
    extensions: list[Extension] = Field(default_factory=list)
    public_key: Optional[Any] = Field(None, exclude=True)
    public_key_algorithm: PublicKeyAlgorithm = Field(PublicKeyAlgorithm.UNKNOWN, exclude=True)

    @model_validator(mode="before")
    @classmethod
    def drop_memory_only_keys(cls, data):
        """Ignore in-memory fields present in template input."""
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if k not in cls.memory_only_keys}
        return data

    @field_validator("dns_names", "email_addresses", "ip_addresses", "uris", mode="before")
    @classmethod
    def convert_sans_to_list(cls, v):
        """Wrap a single SAN in a list."""
        return _to_list(v)

    @field_validator("extensions", mode="before")
    @classmethod
    def convert_none(cls, v):
        """Treat null as no extensions."""
        return [] if v is None else v

    def set_public_key(self, public_key, public_key_algorithm: Optional[PublicKeyAlgorithm] = None) -> None:
        """
        Attach key material to the template.

        Args:
            public_key: cryptography public key, or None
            public_key_algorithm: Algorithm identifier; derived from the key if omitted
        """
        if public_key_algorithm is None:
            public_key_algorithm = PublicKeyAlgorithm.of(public_key)
        self.public_key = public_key
        self.public_key_algorithm = public_key_algorithm

    def general_names(self) -> list[x509.GeneralName]:
        """Return all SANs as general names."""
        return build_general_names(self.dns_names, self.ip_addresses, self.email_addresses, self.uris)


class Certificate(TemplateFields):
    """Certificate template.

    Issuer, serial number and validity belong to the issuing side and are not
    part of the template.
    """

    key_usage: KeyUsage = Field(KeyUsage(0), alias="keyUsage")
    ext_key_usage: list[ExtKeyUsage] = Field(default_factory=list, alias="extKeyUsage")
    signature_algorithm: SignatureAlgorithm = Field(default_factory=SignatureAlgorithm, alias="signatureAlgorithm")

    @field_validator("key_usage", mode="plain")
    @classmethod
    def convert_key_usage(cls, v):
        """Accept a list of names, a single name or a bit mask."""
        if v is None:
            return KeyUsage(0)
        if isinstance(v, KeyUsage):
            return v
        if isinstance(v, bool):
            raise ValueError("key usage must be a list of names or a bit mask")
        if isinstance(v, int):
            return KeyUsage(v)
        return KeyUsage.from_names(_to_list(v))

    @field_validator("ext_key_usage", mode="before")
    @classmethod
    def convert_ext_key_usage(cls, v):
        """Wrap a single purpose in a list."""
        return _to_list(v)

    @field_serializer("key_usage")
    def serialize_key_usage(self, v: KeyUsage) -> list[str]:
        return v.names()

    def to_builder(self) -> x509.CertificateBuilder:
        """
        Return a certificate builder holding this template.

        Subject, public key, SANs, key usage, extended key usage and the
        template extensions are set. An extension in ``extensions`` replaces
        a generated one with the same OID.

        Returns:
            Builder still missing issuer, serial number and validity
        """
        subject = self.subject.to_name()
        generated: dict[x509.ObjectIdentifier, tuple[x509.ExtensionType, bool]] = {}

        names = self.general_names()
        if names:
            # SANs must be critical when the subject is empty
            generated[ExtensionOID.SUBJECT_ALTERNATIVE_NAME] = (x509.SubjectAlternativeName(names), len(subject) == 0)
        if self.key_usage:
            generated[ExtensionOID.KEY_USAGE] = (self.key_usage.to_x509(), True)
        if self.ext_key_usage:
            generated[ExtensionOID.EXTENDED_KEY_USAGE] = (
                x509.ExtendedKeyUsage([eku.oid for eku in self.ext_key_usage]),
                False,
            )
        for extension in self.extensions:
            generated[extension.oid] = (extension.to_x509(), extension.critical)

        builder = x509.CertificateBuilder().subject_name(subject)
        if self.public_key is not None:
            builder = builder.public_key(self.public_key)
        for value, critical in generated.values():
            builder = builder.add_extension(value, critical=critical)
        return builder
