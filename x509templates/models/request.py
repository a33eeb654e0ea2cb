"""Certificate request template data models."""

from typing import ClassVar

from cryptography import x509
from cryptography.x509.oid import ExtensionOID
from pydantic import ConfigDict, Field

from .algorithms import SignatureAlgorithm
from .certificate import Certificate, ExtKeyUsage, KeyUsage, TemplateFields
from .extension import Extension
from .keys import KeyType
from .subject import Subject

# Extended key usage of every leaf certificate
LEAF_EXT_KEY_USAGE = (ExtKeyUsage.SERVER_AUTH, ExtKeyUsage.CLIENT_AUTH)


class CertificateRequest(TemplateFields):
    """Certificate request template.

    ``signature`` and ``signature_algorithm`` are kept in memory only, like
    the public key: they are filled by ``from_x509`` and ignored in template
    input.
    """

    memory_only_keys: ClassVar[frozenset[str]] = TemplateFields.memory_only_keys | {
        "signature",
        "signatureAlgorithm",
        "signature_algorithm",
    }

    version: int = 0
    signature: bytes = Field(b"", exclude=True)
    signature_algorithm: SignatureAlgorithm = Field(default_factory=SignatureAlgorithm, exclude=True)

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "version": 0,
                "subject": {"commonName": "example.com", "organization": "Example Inc"},
                "dnsNames": ["example.com", "www.example.com"],
                "ipAddresses": ["192.168.1.100"],
                "emailAddresses": [],
                "uris": [],
                "extensions": [],
            }
        },
    )

    @classmethod
    def from_x509(cls, csr: x509.CertificateSigningRequest) -> "CertificateRequest":
        """
        Build a template from a parsed certificate request.

        Args:
            csr: Parsed CSR

        Returns:
            CertificateRequest owning copies of the CSR fields
        """
        try:
            san = csr.extensions.get_extension_for_oid(ExtensionOID.SUBJECT_ALTERNATIVE_NAME).value
        except x509.ExtensionNotFound:
            san = x509.SubjectAlternativeName([])

        request = cls(
            subject=Subject.from_name(csr.subject),
            dns_names=san.get_values_for_type(x509.DNSName),
            email_addresses=san.get_values_for_type(x509.RFC822Name),
            ip_addresses=san.get_values_for_type(x509.IPAddress),
            uris=san.get_values_for_type(x509.UniformResourceIdentifier),
            extensions=[Extension.from_x509(ext) for ext in csr.extensions],
        )
        request.set_public_key(csr.public_key())
        request.signature = csr.signature
        request.signature_algorithm = SignatureAlgorithm.from_x509(csr)
        return request

    @classmethod
    def from_pem(cls, data: bytes) -> "CertificateRequest":
        """Parse a PEM-encoded CSR into a template."""
        return cls.from_x509(x509.load_pem_x509_csr(data))

    @classmethod
    def from_der(cls, data: bytes) -> "CertificateRequest":
        """Parse a DER-encoded CSR into a template."""
        return cls.from_x509(x509.load_der_x509_csr(data))

    def get_certificate(self) -> Certificate:
        """
        Return the unsigned certificate template for this request.

        Signature and signature algorithm are not copied; key usage and
        extended key usage are left empty.
        """
        cert = Certificate(
            subject=self.subject.model_copy(deep=True),
            dns_names=list(self.dns_names),
            email_addresses=list(self.email_addresses),
            ip_addresses=list(self.ip_addresses),
            uris=list(self.uris),
            extensions=[ext.model_copy() for ext in self.extensions],
        )
        cert.set_public_key(self.public_key, self.public_key_algorithm)
        return cert

    def get_leaf_certificate(self) -> Certificate:
        """
        Return the certificate template of a TLS leaf for this request.

        Key usage is digitalSignature, plus keyEncipherment for RSA keys.
        Extended key usage is serverAuth and clientAuth.
        """
        key_usage = KeyUsage.DIGITAL_SIGNATURE
        if KeyType.of(self.public_key) == KeyType.RSA:
            key_usage |= KeyUsage.KEY_ENCIPHERMENT

        cert = self.get_certificate()
        cert.key_usage = key_usage
        cert.ext_key_usage = list(LEAF_EXT_KEY_USAGE)
        return cert
