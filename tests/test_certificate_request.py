"""Tests for certificate request templates."""

import ipaddress

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.x509.oid import ExtensionOID

from x509templates.models.algorithms import AlgorithmIdentifier, SignatureAlgorithm
from x509templates.models.certificate import ExtKeyUsage, KeyUsage
from x509templates.models.extension import Extension
from x509templates.models.keys import PublicKeyAlgorithm
from x509templates.models.request import CertificateRequest


@pytest.mark.unit
class TestGetCertificate:
    """Test the plain certificate projection."""

    def test_copies_fields(self, rsa_request):
        """Test subject, SANs and key are copied."""
        cert = rsa_request.get_certificate()

        assert cert.subject == rsa_request.subject
        assert cert.dns_names == ["test.example.com", "www.test.example.com"]
        assert cert.email_addresses == ["admin@example.com"]
        assert cert.ip_addresses == [ipaddress.ip_address("192.168.1.100")]
        assert cert.uris == ["https://example.com/id"]
        assert cert.public_key is rsa_request.public_key
        assert cert.public_key_algorithm == rsa_request.public_key_algorithm

    def test_no_key_usage(self, rsa_request):
        """Test key usage and extended key usage stay empty."""
        cert = rsa_request.get_certificate()

        assert cert.key_usage == KeyUsage(0)
        assert cert.ext_key_usage == []

    def test_drops_signature(self, signed_csr):
        """Test the signature algorithm is not carried over."""
        request = CertificateRequest.from_x509(signed_csr)
        assert not request.signature_algorithm.is_unknown

        cert = request.get_certificate()
        assert cert.signature_algorithm.is_unknown

    def test_independent_copy(self, rsa_request):
        """Test changing the projection leaves the request alone and vice versa."""
        rsa_request.extensions.append(Extension(id="1.2.3.4", value=b"\x05\x00"))
        cert = rsa_request.get_certificate()

        cert.dns_names.append("other.example.com")
        cert.subject.organization.append("Other")
        cert.extensions.clear()
        rsa_request.uris.append("https://example.com/later")

        assert rsa_request.dns_names == ["test.example.com", "www.test.example.com"]
        assert rsa_request.subject.organization == ["Test Organization"]
        assert len(rsa_request.extensions) == 1
        assert cert.uris == ["https://example.com/id"]

    def test_keeps_duplicates_and_order(self):
        """Test SAN lists are copied as given."""
        request = CertificateRequest(dns_names=["b.example.com", "a.example.com", "b.example.com"])
        assert request.get_certificate().dns_names == ["b.example.com", "a.example.com", "b.example.com"]


@pytest.mark.unit
class TestGetLeafCertificate:
    """Test the leaf certificate projection."""

    def test_rsa_key(self, rsa_request):
        """Test RSA keys get digitalSignature and keyEncipherment."""
        cert = rsa_request.get_leaf_certificate()

        assert cert.key_usage == KeyUsage.DIGITAL_SIGNATURE | KeyUsage.KEY_ENCIPHERMENT
        assert cert.ext_key_usage == [ExtKeyUsage.SERVER_AUTH, ExtKeyUsage.CLIENT_AUTH]

    def test_ec_key(self, ec_request):
        """Test EC keys get digitalSignature only."""
        cert = ec_request.get_leaf_certificate()

        assert cert.key_usage == KeyUsage.DIGITAL_SIGNATURE
        assert cert.ext_key_usage == [ExtKeyUsage.SERVER_AUTH, ExtKeyUsage.CLIENT_AUTH]

    def test_ed25519_key(self, ed25519_key):
        """Test Ed25519 keys get digitalSignature only."""
        request = CertificateRequest()
        request.set_public_key(ed25519_key.public_key())
        assert request.get_leaf_certificate().key_usage == KeyUsage.DIGITAL_SIGNATURE

    def test_no_key(self):
        """Test a template without key material."""
        cert = CertificateRequest().get_leaf_certificate()
        assert cert.key_usage == KeyUsage.DIGITAL_SIGNATURE

    def test_key_type_not_algorithm_field(self, ec_key):
        """Test the decision follows the key object, not public_key_algorithm."""
        request = CertificateRequest()
        request.set_public_key(ec_key.public_key(), PublicKeyAlgorithm.RSA)
        assert request.get_leaf_certificate().key_usage == KeyUsage.DIGITAL_SIGNATURE

    def test_source_unchanged(self, rsa_request):
        """Test the request is not modified."""
        before = rsa_request.model_dump()
        rsa_request.get_leaf_certificate()
        assert rsa_request.model_dump() == before


@pytest.mark.unit
class TestFromX509:
    """Test building templates from parsed CSRs."""

    def test_from_x509(self, signed_csr, ec_key):
        """Test subject, SANs, extensions and key are read."""
        request = CertificateRequest.from_x509(signed_csr)

        assert request.version == 0
        assert request.subject.common_name == "csr.example.com"
        assert request.subject.organization == ["ACME Corp"]
        assert request.subject.country == ["DE"]
        assert request.dns_names == ["csr.example.com", "csr.example.com"]
        assert request.email_addresses == ["ops@example.com"]
        assert request.ip_addresses == []
        assert request.uris == []
        assert request.public_key_algorithm == PublicKeyAlgorithm.ECDSA
        assert request.signature == signed_csr.signature
        assert request.signature_algorithm == SignatureAlgorithm(AlgorithmIdentifier.ECDSA_WITH_SHA256)

        ids = [ext.id for ext in request.extensions]
        assert ExtensionOID.SUBJECT_ALTERNATIVE_NAME.dotted_string in ids
        assert ExtensionOID.BASIC_CONSTRAINTS.dotted_string in ids
        basic = next(ext for ext in request.extensions if ext.id == ExtensionOID.BASIC_CONSTRAINTS.dotted_string)
        assert basic.critical is True

        fmt = (serialization.Encoding.DER, serialization.PublicFormat.SubjectPublicKeyInfo)
        assert request.public_key.public_bytes(*fmt) == ec_key.public_key().public_bytes(*fmt)

    def test_from_pem_and_der(self, signed_csr):
        """Test parsing encoded CSRs."""
        pem = signed_csr.public_bytes(serialization.Encoding.PEM)
        der = signed_csr.public_bytes(serialization.Encoding.DER)

        assert CertificateRequest.from_pem(pem).subject == CertificateRequest.from_der(der).subject


@pytest.mark.unit
class TestRequestJSON:
    """Test the JSON representation."""

    def test_keys(self, rsa_request):
        """Test field names and excluded in-memory fields."""
        data = rsa_request.model_dump(mode="json", by_alias=True)

        assert set(data) == {"version", "subject", "dnsNames", "emailAddresses", "ipAddresses", "uris", "extensions"}
        assert data["ipAddresses"] == ["192.168.1.100"]
        assert data["subject"]["commonName"] == "test.example.com"

    def test_signature_fields_not_serialized(self, signed_csr):
        """Test signature and algorithm stay out of JSON."""
        text = CertificateRequest.from_x509(signed_csr).model_dump_json(by_alias=True)

        assert "signature" not in text
        assert "publicKey" not in text

    def test_memory_only_fields_ignored_on_input(self):
        """Test key and signature fields in template input are not read."""
        request = CertificateRequest.model_validate_json(
            '{"dnsNames": ["x.example.com"], "publicKey": "junk", "publicKeyAlgorithm": 1,'
            ' "signature": "abc", "signatureAlgorithm": "bogus"}'
        )

        assert request.dns_names == ["x.example.com"]
        assert request.public_key is None
        assert request.public_key_algorithm == PublicKeyAlgorithm.UNKNOWN
        assert request.signature == b""
        assert request.signature_algorithm.is_unknown

    def test_memory_only_field_names_ignored_on_input(self):
        """Test python field names cannot set the in-memory fields either."""
        request = CertificateRequest.model_validate(
            {"public_key": "junk", "public_key_algorithm": 1, "signature_algorithm": "SHA256-RSA"}
        )

        assert request.public_key is None
        assert request.public_key_algorithm == PublicKeyAlgorithm.UNKNOWN
        assert request.signature_algorithm.is_unknown

    def test_ignored_key_does_not_break_builder(self):
        """Test a template with a junk key still builds a certificate."""
        request = CertificateRequest.model_validate({"subject": {"commonName": "x"}, "publicKey": "junk"})
        builder = request.get_leaf_certificate().to_builder()

        assert builder is not None

    def test_single_values(self):
        """Test single strings are accepted for list fields."""
        request = CertificateRequest.model_validate(
            {"subject": {"commonName": "x", "organization": "Org"}, "dnsNames": "x.example.com", "uris": None}
        )

        assert request.dns_names == ["x.example.com"]
        assert request.uris == []
        assert request.subject.organization == ["Org"]
