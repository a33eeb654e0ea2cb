"""Pytest configuration and shared fixtures."""

import shutil
import tempfile
from pathlib import Path

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec, ed25519, rsa
from cryptography.x509.oid import NameOID

from x509templates.config import CONFIG_ENV_VAR, reset_config
from x509templates.models.request import CertificateRequest
from x509templates.models.subject import Subject


@pytest.fixture(scope="session")
def test_data_dir():
    """Create a temporary directory for test data."""
    temp_dir = tempfile.mkdtemp(prefix="x509templates_test_")
    yield Path(temp_dir)
    # Cleanup
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture(autouse=True)
def isolated_config(test_data_dir, monkeypatch):
    """Point configuration at a file that does not exist, so defaults apply."""
    monkeypatch.setenv(CONFIG_ENV_VAR, str(test_data_dir / "missing-config.yaml"))
    reset_config()
    yield
    reset_config()


@pytest.fixture(scope="session")
def rsa_key():
    """RSA 2048 private key."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def ec_key():
    """ECDSA P-256 private key."""
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture(scope="session")
def ec_p384_key():
    """ECDSA P-384 private key."""
    return ec.generate_private_key(ec.SECP384R1())


@pytest.fixture(scope="session")
def ed25519_key():
    """Ed25519 private key."""
    return ed25519.Ed25519PrivateKey.generate()


@pytest.fixture
def sample_subject():
    """Create a sample subject."""
    return Subject(common_name="test.example.com", organization=["Test Organization"], country=["US"])


@pytest.fixture
def rsa_request(rsa_key, sample_subject):
    """Certificate request template holding an RSA public key."""
    request = CertificateRequest(
        subject=sample_subject,
        dns_names=["test.example.com", "www.test.example.com"],
        email_addresses=["admin@example.com"],
        ip_addresses=["192.168.1.100"],
        uris=["https://example.com/id"],
    )
    request.set_public_key(rsa_key.public_key())
    return request


@pytest.fixture
def ec_request(ec_key, sample_subject):
    """Certificate request template holding an EC public key."""
    request = CertificateRequest(
        subject=sample_subject,
        dns_names=["test.example.com"],
    )
    request.set_public_key(ec_key.public_key())
    return request


@pytest.fixture
def signed_csr(ec_key):
    """CSR built directly with cryptography, with SANs and an extra extension."""
    return (
        x509.CertificateSigningRequestBuilder()
        .subject_name(
            x509.Name(
                [
                    x509.NameAttribute(NameOID.COUNTRY_NAME, "DE"),
                    x509.NameAttribute(NameOID.ORGANIZATION_NAME, "ACME Corp"),
                    x509.NameAttribute(NameOID.COMMON_NAME, "csr.example.com"),
                ]
            )
        )
        .add_extension(
            x509.SubjectAlternativeName(
                [
                    x509.DNSName("csr.example.com"),
                    x509.DNSName("csr.example.com"),
                    x509.RFC822Name("ops@example.com"),
                ]
            ),
            critical=False,
        )
        .add_extension(x509.BasicConstraints(ca=False, path_length=None), critical=True)
        .sign(ec_key, hashes.SHA256())
    )
