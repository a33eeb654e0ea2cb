"""Data models for x509templates."""

from .algorithms import ALGORITHMS, AlgorithmIdentifier, SignatureAlgorithm
from .certificate import Certificate, ExtKeyUsage, KeyUsage
from .config import AppConfig
from .extension import Extension
from .keys import KeyType, PublicKeyAlgorithm
from .request import CertificateRequest
from .subject import Subject

__all__ = [
    "ALGORITHMS",
    "AlgorithmIdentifier",
    "SignatureAlgorithm",
    "KeyType",
    "PublicKeyAlgorithm",
    "Subject",
    "Extension",
    "Certificate",
    "CertificateRequest",
    "KeyUsage",
    "ExtKeyUsage",
    "AppConfig",
]
