"""Certificate request and certificate templates for X.509 issuance."""

from x509templates.exceptions import (
    AlgorithmTypeError,
    InternalInvariantError,
    RequestCreationError,
    TemplateError,
    TemplateFormatError,
    UnsupportedAlgorithmError,
)
from x509templates.models import (
    AlgorithmIdentifier,
    Certificate,
    CertificateRequest,
    ExtKeyUsage,
    KeyUsage,
    SignatureAlgorithm,
)
from x509templates.services import TemplateService, create_certificate_request

__version__ = "1.0.0"

__all__ = [
    "AlgorithmIdentifier",
    "SignatureAlgorithm",
    "Certificate",
    "CertificateRequest",
    "KeyUsage",
    "ExtKeyUsage",
    "TemplateService",
    "create_certificate_request",
    "TemplateError",
    "AlgorithmTypeError",
    "UnsupportedAlgorithmError",
    "TemplateFormatError",
    "RequestCreationError",
    "InternalInvariantError",
]
