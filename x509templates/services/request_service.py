"""Certificate request creation service."""

import logging
from typing import Optional

from cryptography import x509
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import padding
from cryptography.x509.oid import NameOID

from x509templates.config import get_config
from x509templates.exceptions import InternalInvariantError, RequestCreationError
from x509templates.models.algorithms import SignatureAlgorithm
from x509templates.utils.sans import build_general_names, split_sans

logger = logging.getLogger("x509templates")


def _sign(builder: x509.CertificateSigningRequestBuilder, signer, algorithm: SignatureAlgorithm):
    """Sign the request, adding PSS padding for RSASSA-PSS algorithms."""
    hash_algorithm = algorithm.hash_algorithm()
    if algorithm.is_pss:
        return builder.sign(
            signer,
            hash_algorithm,
            rsa_padding=padding.PSS(mgf=padding.MGF1(hash_algorithm), salt_length=padding.PSS.DIGEST_LENGTH),
        )
    return builder.sign(signer, hash_algorithm)


def create_certificate_request(
    common_name: str,
    sans: list[str],
    signer,
    signature_algorithm: Optional[SignatureAlgorithm] = None,
) -> x509.CertificateSigningRequest:
    """
    Create and sign a certificate request for a common name and SANs.

    Args:
        common_name: Subject common name
        sans: SAN strings; DNS names, IP addresses, emails and URIs are told
            apart automatically
        signer: Private key the request is signed with
        signature_algorithm: Algorithm to sign with; defaults to the configured
            algorithm, then to the usual algorithm for the signer's key type

    Returns:
        The signed request, parsed back from its DER encoding

    Raises:
        RequestCreationError: If loading the configuration, building, signing
            or encoding fails
        InternalInvariantError: If the encoded request cannot be parsed back
    """
    try:
        split = split_sans(sans)
        if signature_algorithm is None:
            signature_algorithm = get_config().requests.signature_algorithm
        if signature_algorithm.is_unknown:
            signature_algorithm = SignatureAlgorithm.for_key(signer)

        builder = x509.CertificateSigningRequestBuilder().subject_name(
            x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, common_name)])
        )
        names = build_general_names(split.dns_names, split.ip_addresses, split.email_addresses, split.uris)
        if names:
            builder = builder.add_extension(x509.SubjectAlternativeName(names), critical=False)

        csr = _sign(builder, signer, signature_algorithm)
        der = csr.public_bytes(serialization.Encoding.DER)
    except Exception as e:
        logger.error(f"Certificate request creation failed for {common_name}: {e}")
        raise RequestCreationError("error creating certificate request", e) from e

    try:
        parsed = x509.load_der_x509_csr(der)
    except ValueError as e:
        raise InternalInvariantError(f"cryptography produced an unparsable certificate request: {e}") from e

    logger.debug(f"Certificate request created for {common_name} ({signature_algorithm})")
    return parsed
