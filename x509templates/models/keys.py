"""Public key classification."""

from enum import Enum, IntEnum

from cryptography.hazmat.primitives.asymmetric import dsa, ec, ed448, ed25519, rsa


class KeyType(str, Enum):
    """Kinds of key material a template can carry."""

    RSA = "RSA"
    EC = "EC"
    ED25519 = "Ed25519"
    ED448 = "Ed448"
    DSA = "DSA"
    UNKNOWN = "Unknown"

    @classmethod
    def of(cls, key) -> "KeyType":
        """Classify a public or private key object. Anything else is UNKNOWN."""
        if isinstance(key, (rsa.RSAPublicKey, rsa.RSAPrivateKey)):
            return cls.RSA
        elif isinstance(key, (ec.EllipticCurvePublicKey, ec.EllipticCurvePrivateKey)):
            return cls.EC
        elif isinstance(key, (ed25519.Ed25519PublicKey, ed25519.Ed25519PrivateKey)):
            return cls.ED25519
        elif isinstance(key, (ed448.Ed448PublicKey, ed448.Ed448PrivateKey)):
            return cls.ED448
        elif isinstance(key, (dsa.DSAPublicKey, dsa.DSAPrivateKey)):
            return cls.DSA
        else:
            return cls.UNKNOWN


class PublicKeyAlgorithm(IntEnum):
    """Public key algorithm identifiers."""

    UNKNOWN = 0
    RSA = 1
    DSA = 2
    ECDSA = 3
    ED25519 = 4

    @classmethod
    def of(cls, key) -> "PublicKeyAlgorithm":
        """Return the algorithm of a key object."""
        return _ALGORITHM_BY_KEY_TYPE.get(KeyType.of(key), cls.UNKNOWN)


_ALGORITHM_BY_KEY_TYPE = {
    KeyType.RSA: PublicKeyAlgorithm.RSA,
    KeyType.DSA: PublicKeyAlgorithm.DSA,
    KeyType.EC: PublicKeyAlgorithm.ECDSA,
    KeyType.ED25519: PublicKeyAlgorithm.ED25519,
}
