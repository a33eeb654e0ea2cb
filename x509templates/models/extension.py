"""X.509 extension data model."""

import base64
import binascii

from cryptography import x509
from pydantic import BaseModel, field_serializer, field_validator


class Extension(BaseModel):
    """Raw X.509 extension: OID, criticality and DER-encoded value.

    The value is base64 in JSON and YAML templates.
    """

    id: str
    critical: bool = False
    value: bytes = b""

    @field_validator("id")
    @classmethod
    def validate_oid(cls, v):
        """Reject strings that are not dotted OIDs."""
        x509.ObjectIdentifier(v)
        return v

    @field_validator("value", mode="before")
    @classmethod
    def decode_value(cls, v):
        """Decode base64 text."""
        if v is None:
            return b""
        if isinstance(v, str):
            try:
                return base64.b64decode(v, validate=True)
            except binascii.Error as e:
                raise ValueError(f"extension value is not valid base64: {e}")
        return v

    @field_serializer("value")
    def encode_value(self, v: bytes) -> str:
        return base64.b64encode(v).decode("ascii")

    @property
    def oid(self) -> x509.ObjectIdentifier:
        return x509.ObjectIdentifier(self.id)

    @classmethod
    def from_x509(cls, extension: x509.Extension) -> "Extension":
        """Copy a parsed extension, keeping its DER value."""
        return cls(
            id=extension.oid.dotted_string,
            critical=extension.critical,
            value=extension.value.public_bytes(),
        )

    def to_x509(self) -> x509.UnrecognizedExtension:
        """Return the extension value for a cryptography builder."""
        return x509.UnrecognizedExtension(self.oid, self.value)
