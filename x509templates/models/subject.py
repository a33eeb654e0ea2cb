"""Subject data model."""

from typing import Optional

from cryptography import x509
from cryptography.x509.oid import NameOID
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Template field -> name attribute, in the order attributes are written to a Name
_ATTRIBUTE_OIDS = (
    ("country", NameOID.COUNTRY_NAME),
    ("organization", NameOID.ORGANIZATION_NAME),
    ("organizational_unit", NameOID.ORGANIZATIONAL_UNIT_NAME),
    ("locality", NameOID.LOCALITY_NAME),
    ("province", NameOID.STATE_OR_PROVINCE_NAME),
    ("street_address", NameOID.STREET_ADDRESS),
    ("postal_code", NameOID.POSTAL_CODE),
)


def _to_list(v):
    """Accept a single string or a list of strings."""
    if v is None:
        return []
    if isinstance(v, str):
        return [v]
    return v


class Subject(BaseModel):
    """Certificate subject information.

    Multi-valued attributes accept either a string or a list of strings.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "commonName": "example.com",
                "organization": "ACME Corp",
                "organizationalUnit": "IT Security",
                "country": "DE",
                "province": "Hessen",
                "locality": "Frankfurt",
            }
        },
    )

    common_name: str = Field("", alias="commonName")
    serial_number: str = Field("", alias="serialNumber")
    country: list[str] = Field(default_factory=list)
    organization: list[str] = Field(default_factory=list)
    organizational_unit: list[str] = Field(default_factory=list, alias="organizationalUnit")
    locality: list[str] = Field(default_factory=list)
    province: list[str] = Field(default_factory=list)
    street_address: list[str] = Field(default_factory=list, alias="streetAddress")
    postal_code: list[str] = Field(default_factory=list, alias="postalCode")

    @field_validator(
        "country",
        "organization",
        "organizational_unit",
        "locality",
        "province",
        "street_address",
        "postal_code",
        mode="before",
    )
    @classmethod
    def convert_to_list(cls, v):
        """Wrap single strings in a list."""
        return _to_list(v)

    @field_validator("common_name", "serial_number", mode="before")
    @classmethod
    def convert_none(cls, v):
        """Treat null as an empty string."""
        return "" if v is None else v

    @classmethod
    def from_name(cls, name: x509.Name) -> "Subject":
        """
        Build a subject from an X.509 name.

        Args:
            name: X.509 Name object

        Returns:
            Subject with the supported attributes; others are ignored
        """

        def get_values(oid):
            return [str(attr.value) for attr in name.get_attributes_for_oid(oid)]

        common_names = get_values(NameOID.COMMON_NAME)
        serial_numbers = get_values(NameOID.SERIAL_NUMBER)
        values = {field: get_values(oid) for field, oid in _ATTRIBUTE_OIDS}
        return cls(
            common_name=common_names[0] if common_names else "",
            serial_number=serial_numbers[0] if serial_numbers else "",
            **values,
        )

    def to_name(self) -> x509.Name:
        """Return the subject as an X.509 name. Empty attributes are skipped."""
        attributes = []
        for field, oid in _ATTRIBUTE_OIDS:
            for value in getattr(self, field):
                attributes.append(x509.NameAttribute(oid, value))
        if self.serial_number:
            attributes.append(x509.NameAttribute(NameOID.SERIAL_NUMBER, self.serial_number))
        if self.common_name:
            attributes.append(x509.NameAttribute(NameOID.COMMON_NAME, self.common_name))
        return x509.Name(attributes)
