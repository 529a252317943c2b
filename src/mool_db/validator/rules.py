"""Reusable validation fragments for commonly used request fields.

Each fragment is a pydantic ``Annotated`` type, so a host schema uses it
directly as a field annotation:

    class CreateInvoice(BaseModel):
        financial_year: FinancialYear
        owner_id: ObjectIdField
"""

from typing import Annotated, Any

from bson import ObjectId
from bson.errors import InvalidId
from pydantic import EmailStr, Field, PlainSerializer, PlainValidator, StringConstraints, WithJsonSchema


def _to_object_id(value: Any) -> ObjectId:
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(value)
    except (InvalidId, TypeError) as exc:
        raise ValueError(f"'{value}' is not a valid ObjectId") from exc


FinancialYear = Annotated[
    str,
    StringConstraints(pattern=r"^(19|20)\d{2}-(19|20)\d{2}$", min_length=9, max_length=9),
    Field(description="Financial year in the format YYYY-YYYY, example: `2020-2021`"),
]

DateTimeString = Annotated[
    str,
    StringConstraints(pattern=r"^\d{4}-\d\d-\d\dT\d\d:\d\d:\d\d\.\d\d\dZ$"),
    Field(description="ISO 8601 date with zone offset Z, example: `1950-01-01T01:01:01.001Z`"),
]

ProjectionObject = dict[str, Any] | None

ProjectionArray = list[Annotated[str, StringConstraints(min_length=1)]] | None

ObjectIdField = Annotated[
    ObjectId,
    PlainValidator(_to_object_id),
    PlainSerializer(str, return_type=str),
    WithJsonSchema({"type": "string", "pattern": "^[0-9a-fA-F]{24}$"}),
]

MonthNumber = Annotated[int, Field(ge=0, le=11)]

PAN = Annotated[
    str,
    StringConstraints(to_upper=True, pattern=r"^[A-Za-z]{5}[0-9]{4}[A-Za-z]$"),
]

Email = EmailStr

PassportNumber = Annotated[
    str,
    StringConstraints(pattern=r"^[A-PR-WYa-pr-wy][1-9]\d\s?\d{4}[1-9]$"),
]

PhoneNumber = Annotated[
    str,
    StringConstraints(pattern=r"^[6-9][0-9]{9}$", min_length=10, max_length=10),
]

AadhaarNumber = Annotated[
    str,
    StringConstraints(pattern=r"^[2-9][0-9]{3}\s?[0-9]{4}\s?[0-9]{4}$"),
]

PageNumber = Annotated[int, Field(gt=0)]

PageSize = Annotated[int, Field(gt=0, le=1000)]

Fields = str | list[str] | None

GSTIN = Annotated[
    str,
    StringConstraints(
        to_upper=True,
        pattern=r"^\d{2}[A-Za-z]{5}\d{4}[A-Za-z][A-Za-z\d][Zz][A-Za-z\d]$",
    ),
]


validation_rules: dict[str, Any] = {
    "financial_year": FinancialYear,
    "date_time": DateTimeString,
    "projection_object": ProjectionObject,
    "projection_array": ProjectionArray,
    "object_id": ObjectIdField,
    "month_number": MonthNumber,
    "pan": PAN,
    "email": Email,
    "passport_number": PassportNumber,
    "phone_number": PhoneNumber,
    "aadhaar_number": AadhaarNumber,
    "page_number": PageNumber,
    "page_size": PageSize,
    "fields": Fields,
    "gstin": GSTIN,
}
