"""Validation fragments for commonly used fields."""

from .query import QueryParams
from .rules import (
    GSTIN,
    PAN,
    AadhaarNumber,
    DateTimeString,
    Email,
    Fields,
    FinancialYear,
    MonthNumber,
    ObjectIdField,
    PageNumber,
    PageSize,
    PassportNumber,
    PhoneNumber,
    ProjectionArray,
    ProjectionObject,
    validation_rules,
)

__all__ = [
    "QueryParams",
    "GSTIN",
    "PAN",
    "AadhaarNumber",
    "DateTimeString",
    "Email",
    "Fields",
    "FinancialYear",
    "MonthNumber",
    "ObjectIdField",
    "PageNumber",
    "PageSize",
    "PassportNumber",
    "PhoneNumber",
    "ProjectionArray",
    "ProjectionObject",
    "validation_rules",
]
