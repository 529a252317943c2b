"""Tests for the validation fragments."""

import pytest
from bson import ObjectId
from pydantic import BaseModel, TypeAdapter, ValidationError

from mool_db.validator import (
    GSTIN,
    PAN,
    AadhaarNumber,
    DateTimeString,
    Email,
    FinancialYear,
    MonthNumber,
    ObjectIdField,
    PageSize,
    PhoneNumber,
    QueryParams,
    validation_rules,
)


class TestStringFragments:
    """Tests for pattern-based fragments."""

    @pytest.mark.parametrize(
        "fragment,valid,invalid",
        [
            (FinancialYear, "2020-2021", "2020/2021"),
            (DateTimeString, "1950-01-01T01:01:01.001Z", "1950-01-01 01:01:01"),
            (PhoneNumber, "9876543210", "1234567890"),
            (AadhaarNumber, "2345 6789 0123", "1234 5678 9012"),
        ],
    )
    def test_patterns(self, fragment, valid, invalid):
        """Valid values pass, invalid values raise."""
        adapter = TypeAdapter(fragment)

        assert adapter.validate_python(valid) == valid
        with pytest.raises(ValidationError):
            adapter.validate_python(invalid)

    def test_pan_is_uppercased(self):
        """PAN numbers are normalised to upper case."""
        assert TypeAdapter(PAN).validate_python("abcde1234f") == "ABCDE1234F"

    def test_pan_rejects_bad_format(self):
        """Malformed PAN numbers are rejected."""
        with pytest.raises(ValidationError):
            TypeAdapter(PAN).validate_python("ABCD12345F")

    def test_gstin(self):
        """GSTIN accepts the standard 15-character layout."""
        assert TypeAdapter(GSTIN).validate_python("22aaaaa0000a1z5") == "22AAAAA0000A1Z5"

    def test_email(self):
        """Emails are validated."""
        assert TypeAdapter(Email).validate_python("ada@example.com") == "ada@example.com"
        with pytest.raises(ValidationError):
            TypeAdapter(Email).validate_python("not-an-email")


class TestNumericFragments:
    """Tests for numeric fragments."""

    def test_month_number_bounds(self):
        """Months are 0-11 and strings are converted."""
        adapter = TypeAdapter(MonthNumber)

        assert adapter.validate_python("11") == 11
        with pytest.raises(ValidationError):
            adapter.validate_python(12)

    def test_page_size_bounds(self):
        """Page size is positive and at most 1000."""
        adapter = TypeAdapter(PageSize)

        assert adapter.validate_python(1000) == 1000
        with pytest.raises(ValidationError):
            adapter.validate_python(0)
        with pytest.raises(ValidationError):
            adapter.validate_python(1001)


class TestObjectIdField:
    """Tests for the ObjectId fragment."""

    class Document(BaseModel):
        owner_id: ObjectIdField

    def test_converts_string(self):
        """Hex strings become ObjectIds."""
        value = "5f1d7f5e9b1e8a3c4d2b6a10"

        document = self.Document(owner_id=value)

        assert document.owner_id == ObjectId(value)
        assert document.model_dump(mode="json") == {"owner_id": value}

    def test_rejects_invalid(self):
        """Non-ObjectId strings are rejected."""
        with pytest.raises(ValidationError):
            self.Document(owner_id="nope")


class TestQueryParams:
    """Tests for QueryParams."""

    def test_single_field_alias(self, allowed_attributes):
        """``f`` may be a single name."""
        params = QueryParams.model_validate({"f": "name"})

        shape = params.to_shape(allowed_attributes)

        assert shape.fields == "name"
        assert shape.page_size is None

    def test_rejects_non_positive_page_number(self):
        """Page numbers are 1-based."""
        with pytest.raises(ValidationError):
            QueryParams.model_validate({"page_number": 0})


def test_validation_rules_registry():
    """All fragments are reachable by name."""
    assert validation_rules["page_size"] is PageSize
    assert validation_rules["object_id"] is ObjectIdField
    assert {"financial_year", "email", "fields", "gstin"} <= set(validation_rules)
