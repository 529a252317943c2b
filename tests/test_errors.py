"""Tests for driver error classification."""

from pymongo.errors import BulkWriteError, DuplicateKeyError, OperationFailure, PyMongoError

from mool_db.db.errors import DBErrorKind, classify_error, duplicate_key_value, error_code


class TestClassifyError:
    """Tests for classify_error."""

    def test_duplicate_key(self):
        """Code 11000 is a duplicate key."""
        exc = DuplicateKeyError("E11000", 11000, {"keyValue": {"email": "a@b.c"}})

        assert classify_error(exc) is DBErrorKind.DUPLICATE_KEY

    def test_duplicate_key_inside_bulk_write(self):
        """Bulk writes are classified by their first write error."""
        exc = BulkWriteError({"writeErrors": [{"code": 11000, "keyValue": {"sku": "A"}}]})

        assert error_code(exc) == 11000
        assert classify_error(exc) is DBErrorKind.DUPLICATE_KEY

    def test_path_collision(self):
        """Code 31249 is a path collision."""
        assert classify_error(OperationFailure("Path collision", 31249)) is DBErrorKind.PATH_COLLISION

    def test_other_codes_are_unknown(self):
        """Anything else is unknown."""
        assert classify_error(OperationFailure("unauthorized", 13)) is DBErrorKind.UNKNOWN
        assert classify_error(PyMongoError("generic")) is DBErrorKind.UNKNOWN
        assert classify_error(ValueError("not a driver error")) is DBErrorKind.UNKNOWN

    def test_bulk_write_without_write_errors(self):
        """A bulk error with no write errors is unknown."""
        assert classify_error(BulkWriteError({"writeConcernErrors": [{"code": 64}]})) is DBErrorKind.UNKNOWN


class TestDuplicateKeyValue:
    """Tests for duplicate_key_value."""

    def test_extracts_key_value(self):
        """The keyValue detail is returned."""
        exc = DuplicateKeyError("E11000", 11000, {"keyValue": {"email": "x@example.com"}})

        assert duplicate_key_value(exc) == {"email": "x@example.com"}

    def test_missing_detail(self):
        """No detail gives an empty dict."""
        assert duplicate_key_value(DuplicateKeyError("E11000", 11000)) == {}

    def test_bulk_write_detail(self):
        """Bulk errors use the first write error's keyValue."""
        exc = BulkWriteError(
            {
                "writeErrors": [
                    {"code": 11000, "keyValue": {"sku": "A"}},
                    {"code": 11000, "keyValue": {"sku": "B"}},
                ]
            }
        )

        assert duplicate_key_value(exc) == {"sku": "A"}
