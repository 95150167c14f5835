"""
Error Taxonomy Unit Tests
Tests for hashtree/schemas/errors.py
"""
import pytest
from pydantic import ValidationError

from hashtree.schemas.errors import (
    ConfigException,
    ErrorCodes,
    IndexOutOfRangeException,
    InvalidInputException,
    MerkleError,
    MerkleException,
    UnsupportedHashException,
)


class TestExceptionHierarchy:
    """Tests for exception base classes."""

    def test_invalid_input(self):
        exc = InvalidInputException("empty")
        assert isinstance(exc, MerkleException)
        assert isinstance(exc, ValueError)
        assert exc.code == ErrorCodes.INVALID_INPUT
        assert not exc.retryable

    def test_index_out_of_range(self):
        exc = IndexOutOfRangeException("bad index", leaf_index=9)
        assert isinstance(exc, IndexError)
        assert exc.code == ErrorCodes.INDEX_OUT_OF_RANGE
        assert exc.details == {"leaf_index": 9}

    def test_unsupported_hash(self):
        assert isinstance(UnsupportedHashException("x"), ValueError)

    def test_config_path_detail(self):
        exc = ConfigException("missing", path="/tmp/none.yaml")
        assert exc.details["path"] == "/tmp/none.yaml"
        assert exc.code == ErrorCodes.CONFIG_ERROR

    def test_str_and_repr(self):
        exc = InvalidInputException("empty input")
        assert str(exc) == "empty input"
        assert repr(exc) == "InvalidInputException(code='INVALID_INPUT', message='empty input')"


class TestErrorModel:
    """Tests for conversion between exceptions and MerkleError."""

    def test_exception_to_model(self):
        model = IndexOutOfRangeException("bad", leaf_index=3).to_error_model()

        assert isinstance(model, MerkleError)
        assert model.code == ErrorCodes.INDEX_OUT_OF_RANGE
        assert model.details == {"leaf_index": 3}

    def test_model_to_exception(self):
        error = MerkleError(code=ErrorCodes.INVALID_INPUT, message="nothing to build")
        exc = error.to_exception()

        assert isinstance(exc, MerkleException)
        assert exc.code == ErrorCodes.INVALID_INPUT
        assert exc.message == "nothing to build"

    def test_model_forbids_extra_fields(self):
        with pytest.raises(ValidationError):
            MerkleError(code="X", message="m", unexpected=True)

    def test_model_serializes(self):
        error = MerkleError(code="X", message="m", details={"a": 1})
        assert error.model_dump() == {
            "code": "X",
            "message": "m",
            "details": {"a": 1},
            "retryable": False,
        }
