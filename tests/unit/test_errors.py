"""
Error Taxonomy Unit Tests
Tests for core/schemas/errors.py
"""
import pytest

from core.schemas.errors import (
    ConfigException,
    ErrorCodes,
    IndexOutOfBoundsException,
    MerkleError,
    MerkleException,
    MerkleVerificationException,
    ProofDecodingException,
)


class TestMerkleException:

    def test_defaults(self):
        exc = MerkleException("boom")

        assert str(exc) == "boom"
        assert exc.code == "MERKLE_ERROR"
        assert exc.details == {}
        assert exc.retryable is False

    def test_round_trip_through_model(self):
        exc = MerkleException("boom", code=ErrorCodes.ROOT_MISMATCH, details={"a": 1})
        model = exc.to_error_model()

        assert isinstance(model, MerkleError)
        assert model.code == ErrorCodes.ROOT_MISMATCH
        assert model.details == {"a": 1}

        again = model.to_exception()
        assert again.code == exc.code
        assert again.message == exc.message

    def test_repr(self):
        assert repr(MerkleException("boom", code="X")) == "MerkleException(code='X', message='boom')"


class TestIndexOutOfBounds:

    def test_fields(self):
        exc = IndexOutOfBoundsException(index=5, leaf_count=3)

        assert exc.code == ErrorCodes.INDEX_OUT_OF_BOUNDS
        assert exc.index == 5
        assert exc.leaf_count == 3
        assert exc.details == {"index": 5, "leaf_count": 3}
        assert "5" in exc.message and "3" in exc.message

    def test_is_index_error_and_merkle_exception(self):
        exc = IndexOutOfBoundsException(index=-1, leaf_count=0)

        assert isinstance(exc, IndexError)
        assert isinstance(exc, MerkleException)

    def test_caught_as_index_error(self):
        with pytest.raises(IndexError):
            raise IndexOutOfBoundsException(index=1, leaf_count=1)


class TestOtherExceptions:

    def test_verification_exception(self):
        exc = MerkleVerificationException("bad", leaf_index=2)

        assert exc.code == ErrorCodes.MERKLE_PROOF_INVALID
        assert exc.details["leaf_index"] == 2

    def test_verification_exception_custom_code(self):
        exc = MerkleVerificationException("bad", code=ErrorCodes.ROOT_MISMATCH)

        assert exc.code == ErrorCodes.ROOT_MISMATCH
        assert "leaf_index" not in exc.details

    def test_proof_decoding_exception(self):
        exc = ProofDecodingException("bad doc", field_path="path.0.val")

        assert exc.code == ErrorCodes.PROOF_DECODING_ERROR
        assert exc.details["field_path"] == "path.0.val"

    def test_config_exception(self):
        exc = ConfigException("bad value", key="log_level")

        assert exc.code == ErrorCodes.CONFIG_ERROR
        assert exc.details["key"] == "log_level"


class TestMerkleErrorModel:

    def test_rejects_extra_fields(self):
        with pytest.raises(Exception):
            MerkleError(code="X", message="m", unexpected=True)

    def test_serializes(self):
        model = MerkleError(code=ErrorCodes.INDEX_OUT_OF_BOUNDS, message="m")

        assert model.model_dump() == {
            "code": ErrorCodes.INDEX_OUT_OF_BOUNDS,
            "message": "m",
            "details": {},
            "retryable": False,
        }
