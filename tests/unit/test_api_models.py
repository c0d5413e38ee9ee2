"""
Unit tests for API request/response models.
"""

import pytest
from pydantic import ValidationError

from mailgate.api.models import (
    PublicKeyResponse,
    RegisterRequest,
    RegisterResponse,
    VerifyTokenRequest,
    VerifyTokenResponse,
)


class TestRegisterRequest:
    """Tests for RegisterRequest model."""

    def test_camel_case_confirm_password(self) -> None:
        request = RegisterRequest.model_validate(
            {"name": "Ana", "email": "ana@x.com", "password": "p1", "confirmPassword": "p1"}
        )
        assert request.confirm_password == "p1"

    def test_snake_case_accepted(self) -> None:
        request = RegisterRequest(confirm_password="p1")
        assert request.confirm_password == "p1"

    def test_missing_fields_allowed_at_schema_level(self) -> None:
        """Missing fields are a domain error (400), not a schema error (422)."""
        request = RegisterRequest.model_validate({})
        assert request.name is None
        assert request.email is None
        assert request.password is None
        assert request.confirm_password is None

    def test_non_string_rejected(self) -> None:
        with pytest.raises(ValidationError):
            RegisterRequest.model_validate({"password": 12345})


class TestVerifyTokenRequest:
    """Tests for VerifyTokenRequest model."""

    def test_token_kept_as_string(self) -> None:
        """Tokens are opaque strings; leading characters are preserved."""
        request = VerifyTokenRequest(email="ana@x.com", token="01234")
        assert request.token == "01234"

    def test_numeric_token_rejected(self) -> None:
        with pytest.raises(ValidationError):
            VerifyTokenRequest.model_validate({"email": "ana@x.com", "token": 12345})


class TestResponses:
    """Tests for response serialization."""

    def test_register_response_defaults_success(self) -> None:
        assert RegisterResponse(message="ok").model_dump() == {"success": True, "message": "ok"}

    def test_verify_response_includes_token(self) -> None:
        dumped = VerifyTokenResponse(message="Token valid", token="abc").model_dump()
        assert dumped == {"success": True, "message": "Token valid", "token": "abc"}

    def test_public_key_serialized_camel_case(self) -> None:
        dumped = PublicKeyResponse(public_key="PEM").model_dump(by_alias=True)
        assert dumped == {"success": True, "publicKey": "PEM"}
