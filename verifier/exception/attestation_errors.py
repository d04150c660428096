# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""
Errors of a single attestation verification attempt.

All of them are client errors. On the wire they only differ by the human readable
`error` message, the `error_code` is used for the operations log.
"""
from fastapi import HTTPException
from pydantic import BaseModel


class AttestationError(BaseModel):
    """
    Error body returned for a rejected attestation.
    * error: Human readable error description
    * additional_error_description: Further human readable information on the cause
    """

    error: str
    additional_error_description: str | None = None


class AttestationVerificationError(HTTPException):
    """Base class for all attestation verification exceptions."""

    error: str = None
    """Human readable description for the error type."""

    error_code: str = None
    """Machine readable code identifying the exception, only logged."""

    _fields: list[str] = ["error"]
    """Fields to render into the response."""

    _optional_fields: list[str] = ["additional_error_description"]
    """Optional fields which are only rendered into the response if available."""

    def __init__(self, additional_error_description: str = None, status_code: int = 400) -> None:
        """Create an attestation verification exception.

        Args:
            additional_error_description (str, optional): Additional, human readable data, to identify the issue resulting in this exception.
            status_code (int, optional): status code for the rendered response. Defaults to 400.
        """
        super().__init__(status_code, self.error, headers={"Cache-Control": "no-store"})
        self.additional_error_description = additional_error_description

    def to_response_content(self) -> dict:
        content = {field_name: getattr(self, field_name) for field_name in self._fields}
        for field_name in self._optional_fields:
            if getattr(self, field_name, None) is not None:
                content[field_name] = getattr(self, field_name)
        return content


class MalformedTokenError(AttestationVerificationError):
    """The token is not made of three base64url encoded parts or its header is not a JSON object with an algorithm."""

    error = "Invalid JWT format"
    error_code = "malformed_token"


class MissingKeyError(AttestationVerificationError):
    """The header does not carry a JSON Web Key."""

    error = "JWK missing in header"
    error_code = "missing_key"


class InvalidKeyError(AttestationVerificationError):
    """The embedded key can not be used to verify an ES256 signature."""

    error = "Failed to parse JWK"
    error_code = "invalid_key"


class SignatureInvalidError(AttestationVerificationError):
    error = "Signature verification failed"
    error_code = "invalid_signature"


class MissingNonceClaimError(AttestationVerificationError):
    error = "nonce not found in claims"
    error_code = "missing_nonce"


class NonceInvalidOrReusedError(AttestationVerificationError):
    """The nonce was never issued or has already been consumed."""

    error = "invalid or reused nonce"
    error_code = "invalid_nonce"
