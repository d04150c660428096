# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""
Verifies attestation tokens proving possession of a private key.

The token is a compact JWS whose protected header embeds the public key (`jwk`).
The signature is checked against that embedded key, so a valid token proves the
holder controls the matching private key. It does not prove who the holder is.

Checks run strictly in order: structure, key, signature, nonce. The nonce is
only consumed once everything before it succeeded.
"""

import json
import logging

from jwcrypto import jwk, jws
from jwcrypto.common import JWException
from pydantic import ValidationError

from common import parsing as prs
from common import key_configuration as key
from common.model import ietf

import verifier.exception as err
from verifier.logging import VerifierOperationsLogEntry
from verifier.nonce_registry import NonceRegistry

_logger = logging.getLogger(__name__)

Step = VerifierOperationsLogEntry.Step

NONCE_CLAIM = "nonce"
KEY_HEADER = "jwk"


def parse_header(raw_token: str) -> dict:
    """
    Splits the token into header, payload & signature and decodes the header.
    No cryptographic work is done here.
    """
    parts = raw_token.split(".")
    if len(parts) != 3:
        raise err.MalformedTokenError(f"JWT must have 3 parts, got {len(parts)}")
    header_part, _, signature_part = parts
    if not header_part or not signature_part:
        raise err.MalformedTokenError("JWT header and signature must not be empty")

    try:
        header = prs.object_from_url_safe(header_part)
        prs.bytes_from_url_safe(signature_part)
    except ValueError as e:
        # binascii.Error, UnicodeDecodeError & json.JSONDecodeError are all ValueErrors
        raise err.MalformedTokenError(f"Decode error: {e}")

    if not isinstance(header, dict):
        raise err.MalformedTokenError("JWT header must be a JSON object")
    if "alg" not in header:
        raise err.MalformedTokenError("JWT header is missing the alg field")
    return header


def extract_key(header: dict) -> ietf.JSONWebKey:
    """Returns the public key the holder embedded into the header."""
    jwk_value = header.get(KEY_HEADER)
    if jwk_value is None:
        raise err.MissingKeyError()
    if not isinstance(jwk_value, dict):
        raise err.MissingKeyError("JWK is not a JSON object")
    try:
        return ietf.JSONWebKey.model_validate(jwk_value)
    except ValidationError as e:
        raise err.MissingKeyError(f"JWK is malformed: {e.error_count()} validation error(s)")


def build_verification_key(header: dict, embedded_key: ietf.JSONWebKey) -> jwk.JWK:
    """
    Binds the embedded key to the single supported algorithm.
    The algorithm named in the header is only compared, never used to pick the primitive.
    """
    if header["alg"] != key.SIGNING_ALGORITHM:
        raise err.InvalidKeyError(f"Unsupported algorithm {header['alg']!r}, expected {key.SIGNING_ALGORITHM}")
    if embedded_key.kty != key.KEY_TYPE or embedded_key.crv != key.CURVE:
        raise err.InvalidKeyError(f"{key.SIGNING_ALGORITHM} requires an {key.KEY_TYPE} key on curve {key.CURVE}")
    if embedded_key.has_private_material():
        raise err.InvalidKeyError("JWK must not contain private key material")
    try:
        verification_key = embedded_key.as_verification_key()
        # Loads the curve point, fails for points not on the curve
        verification_key.get_op_key("verify")
    except Exception as e:
        # Any failure to load the untrusted key is a client error
        raise err.InvalidKeyError(str(e) or type(e).__name__) from e
    return verification_key


def verify_signature(raw_token: str, verification_key: jwk.JWK) -> dict:
    """Checks the signature over header & payload and returns the decoded claims."""
    token = jws.JWS()
    try:
        token.deserialize(raw_token, key=verification_key, alg=key.SIGNING_ALGORITHM)
        claims = json.loads(token.payload)
    except (JWException, ValueError) as e:
        raise err.SignatureInvalidError(str(e))
    if not isinstance(claims, dict):
        raise err.SignatureInvalidError("JWT payload must be a JSON object")
    return claims


def extract_nonce(claims: dict) -> str:
    nonce = claims.get(NONCE_CLAIM)
    if not isinstance(nonce, str):
        raise err.MissingNonceClaimError()
    return nonce


def verify_attestation(raw_token: str, registry: NonceRegistry) -> str:
    """
    Verifies the attestation token and consumes its nonce.

    Returns the consumed nonce. Raises a `verifier.exception.AttestationVerificationError`
    if any check fails, in which case the registry is left untouched.
    """
    step = Step.attestation_received
    token = raw_token.strip()
    try:
        header = parse_header(token)
        step = Step.attestation_parsed

        verification_key = build_verification_key(header, extract_key(header))
        step = Step.attestation_key_extracted

        claims = verify_signature(token, verification_key)
        step = Step.attestation_signature_checked

        nonce = extract_nonce(claims)
        if not registry.consume(nonce):
            raise err.NonceInvalidOrReusedError()
    except err.AttestationVerificationError as e:
        _logger.info(
            VerifierOperationsLogEntry(
                message="Attestation rejected.",
                status=VerifierOperationsLogEntry.Status.error,
                operation=VerifierOperationsLogEntry.Operation.attestation,
                step=step,
                error_code=e.error_code,
            ),
        )
        # rethrow error to be send to client
        raise
    except Exception:
        _logger.exception("Attestation verification aborted.")
        raise

    _logger.info(
        VerifierOperationsLogEntry(
            message="Attestation verified.",
            status=VerifierOperationsLogEntry.Status.success,
            operation=VerifierOperationsLogEntry.Operation.attestation,
            step=Step.attestation_nonce_consumed,
            # do not include nonce or key to prevent holder tracking
        ),
    )
    return nonce
