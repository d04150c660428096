# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

import logging
from typing import Annotated

import fastapi
from fastapi import Depends, Request, status

import common.model.attestation as models

import verifier.exception as err
import verifier.nonce_registry as registry
import verifier.verification as ver
from verifier.logging import VerifierOperationsLogEntry

TAG = "Attestation"

_logger = logging.getLogger(__name__)

router = fastapi.APIRouter(tags=[TAG])


async def read_raw_token(request: Request) -> str:
    """The token is submitted as raw body, independent of the content type."""
    body = await request.body()
    try:
        return body.decode("utf-8")
    except UnicodeDecodeError as e:
        raise err.MalformedTokenError(f"Body is not valid utf-8: {e.reason}")


@router.get("/nonce", description="Issues a single use challenge to be signed by the holder.")
def issue_nonce(nonce_registry: registry.inject) -> models.NonceResponse:
    nonce = nonce_registry.issue()
    _logger.info(
        VerifierOperationsLogEntry(
            message="Challenge issued.",
            status=VerifierOperationsLogEntry.Status.success,
            operation=VerifierOperationsLogEntry.Operation.challenge,
            step=VerifierOperationsLogEntry.Step.challenge_issued,
        ),
    )
    return models.NonceResponse(nonce=nonce)


@router.post(
    "/verify",
    description="""Verifies an attestation token proving possession of the private key to the public key embedded in its header.
    The body is the compact serialized token. On success the nonce of the token is consumed and can not be used again.
    """,
    responses={status.HTTP_400_BAD_REQUEST: {"model": err.AttestationError}},
)
def verify_attestation(
    raw_token: Annotated[str, Depends(read_raw_token)],
    nonce_registry: registry.inject,
) -> models.VerificationResponse:
    ver.verify_attestation(raw_token, nonce_registry)
    return models.VerificationResponse()
