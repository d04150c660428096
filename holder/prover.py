# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""
Holder side of the proof of possession.

For every attempt a fresh key pair is generated, the public key is embedded into
the token header and the verifiers nonce is signed with the private key.
The private key never leaves this process.
"""

import contextlib
import logging

import httpx
from pydantic import ValidationError

import common.httpx_wrapper as httpxw
from common.key_configuration import KeyConfiguration
from common.model.attestation import NonceResponse

from holder import config as conf
from holder.exception import ChallengeFetchFailedError, SubmissionFailedError

_logger = logging.getLogger(__name__)


def fetch_nonce(client: httpx.Client, challenge_url: str, config: conf.HolderConfig) -> str:
    """Requests a fresh challenge from the verifier."""
    try:
        response = httpxw.get(client, challenge_url, config)
        response.raise_for_status()
        return NonceResponse.model_validate_json(response.content).nonce
    except httpx.HTTPError as e:
        raise ChallengeFetchFailedError(f"Failed to fetch nonce from {challenge_url}: {e}") from e
    except ValidationError as e:
        raise ChallengeFetchFailedError(f"nonce field missing in response of {challenge_url}") from e


def create_attestation(nonce: str, key_config: KeyConfiguration) -> str:
    """Signs the nonce claim, the public key is embedded as `jwk` into the header."""
    return key_config.encode_jwt({"nonce": nonce})


def submit_attestation(client: httpx.Client, submission_url: str, token: str, config: conf.HolderConfig) -> httpx.Response:
    try:
        return httpxw.post(client, submission_url, config, content=token)
    except httpx.HTTPError as e:
        raise SubmissionFailedError(f"Failed to submit attestation to {submission_url}: {e}") from e


def prove(challenge_url: str, submission_url: str, config: conf.HolderConfig, client: httpx.Client | None = None) -> int:
    """
    Runs one proof attempt against the verifier and returns the http status of the verification.
    No retries are done, a rejected attestation is reported through the status code.

    Throws ChallengeFetchFailedError & SubmissionFailedError on transport failures.
    """
    with contextlib.ExitStack() as stack:
        if client is None:
            client = stack.enter_context(httpxw.create_client(config, timeout=config.request_timeout))

        nonce = fetch_nonce(client, challenge_url, config)
        token = create_attestation(nonce, KeyConfiguration.generate())
        response = submit_attestation(client, submission_url, token, config)

    _logger.info(f"Verification response: {response.status_code}")
    if not response.is_success:
        _logger.info(f"{response.text=}")
    return response.status_code
