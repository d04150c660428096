# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""
Tests the holder against an in process verifier and against mocked transports
"""

import logging
from unittest import mock

import httpx
import pytest
from fastapi import status
from fastapi.testclient import TestClient

from common import parsing

import holder.main as holder_main
import holder.prover as prover
from holder.config import HolderConfig
from holder.exception import ChallengeFetchFailedError, ProducerError, SubmissionFailedError

from verifier.nonce_registry import NonceRegistry
from verifier.verifier import create_app

CHALLENGE_URL = "http://verifier.test/nonce"
SUBMISSION_URL = "http://verifier.test/verify"


@pytest.fixture
def config() -> HolderConfig:
    return HolderConfig()


@pytest.fixture
def nonce_registry() -> NonceRegistry:
    return NonceRegistry()


@pytest.fixture
def verifier_client(nonce_registry: NonceRegistry) -> TestClient:
    client = TestClient(create_app(nonce_registry=nonce_registry))
    yield client
    client.close()


def _mock_client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


def test_prove_against_verifier(config: HolderConfig, verifier_client: TestClient, nonce_registry: NonceRegistry):
    assert prover.prove("/nonce", "/verify", config, client=verifier_client) == status.HTTP_200_OK
    assert len(nonce_registry) == 0, "The nonce must have been consumed"


def test_every_attempt_uses_a_fresh_key(config: HolderConfig):
    public_keys = []

    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "GET":
            return httpx.Response(200, json={"nonce": "abc"})
        header = parsing.object_from_url_safe(request.content.decode().split(".")[0])
        public_keys.append(header["jwk"])
        return httpx.Response(200, json={"status": "success"})

    with _mock_client(handler) as client:
        prover.prove(CHALLENGE_URL, SUBMISSION_URL, config, client=client)
        prover.prove(CHALLENGE_URL, SUBMISSION_URL, config, client=client)

    assert len(public_keys) == 2
    assert public_keys[0] != public_keys[1]
    assert all("d" not in key for key in public_keys), "The private key must never be sent"


def test_submitted_token_layout(config: HolderConfig):
    submitted = []

    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "GET":
            return httpx.Response(200, json={"nonce": "the-nonce"})
        submitted.append(request.content.decode())
        return httpx.Response(200, json={"status": "success"})

    with _mock_client(handler) as client:
        prover.prove(CHALLENGE_URL, SUBMISSION_URL, config, client=client)

    (token,) = submitted
    header, payload, _ = token.split(".")
    header = parsing.object_from_url_safe(header)
    assert header["alg"] == "ES256"
    assert header["typ"] == "JWT"
    assert header["jwk"]["kty"] == "EC"
    assert header["jwk"]["crv"] == "P-256"
    assert parsing.object_from_url_safe(payload) == {"nonce": "the-nonce"}


def test_rejected_attestation_is_reported_by_status(config: HolderConfig, verifier_client: TestClient, nonce_registry: NonceRegistry, caplog):
    with mock.patch.object(prover, "create_attestation", return_value="not.a.token"), caplog.at_level(logging.INFO, logger=prover.__name__):
        assert prover.prove("/nonce", "/verify", config, client=verifier_client) == status.HTTP_400_BAD_REQUEST
    assert "Verification response: 400" in caplog.text
    assert len(nonce_registry) == 1


def test_challenge_connection_error(config: HolderConfig):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    with _mock_client(handler) as client, pytest.raises(ChallengeFetchFailedError) as e:
        prover.prove(CHALLENGE_URL, SUBMISSION_URL, config, client=client)
    assert isinstance(e.value.__cause__, httpx.ConnectError)
    assert any(CHALLENGE_URL in note for note in e.value.__cause__.__notes__)


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, text="Internal Server Error"),
        httpx.Response(200, text="not json"),
        httpx.Response(200, json={"challenge": "abc"}),
        httpx.Response(200, json={"nonce": 42}),
        httpx.Response(200, json=["abc"]),
    ],
)
def test_challenge_without_usable_nonce(config: HolderConfig, response: httpx.Response):
    submitted = []

    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "POST":
            submitted.append(request)
        return response

    with _mock_client(handler) as client, pytest.raises(ChallengeFetchFailedError):
        prover.prove(CHALLENGE_URL, SUBMISSION_URL, config, client=client)
    assert not submitted, "Nothing may be submitted without a challenge"


def test_submission_connection_error(config: HolderConfig):
    attempts = []

    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "GET":
            return httpx.Response(200, json={"nonce": "abc"})
        attempts.append(request)
        raise httpx.ReadTimeout("Timed out", request=request)

    with _mock_client(handler) as client, pytest.raises(SubmissionFailedError):
        prover.prove(CHALLENGE_URL, SUBMISSION_URL, config, client=client)
    assert len(attempts) == 1, "Submissions are never retried"


def test_config_urls(monkeypatch):
    monkeypatch.setenv("VERIFIER_URL", "https://verifier.example/")
    monkeypatch.setenv("NONCE_PATH", "/challenge")
    config = HolderConfig()
    assert config.challenge_url == "https://verifier.example/challenge"
    assert config.submission_url == "https://verifier.example/verify"


@pytest.mark.parametrize(
    "outcome, expected_exit_code",
    [
        (mock.Mock(return_value=200), 0),
        (mock.Mock(return_value=400), 1),
        (mock.Mock(side_effect=ChallengeFetchFailedError("refused")), 1),
        (mock.Mock(side_effect=SubmissionFailedError("refused")), 1),
    ],
)
def test_main_reports_once_without_raising(outcome: mock.Mock, expected_exit_code: int):
    with mock.patch.object(holder_main, "prove", outcome), mock.patch.object(holder_main, "configure_logging"):
        assert holder_main.main() == expected_exit_code
    outcome.assert_called_once()


def test_producer_errors_share_a_base():
    assert issubclass(ChallengeFetchFailedError, ProducerError)
    assert issubclass(SubmissionFailedError, ProducerError)
