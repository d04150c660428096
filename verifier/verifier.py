# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""
Proof of possession verifier

Hands out single use nonces (`GET /nonce`) and verifies attestation tokens (`POST /verify`),
which are compact JWS carrying the holders public key as `jwk` in the protected header
and the nonce as claim.

JSON Web Signature
https://datatracker.ietf.org/doc/html/rfc7515
"""

import contextlib
import logging
from typing import Type

from asgi_correlation_id import CorrelationIdMiddleware

from common.fastapi_extensions import ExtendedFastAPI

from verifier.exception.handler import configure_exception_handlers
from verifier.nonce_registry import NonceRegistry

import verifier.route.attestation as attestation
import verifier.route.health as health

from verifier import config as conf

_logger = logging.getLogger(__name__)


@contextlib.contextmanager
def _nonce_registry_lifespan(app: ExtendedFastAPI):
    yield
    dropped = app.state.nonce_registry.clear()
    _logger.info(f"Shutdown, discarded {dropped} outstanding nonce(s).")


def create_app(config: Type[conf.VerifierConfig] = conf.VerifierConfig, nonce_registry: NonceRegistry | None = None) -> ExtendedFastAPI:
    """
    Builds the verifier application.
    The application owns the nonce registry, a fresh and empty one is created unless given.
    """
    app = ExtendedFastAPI(config, lifespan_functions=[_nonce_registry_lifespan])
    app.state.nonce_registry = nonce_registry if nonce_registry is not None else NonceRegistry()

    app.include_router(attestation.router)
    app.include_router(health.router)
    configure_exception_handlers(app)
    app.add_middleware(CorrelationIdMiddleware)
    return app


app = create_app()
