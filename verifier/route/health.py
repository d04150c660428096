# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""This file defines the custom health checks for the application."""

from fastapi import Request
from common.health import base

from verifier.nonce_registry import NonceRegistry


class HealthResponse(base.HealthResponse):
    """Response body model for health request operation."""

    configuration_verifier_has_minimum_config: base.HealthStatus = base.HealthStatus.unhealthy
    nonce_registry_available: base.HealthStatus = base.HealthStatus.unhealthy


class VerifierHealthAPIRouter(base.HealthAPIRouter):
    def __init__(self) -> None:
        super().__init__(response_model=HealthResponse)

    @staticmethod
    def _checks(result: HealthResponse, request: Request) -> HealthResponse:
        result.configuration_verifier_has_minimum_config = request.app.config_instance.has_minimum_config()
        # The registry may be empty, so do not rely on its truthiness
        result.nonce_registry_available = isinstance(getattr(request.app.state, "nonce_registry", None), NonceRegistry)
        return result

    def _build_debug_probe(self, result: HealthResponse, request: Request) -> HealthResponse:
        return self._checks(result, request)

    def _build_readiness_probe(self, result: HealthResponse, request: Request) -> HealthResponse:
        return self._checks(result, request)

    def _build_liveness_probe(self, result: HealthResponse, request: Request) -> HealthResponse:
        # A running server process is alive, configuration issues are reported by readiness
        result.configuration_verifier_has_minimum_config = True
        result.nonce_registry_available = True
        return result


router = VerifierHealthAPIRouter()
