# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

from enum import Enum

from pydantic import BaseModel

from fastapi import APIRouter, Request, Response, status

__all__ = ["HealthStatus", "HealthResponse", "HealthAPIRouter"]


class HealthStatus(Enum):
    """Indicator of system health."""

    healthy = "HEALTHY"
    unhealthy = "UNHEALTHY"


class HealthResponse(BaseModel):
    """Response body model for health request operation.

    May only contain `HealthStatus` fields. Those can be set with boolean values,
    those get converted before the model is returned to the client."""

    http_server_connectivity: HealthStatus = HealthStatus.unhealthy

    def convert_from_bool(self) -> None:
        '''Converts every boolean field into its `HealthStatus` representation.'''
        for k, v in iter(self):
            if isinstance(v, bool):
                setattr(self, k, HealthStatus.healthy if v else HealthStatus.unhealthy)

    def is_healthy(self) -> bool:
        """Summarizes all checks performed into the status field."""
        return all([v == HealthStatus.healthy for _, v in iter(self)])


class HealthAPIRouter(APIRouter):
    """Create a api router for common health endpoints
    `/health/debug`, `/health/liveness` and `/health/readiness`.

    Application specific checks are added by subclassing `HealthResponse` and
    overwriting the `_build_*` methods. The subclassed response model is handed
    to the constructor so it shows up in the OpenAPI documentation.
    The configuration of the application is available as `request.app.config_instance`.
    """

    def __init__(
        self,
        response_model: type[HealthResponse] = HealthResponse,
        *args,
        **kwargs,
    ) -> None:
        super().__init__(prefix="/health", tags=["Health"], *args, **kwargs)
        self.response_model = response_model
        responses = {
            status.HTTP_200_OK: {"model": response_model},
            status.HTTP_503_SERVICE_UNAVAILABLE: {"model": response_model},
        }
        self.add_api_route(
            "/debug",
            endpoint=self.get_debug_probe,
            description="Provides information regarding debug and config states.",
            response_model=response_model,
            responses=responses,
        )
        self.add_api_route(
            "/liveness",
            endpoint=self.get_liveness_probe,
            description="Determines whether the application instance needs to be restarted.",
            response_model=response_model,
            responses=responses,
        )
        self.add_api_route(
            "/readiness",
            endpoint=self.get_readiness_probe,
            description="Determines whether the application instance is ready to accept requests.",
            response_model=response_model,
            responses=responses,
        )

    def __resolve_probe(self, result: HealthResponse, response: Response) -> HealthResponse:
        """Evaluates the `result` and sets the resulting http code on `response`."""
        result.http_server_connectivity = HealthStatus.healthy
        result.convert_from_bool()
        if result.is_healthy():
            response.status_code = status.HTTP_200_OK
        else:
            response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return result

    def _build_debug_probe(self, result: HealthResponse, request: Request) -> HealthResponse:
        return result

    def _build_liveness_probe(self, result: HealthResponse, request: Request) -> HealthResponse:
        return result

    def _build_readiness_probe(self, result: HealthResponse, request: Request) -> HealthResponse:
        """Checks issues which prevent the application to function properly."""
        return result

    def get_debug_probe(self, request: Request, response: Response) -> HealthResponse:
        """Provides information regarding debug and config states."""
        return self.__resolve_probe(self._build_debug_probe(self.response_model(), request), response)

    def get_liveness_probe(self, request: Request, response: Response) -> HealthResponse:
        """Determines whether the application instance needs to be restarted."""
        return self.__resolve_probe(self._build_liveness_probe(self.response_model(), request), response)

    def get_readiness_probe(self, request: Request, response: Response) -> HealthResponse:
        """Determines whether the application instance is ready to accept requests."""
        return self.__resolve_probe(self._build_readiness_probe(self.response_model(), request), response)
