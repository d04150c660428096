# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

import logging
from fastapi import Request, FastAPI
from fastapi.responses import JSONResponse

from .attestation_errors import AttestationVerificationError

_logger = logging.getLogger(__name__)


def configure_exception_handlers(app: FastAPI) -> None:
    """
    Configure exception handlers on the FastAPI app instance to render
    attestation errors as `{"error": ...}` bodies instead of FastAPIs `{"detail": ...}`.

    Args:
        app (FastAPI): the instance to configure the handlers for.
    """

    @app.exception_handler(AttestationVerificationError)
    async def attestation_exception_handler(request: Request, exc: AttestationVerificationError):
        content = exc.to_response_content()
        _logger.debug(f"Attestation rejected {exc.status_code=} {content}")
        return JSONResponse(
            status_code=exc.status_code,
            headers=exc.headers,
            content=content,
        )
