# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""
Environment backed settings shared by the verifier and the holder.

Values are read once on construction. Most feature flags follow the debug mode,
a local run with `ENABLE_DEBUG_MODE=true` gets documentation, CORS and plain text logs
while a deployment stays locked down unless configured otherwise.
"""

import os
from typing import Annotated

from fastapi import Depends

from common.parsing import interpret_as_bool


def env_flag(name: str, default: bool) -> bool:
    """Reads a boolean environment variable, see `interpret_as_bool` for the accepted values."""
    return interpret_as_bool(os.environ.get(name, default))


def env_list(name: str) -> list[str]:
    """Reads a comma separated environment variable, blank entries are dropped."""
    return [entry.strip() for entry in os.environ.get(name, "").split(",") if entry.strip()]


class Config:
    def __init__(self):
        self.enable_debug_mode: bool = env_flag("ENABLE_DEBUG_MODE", False)
        debug = self.enable_debug_mode

        self.app_name = os.getenv("APP_NAME", "pop-attestation")
        '''Human readable component name, shown as api title and in every splunk log line.'''
        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        self.enable_splunk_log: bool = env_flag("ENABLE_SPLUNK_LOG", not debug)
        '''JSON lines for splunk, plain text lines in debug mode.'''

        self.enable_ssl_verification: bool = env_flag("ENABLE_SSL_VERIFICATION", not debug)
        '''Verify certificates of outgoing requests, e.g. the holder calling the verifier.'''

        self.external_url = os.getenv("EXTERNAL_URL")
        self.enable_documentation_endpoints: bool = env_flag("ENABLE_DOCUMENTATION_ENDPOINTS", debug)
        self.enable_cors: bool = env_flag("ENABLE_CORS", debug)
        self.additional_allowed_origins: list[str] = env_list("ADDITIONAL_ALLOWED_ORIGINS")
        '''Origins allowed besides `external_url` when CORS is enabled, e.g. `URL,URL`.'''


inject = Annotated[Config, Depends(Config)]
