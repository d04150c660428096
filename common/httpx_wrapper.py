# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""Wrapper for httpx functions to add additional context"""

import httpx

from common import config as conf


def create_client(config: conf.Config, timeout: float | None = None) -> httpx.Client:
    """Client honouring the ssl verification setting of the configuration."""
    return httpx.Client(verify=config.enable_ssl_verification, timeout=timeout)


def get(client: httpx.Client, url: str, config: conf.Config) -> httpx.Response:
    """Wrapper for httpx.get call, on error adds additional information to exception
    By default httpx.Connection error only provides '[Errno -2] Name or service not known'
    Throws httpx.TransportError with URL & ssl verification status on failure to
        get connection to the service
    """
    try:
        return client.get(url)
    except httpx.TransportError as e:
        e.add_note(f"Failed to GET {url=} with ssl verification {config.enable_ssl_verification}")
        raise


def post(client: httpx.Client, url: str, config: conf.Config, content: str | bytes) -> httpx.Response:
    """Wrapper for httpx.post call with a raw body, see `get` for the error handling."""
    try:
        return client.post(url, content=content)
    except httpx.TransportError as e:
        e.add_note(f"Failed to POST {url=} with ssl verification {config.enable_ssl_verification}")
        raise
