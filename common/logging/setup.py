# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""
Logging setup of the verifier and the holder.

Records are written to stdout by a single handler which tags them with the
correlation id of the request being served.
"""

import logging
import sys

from asgi_correlation_id import CorrelationIdFilter, correlation_id

from common.config import Config
from common.logging import splunk

CORRELATION_ID_LENGTH = 16
PLAIN_FORMAT = "%(asctime)s %(levelname)-8s [%(correlation_id)s] %(name)s: %(message)s"


def get_log_id() -> str:
    """Correlation id of the current request, empty outside of a request."""
    log_id = correlation_id.get()
    return log_id[:CORRELATION_ID_LENGTH] if log_id else ""


def create_console_handler(config: Config) -> logging.Handler:
    handler = logging.StreamHandler(stream=sys.stdout)
    handler.addFilter(CorrelationIdFilter(uuid_length=CORRELATION_ID_LENGTH, default_value="-"))
    if config.enable_splunk_log:
        handler.setFormatter(splunk.SplunkFormatter(defaults={"app_name": config.app_name}))
    else:
        handler.setFormatter(logging.Formatter(PLAIN_FORMAT))
    return handler


def configure_logging(config: Config) -> None:
    """
    Installs the console handler on the root logger.
    Loggers which brought their own handlers, like the ones of uvicorn, are redirected to it as well.
    """
    handler = create_console_handler(config)
    logging.basicConfig(handlers=[handler], level=config.log_level)

    for logger in logging.root.manager.loggerDict.values():
        if isinstance(logger, logging.Logger) and logger.handlers and handler not in logger.handlers:
            logger.handlers = [handler]
            logger.propagate = False
