# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""Runs a single proof of possession against the configured verifier."""

import logging
import sys

from common.logging.setup import configure_logging

from holder.config import HolderConfig
from holder.exception import ProducerError
from holder.prover import prove

_logger = logging.getLogger(__name__)


def main() -> int:
    config = HolderConfig()
    configure_logging(config)
    try:
        status_code = prove(config.challenge_url, config.submission_url, config)
    except ProducerError as e:
        _logger.error(f"Holder failed to prove possession. {e}")
        return 1
    return 0 if status_code == 200 else 1


if __name__ == '__main__':
    sys.exit(main())
