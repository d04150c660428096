# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

import os
from typing import Annotated

from fastapi import Depends

import common.config as conf


class VerifierConfig(conf.Config):
    def __init__(self):
        super().__init__()
        self.app_name = os.getenv("APP_NAME", "Attestation Verifier")
        self.host = os.getenv("VERIFIER_HOST", "127.0.0.1")
        """Address the http server binds to."""
        self.port = int(os.getenv("VERIFIER_PORT", 8080))

    def has_minimum_config(self) -> bool:
        return all([self.host, self.port])


inject = Annotated[VerifierConfig, Depends(VerifierConfig)]
