# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

import os

import common.config as conf


class HolderConfig(conf.Config):
    def __init__(self):
        super().__init__()
        self.app_name = os.getenv("APP_NAME", "Attestation Holder")
        self.verifier_url = os.getenv("VERIFIER_URL", "http://127.0.0.1:8080").rstrip("/")
        self.nonce_path = os.getenv("NONCE_PATH", "/nonce")
        self.verify_path = os.getenv("VERIFY_PATH", "/verify")
        self.request_timeout = float(os.getenv("REQUEST_TIMEOUT", 10))
        """Timeout in seconds for each request to the verifier."""

    @property
    def challenge_url(self) -> str:
        return f"{self.verifier_url}{self.nonce_path}"

    @property
    def submission_url(self) -> str:
        return f"{self.verifier_url}{self.verify_path}"
