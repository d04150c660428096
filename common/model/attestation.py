# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""
Wire models shared by verifier and holder
"""
from typing import Literal

from pydantic import BaseModel


class NonceResponse(BaseModel):
    nonce: str
    """Freshly issued challenge, to be embedded as `nonce` claim of the attestation token."""


class VerificationResponse(BaseModel):
    status: Literal["success"] = "success"
