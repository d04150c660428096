# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

from enum import Enum

from common.logging import operations


class VerifierOperationsLogEntry(operations.OperationsLogEntry):
    """Container for verifier operations specific logging."""

    class Operation(Enum):
        challenge = "CHALLENGE"
        attestation = "ATTESTATION"

    class Step(Enum):
        challenge_issued = "ISSUED"
        attestation_received = "RECEIVED"
        attestation_parsed = "PARSED"
        attestation_key_extracted = "KEY_EXTRACTED"
        attestation_signature_checked = "SIGNATURE_CHECKED"
        attestation_nonce_consumed = "NONCE_CONSUMED"

    operation: Operation
    step: Step
