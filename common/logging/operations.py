# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""
Structured entries for operational logging.

An entry states which step of an operation a component reached and whether it
succeeded there. Components subclass it and replace `Operation` and `Step`.
"""

from enum import Enum

from common.logging import splunk


class OperationsLogEntry(splunk.SplunkExtendedLogEntry):

    class Status(Enum):
        success = "SUCCESS"
        error = "ERROR"

    class Operation(Enum):
        """Placeholder, replaced by the operations of a component."""

        only_test = "ONLY_TEST"

    class Step(Enum):
        """Placeholder, replaced by the steps of a component. Named `<operation>_<step>`."""

        only_test = "ONLY_TEST"

    status: Status
    operation: Operation
    step: Step

    error_code: str | None = None
    """Machine readable reason of a failed step, never set on success."""
