# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""Errors of a single proof attempt. None of them is retried."""


class ProducerError(Exception):
    """Base class for failures of the holder to deliver a proof."""


class ChallengeFetchFailedError(ProducerError):
    """No usable nonce could be obtained from the verifier."""


class SubmissionFailedError(ProducerError):
    """The signed token could not be delivered to the verifier."""
