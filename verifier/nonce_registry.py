# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""
In memory registry of the challenges handed out to holders.

A nonce stays outstanding until a verification consumes it. Nothing is persisted,
the registry lives as long as the application owning it.
"""

import threading
import uuid
from typing import Annotated

from fastapi import Depends, Request


class NonceRegistry:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._outstanding: set[str] = set()

    def issue(self) -> str:
        """Creates a random nonce and registers it as outstanding."""
        with self._lock:
            nonce = str(uuid.uuid4())
            while nonce in self._outstanding:
                nonce = str(uuid.uuid4())
            self._outstanding.add(nonce)
        return nonce

    def consume(self, candidate: str) -> bool:
        """
        Removes the nonce if it is outstanding.

        Returns True exactly once per issued nonce, False for unknown or already consumed values.
        """
        with self._lock:
            if candidate not in self._outstanding:
                return False
            self._outstanding.remove(candidate)
            return True

    def clear(self) -> int:
        """Drops all outstanding nonces, returns how many were dropped."""
        with self._lock:
            dropped = len(self._outstanding)
            self._outstanding.clear()
        return dropped

    def __len__(self) -> int:
        with self._lock:
            return len(self._outstanding)

    def __contains__(self, candidate: object) -> bool:
        with self._lock:
            return candidate in self._outstanding


def get_nonce_registry(request: Request) -> NonceRegistry:
    """The registry is owned by the application serving the request."""
    return request.app.state.nonce_registry


inject = Annotated[NonceRegistry, Depends(get_nonce_registry)]
