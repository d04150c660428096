# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

import base64
import binascii
import json
import re

_URL_SAFE_ALPHABET = re.compile(r"[A-Za-z0-9_-]*")


def object_to_url_safe(data: dict | str | list) -> str:
    """Convert the object to an url safe base64 encoded JSON string without padding."""
    return remove_padding(base64.urlsafe_b64encode(json.dumps(data, separators=(',', ':')).encode()).decode())


def object_from_url_safe(data: str) -> dict | str | list:
    """
    Load an JSON object from an url safe base64 encoded string. Adds padding as needed.
    Throws binascii.Error for invalid base64url & ValueError for invalid JSON
    """
    return json.loads(bytes_from_url_safe(data))


def bytes_from_url_safe(data: str) -> bytes:
    """
    Strictly decodes an unpadded base64url string.
    Characters outside of the url safe alphabet, padding included, raise binascii.Error instead of being discarded.
    """
    if not _URL_SAFE_ALPHABET.fullmatch(data):
        raise binascii.Error("Non-base64url digit found")
    return base64.b64decode(add_padding(data), altchars=b'-_', validate=True)


def remove_padding(base64_encoded: str) -> str:
    """Remove padding form b64 encoded string"""
    return base64_encoded.rstrip('=')


def add_padding(base64_encoded: str) -> str:
    """Add padding (=) for b64 encoded string, so it can be decoded"""
    return f'{base64_encoded}{"=" * (-len(base64_encoded) % 4)}'


def interpret_as_bool(boolify: str) -> bool:
    """
    Converts an input to a boolean according to commonly used patterns.
    """
    if isinstance(boolify, bool):
        return boolify
    if isinstance(boolify, int):
        return boolify > 0
    elif isinstance(boolify, str):
        return re.match(r"^(y|yes|1|true)$", boolify, re.IGNORECASE | re.MULTILINE) is not None
    raise ValueError(f"Can't boolify a {boolify}.")
