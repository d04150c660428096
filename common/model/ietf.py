# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""
Collection of Pydantic models for IETF Objects
"""
import json

from jwcrypto import jwk
from pydantic import BaseModel, ConfigDict

PRIVATE_KEY_MEMBERS = frozenset({"d", "p", "q", "dp", "dq", "qi", "oth", "k"})
"""JWK members which only appear in private or symmetric keys, see RFC 7518 section 6"""

EC_PUBLIC_KEY_MEMBERS = ("kty", "crv", "x", "y")
"""Members of an elliptic curve public key, see RFC 7518 section 6.2.1"""


class JSONWebKey(BaseModel):
    """
    represents a cryptographic key
    https://datatracker.ietf.org/doc/html/rfc7517
    """

    model_config = ConfigDict(extra='allow')

    kty: str
    """
    key type
    https://datatracker.ietf.org/doc/html/rfc7517#section-4.1
    """

    crv: str | None = None
    """
    Curve of an elliptic curve key
    https://datatracker.ietf.org/doc/html/rfc7518#section-6.2.1.1
    """

    x: str | None = None
    y: str | None = None

    use: str | None = None
    """
    Intended Use of the public key
    https://datatracker.ietf.org/doc/html/rfc7517#section-4.2
    """

    key_ops: list[str] | None = None
    """
    https://datatracker.ietf.org/doc/html/rfc7517#section-4.3
    """

    alg: str | None = None
    """
    Algorithm intended for use with the key
    https://datatracker.ietf.org/doc/html/rfc7517#section-4.4
    """

    kid: str | None = None
    """
    Key ID, used to match specific keys
    https://datatracker.ietf.org/doc/html/rfc7517#section-4.5
    """

    def has_private_material(self) -> bool:
        return bool(PRIVATE_KEY_MEMBERS.intersection(self.model_dump(exclude_none=True)))

    def as_verification_key(self) -> jwk.JWK:
        """
        Imports the public EC members of the key into the crypto library.
        All other members are dropped, they are untrusted input and never reach the key import.
        """
        members = self.model_dump(include=set(EC_PUBLIC_KEY_MEMBERS), exclude_none=True)
        return jwk.JWK.from_json(json.dumps(members))
