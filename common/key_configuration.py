# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""
Ephemeral key pairs used to prove possession of a private key.

Tokens are compact JWS with the public key embedded in the protected header,
so the verifier needs no prior knowledge of the key.
"""

from jwcrypto import jwk, jws, common as jw_common

SIGNING_ALGORITHM = "ES256"
"""The only algorithm the protocol accepts. ECDSA over P-256 with SHA-256."""

KEY_TYPE = "EC"
CURVE = "P-256"
TOKEN_TYPE = "JWT"


class KeyConfiguration:
    """
    Holds a Private Key and derives the public key to embed into tokens
    """

    @staticmethod
    def generate() -> "KeyConfiguration":
        """Creates a fresh key pair, meant to be used for a single proof attempt."""
        return KeyConfiguration(jwk.JWK.generate(kty=KEY_TYPE, crv=CURVE))

    def __init__(self, private_jwk: jwk.JWK, signing_algorithm: str = SIGNING_ALGORITHM):
        if not private_jwk.has_private:
            raise ValueError("A private key is required to sign tokens.")
        self.private_jwk = private_jwk
        self.signing_algorithm = signing_algorithm
        self.public_jwk = jwk.JWK(**private_jwk.export_public(as_dict=True))

    def encode_jwt(self, payload: dict, header: dict = None) -> str:
        """
        Signs the payload as compact JWS.
        Unless given, `alg`, `typ` and the public key as `jwk` are set in the protected header.
        """
        header = dict(header) if header else {}
        header.setdefault('alg', self.signing_algorithm)
        header.setdefault('typ', TOKEN_TYPE)
        header.setdefault('jwk', self.public_jwk.export_public(as_dict=True))

        encoded_claims = jw_common.json_encode(payload)
        encoded_header = jw_common.json_encode(header)
        signer = jws.JWS(encoded_claims)
        signer.add_signature(key=self.private_jwk, protected=encoded_header)
        return signer.serialize(compact=True)

