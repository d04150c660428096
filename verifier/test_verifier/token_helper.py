# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""Helpers to build valid and deliberately broken attestation tokens"""

from jwcrypto import jws, common as jw_common

from common import parsing
from common.key_configuration import KeyConfiguration

DUMMY_SIGNATURE = "c2lnbmF0dXJl"


def signed_token(nonce: str, key_config: KeyConfiguration | None = None, header: dict | None = None) -> str:
    key_config = key_config or KeyConfiguration.generate()
    return key_config.encode_jwt({"nonce": nonce}, header)


def signed_raw_payload(payload: bytes, key_config: KeyConfiguration) -> str:
    """Signs arbitrary bytes as payload, which do not need to be JSON"""
    header = {"alg": "ES256", "typ": "JWT", "jwk": key_config.public_jwk.export_public(as_dict=True)}
    signer = jws.JWS(payload)
    signer.add_signature(key=key_config.private_jwk, protected=jw_common.json_encode(header))
    return signer.serialize(compact=True)


def unsigned_token(header: dict, claims: dict | None = None) -> str:
    """Token with the given header and a signature which never verifies"""
    return f"{parsing.object_to_url_safe(header)}.{parsing.object_to_url_safe(claims or {})}.{DUMMY_SIGNATURE}"


def replace_payload(token: str, claims: dict) -> str:
    header, _, signature = token.split(".")
    return f"{header}.{parsing.object_to_url_safe(claims)}.{signature}"
