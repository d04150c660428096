# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

import binascii

import pytest

from common import parsing


def test_interpret_as_bool():
    assert parsing.interpret_as_bool("True")
    assert parsing.interpret_as_bool("true")
    assert parsing.interpret_as_bool("TrUe")
    assert parsing.interpret_as_bool("yes")
    assert parsing.interpret_as_bool("y")
    assert parsing.interpret_as_bool("1")
    assert parsing.interpret_as_bool(1)
    assert parsing.interpret_as_bool(True)
    assert not parsing.interpret_as_bool("False")
    assert not parsing.interpret_as_bool("Falee")
    assert not parsing.interpret_as_bool("Truee")
    assert not parsing.interpret_as_bool("no")
    assert not parsing.interpret_as_bool("n")
    assert not parsing.interpret_as_bool("0")
    assert not parsing.interpret_as_bool(0)
    assert not parsing.interpret_as_bool(False)
    with pytest.raises(ValueError):
        parsing.interpret_as_bool(None)


def test_object_parsing():
    test_object = {
        "str": "Hello World",
        "int": 5,
        "bool": True,
        "dict": {"inner": "data"},
    }
    b64 = parsing.object_to_url_safe(test_object)
    assert isinstance(b64, str)
    assert '=' not in b64, "Encoding must be unpadded"
    assert test_object == parsing.object_from_url_safe(b64)


def test_padding():
    assert parsing.add_padding("") == ""
    assert parsing.add_padding("ab") == "ab=="
    assert parsing.add_padding("abc") == "abc="
    assert parsing.add_padding("abcd") == "abcd"
    assert parsing.remove_padding("ab==") == "ab"


def test_strict_decoding():
    # '?' & '/' are discarded by the lenient python decoder, here they have to fail
    for invalid in ["e30?", "e3/0", "e30 ", "e+30"]:
        with pytest.raises(binascii.Error):
            parsing.bytes_from_url_safe(invalid)
    # A single trailing character can never be valid base64
    with pytest.raises(binascii.Error):
        parsing.bytes_from_url_safe("e30xy")
    assert parsing.bytes_from_url_safe("_-8") == b"\xff\xef"


def test_invalid_json():
    with pytest.raises(ValueError):
        parsing.object_from_url_safe("bm90IGpzb24")
