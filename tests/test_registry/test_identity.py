"""Tests for content-hash class identities."""

import hashlib

from stylezx.registry import canonicalize, class_name, identify


def test_identity_is_eight_hex_chars():
    identity = identify({"p": 20})
    assert len(identity) == 8
    int(identity, 16)


def test_matches_md5_of_canonical_json():
    expected = hashlib.md5(b'{"bg":"red","p":20}').hexdigest()[:8]
    assert identify({"p": 20, "bg": "red"}) == expected


def test_key_order_does_not_matter():
    assert identify({"p": 20, "bg": "red"}) == identify({"bg": "red", "p": 20})


def test_nested_key_order_does_not_matter():
    a = {"&:hover": {"opacity": 0.9, "m": 0}, "p": 1}
    b = {"p": 1, "&:hover": {"m": 0, "opacity": 0.9}}
    assert identify(a) == identify(b)


def test_different_values_differ():
    assert identify({"p": 20}) != identify({"p": 21})


def test_literal_types_are_distinguished():
    assert identify({"p": 1}) != identify({"p": "1"})
    assert identify({"flag": True}) != identify({"flag": "true"})


def test_custom_length():
    assert len(identify({"p": 1}, length=12)) == 12


def test_canonical_form_is_compact():
    assert canonicalize({"b": None, "a": 1}) == '{"a":1,"b":null}'


def test_class_name():
    assert class_name("1a2b3c4d") == "zx-1a2b3c4d"
    assert class_name("1a2b3c4d", prefix="sz") == "sz-1a2b3c4d"
