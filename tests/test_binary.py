import pytest

from clarify.fields.binary import (
    Base64,
    Base64NullZero,
    Hexadecimal,
    HexadecimalNullZero,
)

SAMPLES = [b"", b"\x00", b"\x01\xab", b"hello world", bytes(range(256))]


def test_hexadecimal_encodes_lower_case():
    assert Hexadecimal(b"\x01\xab").to_json() == "01ab"


def test_hexadecimal_str_matches_json():
    value = Hexadecimal(b"\xde\xad\xbe\xef")
    assert str(value) == value.to_json()


@pytest.mark.parametrize("raw", SAMPLES)
def test_hexadecimal_round_trip(raw):
    encoded = Hexadecimal(raw).to_json()
    assert Hexadecimal.from_json(encoded) == raw


def test_hexadecimal_accepts_upper_case():
    assert Hexadecimal.from_json("01AB") == Hexadecimal.from_json("01ab")


@pytest.mark.parametrize("text", ["abc", "zz", "0g"])
def test_hexadecimal_rejects_bad_text(text):
    with pytest.raises(ValueError):
        Hexadecimal.from_json(text)


def test_hexadecimal_rejects_non_string():
    with pytest.raises(TypeError):
        Hexadecimal.from_json(12)


def test_hexadecimal_empty_encodes_to_empty_string():
    assert Hexadecimal(b"").to_json() == ""


def test_hexadecimal_null_zero_empty_is_null():
    assert HexadecimalNullZero(b"").to_json() is None
    assert HexadecimalNullZero.from_json(None) == b""


def test_hexadecimal_null_zero_non_empty_matches_plain():
    raw = b"\x10\x20"
    assert HexadecimalNullZero(raw).to_json() == Hexadecimal(raw).to_json()


def test_base64_is_unpadded_and_url_safe():
    encoded = Base64(b"\xff\xfe").to_json()
    assert encoded == "__4"
    assert "=" not in encoded


@pytest.mark.parametrize("raw", SAMPLES)
def test_base64_round_trip(raw):
    encoded = Base64(raw).to_json()
    assert "=" not in encoded
    assert Base64.from_json(encoded) == raw


def test_base64_str_matches_json():
    value = Base64(b"some bytes")
    assert str(value) == value.to_json()


@pytest.mark.parametrize("text", ["a", "ab=", "+/+/", "ab cd"])
def test_base64_rejects_bad_text(text):
    with pytest.raises(ValueError):
        Base64.from_json(text)


def test_base64_null_zero():
    assert Base64NullZero(b"").to_json() is None
    assert Base64NullZero.from_json(None) == b""
    assert Base64NullZero(b"xyz").to_json() == Base64(b"xyz").to_json()