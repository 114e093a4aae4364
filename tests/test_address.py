import pytest

from flowkit.address import EMPTY_ID, Address, hex_to_address, hex_to_id


def test_short_address_is_left_padded():
    assert str(Address.from_hex("0x1")) == "0000000000000001"


def test_hex_to_address_matches_classmethod():
    assert hex_to_address("0x4") == Address.from_hex("0x4")


def test_prefix_and_odd_length_are_optional():
    assert Address.from_hex("1") == Address.from_hex("0x01")


def test_long_address_keeps_last_bytes():
    tail = "0123456789abcdef"
    assert Address.from_hex("ff" + tail) == Address.from_hex(tail)
    assert str(Address.from_hex(tail)) == tail


def test_invalid_hex_gives_empty_address():
    assert Address.from_hex("zz") == Address(bytes(8))


def test_partial_hex_keeps_valid_prefix():
    assert Address.from_hex("12zz") == Address.from_hex("12")


@pytest.mark.parametrize("text", ["0000000000000001", "00000000deadbeef", "ffffffffffffffff"])
def test_string_round_trip(text):
    assert str(Address.from_hex(text)) == text
    assert Address.from_hex(str(Address.from_hex(text))) == Address.from_hex(text)


def test_bytes_round_trip():
    address = Address.from_hex("0x123456789")
    assert Address(bytes(address)) == address


def test_wrong_length_rejected():
    with pytest.raises(ValueError):
        Address(b"\x01")


def test_id_full_round_trip():
    text = "ab" * 32
    assert hex_to_id(text).hex() == text


def test_id_invalid_is_empty():
    assert hex_to_id("zz") == EMPTY_ID
    assert hex_to_id("0xab") == EMPTY_ID


def test_id_partial_is_right_padded():
    assert hex_to_id("abzz") == bytes([0xAB]) + bytes(31)
    assert len(hex_to_id("ab")) == 32