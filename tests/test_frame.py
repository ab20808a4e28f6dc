"""Tests for request frame building and user register parsing."""

import pytest

from sht21_protocol.constants import SHT21_I2C_ADDRESS, Command, Direction
from sht21_protocol.frame import RequestFrame, build_request, parse_user_register


def test_write_user_reg_is_write():
    frame = build_request(Command.WRITE_USER_REG)
    assert frame.direction == Direction.WRITE
    assert frame.word == 0x80E6


@pytest.mark.parametrize(
    "command", [c for c in Command if c != Command.WRITE_USER_REG]
)
def test_other_commands_are_read(command):
    frame = build_request(command)
    assert frame.direction == Direction.READ
    assert (frame.word >> 8) & 0x1 == 1


def test_word_layout():
    """[ADDRESS:7][R/W:1][COMMAND:8]"""
    frame = build_request(Command.TEMP_MEASURE_HOLD)
    assert frame.word == 0x81E3
    assert frame.word >> 9 == SHT21_I2C_ADDRESS
    assert frame.word & 0xFF == 0xE3


def test_address_byte_carries_direction():
    """High byte of the word is the 8-bit address as it appears on the bus."""
    assert build_request(Command.WRITE_USER_REG).word >> 8 == 0x80
    assert build_request(Command.READ_USER_REG).word >> 8 == 0x81


def test_to_bytes():
    assert build_request(Command.SOFT_RESET).to_bytes() == b"\xFE"
    assert build_request(Command.WRITE_USER_REG).to_bytes(b"\x3E") == b"\xE6\x3E"


def test_build_accepts_plain_int():
    assert build_request(0xE5).command == Command.RH_MEASURE_HOLD


def test_unknown_command_rejected():
    with pytest.raises(ValueError):
        build_request(0x42)


def test_address_must_be_7_bits():
    with pytest.raises(ValueError):
        RequestFrame(0x80, Direction.READ, Command.READ_USER_REG)


def test_frame_is_immutable():
    frame = build_request(Command.READ_USER_REG)
    with pytest.raises(AttributeError):
        frame.command = Command.SOFT_RESET


def test_parse_user_register_from_buffer():
    reg = parse_user_register(b"\x3A")
    assert reg.raw == 0x3A


def test_parse_user_register_from_int():
    assert parse_user_register(0x02).raw == 0x02


def test_parse_user_register_wrong_length():
    with pytest.raises(ValueError):
        parse_user_register(b"\x3A\x00")


def test_parse_round_trip_all_bytes():
    """Parsing then re-serializing gives back the exact byte, reserved bits included."""
    for value in range(256):
        assert parse_user_register(bytes([value])).to_byte() == value


def test_repr():
    assert "WRITE" in repr(build_request(Command.WRITE_USER_REG))
