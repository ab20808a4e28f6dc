"""Tests for the user register, raw reading and self-test report structures."""

import pytest

from sht21_protocol.constants import ErrorKind, Resolution, SelfTestStep
from sht21_protocol.sensors import RawReading, SelfTestReport, UserRegister

DEFAULT_REG = 0x3A  # power-on value: reserved bits set, OTP reload disabled


def test_default_register_fields():
    reg = UserRegister(DEFAULT_REG)
    assert reg.resolution == Resolution.RH12_T14
    assert not reg.end_of_battery
    assert not reg.heater_enabled
    assert reg.otp_reload_disabled
    assert reg.reserved == 0b111


@pytest.mark.parametrize(
    "raw, resolution",
    [
        (0x00, Resolution.RH12_T14),
        (0x01, Resolution.RH8_T12),
        (0x80, Resolution.RH10_T13),
        (0x81, Resolution.RH11_T11),
    ],
)
def test_resolution_bits(raw, resolution):
    assert UserRegister(raw).resolution == resolution


def test_resolution_bit_widths():
    assert Resolution.RH12_T14.humidity_bits == 12
    assert Resolution.RH12_T14.temperature_bits == 14
    assert Resolution.RH8_T12.humidity_bits == 8
    assert Resolution.RH11_T11.temperature_bits == 11


def test_status_bits():
    assert UserRegister(0x40).end_of_battery
    assert UserRegister(0x04).heater_enabled
    assert UserRegister(0x02).otp_reload_disabled


def test_with_heater():
    reg = UserRegister(DEFAULT_REG)
    on = reg.with_heater(True)
    assert on.raw == 0x3E
    assert on.heater_enabled
    assert on.with_heater(False).raw == DEFAULT_REG
    assert reg.raw == DEFAULT_REG


def test_with_heater_touches_only_bit_2():
    for value in range(256):
        reg = UserRegister(value)
        assert reg.with_heater(True).raw ^ value in (0x00, 0x04)
        assert reg.with_heater(False).raw ^ value in (0x00, 0x04)
        assert reg.with_heater(True).raw | 0x04 == value | 0x04


def test_with_resolution_touches_only_resolution_bits():
    for value in range(256):
        for resolution in Resolution:
            updated = UserRegister(value).with_resolution(resolution)
            assert updated.resolution == resolution
            assert updated.raw & 0x7E == value & 0x7E


def test_with_otp_reload_disabled():
    reg = UserRegister(DEFAULT_REG).with_otp_reload_disabled(False)
    assert reg.raw == 0x38
    assert reg.reserved == 0b111


def test_register_must_be_8_bits():
    with pytest.raises(ValueError):
        UserRegister(0x100)


def test_register_repr():
    assert "heater=off" in repr(UserRegister(DEFAULT_REG))


def test_raw_reading_from_bytes():
    reading = RawReading.from_bytes(b"\x68\x3A\x7C")
    assert reading.ticks == 0x6838
    assert reading.status == 0b10
    assert reading.checksum == 0x7C
    assert reading.data == b"\x68\x3A"


def test_raw_reading_wrong_length():
    with pytest.raises(ValueError):
        RawReading.from_bytes(b"\x68\x3A\x7C\x00")


def test_report_deltas():
    report = SelfTestReport(25.0, 50.0, 25.6, 49.3)
    assert report.temp_delta == pytest.approx(0.6)
    assert report.hum_delta == pytest.approx(0.7)
    assert report.passed
    assert "PASS" in repr(report)


def test_report_failed_verdict():
    report = SelfTestReport(25.0, 50.0, 25.1, 50.0, verdict=ErrorKind.SELFTEST_FAILED)
    assert not report.passed
    assert "FAIL" in repr(report)


def test_report_aborted():
    report = SelfTestReport(25.0, stopped_at=SelfTestStep.BASELINE)
    assert report.hum_delta is None
    assert not report.passed
    assert "BASELINE" in repr(report)
