"""
Sensor data structures.

Reference: SHT21 datasheet 5.6 (user register), 5.7 (measurement response)
All multi-byte values use Big-endian byte order.
"""

from dataclasses import dataclass
from typing import Optional, Union
import struct

from .constants import (
    USER_REG_RESOLUTION_HIGH, USER_REG_RESOLUTION_LOW, USER_REG_END_OF_BATTERY,
    USER_REG_RESERVED, USER_REG_CHIP_HEATER, USER_REG_DISABLE_OTP_RELOAD,
    STATUS_BITS_MASK, MEASUREMENT_LENGTH,
    Resolution, SelfTestStep, ErrorKind,
)


@dataclass(frozen=True)
class UserRegister:
    """
    SHT21 user register.

    Holds the raw byte as read from the sensor. Fields are read through
    mask accessors and changed with the with_* methods, which only touch
    their own bits, so reserved bits survive a read-modify-write cycle.

    Bit 7,0 : Measurement resolution (see Resolution)
    Bit 6   : End of battery (1 = VDD < 2.25V), read-only
    Bit 3-5 : Reserved, do not change
    Bit 2   : Enable on-chip heater
    Bit 1   : Disable OTP reload
    """
    raw: int

    def __post_init__(self):
        if not 0 <= self.raw <= 0xFF:
            raise ValueError(f"User register must be 8 bits, got 0x{self.raw:X}")

    @property
    def resolution(self) -> Resolution:
        high = 1 if self.raw & USER_REG_RESOLUTION_HIGH else 0
        low = 1 if self.raw & USER_REG_RESOLUTION_LOW else 0
        return Resolution((high << 1) | low)

    @property
    def end_of_battery(self) -> bool:
        return bool(self.raw & USER_REG_END_OF_BATTERY)

    @property
    def heater_enabled(self) -> bool:
        return bool(self.raw & USER_REG_CHIP_HEATER)

    @property
    def otp_reload_disabled(self) -> bool:
        return bool(self.raw & USER_REG_DISABLE_OTP_RELOAD)

    @property
    def reserved(self) -> int:
        return (self.raw & USER_REG_RESERVED) >> 3

    def _with_bit(self, mask: int, enabled: bool) -> 'UserRegister':
        if enabled:
            return UserRegister(self.raw | mask)
        return UserRegister(self.raw & ~mask & 0xFF)

    def with_heater(self, enabled: bool) -> 'UserRegister':
        """Copy with the chip heater bit set or cleared."""
        return self._with_bit(USER_REG_CHIP_HEATER, enabled)

    def with_otp_reload_disabled(self, disabled: bool) -> 'UserRegister':
        """Copy with the OTP reload disable bit set or cleared."""
        return self._with_bit(USER_REG_DISABLE_OTP_RELOAD, disabled)

    def with_resolution(self, resolution: Resolution) -> 'UserRegister':
        """Copy with both resolution bits replaced."""
        resolution = Resolution(resolution)
        reg = self._with_bit(USER_REG_RESOLUTION_HIGH, bool(resolution & 0b10))
        return reg._with_bit(USER_REG_RESOLUTION_LOW, bool(resolution & 0b01))

    def to_byte(self) -> int:
        """Byte to send with WRITE_USER_REG."""
        return self.raw

    def __repr__(self) -> str:
        return (f"UserRegister(0x{self.raw:02X}, resolution={self.resolution.name}, "
                f"heater={'on' if self.heater_enabled else 'off'}, "
                f"otp_reload_disabled={self.otp_reload_disabled}, "
                f"end_of_battery={self.end_of_battery})")


@dataclass(frozen=True)
class RawReading:
    """Three-byte measurement response: data MSB, data LSB, checksum."""
    msb: int
    lsb: int
    checksum: int

    @classmethod
    def from_bytes(cls, data: Union[bytes, bytearray]) -> 'RawReading':
        """Deserialize from the sensor response."""
        if len(data) != MEASUREMENT_LENGTH:
            raise ValueError(
                f"Measurement response must be {MEASUREMENT_LENGTH} bytes, got {len(data)}"
            )
        msb, lsb, checksum = struct.unpack('>BBB', bytes(data))
        return cls(msb, lsb, checksum)

    @property
    def data(self) -> bytes:
        """Data bytes covered by the checksum."""
        return bytes([self.msb, self.lsb])

    @property
    def ticks(self) -> int:
        """16-bit reading with the status bits masked to zero."""
        return ((self.msb << 8) | self.lsb) & ~STATUS_BITS_MASK & 0xFFFF

    @property
    def status(self) -> int:
        """Status bits; bit 1 is set for a humidity measurement."""
        return self.lsb & STATUS_BITS_MASK

    def __repr__(self) -> str:
        return (f"RawReading(ticks=0x{self.ticks:04X}, status={self.status:02b}, "
                f"crc=0x{self.checksum:02X})")


@dataclass
class SelfTestReport:
    """Readings and verdict of a heater self-test."""
    temp_at_start: Optional[float] = None
    hum_at_start: Optional[float] = None
    temp_after_test: Optional[float] = None
    hum_after_test: Optional[float] = None
    verdict: ErrorKind = ErrorKind.NONE
    stopped_at: Optional[SelfTestStep] = None

    @property
    def temp_delta(self) -> Optional[float]:
        """Temperature rise while heating."""
        if self.temp_at_start is None or self.temp_after_test is None:
            return None
        return self.temp_after_test - self.temp_at_start

    @property
    def hum_delta(self) -> Optional[float]:
        """Humidity drop while heating."""
        if self.hum_at_start is None or self.hum_after_test is None:
            return None
        return self.hum_at_start - self.hum_after_test

    @property
    def passed(self) -> bool:
        return (self.stopped_at is None
                and self.temp_delta is not None
                and self.verdict == ErrorKind.NONE)

    def __repr__(self) -> str:
        if self.stopped_at is not None:
            return f"SelfTestReport(aborted at {self.stopped_at.name})"
        if self.temp_delta is None or self.hum_delta is None:
            return "SelfTestReport(pending)"
        status = "PASS" if self.passed else "FAIL"
        return (f"SelfTestReport(dT={self.temp_delta:+.2f}C, "
                f"dRH={self.hum_delta:+.2f}%, {status})")
