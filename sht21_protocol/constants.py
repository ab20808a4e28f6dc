"""
Protocol constants for the SHT21 humidity/temperature sensor.

Reference: Sensirion SHT21 datasheet, sections 5.3 - 6.2
"""

from enum import IntEnum

# I2C addressing
SHT21_I2C_ADDRESS = 0x40

# User register bit masks
USER_REG_RESOLUTION_HIGH = 1 << 7
USER_REG_RESOLUTION_LOW = 1 << 0
USER_REG_END_OF_BATTERY = 1 << 6
USER_REG_RESERVED = 0b00111000
USER_REG_CHIP_HEATER = 1 << 2
USER_REG_DISABLE_OTP_RELOAD = 1 << 1

# CRC-8: P(x) = x^8 + x^5 + x^4 + 1
CRC_POLYNOMIAL = 0x131

# Two low bits of a measurement word carry status, not data
STATUS_BITS_MASK = 0x0003

# Calibration coefficients (datasheet 6.1, 6.2)
TEMP_OFFSET = -46.85
TEMP_SCALE = 175.72
RH_OFFSET = -6.0
RH_SCALE = 125.0
ADC_FULL_SCALE = 65536.0

# Response lengths in bytes
MEASUREMENT_LENGTH = 3
USER_REG_LENGTH = 1

# Self-test heater soak time
SELFTEST_SETTLE_MS = 10000


class Direction(IntEnum):
    """Two-wire R/W bit."""
    WRITE = 0
    READ = 1


class Command(IntEnum):
    """Command codes (Host -> SHT21)."""
    TEMP_MEASURE_HOLD = 0xE3
    RH_MEASURE_HOLD = 0xE5
    TEMP_MEASURE = 0xF3
    RH_MEASURE = 0xF5
    WRITE_USER_REG = 0xE6
    READ_USER_REG = 0xE7
    SOFT_RESET = 0xFE


# Maximum conversion time at the highest resolution
MEASUREMENT_DELAY_MS = {
    Command.TEMP_MEASURE_HOLD: 90,
    Command.RH_MEASURE_HOLD: 40,
}


class Resolution(IntEnum):
    """
    Measurement resolution modes.

    The high bit of the mode is user register bit 7, the low bit is bit 0.
    """
    RH12_T14 = 0b00
    RH8_T12 = 0b01
    RH10_T13 = 0b10
    RH11_T11 = 0b11

    @property
    def humidity_bits(self) -> int:
        return {0b00: 12, 0b01: 8, 0b10: 10, 0b11: 11}[self.value]

    @property
    def temperature_bits(self) -> int:
        return {0b00: 14, 0b01: 12, 0b10: 13, 0b11: 11}[self.value]


class SelfTestStep(IntEnum):
    """Self-test states, in execution order."""
    BASELINE = 1
    HEATER_ON = 2
    SETTLING = 3
    RECHECK = 4
    CLEANUP = 5


class ErrorKind(IntEnum):
    """Error codes carried by a Result."""
    NONE = 0x00
    ACK_ERROR = 0x01
    TIMEOUT = 0x02
    CHECKSUM_ERROR = 0x04
    UNIT_ERROR = 0x08
    SELFTEST_FAILED = 0x09

    @classmethod
    def name_of(cls, error: int) -> str:
        """Get error name from code."""
        names = {
            cls.NONE: "NONE",
            cls.ACK_ERROR: "ACK_ERROR",
            cls.TIMEOUT: "TIMEOUT",
            cls.CHECKSUM_ERROR: "CHECKSUM_ERROR",
            cls.UNIT_ERROR: "UNIT_ERROR",
            cls.SELFTEST_FAILED: "SELFTEST_FAILED",
        }
        return names.get(error, f"Unknown(0x{error:02X})")
