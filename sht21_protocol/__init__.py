"""
SHT21 Protocol - Python implementation of the SHT21 humidity/temperature sensor protocol.

This package provides:
- Protocol constants and error codes
- CRC-8 calculation
- Request frame building and user register parsing
- Raw reading conversion to degrees C and %RH
- I2C transport layer
- High-level protocol client
- Heater self-test
"""

from .constants import (
    SHT21_I2C_ADDRESS, MEASUREMENT_DELAY_MS,
    Command, Direction, Resolution, SelfTestStep, ErrorKind
)
from .crc import CRC8
from .exceptions import (
    SHT21Error, TransportError, AckError, BusTimeoutError, BusError,
    CRCError, SelfTestFailedError
)
from .result import Result
from .sensors import UserRegister, RawReading, SelfTestReport
from .frame import RequestFrame, build_request, parse_user_register
from .conversion import to_temperature, to_humidity
from .transport import Transport, SMBusTransport
from .selftest import SelfTest, SelfTestConfig
from .client import SHT21Client

__version__ = "1.0.0"
__all__ = [
    # Constants
    "SHT21_I2C_ADDRESS", "MEASUREMENT_DELAY_MS",
    "Command", "Direction", "Resolution", "SelfTestStep", "ErrorKind",
    # CRC
    "CRC8",
    # Exceptions
    "SHT21Error", "TransportError", "AckError", "BusTimeoutError", "BusError",
    "CRCError", "SelfTestFailedError",
    # Result
    "Result",
    # Data structures
    "UserRegister", "RawReading", "SelfTestReport",
    # Frame
    "RequestFrame", "build_request", "parse_user_register",
    # Conversion
    "to_temperature", "to_humidity",
    # Transport
    "Transport", "SMBusTransport",
    # Self-test
    "SelfTest", "SelfTestConfig",
    # Client
    "SHT21Client",
]
