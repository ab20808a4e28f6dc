"""
Raw reading to physical value conversion.

T  = -46.85 + 175.72 * S_T  / 2^16   (degrees C)
RH = -6.0   + 125.0  * S_RH / 2^16   (%RH)

S is the 16-bit reading with the two status bits cleared. The checksum is
verified before converting.

Reference: SHT21 datasheet 6.1, 6.2
"""

import logging
from typing import Union

from .constants import (
    TEMP_OFFSET, TEMP_SCALE, RH_OFFSET, RH_SCALE, ADC_FULL_SCALE, ErrorKind
)
from .crc import CRC8
from .result import Result
from .sensors import RawReading

logger = logging.getLogger(__name__)

RawInput = Union[RawReading, bytes, bytearray]


def _as_reading(raw: RawInput) -> RawReading:
    if isinstance(raw, RawReading):
        return raw
    return RawReading.from_bytes(raw)


def _convert(raw: RawInput, offset: float, scale: float) -> Result[float]:
    reading = _as_reading(raw)
    if not CRC8.check(reading.data, reading.checksum):
        logger.warning(f"CRC mismatch in {reading}: "
                       f"calculated 0x{CRC8.calculate(reading.data):02X}")
        return Result.failure(ErrorKind.CHECKSUM_ERROR)
    return Result.success(offset + scale * (reading.ticks / ADC_FULL_SCALE))


def to_temperature(raw: RawInput) -> Result[float]:
    """
    Convert a temperature response to degrees Celsius.

    Args:
        raw: RawReading or the 3-byte response

    Returns:
        Result with the temperature, or CHECKSUM_ERROR
    """
    return _convert(raw, TEMP_OFFSET, TEMP_SCALE)


def to_humidity(raw: RawInput) -> Result[float]:
    """
    Convert a humidity response to %RH.

    Args:
        raw: RawReading or the 3-byte response

    Returns:
        Result with the relative humidity, or CHECKSUM_ERROR
    """
    return _convert(raw, RH_OFFSET, RH_SCALE)
