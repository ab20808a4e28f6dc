"""
CRC-8 checksum used by the SHT21.

Polynomial 0x131 (x^8 + x^5 + x^4 + 1), initial value 0, bytes processed
MSB first, no final XOR. The accumulator runs across the whole buffer.

Reference: Sensirion application note "CRC Checksum Calculation for SHT2x"
"""

from typing import Iterable

from .constants import CRC_POLYNOMIAL


class CRC8:
    """SHT21 CRC-8 calculator."""

    POLYNOMIAL = CRC_POLYNOMIAL

    @staticmethod
    def calculate(data: Iterable[int]) -> int:
        """
        Calculate the checksum over data.

        Args:
            data: Data bytes as received (without the checksum byte)

        Returns:
            8-bit checksum
        """
        crc = 0
        for byte in data:
            crc ^= byte & 0xFF
            for _ in range(8):
                if crc & 0x80:
                    crc = ((crc << 1) ^ CRC8.POLYNOMIAL) & 0xFF
                else:
                    crc = (crc << 1) & 0xFF
        return crc

    @staticmethod
    def check(data: Iterable[int], checksum: int) -> bool:
        """
        Verify data against a received checksum byte.

        Args:
            data: Data bytes
            checksum: Checksum byte sent by the sensor

        Returns:
            True if the checksum matches
        """
        return CRC8.calculate(data) == checksum
