"""
I2C transport layer.

Transport is the contract the client drives: raw transmit, raw receive and
a blocking delay. SMBusTransport implements it over Linux i2c-dev.
"""

import errno
import logging
import time
from abc import ABC, abstractmethod
from typing import Optional

from smbus2 import SMBus, i2c_msg

from .exceptions import AckError, BusError, BusTimeoutError, TransportError

logger = logging.getLogger(__name__)

_ACK_ERRNOS = {errno.ENXIO, errno.EIO, getattr(errno, "EREMOTEIO", 121)}


class Transport(ABC):
    """
    Abstract two-wire transport.

    Implementations raise TransportError subclasses on failure. Addresses
    are 7-bit; the implementation adds the R/W bit.
    """

    @abstractmethod
    def transmit(self, address: int, data: bytes) -> None:
        """
        Write bytes to the device.

        Args:
            address: 7-bit device address
            data: Bytes to send (command byte first)

        Raises:
            TransportError: If the transfer fails
        """
        ...

    @abstractmethod
    def receive(self, address: int, length: int) -> bytes:
        """
        Read bytes from the device.

        Args:
            address: 7-bit device address
            length: Number of bytes to read

        Returns:
            Received bytes

        Raises:
            TransportError: If the transfer fails
        """
        ...

    def delay(self, ms: int) -> None:
        """Block for ms milliseconds."""
        time.sleep(ms / 1000.0)


def _translate(exc: OSError, action: str) -> TransportError:
    if exc.errno in _ACK_ERRNOS:
        return AckError(f"{action}: no acknowledge ({exc})")
    if exc.errno == errno.ETIMEDOUT:
        return BusTimeoutError(f"{action}: bus timeout ({exc})")
    return BusError(f"{action}: {exc}")


class SMBusTransport(Transport):
    """I2C transport over /dev/i2c-N using smbus2."""

    def __init__(self, bus: int = 1):
        """
        Initialize I2C transport.

        Args:
            bus: I2C bus number (e.g., 1 for /dev/i2c-1)
        """
        self.bus = bus
        self._smbus: Optional[SMBus] = None

    def open(self) -> None:
        """Open the I2C bus device."""
        try:
            self._smbus = SMBus(self.bus)
            logger.info(f"Opened I2C bus {self.bus}")
        except OSError as e:
            raise BusError(f"Failed to open I2C bus {self.bus}: {e}") from e

    def close(self) -> None:
        """Close the I2C bus device."""
        if self._smbus:
            self._smbus.close()
            self._smbus = None
            logger.info(f"Closed I2C bus {self.bus}")

    def _require_open(self) -> SMBus:
        if self._smbus is None:
            raise BusError(f"I2C bus {self.bus} not open")
        return self._smbus

    def transmit(self, address: int, data: bytes) -> None:
        bus = self._require_open()
        msg = i2c_msg.write(address, list(data))
        try:
            bus.i2c_rdwr(msg)
        except OSError as e:
            raise _translate(e, f"TX to 0x{address:02X}") from e
        logger.debug(f"TX 0x{address:02X} ({len(data)} bytes): {bytes(data).hex(' ')}")

    def receive(self, address: int, length: int) -> bytes:
        bus = self._require_open()
        msg = i2c_msg.read(address, length)
        try:
            bus.i2c_rdwr(msg)
        except OSError as e:
            raise _translate(e, f"RX from 0x{address:02X}") from e
        data = bytes(list(msg))
        logger.debug(f"RX 0x{address:02X} ({len(data)} bytes): {data.hex(' ')}")
        return data

    @property
    def is_open(self) -> bool:
        """Check if the bus is open."""
        return self._smbus is not None

    def __enter__(self) -> 'SMBusTransport':
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        status = "open" if self.is_open else "closed"
        return f"SMBusTransport(bus={self.bus}, {status})"
