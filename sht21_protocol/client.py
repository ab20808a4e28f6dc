"""
High-level protocol client.

Provides a simple API for reading and configuring an SHT21 over a
Transport. Every operation returns a Result; bus errors and checksum
mismatches never raise.
"""

import logging
from typing import Callable, Optional

from .constants import (
    SHT21_I2C_ADDRESS, MEASUREMENT_DELAY_MS, MEASUREMENT_LENGTH, USER_REG_LENGTH,
    Command, ErrorKind, Resolution,
)
from .conversion import to_humidity, to_temperature
from .exceptions import TransportError
from .frame import build_request, parse_user_register
from .result import Result
from .selftest import SelfTest, SelfTestConfig
from .sensors import SelfTestReport, UserRegister
from .transport import Transport

logger = logging.getLogger(__name__)


class SHT21Client:
    """High-level client for one SHT21 on one bus."""

    def __init__(self, transport: Transport, address: int = SHT21_I2C_ADDRESS):
        """
        Initialize SHT21 client.

        Args:
            transport: Transport instance (opened by the caller)
            address: 7-bit device address
        """
        self.transport = transport
        self.address = address

    def _send_and_receive(self, command: Command, length: int) -> Result[bytes]:
        """
        Send a read command and fetch its response.

        Hold measurements wait out the conversion time between the
        command and the read.

        Args:
            command: Command to send
            length: Response length in bytes

        Returns:
            Result with the response bytes, the transport error, or TIMEOUT
            if fewer bytes arrived than requested
        """
        frame = build_request(command, self.address)
        logger.debug(f"Sending {frame}")
        try:
            self.transport.transmit(self.address, frame.to_bytes())
            delay_ms = MEASUREMENT_DELAY_MS.get(frame.command)
            if delay_ms:
                self.transport.delay(delay_ms)
            data = self.transport.receive(self.address, length)
        except TransportError as e:
            logger.warning(f"{command.name} failed: {e}")
            return Result.failure(e.kind)
        if len(data) != length:
            logger.warning(f"{command.name} short read: expected {length} bytes, "
                           f"got {len(data)}")
            return Result.failure(ErrorKind.TIMEOUT)
        return Result.success(bytes(data))

    def _send(self, command: Command, payload: bytes = b'') -> Result[None]:
        """Send a write command with no response phase."""
        frame = build_request(command, self.address)
        logger.debug(f"Sending {frame}, payload={payload.hex() if payload else 'none'}")
        try:
            self.transport.transmit(self.address, frame.to_bytes(payload))
        except TransportError as e:
            logger.warning(f"{command.name} failed: {e}")
            return Result.failure(e.kind)
        return Result.success()

    # === Measurements ===

    def read_temperature(self) -> Result[float]:
        """
        Measure temperature (hold master mode).

        Returns:
            Result with degrees Celsius
        """
        response = self._send_and_receive(Command.TEMP_MEASURE_HOLD, MEASUREMENT_LENGTH)
        if not response.ok:
            return Result.failure(response.error)
        result = to_temperature(response.value)
        if result.ok:
            logger.debug(f"Temperature: {result.value:.2f} C")
        return result

    def read_humidity(self) -> Result[float]:
        """
        Measure relative humidity (hold master mode).

        Returns:
            Result with %RH
        """
        response = self._send_and_receive(Command.RH_MEASURE_HOLD, MEASUREMENT_LENGTH)
        if not response.ok:
            return Result.failure(response.error)
        result = to_humidity(response.value)
        if result.ok:
            logger.debug(f"Humidity: {result.value:.2f} %RH")
        return result

    # === User register ===

    def read_user_register(self) -> Result[UserRegister]:
        """Read the user register."""
        response = self._send_and_receive(Command.READ_USER_REG, USER_REG_LENGTH)
        if not response.ok:
            return Result.failure(response.error)
        register = parse_user_register(response.value)
        logger.debug(f"Read {register}")
        return Result.success(register)

    def write_user_register(self, register: UserRegister) -> Result[None]:
        """
        Write the user register.

        Pass a register obtained from read_user_register() and changed with
        its with_* methods so the reserved bits are written back unchanged.
        """
        return self._send(Command.WRITE_USER_REG, bytes([register.to_byte()]))

    def _modify_user_register(
        self, change: Callable[[UserRegister], UserRegister], what: str
    ) -> Result[UserRegister]:
        current = self.read_user_register()
        if not current.ok:
            return current
        updated = change(current.value)
        written = self.write_user_register(updated)
        if not written.ok:
            return Result.failure(written.error)
        logger.info(f"{what}: 0x{current.value.raw:02X} -> 0x{updated.raw:02X}")
        return Result.success(updated)

    def set_heater(self, enabled: bool) -> Result[UserRegister]:
        """
        Switch the on-chip heater.

        Returns:
            Result with the register as written
        """
        return self._modify_user_register(
            lambda reg: reg.with_heater(enabled),
            f"Heater {'on' if enabled else 'off'}",
        )

    def set_resolution(self, resolution: Resolution) -> Result[UserRegister]:
        """
        Change the measurement resolution.

        The hold-measurement delays stay at the highest-resolution maxima.

        Returns:
            Result with the register as written
        """
        resolution = Resolution(resolution)
        return self._modify_user_register(
            lambda reg: reg.with_resolution(resolution),
            f"Resolution {resolution.name}",
        )

    # === Control ===

    def soft_reset(self) -> Result[None]:
        """Reboot the sensor; the register returns to defaults except the heater bit."""
        result = self._send(Command.SOFT_RESET)
        if result.ok:
            logger.info("Soft reset sent")
        return result

    def self_test(self, config: Optional[SelfTestConfig] = None) -> Result[SelfTestReport]:
        """
        Convenience method to run the heater self-test.

        Args:
            config: Thresholds and timing (defaults if None)

        Returns:
            Result with the SelfTestReport
        """
        return SelfTest(self, config).run()

    def __repr__(self) -> str:
        return f"SHT21Client(address=0x{self.address:02X}, transport={self.transport!r})"
