"""
Request frame building and response parsing.

Request word (16 bits): [ADDRESS:7][R/W:1][COMMAND:8]
- ADDRESS: 7-bit device address (0x40)
- R/W: 0 = write, 1 = read. Only WRITE_USER_REG is a write.
- COMMAND: Command code

On the wire the address byte is ADDRESS << 1 with the R/W bit in bit 0,
followed by the command byte and, for WRITE_USER_REG, the register value.

Reference: SHT21 datasheet 5.3, Table 6
"""

from dataclasses import dataclass
from typing import Union

from .constants import SHT21_I2C_ADDRESS, USER_REG_LENGTH, Command, Direction
from .sensors import UserRegister


@dataclass(frozen=True)
class RequestFrame:
    """Command request for one transaction."""
    address: int
    direction: Direction
    command: Command

    def __post_init__(self):
        if not 0 <= self.address <= 0x7F:
            raise ValueError(f"Address must be 7 bits, got 0x{self.address:X}")

    @property
    def word(self) -> int:
        """Packed 16-bit request."""
        return ((self.address & 0x7F) << 9) | ((self.direction & 0x1) << 8) | (self.command & 0xFF)

    def to_bytes(self, payload: bytes = b'') -> bytes:
        """Command byte followed by payload, ready for transmit."""
        return bytes([self.command]) + bytes(payload)

    def __repr__(self) -> str:
        return (f"RequestFrame(0x{self.word:04X}: addr=0x{self.address:02X}, "
                f"{self.direction.name}, cmd={self.command.name})")


def build_request(command: Command, address: int = SHT21_I2C_ADDRESS) -> RequestFrame:
    """
    Build the request frame for a command.

    Args:
        command: Command to send
        address: 7-bit device address

    Returns:
        RequestFrame with the direction derived from the command
    """
    command = Command(command)
    direction = Direction.WRITE if command == Command.WRITE_USER_REG else Direction.READ
    return RequestFrame(address, direction, command)


def parse_user_register(data: Union[int, bytes, bytearray]) -> UserRegister:
    """
    Parse the READ_USER_REG response.

    The raw byte is kept whole so reserved bits go back unchanged on write.

    Args:
        data: Register value or the 1-byte response

    Returns:
        UserRegister
    """
    if isinstance(data, int):
        return UserRegister(data)
    if len(data) != USER_REG_LENGTH:
        raise ValueError(f"User register response must be {USER_REG_LENGTH} byte, got {len(data)}")
    return UserRegister(data[0])
