"""
Custom exceptions for the SHT21 protocol.

Transports raise TransportError subclasses; the client turns them into
Result values. Result.unwrap() raises the matching exception for callers
that prefer exceptions.
"""

from .constants import ErrorKind


class SHT21Error(Exception):
    """Base exception for SHT21 protocol errors."""
    kind = ErrorKind.UNIT_ERROR


class TransportError(SHT21Error):
    """Bus transfer failed."""
    pass


class AckError(TransportError):
    """Device did not acknowledge its address or a data byte."""
    kind = ErrorKind.ACK_ERROR


class BusTimeoutError(TransportError):
    """Bus transfer did not complete in time."""
    kind = ErrorKind.TIMEOUT


class BusError(TransportError):
    """Any other bus or adapter failure."""
    kind = ErrorKind.UNIT_ERROR


class CRCError(SHT21Error):
    """CRC verification failed."""
    kind = ErrorKind.CHECKSUM_ERROR


class SelfTestFailedError(SHT21Error):
    """Heater self-test did not move the readings past the thresholds."""
    kind = ErrorKind.SELFTEST_FAILED


_ERRORS = {
    ErrorKind.ACK_ERROR: AckError,
    ErrorKind.TIMEOUT: BusTimeoutError,
    ErrorKind.CHECKSUM_ERROR: CRCError,
    ErrorKind.UNIT_ERROR: BusError,
    ErrorKind.SELFTEST_FAILED: SelfTestFailedError,
}


def error_for(kind: ErrorKind) -> SHT21Error:
    """
    Build the exception matching an error kind.

    Args:
        kind: Any ErrorKind except NONE

    Returns:
        Exception instance ready to raise
    """
    if kind == ErrorKind.NONE:
        raise ValueError("ErrorKind.NONE has no exception")
    exc_class = _ERRORS.get(kind, SHT21Error)
    return exc_class(ErrorKind.name_of(kind))
