"""
Random source driven by a serial number.

The serial number is read as a base-36 integer. Each randrange(n) call takes
the remainder modulo n as its answer and keeps the quotient for the next
call, so the whole maze is a function of the serial number.
"""

import string

import structlog

from .exceptions import InvalidInputError

logger = structlog.get_logger()

BASE36_DIGITS = string.digits + string.ascii_uppercase


def decode_base36(serial: str) -> int:
    """Decode a serial number such as 'AB3CD5' as a base-36 integer."""
    value = 0
    for char in serial.upper():
        digit = BASE36_DIGITS.find(char)
        if digit == -1:
            raise InvalidInputError(f"Invalid serial number character {char!r} in {serial!r}")
        value = value * 36 + digit
    return value


class SerialNumberSource:
    """Deterministic choice source consuming a serial number by modulo division."""

    def __init__(self, serial: str):
        if not serial:
            raise InvalidInputError("Serial number must not be empty")
        self.serial = serial.upper()
        self.value = decode_base36(self.serial)
        self.call_count = 0

    def randrange(self, n: int) -> int:
        if n <= 0:
            raise ValueError(f"randrange() needs a positive bound, got {n}")
        self.call_count += 1
        old_value = self.value
        index = self.value % n
        self.value //= n
        logger.debug("Serial selection", options=n, old=old_value, index=index, new=self.value)
        return index

    def random(self) -> float:
        return self.randrange(2 ** 32) / 2 ** 32

    def choice(self, seq):
        if not seq:
            raise IndexError("Cannot choose from an empty sequence")
        return seq[self.randrange(len(seq))]
