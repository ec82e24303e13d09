"""Short code generation utilities."""

import random
import secrets
import string
from typing import Optional


class ShortCodeGenerator:
    """Generate candidate short codes for links.

    Codes are drawn from a random float whose fraction is expanded in base 36.
    The generator does not check for collisions; that is left to the service.
    """

    # Base36 characters (digits then lowercase letters)
    BASE36_CHARS = string.digits + string.ascii_lowercase

    # Characters accepted in any short code, generated or custom
    VALID_CHARS = frozenset(string.ascii_letters + string.digits + "-_")

    def __init__(self, default_length: int = 6, secure: bool = False):
        """Initialize short code generator.

        Args:
            default_length: Default length for generated codes
            secure: Draw from the OS CSPRNG instead of the Mersenne Twister
        """
        if default_length < 1:
            raise ValueError("default_length must be at least 1")
        self.default_length = default_length
        self.secure = secure
        self._rng = secrets.SystemRandom() if secure else random.Random()

    def generate_random(self, length: Optional[int] = None) -> str:
        """Generate a random short code.

        Args:
            length: Length of the code (uses default if not specified)

        Returns:
            Random lowercase alphanumeric short code of exactly ``length`` characters
        """
        length = length or self.default_length
        return self._fraction_to_base36(self._rng.random(), length)

    def _fraction_to_base36(self, value: float, length: int) -> str:
        """Expand the fractional part of a float into base36 digits.

        Args:
            value: Float in [0, 1)
            length: Number of digits to produce

        Returns:
            Base36 string
        """
        base = len(self.BASE36_CHARS)
        result = []

        # A double only carries ~10 base36 digits of entropy; top up beyond that
        while len(result) < length:
            value *= base
            digit = int(value)
            result.append(self.BASE36_CHARS[digit])
            value -= digit
            if len(result) % 10 == 0:
                value = self._rng.random()

        return "".join(result)

    @classmethod
    def is_valid_format(cls, code: str) -> bool:
        """Check if code only uses letters, digits, hyphens and underscores."""
        return bool(code) and all(c in cls.VALID_CHARS for c in code)
