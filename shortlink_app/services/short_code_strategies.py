"""
Short code generation strategies for the short link registry.
Uses Strategy Pattern to allow different generation algorithms.
"""

import string
import secrets
from abc import ABC, abstractmethod
from typing import Callable

from shortlink_app.exceptions import CodeGenerationExhaustedError


class ShortCodeStrategy(ABC):
    """Abstract base class for short code generation strategies"""

    @abstractmethod
    def generate(self, exists: Callable[[str], bool]) -> str:
        """
        Generate a short code.

        Args:
            exists: Predicate telling whether a code is already taken

        Returns:
            A short code for which exists() returned False
        """
        pass


class RandomShortCodeStrategy(ShortCodeStrategy):
    """
    Random generation strategy.
    Draws each character uniformly from [A-Za-z0-9] and retries on collision.

    Pros: Simple, unpredictable, no shared counter
    Cons: Collision risk grows with the table, bounded number of retries
    """

    CHARACTERS = string.ascii_uppercase + string.ascii_lowercase + string.digits

    def __init__(self, length: int = 6, max_attempts: int = 100):
        self.length = length
        self.max_attempts = max_attempts

    def generate(self, exists: Callable[[str], bool]) -> str:
        """Generate random short code with collision checking"""
        for _ in range(self.max_attempts):
            short_code = self._generate_random_string()
            if not exists(short_code):
                return short_code

        # If all attempts collided
        raise CodeGenerationExhaustedError(self.max_attempts)

    def _generate_random_string(self) -> str:
        """Generate a random string of specified length"""
        return ''.join(secrets.choice(self.CHARACTERS) for _ in range(self.length))
