"""
Tests for short code generation strategies.
"""
import string

import pytest

from shortlink_app.exceptions import CodeGenerationExhaustedError
from shortlink_app.services.short_code_strategies import RandomShortCodeStrategy


class TestRandomStrategy:
    """Test random generation strategy"""

    def test_generates_correct_length(self):
        strategy = RandomShortCodeStrategy()

        code = strategy.generate(lambda code: False)

        assert len(code) == 6

    def test_custom_length(self):
        strategy = RandomShortCodeStrategy(length=10)

        assert len(strategy.generate(lambda code: False)) == 10

    def test_alphanumeric_only(self):
        strategy = RandomShortCodeStrategy()
        allowed = set(string.ascii_letters + string.digits)

        for _ in range(200):
            assert set(strategy.generate(lambda code: False)) <= allowed

    def test_alphabet_is_62_characters(self):
        assert len(RandomShortCodeStrategy.CHARACTERS) == 62
        assert len(set(RandomShortCodeStrategy.CHARACTERS)) == 62

    def test_skips_taken_codes(self, monkeypatch):
        strategy = RandomShortCodeStrategy()
        candidates = iter(["taken1", "taken2", "free01"])
        monkeypatch.setattr(strategy, "_generate_random_string", lambda: next(candidates))
        taken = {"taken1", "taken2"}

        assert strategy.generate(lambda code: code in taken) == "free01"

    def test_exhausted_after_max_attempts(self):
        strategy = RandomShortCodeStrategy(max_attempts=100)
        calls = []

        def always_taken(code):
            calls.append(code)
            return True

        with pytest.raises(CodeGenerationExhaustedError) as exc_info:
            strategy.generate(always_taken)

        assert len(calls) == 100
        assert exc_info.value.attempts == 100
        assert "100 attempts" in str(exc_info.value)
