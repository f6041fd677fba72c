"""
Tests for the wall-clock deadline.
"""

from src.discovery.deadline import Deadline

from conftest import FakeClock


class TestDeadline:
    """Test expiry and remaining time."""

    def test_unbounded(self):
        deadline = Deadline()
        assert not deadline.is_expired()
        assert deadline.remaining() is None

    def test_after(self):
        clock = FakeClock(100.0)
        deadline = Deadline.after(10, clock)

        assert deadline.at == 110.0
        assert deadline.remaining() == 10.0
        clock.advance(10)
        assert deadline.is_expired()
        assert deadline.remaining() == 0.0

    def test_after_none(self):
        assert Deadline.after(None).at is None
