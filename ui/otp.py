import time
from typing import Callable


def is_digits(value: str) -> bool:
    """True for a non-empty string of ASCII digits only."""
    return value.isascii() and value.isdigit()


class OtpInput:
    """Digit-per-box OTP entry.

    Each box holds at most one digit. Typing a digit moves `focus` to the next
    box, and filling the last box while the others are filled submits the
    code. `focus` is the box a front end should highlight next.
    """

    def __init__(self, length: int = 4):
        self.length = length
        self.digits = [""] * length
        self.focus = 0

    @property
    def code(self) -> str:
        return "".join(self.digits)

    @property
    def is_complete(self) -> bool:
        return len(self.code) == self.length

    def enter(self, index: int, value: str) -> str | None:
        """Handle a change of box `index`.

        Args:
            index: Box position.
            value: New raw content of the box; only its last character is kept.

        Returns:
            The full code when this change completes it in the last box,
            otherwise None.

        """
        if value and not is_digits(value):
            return None

        self.digits[index] = value[-1:]
        if value and index < self.length - 1:
            self.focus = index + 1
        if value and index == self.length - 1 and self.is_complete:
            return self.code
        return None

    def backspace(self, index: int) -> None:
        if not self.digits[index] and index > 0:
            self.focus = index - 1

    def reset(self) -> None:
        self.digits = [""] * self.length
        self.focus = 0


class ResendCountdown:
    """Seconds left until an OTP may be requested again."""

    def __init__(self, seconds: int = 58, clock: Callable[[], float] = time.monotonic):
        self.seconds = seconds
        self._clock = clock
        self._started_at = clock()

    @property
    def remaining(self) -> int:
        elapsed = int(self._clock() - self._started_at)
        return max(self.seconds - elapsed, 0)

    @property
    def can_resend(self) -> bool:
        return self.remaining == 0

    @property
    def label(self) -> str:
        if self.can_resend:
            return "Resend"
        return f"Resend after 0:{self.remaining:02d}"

    def restart(self) -> None:
        self._started_at = self._clock()
