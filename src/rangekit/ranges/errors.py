from typing import Any


class RangeArgumentError(Exception):
    """Base class for rejected range operation arguments."""


class InvalidRangeError(RangeArgumentError, TypeError):
    """Raised when an argument is not a well-formed integer range."""

    def __init__(
        self,
        *,
        argument: str,
        value: Any,
        expected: str = "a tuple of two ints",
    ):
        self.argument = argument
        self.value = value
        super().__init__(f"{argument}: expected {expected}, got {value!r}")


class InvalidOrderError(RangeArgumentError, ValueError):
    """Raised when a sort order is not a SortOrder member."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(
            "order: expected SortOrder.ASCENDING or SortOrder.DESCENDING, "
            f"got {value!r}"
        )
