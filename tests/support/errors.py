"""Test-only exceptions for enforcing constraints."""

from __future__ import annotations


class NetworkIsolationError(RuntimeError):
    """Raised when a test attempts a real network connection."""

    def __init__(self, attempted: str) -> None:
        super().__init__(
            "Tests must not make network connections! "
            "Use FakeHttpInvoker or a MagicMock session instead. "
            f"Attempted connection to: {attempted}"
        )
