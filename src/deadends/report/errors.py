"""Exceptions raised by the dead end report package."""


class DeadEndError(Exception):
    """Base exception for dead end reporting errors."""


class InvalidPositionError(DeadEndError, ValueError):
    """A row or column outside the 1-based source coordinate space."""

    def __init__(self, row: int, col: int, *, what: str = "failure") -> None:
        """Initialize the error.

        Args:
            row: Offending row.
            col: Offending column.
            what: Kind of object carrying the position, used in the message.

        """
        msg = f"invalid {what} position {row}:{col}, rows and columns start at 1"
        super().__init__(msg)
        self.row = row
        self.col = col
