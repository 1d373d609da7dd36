"""Exception classes for widget documents."""

from dataclasses import dataclass


class WidgetForgeError(Exception):
    """Base exception for widget document errors."""

    pass


class DecodeError(WidgetForgeError):
    """Raised when a persisted document cannot be decoded at all."""

    def __init__(self, message: str, path: str = '$'):
        super().__init__(f"{path}: {message}")
        self.path = path
        self.message = message


class ValidationError(WidgetForgeError, ValueError):
    """Raised when a document breaks a rule that has no safe repair."""

    def __init__(self, message: str, path: str = '$'):
        super().__init__(f"{path}: {message}")
        self.path = path
        self.message = message


class UnknownIdError(WidgetForgeError, KeyError):
    """Raised when an operation references a project or layer id that does not exist."""

    def __init__(self, kind: str, item_id: str):
        super().__init__(f"{kind} {item_id!r} not found")
        self.kind = kind
        self.item_id = item_id

    def __str__(self) -> str:
        # KeyError quotes its argument
        return self.args[0]


@dataclass
class DecodeIssue:
    """A node that was dropped or repaired while decoding."""
    path: str
    message: str
    dropped: bool = True

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"
