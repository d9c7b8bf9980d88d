"""Exception types shared by the patch engine, provider and session."""

from __future__ import annotations


class ThemeMakerError(Exception):
    """Base class for expected theme maker failures."""


class PatchError(ThemeMakerError):
    """A color edit could not be applied to the current text."""


class LineNotFound(PatchError):
    """The target line index is past the end of the text."""

    def __init__(self, line: int, line_count: int) -> None:
        super().__init__(f"Line {line} not found (text has {line_count} lines)")
        self.line = line
        self.line_count = line_count


class ColumnOutOfRange(PatchError):
    """The target column does not lie within the target line."""

    def __init__(self, line: int, column: int, line_length: int) -> None:
        super().__init__(
            f"Column {column} out of range on line {line} (length {line_length})"
        )
        self.line = line
        self.column = column
        self.line_length = line_length


class SpanMismatch(PatchError):
    """The text at the target span is not the literal that was expected."""

    def __init__(self, line: int, column: int, expected: str, found: str) -> None:
        super().__init__(
            f"Expected {expected!r} at {line}:{column}, found {found!r}"
        )
        self.line = line
        self.column = column
        self.expected = expected
        self.found = found


class IoFailure(ThemeMakerError):
    """Reading or writing a theme file failed."""

    def __init__(self, path: object, cause: BaseException) -> None:
        super().__init__(f"{path}: {cause}")
        self.path = path
        self.cause = cause


class NoSelectionError(ThemeMakerError):
    """An operation needs a selected theme or file and none is selected."""


class ConfigError(ThemeMakerError):
    """The application config could not be serialized."""
