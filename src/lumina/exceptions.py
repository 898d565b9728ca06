from pathlib import Path


class LuminaError(Exception):
    """Base exception for lumina."""


class LispSyntaxError(LuminaError):
    """Raised when s-expression text cannot be read."""

    def __init__(self, reason: str, line: int, col: int):
        self.reason = reason
        self.line = line
        self.col = col
        super().__init__(f"Syntax error at line {line}, col {col}: {reason}")


class MissingFieldError(LuminaError):
    """Raised when a slide is built without one of its required fields."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"No {field}")


class BackgroundError(LuminaError):
    """Base for media paths that cannot become a slide background."""

    def __init__(self, path: str | Path, message: str):
        self.path = path
        super().__init__(f"{message}: {path}")


class NonBackgroundFileError(BackgroundError):
    """Raised when a file is not a recognized image or video type."""

    def __init__(self, path: str | Path):
        super().__init__(path, "The file is not a recognized image or video type")


class DoesNotExistError(BackgroundError):
    """Raised when a background file is missing on disk."""

    def __init__(self, path: str | Path):
        super().__init__(path, "This file doesn't exist")


class LyricError(LuminaError):
    """Base for songs that cannot be sequenced into slide texts."""

    def __init__(self, title: str, reason: str):
        self.title = title
        self.reason = reason
        super().__init__(f"Cannot sequence lyrics for {title!r}: {reason}")


class NoLyricsError(LyricError):
    def __init__(self, title: str):
        super().__init__(title, "the song has no lyrics")


class NoVerseOrderError(LyricError):
    def __init__(self, title: str, reason: str = "the song has no verse order"):
        super().__init__(title, reason)


class EmptyVerseOrderError(NoVerseOrderError):
    def __init__(self, title: str):
        super().__init__(title, "the song's verse order is empty")


class UnrecognizedFormError(LuminaError):
    """Raised when a top-level form does not start with a known head symbol."""

    def __init__(self, head: str):
        self.head = head
        super().__init__(f"Unrecognized form: {head}")


class IncludeError(LuminaError):
    """Raised when a ``load`` form cannot pull in its target file."""

    def __init__(self, path: str | Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot load {path}: {reason}")


class CyclicIncludeError(IncludeError):
    """Raised when a ``load`` chain comes back to a file it is already inside."""

    def __init__(self, path: str | Path):
        super().__init__(path, "the file is already being loaded")


class UnknownItemKindError(LuminaError):
    """Raised when a path cannot be classified as a service item."""

    def __init__(self, path: str | Path):
        self.path = path
        super().__init__(f"Unknown item: {path}")


class ConfigError(LuminaError):
    """Raised when a settings file is unreadable or holds bad values."""

    def __init__(self, path: str | Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Bad config {path}: {reason}")
