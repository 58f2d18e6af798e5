"""
Exception hierarchy for pattern compilation, filename matching and tag I/O.
"""

from typing import Optional


class TagmanError(Exception):
    """Base class for every error raised by tagman."""


class CompileError(TagmanError, ValueError):
    """A template could not be compiled into a pattern."""

    def __init__(self, message: str, template: str, position: Optional[int] = None):
        self.template = template
        self.position = position
        if position is not None:
            message = f"{message} at position {position} in pattern {template!r}"
        else:
            message = f"{message} in pattern {template!r}"
        super().__init__(message)


class UnterminatedPlaceholderError(CompileError):
    """`%(` was opened but never closed before the end of the template."""

    def __init__(self, template: str, position: int):
        super().__init__("unterminated placeholder", template, position)


class UnterminatedEscapeError(CompileError):
    """The template ends with a lone escape character."""

    def __init__(self, template: str, position: int):
        super().__init__("unterminated escape", template, position)


class MatchSpecInvalidError(CompileError):
    """The generated regular expression was rejected by `re`."""

    def __init__(self, template: str, reason: str):
        self.reason = reason
        super().__init__(f"failed compiling regex ({reason})", template)


class MatchError(TagmanError, ValueError):
    """A filename could not be matched against a compiled pattern."""

    def __init__(self, message: str, filename: str):
        self.filename = filename
        super().__init__(message)


class NoMatchError(MatchError):
    def __init__(self, filename: str):
        super().__init__(f"filename doesn't match pattern: {filename!r}", filename)


class EmptyAssignmentError(MatchError):
    """A placeholder matched zero characters."""

    def __init__(self, field: str, filename: str):
        self.field = field
        super().__init__(
            f"filename {filename!r} has empty match for placeholder {field!r}",
            filename
        )


class TagStoreError(TagmanError):
    """Reading or writing an audio file's tags failed."""

    def __init__(self, message: str, path: str):
        self.path = path
        super().__init__(f"{message}: {path}")


class TagReadError(TagStoreError):
    pass


class TagWriteError(TagStoreError):
    pass


class CoverLoadError(TagStoreError):
    pass
