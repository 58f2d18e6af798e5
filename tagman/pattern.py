"""
Filename pattern compiler and matcher.

A pattern such as ``"%(track). %(title) - %(artist)"`` is compiled into a
regular expression with one capture group per placeholder. Matching a
filename against the compiled pattern yields a mapping from placeholder name
to the extracted text.
"""

import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .errors import (
    EmptyAssignmentError,
    MatchError,
    MatchSpecInvalidError,
    NoMatchError,
    UnterminatedEscapeError,
    UnterminatedPlaceholderError,
)

ESCAPE_CHAR = "\\"
PLACEHOLDER_OPEN = "%("
PLACEHOLDER_CLOSE = ")"
CAPTURE_GROUP = "(.*)"

LITERAL = "literal"
PLACEHOLDER = "placeholder"


@dataclass(frozen=True)
class PatternToken:
    """A single scanned piece of a pattern."""
    kind: str  # LITERAL or PLACEHOLDER
    value: str  # unescaped character, or the placeholder name
    position: int  # offset of the token in the template

    def to_regex(self) -> str:
        if self.kind == PLACEHOLDER:
            return CAPTURE_GROUP
        return re.escape(self.value)


@dataclass(frozen=True)
class CompiledPattern:
    """
    A compiled filename pattern.

    ``regex`` has exactly one capture group per entry of ``placeholders``,
    in the order the placeholders appear in the template. Instances are
    immutable and can be shared between threads.
    """
    template: str
    regex: re.Pattern
    placeholders: Tuple[str, ...]

    @property
    def expression(self) -> str:
        """The generated regular expression source."""
        return self.regex.pattern

    def match(self, filename: str) -> Dict[str, str]:
        """
        Extract placeholder values from a filename.

        The whole filename has to match the pattern. When a placeholder
        name occurs more than once, the last occurrence wins.

        Args:
            filename: String to match, usually the final path component

        Returns:
            Dict of placeholder name -> extracted text, in pattern order

        Raises:
            NoMatchError: filename does not match the pattern
            EmptyAssignmentError: a placeholder matched an empty string
        """
        found = self.regex.fullmatch(filename)
        if found is None:
            raise NoMatchError(filename)

        values = found.groups()
        for name, value in zip(self.placeholders, values):
            if not value:
                raise EmptyAssignmentError(name, filename)

        return dict(zip(self.placeholders, values))

    def matches(self, filename: str) -> bool:
        """Check whether the filename yields a valid extraction."""
        try:
            self.match(filename)
        except MatchError:
            return False
        return True

    def __str__(self) -> str:
        return f"pattern: {self.expression} tags: {list(self.placeholders)}"


def _scan_literal(template: str, pos: int) -> Tuple[int, str]:
    """
    Consume one literal character starting at ``pos``.

    An escape character is dropped and the following character is taken
    verbatim, whatever it is.

    Returns:
        Tuple of (position after the literal, unescaped character)
    """
    char = template[pos]
    pos += 1

    if char == ESCAPE_CHAR:
        if pos >= len(template):
            raise UnterminatedEscapeError(template, pos - 1)
        char = template[pos]
        pos += 1

    return pos, char


def _scan_placeholder(template: str, pos: int) -> Optional[Tuple[int, str]]:
    """
    Try to read a ``%(name)`` placeholder starting at ``pos``.

    The name is scanned with the same escape rule as literal text, so
    ``%(a\\)b)`` names a placeholder ``a)b``.

    Returns:
        Tuple of (position after the placeholder, name), or None when no
        placeholder starts at ``pos``
    """
    if not template.startswith(PLACEHOLDER_OPEN, pos):
        return None

    start = pos
    pos += len(PLACEHOLDER_OPEN)
    name: List[str] = []

    while pos < len(template):
        if template[pos] == PLACEHOLDER_CLOSE:
            return pos + 1, "".join(name)
        pos, char = _scan_literal(template, pos)
        name.append(char)

    raise UnterminatedPlaceholderError(template, start)


def tokenize_pattern(template: str) -> List[PatternToken]:
    """
    Split a template into literal and placeholder tokens.

    Placeholders are tried first at every position; anything that is not
    a placeholder is a single (possibly escaped) literal character.

    Raises:
        UnterminatedPlaceholderError: ``%(`` without a closing ``)``
        UnterminatedEscapeError: template ends with a lone ``\\``
    """
    tokens = []
    pos = 0

    while pos < len(template):
        placeholder = _scan_placeholder(template, pos)
        if placeholder is not None:
            end, name = placeholder
            tokens.append(PatternToken(PLACEHOLDER, name, pos))
        else:
            end, char = _scan_literal(template, pos)
            tokens.append(PatternToken(LITERAL, char, pos))
        pos = end

    return tokens


def compile_pattern(template: str) -> CompiledPattern:
    """
    Compile a template into a reusable CompiledPattern.

    Args:
        template: Pattern text with ``%(name)`` placeholders and ``\\``
            escapes

    Returns:
        CompiledPattern for matching filenames

    Raises:
        CompileError: the template is malformed
    """
    tokens = tokenize_pattern(template)

    expression = "".join(token.to_regex() for token in tokens)
    placeholders = tuple(t.value for t in tokens if t.kind == PLACEHOLDER)

    try:
        regex = re.compile(expression)
    except re.error as e:
        raise MatchSpecInvalidError(template, str(e)) from e

    return CompiledPattern(template=template, regex=regex, placeholders=placeholders)


def match_filename(pattern: CompiledPattern, filename: str) -> Dict[str, str]:
    """Match a filename against a compiled pattern (see CompiledPattern.match)."""
    return pattern.match(filename)
