"""
Applies a compiled pattern to audio file paths and builds their metadata.
"""

from typing import Iterable, List, Optional

from .errors import MatchError
from .io_utils import match_target
from .models import FileMatch, SongMetadata
from .pattern import CompiledPattern, compile_pattern


class FilenameMatcher:
    """
    Matches file paths against one pattern and merges in default metadata.

    Fields the pattern does not provide are taken from ``defaults``.
    """

    def __init__(self,
                 pattern: CompiledPattern,
                 defaults: Optional[SongMetadata] = None,
                 include_extension: bool = False):
        self.pattern = pattern
        self.defaults = defaults or SongMetadata()
        self.include_extension = include_extension

    @classmethod
    def from_template(cls, template: str, **kwargs) -> 'FilenameMatcher':
        return cls(compile_pattern(template), **kwargs)

    def match_file(self, path: str) -> FileMatch:
        """
        Match a single path.

        Raises:
            MatchError: the filename does not fit the pattern
        """
        target = match_target(path, self.include_extension)
        assignments = self.pattern.match(target)

        metadata = SongMetadata.from_assignments(assignments)
        metadata.merge(self.defaults)

        return FileMatch(
            path=path,
            target=target,
            assignments=assignments,
            metadata=metadata
        )

    def try_match_file(self, path: str) -> FileMatch:
        """Match a single path, recording a failure instead of raising."""
        try:
            return self.match_file(path)
        except MatchError as e:
            return FileMatch(
                path=path,
                target=match_target(path, self.include_extension),
                error=str(e)
            )

    def match_files(self, paths: Iterable[str]) -> List[FileMatch]:
        return [self.try_match_file(path) for path in paths]
