"""
I/O utilities for match targets and JSONL match records.
"""

import json
import mimetypes
from pathlib import Path
from typing import Iterator, List

from .models import FileMatch

# Suffixes stripped even where mimetypes has no audio type registered
AUDIO_EXTENSIONS = frozenset({
    ".mp3", ".flac", ".ogg", ".oga", ".opus", ".m4a", ".aac", ".wav",
    ".wma", ".aif", ".aiff", ".ape", ".wv", ".mka",
})


def is_audio_extension(suffix: str) -> bool:
    """Check whether a file suffix (including the dot) names an audio format."""
    suffix = suffix.lower()
    if suffix in AUDIO_EXTENSIONS:
        return True
    mime_type, _ = mimetypes.guess_type("file" + suffix)
    return bool(mime_type) and mime_type.startswith("audio/")


def match_target(path: str, include_extension: bool = False) -> str:
    """
    Return the part of a path that a pattern is matched against.

    This is the final path component. Its extension is dropped when it is
    an audio extension, unless ``include_extension`` is set; any other
    suffix is part of the name (``01. Intro - Band`` stays whole).
    """
    name = Path(path).name
    if include_extension:
        return name

    suffix = Path(name).suffix
    if suffix and is_audio_extension(suffix):
        return name[:-len(suffix)]
    return name


class JSONLWriter:
    """
    Writer for JSONL (JSON Lines) match records.
    """

    def __init__(self, file_path: str):
        self.file_path = Path(file_path)
        self.file_handle = None

    def __enter__(self):
        self.file_handle = open(self.file_path, 'w', encoding='utf-8')
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.file_handle:
            self.file_handle.close()

    def write_match(self, match: FileMatch) -> None:
        """Write a single match record to the JSONL file."""
        if not self.file_handle:
            raise ValueError("JSONLWriter not opened")

        json.dump(match.to_dict(), self.file_handle, ensure_ascii=False)
        self.file_handle.write('\n')

    def write_matches(self, matches: List[FileMatch]) -> None:
        for match in matches:
            self.write_match(match)


class JSONLReader:
    """
    Reader for JSONL (JSON Lines) match records.
    """

    def __init__(self, file_path: str):
        self.file_path = Path(file_path)

    def read_matches(self) -> List[FileMatch]:
        """Read all match records from the JSONL file."""
        return list(self)

    def __iter__(self) -> Iterator[FileMatch]:
        if not self.file_path.exists():
            return

        with open(self.file_path, 'r', encoding='utf-8') as f:
            for line_num, line in enumerate(f, 1):
                line = line.strip()
                if not line:
                    continue

                try:
                    yield FileMatch.from_dict(json.loads(line))
                except (json.JSONDecodeError, KeyError, TypeError) as e:
                    print(f"Warning: Skipping invalid record at line {line_num}: {e}")
