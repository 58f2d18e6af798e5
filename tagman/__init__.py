"""
Filename Pattern Tagging

A Python library for extracting song metadata from filenames with
placeholder patterns such as "%(track). %(title) - %(artist)" and writing
it into the files' ID3 tags.
"""

__version__ = "1.0.0"
__author__ = "tagman contributors"

from .pattern import CompiledPattern, compile_pattern, match_filename
from .models import SongMetadata, FileMatch
from .matching import FilenameMatcher
from .io_utils import JSONLWriter, JSONLReader

__all__ = [
    "CompiledPattern",
    "compile_pattern",
    "match_filename",
    "SongMetadata",
    "FileMatch",
    "FilenameMatcher",
    "JSONLWriter",
    "JSONLReader"
]
