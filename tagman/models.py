"""
Core data models for song metadata and per-file match results.
"""

from dataclasses import dataclass, field, fields
from typing import Dict, List, Mapping, Optional
from dataclasses_json import dataclass_json

from .pattern import CompiledPattern

# Placeholder names that map onto a tag field
TAG_FIELDS = ("title", "album", "artist", "track")


@dataclass_json
@dataclass
class SongMetadata:
    """Tag values for a single audio file. Empty string means unset."""
    title: str = ""
    album: str = ""
    artist: str = ""
    track: str = ""
    cover_path: str = ""

    @classmethod
    def from_assignments(cls, assignments: Mapping[str, str]) -> 'SongMetadata':
        """Build metadata from a pattern match, ignoring unknown placeholders."""
        return cls(**{name: assignments.get(name, "") for name in TAG_FIELDS})

    def merge(self, defaults: 'SongMetadata') -> 'SongMetadata':
        """Fill every empty field from ``defaults`` (in place)."""
        for f in fields(self):
            if not getattr(self, f.name):
                setattr(self, f.name, getattr(defaults, f.name))
        return self

    def is_empty(self) -> bool:
        return not any(getattr(self, f.name) for f in fields(self))

    def tag_values(self) -> Dict[str, str]:
        """Non-empty tag fields, without the cover path."""
        return {name: getattr(self, name) for name in TAG_FIELDS if getattr(self, name)}

    def __str__(self) -> str:
        parts = [f"{name}={value!r}" for name, value in self.tag_values().items()]
        if self.cover_path:
            parts.append(f"cover={self.cover_path!r}")
        return "{" + ", ".join(parts) + "}"


@dataclass
class CoverImage:
    """Picture data attached as the front cover."""
    data: bytes
    mime_type: str = "image/jpeg"
    description: str = "Front Cover"


@dataclass_json
@dataclass
class FileMatch:
    """Result of matching one file against a pattern."""
    path: str
    target: str  # the string the pattern was matched against
    assignments: Dict[str, str] = field(default_factory=dict)
    metadata: SongMetadata = field(default_factory=SongMetadata)
    error: Optional[str] = None

    @property
    def matched(self) -> bool:
        return self.error is None

    def __str__(self) -> str:
        if self.matched:
            return f"{self.path}: {self.metadata}"
        return f"{self.path}: {self.error}"


def unknown_placeholders(pattern: CompiledPattern) -> List[str]:
    """Placeholder names in the pattern that do not set any tag field."""
    unknown = []
    for name in pattern.placeholders:
        if name not in TAG_FIELDS and name not in unknown:
            unknown.append(name)
    return unknown
