"""
ID3 tag reading and writing for audio files.

Only the fields tagman knows about are touched (title, album, artist, track
number and the front cover); every other frame in the file is preserved.
"""

import mimetypes
from pathlib import Path
from typing import Optional, Union

from mutagen import MutagenError
from mutagen.id3 import APIC, ID3, ID3NoHeaderError, PictureType, TALB, TIT2, TPE1, TRCK

from .errors import CoverLoadError, TagReadError, TagWriteError
from .models import CoverImage, SongMetadata

PathLike = Union[str, Path]

# SongMetadata field -> ID3 text frame
TEXT_FRAMES = {
    "title": TIT2,
    "album": TALB,
    "artist": TPE1,
    "track": TRCK,
}

UTF8 = 3
DEFAULT_COVER_MIME = "image/jpeg"


def _open_id3(path_str: str) -> ID3:
    """Load the file's ID3 tag, or start an empty one if it has none."""
    try:
        return ID3(path_str)
    except ID3NoHeaderError:
        return ID3()


def read_tags(path: PathLike) -> SongMetadata:
    """
    Read the tag fields of an audio file.

    Files without an ID3 header yield empty metadata.

    Raises:
        TagReadError: the file could not be read
    """
    path_str = str(path)
    try:
        id3 = _open_id3(path_str)
    except (MutagenError, OSError) as e:
        raise TagReadError(f"unable to read tags ({e})", path_str) from e

    values = {}
    for name, frame_cls in TEXT_FRAMES.items():
        frame = id3.get(frame_cls.__name__)
        if frame is not None and frame.text:
            values[name] = str(frame.text[0])

    return SongMetadata(**values)


def write_tags(path: PathLike, metadata: SongMetadata,
               cover: Optional[CoverImage] = None) -> None:
    """
    Write metadata into an audio file's ID3 tag.

    Empty fields are left untouched. When a cover is given it replaces any
    existing front cover picture. The tag is saved as ID3v2.4.

    Raises:
        TagWriteError: the tag could not be loaded or saved
    """
    path_str = str(path)
    try:
        id3 = _open_id3(path_str)

        for name, value in metadata.tag_values().items():
            id3.add(TEXT_FRAMES[name](encoding=UTF8, text=[value]))

        if cover is not None:
            others = [p for p in id3.getall("APIC") if p.type != PictureType.COVER_FRONT]
            others.append(APIC(
                encoding=UTF8,
                mime=cover.mime_type,
                type=PictureType.COVER_FRONT,
                desc=cover.description,
                data=cover.data
            ))
            id3.setall("APIC", others)

        id3.save(path_str, v2_version=4)
    except (MutagenError, OSError) as e:
        raise TagWriteError(f"error saving tags ({e})", path_str) from e


def load_cover(path: PathLike) -> CoverImage:
    """
    Load a cover image from disk.

    The MIME type is guessed from the file extension and falls back to
    JPEG.

    Raises:
        CoverLoadError: the file could not be read
    """
    try:
        data = Path(path).read_bytes()
    except OSError as e:
        raise CoverLoadError(f"unable to open cover image ({e.strerror})", str(path)) from e

    mime_type, _ = mimetypes.guess_type(str(path))
    if not mime_type or not mime_type.startswith("image/"):
        mime_type = DEFAULT_COVER_MIME

    return CoverImage(data=data, mime_type=mime_type)
