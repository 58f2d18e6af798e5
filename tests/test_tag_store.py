"""
Tests for reading and writing ID3 tags.
"""

import shutil
import tempfile
import unittest
from pathlib import Path

from mutagen.id3 import ID3, PictureType, TIT2, TCON

from tagman.errors import CoverLoadError, TagReadError, TagWriteError
from tagman.models import CoverImage, SongMetadata
from tagman.tag_store import load_cover, read_tags, write_tags
from tests.test_data.filename_samples import MP3_WITH_ID3, MP3_WITHOUT_ID3


class TestTagStore(unittest.TestCase):
    """Test the mutagen backed tag store."""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.mp3_file = Path(self.temp_dir) / "01. Song - Band.mp3"
        self.mp3_file.write_bytes(MP3_WITH_ID3)

    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_write_and_read_fields(self):
        metadata = SongMetadata(title="Song", album="Album", artist="Band", track="01")

        write_tags(self.mp3_file, metadata)

        self.assertEqual(read_tags(self.mp3_file), metadata)
        id3 = ID3(str(self.mp3_file))
        self.assertEqual(id3["TIT2"].text[0], "Song")
        self.assertEqual(id3["TRCK"].text[0], "01")

    def test_unicode_values(self):
        metadata = SongMetadata(title="Ünïcödé", artist="Ärtist")
        write_tags(self.mp3_file, metadata)
        self.assertEqual(read_tags(self.mp3_file).title, "Ünïcödé")

    def test_empty_fields_leave_existing_frames(self):
        id3 = ID3(str(self.mp3_file))
        id3.add(TIT2(encoding=3, text=["Original Title"]))
        id3.add(TCON(encoding=3, text=["Rock"]))
        id3.save(str(self.mp3_file))

        write_tags(self.mp3_file, SongMetadata(artist="Band"))

        id3 = ID3(str(self.mp3_file))
        self.assertEqual(id3["TIT2"].text[0], "Original Title")
        self.assertEqual(id3["TPE1"].text[0], "Band")
        self.assertEqual(id3["TCON"].text[0], "Rock")

    def test_existing_fields_are_replaced(self):
        write_tags(self.mp3_file, SongMetadata(title="First"))
        write_tags(self.mp3_file, SongMetadata(title="Second"))

        id3 = ID3(str(self.mp3_file))
        self.assertEqual(len(id3.getall("TIT2")), 1)
        self.assertEqual(id3["TIT2"].text[0], "Second")

    def test_file_without_tag(self):
        bare = Path(self.temp_dir) / "bare.mp3"
        bare.write_bytes(MP3_WITHOUT_ID3)

        self.assertTrue(read_tags(bare).is_empty())

        write_tags(bare, SongMetadata(title="Song"))
        self.assertEqual(read_tags(bare).title, "Song")

    def test_cover_replaces_front_cover(self):
        write_tags(self.mp3_file, SongMetadata(title="Song"),
                   CoverImage(data=b"first", mime_type="image/png"))
        write_tags(self.mp3_file, SongMetadata(title="Song"),
                   CoverImage(data=b"second"))

        pictures = ID3(str(self.mp3_file)).getall("APIC")
        self.assertEqual(len(pictures), 1)
        self.assertEqual(pictures[0].data, b"second")
        self.assertEqual(pictures[0].mime, "image/jpeg")
        self.assertEqual(pictures[0].type, PictureType.COVER_FRONT)
        self.assertEqual(pictures[0].desc, "Front Cover")

    def test_read_missing_file(self):
        with self.assertRaises(TagReadError) as ctx:
            read_tags(Path(self.temp_dir) / "missing.mp3")
        self.assertTrue(ctx.exception.path.endswith("missing.mp3"))

    def test_write_missing_file(self):
        with self.assertRaises(TagWriteError):
            write_tags(Path(self.temp_dir) / "missing.mp3", SongMetadata(title="x"))


class TestLoadCover(unittest.TestCase):
    """Test loading cover images."""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_mime_type_from_extension(self):
        cover = Path(self.temp_dir) / "cover.png"
        cover.write_bytes(b"\x89PNG")

        image = load_cover(cover)

        self.assertEqual(image.data, b"\x89PNG")
        self.assertEqual(image.mime_type, "image/png")
        self.assertEqual(image.description, "Front Cover")

    def test_unknown_extension_defaults_to_jpeg(self):
        cover = Path(self.temp_dir) / "cover.dat"
        cover.write_bytes(b"data")
        self.assertEqual(load_cover(cover).mime_type, "image/jpeg")

    def test_missing_cover(self):
        with self.assertRaises(CoverLoadError):
            load_cover(Path(self.temp_dir) / "missing.jpg")


if __name__ == '__main__':
    unittest.main()
