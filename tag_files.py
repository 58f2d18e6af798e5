#!/usr/bin/env python3
"""
CLI tool for tagging audio files with metadata taken from their filenames.

Usage:
    python tag_files.py --album="Some Album" "%(track). %(title) - %(artist)" *.mp3
"""

import click
import os
import sys
from typing import Optional

from tqdm import tqdm

# Add the package to Python path
sys.path.insert(0, os.path.dirname(__file__))

from tagman import FilenameMatcher, SongMetadata, compile_pattern
from tagman.errors import CompileError, CoverLoadError, TagmanError
from tagman.models import unknown_placeholders
from tagman.tag_store import load_cover, write_tags


@click.command()
@click.argument('pattern')
@click.argument('files', nargs=-1, required=True)
@click.option('--title',
              default='',
              help='Title used when the pattern has no title placeholder')
@click.option('--album',
              default='',
              help='Album used when the pattern has no album placeholder')
@click.option('--artist',
              default='',
              help='Artist used when the pattern has no artist placeholder')
@click.option('--track',
              default='',
              help='Track number used when the pattern has no track placeholder')
@click.option('--cover',
              type=click.Path(dir_okay=False),
              default=None,
              help='Path to a front cover image attached to every file')
@click.option('--include-extension',
              is_flag=True,
              help='Match the pattern against the filename including its extension')
@click.option('--dry-run', '-n',
              is_flag=True,
              help='Show the extracted metadata without writing any tags')
@click.option('--keep-going', '-k',
              is_flag=True,
              help='Skip files that fail instead of stopping at the first error')
@click.option('--no-progress',
              is_flag=True,
              help='Disable the progress bar')
@click.option('--verbose', '-v',
              is_flag=True,
              help='Enable verbose output')
def tag_files(pattern: str,
              files: tuple,
              title: str,
              album: str,
              artist: str,
              track: str,
              cover: Optional[str],
              include_extension: bool,
              dry_run: bool,
              keep_going: bool,
              no_progress: bool,
              verbose: bool):
    """
    Tag FILES with metadata extracted from their names using PATTERN.

    The pattern consists of literal text that has to appear in the filename
    and placeholders written as %(name) whose matching text becomes the tag
    value. Known placeholders are title, album, artist and track. A
    backslash makes the next character literal. The options give default
    values for fields the pattern does not provide.

    Examples:

    \b
    # "01. Song Name - The Artist.mp3" -> track, title, artist
    python tag_files.py "%(track). %(title) - %(artist)" *.mp3

    \b
    # Same album and cover for every file, preview only
    python tag_files.py --album="Live" --cover=cover.jpg --dry-run \\
        "%(track) %(title)" *.mp3
    """

    defaults = SongMetadata(
        title=title,
        album=album,
        artist=artist,
        track=track,
        cover_path=cover or ""
    )

    try:
        compiled = compile_pattern(pattern)
    except CompileError as e:
        click.echo(f"❌ Invalid pattern: {e}", err=True)
        sys.exit(1)

    if verbose:
        click.echo(str(compiled))
        click.echo(f"Defaults: {defaults}")
        for name in unknown_placeholders(compiled):
            click.echo(f"Warning: placeholder '{name}' does not set any tag", err=True)

    cover_image = None
    if cover:
        try:
            cover_image = load_cover(cover)
        except CoverLoadError as e:
            click.echo(f"❌ {e}", err=True)
            sys.exit(1)

    matcher = FilenameMatcher(compiled, defaults, include_extension)
    failures = 0

    try:
        for path in tqdm(files, desc="Tagging files", unit="file", disable=no_progress):
            try:
                result = matcher.match_file(path)
                tqdm.write(str(result))

                if result.metadata.is_empty():
                    tqdm.write(f"Warning: nothing to write for {path}", file=sys.stderr)
                elif not dry_run:
                    write_tags(path, result.metadata, cover_image)
            except TagmanError as e:
                failures += 1
                tqdm.write(f"❌ {e}", file=sys.stderr)
                if not keep_going:
                    sys.exit(1)

    except KeyboardInterrupt:
        click.echo("\n❌ Tagging cancelled by user", err=True)
        sys.exit(1)

    tagged = len(files) - failures
    action = "Matched" if dry_run else "Tagged"
    click.echo(f"\n✅ {action} {tagged} of {len(files)} files")

    if failures:
        click.echo(f"⚠️  {failures} files failed", err=True)
        sys.exit(1)


def main():
    tag_files(auto_envvar_prefix='TAGMAN')


if __name__ == '__main__':
    main()
