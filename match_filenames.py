#!/usr/bin/env python3
"""
CLI tool for matching filenames against a pattern and reporting the results.

Usage:
    python match_filenames.py --pattern "%(track). %(title)" --out report.csv *.mp3
"""

import click
import csv
import os
import sys
from collections import defaultdict
from pathlib import Path
from typing import Dict, List

# Add the package to Python path
sys.path.insert(0, os.path.dirname(__file__))

from tagman import FileMatch, FilenameMatcher, JSONLWriter
from tagman.errors import CompileError

# Placeholder columns are prefixed so they never collide with the fixed columns
FIELD_COLUMN_PREFIX = 'field:'


class MatchReport:
    """
    Collects statistics over filename match results.
    """

    def __init__(self):
        self.total_files = 0
        self.matched_files = 0
        self.field_usage = defaultdict(int)
        self.failure_samples = []
        self.max_failure_samples = 100

    def add(self, match: FileMatch):
        self.total_files += 1

        if match.matched:
            self.matched_files += 1
            for name in match.assignments:
                self.field_usage[name] += 1
        elif len(self.failure_samples) < self.max_failure_samples:
            self.failure_samples.append(f"{match.target}: {match.error}")

    def get_summary(self) -> Dict:
        """Get summary statistics."""
        match_rate = (self.matched_files / self.total_files * 100) if self.total_files > 0 else 0

        return {
            'total_files': self.total_files,
            'matched_files': self.matched_files,
            'unmatched_files': self.total_files - self.matched_files,
            'match_rate': match_rate,
            'field_usage': dict(self.field_usage),
            'failure_samples': self.failure_samples[:20]
        }


@click.command()
@click.argument('files', nargs=-1, required=True)
@click.option('--pattern', '-p',
              required=True,
              help='Filename pattern, e.g. "%(track). %(title) - %(artist)"')
@click.option('--output', '--out', 'output_file',
              required=True,
              type=click.Path(dir_okay=False),
              help='Output file for match results')
@click.option('--format',
              type=click.Choice(['csv', 'jsonl', 'summary']),
              default='csv',
              help='Output format (default: csv)')
@click.option('--include-extension',
              is_flag=True,
              help='Match the pattern against the filename including its extension')
@click.option('--verbose', '-v',
              is_flag=True,
              help='Enable verbose output')
def match_filenames(files: tuple,
                    pattern: str,
                    output_file: str,
                    format: str,
                    include_extension: bool,
                    verbose: bool):
    """
    Match FILES against a pattern without modifying them.

    Every file is reported with the values extracted for each placeholder,
    or with the reason it did not match.

    Examples:

    \b
    # CSV report of what would be tagged
    python match_filenames.py -p "%(track). %(title) - %(artist)" \\
        --out report.csv *.mp3

    \b
    # Summary of how many files fit the pattern
    python match_filenames.py -p "%(artist) - %(title)" --format summary \\
        --out summary.txt music/*
    """

    try:
        matcher = FilenameMatcher.from_template(pattern, include_extension=include_extension)
    except CompileError as e:
        click.echo(f"❌ Invalid pattern: {e}", err=True)
        sys.exit(1)

    if verbose:
        click.echo(str(matcher.pattern))

    matches = matcher.match_files(files)

    report = MatchReport()
    for match in matches:
        report.add(match)

    output_path = Path(output_file)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    if format == 'csv':
        _write_csv(matches, list(dict.fromkeys(matcher.pattern.placeholders)), output_path)
    elif format == 'jsonl':
        with JSONLWriter(str(output_path)) as writer:
            writer.write_matches(matches)
    elif format == 'summary':
        _write_summary(report, pattern, output_path)

    summary = report.get_summary()
    click.echo(f"\n✅ Matching completed!")
    click.echo(f"📊 Results:")
    click.echo(f"   • Total files: {summary['total_files']}")
    click.echo(f"   • Matched files: {summary['matched_files']}")
    click.echo(f"   • Match rate: {summary['match_rate']:.1f}%")
    click.echo(f"   • Output file: {output_path.absolute()}")

    if verbose and summary['unmatched_files'] > 0:
        click.echo(f"\n🔍 Sample failures:")
        for i, sample in enumerate(summary['failure_samples'][:5], 1):
            click.echo(f"   {i}. {sample}")


def _write_csv(matches: List[FileMatch], columns: List[str], output_path: Path):
    """Write one row per file with a column per placeholder."""

    with open(output_path, 'w', newline='', encoding='utf-8') as outfile:
        writer = csv.writer(outfile)
        writer.writerow(
            ['path', 'target', 'status', 'error']
            + [FIELD_COLUMN_PREFIX + name for name in columns]
        )

        for match in matches:
            status = 'matched' if match.matched else 'failed'
            writer.writerow(
                [match.path, match.target, status, match.error or '']
                + [match.assignments.get(name, '') for name in columns]
            )


def _write_summary(report: MatchReport, pattern: str, output_path: Path):
    summary = report.get_summary()

    with open(output_path, 'w', encoding='utf-8') as outfile:
        outfile.write("FILENAME MATCHING SUMMARY REPORT\n")
        outfile.write("=" * 50 + "\n\n")

        outfile.write(f"Pattern: {pattern}\n")
        outfile.write(f"Total files: {summary['total_files']}\n")
        outfile.write(f"Matched files: {summary['matched_files']}\n")
        outfile.write(f"Unmatched files: {summary['unmatched_files']}\n")
        outfile.write(f"Match rate: {summary['match_rate']:.1f}%\n\n")

        if summary['field_usage']:
            outfile.write("EXTRACTED FIELDS:\n")
            outfile.write("-" * 25 + "\n")
            for name, count in sorted(summary['field_usage'].items()):
                outfile.write(f"{name:10}: {count:8}\n")
            outfile.write("\n")

        if summary['failure_samples']:
            outfile.write("SAMPLE FAILURES:\n")
            outfile.write("-" * 25 + "\n")
            for i, sample in enumerate(summary['failure_samples'], 1):
                outfile.write(f"{i:2}. {sample}\n")


def main():
    match_filenames(auto_envvar_prefix='TAGMAN')


if __name__ == '__main__':
    main()
