#!/usr/bin/env python3
"""
WordFlux CLI
============
Command-line interface for building lexicons and sampling words.

Usage:
    wordflux sources
    wordflux build ru --output data/ru.txt
    wordflux sample uk -n 20 --seed 7
    wordflux sample --preset data/ru.txt --batch 3 -n 5
    wordflux check-preset data/ru.txt
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from wordflux import __version__
from wordflux.entries import Stratum
from wordflux.errors import WordFluxError
from wordflux.merger import merge_sources
from wordflux.presets import load_preset, validate_preset, write_preset
from wordflux.sampler import create_batch_sampler, create_sampler
from wordflux.settings import get_setting
from wordflux.sources import DEFAULT_SOURCES, SUPPORTED_LANGUAGES

# =============================================================================
# Utilities
# =============================================================================

class Output:
    """Handles CLI output with quiet mode support."""

    def __init__(self, quiet: bool = False):
        self.quiet = quiet
        self.console = Console(highlight=False, markup=False, emoji=False, soft_wrap=True)
        self.err_console = Console(stderr=True, highlight=False, markup=False, emoji=False, soft_wrap=True)

    def print(self, *args, **kwargs):
        if not self.quiet:
            self.console.print(*args, **kwargs)

    def emit(self, *args, **kwargs):
        """Essential output, printed even in quiet mode."""
        self.console.print(*args, **kwargs)

    def error(self, msg: str):
        self.err_console.print(f"Error: {msg}", style="red")

    def success(self, msg: str):
        if not self.quiet:
            self.console.print(f"OK: {msg}", style="green")

    def table(self, title: str, headers: list, rows: list):
        """Print a formatted table."""
        if self.quiet:
            return
        table = Table(title=title)
        for header in headers:
            table.add_column(str(header))
        for row in rows:
            table.add_row(*(str(cell) for cell in row))
        self.console.print(table)


def configure_logging(verbose: bool = False):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _merge(args):
    return merge_sources(
        args.language,
        args.source or [],
        include_defaults=not args.no_default_sources,
    )


# =============================================================================
# Commands
# =============================================================================

def cmd_sources(args, out: Output):
    """List the built-in sources."""
    languages = [args.language] if args.language else list(SUPPORTED_LANGUAGES)
    rows = []
    for language in languages:
        if language not in DEFAULT_SOURCES:
            out.error(f'Unsupported language "{language}"')
            return 1
        rows.extend((language, url) for url in DEFAULT_SOURCES[language])
    if out.quiet:
        for _, url in rows:
            out.emit(url)
    else:
        out.table("Default sources", ["Language", "Source"], rows)
    return 0


def cmd_build(args, out: Output):
    """Merge sources into one lexicon."""
    out.print(f"Merging dictionaries for '{args.language}'...")
    result = _merge(args)

    counts = {stratum: 0 for stratum in Stratum}
    for entry in result.entries:
        counts[entry.stratum] += 1

    if args.json:
        out.emit(json.dumps({
            'language': result.language,
            'sources': result.sources,
            'skipped': [{'source': s.source, 'reason': s.reason} for s in result.skipped],
            'words': len(result.entries),
            'strata': {stratum.value: count for stratum, count in counts.items()},
            'top': [entry.to_dict() for entry in result.entries[:args.top]],
        }, ensure_ascii=False, indent=2))
    else:
        out.table(
            f"{result.language}: {len(result.entries)} words",
            ["Stratum", "Words"],
            [(stratum.value, count) for stratum, count in counts.items()],
        )
        if args.top:
            out.table(
                "Most frequent",
                ["Rank", "Word", "Frequency", "Source"],
                [(e.rank, e.word, f"{e.frequency:g}", e.source) for e in result.entries[:args.top]],
            )
        for skip in result.skipped:
            out.print(f"Skipped {skip.source}: {skip.reason}", style="yellow")

    if args.output:
        written = write_preset(result.entries, args.output)
        out.success(f"Wrote {written} words to {args.output}")
    return 0


def cmd_sample(args, out: Output):
    """Print sampled words."""
    if args.preset:
        entries = load_preset(args.preset)
    elif args.language:
        entries = _merge(args).entries
    else:
        out.error("Give a language or --preset FILE")
        return 1

    window = args.window
    if window is None:
        window = get_setting("sampler.default_window_size")
    sampler = create_sampler(entries, seed=args.seed, window_size=window)

    if args.batch:
        batches = create_batch_sampler(sampler)
        for _ in range(args.count):
            out.emit(" ".join(batches(args.batch)))
    else:
        for _ in range(args.count):
            out.emit(sampler())
    return 0


def cmd_check_preset(args, out: Output):
    """Validate a preset word list."""
    problems = validate_preset(args.file, min_words=args.min_words)
    if problems:
        for problem in problems:
            out.error(problem)
        return 1
    out.success(f"{args.file} is a valid preset")
    return 0


# =============================================================================
# Main
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='wordflux',
        description='WordFlux - frequency-stratified word stream',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s sources
  %(prog)s build ru --output ru.txt
  %(prog)s build uk --source extra.txt --no-default-sources
  %(prog)s sample ru -n 20 --seed 7
  %(prog)s sample --preset ru.txt --batch 3 -n 5
  %(prog)s check-preset ru.txt --min-words 10000
"""
    )

    parser.add_argument('--version', '-V', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--quiet', '-q', action='store_true', help='Suppress non-essential output')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # --- sources ---
    p = subparsers.add_parser('sources', help='List default sources')
    p.add_argument('language', nargs='?', help='Language code (default: all)')

    # --- build ---
    p = subparsers.add_parser('build', aliases=['b'], help='Merge sources into one lexicon')
    p.add_argument('language', help='Language code (ru, uk)')
    p.add_argument('--source', '-s', action='append', help='Extra source URL or path (repeatable)')
    p.add_argument('--no-default-sources', action='store_true', help='Use only --source entries')
    p.add_argument('--output', '-o', help='Write the lexicon as a preset file')
    p.add_argument('--top', '-t', type=int, default=10, help='Show the N most frequent words (default: 10)')
    p.add_argument('--json', '-j', action='store_true', help='Output as JSON')

    # --- sample ---
    p = subparsers.add_parser('sample', aliases=['s'], help='Sample words')
    p.add_argument('language', nargs='?', help='Language code (ru, uk)')
    p.add_argument('--preset', '-p', help='Sample from a preset file instead of merging sources')
    p.add_argument('--source', action='append', help='Extra source URL or path (repeatable)')
    p.add_argument('--no-default-sources', action='store_true', help='Use only --source entries')
    p.add_argument('-n', '--count', type=int, default=10, help='Number of words or batches (default: 10)')
    p.add_argument('--seed', type=int, help='Seed for a reproducible stream')
    p.add_argument('--window', '-w', type=int, help='Anti-repeat window size')
    p.add_argument('--batch', '-b', type=int, help='Print batches of this size (1-3)')

    # --- check-preset ---
    p = subparsers.add_parser('check-preset', help='Validate a preset word list')
    p.add_argument('file', help='Preset file')
    p.add_argument('--min-words', type=int, help='Minimum word count (default from app.yaml)')

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    configure_logging(args.verbose)

    # Handle aliases
    cmd_map = {'b': 'build', 's': 'sample'}
    command = cmd_map.get(args.command, args.command)

    out = Output(quiet=args.quiet)

    commands = {
        'sources': cmd_sources,
        'build': cmd_build,
        'sample': cmd_sample,
        'check-preset': cmd_check_preset,
    }

    handler = commands.get(command)
    if handler:
        try:
            return handler(args, out)
        except KeyboardInterrupt:
            out.print("\nCancelled.")
            return 130
        except (WordFluxError, OSError) as e:
            out.error(str(e))
            if args.verbose:
                import traceback
                traceback.print_exc()
            return 1

    parser.print_help()
    return 0


if __name__ == '__main__':
    sys.exit(main())
