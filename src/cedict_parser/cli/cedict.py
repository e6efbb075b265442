#!/usr/bin/env python3
"""
cedict - Command-line tool for CC-CEDICT dictionary files.

Subcommands:
  check FILE          Report every malformed line with its line number
  dump FILE           Write entries as JSONL (one object per entry)
  search FILE TERM    Print entries whose definitions contain TERM
  format FILE         Re-serialize entries in canonical form

FILE may be '-' for stdin, or a gzip-compressed file ending in .gz (the
form MDBG distributes the dictionary in).
"""

import argparse
import gzip
import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional, TextIO

import orjson
from rich.console import Console

from cedict_parser.parser import CedictFormatError, ParseError, format_entry
from cedict_parser.progress_display import ScanProgress, stats_table
from cedict_parser.reader import CedictReader

logger = logging.getLogger(__name__)


@contextmanager
def open_dictionary(path: str) -> Iterator[TextIO]:
    """Open a dictionary file for reading as UTF-8 text."""
    if path == "-":
        yield sys.stdin
        return

    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"Dictionary file not found: {path}")

    if file_path.suffix == ".gz":
        f = gzip.open(file_path, "rt", encoding="utf-8")
    else:
        f = open(file_path, "r", encoding="utf-8")
    with f:
        yield f


@contextmanager
def open_output(path: Optional[Path]) -> Iterator[TextIO]:
    if path is None:
        yield sys.stdout
        return
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yield f


def _show_progress(args) -> bool:
    return not args.no_progress and sys.stderr.isatty()


def cmd_check(args) -> int:
    """Parse every line and log each error; exit 1 if any were found."""
    with open_dictionary(args.file) as f:
        reader = CedictReader(f)
        with ScanProgress(f"Checking {args.file}", enabled=_show_progress(args)) as progress:
            for result in reader:
                if isinstance(result, ParseError):
                    logger.error(str(result))
                progress.update(reader.stats())

    Console().print(stats_table(args.file, reader.stats()))
    if reader.metadata:
        for key, value in sorted(reader.metadata.items()):
            logger.info(f"  {key}: {value}")

    declared = reader.metadata.get("entries")
    if declared is not None and declared.isdigit() and int(declared) != reader.entry_count:
        logger.warning(
            f"Header declares {int(declared):,} entries, parsed {reader.entry_count:,}"
        )

    if reader.error_count:
        logger.error(f"{reader.error_count:,} malformed line(s) in {args.file}")
        return 1
    logger.info(f"{args.file}: OK")
    return 0


def cmd_dump(args) -> int:
    """Write entries as JSONL using orjson."""
    with open_dictionary(args.file) as f, open_output(args.output) as out:
        reader = CedictReader(f)
        with ScanProgress(f"Dumping {args.file}", enabled=_show_progress(args)) as progress:
            for result in reader:
                progress.update(reader.stats())
                if isinstance(result, ParseError):
                    if args.strict:
                        raise result.to_exception()
                    logger.warning(f"Skipping {result}")
                    continue
                line = orjson.dumps(result.to_dict(), option=orjson.OPT_APPEND_NEWLINE)
                out.write(line.decode("utf-8"))

    logger.info(f"Dumped {reader.entry_count:,} entries")
    return 0


def cmd_search(args) -> int:
    """Print entries whose joined definitions contain the search term."""
    term = args.term.lower()
    matches = 0
    with open_dictionary(args.file) as f:
        for entry in CedictReader(f).iter_entries(strict=args.strict):
            definitions = ", ".join(entry.definitions)
            if term in definitions.lower():
                print(f"{entry.simplified} {entry.pinyin} {definitions}")
                matches += 1

    logger.info(f"{matches:,} match(es) for {args.term!r}")
    return 0 if matches else 1


def cmd_format(args) -> int:
    """Re-serialize every entry; comments and blank lines are dropped."""
    with open_dictionary(args.file) as f, open_output(args.output) as out:
        for entry in CedictReader(f).iter_entries(strict=args.strict):
            out.write(format_entry(entry) + "\n")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cedict",
        description="Check, dump, search and re-format CC-CEDICT dictionary files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Validate a release
  cedict check cedict_1_0_ts_utf-8_mdbg.txt.gz

  # Export entries as JSONL
  cedict dump cedict_ts.u8 --output cedict.jsonl

  # Find entries mentioning "hello"
  cedict search cedict_ts.u8 hello
        """
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable debug logging'
    )
    parser.add_argument(
        '--no-progress',
        action='store_true',
        help='Do not show the live progress panel'
    )

    subparsers = parser.add_subparsers(dest='command', required=True)

    check = subparsers.add_parser('check', help='Report malformed lines')
    check.add_argument('file', help="Dictionary file, .gz file, or '-' for stdin")
    check.set_defaults(func=cmd_check)

    dump = subparsers.add_parser('dump', help='Write entries as JSONL')
    dump.add_argument('file', help="Dictionary file, .gz file, or '-' for stdin")
    dump.add_argument('-o', '--output', type=Path, help='Output file (default: stdout)')
    dump.set_defaults(func=cmd_dump)

    search = subparsers.add_parser('search', help='Search definitions')
    search.add_argument('file', help="Dictionary file, .gz file, or '-' for stdin")
    search.add_argument('term', help='Case-insensitive text to look for')
    search.set_defaults(func=cmd_search)

    fmt = subparsers.add_parser('format', help='Re-serialize entries')
    fmt.add_argument('file', help="Dictionary file, .gz file, or '-' for stdin")
    fmt.add_argument('-o', '--output', type=Path, help='Output file (default: stdout)')
    fmt.set_defaults(func=cmd_format)

    for sub in (dump, search, fmt):
        sub.add_argument(
            '--strict',
            action='store_true',
            help='Stop at the first malformed line instead of skipping it'
        )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the cedict CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(levelname)s: %(message)s'
    )

    try:
        return args.func(args)
    except OSError as e:
        logger.error(str(e))
        return 1
    except UnicodeDecodeError as e:
        logger.error(f"{args.file} is not valid UTF-8: {e}")
        return 1
    except CedictFormatError as e:
        logger.error(f"Aborted: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
