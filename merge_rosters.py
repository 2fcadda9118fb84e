"""church-roster-merge – CLI tool to merge Church Windows and OnRealm rosters."""

import argparse
import logging
import sys
from pathlib import Path

from roster import FileError, RosterError
from roster.merging import compile_exclusion, merge_entries
from roster.normalize import church_windows_to_entry, onrealm_to_entry
from roster.reader import read_church_windows, read_onrealm
from roster.reporter import (
    print_summary,
    render_html_report,
    write_csv_report,
    write_html_report,
)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        description='Merge a Church Windows and an OnRealm export into a single working list.',
        prog='merge_rosters.py',
    )
    parser.add_argument(
        '-c', '--church-windows-csv', required=True, type=Path,
        help='Path to the Church Windows CSV export',
    )
    parser.add_argument(
        '-r', '--onrealm-csv', required=True, type=Path,
        help='Path to the OnRealm CSV export',
    )
    parser.add_argument(
        '-o', '--output-csv', required=True, type=Path,
        help='Path for the merged working list (CSV)',
    )
    parser.add_argument(
        '-f', '--filter-names', default=None,
        help=(
            'Regular expression; entries whose last name matches are left out. '
            'Without it nothing is excluded; an empty pattern excludes everyone'
        ),
    )
    parser.add_argument(
        '--html', action='store_true',
        help='Also write an HTML view of the working list',
    )
    parser.add_argument(
        '--summary', action='store_true',
        help='Print merge statistics to stdout',
    )
    parser.add_argument(
        '-v', '--verbose', action='store_true',
        help='Log every replaced entry',
    )
    return parser


def run(args: argparse.Namespace) -> None:
    """Read both exports, merge them and write the reports."""
    # Compiled before any input is read
    exclude = compile_exclusion(args.filter_names)

    church_windows = [church_windows_to_entry(r) for r in read_church_windows(args.church_windows_csv)]
    onrealm = [onrealm_to_entry(r) for r in read_onrealm(args.onrealm_csv)]

    result = merge_entries(church_windows, onrealm, exclude)

    # Rendered before any output file is opened
    html = render_html_report(result, args.output_csv.stem) if args.html else None

    write_csv_report(result.entries, args.output_csv)

    if html is not None:
        try:
            write_html_report(html, args.output_csv.with_suffix('.html'))
        except FileError:
            args.output_csv.unlink(missing_ok=True)
            raise

    if args.summary:
        print_summary(result)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(levelname)s: %(message)s',
    )

    try:
        run(args)
    except RosterError as exc:
        logging.error("%s", exc)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
