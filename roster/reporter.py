"""Output of the working list (CSV, HTML, summary)."""

import csv
import logging
from dataclasses import astuple
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from roster import FileError, MergeResult, WorkingListEntry
from roster.normalize import SOURCE_CHURCH_WINDOWS, SOURCE_ONREALM

log = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parent / 'templates'

# Output headers, in WorkingListEntry field order
CSV_COLUMNS = [
    'admin',
    'Alumni Last Name',
    'Alumni First Name',
    'Member Status',
    'Family Position',
    'Has a Pledge',
    'Spouse First Name',
    'Email',
    'Phone Number',
    'Cell Phone',
    'Street Address',
    'Street 2',
    'City',
    'State',
    'Zip',
    'Source',
    'Last updated',
    'Notes',
    'Referred By',
    'Membership date',
    'Time Away',
    'Pastoral',
    'Virtual',
    'In Person',
    'RE Family',
    'Constant Contact Y/N',
    'Social Justice',
    'Operating Budget',
    'Capital Campaign',
]


def write_csv_report(entries: list[WorkingListEntry], output_path: Path) -> None:
    """Write the working list as a comma-delimited UTF-8 CSV file.

    Args:
        entries: Merged entries, already in output order.
        output_path: Path for the output CSV file.

    Raises:
        FileError: If the file cannot be written.
    """
    output_path = Path(output_path)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'w', newline='', encoding='utf-8') as f:
            writer = csv.writer(f, lineterminator='\n')
            writer.writerow(CSV_COLUMNS)
            for entry in entries:
                writer.writerow(astuple(entry))
    except OSError as exc:
        raise FileError(f"Cannot write {output_path}: {exc}") from exc

    log.info("CSV written: %s (%d rows)", output_path, len(entries))


def _compute_stats(result: MergeResult) -> dict:
    """Compute summary statistics from a merge result."""
    return {
        'church_windows': result.church_windows_count,
        'onrealm': result.onrealm_count,
        'replaced': len(result.replaced),
        'excluded': len(result.excluded),
        'written': len(result.entries),
        'from_church_windows': sum(1 for e in result.entries if e.source == SOURCE_CHURCH_WINDOWS),
        'from_onrealm': sum(1 for e in result.entries if e.source == SOURCE_ONREALM),
    }


def render_html_report(result: MergeResult, title: str = '') -> str:
    """Render the working list as an HTML page using Jinja2.

    Args:
        result: Merge result to render.
        title: Page title, usually the output file name.

    Returns:
        The rendered page.
    """
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=True,
    )
    template = env.get_template('report.html')

    return template.render(
        title=title,
        columns=CSV_COLUMNS,
        rows=[astuple(e) for e in result.entries],
        stats=_compute_stats(result),
        excluded=[f"{last}, {first}" for last, first in result.excluded],
    )


def write_html_report(html: str, output_path: Path) -> None:
    """Write a page from render_html_report to disk.

    Raises:
        FileError: If the file cannot be written.
    """
    output_path = Path(output_path)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(html, encoding='utf-8')
    except OSError as exc:
        raise FileError(f"Cannot write {output_path}: {exc}") from exc
    log.info("HTML written: %s", output_path)


def print_summary(result: MergeResult) -> None:
    """Print merge statistics to stdout."""
    stats = _compute_stats(result)

    print("\n=== Working list ===")
    print(f"Church Windows records:    {stats['church_windows']:>5}")
    print(f"OnRealm records:           {stats['onrealm']:>5}")
    print(f"Replaced by later record:  {stats['replaced']:>5}")
    print(f"Excluded by name filter:   {stats['excluded']:>5}")
    print("---")
    print(f"Entries written:           {stats['written']:>5}")
    print(f"  - from Church Windows:   {stats['from_church_windows']:>5}")
    print(f"  - from OnRealm:          {stats['from_onrealm']:>5}")
    print()
