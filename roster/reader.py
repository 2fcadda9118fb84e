"""CSV readers for Church Windows and OnRealm roster exports."""

import csv
import io
import logging
import re
from dataclasses import fields
from pathlib import Path

from roster import ChurchWindowsRecord, FileError, OnRealmRecord, ParseError

log = logging.getLogger(__name__)

# Matches any sequence of whitespace (including Unicode whitespace like U+2006)
_WHITESPACE_RE = re.compile(r'\s+')

# Second header row name -> ChurchWindowsRecord attribute
CHURCH_WINDOWS_COLUMNS: dict[str, str] = {
    'Title': 'title',
    'firstName': 'first_name',
    'LastName': 'last_name',
    'MailingLabel': 'mailing_label',
    'AddressBlock': 'address_block',
    'Address1': 'address1',
    'Address2': 'address2',
    'CityState': 'city_state',
    'Zip': 'zip',
    'Membershipdate': 'membership_date',
    'eMail': 'email',
    'HomePhone': 'home_phone',
    'CellPhone': 'cell_phone',
    'LastUpdate': 'last_update',
    'Status': 'status',
    'BirthDate': 'birth_date',
}

# Header labels of an OnRealm export, by position. "First Name" and
# "Last Name" appear twice, so rows are bound by index instead of by name.
ONREALM_COLUMNS: tuple[str, ...] = (
    'vLookup Name', 'vLookup eMail', 'vLookup Phone', 'vLookup Mobile',
    'Individual Id', 'Label', 'First Name', 'Current Pledge', 'Last Name',
    'Primary Email', 'Family Id', 'Primary Phone Number', 'Title',
    'First Name', 'Last Name', 'Individual Status',
    'Address Line 1 (Primary)', 'Address Line 2 (Primary)',
    'Address City (Primary)', 'Address Postal Code (Primary)',
    'Address State (Primary)', 'Membership Date', 'Primary Email Address',
    'Alternate Email Address', 'Home Phone Number', 'Mobile Phone Number',
    'Date of Birth', 'Marital Status', 'Family Position', 'Pronouns',
    'Member Status',
)

_ONREALM_FIELDS = [f.name for f in fields(OnRealmRecord)]


def detect_encoding(path: Path) -> str:
    """Detect file encoding by checking for BOM bytes.

    Args:
        path: Path to the CSV file.

    Returns:
        Encoding string suitable for open().
    """
    with open(path, 'rb') as f:
        bom = f.read(2)
    if bom == b'\xff\xfe':
        return 'utf-16-le'
    return 'utf-8-sig'


def normalize_whitespace(value: str) -> str:
    """Collapse runs of whitespace into one space and strip the ends."""
    return _WHITESPACE_RE.sub(' ', value).strip()


def _read_rows(path: Path) -> list[tuple[int, list[str]]]:
    """Read all non-blank rows of a comma-delimited file.

    Returns:
        List of (line number, row) pairs.

    Raises:
        FileError: If the file cannot be opened or decoded.
        ParseError: If the CSV itself is malformed.
    """
    try:
        encoding = detect_encoding(path)
        with open(path, 'r', encoding=encoding, newline='') as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise FileError(f"Cannot read {path}: {exc}") from exc

    # Strip BOM if present
    content = content.lstrip('\ufeff')

    reader = csv.reader(io.StringIO(content, newline=''))
    rows: list[tuple[int, list[str]]] = []
    try:
        for row in reader:
            if row:
                rows.append((reader.line_num, row))
    except csv.Error as exc:
        raise ParseError(f"{path}, line {reader.line_num}: {exc}") from exc
    return rows


def read_church_windows(path: str | Path) -> list[ChurchWindowsRecord]:
    """Read a Church Windows export.

    Church Windows writes two header rows. The first one only carries
    labels and is dropped without being looked at; the second one names
    the columns and every following row is bound against it by name.

    Args:
        path: Path to the CSV file.

    Returns:
        List of ChurchWindowsRecord in file order.

    Raises:
        FileError: If the file cannot be opened.
        ParseError: If the second header lacks a required column, or a
            data row has a different number of columns than that header.
    """
    path = Path(path)
    rows = _read_rows(path)
    if len(rows) < 2:
        raise ParseError(f"{path}: expected two header rows, found {len(rows)} row(s)")

    headers = [normalize_whitespace(h) for h in rows[1][1]]
    missing = set(CHURCH_WINDOWS_COLUMNS) - set(headers)
    if missing:
        raise ParseError(f"{path}: missing columns: {', '.join(sorted(missing))}")
    index = {name: headers.index(name) for name in CHURCH_WINDOWS_COLUMNS}

    records: list[ChurchWindowsRecord] = []
    for line_num, row in rows[2:]:
        if len(row) != len(headers):
            raise ParseError(
                f"{path}, line {line_num}: expected {len(headers)} columns, got {len(row)}"
            )
        records.append(ChurchWindowsRecord(
            **{attr: row[index[name]] for name, attr in CHURCH_WINDOWS_COLUMNS.items()}
        ))

    log.info("%d records read from %s", len(records), path)
    return records


def read_onrealm(path: str | Path) -> list[OnRealmRecord]:
    """Read an OnRealm export.

    The header row is informational only. Columns are bound by position to
    OnRealmRecord; extra trailing columns are ignored.

    Args:
        path: Path to the CSV file.

    Returns:
        List of OnRealmRecord in file order.

    Raises:
        FileError: If the file cannot be opened.
        ParseError: If a data row has fewer columns than the schema.
    """
    path = Path(path)
    rows = _read_rows(path)
    if not rows:
        log.warning("%s is empty", path)
        return []

    header = tuple(normalize_whitespace(h) for h in rows[0][1][:len(ONREALM_COLUMNS)])
    if header != ONREALM_COLUMNS:
        log.debug("Unexpected OnRealm header in %s: %s", path, header)

    width = len(_ONREALM_FIELDS)
    records: list[OnRealmRecord] = []
    for line_num, row in rows[1:]:
        if len(row) < width:
            raise ParseError(
                f"{path}, line {line_num}: expected {width} columns, got {len(row)}"
            )
        records.append(OnRealmRecord(*row[:width]))

    log.info("%d records read from %s", len(records), path)
    return records
