"""Tests for roster.reader module."""

import csv

import pytest

from roster import ChurchWindowsRecord, FileError, OnRealmRecord, ParseError
from roster.reader import (
    CHURCH_WINDOWS_COLUMNS,
    ONREALM_COLUMNS,
    detect_encoding,
    normalize_whitespace,
    read_church_windows,
    read_onrealm,
)


def _write_csv(path, rows, encoding='utf-8'):
    with open(path, 'w', newline='', encoding=encoding) as f:
        csv.writer(f).writerows(rows)
    return path


def _onrealm_row(**kwargs) -> list[str]:
    """Build a positional OnRealm row with defaults."""
    values = {name: '' for name in OnRealmRecord.__dataclass_fields__}
    values.update(first_name='Jane', last_name='Smith')
    values.update(kwargs)
    return list(values.values())


class TestDetectEncoding:
    """Tests for encoding detection."""

    def test_utf16le_bom(self, tmp_path):
        f = tmp_path / 'test.csv'
        f.write_bytes('\ufeffhello'.encode('utf-16-le'))
        assert detect_encoding(f) == 'utf-16-le'

    def test_utf8_fallback(self, tmp_path):
        f = tmp_path / 'test.csv'
        f.write_text('hello', encoding='utf-8')
        assert detect_encoding(f) == 'utf-8-sig'


class TestNormalizeWhitespace:
    """Tests for whitespace normalization."""

    def test_strips_leading_trailing(self):
        assert normalize_whitespace('  firstName  ') == 'firstName'

    def test_collapses_multiple_spaces(self):
        assert normalize_whitespace('Address  Line 1') == 'Address Line 1'

    def test_empty_string(self):
        assert normalize_whitespace('') == ''


class TestReadChurchWindows:
    """Tests for the two-header Church Windows reader."""

    def test_record_count(self, cw_records):
        assert len(cw_records) == 4

    def test_record_types(self, cw_records):
        assert all(isinstance(r, ChurchWindowsRecord) for r in cw_records)

    def test_first_record(self, cw_records):
        r = cw_records[0]
        assert r.first_name == 'Jane'
        assert r.last_name == 'Smith'
        assert r.address_block == '12 Elm St, Newark NJ'
        assert r.city_state == 'Newark NJ'
        assert r.zip == '07102'
        assert r.home_phone == '973-555-0101'
        assert r.status == 'Member'

    def test_empty_fields_are_empty_strings(self, cw_records):
        r = cw_records[3]
        assert r.last_name == 'Zeller'
        assert r.email == ''
        assert r.birth_date == ''

    def test_label_row_is_ignored(self, tmp_path):
        # A label row with a wrong column count and a name that would
        # otherwise look like a header must not be used
        header = list(CHURCH_WINDOWS_COLUMNS)
        data = ['x'] * len(header)
        f = _write_csv(tmp_path / 'cw.csv', [['firstName', 'LastName', 'junk'], header, data])
        records = read_church_windows(f)
        assert len(records) == 1
        assert records[0].first_name == 'x'

    def test_binds_by_second_header_names(self, tmp_path):
        header = list(reversed(CHURCH_WINDOWS_COLUMNS)) + ['Extra']
        row = {name: '' for name in header}
        row.update(firstName='Bob', LastName='Jones', CityState='Newark NJ', Extra='ignored')
        f = _write_csv(tmp_path / 'cw.csv', [['Label'], header, [row[h] for h in header]])
        record = read_church_windows(f)[0]
        assert record.first_name == 'Bob'
        assert record.last_name == 'Jones'
        assert record.city_state == 'Newark NJ'

    def test_header_whitespace_normalized(self, tmp_path):
        header = [f' {name} ' for name in CHURCH_WINDOWS_COLUMNS]
        f = _write_csv(tmp_path / 'cw.csv', [['Label'], header, ['v'] * len(header)])
        assert read_church_windows(f)[0].last_name == 'v'

    def test_utf16_export(self, tmp_path):
        header = list(CHURCH_WINDOWS_COLUMNS)
        row = [''] * len(header)
        row[header.index('LastName')] = 'Müller'
        f = tmp_path / 'cw.csv'
        with open(f, 'w', newline='', encoding='utf-16') as fh:
            csv.writer(fh).writerows([['Label'], header, row])
        assert read_church_windows(f)[0].last_name == 'Müller'

    def test_short_row_raises(self, tmp_path):
        header = list(CHURCH_WINDOWS_COLUMNS)
        f = _write_csv(tmp_path / 'cw.csv', [['Label'], header, ['x'] * (len(header) - 1)])
        with pytest.raises(ParseError, match='line 3'):
            read_church_windows(f)

    def test_long_row_raises(self, tmp_path):
        header = list(CHURCH_WINDOWS_COLUMNS)
        f = _write_csv(tmp_path / 'cw.csv', [['Label'], header, ['x'] * (len(header) + 1)])
        with pytest.raises(ParseError):
            read_church_windows(f)

    def test_missing_column_raises(self, tmp_path):
        header = [h for h in CHURCH_WINDOWS_COLUMNS if h != 'CityState']
        f = _write_csv(tmp_path / 'cw.csv', [['Label'], header, ['x'] * len(header)])
        with pytest.raises(ParseError, match='CityState'):
            read_church_windows(f)

    def test_single_row_raises(self, tmp_path):
        f = _write_csv(tmp_path / 'cw.csv', [['Label']])
        with pytest.raises(ParseError):
            read_church_windows(f)

    def test_headers_only(self, tmp_path):
        f = _write_csv(tmp_path / 'cw.csv', [['Label'], list(CHURCH_WINDOWS_COLUMNS)])
        assert read_church_windows(f) == []

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileError):
            read_church_windows(tmp_path / 'nonexistent.csv')


class TestReadOnRealm:
    """Tests for the positional OnRealm reader."""

    def test_record_count(self, realm_records):
        assert len(realm_records) == 2

    def test_duplicate_name_columns_bound_by_position(self, realm_records):
        r = realm_records[0]
        assert r.first_name == 'Jane'
        assert r.last_name == 'Smith'
        assert r.first_name_2 == 'Janie'
        assert r.last_name_2 == 'Smyth'

    def test_placeholder_columns(self, realm_records):
        r = realm_records[0]
        assert r.vlookup_name == 'Smith Jane'
        assert r.individual_id == '1001'

    def test_trailing_fields(self, realm_records):
        r = realm_records[1]
        assert r.mobile_phone == '201-555-1002'
        assert r.family_position == 'Head'
        assert r.member_status == 'Visitor'

    def test_header_is_not_used_for_binding(self, tmp_path):
        header = ['Last Name'] * len(ONREALM_COLUMNS)
        f = _write_csv(tmp_path / 'realm.csv', [header, _onrealm_row(first_name='Bob', last_name='Jones')])
        record = read_onrealm(f)[0]
        assert record.first_name == 'Bob'
        assert record.last_name == 'Jones'

    def test_extra_columns_ignored(self, tmp_path):
        row = _onrealm_row(member_status='Member') + ['extra', 'columns']
        f = _write_csv(tmp_path / 'realm.csv', [list(ONREALM_COLUMNS), row])
        assert read_onrealm(f)[0].member_status == 'Member'

    def test_short_row_raises(self, tmp_path):
        row = _onrealm_row()[:-1]
        f = _write_csv(tmp_path / 'realm.csv', [list(ONREALM_COLUMNS), _onrealm_row(), row])
        with pytest.raises(ParseError, match='line 3'):
            read_onrealm(f)

    def test_empty_file(self, tmp_path):
        f = tmp_path / 'realm.csv'
        f.write_text('', encoding='utf-8')
        assert read_onrealm(f) == []

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileError):
            read_onrealm(tmp_path / 'nonexistent.csv')
