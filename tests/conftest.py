"""Shared test fixtures."""

from pathlib import Path

import pytest

from roster.reader import read_church_windows, read_onrealm


DATA_DIR = Path(__file__).resolve().parent.parent / 'data'


@pytest.fixture(scope='session')
def data_dir() -> Path:
    """Path to the data directory."""
    return DATA_DIR


@pytest.fixture(scope='session')
def cw_records():
    """All records from church_windows.csv."""
    return read_church_windows(DATA_DIR / 'church_windows.csv')


@pytest.fixture(scope='session')
def realm_records():
    """All records from onrealm.csv."""
    return read_onrealm(DATA_DIR / 'onrealm.csv')
