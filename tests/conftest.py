"""Shared fixtures and test configuration.

Logs go to stderr during tests instead of the rotating audit file.
"""

import os
import sys

os.environ.setdefault("LOG_FILE_PATH", "")

# Project root = parent directory of this tests/ folder
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

import pytest

from table2xml.host import CellRange, Workbook


PEOPLE_ROWS = [["Name", "Age"], ["Ann", "30"], ["Bo", "25"]]


@pytest.fixture
def people_workbook():
    return Workbook.from_rows(PEOPLE_ROWS)


@pytest.fixture
def people_range():
    return CellRange(0, 0, 2, 1)


@pytest.fixture
def xml_workbook():
    """Workbook factory with a single XML string placed in A1."""
    def _make(value):
        return Workbook.from_rows([[value]])
    return _make
