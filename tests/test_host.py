import pandas as pd
import pytest

from table2xml.host import CellRange, Workbook, column_index, column_letters
from table2xml.utils.errors import EmptyInputError, InvalidReferenceError


@pytest.mark.parametrize("letters, index", [("A", 0), ("Z", 25), ("AA", 26), ("AZ", 51), ("BA", 52)])
def test_column_letters_round_trip(letters, index):
    assert column_index(letters) == index
    assert column_letters(index) == letters


def test_from_a1_single_cell():
    cell = CellRange.from_a1("C3")
    assert cell == CellRange(2, 2, 2, 2)
    assert cell.is_single_cell


def test_from_a1_range_normalizes_corners():
    assert CellRange.from_a1("$D$4:B2") == CellRange(1, 1, 3, 3)
    assert CellRange.from_a1("B2:D4").to_a1() == "B2:D4"


@pytest.mark.parametrize("reference", ["", "A0", "1A", "A1:B2:C3", "hello"])
def test_from_a1_rejects_malformed(reference):
    with pytest.raises(InvalidReferenceError):
        CellRange.from_a1(reference)


def test_inverted_range_is_invalid():
    with pytest.raises(InvalidReferenceError):
        CellRange(3, 0, 1, 0)


def test_read_grid_requires_cell_range(people_workbook):
    with pytest.raises(InvalidReferenceError, match="Invalid range provided"):
        people_workbook.read_grid("A1:B3")


def test_read_grid_fills_missing_cells_with_none(people_workbook):
    assert people_workbook.read_grid(CellRange(2, 0, 3, 2)) == [["Bo", "25", None], [None, None, None]]


def test_write_cell_is_logged():
    workbook = Workbook()
    workbook.write_cell(4, 2, "x")
    assert workbook.cells[(4, 2)] == "x"
    assert workbook.writes == [(4, 2, "x")]
    assert workbook.used_range() == CellRange(4, 2)


def test_used_range_of_empty_workbook():
    with pytest.raises(EmptyInputError):
        Workbook().used_range()


def test_from_dataframe_turns_nan_into_none():
    df = pd.DataFrame([["Name", "Score"], ["Ann", 1.5], ["Bo", float("nan")]])
    assert Workbook.from_dataframe(df).to_rows() == [["Name", "Score"], ["Ann", 1.5], ["Bo", None]]


def test_from_file_csv(tmp_path):
    path = tmp_path / "people.csv"
    path.write_text("Name,Age\nAnn,30\nBo,\n", encoding="utf-8")
    assert Workbook.from_file(path).to_rows() == [["Name", "Age"], ["Ann", "30"], ["Bo", None]]


def test_from_file_xlsx(tmp_path):
    path = tmp_path / "people.xlsx"
    pd.DataFrame([["Ann", 30], ["Bo", 25]], columns=["Name", "Age"]).to_excel(path, index=False)
    assert Workbook.from_file(path).to_rows() == [["Name", "Age"], ["Ann", 30], ["Bo", 25]]


def test_from_file_unreadable(tmp_path):
    path = tmp_path / "broken.xlsx"
    path.write_bytes(b"not a spreadsheet")
    with pytest.raises(ValueError, match="Failed to read spreadsheet"):
        Workbook.from_file(path)
