from table2xml.functions import FUNCTIONS, convert_to_xml, convert_xml_to_table
from table2xml.host import CellRange, Workbook


class FailingHost(Workbook):
    def read_grid(self, handle):
        raise RuntimeError("host went away")


def test_convert_to_xml_people(people_workbook, people_range):
    result = convert_to_xml("People", "Person", people_range, people_workbook)
    assert result == (
        "<People>\n<Person>\n<Name>Ann</Name>\n<Age>30</Age>\n</Person>\n"
        "<Person>\n<Name>Bo</Name>\n<Age>25</Age>\n</Person>\n</People>\n"
    )


def test_convert_to_xml_headers_only(people_workbook):
    assert convert_to_xml("People", "Person", CellRange(0, 0, 0, 1), people_workbook) == "<People>\n</People>\n"


def test_convert_to_xml_invalid_reference(people_workbook):
    assert convert_to_xml("R", "I", "A1:B3", people_workbook) == "Error: Invalid range provided."


def test_convert_to_xml_blank_header_writes_nothing():
    workbook = Workbook.from_rows([["Name", "", "City"], ["Ann", "30", "Oslo"]])
    result = convert_to_xml("R", "I", CellRange(0, 0, 1, 2), workbook)
    assert result == "Error: Header in column 2 is empty or invalid."
    assert workbook.writes == []


def test_convert_to_xml_unexpected_error_is_rendered():
    assert convert_to_xml("R", "I", CellRange(0, 0), FailingHost()) == "Error: host went away"


def test_convert_xml_to_table_success(xml_workbook):
    workbook = xml_workbook("<Items><Item><A>1</A><B>2</B></Item></Items>")
    assert convert_xml_to_table(CellRange(0, 0), workbook) == "XML data written to table."
    assert workbook.read_grid(CellRange(1, 1, 2, 2)) == [["A", "B"], ["1", "2"]]


def test_convert_xml_to_table_custom_origin(xml_workbook):
    workbook = xml_workbook("<Items><Item><A>1</A></Item></Items>")
    convert_xml_to_table(CellRange(0, 0), workbook, origin_row=5, origin_col=0)
    assert workbook.writes == [(5, 0, "A"), (6, 0, "1")]


def test_convert_xml_to_table_inconsistent_writes_nothing(xml_workbook):
    workbook = xml_workbook("<Items><Item><A>1</A><B>2</B></Item><Item><A>3</A></Item></Items>")
    result = convert_xml_to_table(CellRange(0, 0), workbook)
    assert result.startswith("Error: Inconsistent column count in XML rows.")
    assert workbook.writes == []


def test_convert_xml_to_table_error_messages(xml_workbook):
    assert convert_xml_to_table(CellRange(0, 0), xml_workbook("  ")) == (
        "Error: Cell is empty or contains only whitespace."
    )
    assert convert_xml_to_table(CellRange(0, 0), xml_workbook(12)) == (
        "Error: Cell does not contain a string value."
    )
    assert convert_xml_to_table(CellRange(0, 0), xml_workbook("<a>")) == (
        "Error: Cell does not contain valid XML."
    )
    assert convert_xml_to_table(CellRange(0, 0), xml_workbook("<Items/>")) == (
        "Error: No 'Item' elements found in XML."
    )
    assert convert_xml_to_table(object(), xml_workbook("<Items/>")) == "Error: Invalid cell reference."


def test_convert_xml_to_table_multi_cell_reference(people_workbook, people_range):
    assert convert_xml_to_table(people_range, people_workbook) == "Error: Cell does not contain a string value."


def test_round_trip(people_workbook, people_range):
    xml_text = convert_to_xml("Items", "Item", people_range, people_workbook)
    workbook = Workbook.from_rows([[xml_text]])

    assert convert_xml_to_table(CellRange(0, 0), workbook, origin_row=0, origin_col=1) == "XML data written to table."
    assert workbook.read_grid(CellRange(0, 1, 2, 2)) == people_workbook.read_grid(people_range)


def test_round_trip_preserves_special_characters():
    rows = [["Note", "Quote"], ["Fish & <Chips>", "it's \"fine\""]]
    source = Workbook.from_rows(rows)
    xml_text = convert_to_xml("Items", "Item", CellRange(0, 0, 1, 1), source)

    target = Workbook.from_rows([[xml_text]])
    convert_xml_to_table(CellRange(0, 0), target, origin_row=2, origin_col=0)
    assert target.read_grid(CellRange(2, 0, 3, 1)) == rows


def test_function_registry():
    assert FUNCTIONS["ConvertToXml"]["function"] is convert_to_xml
    assert FUNCTIONS["ConvertXmlToTable"]["function"] is convert_xml_to_table
