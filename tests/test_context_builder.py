import datetime

from bson import ObjectId

from context_builder import SEPARATOR, build_context
from records import CollectionItem, DocumentText, SheetRow


def test_sheet_row_format():
    row = SheetRow(sheet_name="Sheet1", row_number=5, fields={"Name": "Alice", "Age": "30"})
    assert build_context([row], "sheets") == 'Row 5 from sheet "Sheet1": Name: Alice, Age: 30'


def test_sheet_row_missing_cell_is_omitted():
    row = SheetRow(sheet_name="Sheet1", row_number=5, fields={"Name": "Alice"})
    assert build_context([row], "sheets") == 'Row 5 from sheet "Sheet1": Name: Alice'


def test_records_joined_in_order():
    rows = [
        SheetRow(sheet_name="A", row_number=2, fields={"x": "1"}),
        SheetRow(sheet_name="B", row_number=3, fields={"y": "2"}),
    ]
    assert build_context(rows, "sheets") == (
        'Row 2 from sheet "A": x: 1' + SEPARATOR + 'Row 3 from sheet "B": y: 2'
    )


def test_document_format():
    doc = DocumentText(title="Handbook", content="Welcome.")
    assert build_context([doc], "docs") == "Handbook: Welcome."


def test_empty_records():
    assert build_context([], "sheets") == ""


def test_collection_preferred_fields_in_fixed_order():
    item = CollectionItem(index=1, fields={
        "_id": ObjectId(),
        "summary": "Short",
        "title": "Refunds",
        "price": 10,
    })
    assert build_context([item], "collection") == "Document 1:\ntitle: Refunds\nsummary: Short"


def test_collection_falls_back_to_json_without_identifiers():
    item = CollectionItem(index=2, fields={
        "_id": ObjectId(),
        "__v": 0,
        "sku": "A-1",
        "created": datetime.date(2024, 1, 2),
    })
    assert build_context([item], "collection") == (
        'Document 2:\n{\n  "sku": "A-1",\n  "created": "2024-01-02"\n}'
    )


def test_collection_items_numbered_and_separated():
    items = [
        CollectionItem(index=1, fields={"name": "First"}),
        CollectionItem(index=2, fields={"text": "Second"}),
    ]
    assert build_context(items, "collection") == (
        "Document 1:\nname: First" + SEPARATOR + "Document 2:\ntext: Second"
    )
