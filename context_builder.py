"""
Flattens fetched records into the context text sent to the model.
"""

import json

SEPARATOR = "\n\n---\n\n"

PREFERRED_FIELDS = ["title", "name", "description", "content", "text", "summary"]
IDENTIFIER_FIELDS = {"_id", "__v"}


def format_sheet_row(record):
    data_str = ", ".join(f"{key}: {value}" for key, value in record.fields.items())
    return f'Row {record.row_number} from sheet "{record.sheet_name}": {data_str}'


def format_document(record):
    return f"{record.title}: {record.content}"


def format_collection_item(record):
    """Preferred fields as "name: value" lines, else a JSON dump of the item."""
    lines = [
        f"{field}: {record.fields[field]}"
        for field in PREFERRED_FIELDS
        if field in record.fields
    ]
    if lines:
        body = "\n".join(lines)
    else:
        item = {k: v for k, v in record.fields.items() if k not in IDENTIFIER_FIELDS}
        body = json.dumps(item, indent=2, default=str)
    return f"Document {record.index}:\n{body}"


FORMATTERS = {
    "sheets": format_sheet_row,
    "docs": format_document,
    "collection": format_collection_item,
}


def build_context(records, kind):
    formatter = FORMATTERS[kind]
    return SEPARATOR.join(formatter(record) for record in records)
