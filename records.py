"""
Data models shared by both services.
These Pydantic classes describe what is fetched from a data source and what
/ask sends back.
"""

from typing import Any, Literal, Union

import pydantic


class DataSourceReference(pydantic.BaseModel):
    """The Google Sheet or Doc the service is currently answering from."""
    model_config = pydantic.ConfigDict(frozen=True)

    url: str
    kind: Literal["sheets", "docs"]
    id: str


class SheetRow(pydantic.BaseModel):
    """One non-empty data row of a spreadsheet tab."""
    sheet_name: str
    row_number: int  # spreadsheet row, header is row 1
    fields: dict[str, str]


class DocumentText(pydantic.BaseModel):
    """The whole text of a Google Doc."""
    title: str
    content: str


class CollectionItem(pydantic.BaseModel):
    """One stored item of a MongoDB collection, as read."""
    index: int
    fields: dict[str, Any]


GoogleRecord = Union[SheetRow, DocumentText]


class ConnectedDocument(pydantic.BaseModel):
    """A reference together with the records fetched for it."""
    model_config = pydantic.ConfigDict(frozen=True)

    reference: DataSourceReference
    records: tuple[GoogleRecord, ...]


class AskResult(pydantic.BaseModel):
    """Answer from the Google Sheets/Docs service."""
    answer: str
    source: str
    itemCount: int
    documentType: str


class CollectionAskResult(pydantic.BaseModel):
    """Answer from the MongoDB service."""
    answer: str
    source: str
    documentsCount: int
