import httplib2
import pytest
from googleapiclient.errors import HttpError

from document_state import DocumentState
from google_store import GoogleDocumentStore
from records import CollectionItem


class FakeRequest:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error

    def execute(self):
        if self.error is not None:
            raise self.error
        return self.result


class FakeValues:
    def __init__(self, service):
        self.service = service

    def get(self, spreadsheetId, range):
        self.service.value_ranges.append(range)
        return FakeRequest(self.service.values_by_range.get(range, {}), self.service.error)


class FakeSpreadsheets:
    def __init__(self, service):
        self.service = service

    def get(self, spreadsheetId, fields=None):
        self.service.spreadsheet_ids.append(spreadsheetId)
        meta = {"sheets": [{"properties": {"title": t}} for t in self.service.tabs]}
        return FakeRequest(meta, self.service.error)

    def values(self):
        return FakeValues(self.service)


class FakeSheetsService:
    """Stands in for build("sheets", "v4")."""

    def __init__(self, tabs=None, error=None):
        tabs = tabs or {}
        self.tabs = list(tabs)
        self.values_by_range = {
            "'" + name.replace("'", "''") + "'": {"values": values} for name, values in tabs.items()
        }
        self.error = error
        self.spreadsheet_ids = []
        self.value_ranges = []

    def spreadsheets(self):
        return FakeSpreadsheets(self)


class FakeDocuments:
    def __init__(self, service):
        self.service = service

    def get(self, documentId):
        self.service.document_ids.append(documentId)
        return FakeRequest(self.service.document, self.service.error)


class FakeDocsService:
    """Stands in for build("docs", "v1")."""

    def __init__(self, document=None, error=None):
        self.document = document or {"title": "", "body": {"content": []}}
        self.error = error
        self.document_ids = []

    def documents(self):
        return FakeDocuments(self)


def make_document(title, *paragraphs):
    content = [{"sectionBreak": {}}]
    for runs in paragraphs:
        content.append({
            "paragraph": {"elements": [{"textRun": {"content": text}} for text in runs]}
        })
    return {"title": title, "body": {"content": content}}


class FakeChatModel:
    def __init__(self, answer="The answer.", error=None):
        self.answer = answer
        self.error = error
        self.calls = []

    def chat_complete(self, messages):
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return self.answer


class FakeCollectionStore:
    def __init__(self, items=None, error=None, connected=True):
        self.items = items or []
        self.error = error
        self.connected = connected
        self.source_name = "kb.articles"
        self.reads = 0

    def find_all(self):
        self.reads += 1
        if self.error is not None:
            raise self.error
        return [CollectionItem(index=i, fields=item) for i, item in enumerate(self.items, start=1)]

    def is_connected(self):
        return self.connected


SHEET_TABS = {
    "Sheet1": [
        ["Name", "Age"],
        ["Alice", "30"],
        ["Bob"],
    ],
}


@pytest.fixture
def sheets_service():
    return FakeSheetsService(SHEET_TABS)


@pytest.fixture
def docs_service():
    return FakeDocsService(make_document("Handbook", ["Welcome to the team.\n"], ["Be kind.\n"]))


@pytest.fixture
def google_store(sheets_service, docs_service):
    return GoogleDocumentStore(sheets_service, docs_service)


@pytest.fixture
def chat_model():
    return FakeChatModel()


@pytest.fixture
def document_state():
    return DocumentState()


def http_error(status):
    return HttpError(httplib2.Response({"status": status}), b'{"error": {"message": "nope"}}')
