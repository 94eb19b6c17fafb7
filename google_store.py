"""
Reads Google Sheets and Google Docs into records.
Supports a plain API key (public documents) or a service account.
"""

import json
import logging
import re

import google_auth_httplib2
import httplib2
from google.auth.exceptions import GoogleAuthError
from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from config import REQUEST_TIMEOUT_SECONDS
from errors import AccessDenied, FetchFailed, InvalidUrl, SourceNotFound
from records import DataSourceReference, DocumentText, SheetRow

logger = logging.getLogger(__name__)

SCOPES = [
    "https://www.googleapis.com/auth/spreadsheets.readonly",
    "https://www.googleapis.com/auth/documents.readonly",
]

SHEETS_ID = re.compile(r"/spreadsheets/d/([A-Za-z0-9_-]+)")
DOCS_ID = re.compile(r"/document/d/([A-Za-z0-9_-]+)")

LABELS = {
    "sheets": ("Google Sheet", "sheet"),
    "docs": ("Google Doc", "document"),
}


def classify_url(url: str) -> DataSourceReference:
    """Work out whether a URL points at a sheet or a doc, and its ID."""
    if "spreadsheets" in url:
        kind, pattern = "sheets", SHEETS_ID
    elif "document" in url:
        kind, pattern = "docs", DOCS_ID
    else:
        raise InvalidUrl("Please provide a Google Sheets or Google Docs URL.")

    match = pattern.search(url)
    if not match:
        raise InvalidUrl("Could not extract document ID from URL. Please check the URL format.")
    return DataSourceReference(url=url, kind=kind, id=match.group(1))


def get_google_credentials(raw_json, scopes=SCOPES):
    try:
        # First parse: unwrap string if needed
        parsed_string = json.loads(raw_json)
        info = json.loads(parsed_string) if isinstance(parsed_string, str) else parsed_string
        return service_account.Credentials.from_service_account_info(info, scopes=scopes)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Failed to load service account: {e}") from e


def rows_to_records(sheet_name, values):
    """
    Turn a tab's values (header row first) into SheetRows.
    Empty cells are left out; rows with nothing left produce no record.
    """
    if not values:
        return []

    headers = values[0]
    records = []
    for row_number, row in enumerate(values[1:], start=2):
        fields = {}
        for col, header in enumerate(headers):
            if col < len(row) and row[col]:
                fields[header] = row[col]
        if fields:
            records.append(SheetRow(sheet_name=sheet_name, row_number=row_number, fields=fields))
    return records


def paragraph_text(body):
    """Concatenate every text run of every paragraph, in order."""
    content = ""
    for element in body.get("content", []):
        paragraph = element.get("paragraph")
        if not paragraph:
            continue
        for elem in paragraph.get("elements", []):
            text_run = elem.get("textRun")
            if text_run:
                content += text_run.get("content", "")
    return content


def _a1_range(sheet_name):
    # A bare tab name selects the whole used range
    return "'" + sheet_name.replace("'", "''") + "'"


def _fetch_error(exc, kind):
    label, noun = LABELS[kind]
    status = exc.resp.status if isinstance(exc, HttpError) else None
    if status == 403:
        return AccessDenied(
            f"Access denied. Please ensure the {label} is publicly accessible "
            f"and your Google API key is valid."
        )
    if status == 404:
        return SourceNotFound(
            f"{label} not found. Please check the URL and ensure the {noun} exists."
        )
    return FetchFailed(
        f"Failed to fetch {label} data. Please check your Google API key and {noun} permissions."
    )


class GoogleDocumentStore:
    """Fetches every record of a Google Sheet or Doc."""

    def __init__(self, sheets_service, docs_service):
        self.sheets = sheets_service
        self.docs = docs_service

    @classmethod
    def from_settings(cls, settings):
        if settings.google_service_account:
            creds = get_google_credentials(settings.google_service_account)
            http = google_auth_httplib2.AuthorizedHttp(
                creds, http=httplib2.Http(timeout=REQUEST_TIMEOUT_SECONDS)
            )
            options = {"http": http}
        else:
            options = {
                "developerKey": settings.google_api_key,
                "http": httplib2.Http(timeout=REQUEST_TIMEOUT_SECONDS),
            }
        sheets = build("sheets", "v4", cache_discovery=False, **options)
        docs = build("docs", "v1", cache_discovery=False, **options)
        return cls(sheets, docs)

    def fetch(self, reference: DataSourceReference):
        logger.info("Fetching data from Google %s %s", reference.kind, reference.id)
        try:
            if reference.kind == "sheets":
                return self.fetch_sheets(reference.id)
            return self.fetch_docs(reference.id)
        except (HttpError, httplib2.HttpLib2Error, GoogleAuthError, OSError) as exc:
            logger.error("Error fetching Google %s data: %s", reference.kind, exc)
            raise _fetch_error(exc, reference.kind) from exc

    def fetch_sheets(self, spreadsheet_id):
        sheets_svc = self.sheets.spreadsheets()
        meta = sheets_svc.get(
            spreadsheetId=spreadsheet_id,
            fields="sheets(properties(title))"
        ).execute()
        sheet_names = [sheet["properties"]["title"] for sheet in meta.get("sheets", [])]

        records = []
        for sheet_name in sheet_names:
            resp = sheets_svc.values().get(
                spreadsheetId=spreadsheet_id, range=_a1_range(sheet_name)
            ).execute()
            records.extend(rows_to_records(sheet_name, resp.get("values", [])))
        return records

    def fetch_docs(self, document_id):
        document = self.docs.documents().get(documentId=document_id).execute()
        content = paragraph_text(document.get("body", {}))
        return [DocumentText(title=document.get("title", ""), content=content.strip())]
