"""
Google Sheets Storage Implementation

DESIGN DECISION: Google Sheets is offered as a storage backend because:
1. Users can view and chart their ledger directly in Sheets
2. No database setup required
3. Built-in backup (Google's infrastructure)

TRADEOFFS:
- Every save rewrites the whole worksheet (fine for a personal ledger)
- No transactions (the ledger already treats persistence as best effort)

Each collection gets its own worksheet: a header row with the model's
field names, then one row per record with every value as text.
"""

from typing import Optional, Sequence

import gspread
from google.oauth2.service_account import Credentials
from pydantic import BaseModel
from tenacity import retry, stop_after_attempt, wait_exponential

from money_manager.config import GoogleSheetsSettings, get_settings
from money_manager.services.storage.interface import (
    COLLECTION_MODELS,
    Collection,
    ConnectionError,
    LedgerStorageInterface,
    StorageError,
    records_from_json,
)


def collection_columns(collection: Collection) -> list[str]:
    """Header row for a collection's worksheet."""
    return list(COLLECTION_MODELS[collection].model_fields.keys())


class GoogleSheetsClient:
    """
    Low-level Google Sheets client wrapper.

    Handles authentication and provides retry logic for API calls.
    """

    def __init__(self, settings: Optional[GoogleSheetsSettings] = None):
        self._client: Optional[gspread.Client] = None
        self._spreadsheet: Optional[gspread.Spreadsheet] = None
        self._settings = settings or get_settings().google_sheets

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    def connect(self) -> gspread.Client:
        """
        Establish connection to Google Sheets.

        Uses service account credentials for authentication.
        """
        if self._client is None:
            try:
                scopes = [
                    "https://www.googleapis.com/auth/spreadsheets",
                    "https://www.googleapis.com/auth/drive",
                ]
                credentials = Credentials.from_service_account_file(
                    self._settings.credentials_path,
                    scopes=scopes,
                )
                self._client = gspread.authorize(credentials)
            except FileNotFoundError:
                raise ConnectionError(
                    f"Google credentials file not found: {self._settings.credentials_path}"
                )
            except Exception as e:
                raise ConnectionError(f"Failed to connect to Google Sheets: {e}")

        return self._client

    def get_spreadsheet(self) -> gspread.Spreadsheet:
        """Get the configured spreadsheet."""
        if self._spreadsheet is None:
            client = self.connect()
            try:
                self._spreadsheet = client.open_by_key(
                    self._settings.spreadsheet_id
                )
            except gspread.SpreadsheetNotFound:
                raise ConnectionError(
                    f"Spreadsheet not found: {self._settings.spreadsheet_id}"
                )
        return self._spreadsheet

    def sheet_name(self, collection: Collection) -> str:
        return {
            Collection.TRANSACTIONS: self._settings.transactions_sheet_name,
            Collection.TRANSFERS: self._settings.transfers_sheet_name,
            Collection.ACCOUNTS: self._settings.accounts_sheet_name,
        }[collection]

    def find_sheet(self, collection: Collection) -> Optional[gspread.Worksheet]:
        """Get a collection's worksheet, or None if it was never created."""
        try:
            return self.get_spreadsheet().worksheet(self.sheet_name(collection))
        except gspread.WorksheetNotFound:
            return None

    def get_or_create_sheet(self, collection: Collection) -> gspread.Worksheet:
        """Get or create a collection's worksheet."""
        sheet = self.find_sheet(collection)
        if sheet is None:
            columns = collection_columns(collection)
            sheet = self.get_spreadsheet().add_worksheet(
                title=self.sheet_name(collection),
                rows=1000,
                cols=len(columns),
            )
        return sheet


class GoogleSheetsLedgerStorage(LedgerStorageInterface):
    """
    Google Sheets implementation of the ledger persistence port.

    Values are written RAW as strings and parsed back through the
    record models, so Decimal amounts keep their exact digits.
    """

    def __init__(self, client: Optional[GoogleSheetsClient] = None):
        self._client = client or GoogleSheetsClient()

    def _record_to_row(self, collection: Collection, record: BaseModel) -> list[str]:
        values = record.model_dump(mode="json")
        return ["" if values[column] is None else str(values[column])
                for column in collection_columns(collection)]

    def _row_to_dict(self, header: list[str], row: list[str]) -> dict:
        # Trailing empty cells are dropped by the Sheets API
        padded = row + [""] * (len(header) - len(row))
        return dict(zip(header, padded))

    def load(self, collection: Collection) -> Optional[list[BaseModel]]:
        """Read a collection's worksheet."""
        try:
            sheet = self._client.find_sheet(collection)
            if sheet is None:
                return None
            all_rows = sheet.get_all_values()
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to load {collection.value}: {e}")

        if not all_rows:
            return []

        header, rows = all_rows[0], all_rows[1:]
        data = [self._row_to_dict(header, row) for row in rows if row and row[0]]
        return records_from_json(collection, data)

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    def save(self, collection: Collection, records: Sequence[BaseModel]) -> bool:
        """Rewrite a collection's worksheet."""
        try:
            sheet = self._client.get_or_create_sheet(collection)
            values = [collection_columns(collection)]
            values.extend(self._record_to_row(collection, r) for r in records)
            sheet.clear()
            sheet.update(values=values, range_name="A1", value_input_option="RAW")
            return True
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to save {collection.value}: {e}")
