"""
Google Sheets Storage Implementation

DESIGN DECISION: Google Sheets is the storage backend because:
1. The owner can view and fix their data directly in Sheets
2. No database setup required
3. Built-in backup (Google's infrastructure)
4. Easy to export/migrate later

TRADEOFFS:
- Not suitable for high-volume data (we're fine for personal use)
- No transactions and no locking (single writer assumed)
- Limited query capabilities (we filter in Python)

Reads and the connection step are retried with backoff. Writes are not:
a retried append that actually landed would duplicate a ledger row.
"""

from typing import Any, Optional

import gspread
from google.oauth2.service_account import Credentials
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from pocket_ledger.config import GoogleSheetsSettings, get_settings
from pocket_ledger.errors import StorageError
from pocket_ledger.services.storage.interface import TabularStore, Table


SCOPES = [
    "https://www.googleapis.com/auth/spreadsheets",
    "https://www.googleapis.com/auth/drive",
]


class SheetsConnectionError(StorageError):
    """Could not connect to Google Sheets."""
    pass


class GoogleSheetsClient:
    """
    Low-level Google Sheets client wrapper.

    Handles authentication and caches the opened spreadsheet.
    """

    def __init__(self, settings: Optional[GoogleSheetsSettings] = None):
        self._client: Optional[gspread.Client] = None
        self._spreadsheet: Optional[gspread.Spreadsheet] = None
        self._settings = settings or get_settings().google_sheets

    @property
    def settings(self) -> GoogleSheetsSettings:
        return self._settings

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        retry=retry_if_exception_type(SheetsConnectionError),
        reraise=True,
    )
    def connect(self) -> gspread.Client:
        """
        Establish connection to Google Sheets.

        Uses service account credentials for authentication.
        """
        if self._client is None:
            try:
                credentials = Credentials.from_service_account_file(
                    self._settings.credentials_path,
                    scopes=SCOPES,
                )
                self._client = gspread.authorize(credentials)
            except FileNotFoundError:
                raise StorageError(
                    f"Google credentials file not found: {self._settings.credentials_path}"
                )
            except Exception as e:
                raise SheetsConnectionError(f"Failed to connect to Google Sheets: {e}")

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
                raise StorageError(
                    f"Spreadsheet not found: {self._settings.spreadsheet_id}"
                )
        return self._spreadsheet


class GoogleSheetsTable(Table):
    """
    One worksheet exposed as a Table.

    gspread indices are 1-based; ours are 0-based with the header at 0,
    so every index is shifted by one on the way out.
    """

    def __init__(self, worksheet: gspread.Worksheet):
        self._worksheet = worksheet

    @property
    def name(self) -> str:
        return self._worksheet.title

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        retry=retry_if_exception_type(gspread.exceptions.APIError),
        reraise=True,
    )
    def _get_all_values(self) -> list[list[str]]:
        return self._worksheet.get_all_values()

    def read_all(self) -> list[list[str]]:
        try:
            return self._get_all_values()
        except gspread.exceptions.GSpreadException as e:
            raise StorageError(f"Failed to read sheet '{self.name}': {e}")

    def append_row(self, row: list[Any]) -> None:
        try:
            self._worksheet.append_row(
                ["" if v is None else str(v) for v in row],
                value_input_option="RAW",
            )
        except gspread.exceptions.GSpreadException as e:
            raise StorageError(f"Failed to append to sheet '{self.name}': {e}")

    def delete_row(self, index: int) -> None:
        try:
            self._worksheet.delete_rows(index + 1)
        except gspread.exceptions.GSpreadException as e:
            raise StorageError(f"Failed to delete row in sheet '{self.name}': {e}")

    def set_cell(self, row_index: int, col_index: int, value: Any) -> None:
        try:
            self._worksheet.update_cell(row_index + 1, col_index + 1, str(value))
        except gspread.exceptions.GSpreadException as e:
            raise StorageError(f"Failed to update sheet '{self.name}': {e}")


class GoogleSheetsStore(TabularStore):
    """
    Google Sheets implementation of the tabular store.

    Each table is a worksheet in the configured spreadsheet.
    """

    def __init__(self, client: Optional[GoogleSheetsClient] = None):
        self._client = client or GoogleSheetsClient()

    def get_table(self, name: str) -> Optional[Table]:
        spreadsheet = self._client.get_spreadsheet()
        try:
            worksheet = spreadsheet.worksheet(name)
        except gspread.WorksheetNotFound:
            return None
        except gspread.exceptions.GSpreadException as e:
            raise StorageError(f"Failed to open sheet '{name}': {e}")
        return GoogleSheetsTable(worksheet)

    def create_table(self, name: str, header: list[str]) -> Table:
        spreadsheet = self._client.get_spreadsheet()
        try:
            worksheet = spreadsheet.add_worksheet(
                title=name,
                rows=1000,
                cols=len(header),
            )
            worksheet.append_row(header, value_input_option="RAW")
        except gspread.exceptions.GSpreadException as e:
            raise StorageError(f"Failed to create sheet '{name}': {e}")
        return GoogleSheetsTable(worksheet)
