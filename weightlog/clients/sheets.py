"""
Google Sheets API access for the weight sheet (columns A: date, B: weight).
Uses a service account; the client is built lazily and reused.
"""
import logging
from typing import Optional

from google.oauth2 import service_account
from googleapiclient.discovery import build

from weightlog.core.config import settings

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]


class SheetStore:
    def __init__(self, spreadsheet_id: str, sheet_name: str, service=None):
        self.spreadsheet_id = spreadsheet_id
        self.sheet_name = sheet_name
        self._service = service

    @classmethod
    def from_settings(cls) -> "SheetStore":
        return cls(settings.GOOGLE_SHEET_ID, settings.SHEET_NAME)

    def _values(self):
        if self._service is None:
            info = {
                "type": "service_account",
                "client_email": settings.GOOGLE_CLIENT_EMAIL,
                # Dashboards store the PEM with literal "\n"
                "private_key": settings.GOOGLE_PRIVATE_KEY.replace("\\n", "\n"),
                "token_uri": "https://oauth2.googleapis.com/token",
            }
            creds = service_account.Credentials.from_service_account_info(info, scopes=SCOPES)
            self._service = build("sheets", "v4", credentials=creds, cache_discovery=False)
            logger.info("Google Sheets client initialised for sheet '%s'.", self.sheet_name)
        return self._service.spreadsheets().values()

    def list_weights(self) -> list[dict]:
        response = self._values().get(
            spreadsheetId=self.spreadsheet_id,
            range=f"{self.sheet_name}!A2:B",
        ).execute()
        rows = response.get("values", [])
        return [
            {"date": _cell(row, 0), "weight": _cell(row, 1)}
            for row in rows
        ]

    def append_weight(self, date: str, weight) -> None:
        self._values().append(
            spreadsheetId=self.spreadsheet_id,
            range=f"{self.sheet_name}!A:B",
            valueInputOption="USER_ENTERED",
            insertDataOption="INSERT_ROWS",
            body={"values": [[date, weight]]},
        ).execute()
        logger.info("Appended weight row: %s %s", date, weight)


def _cell(row: list, index: int) -> Optional[str]:
    return row[index] if len(row) > index else None


_store: Optional[SheetStore] = None


def get_sheet_store() -> SheetStore:
    """FastAPI dependency – module-level singleton."""
    global _store
    if _store is None:
        _store = SheetStore.from_settings()
    return _store
