"""
Upstream clients: spreadsheet web app and Google Sheets API.

Public API:
    from weightlog.clients import GasClient, SheetStore
"""
from weightlog.clients.gas import GasClient, GasError, GasNotConfigured, get_gas_client
from weightlog.clients.sheets import SheetStore, get_sheet_store

__all__ = [
    "GasClient",
    "GasError",
    "GasNotConfigured",
    "SheetStore",
    "get_gas_client",
    "get_sheet_store",
]
