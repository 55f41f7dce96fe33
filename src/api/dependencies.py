from fastapi import HTTPException

from adapter.mongodb.connection import get_mongodb_client, DATABASE_NAME
from adapter.mongodb.location_repository import MongoLocationRepository
from adapter.mongodb.user_repository import MongoUserRepository
from adapter.spreadsheet.openpyxl_reader import OpenpyxlSpreadsheetReader
from port.location_repository import LocationRepository
from port.spreadsheet import SpreadsheetReader
from port.user_repository import UserRepository


def _get_db():
    """Get MongoDB database, raising 503 if unavailable."""
    client = get_mongodb_client()
    if client is None:
        raise HTTPException(status_code=503, detail="Database unavailable")
    return client[DATABASE_NAME]


def get_user_repo() -> UserRepository:
    return MongoUserRepository(_get_db())


def get_location_repo() -> LocationRepository:
    return MongoLocationRepository(_get_db())


def get_spreadsheet_reader() -> SpreadsheetReader:
    return OpenpyxlSpreadsheetReader()
