"""Forecast grid spreadsheet routes.

Endpoints:
- GET /excel/deep1: Level-1 regions
- GET /excel/deep2: Level-2 regions of a level-1 region
- POST /excel/upload: Replace the location table from an .xlsx upload
"""

import logging

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status

from api.dependencies import get_location_repo, get_spreadsheet_reader
from api.models import UploadResponse
from domain.model.errors import BadUploadError
from port.location_repository import LocationRepository
from port.spreadsheet import SpreadsheetReader
from services import excel_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/excel", tags=["excel"])


@router.get("/deep1", response_model=list[str])
async def get_deep1(repo: LocationRepository = Depends(get_location_repo)):
    return excel_service.list_deep1(repo)


@router.get("/deep2", response_model=list[str | None])
async def get_deep2(
    location: str = Query(...),
    repo: LocationRepository = Depends(get_location_repo),
):
    return excel_service.list_deep2(repo, location)


@router.post("/upload", response_model=UploadResponse)
async def upload_excel(
    excel: UploadFile = File(...),
    repo: LocationRepository = Depends(get_location_repo),
    reader: SpreadsheetReader = Depends(get_spreadsheet_reader),
):
    """Upload a forecast grid workbook.

    Raises:
        HTTPException: 400 if the file cannot be parsed
    """
    data = await excel.read()
    try:
        rows = excel_service.ingest(repo, reader, data)
    except BadUploadError as e:
        logger.warning("Rejected spreadsheet upload", extra={"uploadName": excel.filename, "error": str(e)})
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    logger.info("Spreadsheet uploaded", extra={"uploadName": excel.filename, "rows": rows})
    return UploadResponse(message="Spreadsheet uploaded successfully", rows=rows)
