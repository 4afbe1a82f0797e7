from fastapi import APIRouter, Form, UploadFile, File, HTTPException
from fastapi.responses import Response
from typing import Optional
from datetime import datetime
from pathlib import Path
import tempfile
import time
import logging

from ..models.schemas import (
    GridToXmlRequest,
    HealthResponse,
    TableResponse,
    XmlResponse,
    XmlToTableRequest,
)
from ..functions import TABLE_WRITTEN_MESSAGE
from ..host import CellRange, Workbook
from ..utils.converter import converter
from ..utils.audit import audit_logger
from ..config import config

logger = logging.getLogger(__name__)

router = APIRouter(prefix=config.API_V1_PREFIX)


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        version=config.VERSION,
        timestamp=datetime.utcnow()
    )


@router.post("/convert/xml", response_model=XmlResponse)
async def convert_grid_to_xml(request: GridToXmlRequest):
    """Convert a JSON grid (header row first) to XML."""
    start_time = time.time()
    xml_text = converter.grid_to_xml(request.outer_tag, request.inner_tag, request.rows)
    headers = converter.extract_headers(request.rows)

    audit_logger.log_conversion_event(
        user_id="api",
        action="convert_to_xml",
        conversion_time=(time.time() - start_time) * 1000,
        details={"rows_processed": len(request.rows) - 1, "columns": headers}
    )
    return XmlResponse(
        status="success",
        xml=xml_text,
        records=len(request.rows) - 1,
        columns=headers
    )


@router.post("/convert/table", response_model=TableResponse)
async def convert_xml_to_table(request: XmlToTableRequest):
    """Convert an XML document of Item records to a header row plus data rows."""
    start_time = time.time()
    workbook = Workbook()
    result = converter.xml_to_table(request.xml, workbook, origin_row=0, origin_col=0)

    audit_logger.log_conversion_event(
        user_id="api",
        action="convert_xml_to_table",
        conversion_time=(time.time() - start_time) * 1000,
        details={"records": result.records, "columns": result.headers}
    )
    rows = workbook.to_rows(CellRange(0, 0, result.records, result.columns - 1)) if result.columns else [[]]
    return TableResponse(
        status="success",
        message=TABLE_WRITTEN_MESSAGE,
        rows=rows
    )


@router.post("/convert/upload")
async def convert_upload(
    file: UploadFile = File(...),
    outer_tag: str = Form(...),
    inner_tag: str = Form(...),
    sheet_name: Optional[str] = Form(None),
    cell_range: Optional[str] = Form(None)
):
    """Convert an uploaded spreadsheet (or a range of it) to XML."""
    logger.info(f"File upload attempt: filename={file.filename}, content_type={file.content_type}")
    start_time = time.time()

    if not config.validate_file_extension(file.filename or ""):
        raise HTTPException(
            status_code=400,
            detail=f"Invalid file type. Allowed types: {', '.join(sorted(config.ALLOWED_EXTENSIONS))}"
        )

    content = await file.read()
    if len(content) > config.max_upload_bytes():
        raise HTTPException(
            status_code=413,
            detail=f"File size exceeds {config.MAX_UPLOAD_SIZE_MB}MB limit"
        )

    suffix = Path(file.filename).suffix.lower()
    with tempfile.TemporaryDirectory() as temp_dir:
        temp_path = Path(temp_dir) / f"upload{suffix}"
        temp_path.write_bytes(content)
        try:
            workbook = Workbook.from_file(temp_path, sheet_name=sheet_name)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))

    handle = CellRange.from_a1(cell_range) if cell_range else workbook.used_range()
    grid = workbook.read_grid(handle)
    xml_text = converter.grid_to_xml(outer_tag, inner_tag, grid)

    audit_logger.log_conversion_event(
        user_id="api",
        action="convert_upload",
        conversion_time=(time.time() - start_time) * 1000,
        details={
            "file_name": file.filename,
            "file_size": len(content),
            "range": handle.to_a1(),
            "rows_processed": len(grid) - 1
        }
    )
    logger.info(f"File conversion success: filename={file.filename}")
    return Response(content=xml_text, media_type="application/xml")
