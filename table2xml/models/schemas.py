from pydantic import BaseModel, Field, field_validator
from typing import Any, List, Optional, Union
from datetime import datetime

CellValue = Optional[Union[bool, int, float, str]]


class GridToXmlRequest(BaseModel):
    """Request model for grid to XML conversion."""
    outer_tag: str = Field(..., description="Root element name")
    inner_tag: str = Field(..., description="Element name wrapping each data row")
    rows: List[List[CellValue]] = Field(
        ...,
        description="Cell grid; the first row holds the column headers"
    )

    @field_validator('outer_tag', 'inner_tag')
    @classmethod
    def validate_tag(cls, v):
        if not v or not v.strip():
            raise ValueError('Tag names must not be empty')
        return v

    @field_validator('rows')
    @classmethod
    def validate_rectangular(cls, v):
        if v and any(len(row) != len(v[0]) for row in v):
            raise ValueError('All rows must have the same number of cells')
        return v


class XmlToTableRequest(BaseModel):
    xml: Any = Field(..., description="XML document holding Item records")


class XmlResponse(BaseModel):
    status: str = Field(..., description="Conversion status")
    xml: str = Field(..., description="Generated XML document")
    records: int = Field(..., description="Number of data rows serialized")
    columns: List[str] = Field(default_factory=list, description="Column headers")
    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Timestamp of conversion"
    )


class TableResponse(BaseModel):
    status: str = Field(..., description="Conversion status")
    message: str = Field(..., description="Status message")
    rows: List[List[Optional[str]]] = Field(
        ...,
        description="Header row followed by one row per Item"
    )


class ErrorResponse(BaseModel):
    status: str = Field(default="error", description="Error status")
    message: str = Field(..., description="Error message")
    error_code: str = Field(..., description="Error code")
    timestamp: datetime = Field(
        default_factory=datetime.utcnow,
        description="Timestamp of error"
    )
    details: Optional[str] = Field(
        default=None,
        description="Detailed error information (only shown when SHOW_ERROR_DETAILS is enabled)"
    )


class HealthResponse(BaseModel):
    status: str = Field(..., description="Service health status")
    version: str = Field(..., description="API version")
    timestamp: datetime = Field(
        default_factory=datetime.utcnow,
        description="Health check timestamp"
    )
