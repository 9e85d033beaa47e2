"""Report schemas."""

from enum import Enum
from typing import List

from pydantic import BaseModel


class ExportStrategy(str, Enum):
    """How tables are drawn into the PDF."""

    STRUCTURED = "structured"
    RASTERIZED = "rasterized"


class TablePreview(BaseModel):
    """First columns and rows of a table."""

    title: str
    columns: List[str]
    rows: List[List[str]]
