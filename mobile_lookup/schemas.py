from pydantic import BaseModel, Field
from typing import Any, Dict, List

# A record is loosely typed: id, mobile, name, status plus the sheet's other columns
Record = Dict[str, Any]


class SearchStats(BaseModel):
    total: int = 0
    found: int = 0
    not_found: int = Field(default=0, alias="notFound")

    class Config:
        populate_by_name = True


class AppState(BaseModel):
    file_name: str = ""
    dataset: List[Record] = Field(default_factory=list)
    query: str = ""
    results: List[Record] = Field(default_factory=list)
    stats: SearchStats = Field(default_factory=SearchStats)
    page: int = 1


class ExportArtifact(BaseModel):
    filename: str
    content: bytes
    media_type: str = "text/csv"


class SearchRequest(BaseModel):
    query: str = ""

    class Config:
        json_schema_extra = {
            "example": {"query": "9876543210\n+91 87654-32109; 1112223333"}
        }


class ResultsPage(BaseModel):
    page: int
    total_pages: int
    items_per_page: int
    total_records: int
    start: int
    end: int
    columns: List[str] = Field(default_factory=list)
    rows: List[Record] = Field(default_factory=list)
