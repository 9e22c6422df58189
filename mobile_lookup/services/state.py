import math
from datetime import datetime
from typing import Optional

from ..config import Config
from ..schemas import AppState, ExportArtifact, ResultsPage, SearchStats
from .export import export_records
from .ingest import RESERVED_FIELDS, ingest_workbook
from .search import search_records


def apply_upload(state: AppState, file_name: str, contents: bytes) -> AppState:
    """New dataset from an uploaded workbook; results and stats start over.

    Raises IngestParseFailure; the caller should then move to ``discard_dataset``.
    """
    dataset = ingest_workbook(contents, file_name)
    return state.model_copy(update={
        "file_name": file_name,
        "dataset": dataset,
        "results": [],
        "stats": SearchStats(),
        "page": 1,
    })


def discard_dataset(state: AppState, file_name: str) -> AppState:
    return state.model_copy(update={
        "file_name": file_name,
        "dataset": [],
        "results": [],
        "stats": SearchStats(),
        "page": 1,
    })


def apply_search(state: AppState, query: str) -> AppState:
    # SearchValidationFailure leaves the caller holding the previous state
    results, stats = search_records(state.dataset, query)
    return state.model_copy(update={"query": query, "results": results, "stats": stats, "page": 1})


def apply_clear(state: AppState) -> AppState:
    return state.model_copy(update={"query": "", "results": [], "stats": SearchStats(), "page": 1})


def total_pages(state: AppState) -> int:
    return math.ceil(len(state.results) / Config.ITEMS_PER_PAGE)


def set_page(state: AppState, page: int) -> AppState:
    page = min(max(1, page), max(1, total_pages(state)))
    return state.model_copy(update={"page": page})


def paginate(state: AppState) -> ResultsPage:
    per_page = Config.ITEMS_PER_PAGE
    start = (state.page - 1) * per_page
    rows = state.results[start:start + per_page]

    columns = []
    if rows:
        columns = ["mobile", "name", "status"] + [k for k in rows[0] if k not in RESERVED_FIELDS]

    return ResultsPage(
        page=state.page,
        total_pages=total_pages(state),
        items_per_page=per_page,
        total_records=len(state.results),
        start=start + 1 if rows else 0,
        end=start + len(rows),
        columns=columns,
        rows=rows,
    )


def export_state(state: AppState, now: Optional[datetime] = None) -> ExportArtifact:
    return export_records(state.results, now=now)


class SessionStore:
    """The one in-memory session behind the API."""

    def __init__(self):
        self.state = AppState()

    def reset(self):
        self.state = AppState()


session = SessionStore()
