import io

from fastapi import APIRouter, UploadFile, File, HTTPException, Query
from fastapi.responses import StreamingResponse

from mobile_lookup.errors import IngestParseFailure, NothingToExport, SearchValidationFailure
from mobile_lookup.logger import get_logger
from mobile_lookup.schemas import ResultsPage, SearchRequest
from mobile_lookup.services.state import (
    session,
    apply_upload,
    discard_dataset,
    apply_search,
    apply_clear,
    set_page,
    paginate,
    export_state,
)

logger = get_logger(__name__)

router = APIRouter()


def _summary(state):
    return {
        "file_name": state.file_name,
        "rows": len(state.dataset),
        "results": len(state.results),
        "stats": state.stats.model_dump(by_alias=True),
    }


@router.post("/upload")
async def upload_spreadsheet(file: UploadFile = File(...)):
    """
    Load the first sheet of an .xlsx/.xls workbook, replacing any earlier upload.
    Columns that look like mobile/phone/number, name and status are normalized; the rest are kept.
    """
    contents = await file.read()
    file_name = file.filename or ""
    try:
        session.state = apply_upload(session.state, file_name, contents)
    except IngestParseFailure as e:
        session.state = discard_dataset(session.state, file_name)
        raise HTTPException(status_code=400, detail=str(e))

    dataset = session.state.dataset
    return {
        "message": "File uploaded.",
        "file_name": file_name,
        "rows": len(dataset),
        "columns": list(dataset[0].keys()) if dataset else [],
    }


@router.post("/search")
async def search_numbers(request: SearchRequest):
    try:
        session.state = apply_search(session.state, request.query)
    except SearchValidationFailure as e:
        logger.info("Search rejected: %s", e)
        raise HTTPException(status_code=400, detail=str(e))

    return {
        "stats": session.state.stats.model_dump(by_alias=True),
        "results": paginate(session.state).model_dump(),
    }


@router.get("/results", response_model=ResultsPage)
async def get_results(page: int = Query(1)):
    session.state = set_page(session.state, page)
    return paginate(session.state)


@router.post("/clear")
async def clear_search():
    session.state = apply_clear(session.state)
    return _summary(session.state)


@router.get("/status")
async def get_status():
    return _summary(session.state)


@router.get("/export")
async def export_results():
    try:
        artifact = export_state(session.state)
    except NothingToExport as e:
        raise HTTPException(status_code=400, detail=str(e))

    return StreamingResponse(
        io.BytesIO(artifact.content),
        media_type=artifact.media_type,
        headers={"Content-Disposition": f"attachment; filename={artifact.filename}"}
    )
