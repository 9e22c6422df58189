from .utils import cell_text, digits_only, phones_match
from .ingest import ingest_workbook, normalize_rows, plan_columns, resolve_field
from .search import parse_query, search_records
from .export import export_records, serialize_csv, serialize_fallback
from .state import (
    apply_upload,
    discard_dataset,
    apply_search,
    apply_clear,
    set_page,
    paginate,
    export_state,
    session,
)
