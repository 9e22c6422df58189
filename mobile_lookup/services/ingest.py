import io
from typing import Any, Callable, Dict, List, NamedTuple, Optional

import pandas as pd

from ..config import Config
from ..errors import IngestParseFailure
from ..logger import get_logger
from ..schemas import Record
from .utils import cell_text, digits_only

logger = get_logger(__name__)

RESERVED_FIELDS = ("id", "mobile", "name", "status")
SOURCE_SUFFIX = " (source)"  # appended to passthrough headers that collide with RESERVED_FIELDS


def _contains_any(*needles: str) -> Callable[[str], bool]:
    return lambda key: any(n in key for n in needles)


def _trimmed(value) -> str:
    return cell_text(value).strip()


# Order is precedence: "Status Name" is a name column, "Phone Number Name" a mobile one.
FIELD_RULES = [
    (_contains_any("mobile", "phone", "number"), "mobile", digits_only),
    (_contains_any("name"), "name", _trimmed),
    (_contains_any("status"), "status", _trimmed),
]


class ColumnPlan(NamedTuple):
    header: Any  # as it appears in the parsed sheet
    key: str  # record key the cell lands in
    convert: Optional[Callable[[Any], str]]  # None keeps the value unmodified


def resolve_field(header) -> Optional[str]:
    """Return the normalized field a header maps to, or None for a passthrough column."""
    key = str(header).strip().lower()
    for matches, target, _ in FIELD_RULES:
        if matches(key):
            return target
    return None


def source_header(key: str) -> str:
    """Original header text for a record key ("id (source)" -> "id")."""
    if key.endswith(SOURCE_SUFFIX) and key[:-len(SOURCE_SUFFIX)] in RESERVED_FIELDS:
        return key[:-len(SOURCE_SUFFIX)]
    return key


def plan_columns(headers) -> List[ColumnPlan]:
    """Decide once per header where its cells go.

    The first header matching a rule claims that field; later headers matching
    the same rule are kept as ordinary columns under their own names.
    """
    converters = {target: convert for _, target, convert in FIELD_RULES}
    claimed = set()
    plan = []
    for header in headers:
        original = str(header).strip()
        target = resolve_field(original)
        if target and target not in claimed:
            claimed.add(target)
            plan.append(ColumnPlan(header, target, converters[target]))
            continue
        key = original + SOURCE_SUFFIX if original in RESERVED_FIELDS else original
        plan.append(ColumnPlan(header, key, None))
    return plan


def normalize_rows(rows: List[Dict[Any, Any]], headers=None) -> List[Record]:
    """Turn parsed sheet rows into records with ids assigned by row position."""
    if headers is None:
        headers = list(rows[0].keys()) if rows else []
    plan = plan_columns(headers)

    records = []
    for index, row in enumerate(rows):
        record = {"id": index + 1, "mobile": "", "name": "", "status": ""}
        for column in plan:
            value = row.get(column.header, "")
            if value is None:
                value = ""
            record[column.key] = column.convert(value) if column.convert else value
        records.append(record)
    return records


def read_first_sheet(contents: bytes, file_name: str):
    """Read the first sheet of a workbook into (headers, rows) with blanks as ""."""
    suffix = file_name.lower().rsplit(".", 1)[-1] if "." in file_name else ""
    if f".{suffix}" not in Config.ALLOWED_EXTENSIONS:
        raise ValueError(f"Unsupported file type: {file_name!r} (expected .xlsx or .xls)")

    # pandas picks openpyxl or xlrd from the content, so an .xlsx saved as .xls still reads
    df = pd.read_excel(io.BytesIO(contents), sheet_name=0, dtype=object)
    df = df.where(pd.notna(df), "")
    return list(df.columns), df.to_dict(orient="records")


def ingest_workbook(contents: bytes, file_name: str) -> List[Record]:
    try:
        headers, rows = read_first_sheet(contents, file_name)
        records = normalize_rows(rows, headers)
    except Exception as e:
        logger.error("Failed to read %s: %s", file_name, e)
        raise IngestParseFailure("Error reading file. Please ensure it's a valid Excel file.") from e

    logger.info("Loaded %d rows from %s", len(records), file_name)
    return records
