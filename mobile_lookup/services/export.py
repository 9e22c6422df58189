from datetime import datetime, timezone
from typing import List, Optional

from ..errors import ExportSerializationFailure, NothingToExport
from ..logger import get_logger
from ..schemas import ExportArtifact, Record
from .ingest import RESERVED_FIELDS, source_header

logger = get_logger(__name__)

FIXED_COLUMNS = [("Mobile Number", "mobile"), ("Name", "name"), ("Status", "status")]
FALLBACK_HEADER = "Mobile Number,Name,Status,Circle/State"


def quote_field(value) -> str:
    text = str(value or "").replace('"', '""')
    return f'"{text}"'


def export_columns(records: List[Record]):
    """(title, key) pairs: the fixed three, then the first record's other columns."""
    extra = [(source_header(k), k) for k in records[0] if k not in RESERVED_FIELDS]
    return FIXED_COLUMNS + extra


def serialize_csv(records: List[Record]) -> str:
    columns = export_columns(records)
    lines = [",".join(title for title, _ in columns)]
    for record in records:
        lines.append(",".join(quote_field(record.get(key)) for _, key in columns))
    return "\n".join(lines)


def serialize_fallback(records: List[Record]) -> str:
    """Plain four-column dump, no quoting."""
    rows = [
        f"{r.get('mobile') or ''},{r.get('name') or ''},{r.get('status') or ''},{r.get('circle') or ''}"
        for r in records
    ]
    return FALLBACK_HEADER + "\n" + "\n".join(rows)


def export_records(records: List[Record], now: Optional[datetime] = None) -> ExportArtifact:
    """Serialize matched records to a downloadable CSV.

    Falls back to the fixed four-column format if the full export fails; a
    failure there is raised as ExportSerializationFailure.
    """
    if not records:
        raise NothingToExport("No data to export")

    now = now or datetime.now(timezone.utc)
    try:
        artifact = ExportArtifact(
            filename=f"filtered_mobile_data_{now.strftime('%Y-%m-%d')}.csv",
            content=serialize_csv(records).encode("utf-8"),
            media_type="text/csv",
        )
    except Exception as e:
        logger.warning("CSV export failed (%s), using the four-column fallback", e)
        try:
            artifact = ExportArtifact(
                filename=f"mobile_data_{int(now.timestamp() * 1000)}.csv",
                content=serialize_fallback(records).encode("utf-8"),
                media_type="text/plain",
            )
        except Exception as fallback_error:
            raise ExportSerializationFailure(f"Export failed: {fallback_error}") from fallback_error

    logger.info("Exported %d records to %s", len(records), artifact.filename)
    return artifact
