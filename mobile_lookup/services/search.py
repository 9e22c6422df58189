import re
from typing import List, Tuple

from ..config import Config
from ..errors import SearchValidationFailure
from ..logger import get_logger
from ..schemas import Record, SearchStats
from .utils import digits_only, phones_match

logger = get_logger(__name__)

_SEPARATORS = re.compile(r"[\n,;]")


def parse_query(text: str) -> List[str]:
    """Split a pasted block into digit-only tokens long enough to search for.

    Separators are newline, comma and semicolon; repeated numbers are kept.
    """
    tokens = (digits_only(part).strip() for part in _SEPARATORS.split(text or ""))
    return [t for t in tokens if len(t) >= Config.MIN_QUERY_DIGITS]


def match_records(dataset: List[Record], token: str) -> List[Record]:
    return [r for r in dataset if phones_match(token, digits_only(r.get("mobile", "")))]


def search_records(dataset: List[Record], text: str) -> Tuple[List[Record], SearchStats]:
    """Look up every number in ``text`` and return the unique matches with stats."""
    tokens = parse_query(text)
    if not tokens:
        raise SearchValidationFailure("Please enter valid mobile numbers (10 digits)")
    if not dataset:
        raise SearchValidationFailure("Please upload a spreadsheet before searching")

    matches = []
    found = set()
    for token in tokens:
        hits = match_records(dataset, token)
        if hits:
            matches.extend(hits)
            found.add(token)

    seen = set()
    results = []
    for record in matches:
        if record["id"] not in seen:
            seen.add(record["id"])
            results.append(record)

    stats = SearchStats(total=len(tokens), found=len(found), not_found=len(tokens) - len(found))
    logger.info("Searched %d numbers: %d found, %d records matched", stats.total, stats.found, len(results))
    return results, stats
