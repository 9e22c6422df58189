import math
import re

_NON_DIGITS = re.compile(r"[^0-9]")


def cell_text(val) -> str:
    """Render a spreadsheet cell as text; blanks become "" and 9876543210.0 becomes "9876543210"."""
    if val is None:
        return ""
    if isinstance(val, float):
        if math.isnan(val):
            return ""
        if val.is_integer():
            return str(int(val))
    return str(val)


def digits_only(value) -> str:
    """Strip everything but 0-9 from a cell or a typed search token."""
    return _NON_DIGITS.sub("", cell_text(value))


def phones_match(token: str, mobile: str) -> bool:
    """Check whether a search token and a stored mobile contain one another.

    Exact substring in either direction, so a number stored with a country code
    still matches the local number and the other way round. An empty stored
    mobile is contained in every token and therefore matches.
    """
    return token in mobile or mobile in token
