class MobileLookupError(Exception):
    """Base class for failures shown to the user as a notice."""


class IngestParseFailure(MobileLookupError):
    """The uploaded spreadsheet could not be read."""


class SearchValidationFailure(MobileLookupError):
    """The search could not run (no valid numbers, or nothing loaded)."""


class NothingToExport(MobileLookupError):
    """Export was requested with an empty result set."""


class ExportSerializationFailure(MobileLookupError):
    """Both the CSV export and its four-column fallback failed."""
