"""Errors raised while turning jobs.json and stages.json into definitions."""


class DataError(Exception):
    """Common base so callers can catch any definition problem at once."""


class DataLoadError(DataError):
    """A definition file is absent, unreadable or not JSON."""


class DataValidationError(DataError):
    """A job or stage entry has a missing, unknown or mistyped field."""


class DataReferenceError(DataError):
    """A stage names a job id that jobs.json does not define."""
