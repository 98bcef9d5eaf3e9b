"""Exceptions raised while building or loading preference data."""


class PreferenceDataError(Exception):
    """Base class for all preference data errors."""


class SourceUnavailableError(PreferenceDataError, OSError):
    """The input source could not be opened."""


class SourceReadError(PreferenceDataError, OSError):
    """The input source failed while being read."""


class PreferenceFormatError(PreferenceDataError, ValueError):
    """A data line appeared before any section header."""

    def __init__(self, line: str):
        super().__init__(f"Data line outside of any section: {line!r}")
        self.line = line


class PreferenceParseError(PreferenceDataError, ValueError):
    """A line or token could not be interpreted in its expected shape."""

    def __init__(self, message: str, line: str | None = None):
        super().__init__(message)
        self.line = line


class MatrixStateError(PreferenceDataError, RuntimeError):
    """The preference matrix was used before creation or created twice."""


class RosterLockedError(PreferenceDataError, RuntimeError):
    """A student or project was added after the matrix was created."""
