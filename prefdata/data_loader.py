"""Load student-project preference data from the three-section text format.

The format is line oriented::

    Students:
    <email>, <name>, <student number>, <session>
    Projects:
    <name>[, <description>]
    Preferences:
    <v0>, <v1>, ..., <vN-1>

Section headers must match a whole (trimmed) line exactly. The matrix is
allocated when ``Preferences:`` is read, so both rosters must come first.
"""

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import TextIO, assert_never

from prefdata.errors import (
    MatrixStateError,
    PreferenceFormatError,
    PreferenceParseError,
    RosterLockedError,
    SourceReadError,
    SourceUnavailableError,
)
from prefdata.preference_data import PreferenceData
from prefdata.types import LoadError, LoadErrorKind, LoadResult, ReadState

log = logging.getLogger(__name__)

SECTION_HEADERS = {
    state.value: state for state in ReadState if state is not ReadState.UNKNOWN
}


class SectionLoader:
    """
    Feeds lines into a PreferenceData according to the current section.

    Attributes:
        data: Store being populated
        errors: Failures recorded so far
        state: Section currently being read
        row: Next preference matrix row to write
        stop_on_error: Stop accepting lines after the first failure
    """

    def __init__(self, stop_on_error: bool = False):
        self.data = PreferenceData()
        self.errors: list[LoadError] = []
        self.state = ReadState.UNKNOWN
        self.row = 0
        self.stop_on_error = stop_on_error

    def feed(self, line_number: int, line: str) -> bool:
        """Process one line. Returns False when loading should stop."""
        line = line.rstrip("\r\n")
        header = SECTION_HEADERS.get(line.strip())
        try:
            if header is not None:
                self._enter(header)
            else:
                self._dispatch(line)
        except PreferenceFormatError as e:
            self.record(LoadErrorKind.FORMAT, e, line_number, line)
        except PreferenceParseError as e:
            self.record(LoadErrorKind.PARSE, e, line_number, line)
        except IndexError as e:
            self.record(LoadErrorKind.INDEX, e, line_number, line)
        except (MatrixStateError, RosterLockedError) as e:
            self.record(LoadErrorKind.STATE, e, line_number, line)
        else:
            return True
        return not self.stop_on_error

    def record(
        self,
        kind: LoadErrorKind,
        exc: Exception,
        line_number: int | None = None,
        line: str | None = None,
    ) -> None:
        error = LoadError(
            kind=kind,
            message=str(exc),
            line_number=line_number,
            line=line,
            state=self.state if line_number is not None else None,
            exception=exc,
        )
        log.error(str(error))
        self.errors.append(error)

    def result(self) -> LoadResult:
        return LoadResult(data=self.data, errors=self.errors)

    def _enter(self, state: ReadState) -> None:
        log.debug(f"... reading {state.name}")
        self.state = state
        if state is ReadState.PREFERENCE_MODE:
            self.data.create_preference_matrix()

    def _dispatch(self, line: str) -> None:
        match self.state:
            case ReadState.STUDENT_MODE:
                self.data.add_student(line)
            case ReadState.PROJECT_MODE:
                self.data.add_project(line)
            case ReadState.PREFERENCE_MODE:
                try:
                    self._write_row(line)
                finally:
                    # Keep later rows aligned with their students
                    self.row += 1
            case ReadState.UNKNOWN:
                raise PreferenceFormatError(line)
            case _:
                assert_never(self.state)

    def _write_row(self, line: str) -> None:
        values = line.split(",")
        expected = self.data.num_projects()
        if len(values) < expected:
            raise PreferenceParseError(
                f"Preference row {self.row} has {len(values)} values, "
                f"expected {expected}",
                line=line,
            )
        self.data.set_preference_row(self.row, values)


def read_lines(lines: Iterable[str], *, stop_on_error: bool = False) -> LoadResult:
    """Load preference data from an iterable of text lines.

    Args:
        lines: Lines of the three-section format, with or without newlines.
        stop_on_error: Stop at the first failure instead of recording it and
            moving on to the next line.

    Returns:
        LoadResult holding the (possibly partial) store and recorded errors.
    """
    loader = SectionLoader(stop_on_error=stop_on_error)
    iterator = iter(lines)
    line_number = 0
    while True:
        try:
            line = next(iterator)
        except StopIteration:
            break
        except (OSError, UnicodeDecodeError) as e:
            loader.record(
                LoadErrorKind.SOURCE_READ_FAILURE,
                SourceReadError(
                    f"Error reading from source after line {line_number}: {e}"
                ),
            )
            break
        line_number += 1
        if not loader.feed(line_number, line):
            break

    log.info(f"Number of students: {loader.data.num_students()}")
    log.info(f"Number of projects: {loader.data.num_projects()}")
    return loader.result()


def read_data(
    source: Path | str | TextIO,
    *,
    encoding: str = "utf-8",
    stop_on_error: bool = False,
) -> LoadResult:
    """Load preference data from a file path or an open text handle.

    A path is opened here and closed again on every exit path; a handle
    passed in by the caller is left open. Failures never propagate: they
    are returned in ``LoadResult.errors`` next to whatever was loaded.

    Args:
        source: Path to the preference file, or an open text stream.
        encoding: Text encoding used when opening a path.
        stop_on_error: Stop at the first failure (see ``read_lines``).
    """
    if not isinstance(source, (str, Path)):
        return read_lines(source, stop_on_error=stop_on_error)

    filepath = Path(source)
    log.info(f"Reading preference file: {filepath}")
    try:
        f = open(filepath, encoding=encoding)
    except (OSError, ValueError, LookupError) as e:
        # ValueError: NUL byte in the path; LookupError: unknown encoding
        reason = getattr(e, "strerror", None) or e
        loader = SectionLoader()
        loader.record(
            LoadErrorKind.SOURCE_UNAVAILABLE,
            SourceUnavailableError(
                f"Error opening preferences file {filepath}: {reason}"
            ),
        )
        return loader.result()

    with f:
        return read_lines(f, stop_on_error=stop_on_error)
