"""Type definitions for student-project preference data."""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from prefdata.errors import PreferenceParseError

if TYPE_CHECKING:
    from prefdata.preference_data import PreferenceData

STUDENT_FIELDS = 4


def _split_fields(line: str) -> list[str]:
    """Split a data line on commas and trim each field. No quoting or escaping."""
    return [part.strip() for part in line.split(",")]


@dataclass(frozen=True)
class Student:
    """A student on the roster."""

    email: str
    name: str
    student_number: str
    session: str

    @classmethod
    def create(
        cls, email: str, name: str, student_number: str, session: str
    ) -> "Student":
        return cls(email, name, student_number, session)

    @classmethod
    def from_line(cls, line: str) -> "Student":
        """Build a student from ``email, name, student_number, session``.

        Fields past the fourth are ignored.

        Raises:
            PreferenceParseError: If the line has fewer than four fields.
        """
        parts = _split_fields(line)
        if len(parts) < STUDENT_FIELDS:
            raise PreferenceParseError(
                f"Student line needs {STUDENT_FIELDS} comma-separated fields, "
                f"got {len(parts)}",
                line=line,
            )
        email, name, student_number, session = parts[:STUDENT_FIELDS]
        return cls(email, name, student_number, session)

    def to_line(self) -> str:
        return ", ".join([self.email, self.name, self.student_number, self.session])

    def __str__(self) -> str:
        return (
            f"Student [email={self.email}, name={self.name}, "
            f"studentNumber={self.student_number}, session={self.session}]"
        )


@dataclass(frozen=True)
class Project:
    """A project on the roster, identified by its name."""

    name: str
    description: str = ""

    @classmethod
    def create(cls, name: str, description: str = "") -> "Project":
        return cls(name, description)

    @classmethod
    def from_line(cls, line: str) -> "Project":
        """Build a project from ``name[, description]``.

        Raises:
            PreferenceParseError: If the name field is blank.
        """
        parts = _split_fields(line)
        if not parts[0]:
            raise PreferenceParseError("Project line has no name", line=line)
        description = parts[1] if len(parts) > 1 else ""
        return cls(parts[0], description)

    def to_line(self) -> str:
        if self.description:
            return f"{self.name}, {self.description}"
        return self.name

    def __str__(self) -> str:
        return f"Project [name={self.name}, description={self.description}]"


class ReadState(Enum):
    """Section of the input file the loader is currently reading."""

    UNKNOWN = "unknown"
    STUDENT_MODE = "Students:"
    PROJECT_MODE = "Projects:"
    PREFERENCE_MODE = "Preferences:"


class LoadErrorKind(Enum):
    """Category of a failure recorded while loading."""

    SOURCE_UNAVAILABLE = "SourceUnavailable"
    SOURCE_READ_FAILURE = "SourceReadFailure"
    FORMAT = "FormatError"
    PARSE = "ParseError"
    INDEX = "IndexError"
    STATE = "StateError"


@dataclass
class LoadError:
    """A single failure encountered while loading, with its context."""

    kind: LoadErrorKind
    message: str
    line_number: int | None = None  # 1-based
    line: str | None = None
    state: ReadState | None = None
    exception: Exception | None = field(default=None, repr=False, compare=False)

    def __str__(self) -> str:
        text = f"{self.kind.value}: {self.message}"
        if self.line_number is not None:
            text += f" (line {self.line_number}"
            if self.state is not None:
                text += f", section {self.state.name}"
            text += ")"
        if self.line is not None:
            text += f"\n  Line being read: {self.line}"
        return text


@dataclass
class LoadResult:
    """Store built by the loader, plus every error recorded on the way."""

    data: "PreferenceData"
    errors: list[LoadError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def raise_for_errors(self) -> None:
        """Re-raise the first recorded failure, if any."""
        if not self.errors:
            return
        first = self.errors[0]
        if first.exception is not None:
            raise first.exception
        raise RuntimeError(str(first))
