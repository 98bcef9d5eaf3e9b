"""In-memory store of students, projects and their preference matrix."""

import re
from collections.abc import Sequence

import pandas as pd

from prefdata.errors import MatrixStateError, PreferenceParseError, RosterLockedError
from prefdata.types import Project, Student

PREFERENCE_MIN = -(2**31)
PREFERENCE_MAX = 2**31 - 1

_INTEGER = re.compile(r"[+-]?[0-9]+")


class PreferenceData:
    """
    Rosters of students and projects with a dense preference matrix.

    Row ``i`` of the matrix belongs to the ``i``-th student added and column
    ``j`` to the ``j``-th project. The matrix is sized from the roster lengths
    when ``create_preference_matrix`` is called; from then on both rosters are
    locked so the matrix can never fall out of step with them.

    Attributes:
        students: Students in insertion order (duplicates allowed)
        projects: Projects in insertion order (duplicates allowed)
        preferences: Matrix of integer scores, or None before creation
    """

    def __init__(self) -> None:
        self._students: list[Student] = []
        self._projects: list[Project] = []
        self._preferences: list[list[int]] | None = None
        self._columns = 0

    @property
    def students(self) -> tuple[Student, ...]:
        return tuple(self._students)

    @property
    def projects(self) -> tuple[Project, ...]:
        return tuple(self._projects)

    @property
    def preferences(self) -> list[list[int]] | None:
        return self._preferences

    @property
    def is_locked(self) -> bool:
        """True once the matrix exists and the rosters can no longer grow."""
        return self._preferences is not None

    @property
    def shape(self) -> tuple[int, int] | None:
        if self._preferences is None:
            return None
        return len(self._preferences), self._columns

    def num_students(self) -> int:
        return len(self._students)

    def num_projects(self) -> int:
        return len(self._projects)

    def add_student(self, student: Student | str) -> None:
        """Append a student, parsing it first if given as a data line."""
        self._check_unlocked("student")
        if isinstance(student, str):
            student = Student.from_line(student)
        self._students.append(student)

    def add_project(self, project: Project | str) -> None:
        """Append a project, parsing it first if given as a data line."""
        self._check_unlocked("project")
        if isinstance(project, str):
            project = Project.from_line(project)
        self._projects.append(project)

    def create_preference_matrix(self) -> None:
        """Allocate a zero-filled matrix sized from the current rosters.

        Raises:
            MatrixStateError: If the matrix has already been created.
        """
        if self._preferences is not None:
            raise MatrixStateError("Preference matrix has already been created")
        self._columns = len(self._projects)
        self._preferences = [[0] * self._columns for _ in self._students]

    def student_index(self, student: Student) -> int:
        """Position of the first roster entry equal to ``student``."""
        try:
            return self._students.index(student)
        except ValueError:
            raise ValueError(f"Student not on roster: {student}") from None

    def project_index(self, project: Project) -> int:
        """Position of the first roster entry equal to ``project``."""
        try:
            return self._projects.index(project)
        except ValueError:
            raise ValueError(f"Project not on roster: {project}") from None

    def set_preference(self, student: Student, project: Project, value: int) -> None:
        """Write the score ``student`` gives ``project``.

        Raises:
            MatrixStateError: If the matrix has not been created.
            ValueError: If either record is not on its roster.
        """
        self._matrix()
        self.set_preference_at(
            self.student_index(student), self.project_index(project), value
        )

    def set_preference_at(self, row: int, column: int, value: int) -> None:
        matrix = self._matrix()
        self._check_cell(row, column)
        matrix[row][column] = value

    def set_preference_row(self, row: int, values: Sequence[str]) -> None:
        """Parse ``values`` as integers and write them into ``row``.

        The row is validated as a whole before anything is written: a bad
        token or too many values leaves the matrix untouched. Fewer values
        than columns fill only the leading cells.

        Raises:
            MatrixStateError: If the matrix has not been created.
            PreferenceParseError: If any value is not a plain decimal integer
                within the 32-bit range.
            IndexError: If ``row`` is out of range or there are more values
                than projects.
        """
        matrix = self._matrix()
        parsed = []
        for column, token in enumerate(values):
            text = token.strip()
            if not _INTEGER.fullmatch(text):
                reason = "is not an integer"
            elif (
                len(text.lstrip("+-").lstrip("0")) > 10
                or not PREFERENCE_MIN <= int(text) <= PREFERENCE_MAX
            ):
                reason = "is outside the 32-bit integer range"
            else:
                parsed.append(int(text))
                continue
            raise PreferenceParseError(
                f"Preference value {text!r} in column {column} {reason}",
                line=",".join(values),
            )
        if not 0 <= row < len(matrix):
            raise IndexError(
                f"Preference row {row} out of range for {len(matrix)} students"
            )
        if len(parsed) > self._columns:
            raise IndexError(
                f"Preference row {row} has {len(parsed)} values "
                f"but there are only {self._columns} projects"
            )
        matrix[row][: len(parsed)] = parsed

    def get_preference(self, row: int, column: int) -> int:
        matrix = self._matrix()
        self._check_cell(row, column)
        return matrix[row][column]

    def preferences_for(self, student: Student) -> list[int]:
        """Copy of the matrix row belonging to ``student``."""
        return list(self._matrix()[self.student_index(student)])

    def to_dataframe(self) -> pd.DataFrame:
        """Matrix as a DataFrame indexed by student email, one column per project."""
        matrix = self._matrix()
        return pd.DataFrame(
            [list(row) for row in matrix],
            index=pd.Index([s.email for s in self._students], name="student"),
            columns=pd.Index([p.name for p in self._projects], name="project"),
        )

    def _matrix(self) -> list[list[int]]:
        if self._preferences is None:
            raise MatrixStateError("Preference matrix has not been created")
        return self._preferences

    def _check_cell(self, row: int, column: int) -> None:
        rows, columns = len(self._matrix()), self._columns
        if not (0 <= row < rows and 0 <= column < columns):
            raise IndexError(
                f"Cell ({row}, {column}) outside {rows}x{columns} preference matrix"
            )

    def _check_unlocked(self, what: str) -> None:
        if self.is_locked:
            raise RosterLockedError(
                f"Cannot add a {what} after the preference matrix was created"
            )

    def __str__(self) -> str:
        students = ", ".join(str(s) for s in self._students)
        projects = ", ".join(str(p) for p in self._projects)
        return (
            f"PreferenceData [students=[{students}], projects=[{projects}], "
            f"preferences={self._preferences}]"
        )
