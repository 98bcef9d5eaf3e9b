"""Tests for the entity records and load result types."""

import pytest

from prefdata.errors import PreferenceFormatError, PreferenceParseError
from prefdata.preference_data import PreferenceData
from prefdata.types import (
    LoadError,
    LoadErrorKind,
    LoadResult,
    Project,
    ReadState,
    Student,
)


class TestStudent:
    def test_create_accepts_any_strings(self):
        student = Student.create("", "", "", "")
        assert student.email == ""
        assert student.session == ""

    def test_from_line_trims_fields_in_order(self):
        student = Student.from_line(" a@x.com ,  Alice, S1 ,2024A  ")
        assert student.email == "a@x.com"
        assert student.name == "Alice"
        assert student.student_number == "S1"
        assert student.session == "2024A"

    def test_from_line_too_few_fields_raises_parse_error(self):
        with pytest.raises(PreferenceParseError, match="4 comma-separated fields"):
            Student.from_line("a@x.com, Alice, S1")

    def test_from_line_ignores_extra_fields(self):
        student = Student.from_line("a@x.com, Alice, S1, 2024A, extra")
        assert student == Student.create("a@x.com", "Alice", "S1", "2024A")

    def test_comma_in_name_shifts_fields(self):
        """No escaping: a comma inside a name splits it."""
        student = Student.from_line("a@x.com, Lovelace, Ada, S1, 2024A")
        assert student.name == "Lovelace"
        assert student.student_number == "Ada"

    def test_is_immutable(self):
        student = Student.create("a@x.com", "Alice", "S1", "2024A")
        with pytest.raises(AttributeError):
            student.name = "Bob"  # type: ignore[misc]

    def test_str_lists_all_fields_in_order(self):
        student = Student.create("a@x.com", "Alice", "S1", "2024A")
        assert str(student) == (
            "Student [email=a@x.com, name=Alice, studentNumber=S1, session=2024A]"
        )

    def test_round_trip_through_line(self):
        student = Student.create("b@x.com", "Bob Builder", "S2", "2024B")
        assert Student.from_line(student.to_line()) == student


class TestProject:
    def test_from_line_name_only(self):
        project = Project.from_line("  P1 ")
        assert project.name == "P1"
        assert project.description == ""

    def test_from_line_with_description(self):
        project = Project.from_line("P1, Compiler back end")
        assert project == Project.create("P1", "Compiler back end")

    def test_blank_name_raises_parse_error(self):
        with pytest.raises(PreferenceParseError, match="no name"):
            Project.from_line("   ")

    def test_round_trip_through_line(self):
        for project in (Project.create("P1"), Project.create("P2", "Graphs")):
            assert Project.from_line(project.to_line()) == project

    def test_str(self):
        assert str(Project.create("P1", "Graphs")) == (
            "Project [name=P1, description=Graphs]"
        )


class TestReadState:
    def test_header_values(self):
        assert ReadState.STUDENT_MODE.value == "Students:"
        assert ReadState.PROJECT_MODE.value == "Projects:"
        assert ReadState.PREFERENCE_MODE.value == "Preferences:"


class TestLoadError:
    def test_str_includes_kind_position_and_line(self):
        error = LoadError(
            kind=LoadErrorKind.FORMAT,
            message="Data line outside of any section",
            line_number=1,
            line="oops",
            state=ReadState.UNKNOWN,
        )
        text = str(error)
        assert text.startswith("FormatError: Data line outside of any section")
        assert "(line 1, section UNKNOWN)" in text
        assert "Line being read: oops" in text

    def test_str_without_position(self):
        error = LoadError(kind=LoadErrorKind.SOURCE_UNAVAILABLE, message="missing")
        assert str(error) == "SourceUnavailable: missing"


class TestLoadResult:
    def test_ok_without_errors(self):
        result = LoadResult(data=PreferenceData())
        assert result.ok
        result.raise_for_errors()

    def test_raise_for_errors_reraises_first_exception(self):
        exc = PreferenceFormatError("oops")
        result = LoadResult(
            data=PreferenceData(),
            errors=[
                LoadError(LoadErrorKind.FORMAT, str(exc), exception=exc),
                LoadError(LoadErrorKind.PARSE, "second"),
            ],
        )
        assert not result.ok
        with pytest.raises(PreferenceFormatError):
            result.raise_for_errors()
