"""Console output for loaded preference data."""

from prefdata.preference_data import PreferenceData
from prefdata.types import LoadError


def print_data_summary(data: PreferenceData, show_matrix: bool = False) -> None:
    """Pretty-print roster counts, matrix shape and optionally the matrix."""
    print("\n=== Preference Data ===\n")
    print(f"Students: {data.num_students()}")
    print(f"Projects: {data.num_projects()}")

    if data.shape is None:
        print("Preference Matrix: not created")
        return
    rows, columns = data.shape
    print(f"Preference Matrix: {rows} x {columns}")

    if show_matrix:
        print()
        print(data.to_dataframe().to_string())


def print_load_errors(errors: list[LoadError]) -> None:
    if not errors:
        return
    print(f"\n=== Load Errors ({len(errors)}) ===")
    for error in errors:
        print(f"  - {error}")
