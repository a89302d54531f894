from skirank.ui.results_table import NAME_WIDTH, format_row, format_table

from route_factory import scored_result


def test_row_shows_steep_section():
    row = format_row(1, scored_result())
    assert row.lstrip().startswith("1.")
    assert "Storsteinen" in row
    assert "1150m" in row
    assert "26.1°" in row
    assert "520m @ 30.0°" in row
    assert "1480m → 960m" in row
    assert row.rstrip().endswith("142.3")


def test_row_without_steep_section():
    row = format_row(2, scored_result(steep=False, source="topptur"))
    assert "—" in row
    assert "→" not in row
    assert "topptur" in row


def test_long_names_are_truncated():
    name = "x" * (NAME_WIDTH + 10)
    assert "x" * (NAME_WIDTH + 1) not in format_row(1, scored_result(name))


def test_table_limits_rows_to_top_n():
    results = [scored_result(f"run {i}", 100.0 - i) for i in range(3)]
    table = format_table(results, top_n=2, min_drop_m=200)
    assert "run 0" in table
    assert "run 1" in table
    assert "run 2" not in table
    assert table.splitlines()[-1] == "Showing top 2 of 3 tracks with ≥200m descent"


def test_empty_table():
    assert format_table([], top_n=30, min_drop_m=200).splitlines()[-1] == "Showing top 0 of 0 tracks with ≥200m descent"
