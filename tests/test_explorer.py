from insightflow.core.explorer import (
    NO_DATA_SUMMARY,
    collect_headers,
    filter_rows,
    summarize_dataset,
    unique_column_values,
)


def test_collect_headers_first_seen():
    assert collect_headers([{"b": 1}, None, {"a": 2, "b": 3}, {"c": 4}]) == ["b", "a", "c"]
    assert collect_headers([]) == []


def test_unique_values_sorted_by_display_text():
    rows = [{"c": "beta"}, {"c": "alpha"}, {"c": "beta"}, {"c": None}, {"c": 10}]
    assert unique_column_values(rows) == {"c": [10, "alpha", "beta", None]}


def test_unique_values_keep_booleans_apart_from_numbers():
    rows = [{"c": 1}, {"c": True}, {"c": 1.0}, {"c": 0}, {"c": False}]
    values = unique_column_values(rows, ["c"])["c"]

    assert len(values) == 4
    assert any(v is True for v in values)
    assert any(v is False for v in values)


def test_search_is_case_insensitive(sales_rows):
    matched = filter_rows(sales_rows, search_term="NORTH")
    assert [row["revenue"] for row in matched] == [100, "25.6"]


def test_search_matches_null_display(sales_rows):
    assert len(filter_rows(sales_rows, ["region"], search_term="null")) == 1


def test_column_filters(sales_rows):
    matched = filter_rows(sales_rows, column_filters={"region": ["South", "East"], "promo": []})
    assert [row["region"] for row in matched] == ["South", "East", "South"]

    booleans = filter_rows(sales_rows, column_filters={"promo": [True]})
    assert len(booleans) == 2


def test_search_and_filters_combine(sales_rows):
    matched = filter_rows(sales_rows, search_term="south", column_filters={"units": [5]})
    assert matched == [sales_rows[5]]


def test_summarize_dataset(sales_rows):
    summary = summarize_dataset(sales_rows[:1])
    assert summary.startswith("Dataset has 1 rows. Columns: region, revenue, units, promo, online.")
    assert '"region": "North"' in summary
    assert summarize_dataset([]) == NO_DATA_SUMMARY
