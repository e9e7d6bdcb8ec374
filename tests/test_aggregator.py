import pytest

from insightflow.config import GroupingConfig, InsightFlowConfig
from insightflow.core.aggregator import GroupingEngine, SeriesAccumulator
from insightflow.core.models import AggregationType


@pytest.fixture
def engine():
    return GroupingEngine()


def test_first_seen_category_order(engine):
    rows = [{"k": "zeta"}, {"k": "alpha"}, {"k": "mid"}, {"k": "alpha"}]
    assert [r["name"] for r in engine.aggregate(rows, "k")] == ["zeta", "alpha", "mid"]


def test_sum_per_bucket(engine, sales_rows):
    records = engine.aggregate(sales_rows, "region", ["revenue"], AggregationType.SUM)

    assert [r["name"] for r in records] == ["North", "South", "East", "null"]
    assert records[0]["revenue"] == pytest.approx(125.6)
    assert records[1]["revenue"] == 50
    # No numeric contribution still sums to zero
    assert records[2]["revenue"] == 0
    assert records[3]["revenue"] == 10


def test_avg_ignores_missing_and_non_numeric(engine, sales_rows):
    records = engine.aggregate(sales_rows, "region", ["revenue", "units"], AggregationType.AVG)
    by_name = {r["name"]: r for r in records}

    assert by_name["North"]["revenue"] == pytest.approx(62.8)
    assert by_name["South"]["revenue"] == 50
    assert by_name["East"]["revenue"] == 0
    # "n/a" is skipped, only 5 counts
    assert by_name["South"]["units"] == 5


def test_min_max_omitted_without_valid_values(engine, sales_rows):
    minimum = {r["name"]: r for r in engine.aggregate(sales_rows, "region", ["revenue"], AggregationType.MIN)}
    maximum = {r["name"]: r for r in engine.aggregate(sales_rows, "region", ["revenue"], AggregationType.MAX)}

    assert minimum["North"]["revenue"] == pytest.approx(25.6)
    assert maximum["North"]["revenue"] == 100
    assert "revenue" not in minimum["East"]
    assert "revenue" not in maximum["East"]
    assert minimum["East"] == {"name": "East"}


def test_count_is_invariant_to_column_content(engine, sales_rows):
    counted = engine.aggregate(sales_rows, "region", ["revenue"], AggregationType.COUNT)
    scrambled = [dict(row, revenue="garbage") for row in sales_rows]
    counted_again = engine.aggregate(scrambled, "region", ["revenue"], AggregationType.COUNT)

    assert counted == counted_again
    assert [r["revenue"] for r in counted] == [2, 2, 1, 1]


def test_empty_value_keys_counts_rows(engine, sales_rows):
    assert engine.aggregate(sales_rows, "region", []) == [
        {"name": "North", "value": 2},
        {"name": "South", "value": 2},
        {"name": "East", "value": 1},
        {"name": "null", "value": 1},
    ]


def test_numeric_categories_are_stringified(engine):
    rows = [{"year": 2021, "v": 1}, {"year": 2020, "v": 2}, {"year": 2021.0, "v": 3}]
    records = engine.aggregate(rows, "year", ["v"])
    assert records == [{"name": "2021", "v": 4}, {"name": "2020", "v": 2}]


def test_nonexistent_value_column_is_all_missing(engine, sales_rows):
    records = engine.aggregate(sales_rows, "region", ["ghost"], AggregationType.SUM)
    assert all(r["ghost"] == 0 for r in records)


def test_custom_null_label():
    engine = GroupingEngine(InsightFlowConfig(grouping=GroupingConfig(null_label="(missing)")))
    records = engine.aggregate([{"k": None}, {"k": ""}], "k")
    assert records == [{"name": "(missing)", "value": 2}]


def test_group_collects_numeric_values():
    buckets = GroupingEngine().group(
        [{"k": "a", "v": 3}, {"k": "a", "v": "x"}, {"k": "a", "v": 1}], "k", ["v"]
    )
    assert len(buckets) == 1
    assert buckets[0].row_count == 3
    assert buckets[0].series["v"].values == [3, 1]


def test_accumulator_reduce():
    acc = SeriesAccumulator()
    for value in [4, None, "2", True]:
        acc.add(value)

    assert acc.reduce(AggregationType.SUM, 4) == 6
    assert acc.reduce(AggregationType.AVG, 4) == 3
    assert acc.reduce(AggregationType.MIN, 4) == 2
    assert acc.reduce(AggregationType.MAX, 4) == 4
    assert acc.reduce(AggregationType.COUNT, 4) == 4
