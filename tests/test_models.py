from insightflow.core.models import (
    AggregationType,
    ChartConfiguration,
    ChartType,
    ColumnKind,
    ColumnStats,
)


def test_chart_type_parse():
    assert ChartType.parse("Heatmap") is ChartType.HEATMAP
    assert ChartType.parse(ChartType.BOX) is ChartType.BOX
    assert ChartType.parse("radar") is None
    assert ChartType.parse(None) is None


def test_aggregation_parse_falls_back_to_sum():
    assert AggregationType.parse("AVG") is AggregationType.AVG
    assert AggregationType.parse("median") is AggregationType.SUM
    assert AggregationType.parse(None) is AggregationType.SUM
    assert AggregationType.parse(None, AggregationType.MAX) is AggregationType.MAX


def test_from_dict_snake_case():
    chart = ChartConfiguration.from_dict(
        {"type": "bubble", "category_key": "x", "value_keys": ["y"], "size_key": "s", "aggregation": "min"}
    )
    assert chart.chart_type is ChartType.BUBBLE
    assert chart.category_key == "x"
    assert chart.value_keys == ["y"]
    assert chart.size_key == "s"
    assert chart.aggregation is AggregationType.MIN


def test_from_dict_front_end_names():
    chart = ChartConfiguration.from_dict(
        {"type": "bar", "xAxisKey": "region", "yAxisKeys": ["a", "b"], "zAxisKey": "z"}
    )
    assert chart.category_key == "region"
    assert chart.value_keys == ["a", "b"]
    assert chart.size_key == "z"
    assert chart.aggregation is AggregationType.SUM


def test_from_dict_tool_call_arguments():
    chart = ChartConfiguration.from_dict(
        {"type": "scatter", "xAxisKey": "age", "yAxisKey": "income", "title": "Age vs income"}
    )
    assert chart.value_keys == ["income"]
    assert chart.title == "Age vs income"

    no_y = ChartConfiguration.from_dict({"type": "pie", "xAxisKey": "region", "yAxisKey": ""})
    assert no_y.value_keys == []


def test_from_dict_tolerates_garbage():
    chart = ChartConfiguration.from_dict(None)
    assert chart.chart_type is None
    assert chart.category_key is None
    assert chart.value_keys == []

    single = ChartConfiguration.from_dict({"type": "bar", "valueKeys": "revenue"})
    assert single.value_keys == ["revenue"]


def test_from_dict_default_aggregation():
    chart = ChartConfiguration.from_dict({"type": "bar"}, default_aggregation="count")
    assert chart.aggregation is AggregationType.COUNT


def test_column_stats_to_dict_and_ratio():
    stats = ColumnStats(
        column="v", kind=ColumnKind.NUMERIC, valid_count=3, missing_count=1, total_count=4,
        mean=2.0, median=2, min_value=1, max_value=3,
    )
    assert stats.is_numeric
    assert stats.missing_ratio == 0.25
    assert stats.to_dict()["min"] == 1
    assert ColumnStats(column="e").missing_ratio == 0.0


def test_aggregation_given_as_string_is_normalized():
    chart = ChartConfiguration(type="bar", category_key="g", value_keys=["v"], aggregation="avg")
    assert chart.aggregation is AggregationType.AVG
    assert chart.to_dict()["aggregation"] == "avg"

    assert ChartConfiguration(aggregation="median").aggregation is AggregationType.SUM


def test_from_dict_non_iterable_value_keys():
    chart = ChartConfiguration.from_dict({"type": "bar", "xAxisKey": "g", "valueKeys": 5})
    assert chart.value_keys == []
    assert chart.category_key == "g"
