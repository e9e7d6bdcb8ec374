from insightflow.config import CacheConfig, InsightFlowConfig
from insightflow.core.dispatcher import process_chart_data
from insightflow.core.fingerprint import ChartDataCache, chart_fingerprint, dataset_fingerprint
from insightflow.core.models import ChartConfiguration


def test_dataset_fingerprint_is_content_based():
    rows = [{"a": 1, "b": "x"}, {"a": 2, "b": None}]
    same = [{"b": "x", "a": 1}, {"b": None, "a": 2}]

    assert dataset_fingerprint(rows) == dataset_fingerprint(same)
    assert dataset_fingerprint(rows) != dataset_fingerprint(list(reversed(rows)))


def test_dataset_fingerprint_distinguishes_types():
    fingerprints = {
        dataset_fingerprint([{"a": value}]) for value in [1, 1.5, True, "1", "", None]
    }
    assert len(fingerprints) == 6


def test_chart_fingerprint_normalizes_input_shape():
    structured = ChartConfiguration(type="bar", category_key="region", value_keys=["revenue"])
    raw = {"type": "bar", "xAxisKey": "region", "yAxisKeys": ["revenue"]}

    assert chart_fingerprint(structured) == chart_fingerprint(raw)
    assert chart_fingerprint(raw) != chart_fingerprint(dict(raw, aggregation="avg"))


def test_cache_hits_on_equal_content(sales_rows):
    cache = ChartDataCache()
    chart = {"type": "bar", "categoryKey": "region", "valueKeys": ["units"]}

    first = cache.get_or_compute(sales_rows, chart)
    second = cache.get_or_compute([dict(row) for row in sales_rows], dict(chart))

    assert first == second
    assert cache.get_statistics() == {"entries": 1, "hits": 1, "misses": 1}


def test_cache_returns_private_copies(sales_rows):
    cache = ChartDataCache()
    chart = ChartConfiguration(type="pie", category_key="region")

    cache.get_or_compute(sales_rows, chart)
    cached = cache.get_or_compute(sales_rows, chart)
    cached[0]["value"] = 999

    assert cache.get_or_compute(sales_rows, chart)[0]["value"] == 2


def test_cache_uses_rows_version(sales_rows):
    cache = ChartDataCache()
    chart = ChartConfiguration(type="pie", category_key="region")

    cache.get_or_compute(sales_rows, chart, rows_version="v1")
    # Same version, different rows: the caller's version wins
    assert cache.get_or_compute([], chart, rows_version="v1")[0]["name"] == "North"
    assert cache.get_or_compute([], chart, rows_version="v2") == []


def test_cache_evicts_least_recently_used(sales_rows):
    cache = ChartDataCache(InsightFlowConfig(cache=CacheConfig(max_entries=2)))
    charts = [ChartConfiguration(type="pie", category_key=key) for key in ["region", "promo", "online"]]

    for chart in charts:
        cache.get_or_compute(sales_rows, chart)

    assert len(cache) == 2
    cache.get_or_compute(sales_rows, charts[0])
    assert cache.misses == 4


def test_disabled_cache_always_computes(sales_rows):
    cache = ChartDataCache(InsightFlowConfig(cache=CacheConfig(enabled=False)))
    chart = ChartConfiguration(type="pie", category_key="region")

    cache.get_or_compute(sales_rows, chart)
    cache.get_or_compute(sales_rows, chart)

    assert len(cache) == 0
    assert cache.hits == 0


def test_cache_handles_integers_beyond_float_range():
    rows = [{"g": "a", "v": 10 ** 400}]
    chart = {"type": "bar", "xAxisKey": "g", "yAxisKeys": ["v"]}
    cache = ChartDataCache()

    assert cache.get_or_compute(rows, chart) == [{"name": "a", "v": 10 ** 400}]
    assert dataset_fingerprint(rows) != dataset_fingerprint([{"g": "a", "v": 10 ** 400 + 1}])


def test_cache_tolerates_malformed_value_keys():
    rows = [{"g": "a", "v": 1}]
    cache = ChartDataCache()
    chart = {"type": "bar", "xAxisKey": "g", "valueKeys": 5}

    records = cache.get_or_compute(rows, chart)
    assert records == process_chart_data(rows, chart)
    assert records == [{"name": "a", "value": 1}]
