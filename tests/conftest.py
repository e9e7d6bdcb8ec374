import pytest

from insightflow.config import InsightFlowConfig


@pytest.fixture
def config():
    return InsightFlowConfig()


@pytest.fixture
def sales_rows():
    """Small mixed-type dataset shared by the engine tests."""
    return [
        {"region": "North", "revenue": 100, "units": 3, "promo": True, "online": False},
        {"region": "South", "revenue": 50, "units": "n/a", "promo": False, "online": True},
        {"region": "North", "revenue": "25.6", "units": 1, "promo": True, "online": True},
        {"region": "East", "revenue": None, "units": 2, "promo": None, "online": False},
        {"region": None, "revenue": 10, "units": 4, "promo": False, "online": False},
        {"region": "South", "revenue": "", "units": 5, "promo": "true", "online": "true"},
    ]
