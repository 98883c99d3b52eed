"""
Test Suite Configuration
"""
import pytest
from typing import List

import polars as pl

from dashboard_engine.config import Settings, get_settings
from dashboard_engine.models import DimensionAggregate, FactRow


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Create test settings"""
    return Settings(
        app_env="testing",
        debug=True,
    )


@pytest.fixture
def fresh_settings():
    """Reload settings from the environment around a test"""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def sample_hourly_facts() -> List[FactRow]:
    """Facts of a live day (up to 10h) and of the same weekday last week"""
    return [
        FactRow(period_key="2024-03-15", bucket=9, value=120.0),
        FactRow(period_key="2024-03-15", bucket=10, value=80.0),
        FactRow(period_key="2024-03-08", bucket=9, value=100.0),
        FactRow(period_key="2024-03-08", bucket=12, value=300.0),
        FactRow(period_key="2024-03-08", bucket=20, value=600.0),
    ]


@pytest.fixture
def sample_facts_df() -> pl.DataFrame:
    """Create sample daily facts DataFrame for testing"""
    return pl.DataFrame({
        "period_key": ["2024-02", "2024-02", "2024-02", "2024-01", "2024-02"],
        "bucket": [1, 2, 29, 1, 30],
        "value": [100.0, float("nan"), 50.0, 75.0, 999.0],
    })


@pytest.fixture
def sample_marketplaces() -> List[DimensionAggregate]:
    """Current-period marketplace aggregates"""
    return [
        DimensionAggregate(id="Mercado Livre", revenue=1500.0, orders_count=10),
        DimensionAggregate(id="Shopee", revenue=600.0, orders_count=6),
        DimensionAggregate(id="Web", revenue=200.0, orders_count=2),
    ]


@pytest.fixture
def sample_marketplaces_previous() -> List[DimensionAggregate]:
    """Baseline-period marketplace aggregates"""
    return [
        DimensionAggregate(id="Shopee", revenue=800.0, orders_count=8),
        DimensionAggregate(id="Mercado Livre", revenue=1000.0, orders_count=10),
        DimensionAggregate(id="Cnova", revenue=300.0, orders_count=3),
    ]
