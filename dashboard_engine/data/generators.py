"""
Synthetic Data Generator

Generates realistic marketplace dashboard data for testing and development.
Includes:
- Hourly and daily sales facts with an intraday shopping curve
- Marketplace, state, category and SKU aggregates
- Baseline-period variants of any aggregate list

Every generator owns its random state, so equal seeds give equal data.
"""

from typing import Dict, List, Optional, Sequence

import numpy as np
from faker import Faker

from dashboard_engine.models import DimensionAggregate, FactRow, Granularity
from dashboard_engine.series.periods import HOURS_PER_DAY, days_in_month, is_iso_day, is_iso_month


# =============================================================================
# CONFIGURATION
# =============================================================================

MARKETPLACES = [
    ("Mercado Livre", 0.34),
    ("Shopee", 0.22),
    ("Magazine Luiza", 0.16),
    ("Web", 0.12),
    ("MadeiraMadeira", 0.09),
    ("Cnova", 0.07),
]

CATEGORIES = {
    "Eletrônicos": ["Acessórios", "Smartphones", "Áudio", "Informática"],
    "Casa e Decoração": ["Cozinha", "Cama, Mesa e Banho", "Iluminação"],
    "Móveis": ["Escritório", "Sala de Estar", "Quarto"],
    "Esporte e Lazer": ["Fitness", "Ciclismo", "Camping"],
    "Beleza": ["Perfumaria", "Cuidados com a Pele", "Cabelos"],
}

# Intraday curve: lunch and evening peaks over a flat floor
HOUR_CURVE_BASELINE = 0.12
HOUR_CURVE_PEAKS = [
    # (center hour, sigma, weight)
    (13.0, 3.2, 1.25),
    (20.0, 2.4, 0.85),
]

# Monday..Sunday
WEEKDAY_FACTORS = np.array([1.05, 1.02, 1.0, 1.0, 0.98, 0.92, 0.88])


def hourly_weights() -> np.ndarray:
    """Normalised share of a day's revenue per hour (sums to 1)"""
    hours = np.arange(HOURS_PER_DAY, dtype=float)
    curve = np.full(HOURS_PER_DAY, HOUR_CURVE_BASELINE)
    for center, sigma, weight in HOUR_CURVE_PEAKS:
        curve += weight * np.exp(-((hours - center) ** 2) / (2 * sigma ** 2))
    return curve / curve.sum()


def _split(rng: np.random.Generator, total: float, shares: Sequence[float], concentration: float = 50.0) -> np.ndarray:
    """Split total into noisy parts around the given shares"""
    alpha = np.asarray(shares, dtype=float) * concentration
    return rng.dirichlet(alpha) * total


# =============================================================================
# GENERATORS
# =============================================================================

class FactRowGenerator:
    """Generate hourly and daily revenue facts"""

    def __init__(self, seed: int = 42, noise: float = 0.15):
        self.rng = np.random.default_rng(seed)
        self.noise = noise

    def _noisy(self, expected: np.ndarray) -> np.ndarray:
        factors = self.rng.normal(1.0, self.noise, size=expected.shape)
        return np.round(np.clip(expected * factors, 0.0, None), 2)

    def generate_day(
        self,
        day_key: str,
        daily_total: float,
        up_to_hour: Optional[int] = None,
    ) -> List[FactRow]:
        """
        Hourly facts for one day.

        Args:
            day_key: "YYYY-MM-DD"
            daily_total: Expected revenue of the whole day
            up_to_hour: Last hour with data (live day); all 24 when None
        """
        if not is_iso_day(day_key):
            raise ValueError(f"Invalid day key: {day_key!r}")

        values = self._noisy(hourly_weights() * daily_total)
        last = HOURS_PER_DAY - 1 if up_to_hour is None else min(up_to_hour, HOURS_PER_DAY - 1)
        return [
            FactRow(period_key=day_key, bucket=hour, value=float(values[hour]))
            for hour in range(last + 1)
        ]

    def generate_month(
        self,
        month_key: str,
        monthly_total: float,
        up_to_day: Optional[int] = None,
    ) -> List[FactRow]:
        """
        Daily facts for one month with weekday seasonality.

        Args:
            month_key: "YYYY-MM"
            monthly_total: Expected revenue of the whole month
            up_to_day: Last day with data (live month); whole month when None
        """
        if not is_iso_month(month_key):
            raise ValueError(f"Invalid month key: {month_key!r}")

        n_days = days_in_month(month_key)
        year, month = (int(part) for part in month_key.split("-"))
        weekdays = (np.datetime64(f"{year:04d}-{month:02d}-01") + np.arange(n_days)).astype("datetime64[D]")
        # 1970-01-01 was a Thursday
        weekday_index = (weekdays.astype(int) + 3) % 7
        weights = WEEKDAY_FACTORS[weekday_index]
        values = self._noisy(weights / weights.sum() * monthly_total)

        last = n_days if up_to_day is None else min(up_to_day, n_days)
        return [
            FactRow(period_key=month_key, bucket=day, value=float(values[day - 1]))
            for day in range(1, last + 1)
        ]

    def generate(
        self,
        granularity: Granularity,
        period_key: str,
        total: float,
        cutoff_bucket: Optional[int] = None,
    ) -> List[FactRow]:
        if granularity is Granularity.HOUR:
            return self.generate_day(period_key, total, cutoff_bucket)
        return self.generate_month(period_key, total, cutoff_bucket)


class DimensionAggregateGenerator:
    """Generate per-dimension revenue aggregates"""

    def __init__(self, seed: int = 42, ticket_mean: float = 180.0):
        self.rng = np.random.default_rng(seed)
        self.fake = Faker("pt_BR")
        self.fake.seed_instance(seed)
        self.ticket_mean = ticket_mean

    def _aggregate(self, id_: str, revenue: float) -> DimensionAggregate:
        ticket = float(self.rng.lognormal(np.log(self.ticket_mean), 0.35))
        orders = max(1, int(round(revenue / ticket))) if revenue > 0 else 0
        return DimensionAggregate(id=id_, revenue=round(revenue, 2), orders_count=orders)

    def _build(self, ids: Sequence[str], total: float, shares: Optional[Sequence[float]] = None) -> List[DimensionAggregate]:
        if not ids:
            return []
        shares = shares if shares is not None else np.full(len(ids), 1.0 / len(ids))
        revenues = _split(self.rng, total, shares)
        rows = [self._aggregate(id_, float(revenue)) for id_, revenue in zip(ids, revenues)]
        return sorted(rows, key=lambda r: r.revenue, reverse=True)

    def marketplaces(self, total: float) -> List[DimensionAggregate]:
        names = [name for name, _ in MARKETPLACES]
        return self._build(names, total, [share for _, share in MARKETPLACES])

    def states(self, total: float, n: int = 10) -> List[DimensionAggregate]:
        """Aggregates per Brazilian UF code"""
        codes: List[str] = []
        while len(codes) < min(n, 27):
            code = self.fake.estado_sigla()
            if code not in codes:
                codes.append(code)
        # Long tail: first states concentrate most of the revenue
        shares = 1.0 / np.arange(1, len(codes) + 1)
        return self._build(codes, total, shares / shares.sum())

    def categories(self, total: float, category: Optional[str] = None) -> List[DimensionAggregate]:
        """Top-level categories, or the subcategories of one category"""
        if category is None:
            return self._build(list(CATEGORIES), total)
        if category not in CATEGORIES:
            raise ValueError(f"Unknown category: {category!r}")
        return self._build(CATEGORIES[category], total)

    def products(self, total: float, n: int = 20) -> List[DimensionAggregate]:
        skus = [self.fake.unique.bothify(text="SKU-####-??").upper() for _ in range(n)]
        shares = self.rng.pareto(1.5, size=n) + 0.05
        return self._build(skus, total, shares / shares.sum())

    def baseline_of(
        self,
        current: Sequence[DimensionAggregate],
        growth: float = 0.0,
        spread: float = 0.2,
        drop_rate: float = 0.1,
    ) -> List[DimensionAggregate]:
        """
        Baseline-period variant of an aggregate list.

        Revenue is current / (1 + growth) with per-id noise; about
        drop_rate of the ids have no baseline entry at all.
        """
        rows = []
        for row in current:
            if self.rng.random() < drop_rate:
                continue
            factor = max(0.0, float(self.rng.normal(1.0, spread))) / (1.0 + growth)
            rows.append(self._aggregate(row.id, row.revenue * factor))
        return rows

    def dimension_periods(
        self,
        current: Sequence[DimensionAggregate],
        baseline_keys: Sequence[str],
        growth: float = 0.0,
    ) -> Dict[str, List[DimensionAggregate]]:
        """Aggregates keyed by "selected" and each baseline key"""
        periods = {"selected": list(current)}
        for key in baseline_keys:
            periods[key] = self.baseline_of(current, growth=growth)
        return periods
