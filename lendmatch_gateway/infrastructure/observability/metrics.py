"""Prometheus metrics for monitoring risk bands, match volume, and data source health"""

from typing import Iterable
from prometheus_client import Counter, Histogram

# Pipeline metrics
risk_assessment_counter = Counter(
    "lendmatch_risk_assessment_total",
    "Total borrower risk assessments",
    ["band"],  # low_risk | moderate_risk | high_risk
)

match_counter = Counter(
    "lendmatch_matches_total",
    "Borrower/lender matches emitted",
)

match_score_histogram = Histogram(
    "lendmatch_match_score",
    "Distribution of emitted match scores",
    buckets=[60, 65, 70, 75, 80, 85, 90, 95, 100],
)

recommendation_counter = Counter(
    "lendmatch_recommendations_total",
    "Loan recommendations emitted",
)

# Market data metrics
market_data_failures_counter = Counter(
    "market_data_fetch_failures_total",
    "Failed market data API calls",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_risk_assessment(band: str) -> None:
    risk_assessment_counter.labels(band=band).inc()


def record_matches(match_scores: Iterable[int]) -> None:
    """Record match volume and score distribution"""
    for score in match_scores:
        match_counter.inc()
        match_score_histogram.observe(score)


def record_recommendations(count: int) -> None:
    recommendation_counter.inc(count)
