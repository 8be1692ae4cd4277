"""Prometheus metrics for monitoring approval rates, crime grades, and grade lookups"""

from prometheus_client import Counter, Histogram

# Decision metrics
decision_counter = Counter(
    "loan_decision_total",
    "Total loan eligibility decisions made",
    ["outcome"],  # eligible | ineligible
)

crime_grade_counter = Counter(
    "loan_crime_grade_total",
    "Crime grades assigned to evaluated properties",
    ["grade"],  # A-F
)

failed_check_counter = Counter(
    "loan_failed_check_total",
    "Eligibility checks that failed",
    ["check"],  # credit_score | income | crime_grade
)

# Grade lookup metrics
grade_cache_lookup_counter = Counter(
    "grade_cache_lookups_total",
    "Crime grade cache lookups",
    ["result"],  # hit | miss
)

crime_api_failures_counter = Counter(
    "crime_api_failures_total",
    "Failed crime grade API calls",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_decision(eligible: bool, crime_grade: str, checks: dict[str, bool]) -> None:
    """Record decision metrics for monitoring approval rates and rejection causes"""
    outcome = "eligible" if eligible else "ineligible"
    decision_counter.labels(outcome=outcome).inc()
    crime_grade_counter.labels(grade=crime_grade).inc()

    for check, passed in checks.items():
        if not passed:
            failed_check_counter.labels(check=check).inc()


def record_grade_cache_lookup(hit: bool) -> None:
    grade_cache_lookup_counter.labels(result="hit" if hit else "miss").inc()


def record_crime_api_failure() -> None:
    crime_api_failures_counter.inc()
