"""Prometheus metrics for score distribution, parsing volume and simulations"""

from prometheus_client import Counter, Histogram

from credit_engine.domain.bureaus import simulated_confidence

# Score metrics
score_counter = Counter(
    "credit_engine_scores_total",
    "Credit scores calculated",
    ["grade"],  # Excellent | Very Good | Good | Fair | Poor
)

score_impact_histogram = Histogram(
    "credit_engine_score_impact_points",
    "Point change produced by what-if simulations",
    buckets=[-100, -50, -20, -5, 0, 5, 20, 50, 100],
)

# Parsing metrics
reports_parsed_counter = Counter(
    "credit_engine_reports_parsed_total",
    "Credit reports parsed",
    ["source"],  # text | csv
)

parse_failures_counter = Counter(
    "credit_engine_parse_failures_total",
    "Report payloads rejected by a parser",
    ["source"],
)

# Bureau simulation
bureau_simulation_counter = Counter(
    "credit_engine_bureau_simulations_total",
    "Bureau score simulations run",
    ["known_bureau", "confidence"],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_score(grade: str) -> None:
    score_counter.labels(grade=grade).inc()


def record_score_impact(impact: int) -> None:
    score_impact_histogram.observe(impact)


def record_report_parsed(source: str) -> None:
    reports_parsed_counter.labels(source=source).inc()


def record_bureau_simulation(known_bureau: str, account_count: int) -> None:
    """Bucket simulations by the confidence band the account count lands in"""
    bureau_simulation_counter.labels(
        known_bureau=known_bureau,
        confidence=simulated_confidence(account_count),
    ).inc()
