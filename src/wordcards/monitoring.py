"""Monitoring configuration for the application."""
from prometheus_client import Counter, Gauge, Histogram, start_http_server

# Account metrics
signed_in_accounts = Gauge(
    "wordcards_signed_in_accounts",
    "Number of chat users currently holding a signed-in session",
)

accounts_registered = Counter(
    "wordcards_accounts_registered_total",
    "Total number of accounts created through sign-up",
)

# Learning metrics
words_marked_learned = Counter(
    "wordcards_words_marked_learned_total",
    "Total number of mark-learned events, including repeated marks",
)

new_words_learned = Counter(
    "wordcards_new_words_learned_total",
    "Total number of words learned for the first time",
)

study_days_started = Counter(
    "wordcards_study_days_started_total",
    "Total number of new study days recorded across accounts",
)

quizzes_completed = Counter(
    "wordcards_quizzes_completed_total",
    "Total number of quizzes finished",
    ["passed"],
)

# Error metrics
progress_errors = Counter(
    "wordcards_progress_errors_total",
    "Total number of errors raised by progress use-cases",
    ["error_type"],
)

# Performance metrics
use_case_duration = Histogram(
    "wordcards_use_case_duration_seconds",
    "Duration of progress use-case calls in seconds",
    ["use_case"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 5.0],
)

# Database metrics
store_operations = Counter(
    "wordcards_store_operations_total",
    "Total number of progress store operations",
    ["operation_type"],
)


def start_monitoring(port: int = 9090) -> None:
    """Start the Prometheus metrics server."""
    start_http_server(port)
