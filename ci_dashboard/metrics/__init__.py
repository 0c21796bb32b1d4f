import logging

from prometheus_client import Counter, Histogram

log = logging.getLogger(__name__)


__all__ = [
    "inc_counter",
    "CI_API_CALL_COUNTER",
    "CI_API_ERROR_COUNTER",
    "CI_API_CALL_DURATION",
]


CI_API_CALL_COUNTER = Counter(
    "ci_provider_api_calls",
    "Number of times a CI provider endpoint was called",
    ["provider", "endpoint"],
)

CI_API_ERROR_COUNTER = Counter(
    "ci_provider_api_errors",
    "Number of failed calls to a CI provider endpoint",
    ["provider", "endpoint", "error"],
)

CI_API_CALL_DURATION = Histogram(
    "ci_provider_api_call_duration_seconds",
    "Time taken by calls to a CI provider",
    ["provider"],
)


def inc_counter(counter: Counter, labels: dict | None = None) -> None:
    try:
        if labels:
            counter.labels(**labels).inc()
        else:
            counter.inc()
    except Exception as e:
        log.warning(f"Error incrementing counter {counter._name}: {e}")
