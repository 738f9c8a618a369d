from __future__ import annotations

from collections import Counter
from threading import Lock
from typing import Optional, Tuple

# (metric name, sorted label pairs) -> count
SeriesKey = Tuple[str, Tuple[Tuple[str, str], ...]]

_lock = Lock()
_series: Counter[SeriesKey] = Counter()


def _key(name: str, labels: Optional[dict[str, str]]) -> SeriesKey:
    return name, tuple(sorted((labels or {}).items()))


def _bump(name: str, **labels: str) -> None:
    with _lock:
        _series[_key(name, labels)] += 1


def increment_http_requests(route: str, status: int) -> None:
    _bump("http_requests_total", route=route, status=str(status))


def increment_request_to_pay(status: str) -> None:
    _bump("requesttopay_total", status=status)


def increment_status_transition(status: str) -> None:
    _bump("status_transitions_total", status=status)


def increment_token_issued(result: str) -> None:
    _bump("tokens_issued_total", result=result)


def get_counter(name: str, labels: Optional[dict[str, str]] = None) -> int:
    with _lock:
        return _series[_key(name, labels)]


def reset_metrics() -> None:
    with _lock:
        _series.clear()


def _sample(name: str, labels: Tuple[Tuple[str, str], ...], value: int) -> str:
    if not labels:
        return f"{name} {value}"
    body = ",".join(f'{k}="{v}"' for k, v in labels)
    return f"{name}{{{body}}} {value}"


def render_prometheus() -> str:
    """Prometheus text exposition, one TYPE line per metric name."""
    with _lock:
        snapshot = sorted(_series.items())

    out: list[str] = []
    current = None
    for (name, labels), value in snapshot:
        if name != current:
            out.append(f"# TYPE {name} counter")
            current = name
        out.append(_sample(name, labels, value))
    return "".join(line + "\n" for line in out)
