"""
ストレージ層から利用する観測性ユーティリティ。

Infrastructure 層で実際のメトリクス実装を登録するまでは全て no-op として動作する。
"""

from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Iterator, Protocol


class MetricsRecorderProtocol(Protocol):
    def observe_operation(self, operation: str, status: str, duration_seconds: float) -> None: ...

    def increment_bytes(self, operation: str, count: int) -> None: ...

    def reset(self) -> None: ...


class _NoopMetricsRecorder(MetricsRecorderProtocol):
    def observe_operation(self, operation: str, status: str, duration_seconds: float) -> None:  # noqa: D401
        pass

    def increment_bytes(self, operation: str, count: int) -> None:
        pass

    def reset(self) -> None:
        pass


metrics_recorder: MetricsRecorderProtocol = _NoopMetricsRecorder()


def use_metrics_recorder(recorder: MetricsRecorderProtocol) -> None:
    global metrics_recorder
    metrics_recorder = recorder


@contextmanager
def observe_operation(operation: str) -> Iterator[None]:
    """
    ブロック内の処理時間と成否を記録する。例外はそのまま再送出する。
    """

    start = time.perf_counter()
    status = "error"
    try:
        yield None
        status = "ok"
    finally:
        metrics_recorder.observe_operation(operation, status, time.perf_counter() - start)


def record_bytes(operation: str, count: int) -> None:
    if count > 0:
        metrics_recorder.increment_bytes(operation, count)


def reset_observability() -> None:
    use_metrics_recorder(_NoopMetricsRecorder())
