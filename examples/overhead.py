"""Per-call cost of @measure_time compared with the undecorated function.

The threshold is set high enough that no report is ever printed, so the
difference is the wrapper itself: one extra frame, two clock reads and
the threshold check.
"""

import time
from collections.abc import Callable

from hemera import measure_time
from hemera.instrumentation.duration import format_duration
from hemera.models.domain import Duration

CALLS = 100_000
REPEATS = 5


def baseline_sync(n: int) -> int:
    total = 0
    for i in range(n):
        total += i
    return total


@measure_time(threshold="999s")
def instrumented_sync(n: int) -> int:
    total = 0
    for i in range(n):
        total += i
    return total


def per_call_ns(func: Callable[[int], int], n: int) -> int:
    """Best-of-REPEATS mean time of one call, in nanoseconds."""
    best = float("inf")
    for _ in range(REPEATS):
        start = time.perf_counter()
        for _ in range(CALLS):
            func(n)
        best = min(best, time.perf_counter() - start)
    return round(best / CALLS * 1e9)


def main() -> None:
    for n in (0, 1000):
        baseline = per_call_ns(baseline_sync, n)
        instrumented = per_call_ns(instrumented_sync, n)
        overhead = max(instrumented - baseline, 0)
        print(f"n={n}:")
        print(f"   baseline:     {format_duration(Duration(nanos=baseline))}")
        print(f"   instrumented: {format_duration(Duration(nanos=instrumented))}")
        print(f"   overhead:     {format_duration(Duration(nanos=overhead))}")


if __name__ == "__main__":
    main()
