"""Timing plain functions with @measure_time."""

import time

from hemera import measure_time


@measure_time
def fast_function() -> int:
    return sum(range(1000))


@measure_time(name="SlowOperation", level="debug")
def slow_function() -> None:
    time.sleep(0.1)


@measure_time(threshold="50ms")
def conditional_log(ms: int) -> None:
    time.sleep(ms / 1000)


@measure_time(name="CustomName", level="debug", threshold="10ms")
def all_options() -> None:
    time.sleep(0.02)


def main() -> None:
    print("1. Fast function:")
    print(f"   Result: {fast_function()}\n")

    print("2. Slow function with custom name and debug level:")
    slow_function()

    print("\n3. Conditional logging (30ms - should NOT log):")
    conditional_log(30)

    print("\n4. Conditional logging (70ms - SHOULD log):")
    conditional_log(70)

    print("\n5. All options combined:")
    all_options()


if __name__ == "__main__":
    main()
