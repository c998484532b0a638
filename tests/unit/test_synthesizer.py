"""Unit tests for wrapper synthesis and the @hemera decorator."""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import AsyncIterator, Callable, Iterator
from typing import TypeVar

import pytest

from hemera import hemera, measure_time
from hemera.exceptions import InvalidAttributeSyntax, UnknownConfigKey
from hemera.instrumentation.attributes import parse_config
from hemera.instrumentation.classifier import classify
from hemera.instrumentation.synthesizer import synthesize

T = TypeVar("T")

MS = 1_000_000


# ---------------------------------------------------------------------------
# Immediate-return functions
# ---------------------------------------------------------------------------


class TestImmediateWrapper:
    """Tests for wrapped plain functions."""

    def test_reports_to_stdout(
        self, fake_clock: Callable[..., None], capsys: pytest.CaptureFixture[str]
    ) -> None:
        """A default wrapper reports every call on stdout."""

        @hemera
        def add(a: int, b: int) -> int:
            return a + b

        fake_clock(0, 1_234_000)
        assert add(2, 3) == 5

        captured = capsys.readouterr()
        assert captured.out == "[TIMING] Function 'add' executed in 1.234ms\n"
        assert captured.err == ""

    def test_custom_name_in_report(
        self, fake_clock: Callable[..., None], capsys: pytest.CaptureFixture[str]
    ) -> None:
        """The name option replaces the function name in the report."""

        @hemera(name="DatabaseQuery")
        def run_query() -> list[str]:
            return ["row"]

        fake_clock(100, 23_556)
        assert run_query() == ["row"]
        out = capsys.readouterr().out
        assert "'DatabaseQuery'" in out
        assert "run_query" not in out
        assert out.endswith("executed in 23.456µs\n")

    def test_debug_level_reports_to_stderr(
        self, fake_clock: Callable[..., None], capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Debug reports go to stderr."""

        @hemera(level="debug")
        def noop() -> None:
            return None

        fake_clock(0, 0)
        noop()
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == "[TIMING] Function 'noop' executed in 0.000ns\n"

    @pytest.mark.parametrize(
        ("elapsed", "reported"),
        [(5 * MS, False), (10 * MS, True), (15 * MS, True)],
    )
    def test_threshold_gate(
        self,
        elapsed: int,
        reported: bool,
        fake_clock: Callable[..., None],
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Calls faster than the threshold are not reported."""

        @hemera(threshold="10ms")
        def work() -> str:
            return "done"

        fake_clock(0, elapsed)
        assert work() == "done"
        assert bool(capsys.readouterr().out) is reported

    def test_exception_propagates_and_is_timed(
        self, fake_clock: Callable[..., None], capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Exceptions are re-raised unchanged and the call is still reported."""

        @hemera
        def explode() -> None:
            msg = "boom"
            raise ValueError(msg)

        fake_clock(0, 2 * MS)
        with pytest.raises(ValueError, match="boom"):
            explode()
        assert capsys.readouterr().out == "[TIMING] Function 'explode' executed in 2.000ms\n"

    def test_keyboard_interrupt_not_reported(
        self, fake_clock: Callable[..., None], capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Interrupted calls never take the after sample."""

        @hemera
        def interrupted() -> None:
            raise KeyboardInterrupt

        fake_clock(0)
        with pytest.raises(KeyboardInterrupt):
            interrupted()
        assert capsys.readouterr().out == ""

    def test_each_call_measured_independently(
        self, fake_clock: Callable[..., None], capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Every call samples its own start and end."""

        @hemera
        def tick() -> None:
            return None

        fake_clock(0, 1_000, 5_000, 7_000)
        tick()
        tick()
        lines = capsys.readouterr().out.splitlines()
        assert lines == [
            "[TIMING] Function 'tick' executed in 1.000µs",
            "[TIMING] Function 'tick' executed in 2.000µs",
        ]

    def test_real_clock(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Without a fake clock the report still follows the line format."""

        @measure_time
        def fast() -> int:
            return sum(range(1000))

        assert fast() == 499500
        out = capsys.readouterr().out
        assert out.startswith("[TIMING] Function 'fast' executed in ")
        assert out.rstrip().endswith(("ns", "µs", "ms", "s"))


# ---------------------------------------------------------------------------
# Signature preservation
# ---------------------------------------------------------------------------


class TestSignaturePreservation:
    """Tests that the wrapper looks like the original."""

    def test_metadata_copied(self) -> None:
        """Name, docstring, annotations and signature are preserved."""

        def original(a: int, *, b: str = "x") -> str:
            """Original docstring."""
            return f"{a}{b}"

        wrapped = hemera(original)
        assert wrapped.__name__ == "original"
        assert wrapped.__doc__ == "Original docstring."
        assert wrapped.__wrapped__ is original
        assert wrapped.__annotations__ == original.__annotations__
        assert inspect.signature(wrapped) == inspect.signature(original)

    def test_generic_function_instantiations(self, capsys: pytest.CaptureFixture[str]) -> None:
        """A generic identity returns each type's value unchanged."""

        @hemera
        def identity(value: T) -> T:
            return value

        payload = {"k": [1, 2]}
        assert identity(7) == 7
        assert identity("seven") == "seven"
        assert identity(payload) is payload
        assert identity(None) is None
        assert len(capsys.readouterr().out.splitlines()) == 4

    def test_type_params_preserved(self) -> None:
        """PEP 695 type parameters survive wrapping where supported."""

        def generic(value: T) -> T:
            return value

        wrapped = hemera(generic)
        assert getattr(wrapped, "__type_params__", ()) == getattr(generic, "__type_params__", ())
        assert classify(wrapped).type_params == (T,)

    def test_methods(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Instance, class and static methods keep their binding."""

        class Repository:
            def __init__(self, rows: int) -> None:
                self.rows = rows

            @hemera(name="Count")
            def count(self) -> int:
                return self.rows

            @hemera
            @classmethod
            def empty(cls) -> Repository:
                return cls(0)

            @hemera
            @staticmethod
            def double(value: int) -> int:
                return value * 2

        repo = Repository(3)
        assert repo.count() == 3
        assert Repository.empty().rows == 0
        assert Repository.double(4) == 8
        assert repo.double(5) == 10
        assert isinstance(Repository.__dict__["empty"], classmethod)
        assert isinstance(Repository.__dict__["double"], staticmethod)

        out = capsys.readouterr().out
        assert "'Count'" in out
        assert "'empty'" in out
        assert "'double'" in out

    def test_synthesize_directly(self, capsys: pytest.CaptureFixture[str]) -> None:
        """synthesize builds a wrapper from a config and a shape."""

        def square(x: int) -> int:
            return x * x

        wrapper = synthesize(parse_config({"name": "Square"}), classify(square))
        assert wrapper(9) == 81
        assert "'Square'" in capsys.readouterr().out


# ---------------------------------------------------------------------------
# Suspending functions
# ---------------------------------------------------------------------------


class TestSuspendingWrapper:
    """Tests for wrapped coroutine functions."""

    async def test_async_result_and_report(
        self, fake_clock: Callable[..., None], capsys: pytest.CaptureFixture[str]
    ) -> None:
        """The awaited result is returned and the call reported."""

        @hemera(name="AsyncOperation")
        async def process(data: str) -> int:
            await asyncio.sleep(0)
            return len(data)

        assert inspect.iscoroutinefunction(process)
        fake_clock(0, 50 * MS)
        assert await process("hello") == 5
        assert capsys.readouterr().out == (
            "[TIMING] Function 'AsyncOperation' executed in 50.000ms\n"
        )

    async def test_async_threshold(
        self, fake_clock: Callable[..., None], capsys: pytest.CaptureFixture[str]
    ) -> None:
        """The threshold gate applies to coroutines."""

        @hemera(threshold="30ms")
        async def maybe_slow() -> str:
            return "Done"

        fake_clock(0, 20 * MS, 0, 50 * MS)
        assert await maybe_slow() == "Done"
        assert capsys.readouterr().out == ""
        assert await maybe_slow() == "Done"
        assert "executed in 50.000ms" in capsys.readouterr().out

    async def test_async_error_propagates(
        self, fake_clock: Callable[..., None], capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Coroutine exceptions propagate and the call is still reported."""

        @hemera(level="debug")
        async def failing() -> None:
            await asyncio.sleep(0)
            msg = "async boom"
            raise RuntimeError(msg)

        fake_clock(0, MS)
        with pytest.raises(RuntimeError, match="async boom"):
            await failing()
        assert "'failing' executed in 1.000ms" in capsys.readouterr().err

    async def test_cancelled_call_not_reported(self, capsys: pytest.CaptureFixture[str]) -> None:
        """A cancelled coroutine never emits a report."""
        started = asyncio.Event()

        @hemera
        async def slow() -> None:
            started.set()
            await asyncio.sleep(10)

        task = asyncio.create_task(slow())
        await started.wait()
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""

    async def test_concurrent_calls_independent(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Interleaved calls each report once with their own label."""

        @hemera(name="Fetch")
        async def fetch(value: int) -> int:
            await asyncio.sleep(0)
            return value

        results = await asyncio.gather(*(fetch(i) for i in range(5)))
        assert results == [0, 1, 2, 3, 4]
        assert capsys.readouterr().out.count("[TIMING] Function 'Fetch'") == 5


# ---------------------------------------------------------------------------
# Generators
# ---------------------------------------------------------------------------


class TestGeneratorWrappers:
    """Tests for wrapped generator and async generator functions."""

    def test_generator_timed_over_iteration(
        self, fake_clock: Callable[..., None], capsys: pytest.CaptureFixture[str]
    ) -> None:
        """The report is emitted once the generator is exhausted."""

        @hemera
        def countdown(n: int) -> Iterator[int]:
            while n:
                yield n
                n -= 1

        assert inspect.isgeneratorfunction(countdown)
        fake_clock(0, 3 * MS)
        gen = countdown(3)
        assert next(gen) == 3
        assert capsys.readouterr().out == ""
        assert list(gen) == [2, 1]
        assert "'countdown' executed in 3.000ms" in capsys.readouterr().out

    def test_generator_send_and_return(self, capsys: pytest.CaptureFixture[str]) -> None:
        """send() values and the return value pass through."""

        @hemera
        def accumulate() -> Iterator[int]:
            total = 0
            while True:
                value = yield total
                if value is None:
                    return total
                total += value

        gen = accumulate()
        assert next(gen) == 0
        assert gen.send(5) == 5
        assert gen.send(2) == 7
        with pytest.raises(StopIteration) as exc_info:
            gen.send(None)
        assert exc_info.value.value == 7
        assert "'accumulate'" in capsys.readouterr().out

    def test_closed_generator_not_reported(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Closing a generator early is treated as cancellation."""

        @hemera
        def endless() -> Iterator[int]:
            while True:
                yield 1

        gen = endless()
        next(gen)
        gen.close()
        assert capsys.readouterr().out == ""

    async def test_async_generator(
        self, fake_clock: Callable[..., None], capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Async generators yield every item and report on exhaustion."""

        @hemera(name="Stream")
        async def stream(n: int) -> AsyncIterator[int]:
            for i in range(n):
                await asyncio.sleep(0)
                yield i

        assert inspect.isasyncgenfunction(stream)
        fake_clock(0, 4 * MS)
        assert [item async for item in stream(3)] == [0, 1, 2]
        assert capsys.readouterr().out == "[TIMING] Function 'Stream' executed in 4.000ms\n"

    async def test_async_generator_asend_and_athrow(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """asend and athrow reach the original async generator."""

        @hemera
        async def echo() -> AsyncIterator[str]:
            received = "start"
            while True:
                try:
                    received = yield received
                except KeyError:
                    received = "recovered"

        agen = echo()
        assert await agen.asend(None) == "start"
        assert await agen.asend("ping") == "ping"
        assert await agen.athrow(KeyError("x")) == "recovered"
        await agen.aclose()
        assert capsys.readouterr().out == ""


# ---------------------------------------------------------------------------
# Decorator forms
# ---------------------------------------------------------------------------


class TestDecoratorForms:
    """Tests for the accepted @hemera spellings."""

    def test_empty_parentheses(self, capsys: pytest.CaptureFixture[str]) -> None:
        """@hemera() behaves like bare @hemera."""

        @hemera()
        def simple_sync() -> int:
            return 42

        assert simple_sync() == 42
        assert "'simple_sync'" in capsys.readouterr().out

    def test_attribute_text(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Attribute text configures the wrapper."""

        @hemera('name = "Custom", level = "debug"')
        def with_text() -> None:
            return None

        with_text()
        assert "'Custom'" in capsys.readouterr().err

    def test_unknown_key_fails_at_decoration(self) -> None:
        """Configuration errors surface before any function is produced."""
        with pytest.raises(UnknownConfigKey):
            hemera(foo="bar")

        with pytest.raises(UnknownConfigKey):

            @hemera(foo="bar")
            def never_built() -> None:
                return None

    def test_text_and_keywords_rejected(self) -> None:
        """Mixing attribute text and keywords is ambiguous."""
        with pytest.raises(InvalidAttributeSyntax):
            hemera('name = "a"', level="debug")
