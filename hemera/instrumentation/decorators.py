"""The ``@hemera`` decorator.

Accepted forms::

    @hemera
    @hemera()
    @hemera(name="DatabaseQuery", level="debug", threshold="10ms")
    @hemera('name = "DatabaseQuery", threshold = "10ms"')

Arguments are validated when the decorator line runs, so a bad
configuration fails at import time of the decorated module.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar, cast

from hemera.config.settings import load_settings
from hemera.exceptions import InvalidAttributeSyntax
from hemera.instrumentation.attributes import parse_config
from hemera.instrumentation.classifier import classify
from hemera.instrumentation.synthesizer import synthesize
from hemera.models.domain import InstrumentationConfig

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def _instrument(target: F, config: InstrumentationConfig) -> F:
    shape = classify(target)
    tracing = load_settings().tracing_enabled
    wrapper = synthesize(config, shape, tracing=tracing)
    logger.debug(
        "Instrumented %s",
        shape.qualname,
        extra={
            "extra": {
                "function": shape.qualname,
                "label": config.resolve_label(shape.name),
                "model": str(shape.model),
                "threshold_ns": config.threshold.nanos if config.threshold else None,
                "tracing": tracing,
            }
        },
    )
    return cast(F, wrapper)


def hemera(target: Any = None, /, **options: Any) -> Any:
    """Decorator that times a function and reports its execution time.

    Args:
        target: The function when used bare, attribute text, or None.
        **options: ``name``, ``level`` ("info" or "debug") and
            ``threshold`` (e.g. "10ms").

    Returns:
        The instrumented function, or a decorator producing one.

    Raises:
        ConfigError: If the options are invalid.
        TypeError: If the decorated object is not callable.
    """
    if target is None or isinstance(target, str):
        if target is not None and options:
            msg = "pass either attribute text or keyword arguments, not both"
            raise InvalidAttributeSyntax(msg, value=target)
        config = parse_config(target if target is not None else options)

        def decorator(func: F) -> F:
            return _instrument(func, config)

        return decorator

    return _instrument(target, parse_config(options))


measure_time = hemera
