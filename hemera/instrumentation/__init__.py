"""Instrumentation pipeline: parse, classify, synthesize."""

from hemera.instrumentation.attributes import parse_attribute_text, parse_config
from hemera.instrumentation.classifier import classify, execution_model
from hemera.instrumentation.decorators import hemera, measure_time
from hemera.instrumentation.duration import format_duration, parse_duration
from hemera.instrumentation.synthesizer import Measurement, synthesize

__all__ = [
    "Measurement",
    "classify",
    "execution_model",
    "format_duration",
    "hemera",
    "measure_time",
    "parse_attribute_text",
    "parse_config",
    "parse_duration",
    "synthesize",
]
