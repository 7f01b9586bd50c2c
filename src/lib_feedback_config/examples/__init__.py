"""Example configuration helpers for ``lib_feedback_config``."""

from .generate import EXAMPLE_FILENAME, ExampleSpec, generate_examples

__all__ = [
    "EXAMPLE_FILENAME",
    "ExampleSpec",
    "generate_examples",
]
