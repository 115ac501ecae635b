"""
Property test entry points.

Fork mode needs a way for a fresh process to find the strategy and test
body of a property. Entry points are "package.module:attribute" strings
naming a module-level PropertyTest.
"""

import importlib
from dataclasses import dataclass
from typing import Any, Callable

from ..core.errors import ConfigurationError
from ..strategy.base import Strategy


@dataclass(frozen=True)
class PropertyTest:
    """
    A strategy paired with the test body it feeds.

    Fields:
        strategy: Strategy generating inputs
        test: Callable taking one generated value; raises to fail or reject
        name: Display name
    """
    strategy: Strategy[Any]
    test: Callable[[Any], Any]
    name: str = ""


def property_test(strategy: Strategy[Any]) -> Callable[[Callable[[Any], Any]], PropertyTest]:
    """
    Decorator turning a test body into a PropertyTest.

    Example:
        @property_test(integers(0, 100))
        def small_numbers(n):
            assert n < 100
    """
    def wrap(fn: Callable[[Any], Any]) -> PropertyTest:
        return PropertyTest(strategy, fn, getattr(fn, "__qualname__", repr(fn)))
    return wrap


def load_entry(spec: str) -> PropertyTest:
    """
    Resolve "package.module:attribute" to a PropertyTest.

    Raises:
        ConfigurationError: If spec is malformed or does not name a PropertyTest
        ImportError: If the module cannot be imported
    """
    module_name, sep, attr_path = spec.partition(":")
    if not sep or not module_name or not attr_path:
        raise ConfigurationError(f"entry point must look like 'module:attribute', got {spec!r}")

    obj: Any = importlib.import_module(module_name)
    for attr in attr_path.split("."):
        try:
            obj = getattr(obj, attr)
        except AttributeError as ex:
            raise ConfigurationError(f"{spec!r}: no attribute {attr!r}") from ex

    if not isinstance(obj, PropertyTest):
        raise ConfigurationError(f"{spec!r} is not a PropertyTest (got {type(obj).__name__})")
    return obj
