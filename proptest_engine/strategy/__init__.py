"""
Value generation and shrinking.

This module provides:
- Strategy / ValueTree: the generate-and-shrink protocol
- Map, Filter: generic wrappers over another strategy
- Union: weighted choice between alternatives
- Just, IntRange, booleans: leaf strategies
- option: strategies for optional values
"""

from .base import Strategy, ValueTree, Map, MapValueTree, Filter, FilterValueTree
from .just import Just
from .numeric import IntRange, BinarySearch, integers
from .union import Union, UnionValueTree, WEIGHT_SCALE, float_to_weight, weighted_pair
from .option import NoneStrategy, OptionStrategy, OptionValueTree
from .misc import booleans
from . import option

__all__ = [
    "Strategy",
    "ValueTree",
    "Map",
    "MapValueTree",
    "Filter",
    "FilterValueTree",
    "Just",
    "IntRange",
    "BinarySearch",
    "integers",
    "Union",
    "UnionValueTree",
    "WEIGHT_SCALE",
    "float_to_weight",
    "weighted_pair",
    "NoneStrategy",
    "OptionStrategy",
    "OptionValueTree",
    "booleans",
    "option",
]
