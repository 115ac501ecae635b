"""
Property-Based Testing Engine

Value generation, shrinking and crash-resilient replay for property-based tests.
"""

__version__ = "0.1.0"
