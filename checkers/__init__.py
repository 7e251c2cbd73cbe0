"""Checkers rule engine: forced captures, multi-jump chains and promotion."""

__version__ = "0.1.0"
