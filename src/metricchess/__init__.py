"""Metric Chess: rules engine for 10×10 chess with trebuchets and heirs."""

__version__ = "0.1.0"
