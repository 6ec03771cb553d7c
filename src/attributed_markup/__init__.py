"""Attributed Markup - convert between styled markup and attributed text runs."""

__version__ = "0.1.0"
