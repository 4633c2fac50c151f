"""Faultline: locate the offending line in a rejected Drools DRL file."""

__version__ = "0.3.0"
