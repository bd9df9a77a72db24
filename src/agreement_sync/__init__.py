"""Distributor agreement sync: normalize, enrich, and conflict-check Navigator agreements."""

__version__ = "0.1.0"
