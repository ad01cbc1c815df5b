"""Terahertz-band directional antenna, channel link budget and scenario parameter models."""

__version__ = "0.1.0"