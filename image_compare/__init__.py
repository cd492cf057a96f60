"""Byte-wise image similarity and split-view comparison."""

__version__ = "1.0.0"
