"""Lifecycle management for asynchronously provisioned applications."""

__version__ = "0.1.0"
