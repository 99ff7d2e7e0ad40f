"""Observability helpers."""

from .queries import add_query_logger

__all__ = ["add_query_logger"]
