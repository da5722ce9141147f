"""Reporting utilities for nodenet."""

from .console import ConsoleSink, format_layer, format_network, format_node
from .metrics import CsvSink, JsonlSink
from .plots import PlotAdapter

__all__ = [
    "ConsoleSink",
    "CsvSink",
    "JsonlSink",
    "PlotAdapter",
    "format_layer",
    "format_network",
    "format_node",
]
