"""
Interfaces Layer - Abstract Protocols for Dependencies.

This package defines the abstract interfaces (using typing.Protocol) that
every pipeline stage and collaborator is written against. High-level
layers depend on these abstractions, never on concrete adapters.

Protocols:
    - LineSource: The read contract every stage implements and wraps
    - MessageSink: Leveled logging sink (info/warning/error)
    - MetricsCollector: Performance metrics abstraction

Design Principles:
    - Use typing.Protocol (not ABC) for Pythonic interfaces
    - Small, focused interfaces
    - Decorators implement the same protocol they wrap
"""

from line_service.interfaces.line_source import LineSource
from line_service.interfaces.message_sink import MessageSink, PlainSink
from line_service.interfaces.metrics_collector import MetricsCollector

__all__ = ["LineSource", "MessageSink", "MetricsCollector", "PlainSink"]
