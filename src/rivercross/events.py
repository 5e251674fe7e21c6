# src/rivercross/events.py
"""
Lifecycle notifications emitted by search nodes.

A renderer (tree view, replay player, ...) implements ``EventSink`` and only
reads what it is handed; it never mutates nodes or the engine's lists.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, List, Protocol

if TYPE_CHECKING:  # pragma: no cover
    from .node import NodeFlags, SearchNode


class EventSink(Protocol):
    def on_spawned(self, node: "SearchNode") -> None: ...
    def on_opened(self, node: "SearchNode") -> None: ...
    def on_closed(self, node: "SearchNode") -> None: ...
    def on_flags_changed(self, node: "SearchNode", flags: "NodeFlags") -> None: ...
    def on_marked_solution(self, node: "SearchNode") -> None: ...
    def on_marked_duplicate(self, node: "SearchNode", original: "SearchNode") -> None: ...


class NullSink:
    """Sink that drops everything. Used when nobody is watching."""

    def on_spawned(self, node): pass
    def on_opened(self, node): pass
    def on_closed(self, node): pass
    def on_flags_changed(self, node, flags): pass
    def on_marked_solution(self, node): pass
    def on_marked_duplicate(self, node, original): pass


class FanOutSink:
    """Forward every notification to several sinks, in registration order."""

    def __init__(self, sinks: Iterable[EventSink] = ()):
        self.sinks: List[EventSink] = list(sinks)

    def add(self, sink: EventSink) -> None:
        self.sinks.append(sink)

    def on_spawned(self, node):
        for s in self.sinks:
            s.on_spawned(node)

    def on_opened(self, node):
        for s in self.sinks:
            s.on_opened(node)

    def on_closed(self, node):
        for s in self.sinks:
            s.on_closed(node)

    def on_flags_changed(self, node, flags):
        for s in self.sinks:
            s.on_flags_changed(node, flags)

    def on_marked_solution(self, node):
        for s in self.sinks:
            s.on_marked_solution(node)

    def on_marked_duplicate(self, node, original):
        for s in self.sinks:
            s.on_marked_duplicate(node, original)
