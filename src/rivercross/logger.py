import json
from typing import List, Dict, Any, Optional


class RunLogger:
    """
    Event sink that collects one frame per node notification for
    replay/visualization.

    Frame schema (all optional except type):
      {
        "type": "spawned" | "opened" | "closed" | "flags" | "solution"
                | "duplicate" | "snapshot",
        "node": int,
        "parent": int | None,          # spawned only
        "state": { "cannibals_left": int, ..., "boat_side": "Left" },
        "flags": { "is_open": bool, ... },
        "original": int,               # duplicate only
        "iteration": int,              # snapshot only
        "status": str,                 # snapshot only
        "open": [node_id, ...],        # snapshot only
        "closed": [node_id, ...],      # snapshot only
        "note": str
      }
    """

    def __init__(self, echo: bool = False):
        self.events: List[Dict[str, Any]] = []
        self.echo = echo

    def _emit(self, frame: Dict[str, Any]) -> None:
        self.events.append(frame)
        if self.echo:
            print(self.format_frame(frame))

    @staticmethod
    def format_frame(frame: Dict[str, Any]) -> str:
        kind = frame.get("type", "?")
        if kind == "snapshot":
            return (
                f"[{kind}] iteration={frame.get('iteration')} status={frame.get('status')} "
                f"open={frame.get('open')} closed={frame.get('closed')}"
            )
        text = f"[{kind}] node={frame.get('node')}"
        if "label" in frame:
            text += f" {frame['label']}"
        if "original" in frame:
            text += f" original={frame['original']}"
        return text

    def _node_frame(self, kind: str, node, with_flags: bool = False) -> Dict[str, Any]:
        frame: Dict[str, Any] = {
            "type": kind,
            "node": node.nid,
            "state": node.state.to_dict(),
            "label": str(node.state),
        }
        if with_flags:
            frame["flags"] = node.flags.to_dict()
        return frame

    # --- EventSink ----------------------------------------------------------

    def on_spawned(self, node):
        frame = self._node_frame("spawned", node)
        frame["parent"] = node.parent.nid if node.parent is not None else None
        self._emit(frame)

    def on_opened(self, node):
        self._emit(self._node_frame("opened", node))

    def on_closed(self, node):
        self._emit(self._node_frame("closed", node))

    def on_flags_changed(self, node, flags):
        frame = self._node_frame("flags", node)
        frame["flags"] = flags.to_dict()
        self._emit(frame)

    def on_marked_solution(self, node):
        self._emit(self._node_frame("solution", node))

    def on_marked_duplicate(self, node, original):
        frame = self._node_frame("duplicate", node, with_flags=True)
        frame["original"] = original.nid
        self._emit(frame)

    # --- engine-level frames ------------------------------------------------

    def snapshot(self, engine, note: str = ""):
        """Record the engine's iteration, status and open/closed node ids."""
        self._emit({
            "type": "snapshot",
            "note": note,
            "iteration": engine.iteration,
            "status": engine.status.name,
            "open": [n.nid for n in engine.open_list],
            "closed": [n.nid for n in engine.closed_list],
        })

    def of_type(self, kind: str) -> List[Dict[str, Any]]:
        return [e for e in self.events if e.get("type") == kind]

    def to_json(self, path: str, result: Optional[Dict[str, Any]] = None):
        payload: Any = self.events if result is None else {"result": result, "events": self.events}
        with open(path, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2)
