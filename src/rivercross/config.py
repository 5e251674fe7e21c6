"""
Search parameters and their validation.

Values usually arrive as text (UI fields, CLI flags, JSON files), so parsing
accepts ints or numeric strings and rejects anything else before a search is
started.
"""
from __future__ import annotations

import json
import math
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Union

from .errors import ConfigurationError

Number = Union[int, float, str]


def parse_count(name: str, value: Any) -> int:
    """Return ``value`` as a non-negative int or raise ConfigurationError."""
    if isinstance(value, bool):
        raise ConfigurationError(f"{name} must be a number, got {value!r}")
    if isinstance(value, str):
        text = value.strip()
        try:
            value = int(text)
        except ValueError:
            raise ConfigurationError(f"{name} must be a whole number, got {text!r}") from None
    if isinstance(value, float):
        if not value.is_integer():
            raise ConfigurationError(f"{name} must be a whole number, got {value!r}")
        value = int(value)
    if not isinstance(value, int):
        raise ConfigurationError(f"{name} must be a number, got {type(value).__name__}")
    if value < 0:
        raise ConfigurationError(f"{name} must be >= 0, got {value}")
    return value


def parse_delay(value: Any) -> float:
    """Seconds between iterations for paced playback; non-negative."""
    if isinstance(value, bool):
        raise ConfigurationError(f"delay must be a number, got {value!r}")
    try:
        delay = float(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"delay must be a number, got {value!r}") from None
    if not math.isfinite(delay) or delay < 0:
        raise ConfigurationError(f"delay must be a finite number >= 0, got {value!r}")
    return delay


@dataclass
class SearchConfig:
    """Inputs of one search run."""
    cannibals: int = 3
    missionaries: int = 3
    max_iterations: int = 30  # bound on expansions; 0 means never expand the root
    delay: float = 0.0        # playback pacing only, the engine ignores it

    @classmethod
    def parse(
        cls,
        cannibals: Number,
        missionaries: Number,
        max_iterations: Number,
        delay: Number = 0.0,
    ) -> "SearchConfig":
        return cls(
            cannibals=parse_count("cannibals", cannibals),
            missionaries=parse_count("missionaries", missionaries),
            max_iterations=parse_count("max_iterations", max_iterations),
            delay=parse_delay(delay),
        )

    def validate(self) -> "SearchConfig":
        """Re-check fields set directly on the dataclass. Returns self."""
        self.cannibals = parse_count("cannibals", self.cannibals)
        self.missionaries = parse_count("missionaries", self.missionaries)
        self.max_iterations = parse_count("max_iterations", self.max_iterations)
        self.delay = parse_delay(self.delay)
        return self

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "SearchConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(d) - known)
        if unknown:
            raise ConfigurationError(f"unknown config keys: {', '.join(unknown)}")
        defaults = cls()
        return cls.parse(
            d.get("cannibals", defaults.cannibals),
            d.get("missionaries", defaults.missionaries),
            d.get("max_iterations", defaults.max_iterations),
            d.get("delay", defaults.delay),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def load_config(path: Union[str, Path]) -> SearchConfig:
    """Read a JSON object of SearchConfig fields."""
    p = Path(path)
    try:
        with open(p, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise ConfigurationError(f"cannot read config {p}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"config {p} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"config {p} must hold a JSON object")
    return SearchConfig.from_dict(data)
