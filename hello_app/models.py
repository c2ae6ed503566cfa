from __future__ import annotations

from dataclasses import dataclass


@dataclass
class CounterState:
    count: int = 0
