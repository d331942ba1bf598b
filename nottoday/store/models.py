from dataclasses import dataclass


@dataclass(frozen=True)
class DepthState:
    depth: int = 0  # 0..3
    pullCount: int = 0
