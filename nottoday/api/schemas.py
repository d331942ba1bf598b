from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, Field

PointerKind = Literal["down", "up", "leave", "cancel"]

class CharStyle(BaseModel):
    tail: bool = False
    shadow: bool = False
    opacity: Optional[float] = None
    legible: Optional[bool] = None

class Visuals(BaseModel):
    circleVisible: bool
    breathing: bool
    breathingFast: bool
    wordShown: bool
    shakeIntensity: float
    charStyles: List[CharStyle] = Field(default_factory=list)

class RenderSnapshot(BaseModel):
    phase: str
    generation: int
    depth: int
    pullCount: int
    isBPattern: bool
    hesitationTime: int
    word: Optional[str] = None
    chars: List[str] = Field(default_factory=list)
    tailLength: int = 0
    degradingProgress: float = 0.0
    symbolizingProgress: float = 0.0
    position: Optional[Dict[str, Any]] = None
    visuals: Visuals

class HapticsResponse(BaseModel):
    available: bool
    patterns: List[List[int]] = Field(default_factory=list)

class CircleResponse(BaseModel):
    lines: List[Dict[str, Any]]
