# schemas/marking.py
from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class FeedbackTier(str, Enum):
    EXACT = "exact"
    CLOSE = "close"
    BALLPARK = "ballpark"
    OFF = "off"


class Evaluation(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_value: float
    user_order: int
    correct_order: int
    error: int
    tier: FeedbackTier
    feedback: str
