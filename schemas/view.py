# schemas/view.py
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel

from schemas.marking import FeedbackTier


class SessionStats(BaseModel):
    answered: int
    average_error: float
    accuracy: int
    # retro display strings: "003", "1.2", "067%"
    answered_str: str
    average_error_str: str
    accuracy_str: str


class ResultPanel(BaseModel):
    user_answer: str
    user_order: int
    correct_order: int
    correct_description: str
    error: int
    error_line: str
    tier: FeedbackTier
    feedback: str


class ViewState(BaseModel):
    phase: str
    question: str
    source: Optional[str] = None
    position: Optional[str] = None
    input_enabled: bool
    error_message: Optional[str] = None
    result: Optional[ResultPanel] = None
    stats: SessionStats
