# schemas/questions.py
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator


class Question(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    correct_order: int
    source: Optional[str] = None

    @field_validator("text")
    @classmethod
    def _strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("question text is empty")
        return v

    @field_validator("correct_order", mode="before")
    @classmethod
    def _integral_order(cls, v):
        # bool is an int subclass; JSON true/false is never an exponent
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise ValueError("correct order must be a number")
        if isinstance(v, float):
            if not v.is_integer():
                raise ValueError("correct order must be a whole power of ten")
            return int(v)
        return v
