# schemas/events.py
from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class QuizEvent(BaseModel):
    model_config = ConfigDict(frozen=True)


class SubmitAnswer(QuizEvent):
    text: str


class NextQuestion(QuizEvent):
    pass


class EditAnswer(QuizEvent):
    # The user started a new answer after a rejected one; clears the input error
    pass
