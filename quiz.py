from __future__ import annotations

from enum import Enum
from typing import List, Optional

from display import describe_power_of_ten, format_number, orders_off_line, power_of_ten
from schemas.marking import Evaluation
from schemas.questions import Question
from schemas.view import ResultPanel, ViewState
from session import SessionTracker

COMPLETED_MSG = "No more questions! You've completed all questions."
LOAD_FAILED_MSG = (
    "Unable to load questions. Please check your internet connection and restart the app."
)


class Phase(str, Enum):
    ASKING = "asking"
    REVIEWING = "reviewing"
    FINISHED = "finished"
    FAILED = "failed"


class QuizSession:
    """
    All mutable state for one run of the quiz. Event handlers receive this
    object and mutate it; nothing else holds quiz state.
    """

    def __init__(self, questions: List[Question], tracker: Optional[SessionTracker] = None):
        self.questions = list(questions)
        self.index = 0
        self.tracker = tracker or SessionTracker()
        self.phase = Phase.ASKING if self.questions else Phase.FINISHED
        self.error_message: Optional[str] = None
        self.last_result: Optional[Evaluation] = None
        self.load_error: Optional[str] = None

    @classmethod
    def start(cls, questions: List[Question]) -> "QuizSession":
        return cls(questions)

    @classmethod
    def failed(cls, message: str) -> "QuizSession":
        quiz = cls([])
        quiz.phase = Phase.FAILED
        quiz.load_error = message or LOAD_FAILED_MSG
        return quiz

    @property
    def current(self) -> Optional[Question]:
        if 0 <= self.index < len(self.questions):
            return self.questions[self.index]
        return None


def _result_panel(result: Evaluation) -> ResultPanel:
    return ResultPanel(
        user_answer=f"{format_number(result.user_value)} -> {power_of_ten(result.user_order)}",
        user_order=result.user_order,
        correct_order=result.correct_order,
        correct_description=(
            f"{power_of_ten(result.correct_order)} {describe_power_of_ten(result.correct_order)}"
        ),
        error=result.error,
        error_line=orders_off_line(result.error),
        tier=result.tier,
        feedback=result.feedback,
    )


def render(quiz: QuizSession) -> ViewState:
    stats = quiz.tracker.snapshot()

    if quiz.phase is Phase.FAILED:
        return ViewState(
            phase=quiz.phase.value,
            question=f"ERROR: {quiz.load_error}",
            input_enabled=False,
            stats=stats,
        )

    q = quiz.current
    if quiz.phase is Phase.FINISHED or q is None:
        return ViewState(
            phase=Phase.FINISHED.value,
            question=COMPLETED_MSG,
            input_enabled=False,
            stats=stats,
        )

    reviewing = quiz.phase is Phase.REVIEWING
    return ViewState(
        phase=quiz.phase.value,
        question=q.text,
        source=q.source,
        position=f"{quiz.index + 1}/{len(quiz.questions)}",
        input_enabled=not reviewing,
        error_message=quiz.error_message,
        result=_result_panel(quiz.last_result) if reviewing and quiz.last_result else None,
        stats=stats,
    )
