from __future__ import annotations

import logging
from typing import Callable, Dict, Type

from errors import InvalidAnswerError
from marking import evaluate_answer
from quiz import Phase, QuizSession, render
from schemas.events import EditAnswer, NextQuestion, QuizEvent, SubmitAnswer
from schemas.view import ViewState

logger = logging.getLogger(__name__)

Handler = Callable[[QuizSession, QuizEvent], None]


class EventRouter:
    def __init__(self) -> None:
        self._handlers: Dict[Type[QuizEvent], Handler] = {}

    def on(self, event_type: Type[QuizEvent]) -> Callable[[Handler], Handler]:
        def register(fn: Handler) -> Handler:
            self._handlers[event_type] = fn
            return fn

        return register

    def dispatch(self, quiz: QuizSession, event: QuizEvent) -> ViewState:
        handler = self._handlers.get(type(event))
        if handler is None:
            raise TypeError(f"no handler registered for {type(event).__name__}")
        handler(quiz, event)
        return render(quiz)


router = EventRouter()


@router.on(SubmitAnswer)
def submit_answer(quiz: QuizSession, event: SubmitAnswer) -> None:
    q = quiz.current
    if quiz.phase is not Phase.ASKING or q is None:
        return

    try:
        result = evaluate_answer(q, event.text)
    except InvalidAnswerError as e:
        quiz.error_message = e.feedback
        return

    quiz.error_message = None
    quiz.tracker.record(result.error)
    quiz.last_result = result
    quiz.phase = Phase.REVIEWING


@router.on(NextQuestion)
def next_question(quiz: QuizSession, event: NextQuestion) -> None:
    if quiz.phase is not Phase.REVIEWING:
        return

    quiz.index += 1
    quiz.last_result = None
    quiz.error_message = None
    if quiz.index >= len(quiz.questions):
        logger.info("All %d questions answered", len(quiz.questions))
        quiz.phase = Phase.FINISHED
    else:
        quiz.phase = Phase.ASKING


@router.on(EditAnswer)
def edit_answer(quiz: QuizSession, event: EditAnswer) -> None:
    quiz.error_message = None


def dispatch(quiz: QuizSession, event: QuizEvent) -> ViewState:
    return router.dispatch(quiz, event)
