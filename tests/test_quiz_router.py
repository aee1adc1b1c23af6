import pytest

from quiz import COMPLETED_MSG, Phase, QuizSession, render
from routers.quiz import dispatch
from schemas.events import EditAnswer, NextQuestion, QuizEvent, SubmitAnswer
from schemas.marking import FeedbackTier
from schemas.questions import Question

QUESTIONS = [
    Question(text="People in New York City?", correct_order=7, source="Sample"),
    Question(text="Piano tuners in Chicago?", correct_order=2),
]


def _quiz():
    return QuizSession.start(QUESTIONS)


def test_initial_view():
    v = render(_quiz())
    assert v.phase == "asking"
    assert v.question == "People in New York City?"
    assert v.position == "1/2"
    assert v.source == "Sample"
    assert v.input_enabled is True
    assert v.result is None
    assert v.stats.answered_str == "000"


def test_invalid_answer_sets_message_and_keeps_state():
    quiz = _quiz()
    v = dispatch(quiz, SubmitAnswer(text="lots"))
    assert v.error_message == "Please enter a valid number"
    assert v.input_enabled is True
    assert quiz.phase is Phase.ASKING
    assert quiz.tracker.answered_count == 0

    v = dispatch(quiz, SubmitAnswer(text=""))
    assert v.error_message == "Please enter an answer"


def test_edit_clears_error_message():
    quiz = _quiz()
    dispatch(quiz, SubmitAnswer(text="-3"))
    assert quiz.error_message
    v = dispatch(quiz, EditAnswer())
    assert v.error_message is None


def test_valid_answer_shows_result_and_scores():
    quiz = _quiz()
    v = dispatch(quiz, SubmitAnswer(text="8e6"))
    assert v.phase == "reviewing"
    assert v.input_enabled is False
    assert v.error_message is None
    r = v.result
    assert r.user_order == 7
    assert r.error == 0
    assert r.tier is FeedbackTier.EXACT
    assert r.user_answer == "8,000,000 -> 10^7"
    assert r.correct_description == "10^7 (that's about 1 million)"
    assert r.error_line == "You were 0 orders of magnitude off"
    assert v.stats.answered == 1
    assert v.stats.accuracy_str == "100%"


def test_submit_ignored_while_reviewing():
    quiz = _quiz()
    dispatch(quiz, SubmitAnswer(text="1e7"))
    dispatch(quiz, SubmitAnswer(text="1e2"))
    assert quiz.tracker.answered_count == 1


def test_next_question_advances_then_finishes():
    quiz = _quiz()
    dispatch(quiz, NextQuestion())  # ignored while asking
    assert quiz.index == 0

    dispatch(quiz, SubmitAnswer(text="1e7"))
    v = dispatch(quiz, NextQuestion())
    assert v.phase == "asking"
    assert v.question == "Piano tuners in Chicago?"
    assert v.result is None

    v = dispatch(quiz, SubmitAnswer(text="100000"))
    assert v.result.error == 3
    assert v.result.tier is FeedbackTier.OFF

    v = dispatch(quiz, NextQuestion())
    assert v.phase == "finished"
    assert v.question == COMPLETED_MSG
    assert v.input_enabled is False
    assert v.stats.answered_str == "002"
    assert v.stats.average_error_str == "1.5"
    assert v.stats.accuracy_str == "050%"


def test_failed_quiz_disables_input():
    quiz = QuizSession.failed("No valid questions found in the data file.")
    v = render(quiz)
    assert v.phase == "failed"
    assert v.question == "ERROR: No valid questions found in the data file."
    assert v.input_enabled is False

    v = dispatch(quiz, SubmitAnswer(text="100"))
    assert v.phase == "failed"
    assert quiz.tracker.answered_count == 0


def test_unknown_event_type():
    class Shout(QuizEvent):
        pass

    with pytest.raises(TypeError):
        dispatch(_quiz(), Shout())


def test_edit_event_carries_no_payload():
    assert EditAnswer.model_fields == {}
    quiz = _quiz()
    dispatch(quiz, SubmitAnswer(text="1,5"))
    assert quiz.error_message == "Please enter a valid number"
    dispatch(quiz, EditAnswer())
    assert quiz.error_message is None
    assert quiz.tracker.answered_count == 0
