from console import run_console
from quiz import Phase, QuizSession
from schemas.questions import Question


def _script(*lines):
    it = iter(lines)

    def fake_input(prompt):
        try:
            return next(it)
        except StopIteration:
            raise EOFError

    return fake_input


def test_console_plays_through_quiz():
    quiz = QuizSession.start([Question(text="Cars in the USA?", correct_order=8)])
    out = []
    run_console(quiz, input_fn=_script("many", "2e9", ""), output=out.append)

    text = "\n".join(out)
    assert "Cars in the USA?" in text
    assert "! Please enter a valid number" in text
    assert "[CLOSE] Close! Off by 1 order of magnitude" in text
    assert "No more questions!" in text
    assert quiz.phase is Phase.FINISHED


def test_console_quit():
    quiz = QuizSession.start([Question(text="Q?", correct_order=1)])
    out = []
    run_console(quiz, input_fn=_script("q"), output=out.append)
    assert quiz.tracker.answered_count == 0
    assert quiz.phase is Phase.ASKING


def test_console_eof_ends_loop():
    quiz = QuizSession.start([Question(text="Q?", correct_order=1)])
    run_console(quiz, input_fn=_script(), output=lambda s: None)
    assert quiz.phase is Phase.ASKING


def test_console_failed_quiz_prints_error_once():
    quiz = QuizSession.failed("Failed to load questions: HTTP 500. Please check your internet connection.")
    out = []

    def no_input(prompt):
        raise AssertionError("input should not be read")

    run_console(quiz, input_fn=no_input, output=out.append)
    assert len(out) == 1
    assert "ERROR: Failed to load questions: HTTP 500." in out[0]
