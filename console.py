from __future__ import annotations

from typing import Callable, Optional

from quiz import Phase, QuizSession, render
from routers.quiz import dispatch
from schemas.events import EditAnswer, NextQuestion, SubmitAnswer
from schemas.view import ViewState

QUIT_WORDS = {"q", "quit", "exit"}
NEXT_WORDS = {"", "n", "next", ">"}

_RULE = "-" * 60


def _stats_line(view: ViewState) -> str:
    s = view.stats
    return (
        f"QUESTIONS {s.answered_str}   AVG ERROR {s.average_error_str}   "
        f"ACCURACY {s.accuracy_str}"
    )


def format_view(view: ViewState) -> str:
    lines = [_RULE, _stats_line(view), _RULE]
    if view.position:
        header = f"Question {view.position}"
        if view.source:
            header += f"  [{view.source}]"
        lines.append(header)
    lines.append(view.question)

    if view.error_message:
        lines.append(f"! {view.error_message}")

    r = view.result
    if r is not None:
        lines += [
            "",
            f"Your answer:    {r.user_answer}",
            f"Correct answer: {r.correct_description}",
            r.error_line,
            f"[{r.tier.value.upper()}] {r.feedback}",
        ]
    return "\n".join(lines)


def run_console(
    quiz: QuizSession,
    *,
    input_fn: Optional[Callable[[str], str]] = None,
    output: Callable[[str], None] = print,
) -> None:
    input_fn = input_fn or input
    view = render(quiz)
    while True:
        output(format_view(view))

        if quiz.phase in (Phase.FINISHED, Phase.FAILED):
            return

        prompt = "Your estimate > " if view.input_enabled else "[Enter] next question, [q] quit > "
        try:
            line = input_fn(prompt)
        except (EOFError, KeyboardInterrupt):
            output("")
            return

        word = line.strip().lower()
        if word in QUIT_WORDS:
            return

        if quiz.phase is Phase.ASKING:
            if quiz.error_message:
                dispatch(quiz, EditAnswer())
            view = dispatch(quiz, SubmitAnswer(text=line))
        elif word in NEXT_WORDS:
            view = dispatch(quiz, NextQuestion())
        else:
            view = render(quiz)
