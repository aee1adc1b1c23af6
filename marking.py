from __future__ import annotations

import logging
import math
import re
from decimal import Decimal
from typing import Any

from sympy import Pow
from sympy.parsing.sympy_parser import convert_xor, parse_expr, standard_transformations

from errors import InvalidAnswerError
from schemas.marking import Evaluation, FeedbackTier
from schemas.questions import Question

logger = logging.getLogger(__name__)

# --- Parsing / validation helpers ------------------------------------------------
LEN_LIMIT = 100
_EMPTY_MSG = "Please enter an answer"
_TOO_LONG_MSG = f"Answer too long (> {LEN_LIMIT})."
_NOT_NUMBER_MSG = "Please enter a valid number"
_NOT_POSITIVE_MSG = "Please enter a valid positive number"
_NON_FINITE_MSG = "That number is too large to score."
_TOO_COMPLEX_MSG = "Expression is too complex."
_ALLOWED_RE = re.compile(r"^[0-9eE+\-*/^().,\s]+$")
# "e" only as an exponent marker inside a literal, never as Euler's number
_STRAY_E_RE = re.compile(r"(?<![0-9.])[eE]|[eE](?![+\-]?[0-9])")
# "1 000 000", "2 3"
_SPLIT_NUMBER_RE = re.compile(r"[0-9.]\s+[0-9.]")
# "1,000" or "12,345,678.5"; any other comma is not a thousands separator
_THOUSANDS_RE = re.compile(r"^\d{1,3}(,\d{3})+(\.\d+)?$")

# No implicit multiplication: "2 3" is two numbers, not 6
TRANSFORMS = standard_transformations + (convert_xor,)

_MAX_EXPONENT_ABS = 2000
_MAX_DEPTH = 60

# Mantissas at or above this round up to the next power of ten (3.16 x 10^n -> n+1)
ROUND_UP_MANTISSA = Decimal("3.16")


def _clean_answer_text(text: str) -> str:
    if text is None or not isinstance(text, str) or not text.strip():
        raise InvalidAnswerError(_EMPTY_MSG)
    s = text.strip()
    if len(s) > LEN_LIMIT:
        raise InvalidAnswerError(_TOO_LONG_MSG)
    if _ALLOWED_RE.fullmatch(s) is None or _STRAY_E_RE.search(s) or _SPLIT_NUMBER_RE.search(s):
        raise InvalidAnswerError(_NOT_NUMBER_MSG)
    if "," in s:
        if _THOUSANDS_RE.fullmatch(s) is None:
            raise InvalidAnswerError(_NOT_NUMBER_MSG)
        s = s.replace(",", "")
    return s


def _assert_bounded(sym: Any, depth: int = 0) -> None:
    """
    Walk an unevaluated expression and refuse exponents that would take
    forever to evaluate (9^9^9^9).
    """
    if depth > _MAX_DEPTH:
        raise InvalidAnswerError(_TOO_COMPLEX_MSG)
    for arg in getattr(sym, "args", ()):
        _assert_bounded(arg, depth + 1)
    if isinstance(sym, Pow):
        try:
            exp = float(sym.exp)
        except (TypeError, ValueError):
            raise InvalidAnswerError(_NOT_NUMBER_MSG)
        if not math.isfinite(exp) or abs(exp) > _MAX_EXPONENT_ABS:
            raise InvalidAnswerError(_TOO_COMPLEX_MSG)


def parse_user_input(text: str) -> float:
    """
    Parse a guess like "5e6", "3.5E8", "1,200" or "3*10^8" into a positive float.
    Raises InvalidAnswerError with a user-facing message otherwise.
    """
    s = _clean_answer_text(text)

    try:
        sym = parse_expr(s, transformations=TRANSFORMS, evaluate=False)
    except Exception:
        # tokenizer/syntax errors from sympy for things like "5e" or "(("
        raise InvalidAnswerError(_NOT_NUMBER_MSG)

    _assert_bounded(sym)

    if not getattr(sym, "is_number", False):
        raise InvalidAnswerError(_NOT_NUMBER_MSG)
    try:
        value = float(sym)
    except OverflowError:
        raise InvalidAnswerError(_NON_FINITE_MSG)
    except Exception:
        # complex results, zoo from 1/0
        raise InvalidAnswerError(_NOT_NUMBER_MSG)

    if math.isnan(value):
        raise InvalidAnswerError(_NOT_NUMBER_MSG)
    if not math.isfinite(value):
        raise InvalidAnswerError(_NON_FINITE_MSG)
    if value <= 0:
        raise InvalidAnswerError(_NOT_POSITIVE_MSG)
    return value


def to_order_of_magnitude(value: float) -> int:
    """Nearest power of ten, with mantissas >= 3.16 rounding up."""
    if not isinstance(value, (int, float)) or not math.isfinite(value) or value <= 0:
        raise InvalidAnswerError(_NOT_POSITIVE_MSG)
    # repr() gives the shortest decimal that round-trips, so 3160.0 -> 3.16e3 exactly
    d = Decimal(repr(float(value)))
    exponent = d.adjusted()
    mantissa = d.scaleb(-exponent)
    if mantissa >= ROUND_UP_MANTISSA:
        return exponent + 1
    return exponent


def order_error(user_order: int, correct_order: int) -> int:
    return abs(user_order - correct_order)


def feedback_tier(error: int) -> FeedbackTier:
    if error == 0:
        return FeedbackTier.EXACT
    if error == 1:
        return FeedbackTier.CLOSE
    if error <= 2:
        return FeedbackTier.BALLPARK
    return FeedbackTier.OFF


def feedback_message(error: int) -> str:
    if error == 0:
        return "Exactly right!"
    if error == 1:
        return "Close! Off by 1 order of magnitude"
    if error <= 2:
        return f"In the ballpark. Off by {error} orders of magnitude"
    return f"Off by {error} orders of magnitude"


# --- Core marking -----------------------------------------------------------------


def evaluate_answer(question: Question, text: str) -> Evaluation:
    value = parse_user_input(text)
    user_order = to_order_of_magnitude(value)
    error = order_error(user_order, question.correct_order)
    logger.debug(
        "answer %r -> 10^%d (correct 10^%d, error %d)",
        text,
        user_order,
        question.correct_order,
        error,
    )
    return Evaluation(
        user_value=value,
        user_order=user_order,
        correct_order=question.correct_order,
        error=error,
        tier=feedback_tier(error),
        feedback=feedback_message(error),
    )
