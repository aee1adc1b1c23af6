from __future__ import annotations


class QuestionBankError(RuntimeError):
    """Loading the question bank failed; `detail` is safe to show the user."""

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class BankFetchError(QuestionBankError):
    pass


class BankParseError(QuestionBankError):
    pass


class EmptyBankError(QuestionBankError):
    pass


class InvalidAnswerError(ValueError):
    def __init__(self, feedback: str):
        super().__init__(feedback)
        self.feedback = feedback
