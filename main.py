from __future__ import annotations

import argparse
import logging
from typing import List, Optional

import httpx
from pydantic import ValidationError

from bank import QuestionBank
from console import run_console
from errors import QuestionBankError
from quiz import Phase, QuizSession
from settings import Settings

logger = logging.getLogger("fermi-quiz")


def build_quiz(settings: Settings, client: Optional[httpx.Client] = None) -> QuizSession:
    bank = QuestionBank(
        settings.bank_url,
        shuffle=settings.shuffle,
        seed=settings.seed,
        client=client,
        timeout=settings.timeout,
    )
    try:
        questions = bank.load()
    except QuestionBankError as e:
        logger.error("Failed to load questions from %s: %s", settings.bank_url, e.detail)
        return QuizSession.failed(e.detail)
    return QuizSession.start(questions)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fermi-quiz", description="Practice order-of-magnitude (Fermi) estimation."
    )
    parser.add_argument("--source", help="question bank URL or file path")
    parser.add_argument("--seed", type=int, help="seed for a reproducible question order")
    parser.add_argument(
        "--no-shuffle", action="store_true", help="keep the bank's question order"
    )
    parser.add_argument("--log-level", help="logging level (default: INFO)")
    return parser


def _load_settings(args: argparse.Namespace) -> Settings:
    overrides = {}
    if args.source:
        overrides["bank_url"] = args.source
    if args.seed is not None:
        overrides["seed"] = args.seed
    if args.no_shuffle:
        overrides["shuffle"] = False
    if args.log_level:
        overrides["log_level"] = args.log_level
    # constructor arguments win over FERMI_* variables
    return Settings(**overrides)


def _describe(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(p) for p in err['loc']) or 'settings'}: {err['msg']}"
        for err in exc.errors()
    )


def main(argv: Optional[List[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        settings = _load_settings(args)
    except ValidationError as e:
        parser.error(f"invalid settings ({_describe(e)})")

    logging.basicConfig(level=settings.log_level)
    logger.info("FERMI ESTIMATOR loading questions from %s", settings.bank_url)

    quiz = build_quiz(settings)
    run_console(quiz)
    return 1 if quiz.phase is Phase.FAILED else 0


if __name__ == "__main__":
    raise SystemExit(main())
