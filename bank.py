# bank.py

from __future__ import annotations

import json
import logging
import random
import re
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional
from urllib.parse import unquote, urlparse

import httpx
import json5
from bs4 import BeautifulSoup
from pydantic import ValidationError

from errors import BankFetchError, BankParseError, EmptyBankError
from schemas.questions import Question
from settings import DEFAULT_BANK_URL

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0

_NETWORK_MSG = "Unable to load questions. Please check your internet connection and try again."
_PARSE_MSG = "Failed to parse question data. The data file format may have changed."
_SHAPE_MSG = "Invalid question data format. Expected an array."
_EMPTY_MSG = "No valid questions found in the data file."

# `data = [...]`, `var questions = [...]`, `window.data = {...}`
_ASSIGN_RE = re.compile(
    r"(?:^|[;\s])(?:(?:var|let|const)\s+)?(?:window\.)?([A-Za-z_$][\w$]*)\s*=(?![=>])\s*",
    re.MULTILINE,
)
_PREFERRED_NAMES = ("data", "questions")

_TEXT_KEYS = ("question", "text", "prompt")
_ORDER_KEYS = ("answer", "correct_order", "correctOrder", "order")


# --- Fetching ---------------------------------------------------------------------


def fetch_bank_text(
    source: str,
    *,
    client: Optional[httpx.Client] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> str:
    parsed = urlparse(source)
    if parsed.scheme in ("http", "https"):
        return _fetch_http(source, client=client, timeout=timeout)

    path = Path(unquote(parsed.path)) if parsed.scheme == "file" else Path(source)
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise BankFetchError(f"Failed to load questions: cannot read {path}.") from exc


def _fetch_http(url: str, *, client: Optional[httpx.Client], timeout: float) -> str:
    owns_client = client is None
    if owns_client:
        client = httpx.Client(timeout=timeout, follow_redirects=True)
    try:
        response = client.get(url)
    except httpx.HTTPError as exc:
        raise BankFetchError(_NETWORK_MSG) from exc
    finally:
        if owns_client:
            client.close()

    if response.status_code < 200 or response.status_code >= 300:
        raise BankFetchError(
            f"Failed to load questions: HTTP {response.status_code}. "
            "Please check your internet connection."
        )
    return response.text


# --- Parsing ----------------------------------------------------------------------


def _mask_js(code: str) -> str:
    """
    Same-length copy of `code` with comments and string contents blanked, so
    assignment matching and bracket counting only ever see real code.
    """
    out = list(code)
    quote: Optional[str] = None
    i = 0
    n = len(code)
    while i < n:
        ch = code[i]
        if quote:
            if ch == "\\":
                out[i] = " "
                if i + 1 < n and code[i + 1] != "\n":
                    out[i + 1] = " "
                i += 2
                continue
            if ch == quote:
                quote = None
            elif ch != "\n":
                out[i] = " "
        elif ch in "\"'`":
            quote = ch
        elif code.startswith("//", i) or code.startswith("/*", i):
            if code[i + 1] == "/":
                nl = code.find("\n", i)
                end = n if nl == -1 else nl
            else:
                close = code.find("*/", i + 2)
                end = n if close == -1 else close + 2
            out[i:end] = [c if c == "\n" else " " for c in code[i:end]]
            i = end
            continue
        i += 1
    return "".join(out)


def _literal_end(masked: str, start: int) -> Optional[int]:
    """Index just past the [...] or {...} literal opening at `start`."""
    depth = 0
    for i in range(start, len(masked)):
        ch = masked[i]
        if ch in "[{":
            depth += 1
        elif ch in "]}":
            depth -= 1
            if depth == 0:
                return i + 1
    return None


def _js_assignments(code: str) -> Dict[str, Any]:
    """
    Read top-level `name = <array or object literal>` assignments without
    running any JS. Other statements are ignored.
    """
    masked = _mask_js(code)
    found: Dict[str, Any] = {}
    pos = 0
    for m in _ASSIGN_RE.finditer(masked):
        start = m.end()
        if m.start() < pos or start >= len(masked) or masked[start] not in "[{":
            continue
        end = _literal_end(masked, start)
        if end is None:
            continue
        # the literal is consumed even when it fails to parse
        pos = end
        try:
            found.setdefault(m.group(1), json5.loads(code[start:end]))
        except ValueError:
            continue
    return found


def _pick_assignment(found: Dict[str, Any]) -> Any:
    for name in _PREFERRED_NAMES:
        if name in found:
            return found[name]
    return next(iter(found.values()))


def _parse_js(code: str) -> Any:
    found = _js_assignments(code)
    if not found:
        raise BankParseError(_PARSE_MSG)
    return _pick_assignment(found)


def _parse_html(page: str) -> Any:
    soup = BeautifulSoup(page, "html.parser")
    found: Dict[str, Any] = {}
    for script in soup.find_all("script"):
        body = script.string or ""
        if not body.strip():
            continue
        for name, value in _js_assignments(body).items():
            found.setdefault(name, value)
    if not found:
        raise BankParseError(_PARSE_MSG)
    return _pick_assignment(found)


def _iter_entries(data: Any) -> Iterable[Dict[str, Any]]:
    if isinstance(data, list):
        for obj in data:
            if isinstance(obj, dict):
                yield obj
        return

    if isinstance(data, dict) and data and all(isinstance(v, list) for v in data.values()):
        # JSON grouped by source: {"MIT 2019": [...], "Princeton 2020": [...]}
        for group, items in data.items():
            for obj in items:
                if isinstance(obj, dict):
                    if "source" in obj:
                        yield obj
                    else:
                        yield {**obj, "source": group}
        return

    raise BankParseError(_SHAPE_MSG)


def parse_bank(raw: str) -> List[Dict[str, Any]]:
    s = raw.lstrip("\ufeff").strip()
    if not s:
        raise BankParseError(_PARSE_MSG)

    if s.startswith("<"):
        data = _parse_html(s)
    elif s[0] in "[{":
        try:
            data = json.loads(s)
        except json.JSONDecodeError as exc:
            raise BankParseError(_PARSE_MSG) from exc
    else:
        data = _parse_js(s)

    return list(_iter_entries(data))


def _first_present(raw: Dict[str, Any], keys: Iterable[str]) -> Any:
    for key in keys:
        if key in raw:
            return raw[key]
    return None


def normalize_entries(entries: Iterable[Dict[str, Any]]) -> List[Question]:
    questions: List[Question] = []
    skipped = 0
    for raw in entries:
        text = _first_present(raw, _TEXT_KEYS)
        source = raw.get("source")
        try:
            q = Question(
                text=text if isinstance(text, str) else "",
                correct_order=_first_present(raw, _ORDER_KEYS),
                source=str(source) if source is not None else None,
            )
        except ValidationError:
            skipped += 1
            continue
        questions.append(q)

    if skipped:
        logger.debug("Skipped %d invalid question entries", skipped)
    if not questions:
        raise EmptyBankError(_EMPTY_MSG)
    return questions


# --- Loading ----------------------------------------------------------------------


def load_questions(
    source: str = DEFAULT_BANK_URL,
    *,
    shuffle: bool = True,
    rng: Optional[random.Random] = None,
    client: Optional[httpx.Client] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> List[Question]:
    raw = fetch_bank_text(source, client=client, timeout=timeout)
    questions = normalize_entries(parse_bank(raw))

    if shuffle:
        (rng or random.Random()).shuffle(questions)

    logger.info("Loaded %d questions", len(questions))
    return questions


class QuestionBank:
    def __init__(
        self,
        source: str = DEFAULT_BANK_URL,
        *,
        shuffle: bool = True,
        seed: Optional[int] = None,
        client: Optional[httpx.Client] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.source = source
        self.shuffle = shuffle
        self.timeout = timeout
        self._rng = random.Random(seed)
        self._client = client
        self._questions: List[Question] = []

    def load(self) -> List[Question]:
        if not self._questions:
            self.reload()
        return self._questions

    def reload(self) -> int:
        self._questions = load_questions(
            self.source,
            shuffle=self.shuffle,
            rng=self._rng,
            client=self._client,
            timeout=self.timeout,
        )
        return len(self._questions)
