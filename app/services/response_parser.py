"""Turns a free-text Gemini completion into a fixed-size list of QuestionRecords.

The completion is expected to hold ``QUESTION n:`` blocks with labelled
sections (``Title:``, ``Problem Statement:`` ...) followed, for code modes,
by ``<LANG>_TEMPLATE:`` / ``<LANG>_IMPLEMENTATION:`` sections. Nothing here
raises on bad input: missing pieces become fallback text and missing blocks
become placeholder records.
"""
import logging
import re
import uuid
from typing import Dict, List, Tuple
from ..catalog import LANGUAGES, fallback_template
from ..models import GenerationRequest, Mode, QuestionRecord
from .prompt_builder import section_key

logger = logging.getLogger("dsa_question_generator")

QUESTIONS_PER_BATCH = 5
HINT_MAX_CHARS = 200
HINT_MIN_SENTENCE = 10

FIELD_LABELS: Tuple[Tuple[str, str], ...] = (
    ("title", "Title"),
    ("problem_statement", "Problem Statement"),
    ("input_format", "Input Format"),
    ("output_format", "Output Format"),
    ("constraints", "Constraints"),
    ("sample_input", "Sample Input"),
    ("sample_output", "Sample Output"),
    ("hint", "Hint"),
)

FIELD_FALLBACKS: Dict[str, str] = {
    "problem_statement": "Problem statement not found",
    "input_format": "Input format not specified",
    "output_format": "Output format not specified",
    "constraints": "Constraints not specified",
    "sample_input": "Sample input not provided",
    "sample_output": "Sample output not provided",
    "hint": "Hint not provided",
}

INCOMPLETE_STATEMENT = "Question generation incomplete. Please try again."
PARSE_ERROR_STATEMENT = "Error parsing question. Please regenerate."

_QUESTION_SPLIT_RE = re.compile(r"QUESTION\s+\d+\s*:", re.IGNORECASE)
_SECTION_HEADER = r"(?-i:\b[A-Z][A-Z0-9]*_(?:IMPLEMENTATION|TEMPLATE)\s*:)"
_BASE_BOUNDARY = "|".join(
    [rf"\b{label}[*\s]*:" for _, label in FIELD_LABELS]
    + [r"\bCOMPLETE IMPLEMENTATIONS\s*:", r"\bFUNCTION TEMPLATES\s*:", _SECTION_HEADER]
)
_BLANK_LINE = r"\n\s*\n"
_BOLD_EDGE_RE = re.compile(r"^\*{2,}\s*|\s*\*{2,}$")

_HINT_SCRUBBERS = (
    re.compile(r"```.*?(?:```|\Z)", re.DOTALL),
    re.compile(r"\b[A-Z][A-Z0-9]*_(?:TEMPLATE|IMPLEMENTATION)\s*:.*?(?=\n\s*\n|\Z)", re.DOTALL | re.IGNORECASE),
    re.compile(
        r"(?:\bclass\s+[A-Z]\w*|\bfunction\s+\w+\s*\(|\bdef\s+\w+\s*\(|\b(?:public|private|protected)\s+[\w<>\[\], ]+?\()"
        r".*?(?=\n\s*\n|\Z)",
        re.DOTALL,
    ),
    re.compile(r"/\*.*?\*/", re.DOTALL),
    re.compile(r"//[^\n]*"),
    re.compile(r"\{.*?\}", re.DOTALL),
    re.compile(r"\(.*?\)", re.DOTALL),
)
_SENTENCE_END_RE = re.compile(r"[.!?]\s+")


def clean_hint(text: str) -> str:
    """Strip code the model echoed into a hint and keep one plain sentence."""
    cleaned = text or ""
    previous = None
    # one scrubber can expose a match for another, so run to a fixed point
    while cleaned != previous:
        previous = cleaned
        for scrubber in _HINT_SCRUBBERS:
            cleaned = scrubber.sub("", cleaned)
        cleaned = re.sub(r"\s+", " ", cleaned).strip()
    if not cleaned:
        return ""
    first = _SENTENCE_END_RE.split(cleaned, maxsplit=1)[0].strip()
    if HINT_MIN_SENTENCE < len(first) < HINT_MAX_CHARS:
        return first
    return cleaned[:HINT_MAX_CHARS].strip()


def _strip_code_fences(text: str) -> str:
    t = text.strip()
    if t.startswith("```"):
        parts = t.split("\n", 1)
        t = parts[1] if len(parts) == 2 else ""
    if t.endswith("```"):
        t = t[:-3]
    return t.strip()


def _clean_value(text: str) -> str:
    # drop markdown bold markers left around labels
    return _BOLD_EDGE_RE.sub("", text.strip()).strip()


class ResponseParser:
    def __init__(self, questions_per_batch: int = QUESTIONS_PER_BATCH) -> None:
        self.questions_per_batch = questions_per_batch

    def split_blocks(self, text: str) -> List[str]:
        blocks = _QUESTION_SPLIT_RE.split(text or "")[1:]
        return [b.strip() for b in blocks[: self.questions_per_batch]]

    def _boundary(self, request: GenerationRequest) -> str:
        keys = [section_key(lang, request.mode) for lang in request.languages]
        extra = [re.escape(k[:-1]) + r"\s*:" for k in keys if k]
        return "|".join([_BASE_BOUNDARY] + extra)

    def _extract_fields(self, block: str, boundary: str) -> Tuple[Dict[str, str], int]:
        fields: Dict[str, str] = {}
        tail_start = 0
        for name, label in FIELD_LABELS:
            flags = re.IGNORECASE | re.DOTALL
            if name == "title":
                pattern = rf"\b{label}[*\s]*:[ \t*]*(.+?)[ \t]*(?=\n|{boundary}|\Z)"
                flags = re.IGNORECASE
            elif name == "hint":
                pattern = rf"\b{label}[*\s]*:\s*(.+?)\s*(?={_BLANK_LINE}|{boundary}|\Z)"
            else:
                pattern = rf"\b{label}[*\s]*:\s*(.+?)\s*(?={boundary}|\Z)"
            match = re.search(pattern, block, flags)
            if match:
                value = _clean_value(match.group(1))
                if value:
                    fields[name] = value
                tail_start = max(tail_start, match.end())
        return fields, tail_start

    def _extract_code(self, block: str, tail: str, language: str, request: GenerationRequest) -> str:
        key = section_key(language, request.mode)
        others = [section_key(lang, request.mode) for lang in request.languages if lang != language]
        stops = [re.escape(k[:-1]) + r"\s*:" for k in others] + [_SECTION_HEADER]
        exact = re.search(
            r"\b" + re.escape(key[:-1]) + r"[*\s]*:[ \t*]*(.+?)(?=" + "|".join(stops) + r"|\Z)",
            block,
            re.IGNORECASE | re.DOTALL,
        )
        if exact and _strip_code_fences(exact.group(1)):
            return _strip_code_fences(exact.group(1))

        own = "|".join(re.escape(n) for n in {language, LANGUAGES.get(language, language)})
        other_names = [re.escape(n) for lang in request.languages if lang != language for n in (lang, LANGUAGES.get(lang, lang))]
        loose_stops = [_BLANK_LINE]
        if other_names:
            loose_stops.append(r"(?<!\w)(?:" + "|".join(other_names) + r")(?!\w)")
        loose_stops.append(r"\Z")
        loose = re.search(
            rf"(?<!\w)(?:{own})(?!\w)[^\n]*\n(.+?)(?=" + "|".join(loose_stops) + ")",
            tail,
            re.IGNORECASE | re.DOTALL,
        )
        if loose and _strip_code_fences(loose.group(1)):
            logger.debug({"event": "code_section_loose_match", "language": language})
            return _strip_code_fences(loose.group(1))

        logger.debug({"event": "code_section_missing", "language": language, "block_preview": block[:200]})
        return fallback_template(language)

    def parse_block(self, block: str, index: int, batch_id: str, request: GenerationRequest) -> List[QuestionRecord]:
        boundary = self._boundary(request)
        fields, tail_start = self._extract_fields(block, boundary)
        hint = clean_hint(fields.get("hint", "")) or FIELD_FALLBACKS["hint"]
        base_id = f"{batch_id}-{index + 1}"
        base = {name: fields.get(name, fallback) for name, fallback in FIELD_FALLBACKS.items()}
        base.update(title=fields.get("title", f"Question {index + 1}"), hint=hint)
        tail = block[tail_start:]
        records: List[QuestionRecord] = []
        for language in request.languages:
            implementation = None
            if request.mode is not Mode.PROBLEM:
                implementation = self._extract_code(block, tail, language, request)
            records.append(QuestionRecord(id=f"{base_id}-{language}", base_id=base_id, language=language, implementation=implementation, **base))
        return records

    def placeholders(self, index: int, batch_id: str, request: GenerationRequest, title: str | None = None, statement: str = INCOMPLETE_STATEMENT) -> List[QuestionRecord]:
        base_id = f"{batch_id}-fallback-{index + 1}"
        base = dict(FIELD_FALLBACKS)
        base.update(title=title or f"Question {index + 1}", problem_statement=statement)
        return [QuestionRecord(id=f"{base_id}-{language}", base_id=base_id, language=language, **base) for language in request.languages]

    def parse(self, text: str, request: GenerationRequest) -> List[QuestionRecord]:
        batch_id = f"question-{uuid.uuid4().hex[:8]}"
        blocks = self.split_blocks(text)
        expected = self.questions_per_batch * max(1, len(request.languages))
        records: List[QuestionRecord] = []
        for index in range(self.questions_per_batch):
            if index >= len(blocks):
                records.extend(self.placeholders(index, batch_id, request))
                continue
            try:
                records.extend(self.parse_block(blocks[index], index, batch_id, request))
            except Exception:
                logger.exception("question_block_parse_failed")
                records.extend(self.placeholders(index, batch_id, request, title=f"Generated Question {index + 1}", statement=PARSE_ERROR_STATEMENT))
        while len(records) < expected:
            index = len(records) // max(1, len(request.languages))
            records.extend(self.placeholders(index, batch_id, request))
        logger.debug({"event": "parsed_questions", "blocks": len(blocks), "records": len(records[:expected]), "expected": expected})
        return records[:expected]
