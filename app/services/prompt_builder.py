import os
from string import Template
from typing import List
from ..catalog import DIFFICULTY_GUIDELINES, LANGUAGES, TOPIC_FOCUS, companies_for
from ..models import GenerationRequest, Mode

PROMPT_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "prompts")

def section_key(language: str, mode: Mode) -> str | None:
	suffix = mode.section_suffix
	if suffix is None:
		return None
	return f"{language.upper()}_{suffix}:"

def _load(name: str) -> str:
	with open(os.path.join(PROMPT_DIR, name), "r", encoding="utf-8") as f:
		return f.read()

class PromptBuilder:
	def __init__(self) -> None:
		self.format_block = _load("dsa_format.txt")
		self.templates = {mode: Template(_load(f"dsa_{mode.value}.txt")) for mode in Mode}

	def _section_lines(self, request: GenerationRequest) -> List[str]:
		lines: List[str] = []
		for lang in request.languages:
			name = LANGUAGES.get(lang, lang)
			if request.mode is Mode.IMPLEMENTATION:
				lines.append(f"{section_key(lang, request.mode)} [Complete working solution in {name} with input/output handling and comments]")
			else:
				lines.append(f"{section_key(lang, request.mode)} [Function skeleton only in {name}: signature with a 'Your code here' comment, no solution logic]")
		return lines

	def _extra_context(self, request: GenerationRequest) -> str:
		lines = []
		if request.context.strip():
			lines.append(f"- Additional Context: {request.context.strip()}")
		if request.hint.strip():
			lines.append(f"- Hint/Focus: {request.hint.strip()}")
		return "\n".join(lines)

	def build(self, request: GenerationRequest) -> str:
		companies = companies_for(request.role)
		return self.templates[request.mode].substitute(
			companies=companies,
			role=request.role,
			topic=request.topic,
			focus=TOPIC_FOCUS.get(request.topic, request.topic),
			difficulty=request.difficulty,
			guidance=DIFFICULTY_GUIDELINES[request.difficulty],
			languages=", ".join(LANGUAGES.get(lang, lang) for lang in request.languages),
			extra_context=self._extra_context(request),
			format=self.format_block,
			sections="\n".join(self._section_lines(request)),
		)
