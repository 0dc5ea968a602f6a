from typing import Any, Dict, List
import logging
import google.generativeai as genai
from time import perf_counter
from ..config import Settings, settings as default_settings
from ..models import GenerationRequest, QuestionRecord
from .prompt_builder import PromptBuilder
from .response_parser import ResponseParser

logger = logging.getLogger("dsa_question_generator")

class GenerationError(RuntimeError):
    """The model call failed or produced nothing usable."""

class GeminiQuestionGenerator:
    def __init__(self, config: Settings | None = None) -> None:
        self.settings = config or default_settings
        if self.settings.gemini_api_key:
            genai.configure(api_key=self.settings.gemini_api_key)
        self.model_name = self.settings.gemini_model
        self.generation_config: Dict[str, Any] = {
            "temperature": self.settings.gemini_temperature,
            "top_p": 0.95,
            "top_k": 40,
        }
        self.prompt_builder = PromptBuilder()
        self.parser = ResponseParser()
        try:
            self.model_for_tokens = genai.GenerativeModel(self.model_name)
        except Exception:
            self.model_for_tokens = None

    def _count_tokens(self, text: str) -> int | None:
        if not self.model_for_tokens or not self.settings.gemini_api_key:
            return None
        try:
            info = self.model_for_tokens.count_tokens(text)
            return getattr(info, "total_tokens", None)
        except Exception:
            return None

    def build_prompt(self, request: GenerationRequest) -> str:
        return self.prompt_builder.build(request)

    def _response_text(self, response: Any) -> str:
        raw_text = ""
        try:
            raw_text = (response.text or "").strip()
        except Exception:
            # .text raises when the candidate was blocked or has several parts
            raw_text = ""
        if not raw_text and getattr(response, "candidates", None):
            try:
                parts = response.candidates[0].content.parts
                raw_text = "".join(getattr(p, "text", "") for p in parts).strip()
            except Exception:
                raw_text = ""
        return raw_text

    def complete(self, prompt: str) -> str:
        if not self.settings.gemini_api_key:
            logger.warning({"event": "gemini_no_api_key"})
            raise GenerationError("GEMINI_API_KEY is not configured")
        input_tokens = self._count_tokens(prompt)
        logger.debug({"event": "gemini_request", "model": self.model_name, "input_tokens": input_tokens})
        try:
            model = genai.GenerativeModel(self.model_name, generation_config=self.generation_config)
            t0 = perf_counter()
            response = model.generate_content(prompt)
            latency_ms = int((perf_counter() - t0) * 1000)
        except Exception as exc:
            raise GenerationError(f"gemini call failed: {exc}") from exc
        raw_text = self._response_text(response)
        output_tokens = None
        usage = getattr(response, "usage_metadata", None)
        if usage is not None:
            output_tokens = getattr(usage, "candidates_token_count", None)
        logger.debug({"event": "gemini_response", "preview": raw_text[:200], "latency_ms": latency_ms, "output_tokens": output_tokens})
        if not raw_text:
            raise GenerationError("gemini returned an empty completion")
        return raw_text

    def generate_questions(self, request: GenerationRequest) -> List[QuestionRecord]:
        prompt = self.build_prompt(request)
        raw_text = self.complete(prompt)
        questions = self.parser.parse(raw_text, request)
        logger.info({
            "event": "questions_generated",
            "role": request.role,
            "topic": request.topic,
            "difficulty": request.difficulty,
            "mode": request.mode.value,
            "languages": request.languages,
            "count": len(questions),
        })
        return questions
