from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Dict, List, Literal, Optional
from .catalog import TOPICS

Difficulty = Literal["easy", "medium", "hard"]

class Mode(str, Enum):
    IMPLEMENTATION = "implementation"
    TEMPLATE = "template"
    PROBLEM = "problem"

    @property
    def section_suffix(self) -> str | None:
        if self is Mode.IMPLEMENTATION:
            return "IMPLEMENTATION"
        if self is Mode.TEMPLATE:
            return "TEMPLATE"
        return None

class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

class GenerationRequest(CamelModel):
    role: str = "Software Engineer"
    languages: List[str] = Field(..., min_length=1)
    context: str = ""
    hint: str = ""
    mode: Mode = Mode.TEMPLATE
    difficulty: Difficulty = "medium"
    topic: str = "Arrays"

    @field_validator("languages")
    @classmethod
    def _normalize_languages(cls, value: List[str]) -> List[str]:
        seen: List[str] = []
        for lang in value:
            norm = (lang or "").strip().lower()
            if norm and norm not in seen:
                seen.append(norm)
        if not seen:
            raise ValueError("at least one language is required")
        return seen

    @field_validator("topic")
    @classmethod
    def _known_topic(cls, value: str) -> str:
        if value not in TOPICS:
            raise ValueError(f"unknown topic: {value}")
        return value

class QuestionRecord(CamelModel):
    id: str
    base_id: str
    title: str
    problem_statement: str
    input_format: str
    output_format: str
    constraints: str
    sample_input: str
    sample_output: str
    implementation: Optional[str] = None
    hint: Optional[str] = None
    language: Optional[str] = None

class GenerateResponse(CamelModel):
    questions: List[QuestionRecord]

class ErrorResponse(CamelModel):
    error: str

class ExportRequest(CamelModel):
    questions: List[QuestionRecord] = Field(default_factory=list)
    input_parameters: GenerationRequest

class ExportResponse(CamelModel):
    success: bool = True
    message: str
    updated_rows: int = 0
    question_summary: Dict[str, List[str]] = Field(default_factory=dict)
    note: Optional[str] = None

class ExportFailure(CamelModel):
    success: bool = False
    error: str
    details: Optional[str] = None
    fallback: Optional[str] = None

class DebugPromptResponse(CamelModel):
    prompt: str

class OptionsResponse(CamelModel):
    roles: List[str]
    languages: List[Dict[str, str]]
    topics: List[str]
    difficulties: List[str]
    modes: List[str]

class HealthResponse(CamelModel):
    status: str = "ok"
    model: str
    sheets_configured: bool
