from fastapi import FastAPI, Request
from fastapi.responses import ORJSONResponse
from fastapi.middleware.cors import CORSMiddleware
import logging
from time import perf_counter
from datetime import datetime, timezone
from .catalog import LANGUAGES, ROLE_COMPANIES, TOPICS, DIFFICULTY_GUIDELINES
from .config import settings
from .models import (
	DebugPromptResponse,
	ErrorResponse,
	ExportFailure,
	ExportRequest,
	ExportResponse,
	GenerateResponse,
	GenerationRequest,
	HealthResponse,
	Mode,
	OptionsResponse,
)
from .services.gemini_client import GeminiQuestionGenerator, GenerationError
from .services.sheets_exporter import ExportError, SheetsExporter

logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s %(message)s")
logger = logging.getLogger("dsa_question_generator")

app = FastAPI(title="DSA Question Generator", default_response_class=ORJSONResponse)

app.add_middleware(
	CORSMiddleware,
	allow_origins=["*"],
	allow_credentials=True,
	allow_methods=["*"],
	allow_headers=["*"],
)

generator = GeminiQuestionGenerator()
exporter = SheetsExporter()

@app.on_event("startup")
def on_startup() -> None:
	logger.info({
		"event": "api_startup",
		"utc_time": datetime.now(timezone.utc).isoformat(),
		"model": settings.gemini_model,
		"gemini_configured": bool(settings.gemini_api_key),
		"sheets_configured": settings.sheets_configured,
	})

@app.middleware("http")
async def timing_middleware(request: Request, call_next):
	start = perf_counter()
	response = await call_next(request)
	duration_ms = int((perf_counter() - start) * 1000)
	logger.debug({
		"event": "request_timing",
		"method": request.method,
		"path": request.url.path,
		"status_code": response.status_code,
		"duration_ms": duration_ms,
	})
	return response

@app.exception_handler(GenerationError)
async def generation_error_handler(request: Request, exc: GenerationError):
	logger.error({"event": "generation_failed", "path": request.url.path, "detail": str(exc)})
	return ORJSONResponse(status_code=500, content=ErrorResponse(error="Failed to generate questions").model_dump())

@app.get("/api/health", response_model=HealthResponse)
def health():
	return HealthResponse(model=settings.gemini_model, sheets_configured=exporter.configured)

@app.get("/api/options", response_model=OptionsResponse)
def options():
	return OptionsResponse(
		roles=list(ROLE_COMPANIES),
		languages=[{"id": lang_id, "name": name} for lang_id, name in LANGUAGES.items()],
		topics=list(TOPICS),
		difficulties=list(DIFFICULTY_GUIDELINES),
		modes=[m.value for m in Mode],
	)

@app.post("/api/generate", response_model=GenerateResponse)
def generate(payload: GenerationRequest):
	logger.debug({"event": "generate_requested", "role": payload.role, "topic": payload.topic, "mode": payload.mode.value, "languages": payload.languages})
	try:
		questions = generator.generate_questions(payload)
	except GenerationError:
		raise
	except Exception:
		logger.exception("generate_failed")
		return ORJSONResponse(status_code=500, content=ErrorResponse(error="Failed to generate questions").model_dump())
	return GenerateResponse(questions=questions)

@app.post("/api/debug/prompt", response_model=DebugPromptResponse)
def debug_prompt(payload: GenerationRequest):
	return DebugPromptResponse(prompt=generator.build_prompt(payload))

@app.post("/api/sheets", response_model=ExportResponse, responses={400: {"model": ErrorResponse}, 500: {"model": ExportFailure}})
def send_to_sheets(payload: ExportRequest):
	if not payload.questions:
		return ORJSONResponse(status_code=400, content=ErrorResponse(error="No questions provided").model_dump())
	try:
		return exporter.export(payload.questions, payload.input_parameters)
	except ExportError as exc:
		failure = ExportFailure(
			error="Failed to connect to Google Sheets",
			details=str(exc),
			fallback=f"{len(payload.questions)} questions logged to console",
		)
		return ORJSONResponse(status_code=500, content=failure.model_dump())
