import logging
from typing import Any, Dict, List
from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from ..catalog import MODE_LABELS
from ..config import Settings, settings as default_settings
from ..models import ExportResponse, GenerationRequest, QuestionRecord

logger = logging.getLogger("dsa_question_generator")

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]
TOKEN_URI = "https://oauth2.googleapis.com/token"
HEADER_ROW = ["Role", "Language", "Problem", "Hint", "Mode", "Difficulty"]

class ExportError(RuntimeError):
    pass

def build_header_row() -> List[str]:
    return list(HEADER_ROW)

def language_label(question: QuestionRecord) -> str:
    return question.language.upper() if question.language else "N/A"

def consolidate_problem_text(question: QuestionRecord) -> str:
    """Fold statement, worked example, constraints and code into one cell."""
    parts = [
        question.title,
        question.problem_statement,
        f"Example:\nInput: {question.sample_input}\nOutput: {question.sample_output}",
        f"Constraints:\n{question.constraints}",
    ]
    if question.implementation:
        parts.append(f"Implementation ({language_label(question)}):\n{question.implementation}")
    return "\n\n".join(parts)

def build_rows(questions: List[QuestionRecord], request: GenerationRequest) -> List[List[str]]:
    mode_label = MODE_LABELS[request.mode.value]
    return [
        [
            request.role,
            language_label(q),
            consolidate_problem_text(q),
            q.hint or "",
            mode_label,
            request.difficulty.upper(),
        ]
        for q in questions
    ]

def summarize_questions(questions: List[QuestionRecord]) -> Dict[str, List[str]]:
    summary: Dict[str, List[str]] = {}
    for q in questions:
        summary.setdefault(q.title, []).append(language_label(q))
    return summary

class SheetsExporter:
    def __init__(self, config: Settings | None = None) -> None:
        self.settings = config or default_settings

    @property
    def configured(self) -> bool:
        return self.settings.sheets_configured

    def _service(self) -> Any:
        info = {
            "type": "service_account",
            "client_email": self.settings.google_sheets_client_email,
            "private_key": (self.settings.google_sheets_private_key or "").replace("\\n", "\n"),
            "token_uri": TOKEN_URI,
        }
        credentials = service_account.Credentials.from_service_account_info(info, scopes=SCOPES)
        return build("sheets", "v4", credentials=credentials, cache_discovery=False)

    def _write_header(self, values_api: Any, tab: str) -> None:
        try:
            values_api.update(
                spreadsheetId=self.settings.google_sheets_id,
                range=f"{tab}!A1:F1",
                valueInputOption="RAW",
                body={"values": [build_header_row()]},
            ).execute()
        except HttpError:
            logger.info({"event": "sheet_header_skipped", "reason": "header_update_rejected"})

    def export(self, questions: List[QuestionRecord], request: GenerationRequest) -> ExportResponse:
        rows = build_rows(questions, request)
        summary = summarize_questions(questions)
        if not self.configured:
            logger.info({
                "event": "sheets_dry_run",
                "count": len(rows),
                "questions": [f"{q.title} ({language_label(q)})" for q in questions],
                "mode": request.mode.value,
            })
            return ExportResponse(
                message=f"{len(questions)} questions would be sent to Google Sheets",
                note="Google Sheets credentials not configured. Questions logged only.",
                updated_rows=0,
                question_summary=summary,
            )
        tab = self.settings.google_sheets_tab
        try:
            values_api = self._service().spreadsheets().values()
            self._write_header(values_api, tab)
            result = values_api.append(
                spreadsheetId=self.settings.google_sheets_id,
                range=f"{tab}!A:F",
                valueInputOption="RAW",
                insertDataOption="INSERT_ROWS",
                body={"values": rows},
            ).execute()
        except Exception as exc:
            logger.exception("sheets_append_failed")
            raise ExportError(str(exc)) from exc
        updated_rows = (result.get("updates") or {}).get("updatedRows", 0)
        logger.info({"event": "sheets_append_done", "count": len(rows), "updated_rows": updated_rows})
        return ExportResponse(
            message=f"{len(questions)} question entries successfully sent to Google Sheets",
            updated_rows=updated_rows,
            question_summary=summary,
        )
