import os
from pydantic import BaseModel
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseModel):
    gemini_api_key: str | None = os.getenv("GEMINI_API_KEY")
    gemini_model: str = os.getenv("GEMINI_MODEL", "gemini-1.5-flash")
    gemini_temperature: float = float(os.getenv("GEMINI_TEMPERATURE", "0.7"))
    google_sheets_client_email: str | None = os.getenv("GOOGLE_SHEETS_CLIENT_EMAIL")
    google_sheets_private_key: str | None = os.getenv("GOOGLE_SHEETS_PRIVATE_KEY")
    google_sheets_id: str | None = os.getenv("GOOGLE_SHEETS_ID")
    google_sheets_tab: str = os.getenv("GOOGLE_SHEETS_TAB", "Sheet1")
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

    @property
    def sheets_configured(self) -> bool:
        return bool(self.google_sheets_client_email and self.google_sheets_private_key and self.google_sheets_id)

settings = Settings()
