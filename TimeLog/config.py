from pathlib import Path
from typing import List, Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # --- Core Paths ---
    logs_path: Path = Path(".project-logs/") # Relative to the workspace root

    # --- Time ---
    local_tz: str = "Asia/Kolkata" # Day files are partitioned by local date

    # --- LLM Settings ---
    model_candidates: List[str] = Field( # Tried in order, one attempt each
        default=["gemini-2.5-flash", "gemini-2.0-flash", "gemini-2.0-flash-lite"],
        min_length=1,
    )
    llm_temperature: float = 0.3
    gemini_api_key: Optional[str] = None # Falls back to GEMINI_API_KEY / GOOGLE_API_KEY in the CLI

    # --- Capture ---
    duplicate_window_s: int = 120 # Same prompt inside this window is skipped
    context_radius_chars: int = 1000 # Characters kept either side of the cursor

    model_config = SettingsConfigDict(
        env_prefix="TIMELOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra='ignore'
    )
