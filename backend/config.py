# backend/config.py
from __future__ import annotations
from pathlib import Path
import os
from dotenv import load_dotenv

# Load exactly backend/.env (do NOT call load_dotenv() without a path)
ENV_FILE = Path(__file__).with_name(".env")
load_dotenv(ENV_FILE, override=False)


def get_data_dir() -> Path:
    # Fallback to backend/data when DATA_DIR is not set
    return Path(os.getenv("DATA_DIR", str(Path(__file__).with_name("data")))).resolve()


# Optional: a simple runtime override helper (handy in tests)
def set_data_dir(path: str | Path) -> Path:
    p = Path(path).resolve()
    os.environ["DATA_DIR"] = str(p)
    return p


def get_settings():
    return Settings


class Settings:
    # Text generation (Groq's OpenAI-compatible endpoint)
    GROQ_API_KEY: str = os.getenv("GROQ_API_KEY", "")
    GROQ_MODEL: str = os.getenv("GROQ_MODEL", "llama-3.1-8b-instant")
    GROQ_BASE_URL: str = os.getenv("GROQ_BASE_URL", "https://api.groq.com/openai/v1")
    HTTP_TIMEOUT_S: float = float(os.getenv("HTTP_TIMEOUT_S", "15.0"))

    # Storage: "memory" or "json" (records.json under DATA_DIR)
    RECORD_STORE: str = os.getenv("RECORD_STORE", "memory")
    RECORDS_FILE: str = os.getenv("RECORDS_FILE", "records.json")

    EMISSION_FACTORS_PRESET: str = os.getenv("EMISSION_FACTORS_PRESET", "ecovision_default")
    EMISSION_FACTORS_FILE: str = os.getenv("EMISSION_FACTORS_FILE", "")

    DIAGNOSTICS_PROVIDER: str = os.getenv("DIAGNOSTICS_PROVIDER", "static")
    DIAGNOSTICS_THERMAL_TEXT: str = os.getenv("DIAGNOSTICS_THERMAL_TEXT", "")
    DIAGNOSTICS_ACOUSTIC_TEXT: str = os.getenv("DIAGNOSTICS_ACOUSTIC_TEXT", "")

    CORS_ALLOW_ORIGINS: str = os.getenv("CORS_ALLOW_ORIGINS", "http://localhost:3000")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


settings = Settings
