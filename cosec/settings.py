"""
cosec.settings
==============

Configuration settings for cosec.

Storage locations are plain module constants that can be overridden via
environment variables; the remaining options live on a pydantic
``Settings`` model loaded from the environment (or a ``.env`` file).
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings

# ---------------------------------------------------------------------------
# Base directories
# ---------------------------------------------------------------------------
BASE_DIR = Path(__file__).resolve().parent.parent

# Storage settings
# ---------------------------------------------------------------------------
DB_FILE = os.environ.get("COSEC_DB_FILE", BASE_DIR / "cosec.db")
DB_URL = f"sqlite:///{DB_FILE}"
DB_ECHO = os.environ.get("COSEC_DB_ECHO", "False").lower() == "true"

# Key under which the whole company aggregate is stored
STORAGE_KEY = os.environ.get("COSEC_STORAGE_KEY", "companyData")


# ---------------------------------------------------------------------------
# Pydantic settings model
# ---------------------------------------------------------------------------
class Settings(BaseSettings):
    """Pydantic model for application settings, loaded from environment variables."""

    export_dir: Path = Field(BASE_DIR / "exports", description="Directory generated documents are written to")
    document_format: str = Field("docx", pattern="^(pdf|docx)$", description="Nominal extension for generated documents")
    upcoming_window_days: int = Field(30, ge=1, description="Look‑ahead window for upcoming filings")
    log_level: str = Field("INFO", description="Logging level for the maintenance CLI")

    class Config:
        """Configuration for the settings model."""
        env_prefix = "COSEC_"
        env_file = ".env"
        case_sensitive = False

# Initialize settings
settings = Settings()
