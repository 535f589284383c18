# utils/config.py — runtime settings (environment variables only)
from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
import os

ROOT = Path(__file__).resolve().parent.parent


@dataclass(frozen=True)
class Settings:
    surveys_dir: Path
    survey_key: str = "phq9"
    log_level: str = "INFO"
    env: str = "dev"

    @property
    def is_dev(self) -> bool:
        return self.env.lower() in ("dev", "development", "local")


def load_settings() -> Settings:
    """
    PHQ9_SURVEYS_DIR  survey definition folder (default: <project>/surveys)
    PHQ9_SURVEY_KEY   definition to run (default: phq9)
    PHQ9_LOG_LEVEL    DEBUG / INFO / WARNING ... (default: INFO)
    PHQ9_ENV          dev → readable logs, anything else → key=value logs
    """
    surveys_dir = os.getenv("PHQ9_SURVEYS_DIR") or str(ROOT / "surveys")
    return Settings(
        surveys_dir=Path(surveys_dir),
        survey_key=os.getenv("PHQ9_SURVEY_KEY", "phq9").strip() or "phq9",
        log_level=os.getenv("PHQ9_LOG_LEVEL", "INFO").strip() or "INFO",
        env=os.getenv("PHQ9_ENV", "dev").strip() or "dev",
    )
