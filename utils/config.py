import os
from dataclasses import dataclass
from typing import List

from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    supabase_url: str
    supabase_key: str
    env: str
    log_level: str

    def validate(self) -> List[str]:
        """Return the names of required variables that are missing."""
        missing = []
        if not self.supabase_url:
            missing.append("SUPABASE_URL")
        if not self.supabase_key:
            missing.append("SUPABASE_ANON_KEY")
        return missing


def _getenv(name: str, default: str = "") -> str:
    return (os.environ.get(name) or default).strip()


def load_settings() -> Settings:
    load_dotenv()
    return Settings(
        supabase_url=_getenv("SUPABASE_URL"),
        supabase_key=_getenv("SUPABASE_ANON_KEY") or _getenv("SUPABASE_KEY"),
        env=_getenv("CRM_ENV", "development"),
        log_level=_getenv("CRM_LOG_LEVEL", "INFO").upper(),
    )
