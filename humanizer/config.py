import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

# Load .env from project root
load_dotenv()

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


@dataclass(frozen=True)
class Settings:
    base_url: str = 'https://api.openai.com/v1'
    model: str = 'gpt-4o-mini'
    rewrite_max_tokens: int = 1200
    detect_max_tokens: int = 200
    timeout: Optional[float] = 120.0
    log_level: str = 'INFO'
    export_filename: str = 'humanizado.txt'


def _optional_float(value: Optional[str]) -> Optional[float]:
    if value is None or not value.strip():
        return Settings.timeout
    if value.strip().lower() == 'none':
        return None
    return float(value)


def load_settings() -> Settings:
    return Settings(
        base_url=os.getenv('OPENAI_BASE_URL', Settings.base_url),
        model=os.getenv('OPENAI_MODEL', Settings.model),
        rewrite_max_tokens=int(os.getenv('REWRITE_MAX_TOKENS', Settings.rewrite_max_tokens)),
        detect_max_tokens=int(os.getenv('DETECT_MAX_TOKENS', Settings.detect_max_tokens)),
        timeout=_optional_float(os.getenv('LLM_TIMEOUT')),
        log_level=os.getenv('LOG_LEVEL', Settings.log_level).upper(),
        export_filename=os.getenv('EXPORT_FILENAME', Settings.export_filename),
    )


def configure_logging(level: str = 'INFO'):
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)
    # keep request urls and headers out of the app log
    logging.getLogger('urllib3').setLevel(logging.WARNING)
