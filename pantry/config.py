"""TOML configuration loader for the pantry tracker."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomli as tomllib
    except ImportError:
        tomllib = None  # type: ignore[assignment]


@dataclass
class TesseractConfig:
    cmd: str = ""  # empty: use tesseract from PATH
    psm: int = 6


@dataclass
class ClaudeOCRConfig:
    api_key: str = ""
    model: str = "claude-sonnet-4-5-20250929"


@dataclass
class GeminiOCRConfig:
    api_key: str = ""
    model: str = "gemini-2.0-flash"


@dataclass
class OCRConfig:
    backend: str = "tesseract"
    timeout: float = 60.0
    tesseract: TesseractConfig = field(default_factory=TesseractConfig)
    claude: ClaudeOCRConfig = field(default_factory=ClaudeOCRConfig)
    gemini: GeminiOCRConfig = field(default_factory=GeminiOCRConfig)


@dataclass
class DatabaseConfig:
    backend: str = "sqlite"
    path: str = "~/.config/pantry/pantry.db"


@dataclass
class ScanConfig:
    default_category: str = "other"
    expiry_months: int = 1
    notes: str = "Added from scanned receipt"


@dataclass
class PantryConfig:
    ocr: OCRConfig = field(default_factory=OCRConfig)
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    scan: ScanConfig = field(default_factory=ScanConfig)


def load_config(path: str | Path | None = None) -> PantryConfig:
    """Load configuration from a TOML file.

    Falls back to defaults if no path is given or the file doesn't exist.
    API keys and the database path can be overridden via environment
    variables.
    """
    raw: dict = {}

    if path is not None:
        p = Path(path)
        if p.exists():
            if tomllib is None:
                raise ImportError(
                    "tomli is required on Python < 3.11: pip install tomli"
                )
            with open(p, "rb") as f:
                raw = tomllib.load(f)

    ocr = raw.get("ocr", {})
    dbs = raw.get("database", {})
    scn = raw.get("scan", {})

    tesseract_cfg = ocr.get("tesseract", {})
    claude_cfg = ocr.get("claude", {})
    gemini_cfg = ocr.get("gemini", {})

    # Resolve API keys: config file → environment variable
    claude_api_key = claude_cfg.get("api_key", "") or os.environ.get(
        "ANTHROPIC_API_KEY", ""
    )
    gemini_api_key = gemini_cfg.get("api_key", "") or os.environ.get(
        "GEMINI_API_KEY", ""
    )

    # PANTRY_DB_PATH takes precedence over the config file
    db_path = os.environ.get("PANTRY_DB_PATH", "") or dbs.get(
        "path", DatabaseConfig.path
    )

    return PantryConfig(
        ocr=OCRConfig(
            backend=ocr.get("backend", "tesseract"),
            timeout=float(ocr.get("timeout", 60.0)),
            tesseract=TesseractConfig(
                cmd=tesseract_cfg.get("cmd", ""),
                psm=tesseract_cfg.get("psm", 6),
            ),
            claude=ClaudeOCRConfig(
                api_key=claude_api_key,
                model=claude_cfg.get("model", "claude-sonnet-4-5-20250929"),
            ),
            gemini=GeminiOCRConfig(
                api_key=gemini_api_key,
                model=gemini_cfg.get("model", "gemini-2.0-flash"),
            ),
        ),
        database=DatabaseConfig(
            backend=dbs.get("backend", "sqlite"),
            path=db_path,
        ),
        scan=ScanConfig(
            default_category=scn.get("default_category", "other"),
            expiry_months=scn.get("expiry_months", 1),
            notes=scn.get("notes", "Added from scanned receipt"),
        ),
    )
