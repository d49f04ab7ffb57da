"""TOML configuration loader for refundtrack."""

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

DEFAULT_DB_PATH = "~/.config/refundtrack/products.db"


@dataclass
class DatabaseConfig:
    path: str = DEFAULT_DB_PATH


@dataclass
class ClaudeReceiptConfig:
    api_key: str = ""
    model: str = "claude-sonnet-4-5-20250929"


@dataclass
class GeminiReceiptConfig:
    api_key: str = ""
    model: str = "gemini-2.0-flash"


@dataclass
class ReceiptConfig:
    backend: str = "claude"
    claude: ClaudeReceiptConfig = field(default_factory=ClaudeReceiptConfig)
    gemini: GeminiReceiptConfig = field(default_factory=GeminiReceiptConfig)


@dataclass
class ReportConfig:
    title: str = "Amazon Review Products Dashboard"
    currency: str = "$"


@dataclass
class LoggingConfig:
    level: str = "WARNING"


@dataclass
class TrackerConfig:
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    receipt: ReceiptConfig = field(default_factory=ReceiptConfig)
    report: ReportConfig = field(default_factory=ReportConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: str | Path | None = None) -> TrackerConfig:
    """Load configuration from a TOML file.

    Falls back to defaults if no path is given or the file doesn't exist.
    Values left empty in the file can be filled from environment variables.
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

    dbs = raw.get("database", {})
    rct = raw.get("receipt", {})
    rpt = raw.get("report", {})
    lg = raw.get("logging", {})

    claude_cfg = rct.get("claude", {})
    gemini_cfg = rct.get("gemini", {})

    # config file → environment variable → default
    db_path = dbs.get("path", "") or os.environ.get("REFUNDTRACK_DB", "") or DEFAULT_DB_PATH
    claude_api_key = claude_cfg.get("api_key", "") or os.environ.get(
        "ANTHROPIC_API_KEY", ""
    )
    gemini_api_key = gemini_cfg.get("api_key", "") or os.environ.get(
        "GEMINI_API_KEY", ""
    )
    log_level = lg.get("level", "") or os.environ.get("REFUNDTRACK_LOG_LEVEL", "") or "WARNING"

    return TrackerConfig(
        database=DatabaseConfig(path=db_path),
        receipt=ReceiptConfig(
            backend=rct.get("backend", "claude"),
            claude=ClaudeReceiptConfig(
                api_key=claude_api_key,
                model=claude_cfg.get("model", "claude-sonnet-4-5-20250929"),
            ),
            gemini=GeminiReceiptConfig(
                api_key=gemini_api_key,
                model=gemini_cfg.get("model", "gemini-2.0-flash"),
            ),
        ),
        report=ReportConfig(
            title=rpt.get("title", "Amazon Review Products Dashboard"),
            currency=rpt.get("currency", "$"),
        ),
        logging=LoggingConfig(level=str(log_level).upper()),
    )
