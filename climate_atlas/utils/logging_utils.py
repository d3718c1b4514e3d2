# climate_atlas/utils/logging_utils.py
# ======================================================================================
# Climate Atlas
# Logging Utilities: config-driven console / file / JSONL logging
# --------------------------------------------------------------------------------------
# cfg["logging"] keys
#   level    : "DEBUG" | "INFO" | ...        (default INFO)
#   to_file  : write <dir>/atlas_<run_id>.log   (plain text)
#   to_json  : write <dir>/atlas_<run_id>.jsonl (one JSON object per record)
#   dir      : log directory                  (default "logs")
#
# Only the CLI calls init_logging(); engine modules just ask for get_logger("atlas.x").
# Handlers installed here are tagged, so a second init_logging() replaces them
# without touching handlers somebody else put on the root logger.
#
# License
#   MIT (c) 2025 Climate Atlas contributors
# ======================================================================================

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

_TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_OWNED = "_climate_atlas_handler"


class _JsonLineFormatter(logging.Formatter):
    """Render a record as a single JSON line carrying the run id."""

    def __init__(self, run_id: str) -> None:
        super().__init__()
        self.run_id = run_id

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "run_id": self.run_id,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


def _own(handler: logging.Handler, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    setattr(handler, _OWNED, True)
    return handler


def init_logging(cfg: Optional[Dict[str, Any]], run_id: Optional[str] = None) -> Dict[str, Path]:
    """
    Install console (+ optional file / JSONL) handlers on the root logger.

    Returns the log files opened for this run, keyed "log" / "jsonl".
    """
    log_cfg = (cfg or {}).get("logging") or {}
    level = getattr(logging, str(log_cfg.get("level", "INFO")).upper(), logging.INFO)
    run_tag = run_id or datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")

    root = logging.getLogger()
    for h in [h for h in root.handlers if getattr(h, _OWNED, False)]:
        root.removeHandler(h)
        h.close()
    root.setLevel(level)

    root.addHandler(_own(logging.StreamHandler(sys.stdout), level, logging.Formatter(_TEXT_FORMAT)))

    paths: Dict[str, Path] = {}
    log_dir = Path(log_cfg.get("dir", "logs"))
    if log_cfg.get("to_file", False):
        paths["log"] = log_dir / f"atlas_{run_tag}.log"
    if log_cfg.get("to_json", False):
        paths["jsonl"] = log_dir / f"atlas_{run_tag}.jsonl"
    for kind, path in paths.items():
        path.parent.mkdir(parents=True, exist_ok=True)
        fmt = _JsonLineFormatter(run_tag) if kind == "jsonl" else logging.Formatter(_TEXT_FORMAT)
        root.addHandler(_own(logging.FileHandler(path, encoding="utf-8"), level, fmt))

    root.debug("Logging initialized (run_id=%s, files=%s)", run_tag, sorted(paths))
    return paths


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
