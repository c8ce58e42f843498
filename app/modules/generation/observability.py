"""Append-only log of replies that failed shape validation.

Each line is a JSON object so the file can be grepped or loaded later when
tuning prompts.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

from app.core.logging import get_logger

logger = get_logger(__name__)

PROMPT_LIMIT = 500
RESPONSE_LIMIT = 2000


class BadResponseLog:
    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def record(self, endpoint: str, prompt: str, response: Optional[str]) -> dict:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "endpoint": endpoint,
            "prompt": (prompt or "")[:PROMPT_LIMIT],
            "response": (response or "")[:RESPONSE_LIMIT],
        }
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("a", encoding="utf-8") as fh:
                fh.write(json.dumps(entry) + "\n")
        except OSError as e:
            logger.error(f"Could not append to bad response log {self.path}: {e}")
        logger.info(
            f"Recorded unvalidated reply for {endpoint}", extra={"task": endpoint}
        )
        return entry
