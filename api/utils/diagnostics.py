"""
File-based diagnostic sink for generation runs.

Keeps the raw prompt/response pairs of failed steps (and the first raw response
of each run) for offline inspection. Nothing here is ever shown to end users.
"""

from __future__ import annotations

import traceback
from datetime import datetime, timezone
from pathlib import Path

from api.utils.logger import configure_logging

logger = configure_logging()


def file_timestamp(now: datetime | None = None) -> str:
    """ISO timestamp safe for file names: 2024-05-01T10:20:30.123Z -> 2024_05_01T10_20_30_123Z."""
    now = now or datetime.now(timezone.utc)
    iso = now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"
    return iso.replace(":", "_").replace(".", "_").replace("-", "_")


class FileDiagnosticSink:
    def __init__(self, root: str | Path = "error_logs", *, initial_dir: str | Path | None = None):
        self.root = Path(root)
        self.initial_dir = Path(initial_dir) if initial_dir is not None else self.root / "initial_responses"

    def save_initial_response(self, text: str) -> Path:
        self.initial_dir.mkdir(parents=True, exist_ok=True)
        path = self.initial_dir / f"initial_response_{file_timestamp()}.txt"
        path.write_text(text, encoding="utf-8")
        logger.info("initial AI response saved to %s", path)
        return path

    def save_error(self, step: str, prompt: str, response: str, error: BaseException) -> Path:
        self.root.mkdir(parents=True, exist_ok=True)
        stamp = file_timestamp()
        safe_step = "".join(c if c.isalnum() or c in "-_" else "_" for c in step)
        prompt_path = self.root / f"prompt_error_{stamp}_{safe_step}.txt"
        response_path = self.root / f"response_error_{stamp}_{safe_step}.txt"

        details = "".join(traceback.format_exception(type(error), error, error.__traceback__))
        prompt_path.write_text(prompt, encoding="utf-8")
        response_path.write_text(
            f"--- AI RESPONSE THAT CAUSED ERROR ---\n{response}\n\n"
            f"--- ERROR DETAILS ---\nError during step: {step}\n\n{details}",
            encoding="utf-8",
        )
        logger.warning("error log for step %r saved to %s", step, response_path)
        return response_path
