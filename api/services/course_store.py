"""
Per-user flat-file course store.

Layout: <root>/<user_id>/courses/course_<timestamp>.txt
Course text is stored and returned verbatim; clients re-parse it.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import List

from api.utils.diagnostics import file_timestamp
from api.utils.logger import configure_logging

logger = configure_logging()

_SAFE_NAME = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")


class InvalidNameError(ValueError):
    pass


class CourseNotFoundError(LookupError):
    pass


def _check_name(value: str, what: str) -> str:
    if not _SAFE_NAME.match(value or "") or ".." in value:
        raise InvalidNameError(f"Invalid {what}: {value!r}")
    return value


class CourseStore:
    def __init__(self, root: str | Path = "users"):
        self.root = Path(root)

    def _courses_dir(self, user_id: str) -> Path:
        return self.root / _check_name(user_id, "user id") / "courses"

    def list_courses(self, user_id: str) -> List[str]:
        """Course file names for a user; a user without courses is not an error."""
        directory = self._courses_dir(user_id)
        if not directory.exists():
            return []
        return sorted(p.name for p in directory.iterdir() if p.is_file() and p.suffix == ".txt")

    def read_course(self, user_id: str, course_name: str) -> str:
        path = self._courses_dir(user_id) / _check_name(course_name, "course name")
        if not path.is_file():
            raise CourseNotFoundError(course_name)
        return path.read_text(encoding="utf-8")

    def save_course(self, user_id: str, content: str) -> str:
        directory = self._courses_dir(user_id)
        directory.mkdir(parents=True, exist_ok=True)
        stamp = file_timestamp()
        name = f"course_{stamp}.txt"
        suffix = 1
        while (directory / name).exists():
            name = f"course_{stamp}_{suffix}.txt"
            suffix += 1
        (directory / name).write_text(content, encoding="utf-8")
        logger.info("course saved user_id=%s file=%s", user_id, name)
        return name


def save_generated_course(directory: str | Path, content: str) -> Path:
    """Keep a copy of every generated course outside any user's store."""
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"course_{file_timestamp()}.txt"
    path.write_text(content, encoding="utf-8")
    logger.info("course generated and saved to %s", path)
    return path
