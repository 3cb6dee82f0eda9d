"""Report storage: a structured (JSON) and a Markdown artifact per report."""

import json
import logging
import os
import re
from abc import ABC, abstractmethod
from datetime import date
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from app.config import settings
from app.core.errors import NotFoundError, StorageError
from app.core.reporting import generate_markdown
from app.models.report import WeeklyReport

logger = logging.getLogger(__name__)

REPORT_KEY_PATTERN = re.compile(r"^weekly-(\d{4}-\d{2}-\d{2})$")


def parse_report_key(key: str) -> Optional[date]:
    """Date embedded in a report key, or None if the key is not a report key."""
    match = REPORT_KEY_PATTERN.match(key)
    if not match:
        return None
    try:
        return date.fromisoformat(match.group(1))
    except ValueError:
        return None


def sort_report_keys(keys: List[str]) -> List[str]:
    """Valid report keys, newest first (by parsed date)."""
    dated = [(parse_report_key(key), key) for key in keys]
    return [key for day, key in sorted((d for d in dated if d[0] is not None), reverse=True)]


class ReportStore(ABC):
    """Persists both forms of a weekly report under one key."""

    def save(self, report: WeeklyReport) -> str:
        """Write the JSON and Markdown forms together; return the key."""
        key = report.key
        markdown = generate_markdown(report)
        self._write_pair(key, json.dumps(report.to_json_dict(), indent=2), markdown)
        logger.info(f"Saved report {key}")
        return key

    def read(self, key: str) -> Tuple[WeeklyReport, str]:
        """Return (report, markdown); NotFoundError if either form is missing."""
        if parse_report_key(key) is None:
            raise NotFoundError(f"Report not found: {key}")

        pair = self._read_pair(key)
        if pair is None:
            raise NotFoundError(f"Report not found: {key}")

        structured, markdown = pair
        try:
            report = WeeklyReport.model_validate(json.loads(structured))
        except ValueError as e:
            logger.error(f"Stored report {key} is unreadable: {e}")
            raise StorageError(f"Stored report {key} is corrupt") from e
        return report, markdown

    def list(self) -> List[str]:
        """Known report keys, newest first."""
        return sort_report_keys(self._keys())

    def latest(self) -> Tuple[str, WeeklyReport, str]:
        """Most recent report; NotFoundError if none was generated yet."""
        keys = self.list()
        if not keys:
            raise NotFoundError("No weekly reports have been generated yet.")
        report, markdown = self.read(keys[0])
        return keys[0], report, markdown

    @abstractmethod
    def _write_pair(self, key: str, structured: str, markdown: str) -> None:
        pass

    @abstractmethod
    def _read_pair(self, key: str) -> Optional[Tuple[str, str]]:
        pass

    @abstractmethod
    def _keys(self) -> List[str]:
        pass


class InMemoryReportStore(ReportStore):
    """Report store kept in a dict."""

    def __init__(self):
        self._reports: Dict[str, Tuple[str, str]] = {}

    def _write_pair(self, key: str, structured: str, markdown: str) -> None:
        self._reports[key] = (structured, markdown)

    def _read_pair(self, key: str) -> Optional[Tuple[str, str]]:
        return self._reports.get(key)

    def _keys(self) -> List[str]:
        return list(self._reports)


class FileReportStore(ReportStore):
    """Report store writing <key>.json and <key>.md into a directory."""

    def __init__(self, directory: Optional[Path] = None):
        self.directory = Path(directory or settings.reports_dir)

    def _paths(self, key: str) -> Tuple[Path, Path]:
        return self.directory / f"{key}.json", self.directory / f"{key}.md"

    def _write_pair(self, key: str, structured: str, markdown: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        json_path, md_path = self._paths(key)
        json_tmp = json_path.with_suffix(".json.tmp")
        md_tmp = md_path.with_suffix(".md.tmp")

        try:
            json_tmp.write_text(structured, encoding="utf-8")
            md_tmp.write_text(markdown, encoding="utf-8")
            os.replace(json_tmp, json_path)
            try:
                os.replace(md_tmp, md_path)
            except OSError:
                json_path.unlink(missing_ok=True)
                raise
        finally:
            json_tmp.unlink(missing_ok=True)
            md_tmp.unlink(missing_ok=True)

    def _read_pair(self, key: str) -> Optional[Tuple[str, str]]:
        json_path, md_path = self._paths(key)
        try:
            return json_path.read_text(encoding="utf-8"), md_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def _keys(self) -> List[str]:
        if not self.directory.exists():
            return []
        return [path.stem for path in self.directory.glob("weekly-*.json")]


def get_report_store() -> ReportStore:
    """Report store configured for this deployment."""
    return FileReportStore(settings.reports_dir)
