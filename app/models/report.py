"""Weekly report model."""

from datetime import date
from typing import List

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.models.pull_request import CATEGORY_ORDER, CategorizedPR, PRCategory


class ReportCategories(BaseModel):
    """PRs grouped by category, each list in PR search order."""

    model_config = ConfigDict(frozen=True)

    feature: List[CategorizedPR] = Field(default_factory=list)
    fix: List[CategorizedPR] = Field(default_factory=list)
    docs: List[CategorizedPR] = Field(default_factory=list)
    refactor: List[CategorizedPR] = Field(default_factory=list)
    other: List[CategorizedPR] = Field(default_factory=list)

    def get(self, category: PRCategory) -> List[CategorizedPR]:
        return getattr(self, category.value)

    def count(self) -> int:
        return sum(len(self.get(category)) for category in CATEGORY_ORDER)


class WeeklyReport(BaseModel):
    """Weekly report - merged PRs for a trailing window, keyed by week_end."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    week_start: date = Field(alias="weekStart")
    week_end: date = Field(alias="weekEnd")
    total: int
    categories: ReportCategories = Field(default_factory=ReportCategories)

    @model_validator(mode="after")
    def check_total(self) -> "WeeklyReport":
        counted = self.categories.count()
        if self.total != counted:
            raise ValueError(f"total ({self.total}) does not match categorized PRs ({counted})")
        return self

    @property
    def key(self) -> str:
        """Storage key, e.g. weekly-2025-01-08."""
        return f"weekly-{self.week_end.isoformat()}"

    def to_json_dict(self) -> dict:
        """Structured form as persisted and returned by the API."""
        return self.model_dump(mode="json", by_alias=True)
