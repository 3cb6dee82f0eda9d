"""Pull request models."""

import enum
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class PRCategory(str, enum.Enum):
    """PR category enum."""

    FEATURE = "feature"
    FIX = "fix"
    DOCS = "docs"
    REFACTOR = "refactor"
    OTHER = "other"


# Rendering and grouping order
CATEGORY_ORDER = [
    PRCategory.FEATURE,
    PRCategory.FIX,
    PRCategory.DOCS,
    PRCategory.REFACTOR,
    PRCategory.OTHER,
]


class MergedPullRequest(BaseModel):
    """Merged pull request as returned by the PR search."""

    model_config = ConfigDict(frozen=True)

    number: int
    title: str
    author: str
    labels: List[str] = Field(default_factory=list)
    merged_at: datetime
    url: str
    body: Optional[str] = None


class CategorizedPR(MergedPullRequest):
    """Merged pull request with its report category."""

    category: PRCategory
