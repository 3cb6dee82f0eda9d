"""Classification: PR category from labels and keywords."""

import logging
from typing import Dict, List, Optional, Tuple

from app.models.pull_request import MergedPullRequest, PRCategory

logger = logging.getLogger(__name__)


# Label dictionary (matched case-insensitively)
LABEL_CATEGORIES: Dict[str, PRCategory] = {
    "feature": PRCategory.FEATURE,
    "enhancement": PRCategory.FEATURE,
    "new feature": PRCategory.FEATURE,
    "bug": PRCategory.FIX,
    "fix": PRCategory.FIX,
    "bugfix": PRCategory.FIX,
    "patch": PRCategory.FIX,
    "documentation": PRCategory.DOCS,
    "docs": PRCategory.DOCS,
    "refactor": PRCategory.REFACTOR,
    "refactoring": PRCategory.REFACTOR,
}

# Keyword dictionaries
FEATURE_KEYWORDS = ["add", "implement", "create", "new", "introduce"]

FIX_KEYWORDS = ["fix", "bug", "patch", "resolve", "correct", "repair"]

DOCS_KEYWORDS = ["docs", "readme", "documentation", "doc"]

REFACTOR_KEYWORDS = ["refactor", "refactoring", "cleanup", "restructure"]

# Evaluated in order, first group with a hit wins
KEYWORD_GROUPS: List[Tuple[PRCategory, List[str]]] = [
    (PRCategory.FEATURE, FEATURE_KEYWORDS),
    (PRCategory.FIX, FIX_KEYWORDS),
    (PRCategory.DOCS, DOCS_KEYWORDS),
    (PRCategory.REFACTOR, REFACTOR_KEYWORDS),
]


def category_from_labels(labels: List[str]) -> Optional[PRCategory]:
    """First label (in PR order) with a known mapping, if any."""
    for label in labels:
        category = LABEL_CATEGORIES.get(label.lower())
        if category is not None:
            return category
    return None


def category_from_text(title: str, body: Optional[str]) -> PRCategory:
    """Keyword heuristic over title and body (substring match)."""
    search_text = f"{title} {body or ''}".lower()

    for category, keywords in KEYWORD_GROUPS:
        if any(kw in search_text for kw in keywords):
            return category

    return PRCategory.OTHER


def categorize(pr: MergedPullRequest) -> PRCategory:
    """
    Categorize a PR.

    Labels short-circuit the keyword heuristic; a PR nothing matches is OTHER.
    """
    category = category_from_labels(pr.labels)
    if category is not None:
        logger.debug(f"PR #{pr.number} categorized by label: {category.value}")
        return category

    return category_from_text(pr.title, pr.body)
