"""Tests for PR classification."""

from app.core.classification import categorize
from app.models.pull_request import PRCategory

from tests.conftest import make_pr


def test_keyword_fix():
    """Test title keyword match without labels."""
    pr = make_pr(title="Fix login bug", labels=[], body=None)
    assert categorize(pr) == PRCategory.FIX


def test_label_wins_over_keywords():
    """Test that a known label short-circuits the keyword heuristic."""
    assert categorize(make_pr(title="Update thing", labels=["documentation"], body="unrelated")) == PRCategory.DOCS
    assert categorize(make_pr(title="Add new feature", labels=["bug"])) == PRCategory.FIX


def test_first_known_label_wins():
    """Test labels are checked in order, case-insensitively."""
    assert categorize(make_pr(labels=["needs-review", "Refactoring", "bug"])) == PRCategory.REFACTOR
    assert categorize(make_pr(title="Fix crash", labels=["Enhancement"])) == PRCategory.FEATURE
    assert categorize(make_pr(title="Fix crash", labels=["New Feature"])) == PRCategory.FEATURE


def test_unknown_labels_fall_back_to_keywords():
    """Test unknown labels are ignored."""
    pr = make_pr(title="Cleanup old modules", labels=["chore", "size/s"])
    assert categorize(pr) == PRCategory.REFACTOR


def test_keyword_group_priority():
    """Test feature keywords beat fix, fix beats docs."""
    assert categorize(make_pr(title="Implement retry and fix tests")) == PRCategory.FEATURE
    assert categorize(make_pr(title="Fix typo in docs")) == PRCategory.FIX
    assert categorize(make_pr(title="Update README")) == PRCategory.DOCS


def test_body_is_searched():
    """Test keywords in the body count when the title has none."""
    pr = make_pr(title="Tweak styles", body="This resolves #12")
    assert categorize(pr) == PRCategory.FIX


def test_substring_match():
    """Test keywords match inside longer words."""
    assert categorize(make_pr(title="Update address parsing")) == PRCategory.FEATURE


def test_other():
    """Test PRs matching nothing are OTHER."""
    assert categorize(make_pr(title="Bump version", body=None)) == PRCategory.OTHER
