"""Advisory quality checks for rewritten content."""

import re
from dataclasses import dataclass, field
from typing import List

MIN_OPTIMIZED_LENGTH = 500

_EMOJI = re.compile("[\U0001F600-\U0001F64F\U0001F300-\U0001F5FF\U0001F680-\U0001F6FF\U0001F1E0-\U0001F1FF]")
_MARKDOWN_HEADING = re.compile(r"^#{1,6}\s+\S", re.MULTILINE)


@dataclass
class ContentValidation:
    """Outcome of validating rewritten content. Issues are warnings only."""

    valid: bool
    issues: List[str] = field(default_factory=list)


def validate_optimized_content(content: str) -> ContentValidation:
    """
    Check rewritten markdown for length, emojis and headings.

    Args:
        content: Rewritten markdown

    Returns:
        ContentValidation listing every problem found
    """
    issues = []

    if len(content) < MIN_OPTIMIZED_LENGTH:
        issues.append(f"Content is too short (< {MIN_OPTIMIZED_LENGTH} characters)")

    if _EMOJI.search(content):
        issues.append("Content contains emojis")

    if not _MARKDOWN_HEADING.search(content):
        issues.append("Content lacks markdown headings")

    return ContentValidation(valid=not issues, issues=issues)
