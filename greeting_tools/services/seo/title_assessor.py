"""Page-title extraction and SEO heuristics.

Pure functions, no I/O. The fetching lives in the tool wrapper
(``services/tools/seo_tool.py``).

Heuristics run in a fixed order against the extracted title:

1. Title is present: non-empty
2. Title is not too short: more than ``MIN_TITLE_LENGTH`` characters
3. Title is not too long: fewer than ``MAX_TITLE_LENGTH`` characters

When the page has no ``<title>`` the literal ``NO_TITLE`` is assessed in its
place. It is 14 characters long, so it passes both length checks and the
overall assessment comes out valid.
"""
from __future__ import annotations

import re
from dataclasses import asdict, dataclass

NO_TITLE = "No title found"

MIN_TITLE_LENGTH = 10
MAX_TITLE_LENGTH = 60

# First <title> only, case-insensitive, non-greedy; no line terminators inside
_TITLE_RE = re.compile(r"<title>([^\r\n\u2028\u2029]*?)</title>", re.IGNORECASE)


@dataclass
class HeuristicResult:
    description: str
    isValid: bool


@dataclass
class TitleAssessment:
    isValid: bool
    details: list[HeuristicResult]

    def to_dict(self) -> dict:
        return asdict(self)


def extract_title(html: str) -> str:
    """Return the content of the first <title> element, or NO_TITLE."""
    match = _TITLE_RE.search(html)
    return match.group(1) if match else NO_TITLE


def title_length(title: str) -> int:
    """Length in UTF-16 code units, as browsers count it."""
    return len(title.encode("utf-16-le")) // 2


def assess_title(title: str) -> TitleAssessment:
    length = title_length(title)
    details = [
        HeuristicResult("Title is present", bool(title)),
        HeuristicResult("Title is not too short", length > MIN_TITLE_LENGTH),
        HeuristicResult("Title is not too long", length < MAX_TITLE_LENGTH),
    ]
    return TitleAssessment(
        isValid=all(h.isValid for h in details),
        details=details,
    )
