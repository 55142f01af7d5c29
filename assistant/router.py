"""
assistant/router.py

Travel-intent extraction from free text.

Key function:
- extract_travel_info(info, text): returns a new TravelInfo with any destination, source, date range or
  budget found in `text` replacing the previous value. Fields that do not match keep their old value;
  a message with nothing recognizable returns `info` unchanged. Never raises.

Patterns are heuristics over lowercased text:
- destination: first "to"/"in" followed by words ("flight to tokyo" -> "tokyo")
- source: first "from" followed by words ("from paris to tokyo" -> "paris")
- dates: "<day>[st|nd|rd|th] <month> [year]"; the first two occurrences become start/end
- budget: an integer (commas allowed) followed by a currency word or symbol
"""

import dataclasses
import re

from assistant.session import DateRange, TravelInfo


DESTINATION_RE = re.compile(r"\b(?:to|in)\s+([a-z][a-z\s]*)")
SOURCE_RE = re.compile(r"\bfrom\s+([a-z][a-z\s]*)")
DATE_RE = re.compile(
    r"\d{1,2}(?:st|nd|rd|th)?\s+(?:jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)[a-z]*(?:\s+\d{4})?"
)
BUDGET_RE = re.compile(r"(\d+(?:,\d+)*)\s*(?:dollars|usd|inr|eur|gbp|₹|€|£|\$)")

# A place name ends where the next routing word starts ("paris to tokyo").
PLACE_STOP_WORDS = {"to", "in", "from", "on", "for", "with", "and", "by", "at", "during", "between", "next", "this"}


def _place(raw: str) -> str | None:
    words = []
    for word in raw.split():
        if word in PLACE_STOP_WORDS:
            break
        words.append(word)
    return " ".join(words) or None


def extract_destination(low: str) -> str | None:
    m = DESTINATION_RE.search(low)
    return _place(m.group(1)) if m else None


def extract_source(low: str) -> str | None:
    m = SOURCE_RE.search(low)
    return _place(m.group(1)) if m else None


def extract_dates(low: str) -> DateRange | None:
    found = DATE_RE.findall(low)
    if len(found) < 2:
        return None
    return DateRange(start=found[0], end=found[1])


def extract_budget(low: str) -> int | None:
    m = BUDGET_RE.search(low)
    if not m:
        return None
    return int(m.group(1).replace(",", ""))


def extract_travel_info(info: TravelInfo, text: str) -> TravelInfo:
    """Return `info` updated with whatever `text` mentions."""
    low = (text or "").lower()
    found = {
        "destination": extract_destination(low),
        "source": extract_source(low),
        "dates": extract_dates(low),
        "budget": extract_budget(low),
    }
    changes = {k: v for k, v in found.items() if v is not None}
    if not changes:
        return info
    return dataclasses.replace(info, **changes)
