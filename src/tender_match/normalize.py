"""Normalization helpers: dates, deadlines, money and title categorization."""

import re
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from dateutil import parser as dateparser

from tender_match.models.raw import DEFAULT_CURRENCY

NOT_SPECIFIED = "Not specified"
GENERAL_CATEGORY = "General"

# Anything outside letters, digits, whitespace, '-', '/' and ',' is noise
_DATE_NOISE_RE = re.compile(r"[^A-Za-z0-9\s\-/,]")
_VALUE_NOISE_RE = re.compile(r"[^\d.]")

_MONTHS = {
    "jan": 1, "january": 1,
    "feb": 2, "february": 2,
    "mar": 3, "march": 3,
    "apr": 4, "april": 4,
    "may": 5,
    "jun": 6, "june": 6,
    "jul": 7, "july": 7,
    "aug": 8, "august": 8,
    "sep": 9, "sept": 9, "september": 9,
    "oct": 10, "october": 10,
    "nov": 11, "november": 11,
    "dec": 12, "december": 12,
}


def _numeric_dmy(m: re.Match) -> tuple[int, int, int]:
    return int(m.group(3)), int(m.group(2)), int(m.group(1))


def _numeric_ymd(m: re.Match) -> tuple[int, int, int]:
    return int(m.group(1)), int(m.group(2)), int(m.group(3))


def _month_day_year(m: re.Match) -> tuple[int, int, int]:
    return int(m.group(3)), _MONTHS.get(m.group(1).lower(), 0), int(m.group(2))


def _day_month_year(m: re.Match) -> tuple[int, int, int]:
    return int(m.group(3)), _MONTHS.get(m.group(2).lower(), 0), int(m.group(1))


# Tried in order; first one yielding a real calendar date wins
_DATE_PATTERNS = [
    (re.compile(r"(\d{1,2})[/-](\d{1,2})[/-](\d{4})"), _numeric_dmy),  # DD/MM/YYYY, DD-MM-YYYY
    (re.compile(r"(\d{4})[/-](\d{1,2})[/-](\d{1,2})"), _numeric_ymd),  # YYYY-MM-DD
    (re.compile(r"([A-Za-z]+)\s+(\d{1,2}),?\s+(\d{4})"), _month_day_year),  # Month DD, YYYY
    (re.compile(r"(\d{1,2})\s+([A-Za-z]+),?\s+(\d{4})"), _day_month_year),  # DD Month YYYY
]

# First category whose keyword appears in the title wins
_TITLE_CATEGORIES: list[tuple[str, tuple[str, ...]]] = [
    ("Web Development", ("website", "web", "portal", "online", "e-commerce", "ecommerce")),
    ("Mobile Apps", ("mobile", "app", "android", "ios", "smartphone")),
    ("Software Development", ("software", "system", "application", "database", "erp", "crm")),
    ("Digital Marketing", ("marketing", "social media", "seo", "advertising", "campaign")),
    ("Branding", ("branding", "logo", "design", "identity", "creative")),
    ("ICT Services", ("ict", "it services", "technology", "computer", "network")),
    ("Video Production", ("video", "film", "production", "multimedia", "animation")),
    ("Consultancy", ("consultancy", "consulting", "advisory", "study")),
]

_CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "INR": "₹",
    "NGN": "₦",
}


def _to_date(text: Optional[str]) -> Optional[date]:
    if not text:
        return None
    cleaned = _DATE_NOISE_RE.sub("", str(text)).strip()
    if not cleaned:
        return None

    for pattern, extract in _DATE_PATTERNS:
        for m in pattern.finditer(cleaned):
            try:
                return date(*extract(m))
            except ValueError:
                continue

    try:
        return dateparser.parse(cleaned).date()
    except (ValueError, OverflowError):
        return None


def parse_date(text: Optional[str]) -> Optional[str]:
    """
    Parse free-text date into YYYY-MM-DD. Supports DD/MM/YYYY, DD-MM-YYYY,
    YYYY-MM-DD, 'Month DD, YYYY' and 'DD Month YYYY', then falls back to a
    generic parse. Returns None instead of raising.
    """
    parsed = _to_date(text)
    return parsed.isoformat() if parsed else None


def deadline_date(deadline: Optional[str]) -> Optional[date]:
    """Deadline as a date, or None when it does not parse."""
    return _to_date(deadline)


def is_deadline_valid(deadline: Optional[str], today: Optional[date] = None) -> bool:
    """True if deadline is today or later. Unparseable deadlines are invalid."""
    parsed = _to_date(deadline)
    if parsed is None:
        return False
    return parsed >= (today or date.today())


def days_until_deadline(deadline: Optional[str], today: Optional[date] = None) -> Optional[int]:
    """Whole days from today to deadline (0 on the day, negative once past). None if unparseable."""
    parsed = _to_date(deadline)
    if parsed is None:
        return None
    return (parsed - (today or date.today())).days


def future_date(days_from_now: int, today: Optional[date] = None) -> str:
    """Date N days out as YYYY-MM-DD."""
    return ((today or date.today()) + timedelta(days=days_from_now)).isoformat()


def format_value(value: Optional[float], currency: Optional[str] = DEFAULT_CURRENCY) -> str:
    """Format a contract value in whole currency units, e.g. '$1,500' or 'ZWL 1,500'."""
    if not value:
        return NOT_SPECIFIED
    code = (currency or DEFAULT_CURRENCY).upper()
    amount = Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    sign = "-" if amount < 0 else ""
    grouped = f"{abs(amount):,.0f}"
    symbol = _CURRENCY_SYMBOLS.get(code)
    if symbol:
        return f"{sign}{symbol}{grouped}"
    return f"{sign}{code} {grouped}"


def parse_value(text: Optional[str]) -> Optional[float]:
    """Extract a number from a money string like 'USD 12,500.00'. None if nothing usable."""
    if not text:
        return None
    cleaned = _VALUE_NOISE_RE.sub("", str(text))
    try:
        return float(cleaned)
    except ValueError:
        return None


def categorize_by_title(title: Optional[str]) -> str:
    """Derive a category label from title keywords; 'General' when nothing matches."""
    title_lower = (title or "").lower()
    for category, keywords in _TITLE_CATEGORIES:
        if any(kw in title_lower for kw in keywords):
            return category
    return GENERAL_CATEGORY
