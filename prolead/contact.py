"""
Best-effort detection of usable contact information on place records.

This is a filter, not a validator: anything that is long enough and not a
known placeholder counts as usable.
"""

import re

MIN_CONTACT_LENGTH = 5

PLACEHOLDER_VALUES = {
    "unknown",
    "not informed",
    "n/a",
    "na",
    "none",
    "null",
    "undefined",
    "-",
    "não informado",
    "nao informado",
    "não identificado",
    "sem telefone",
    "sem website",
}

EMAIL_PATTERN = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")


def is_usable(value) -> bool:
    if not isinstance(value, str):
        return False
    cleaned = value.strip()
    if len(cleaned) < MIN_CONTACT_LENGTH:
        return False
    return cleaned.lower() not in PLACEHOLDER_VALUES


def extract_emails(place: dict) -> list:
    """Pull email-shaped strings out of the place's review texts."""
    emails = []
    reviews = place.get("reviews") or []
    if not isinstance(reviews, list):
        return emails
    for review in reviews:
        text = review.get("text") if isinstance(review, dict) else None
        if not isinstance(text, str):
            continue
        for match in EMAIL_PATTERN.findall(text):
            if match not in emails:
                emails.append(match)
    return emails


def best_phone(place: dict):
    for field in ("formatted_phone_number", "international_phone_number"):
        value = place.get(field)
        if is_usable(value):
            return value.strip()
    return None


def has_usable_website(place: dict) -> bool:
    return is_usable(place.get("website"))


def has_usable_contact(place) -> bool:
    if not isinstance(place, dict):
        return False
    if best_phone(place) or has_usable_website(place):
        return True
    return any(is_usable(email) for email in extract_emails(place))


def contact_stats(places: list) -> dict:
    """Summarize how many places carry each kind of contact information."""
    with_phone = with_website = with_email = with_any = 0
    for place in places:
        if not isinstance(place, dict):
            continue
        phone = best_phone(place) is not None
        website = has_usable_website(place)
        email = bool(extract_emails(place))
        with_phone += phone
        with_website += website
        with_email += email
        with_any += phone or website or email

    total = len(places)
    return {
        "total": total,
        "with_phone": with_phone,
        "with_website": with_website,
        "with_email": with_email,
        "with_any_contact": with_any,
        "filter_efficiency": round(with_any * 100 / total) if total else 0,
    }
