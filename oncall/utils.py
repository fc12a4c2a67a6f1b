from __future__ import annotations

import re

from .models import Contact

DEFAULT_COUNTRY_CODE = "44"


def normalize_name(value: object) -> str:
    """Normalize a name for comparison: strip surrounding whitespace and lowercase.

    ``None`` normalizes to the empty string.
    """
    if value is None:
        return ""
    return str(value).strip().lower()


def display_label(contact: Contact) -> str:
    parts = [p for p in (contact.given_name, contact.family_name) if p]
    return " ".join(parts).strip()


def split_person_name(full_name: str) -> tuple[str, str]:
    """Split a rota entry like "Jane van Dyke" into ("Jane", "van Dyke")."""
    tokens = [t for t in re.split(r"\s+", (full_name or "").strip()) if t]
    if not tokens:
        return "", ""
    return tokens[0], " ".join(tokens[1:])


def split_types(val: object) -> list[str]:
    """Flatten vCard TYPE parameter values ("CELL,HOME" or lists of them)."""
    if not val:
        return []
    if isinstance(val, str):
        parts = [p.strip() for p in val.split(",") if p.strip()]
    elif isinstance(val, list):
        parts = []
        for x in val:
            parts.extend([p.strip() for p in str(x).split(",") if p.strip()])
    else:
        parts = [str(val).strip()]
    return [p.lower() for p in parts]


def clean_dial_number(raw: str) -> str:
    # drop spacing and punctuation a dialer would choke on, keep a leading +
    return re.sub(r"[\s()\-.]", "", str(raw or ""))


def format_for_whatsapp(number: str, country_code: str = DEFAULT_COUNTRY_CODE) -> str:
    """Digits-only international number for wa.me links.

    A national number with a leading 0 gets the country code in its place.
    """
    digits = re.sub(r"\D", "", str(number or ""))
    if digits.startswith("0"):
        digits = country_code + digits[1:]
    return digits


def call_url(number: str) -> str:
    return f"tel:{clean_dial_number(number)}"


def message_url(number: str) -> str:
    return f"sms:{clean_dial_number(number)}"


def whatsapp_url(number: str, country_code: str = DEFAULT_COUNTRY_CODE) -> str:
    return f"https://wa.me/{format_for_whatsapp(number, country_code)}"


__all__ = [
    "DEFAULT_COUNTRY_CODE",
    "normalize_name",
    "display_label",
    "split_person_name",
    "split_types",
    "clean_dial_number",
    "format_for_whatsapp",
    "call_url",
    "message_url",
    "whatsapp_url",
]
