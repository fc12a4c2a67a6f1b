from __future__ import annotations

import re

import vobject

from .models import Contact, PhoneNumber
from .utils import split_types

_PREFIXES = {"mr", "mrs", "ms", "dr", "prof"}
_SUFFIXES = {"jr", "sr", "ii", "iii", "iv", "phd", "md", "frcs"}

_KNOWN_TEL_TYPES = {
    "home", "work", "cell", "voice", "fax", "pager", "text", "textphone", "main", "iphone"
}


def _split_display_name(fn: str) -> tuple[str, str]:
    """Best-effort split of an FN display name into (given, family).

    Honorifics ("Dr", "Mr") and post-nominals ("Jr", "FRCS") are dropped.
    """
    tokens = [t for t in re.split(r"\s+", (fn or "").strip()) if t]

    # Normalize helper strips trailing dots for prefix/suffix matching
    def norm(t: str) -> str:
        return re.sub(r"\.+$", "", t).lower()

    if len(tokens) > 1 and norm(tokens[0]) in _PREFIXES:
        tokens = tokens[1:]
    if len(tokens) > 1 and norm(tokens[-1]) in _SUFFIXES:
        tokens = tokens[:-1]
    if not tokens:
        return "", ""
    return tokens[0], " ".join(tokens[1:])


def _phone_types(prop) -> list[str]:
    types: list[str] = []
    params = getattr(prop, "params", {}) or {}
    if "TYPE" in params:
        types.extend(split_types(params.get("TYPE")))
    for key in params:
        k = str(key).lower()
        if k != "type" and k in _KNOWN_TEL_TYPES:
            types.append(k)
    singleton = getattr(prop, "singletonparams", []) or []
    types.extend(split_types(singleton))
    tset = set(types)
    if len(tset) > 1 and "voice" in tset:
        tset.remove("voice")
    return sorted(tset)


def parse_vcards(text: str, container: str | None = None) -> list[Contact]:
    """Parse vCard text (2.1, 3.0 or 4.0) into contacts.

    Given and family names come from the structured N property; cards without
    one fall back to splitting FN. Phone numbers keep their order in the card,
    with any ``tel:`` URI scheme removed.
    """
    contacts: list[Contact] = []
    for v in vobject.readComponents(text):
        given = ""
        family = ""
        n_obj = getattr(v, "n", None)
        if n_obj is not None:
            nval = n_obj.value  # vobject.vcard.Name
            given = _join_name_part(nval.given)
            family = _join_name_part(nval.family)

        fn_obj = getattr(v, "fn", None)
        if not given and not family and fn_obj is not None:
            given, family = _split_display_name(str(fn_obj.value))

        phones: list[PhoneNumber] = []
        for p in getattr(v, "tel_list", []):
            value = str(p.value or "").strip()
            if value.lower().startswith("tel:"):
                value = value[4:]
            if not value:
                continue
            phones.append(PhoneNumber(value=value, types=_phone_types(p)))

        contacts.append(
            Contact(
                given_name=given or None,
                family_name=family or None,
                phone_numbers=phones,
                container=container,
            )
        )
    return contacts


def _join_name_part(part) -> str:
    # vobject yields either a string or a list of strings per N component
    if isinstance(part, (list, tuple)):
        return " ".join(str(x) for x in part if x)
    return str(part or "")
