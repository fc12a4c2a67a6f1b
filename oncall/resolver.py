"""Resolve an on-call person's name to entries in the personal address book.

Matching runs in tiers. Contacts are first filtered on an exact family name,
then the first name is compared:

* exact: given name equals the searched name, or is one of its nicknames;
* partial: given name contains the searched name or is contained in it.

The partial tier only runs when the exact tier finds nothing, and its result
always goes through the picker so the user can confirm who was meant.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from .models import Choice, Contact, MatchTier, Resolution, ResolutionOutcome
from .nicknames import DEFAULT_NICKNAMES, NicknameMap, aliases_for
from .pickers import Picker
from .sources import ContactSource
from .utils import display_label, normalize_name

logger = logging.getLogger(__name__)


def filter_by_family_name(contacts: Sequence[Contact], last_name: str) -> list[Contact]:
    search_last = normalize_name(last_name)
    return [c for c in contacts if normalize_name(c.family_name) == search_last]


def exact_matches(
    contacts: Sequence[Contact], first_name: str, nicknames: NicknameMap
) -> list[Contact]:
    search_first = normalize_name(first_name)
    aliases = aliases_for(nicknames, search_first)
    matches = []
    for contact in contacts:
        given = normalize_name(contact.given_name)
        if given == search_first or given in aliases:
            matches.append(contact)
    return matches


def partial_matches(contacts: Sequence[Contact], first_name: str) -> list[Contact]:
    # an empty search name is a substring of everything and matches all
    search_first = normalize_name(first_name)
    matches = []
    for contact in contacts:
        given = normalize_name(contact.given_name)
        if search_first in given or given in search_first:
            matches.append(contact)
    return matches


def find_candidates(
    first_name: str,
    last_name: str,
    contacts: Sequence[Contact],
    nicknames: NicknameMap = DEFAULT_NICKNAMES,
) -> tuple[MatchTier | None, list[Contact]]:
    """Run the match tiers without any user interaction.

    Returns the tier that produced the candidates (None when nothing matched)
    and the candidates in the order they appear in ``contacts``.
    """
    same_family = filter_by_family_name(contacts, last_name)

    exact = exact_matches(same_family, first_name, nicknames)
    if exact:
        return MatchTier.EXACT, exact

    partial = partial_matches(same_family, first_name)
    if partial:
        return MatchTier.PARTIAL, partial
    return None, []


def build_choices(contacts: Sequence[Contact]) -> list[Choice]:
    return [Choice(label=display_label(c), payload=c) for c in contacts]


class NameResolver:
    """Look up a person by first and last name.

    ``promote_selection`` controls what happens with the picker's answer for
    partial matches: when set, the picked contact is moved to the front of the
    returned list; when unset, the list is returned in address-book order and
    the answer is only logged.
    """

    def __init__(
        self,
        source: ContactSource | None,
        picker: Picker,
        nicknames: NicknameMap = DEFAULT_NICKNAMES,
        *,
        promote_selection: bool = True,
    ) -> None:
        self.source = source
        self.picker = picker
        self.nicknames = nicknames
        self.promote_selection = promote_selection

    async def resolve(
        self,
        first_name: str | None,
        last_name: str | None,
        contacts: Sequence[Contact] | None = None,
    ) -> list[Contact]:
        resolution = await self.resolve_detailed(first_name, last_name, contacts)
        return resolution.contacts

    async def resolve_detailed(
        self,
        first_name: str | None,
        last_name: str | None,
        contacts: Sequence[Contact] | None = None,
    ) -> Resolution:
        search_first = normalize_name(first_name)
        search_last = normalize_name(last_name)

        try:
            if contacts is None:
                contacts = await self._load_contacts()
            tier, candidates = find_candidates(search_first, search_last, contacts, self.nicknames)

            if tier is MatchTier.EXACT:
                return Resolution(ResolutionOutcome.MATCHED, candidates, tier=tier)
            if tier is None:
                logger.debug("No contact matches %r %r", search_first, search_last)
                return Resolution(ResolutionOutcome.NO_MATCH)

            selected = await self.picker.present(build_choices(candidates))
        except Exception as exc:
            logger.error("Error accessing contacts: %s", exc)
            return Resolution(ResolutionOutcome.FAILED, error=str(exc))

        if selected is None:
            logger.info("Contact picker dismissed")
        else:
            logger.info("Selected: %s", display_label(selected))
            if self.promote_selection:
                candidates = [selected] + [c for c in candidates if c is not selected]
        return Resolution(
            ResolutionOutcome.AMBIGUOUS,
            candidates,
            tier=MatchTier.PARTIAL,
            selected=selected,
        )

    async def _load_contacts(self) -> list[Contact]:
        if self.source is None:
            raise RuntimeError("no contact source configured")
        containers = await self.source.list_containers()
        return await self.source.list_contacts(containers)


__all__ = [
    "filter_by_family_name",
    "exact_matches",
    "partial_matches",
    "find_candidates",
    "build_choices",
    "NameResolver",
]
