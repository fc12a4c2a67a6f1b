"""Pick today's on-call person and call, text or WhatsApp them."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from .models import Contact, ResolutionOutcome, RotaDay
from .resolver import NameResolver
from .rota import RotaClient
from .updates import UpdateChecker
from .utils import DEFAULT_COUNTRY_CODE, call_url, message_url, split_person_name, whatsapp_url

logger = logging.getLogger(__name__)

ROLE_LABELS = ("Consultant", "Day SpR", "Night SpR")
UPDATE_ACTION = "Update Available ⬇️"


class Menu(Protocol):
    async def choose(self, title: str, message: str, actions: Sequence[str]) -> int | None:
        """Index of the chosen action, or None when cancelled."""
        ...

    async def notify(self, title: str, message: str) -> None: ...


class UrlOpener(Protocol):
    def open(self, url: str) -> None: ...


class ContactAction(str, Enum):
    CALL = "Call"
    MESSAGE = "Message"
    WHATSAPP = "WhatsApp"


class FlowStatus(str, Enum):
    CANCELLED = "cancelled"
    UPDATE_REQUESTED = "update_requested"
    NOT_FOUND = "not_found"
    NO_PHONE = "no_phone"
    OPENED = "opened"
    FAILED = "failed"


@dataclass
class FlowResult:
    status: FlowStatus
    name: str | None = None
    phone: str | None = None
    url: str | None = None


def action_url(action: ContactAction, number: str, country_code: str = DEFAULT_COUNTRY_CODE) -> str:
    if action is ContactAction.CALL:
        return call_url(number)
    if action is ContactAction.MESSAGE:
        return message_url(number)
    return whatsapp_url(number, country_code)


def action_urls(number: str, country_code: str = DEFAULT_COUNTRY_CODE) -> dict[str, str]:
    return {
        "call": action_url(ContactAction.CALL, number, country_code),
        "message": action_url(ContactAction.MESSAGE, number, country_code),
        "whatsapp": action_url(ContactAction.WHATSAPP, number, country_code),
    }


def primary_phone(contact: Contact) -> str | None:
    for phone in contact.phone_numbers:
        if phone.value:
            return phone.value
    return None


def role_actions(day: RotaDay) -> list[str]:
    return [f"{label}: {role.name}" for label, role in zip(ROLE_LABELS, day.roles)]


class ContactFlow:
    def __init__(
        self,
        rota: RotaClient,
        resolver: NameResolver,
        menu: Menu,
        opener: UrlOpener,
        update_checker: UpdateChecker | None = None,
        *,
        update_url: str = "",
        country_code: str = DEFAULT_COUNTRY_CODE,
    ) -> None:
        self.rota = rota
        self.resolver = resolver
        self.menu = menu
        self.opener = opener
        self.update_checker = update_checker
        self.update_url = update_url
        self.country_code = country_code

    async def run(self) -> FlowResult:
        day = await self.rota.fetch_day(0)
        return await self.run_for_day(day)

    async def run_for_day(self, day: RotaDay) -> FlowResult:
        actions = role_actions(day)
        people = len(actions)

        update_available = False
        if self.update_checker is not None:
            update_available = await self.update_checker.check()
        if update_available:
            actions.append(UPDATE_ACTION)

        response = await self.menu.choose("Select Contact", "Who would you like to contact?", actions)
        if response is None:
            return FlowResult(FlowStatus.CANCELLED)
        if update_available and response == people:
            logger.info("Update option selected. Opening %s", self.update_url)
            self.opener.open(self.update_url)
            return FlowResult(FlowStatus.UPDATE_REQUESTED, url=self.update_url)

        selected_name = day.roles[response].name.strip()
        return await self.contact_person(selected_name)

    async def contact_person(self, selected_name: str) -> FlowResult:
        first_name, last_name = split_person_name(selected_name)
        resolution = await self.resolver.resolve_detailed(first_name, last_name)
        if resolution.outcome is ResolutionOutcome.FAILED:
            await self.menu.notify("Contacts Unavailable", resolution.error or "Could not read contacts.")
            return FlowResult(FlowStatus.FAILED, name=selected_name)

        found = resolution.contacts
        if not found:
            await self.menu.notify("Contact Not Found", f"No contact found for {selected_name}")
            return FlowResult(FlowStatus.NOT_FOUND, name=selected_name)

        # only the first resolved contact is acted on
        phone = primary_phone(found[0])
        if phone is None:
            await self.menu.notify("No Phone Number", f"{selected_name} has no phone number listed.")
            return FlowResult(FlowStatus.NO_PHONE, name=selected_name)

        choice = await self.menu.choose(
            f"Contact {selected_name}",
            f"What would you like to do with {phone}?",
            [a.value for a in ContactAction],
        )
        if choice is None or not 0 <= choice < len(ContactAction):
            return FlowResult(FlowStatus.CANCELLED, name=selected_name, phone=phone)

        url = action_url(list(ContactAction)[choice], phone, self.country_code)
        self.opener.open(url)
        return FlowResult(FlowStatus.OPENED, name=selected_name, phone=phone, url=url)


__all__ = [
    "ROLE_LABELS",
    "UPDATE_ACTION",
    "Menu",
    "UrlOpener",
    "ContactAction",
    "FlowStatus",
    "FlowResult",
    "action_url",
    "action_urls",
    "primary_phone",
    "role_actions",
    "ContactFlow",
]
