from __future__ import annotations

from typing_extensions import NotRequired, TypedDict


class PhonePayload(TypedDict):
    value: str
    types: list[str]


class ContactPayload(TypedDict):
    label: str
    given_name: str
    family_name: str
    phones: list[PhonePayload]
    container: NotRequired[str | None]


class ResolutionPayload(TypedDict):
    first: str
    last: str
    outcome: str
    tier: str | None
    contacts: list[ContactPayload]
    error: NotRequired[str | None]


class RolePayload(TypedDict):
    title: str
    name: str


class RotaPayload(TypedDict):
    date: str
    roles: list[RolePayload]
    invalid_parameter: bool


class RoleLinkPayload(TypedDict):
    role: str
    name: str
    link: str


class ContactMenuPayload(TypedDict):
    date: str
    roles: list[RoleLinkPayload]


class ActionsPayload(TypedDict):
    call: str
    message: str
    whatsapp: str


class ContactActionsPayload(TypedDict):
    role: str
    name: str
    phone: str
    actions: ActionsPayload


__all__ = [
    "PhonePayload",
    "ContactPayload",
    "ResolutionPayload",
    "RolePayload",
    "RotaPayload",
    "RoleLinkPayload",
    "ContactMenuPayload",
    "ActionsPayload",
    "ContactActionsPayload",
]
