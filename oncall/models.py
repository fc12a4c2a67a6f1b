from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


@dataclass
class PhoneNumber:
    value: str
    types: List[str] = field(default_factory=list)


@dataclass
class Contact:
    given_name: Optional[str] = None
    family_name: Optional[str] = None
    phone_numbers: List[PhoneNumber] = field(default_factory=list)
    # identifier of the ContainerRef the contact was read from
    container: Optional[str] = None


@dataclass(frozen=True)
class ContainerRef:
    identifier: str
    name: str = ""


@dataclass
class Choice:
    label: str
    payload: Contact


class MatchTier(str, Enum):
    EXACT = "exact"
    PARTIAL = "partial"


class ResolutionOutcome(str, Enum):
    MATCHED = "matched"
    AMBIGUOUS = "ambiguous"
    NO_MATCH = "no_match"
    FAILED = "failed"


@dataclass
class Resolution:
    outcome: ResolutionOutcome
    contacts: List[Contact] = field(default_factory=list)
    tier: Optional[MatchTier] = None
    selected: Optional[Contact] = None
    error: Optional[str] = None


@dataclass
class RotaRole:
    title: str
    name: str


@dataclass
class RotaDay:
    date: str
    roles: List[RotaRole] = field(default_factory=list)
