from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Protocol

from .models import Contact, ContainerRef
from .vcards import parse_vcards

logger = logging.getLogger(__name__)


class ContactSourceError(Exception):
    """Raised when the address book cannot be read."""


class ContactSource(Protocol):
    async def list_containers(self) -> list[ContainerRef]: ...

    async def list_contacts(self, containers: Sequence[ContainerRef]) -> list[Contact]: ...


class InMemoryContactSource:
    """Contacts held in memory, grouped by container name."""

    def __init__(self, containers: Mapping[str, Sequence[Contact]] | None = None) -> None:
        self._containers = {name: list(contacts) for name, contacts in (containers or {}).items()}

    @classmethod
    def single(cls, contacts: Sequence[Contact], name: str = "default") -> "InMemoryContactSource":
        return cls({name: contacts})

    async def list_containers(self) -> list[ContainerRef]:
        return [ContainerRef(identifier=name, name=name) for name in self._containers]

    async def list_contacts(self, containers: Sequence[ContainerRef]) -> list[Contact]:
        contacts: list[Contact] = []
        for ref in containers:
            try:
                contacts.extend(self._containers[ref.identifier])
            except KeyError:
                raise ContactSourceError(f"Unknown contact container: {ref.identifier}") from None
        return contacts


class VCardDirectorySource:
    """Address book exported as .vcf files; each file is one container."""

    def __init__(self, directory: Path | str, encoding: str = "utf-8") -> None:
        self.directory = Path(directory)
        self.encoding = encoding

    async def list_containers(self) -> list[ContainerRef]:
        if not self.directory.is_dir():
            raise ContactSourceError(f"Contacts directory not found: {self.directory}")
        paths = sorted(p for p in self.directory.iterdir() if p.suffix.lower() == ".vcf")
        return [ContainerRef(identifier=str(p), name=p.stem) for p in paths]

    async def list_contacts(self, containers: Sequence[ContainerRef]) -> list[Contact]:
        contacts: list[Contact] = []
        for ref in containers:
            # vobject parsing is blocking; keep it off the event loop
            contacts.extend(await asyncio.to_thread(self._read_container, ref))
        logger.debug("Loaded %d contacts from %d containers", len(contacts), len(containers))
        return contacts

    def _read_container(self, ref: ContainerRef) -> list[Contact]:
        path = Path(ref.identifier)
        try:
            text = path.read_text(encoding=self.encoding, errors="ignore")
        except OSError as exc:
            raise ContactSourceError(f"Cannot read {path}: {exc}") from exc
        try:
            return parse_vcards(text, container=ref.name)
        except Exception as exc:
            raise ContactSourceError(f"Cannot parse {path}: {exc}") from exc


__all__ = [
    "ContactSourceError",
    "ContactSource",
    "InMemoryContactSource",
    "VCardDirectorySource",
]
