"""Silent update check through an optional installer module.

The installer is imported by name at check time and may be absent. It is
called as ``main(flags)`` while ``qerota_silentmode`` is "true" and reports
back by setting ``qerota_updateAvailable`` to "true" or "false".
"""

from __future__ import annotations

import importlib
import inspect
import logging
from collections.abc import Callable
from types import ModuleType
from typing import Any, Protocol

logger = logging.getLogger(__name__)

SILENT_MODE_KEY = "qerota_silentmode"
UPDATE_AVAILABLE_KEY = "qerota_updateAvailable"
DEFAULT_INSTALLER_MODULE = "qerota_installer"


class FlagStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryFlagStore:
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value


class UpdateChecker:
    def __init__(
        self,
        flags: FlagStore,
        installer_module: str = DEFAULT_INSTALLER_MODULE,
        loader: Callable[[str], ModuleType] = importlib.import_module,
    ) -> None:
        self.flags = flags
        self.installer_module = installer_module
        self.loader = loader

    def load_installer(self) -> Callable[..., Any] | None:
        try:
            module = self.loader(self.installer_module)
        except ImportError:
            logger.info("Update-checking module not available. Skipping update check.")
            return None
        entry = getattr(module, "main", None)
        if not callable(entry):
            logger.warning("Update-checking module %s has no main()", self.installer_module)
            return None
        logger.debug("Update-checking module imported successfully.")
        return entry

    async def check(self) -> bool:
        self.flags.set(SILENT_MODE_KEY, "true")
        try:
            installer = self.load_installer()
            if installer is None:
                return False
            try:
                result = installer(self.flags)
                if inspect.isawaitable(result):
                    await result
            except Exception as exc:
                logger.warning("Update check failed: %s", exc)
                return False
            status = self.flags.get(UPDATE_AVAILABLE_KEY)
            logger.info("Update check result: %s", status)
            return status == "true"
        finally:
            self.flags.set(SILENT_MODE_KEY, "false")


__all__ = [
    "SILENT_MODE_KEY",
    "UPDATE_AVAILABLE_KEY",
    "DEFAULT_INSTALLER_MODULE",
    "FlagStore",
    "MemoryFlagStore",
    "UpdateChecker",
]
