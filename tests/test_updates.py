import logging
from types import SimpleNamespace

import pytest

from oncall.updates import SILENT_MODE_KEY, UPDATE_AVAILABLE_KEY, MemoryFlagStore, UpdateChecker


def installer_loader(main):
    def load(name):
        return SimpleNamespace(main=main)

    return load


def missing_loader(name):
    raise ModuleNotFoundError(name)


@pytest.mark.asyncio
async def test_update_available_and_silent_mode_reset():
    flags = MemoryFlagStore()
    seen_silent = []

    def main(store):
        seen_silent.append(store.get(SILENT_MODE_KEY))
        store.set(UPDATE_AVAILABLE_KEY, "true")

    checker = UpdateChecker(flags, loader=installer_loader(main))

    assert await checker.check() is True
    assert seen_silent == ["true"]
    assert flags.get(SILENT_MODE_KEY) == "false"


@pytest.mark.asyncio
async def test_async_installer_reporting_no_update():
    flags = MemoryFlagStore()

    async def main(store):
        store.set(UPDATE_AVAILABLE_KEY, "false")

    assert await UpdateChecker(flags, loader=installer_loader(main)).check() is False


@pytest.mark.asyncio
async def test_missing_installer_skips_check(caplog):
    flags = MemoryFlagStore({UPDATE_AVAILABLE_KEY: "true"})
    checker = UpdateChecker(flags, installer_module="not_installed", loader=missing_loader)

    with caplog.at_level(logging.INFO, logger="oncall.updates"):
        assert await checker.check() is False

    assert flags.get(SILENT_MODE_KEY) == "false"
    assert any("Skipping update check" in r.getMessage() for r in caplog.records)


@pytest.mark.asyncio
async def test_failing_installer_means_no_update():
    flags = MemoryFlagStore()

    def main(store):
        raise OSError("no network")

    assert await UpdateChecker(flags, loader=installer_loader(main)).check() is False
    assert flags.get(SILENT_MODE_KEY) == "false"


@pytest.mark.asyncio
async def test_real_import_of_absent_module():
    checker = UpdateChecker(MemoryFlagStore(), installer_module="oncall_installer_that_does_not_exist")
    assert await checker.check() is False
