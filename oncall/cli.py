"""Console entry point: ``oncall contact``, ``oncall rota`` and ``oncall resolve``."""

from __future__ import annotations

import argparse
import asyncio
import sys
import webbrowser
from collections.abc import Callable, Sequence
from typing import TextIO

from .config import Settings, get_settings
from .dialer import ContactFlow, FlowStatus
from .logging_config import configure_logging
from .models import ResolutionOutcome
from .pickers import ConsolePicker
from .resolver import NameResolver
from .rota import RotaClient, RotaError, parse_widget_parameter
from .sources import VCardDirectorySource
from .updates import MemoryFlagStore, UpdateChecker
from .utils import display_label
from .widget import build_widget, render_text


class ConsoleMenu:
    """Alert-style menu on the terminal; blank input cancels."""

    def __init__(self, stream: TextIO | None = None, reader: Callable[[str], str] = input) -> None:
        self.stream = stream or sys.stdout
        self.reader = reader

    async def choose(self, title: str, message: str, actions: Sequence[str]) -> int | None:
        print(f"\n{title}\n{message}", file=self.stream)
        for idx, action in enumerate(actions, start=1):
            print(f"  {idx}. {action}", file=self.stream)
        answer = (await asyncio.to_thread(self.reader, "Choice (blank to cancel): ")).strip()
        if not answer.isdigit():
            return None
        idx = int(answer) - 1
        return idx if 0 <= idx < len(actions) else None

    async def notify(self, title: str, message: str) -> None:
        print(f"\n{title}\n{message}", file=self.stream)


class BrowserOpener:
    def open(self, url: str) -> None:
        webbrowser.open(url)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="oncall", description="On-call rota and contact lookup")
    parser.add_argument("--contacts-dir", help="Directory of .vcf files (overrides ONCALL_CONTACTS_DIR)")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("contact", help="Pick who is on call and call, text or WhatsApp them")

    rota = sub.add_parser("rota", help="Show the rota card")
    rota.add_argument("--day", help="0 for today, 1 for tomorrow")

    resolve = sub.add_parser("resolve", help="Look a name up in the address book")
    resolve.add_argument("first", help="First name")
    resolve.add_argument("last", nargs="?", default="", help="Last name")
    return parser


def _rota_client(settings: Settings) -> RotaClient:
    return RotaClient(settings.rota_csv_url, timeout=settings.http_timeout)


def _source(args: argparse.Namespace) -> VCardDirectorySource:
    settings = get_settings()
    return VCardDirectorySource(args.contacts_dir or settings.contacts_dir)


async def run_contact(args: argparse.Namespace) -> int:
    settings = get_settings()
    resolver = NameResolver(
        _source(args), ConsolePicker(), promote_selection=settings.promote_picker_selection
    )
    flow = ContactFlow(
        _rota_client(settings),
        resolver,
        ConsoleMenu(),
        BrowserOpener(),
        UpdateChecker(MemoryFlagStore(), settings.installer_module),
        update_url=settings.update_url,
        country_code=settings.whatsapp_country_code,
    )
    result = await flow.run()
    if result.status is FlowStatus.FAILED:
        return 2
    if result.status in (FlowStatus.NOT_FOUND, FlowStatus.NO_PHONE):
        return 1
    if result.url:
        print(result.url)
    return 0


async def run_rota(args: argparse.Namespace) -> int:
    settings = get_settings()
    offset, invalid = parse_widget_parameter(args.day)
    day = await _rota_client(settings).fetch_day(offset)
    updates = UpdateChecker(MemoryFlagStore(), settings.installer_module)
    view = build_widget(
        day,
        url=settings.widget_url,
        invalid_parameter=invalid,
        update_available=await updates.check(),
    )
    print(render_text(view))
    return 0


async def run_resolve(args: argparse.Namespace) -> int:
    settings = get_settings()
    resolver = NameResolver(
        _source(args), ConsolePicker(), promote_selection=settings.promote_picker_selection
    )
    resolution = await resolver.resolve_detailed(args.first, args.last)
    if resolution.outcome is ResolutionOutcome.FAILED:
        print(f"Error: {resolution.error}", file=sys.stderr)
        return 2
    if not resolution.contacts:
        print(f"No contact found for {args.first} {args.last}".strip())
        return 1
    for contact in resolution.contacts:
        phones = ", ".join(p.value for p in contact.phone_numbers) or "no phone number"
        print(f"{display_label(contact)}: {phones}")
    return 0


COMMANDS = {
    "contact": run_contact,
    "rota": run_rota,
    "resolve": run_resolve,
}


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(source="cli", level=get_settings().log_level)
    try:
        return asyncio.run(COMMANDS[args.command](args))
    except RotaError as err:
        print(f"Error: {err}", file=sys.stderr)
        return 2
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
