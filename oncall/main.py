from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from .config import Settings, get_settings
from .dialer import ROLE_LABELS, action_urls, primary_phone
from .logging_config import configure_logging
from .models import Contact, ResolutionOutcome, RotaDay
from .pickers import DismissingPicker
from .resolver import NameResolver
from .rota import RotaClient, RotaError, parse_widget_parameter
from .sources import ContactSource, VCardDirectorySource
from .types import (
    ContactActionsPayload,
    ContactMenuPayload,
    ContactPayload,
    ResolutionPayload,
    RotaPayload,
)
from .updates import MemoryFlagStore, UpdateChecker
from .utils import display_label, split_person_name
from .widget import TEMPLATES_DIR, build_widget


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(source="api", level=get_settings().log_level)
    yield


app = FastAPI(title="On-call rota", lifespan=lifespan)
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def get_rota_client(settings: Settings = Depends(get_settings)) -> RotaClient:
    return RotaClient(settings.rota_csv_url, timeout=settings.http_timeout)


def get_contact_source(settings: Settings = Depends(get_settings)) -> ContactSource:
    return VCardDirectorySource(settings.contacts_dir)


def get_update_checker(settings: Settings = Depends(get_settings)) -> UpdateChecker:
    # a fresh store per request; the installer writes into it during check()
    return UpdateChecker(MemoryFlagStore(), settings.installer_module)


def get_resolver(
    source: ContactSource = Depends(get_contact_source),
    settings: Settings = Depends(get_settings),
) -> NameResolver:
    # nobody can answer a picker over HTTP; ambiguous matches go back to the client
    return NameResolver(source, DismissingPicker(), promote_selection=settings.promote_picker_selection)


async def _load_day(rota: RotaClient, offset: int) -> RotaDay:
    try:
        return await rota.fetch_day(offset)
    except RotaError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc


def contact_payload(contact: Contact) -> ContactPayload:
    return {
        "label": display_label(contact),
        "given_name": contact.given_name or "",
        "family_name": contact.family_name or "",
        "phones": [{"value": p.value, "types": list(p.types)} for p in contact.phone_numbers],
        "container": contact.container,
    }


@app.get("/", response_class=HTMLResponse)
async def widget(
    request: Request,
    day: str | None = None,
    rota: RotaClient = Depends(get_rota_client),
    updates: UpdateChecker = Depends(get_update_checker),
    settings: Settings = Depends(get_settings),
):
    offset, invalid = parse_widget_parameter(day)
    rota_day = await _load_day(rota, offset)
    view = build_widget(
        rota_day,
        url=settings.widget_url,
        invalid_parameter=invalid,
        update_available=await updates.check(),
    )
    return templates.TemplateResponse(request, "widget.html", {"widget": view})


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.get("/rota")
async def rota_json(day: str | None = None, rota: RotaClient = Depends(get_rota_client)) -> RotaPayload:
    offset, invalid = parse_widget_parameter(day)
    rota_day = await _load_day(rota, offset)
    return {
        "date": rota_day.date,
        "roles": [{"title": r.title, "name": r.name} for r in rota_day.roles],
        "invalid_parameter": invalid,
    }


@app.get("/resolve")
async def resolve(
    first: str = "",
    last: str = "",
    resolver: NameResolver = Depends(get_resolver),
) -> ResolutionPayload:
    resolution = await resolver.resolve_detailed(first, last)
    if resolution.outcome is ResolutionOutcome.FAILED:
        raise HTTPException(status_code=503, detail=resolution.error or "Contacts unavailable")
    return {
        "first": first,
        "last": last,
        "outcome": resolution.outcome.value,
        "tier": resolution.tier.value if resolution.tier else None,
        "contacts": [contact_payload(c) for c in resolution.contacts],
    }


@app.get("/contact")
async def contact_menu(day: str | None = None, rota: RotaClient = Depends(get_rota_client)) -> ContactMenuPayload:
    offset, _ = parse_widget_parameter(day)
    rota_day = await _load_day(rota, offset)
    query = f"?day={offset}" if offset else ""
    return {
        "date": rota_day.date,
        "roles": [
            {"role": label, "name": r.name.strip(), "link": f"/contact/{i}{query}"}
            for i, (label, r) in enumerate(zip(ROLE_LABELS, rota_day.roles))
        ],
    }


@app.get("/contact/{role}")
async def contact_actions(
    role: int,
    day: str | None = None,
    rota: RotaClient = Depends(get_rota_client),
    resolver: NameResolver = Depends(get_resolver),
    settings: Settings = Depends(get_settings),
) -> ContactActionsPayload:
    offset, _ = parse_widget_parameter(day)
    rota_day = await _load_day(rota, offset)
    if not 0 <= role < min(len(rota_day.roles), len(ROLE_LABELS)):
        raise HTTPException(status_code=404, detail=f"No rota role {role}")

    selected_name = rota_day.roles[role].name.strip()
    first_name, last_name = split_person_name(selected_name)
    resolution = await resolver.resolve_detailed(first_name, last_name)
    if resolution.outcome is ResolutionOutcome.FAILED:
        raise HTTPException(status_code=503, detail=resolution.error or "Contacts unavailable")
    found = resolution.contacts
    if not found:
        raise HTTPException(status_code=404, detail=f"Contact Not Found: No contact found for {selected_name}")
    phone = primary_phone(found[0])
    if phone is None:
        raise HTTPException(status_code=404, detail=f"No Phone Number: {selected_name} has no phone number listed.")

    return {
        "role": ROLE_LABELS[role],
        "name": selected_name,
        "phone": phone,
        "actions": action_urls(phone, settings.whatsapp_country_code),
    }
