"""On-call rota read from the spreadsheet's public CSV export.

Sheet layout: row 0 holds the column titles, row 2 is today and row 3 is
tomorrow. Column A is the date and columns B-D are the Consultant, the Day
SpR and the Night SpR.
"""

from __future__ import annotations

import csv
import logging
import re

import httpx

from .models import RotaDay, RotaRole

logger = logging.getLogger(__name__)

DEFAULT_ROTA_CSV_URL = (
    "https://docs.google.com/spreadsheets/d/1vZYhWEk_30QCUfcT1TBXd_oT34nRc8YAUlytehfSfRk"
    "/export?format=csv&gid=1290877730"
)
HEADER_ROW = 0
FIRST_DAY_ROW = 2
ROLE_COLUMNS = slice(1, 4)
MAX_DAY_OFFSET = 1
_LEADING_INT = re.compile(r"\s*[+-]?\d+")


class RotaError(Exception):
    """Raised when the rota cannot be fetched or has no usable data."""


def parse_rota_csv(text: str) -> list[list[str]]:
    rows = list(csv.reader((text or "").strip().splitlines()))
    if len(rows) < 2:
        raise RotaError("No data found in the sheet.")
    return rows


def select_day(rows: list[list[str]], offset: int = 0) -> RotaDay:
    row_index = FIRST_DAY_ROW + offset
    if row_index >= len(rows) or row_index < 0:
        raise RotaError("Failed to retrieve data from the Google Sheet.")
    headers = rows[HEADER_ROW][ROLE_COLUMNS]
    data = rows[row_index][ROLE_COLUMNS]
    if not headers or not data:
        raise RotaError("Failed to retrieve data from the Google Sheet.")

    row = rows[row_index]
    date = row[0].strip() if row else ""
    roles = [
        RotaRole(title=title.strip(), name=(data[i].strip() if i < len(data) else ""))
        for i, title in enumerate(headers)
    ]
    return RotaDay(date=date, roles=roles)


def parse_widget_parameter(raw: object) -> tuple[int, bool]:
    """Turn the widget parameter into a day offset.

    Returns ``(offset, invalid)``. Only the leading integer counts, so "1.0"
    and "1abc" both mean tomorrow. A missing or non-numeric parameter means
    today; a number outside 0..1 also means today but is reported as invalid
    so the widget can show a warning.
    """
    if raw is None:
        return 0, False
    match = _LEADING_INT.match(str(raw))
    if match is None:
        return 0, False
    offset = int(match.group(0))
    if offset > MAX_DAY_OFFSET or offset < 0:
        return 0, True
    return offset, False


class RotaClient:
    def __init__(
        self,
        url: str = DEFAULT_ROTA_CSV_URL,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self.transport = transport

    async def fetch_csv(self) -> str:
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport, follow_redirects=True
            ) as client:
                response = await client.get(self.url)
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise RotaError(f"Rota request failed with status {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            raise RotaError(f"Rota request failed: {exc}") from exc
        return response.text

    async def fetch_rows(self) -> list[list[str]]:
        return parse_rota_csv(await self.fetch_csv())

    async def fetch_day(self, offset: int = 0) -> RotaDay:
        day = select_day(await self.fetch_rows(), offset)
        logger.info("Rota for %s: %s", day.date, ", ".join(r.name for r in day.roles))
        return day


__all__ = [
    "DEFAULT_ROTA_CSV_URL",
    "RotaError",
    "parse_rota_csv",
    "select_day",
    "parse_widget_parameter",
    "RotaClient",
]
