import httpx
import pytest

from oncall.rota import RotaClient, RotaError, parse_rota_csv, parse_widget_parameter, select_day

SHEET = (
    "Date,Consultant,Day SpR,Night SpR,Notes\n"
    ",,,,\n"
    "Mon 19 Oct,Jane Smith,Bill Jones, Mary Brown ,\n"
    "Tue 20 Oct,Jonathan Doe,Kate Green,Bob White,bank holiday\n"
)


def test_parse_rota_csv_rows():
    rows = parse_rota_csv(SHEET)
    assert len(rows) == 4
    assert rows[0][:4] == ["Date", "Consultant", "Day SpR", "Night SpR"]


@pytest.mark.parametrize("text", ["", "   \n", "Date,Consultant,Day SpR,Night SpR"])
def test_parse_rota_csv_without_data(text):
    with pytest.raises(RotaError, match="No data found"):
        parse_rota_csv(text)


def test_quoted_cells_keep_commas():
    rows = parse_rota_csv('Date,Consultant,Day SpR,Night SpR\n,,,\n"Mon, 19 Oct",A B,C D,E F\n')
    assert select_day(rows).date == "Mon, 19 Oct"


def test_select_today_and_tomorrow():
    rows = parse_rota_csv(SHEET)

    today = select_day(rows)
    assert today.date == "Mon 19 Oct"
    assert [(r.title, r.name) for r in today.roles] == [
        ("Consultant", "Jane Smith"),
        ("Day SpR", "Bill Jones"),
        ("Night SpR", "Mary Brown"),
    ]

    tomorrow = select_day(rows, 1)
    assert tomorrow.date == "Tue 20 Oct"
    assert tomorrow.roles[0].name == "Jonathan Doe"


def test_select_day_past_end_of_sheet():
    rows = parse_rota_csv("Date,Consultant,Day SpR,Night SpR\n,,,\n")
    with pytest.raises(RotaError):
        select_day(rows)


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, (0, False)),
        ("0", (0, False)),
        ("1", (1, False)),
        (" 1 ", (1, False)),
        ("tomorrow", (0, False)),
        ("", (0, False)),
        ("2", (0, True)),
        ("-1", (0, True)),
        ("1.0", (1, False)),
        ("1abc", (1, False)),
        ("2.5", (0, True)),
        ("abc1", (0, False)),
        (1, (1, False)),
    ],
)
def test_parse_widget_parameter(raw, expected):
    assert parse_widget_parameter(raw) == expected


def _client(handler):
    return RotaClient("https://sheets.example/export?format=csv", transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_fetch_day_over_http():
    seen = []

    def handler(request):
        seen.append(str(request.url))
        return httpx.Response(200, text=SHEET)

    day = await _client(handler).fetch_day(1)

    assert seen == ["https://sheets.example/export?format=csv"]
    assert day.roles[2].name == "Bob White"


@pytest.mark.asyncio
async def test_http_error_status_becomes_rota_error():
    client = _client(lambda request: httpx.Response(404, text="not found"))
    with pytest.raises(RotaError, match="404"):
        await client.fetch_rows()


@pytest.mark.asyncio
async def test_transport_failure_becomes_rota_error():
    def handler(request):
        raise httpx.ConnectError("offline", request=request)

    with pytest.raises(RotaError, match="offline"):
        await _client(handler).fetch_csv()
