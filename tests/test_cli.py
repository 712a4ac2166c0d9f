import runpy

import pytest

from conftest import location_detail, search_payload
from rtt_departures import cli
from rtt_departures.models import ApiResponse
from rtt_departures.rtt_api import TransportError


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    monkeypatch.setattr(cli, "load_dotenv", lambda: None)
    monkeypatch.setenv("RTT_USERNAME", "rttapi_user")
    monkeypatch.setenv("RTT_PASSWORD", "s3cret-pass")
    monkeypatch.delenv("RTT_BASE_URL", raising=False)


def _no_fetch(*args, **kwargs):
    raise AssertionError("no request expected")


def test_missing_credentials_abort_before_fetch(monkeypatch, capsys):
    monkeypatch.delenv("RTT_USERNAME")
    monkeypatch.delenv("RTT_PASSWORD")
    monkeypatch.setattr(cli, "fetch_services", _no_fetch)

    assert cli.main(["PAD"]) == 1

    captured = capsys.readouterr()
    assert "RTT_USERNAME" in captured.err
    assert captured.out == ""


def test_prints_board_and_exits_zero(monkeypatch, capsys):
    calls = []

    def fake_fetch(query, settings):
        calls.append((query, settings))
        return list(ApiResponse.from_payload(search_payload(location_detail())).services)

    monkeypatch.setattr(cli, "fetch_services", fake_fetch)

    assert cli.main(["PAD", "BRI"]) == 0

    (query, settings), = calls
    assert (query.origin, query.destination) == ("PAD", "BRI")
    assert settings.username == "rttapi_user"
    out = capsys.readouterr().out
    assert out.splitlines()[0] == "1 services found"
    assert "Bristol Temple Meads" in out
    assert "On time" in out


def test_destination_is_optional(monkeypatch, capsys):
    seen = []
    monkeypatch.setattr(cli, "fetch_services", lambda query, settings: seen.append(query) or [])

    assert cli.main(["PAD"]) == 0

    assert seen[0].destination is None
    assert capsys.readouterr().out.splitlines()[0] == "0 services found"


def test_fetch_failure_exits_non_zero(monkeypatch, capsys):
    def failing_fetch(query, settings):
        raise TransportError("RealTimeTrains error 401 while requesting departures: Unauthorised")

    monkeypatch.setattr(cli, "fetch_services", failing_fetch)

    assert cli.main(["PAD"]) == 1

    captured = capsys.readouterr()
    assert "error: RealTimeTrains error 401" in captured.err
    assert "s3cret-pass" not in captured.err
    assert captured.out == ""


def test_origin_is_required(capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.main([])

    assert excinfo.value.code == 2


def test_version_flag(capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--version"])

    assert excinfo.value.code == 0
    assert "rtt-departures" in capsys.readouterr().out


def test_module_entry_point_runs_main(monkeypatch, capsys):
    monkeypatch.setattr("sys.argv", ["rtt-departures", "--version"])

    with pytest.raises(SystemExit) as excinfo:
        runpy.run_module("rtt_departures", run_name="__main__")

    assert excinfo.value.code == 0
    assert "rtt-departures" in capsys.readouterr().out
