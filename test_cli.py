import io
import json
import logging
import sys
from pathlib import Path

import pytest
import responses

from postgang import __version__
from postgang.cli import main
from postgang.storage import credentials as credentials_module

API_URL = "https://api.bring.com/address/api/no/postal-codes/0357/mailbox-delivery-dates"


@pytest.fixture
def dates_file(tmp_path: Path) -> Path:
    path = tmp_path / "dates.json"
    path.write_text(json.dumps({"delivery_dates": ["2023-02-08", "2023-02-06"]}), encoding="utf-8")
    return path


@pytest.fixture
def isolated_credentials(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("POSTGANG_API_UID", raising=False)
    monkeypatch.delenv("POSTGANG_API_KEY", raising=False)
    monkeypatch.setattr(credentials_module, "get_env_file_path", lambda: tmp_path / "none.env")
    monkeypatch.setattr(credentials_module, "load_from_keyring", lambda: None)


def test_file_to_stdout(dates_file: Path, capsys: pytest.CaptureFixture) -> None:
    exit_code = main(["--code", "0357", "file", str(dates_file)])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert out.startswith("BEGIN:VCALENDAR\r\n")
    assert out.endswith("END:VCALENDAR\r\n")
    assert out.count("BEGIN:VEVENT") == 2
    assert "SUMMARY:0357: Posten kommer mandag 6.\r\n" in out
    assert "SUMMARY:0357: Posten kommer onsdag 8.\r\n" in out


def test_file_to_output_path(dates_file: Path, tmp_path: Path) -> None:
    output = tmp_path / "postgang.ics"

    exit_code = main(["--code", "0357", "--output", str(output), "file", str(dates_file)])

    assert exit_code == 0
    data = output.read_bytes()
    assert b"UID:postgang-0357-2023-02-06\r\n" in data
    assert b"\r\r\n" not in data


def test_malformed_file_fails(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    path = tmp_path / "broken.json"
    path.write_text("not json", encoding="utf-8")

    with caplog.at_level(logging.ERROR):
        exit_code = main(["--code", "0357", "file", str(path)])

    assert exit_code == 1
    assert "invalid JSON" in caplog.text


def test_missing_input_file_fails(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    exit_code = main(["--code", "0357", "file", str(tmp_path / "missing.json")])

    assert exit_code == 1
    assert capsys.readouterr().out == ""


@responses.activate
def test_api_with_flags(capsys: pytest.CaptureFixture, isolated_credentials: None) -> None:
    responses.add(responses.GET, API_URL, json={"delivery_dates": ["2023-02-06"]}, status=200)

    exit_code = main(["--code", "0357", "api", "--api-uid", "me@example.com", "--api-key", "secret"])

    assert exit_code == 0
    assert "UID:postgang-0357-2023-02-06" in capsys.readouterr().out
    assert responses.calls[0].request.headers["X-Mybring-API-Key"] == "secret"


@responses.activate
def test_api_with_environment(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture, isolated_credentials: None
) -> None:
    monkeypatch.setenv("POSTGANG_API_UID", "env@example.com")
    monkeypatch.setenv("POSTGANG_API_KEY", "env-secret")
    responses.add(responses.GET, API_URL, json={"delivery_dates": []}, status=200)

    exit_code = main(["--code", "0357", "api"])

    assert exit_code == 0
    headers = responses.calls[0].request.headers
    assert headers["X-Mybring-API-Uid"] == "env@example.com"
    assert headers["X-Mybring-API-Key"] == "env-secret"
    assert "BEGIN:VEVENT" not in capsys.readouterr().out


@responses.activate
def test_api_auth_failure(isolated_credentials: None, caplog: pytest.LogCaptureFixture) -> None:
    responses.add(responses.GET, API_URL, status=401)

    with caplog.at_level(logging.ERROR):
        exit_code = main(["--code", "0357", "api", "--api-uid", "me", "--api-key", "bad"])

    assert exit_code == 1
    assert "Credentials rejected" in caplog.text


def test_api_without_credentials_is_usage_error(
    isolated_credentials: None, capsys: pytest.CaptureFixture
) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(["--code", "0357", "api"])

    assert exc_info.value.code == 2
    assert "POSTGANG_API_UID" in capsys.readouterr().err


@responses.activate
def test_output_file_is_created_before_request(tmp_path: Path, isolated_credentials: None) -> None:
    output = tmp_path / "missing-dir" / "postgang.ics"

    exit_code = main(
        ["--code", "0357", "--output", str(output), "api", "--api-uid", "me", "--api-key", "k"]
    )

    assert exit_code == 1
    assert len(responses.calls) == 0


@pytest.mark.parametrize("code", ["357", "03570", "abcd", "03 7", "٠٣٥٧"])
def test_invalid_postal_code_is_usage_error(
    code: str, dates_file: Path, capsys: pytest.CaptureFixture
) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(["--code", code, "file", str(dates_file)])

    assert exc_info.value.code == 2
    assert "4 digits" in capsys.readouterr().err


def test_missing_code_is_usage_error(dates_file: Path) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(["file", str(dates_file)])

    assert exc_info.value.code != 0


def test_missing_subcommand_is_usage_error() -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(["--code", "0357"])

    assert exc_info.value.code == 2


@pytest.mark.parametrize("flag", ["--version", "-V"])
def test_version(flag: str, capsys: pytest.CaptureFixture) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main([flag])

    assert exc_info.value.code == 0
    assert __version__ in capsys.readouterr().out


@pytest.mark.parametrize("flag", ["--help", "-h"])
def test_help(flag: str, capsys: pytest.CaptureFixture) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main([flag])

    assert exc_info.value.code == 0
    assert "--code" in capsys.readouterr().out


@responses.activate
def test_debug_logging_never_shows_raw_api_key(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture,
    caplog: pytest.LogCaptureFixture,
    isolated_credentials: None,
) -> None:
    monkeypatch.setenv("POSTGANG_LOG_LEVEL", "DEBUG")
    responses.add(responses.GET, API_URL, json={"delivery_dates": ["2023-02-06"]}, status=200)

    with caplog.at_level(logging.DEBUG):
        exit_code = main(
            ["--code", "0357", "api", "--api-uid", "me", "--api-key", "TOPSECRETKEY123456"]
        )

    assert exit_code == 0
    assert "Got CLI args" in caplog.text
    assert "TOPSECRETKEY123456" not in caplog.text
    assert "TOPSECRETKEY123456" not in capsys.readouterr().err


def test_stdout_gets_utf8_bytes_whatever_the_locale(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    path = tmp_path / "weekend.json"
    path.write_text(json.dumps({"delivery_dates": ["2023-02-11", "2023-02-12"]}), encoding="utf-8")
    raw = io.BytesIO()
    monkeypatch.setattr(sys, "stdout", io.TextIOWrapper(raw, encoding="ascii", newline="\r\n"))

    exit_code = main(["--code", "0357", "file", str(path)])

    data = raw.getvalue()
    assert exit_code == 0
    assert "SUMMARY:0357: Posten kommer lørdag 11.\r\n".encode("utf-8") in data
    assert "SUMMARY:0357: Posten kommer søndag 12.\r\n".encode("utf-8") in data
    assert b"\r\r\n" not in data


def test_missing_credentials_leave_no_output_file(
    tmp_path: Path, isolated_credentials: None
) -> None:
    output = tmp_path / "postgang.ics"

    with pytest.raises(SystemExit) as exc_info:
        main(["--code", "0357", "--output", str(output), "api"])

    assert exc_info.value.code == 2
    assert not output.exists()
