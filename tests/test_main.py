from __future__ import annotations

import logging
from unittest.mock import patch

import pytest

from landing_site import main as main_module


@pytest.fixture(autouse=True)
def no_dotenv(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(main_module, "load_dotenv", lambda: None)


@pytest.fixture(autouse=True)
def restore_root_level():
    root = logging.getLogger()
    level = root.level
    yield
    root.setLevel(level)


def _set_required(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EMAIL_USER", "site@example.com")
    monkeypatch.setenv("EMAIL_PASS", "app-password")
    monkeypatch.setenv("ADMIN_EMAIL", "admin@example.com")


@pytest.mark.parametrize("missing", ["EMAIL_USER", "EMAIL_PASS", "ADMIN_EMAIL"])
def test_missing_config_exits_before_serving(monkeypatch: pytest.MonkeyPatch, caplog, missing: str) -> None:
    _set_required(monkeypatch)
    monkeypatch.delenv(missing)

    with patch.object(main_module.uvicorn, "run") as run, \
            patch.object(main_module, "SmtpMailer") as mailer_cls:
        with pytest.raises(SystemExit) as excinfo:
            main_module.main()

    assert excinfo.value.code == 1
    run.assert_not_called()
    mailer_cls.from_settings.assert_not_called()
    assert missing in caplog.text
    assert "app-password" not in caplog.text


def test_all_missing_are_listed(caplog) -> None:
    with patch.object(main_module.uvicorn, "run") as run:
        with pytest.raises(SystemExit):
            main_module.main()

    run.assert_not_called()
    assert "['EMAIL_USER', 'EMAIL_PASS', 'ADMIN_EMAIL']" in caplog.text


def test_starts_server_with_configured_port(monkeypatch: pytest.MonkeyPatch, caplog) -> None:
    _set_required(monkeypatch)
    monkeypatch.setenv("PORT", "8081")

    with patch.object(main_module.uvicorn, "run") as run:
        with caplog.at_level("INFO"):
            main_module.main()

    run.assert_called_once()
    app = run.call_args.args[0]
    assert run.call_args.kwargs["port"] == 8081
    assert app.state.settings.admin_email == "admin@example.com"
    assert app.state.mailer.username == "site@example.com"
    assert "has_password=True" in caplog.text
    assert "app-password" not in caplog.text


def test_create_app_loads_settings_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    _set_required(monkeypatch)
    main_module.get_settings.cache_clear()

    app = main_module.create_app()

    assert app.state.settings.email_user == "site@example.com"
    main_module.get_settings.cache_clear()


def test_missing_config_reported_at_critical_log_level(monkeypatch: pytest.MonkeyPatch, caplog) -> None:
    monkeypatch.setenv("LOG_LEVEL", "CRITICAL")
    monkeypatch.setenv("EMAIL_USER", "site@example.com")

    with patch.object(main_module.uvicorn, "run") as run:
        with pytest.raises(SystemExit) as excinfo:
            main_module.main()

    assert excinfo.value.code == 1
    run.assert_not_called()
    assert "['EMAIL_PASS', 'ADMIN_EMAIL']" in caplog.text


def test_unknown_log_level_still_reports_missing_config(monkeypatch: pytest.MonkeyPatch, caplog) -> None:
    monkeypatch.setenv("LOG_LEVEL", "verbose")

    with patch.object(main_module.uvicorn, "run"):
        with pytest.raises(SystemExit) as excinfo:
            main_module.main()

    assert excinfo.value.code == 1
    assert "EMAIL_USER" in caplog.text
    assert logging.getLogger().level == logging.INFO
