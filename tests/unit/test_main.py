import json
from unittest.mock import MagicMock, patch

import pytest

import main
from conftest import make_response


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for name in ("SERVICEID", "APIKEY", "WAIT_FOR_SUCCESS", "METRICS_FILE", "GITHUB_ACTIONS"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(main.signal, "signal", MagicMock())


def test_parse_args():
    args = main.parse_args(["--service-id", "srv-1", "--wait-for-success", "true"])
    assert args == {"service-id": "srv-1", "wait-for-success": "true"}


def test_missing_configuration_fails():
    assert main.main([]) == 1


def test_main_triggers_deploy(monkeypatch):
    session = MagicMock()
    session.headers = {}
    session.post.return_value = make_response(201, json.dumps({"id": "dep-1", "status": "created"}))

    with patch("render_deploy.client.requests.Session", return_value=session):
        exit_code = main.main(["--service-id", "srv-1", "--api-key", "k"])

    assert exit_code == 0
    session.post.assert_called_once()
    session.close.assert_called_once()
    main.signal.signal.assert_called_once()


def test_main_reports_failure(monkeypatch):
    monkeypatch.setenv("SERVICEID", "srv-1")
    monkeypatch.setenv("APIKEY", "bad")
    session = MagicMock()
    session.headers = {}
    session.post.return_value = make_response(401, "")

    with patch("render_deploy.client.requests.Session", return_value=session):
        assert main.main([]) == 1


def test_main_writes_metrics(monkeypatch, tmp_path):
    metrics_file = tmp_path / "render_deploy.prom"
    monkeypatch.setenv("METRICS_FILE", str(metrics_file))
    session = MagicMock()
    session.headers = {}
    session.post.return_value = make_response(201, json.dumps({"id": "dep-1", "status": "created"}))

    with patch("render_deploy.client.requests.Session", return_value=session):
        main.main(["--service-id", "srv-1", "--api-key", "k"])

    assert "render_deploy_triggered_total" in metrics_file.read_text()


def test_invalid_log_level_is_reported(monkeypatch, capsys):
    monkeypatch.setenv("LOG_LEVEL", "verbose")
    monkeypatch.setenv("GITHUB_ACTIONS", "true")
    session = MagicMock()
    session.headers = {}

    with patch("render_deploy.client.requests.Session", return_value=session):
        exit_code = main.main(["--service-id", "srv-1", "--api-key", "k"])

    assert exit_code == 1
    assert "::error::Invalid configuration value(s): log_level" in capsys.readouterr().out
    session.post.assert_not_called()
