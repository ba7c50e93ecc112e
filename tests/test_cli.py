"""Tests for the command line interface."""

import json

import httpx
import pytest
from unittest.mock import patch

from mailchimp_client.cli.main import build_parser, main
from mailchimp_client.client import MailchimpClient
from mailchimp_client.core.config_store import load_profile
from mailchimp_client.core.models import ConfigError

PREFIX = "/3.0"


@pytest.fixture
def temp_home(tmp_path, monkeypatch):
    """Create temporary config directory."""
    monkeypatch.setenv("MAILCHIMP_CLIENT_HOME", str(tmp_path))
    monkeypatch.delenv("MAILCHIMP_API_KEY", raising=False)
    return tmp_path


@pytest.fixture
def routes():
    return {}


@pytest.fixture
def requests_seen():
    return []


@pytest.fixture
def fake_client(routes, requests_seen):
    """Patch the CLI to use a client backed by a mock transport."""
    def handler(request):
        requests_seen.append(request)
        path = request.url.path.removeprefix(PREFIX)
        status_code, body = routes.get((request.method, path), (204, None))
        content = json.dumps(body).encode() if body is not None else b""
        return httpx.Response(status_code, content=content)

    http_client = httpx.Client(transport=httpx.MockTransport(handler))
    client = MailchimpClient(api_key="abc123-us6", http_client=http_client)
    with patch("mailchimp_client.cli.main.build_client", return_value=client):
        yield client


def test_no_command_prints_help(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main([])

    assert exc_info.value.code == 1
    assert "mailchimp-client" in capsys.readouterr().out


def test_parser_requires_id_for_campaign():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["campaign"])


# ===== configure =====

def test_configure_saves_profile(temp_home, capsys):
    main(["configure", "--api-key", "abc123-us6", "--timeout", "7"])

    assert "Profile saved to" in capsys.readouterr().out
    profile = load_profile()
    assert profile["api_key"] == "abc123-us6"
    assert profile["timeout_seconds"] == 7.0


def test_configure_keeps_existing_key(temp_home):
    main(["configure", "--api-key", "abc123-us6"])
    main(["configure", "--endpoint", "http://localhost:9000/3.0"])

    profile = load_profile()
    assert profile["api_key"] == "abc123-us6"
    assert profile["endpoint"] == "http://localhost:9000/3.0"


def test_configure_without_key_fails(temp_home, capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(["configure"])

    assert exc_info.value.code == 1
    assert "No API key" in capsys.readouterr().err


# ===== Read commands =====

def test_campaigns_prints_json(fake_client, routes, requests_seen, capsys):
    routes[("GET", "/campaigns")] = (200, {"campaigns": [{"id": "c1", "status": "sent"}], "total_items": 1})

    main(["campaigns", "--count", "5", "--status", "sent"])

    output = json.loads(capsys.readouterr().out)
    assert output["total_items"] == 1
    assert output["campaigns"][0]["id"] == "c1"
    assert dict(requests_seen[0].url.params) == {"count": "5", "status": "sent"}


def test_campaign_error_exits(fake_client, routes, capsys):
    routes[("GET", "/campaigns/nope")] = (404, {
        "title": "Resource Not Found",
        "status": 404,
        "detail": "The requested resource could not be found.",
    })

    with pytest.raises(SystemExit) as exc_info:
        main(["campaign", "--id", "nope"])

    assert exc_info.value.code == 1
    assert "Resource Not Found" in capsys.readouterr().err


def test_lists_and_search(fake_client, routes, requests_seen, capsys):
    routes[("GET", "/lists")] = (200, {"lists": [{"id": "L1", "name": "News"}], "total_items": 1})
    routes[("GET", "/search-members")] = (200, {"exact_matches": {"members": [], "total_items": 0}})

    main(["lists", "--email", "a@example.com"])
    main(["search-members", "--query", "jane", "--list-id", "L1"])

    assert dict(requests_seen[0].url.params) == {"email": "a@example.com"}
    assert dict(requests_seen[1].url.params) == {"query": "jane", "list_id": "L1"}


def test_stores_and_automations(fake_client, routes, requests_seen, capsys):
    routes[("GET", "/ecommerce/stores")] = (200, {"stores": [{"id": "s1"}], "total_items": 1})
    routes[("GET", "/automations")] = (200, {"automations": [{"id": "w1"}], "total_items": 1})

    main(["stores"])
    main(["automations"])

    assert [r.url.path for r in requests_seen] == ["/3.0/ecommerce/stores", "/3.0/automations"]


# ===== Actions =====

def test_delete_campaign(fake_client, requests_seen, capsys):
    main(["delete-campaign", "--id", "c1"])

    assert requests_seen[0].method == "DELETE"
    assert requests_seen[0].url.path == "/3.0/campaigns/c1"
    assert "Deleted campaign c1" in capsys.readouterr().out


def test_pause_and_start_automation(fake_client, requests_seen):
    main(["pause-automation", "--id", "w1"])
    main(["start-automation", "--id", "w1"])

    assert [r.url.path for r in requests_seen] == [
        "/3.0/automations/w1/actions/pause-all-emails",
        "/3.0/automations/w1/actions/start-all-emails",
    ]


def test_action_failure_exits(fake_client, routes, capsys):
    routes[("POST", "/automations/w1/actions/pause-all-emails")] = (500, None)

    with pytest.raises(SystemExit) as exc_info:
        main(["pause-automation", "--id", "w1"])

    assert exc_info.value.code == 1
    assert "HTTP 500" in capsys.readouterr().err


def test_empty_id_fails_without_call(fake_client, requests_seen, capsys):
    with pytest.raises(SystemExit):
        main(["delete-campaign", "--id", ""])

    assert requests_seen == []


def test_missing_configuration_exits(temp_home, capsys):
    with patch("mailchimp_client.cli.main.build_client", side_effect=ConfigError("No API key configured")):
        with pytest.raises(SystemExit) as exc_info:
            main(["campaigns"])

    assert exc_info.value.code == 1
    assert "No API key configured" in capsys.readouterr().err
