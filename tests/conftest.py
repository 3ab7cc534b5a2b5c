"""Shared fixtures: an app client and a fake GitHub behind ``requests.request``."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

import pytest
import requests
from fastapi.testclient import TestClient
from requests.structures import CaseInsensitiveDict

from caromar.core.config import settings

VALID_TOKEN = "ghp_" + "a" * 40


def make_response(status: int = 200, body: Any = None, headers: dict | None = None) -> requests.Response:
    r = requests.Response()
    r.status_code = status
    r._content = json.dumps(body).encode() if body is not None else b""
    r.headers = CaseInsensitiveDict(headers or {})
    r.reason = "OK" if status < 400 else "Error"
    r.encoding = "utf-8"
    return r


@dataclass
class Call:
    method: str
    path: str
    headers: dict
    params: dict | None
    json: Any


@dataclass
class FakeGitHub:
    """Routes (method, path) to canned responses and records every call."""

    routes: dict = field(default_factory=dict)
    calls: list[Call] = field(default_factory=list)
    network_down: bool = False

    def add(self, method: str, path: str, status: int = 200, body: Any = None, headers: dict | None = None):
        self.routes[(method, path)] = (status, body, headers)

    def paths(self) -> list[str]:
        return [c.path for c in self.calls]

    def __call__(self, method, url, headers=None, params=None, json=None, timeout=None, **_):
        path = url[len(settings.GITHUB_API):]
        self.calls.append(Call(method, path, dict(headers or {}), params, json))
        if self.network_down:
            raise requests.ConnectionError("connection refused")
        if (method, path) not in self.routes:
            return make_response(404, {"message": "Not Found"})
        status, body, hdrs = self.routes[(method, path)]
        return make_response(status, body, hdrs)


@pytest.fixture
def github(monkeypatch) -> FakeGitHub:
    fake = FakeGitHub()
    monkeypatch.setattr("caromar.services.github.requests.request", fake)
    return fake


@pytest.fixture
def client(github) -> TestClient:
    from main import app

    return TestClient(app)


def repo(name: str, **overrides: Any) -> dict:
    """A plausible repository record."""
    base = {
        "id": abs(hash(name)) % 10_000,
        "name": name,
        "full_name": f"octocat/{name}",
        "description": f"{name} description",
        "language": "Python",
        "stargazers_count": 10,
        "forks_count": 2,
        "watchers_count": 10,
        "open_issues_count": 1,
        "size": 100,
        "private": False,
        "fork": False,
        "archived": False,
        "created_at": "2023-01-15T10:00:00Z",
        "updated_at": "2024-06-01T10:00:00Z",
        "pushed_at": "2024-06-01T10:00:00Z",
        "topics": ["cli", "github"],
        "license": {"name": "MIT License"},
        "clone_url": f"https://github.com/octocat/{name}.git",
        "ssh_url": f"git@github.com:octocat/{name}.git",
        "html_url": f"https://github.com/octocat/{name}",
    }
    base.update(overrides)
    return base


@pytest.fixture
def make_repo():
    return repo
