"""Request bodies for the write-style (POST) endpoints.

Fields are loosely typed on purpose: the handlers sanitize and validate them
so that a bad value gets a descriptive 400 instead of a schema dump.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class ForkRequest(BaseModel):
    owner: Any = None
    repo: Any = None
    token: Any = None
    organization: Any = None


class MergedRepoRequest(BaseModel):
    name: Any = None
    description: Any = None
    repositories: Any = None
    token: Any = None
    private: bool = False


class AnalyzeRequest(BaseModel):
    repositories: Any = None


class CompareRequest(BaseModel):
    repositories: Any = None
    mode: Any = "two"
    criteria: Any = "stars"
