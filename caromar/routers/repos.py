# caromar/routers/repos.py
"""
Repository endpoints proxied to GitHub.

- GET  /api/search-repos       -> probe user/org, then one page of repos
- GET  /api/repo-content       -> contents listing at a path
- POST /api/fork-repo          -> fork into the token's account (or an org)
- POST /api/create-merged-repo -> empty auto-initialised repo + manual merge steps

GET endpoints take the token from the Authorization header, POST endpoints
from the JSON body. Nothing here performs git operations.
"""

from typing import Any, Dict, List, Optional

import structlog
from fastapi import APIRouter, Depends, Query

from caromar.core.config import settings
from caromar.core.errors import ValidationError
from caromar.core.security import bearer_token
from caromar.schemas import ForkRequest, MergedRepoRequest
from caromar.services.github import (
    GitHubCredentials,
    GitHubError,
    gh_get,
    gh_post,
    resolve_owner_kind,
    to_api_error,
)
from caromar.utils.repos import summarize
from caromar.utils.time import epoch_to_iso
from caromar.utils.validation import (
    is_valid_owner_name,
    is_valid_repo_path,
    is_valid_repository_name,
    is_valid_token,
    is_valid_url,
    normalize_pagination,
    normalize_sort_key,
    sanitize,
)

log = structlog.get_logger(__name__)

router = APIRouter()

ALLOWED_SORTS = ["updated", "created", "pushed", "full_name"]
MERGE_NOTE = (
    "These commands are for manual execution. "
    "Always review repository names and URLs before running commands."
)

# ------------------------------- Search ----------------------------------------

def _rate_limit_remaining(value: Optional[str]) -> Optional[int]:
    try:
        return int(value) if value is not None else None
    except ValueError:
        return None

@router.get("/api/search-repos")
def search_repos(
    username: Optional[str] = Query(None),
    type: str = Query("all"),
    sort: Optional[str] = Query("updated"),
    per_page: Optional[str] = Query(None),
    page: Optional[str] = Query(None),
    token: Optional[str] = Depends(bearer_token),
):
    username = sanitize(username)
    if not username or not is_valid_owner_name(username):
        log.warning("invalid username", username=username)
        raise ValidationError("Valid username is required")
    if token and not is_valid_token(token):
        log.warning("invalid token format")
        raise ValidationError("Invalid token format")

    page_n, per_page_n = normalize_pagination(
        page if page is not None else 1,
        per_page if per_page is not None else settings.MAX_PER_PAGE,
    )
    sort = normalize_sort_key(sort, ALLOWED_SORTS)
    creds = GitHubCredentials(token=token)

    # 1) user or organization? a failed probe means 'user'
    if resolve_owner_kind(username, creds) == "organization":
        path = f"/orgs/{username}/repos"
    else:
        path = f"/users/{username}/repos"

    # 2) one page of repos
    try:
        r = gh_get(path, creds, params={
            "per_page": min(per_page_n, settings.MAX_PER_PAGE),
            "page": page_n,
            "sort": sort,
            "type": type,
            "direction": "desc",
        })
    except GitHubError as exc:
        log.error("error fetching repositories", owner=username, status=exc.status, error=exc.message)
        extra = None
        if exc.status == 403:
            extra = {"reset_time": epoch_to_iso(exc.headers.get("x-ratelimit-reset"))}
        raise to_api_error(
            exc,
            {403: "API rate limit exceeded or insufficient permissions", 404: "User not found"},
            "Failed to fetch repositories",
            extra=extra,
        )

    data = r.json()
    repos = [summarize(repo) for repo in data] if isinstance(data, list) else []

    return {
        "repos": repos,
        "pagination": {
            "page": page_n,
            "per_page": per_page_n,
            "total": len(repos),
            # a full page *probably* means there is another one
            "has_more": len(repos) == per_page_n,
        },
        "rate_limit": {
            "remaining": _rate_limit_remaining(r.headers.get("x-ratelimit-remaining")),
            "reset": epoch_to_iso(r.headers.get("x-ratelimit-reset")),
        },
    }

# ------------------------------- Content ---------------------------------------

@router.get("/api/repo-content")
def repo_content(
    owner: Optional[str] = Query(None),
    repo: Optional[str] = Query(None),
    path: Optional[str] = Query(""),
    token: Optional[str] = Depends(bearer_token),
):
    owner, repo, path = sanitize(owner), sanitize(repo), sanitize(path)
    if not owner or not is_valid_owner_name(owner):
        raise ValidationError("Valid owner is required")
    if not repo or not is_valid_repository_name(repo):
        raise ValidationError("Valid repository name is required")
    if not is_valid_repo_path(path):
        log.warning("rejected repository path", owner=owner, repo=repo, path=path)
        raise ValidationError("Valid repository path is required")

    try:
        r = gh_get(f"/repos/{owner}/{repo}/contents/{path}", GitHubCredentials(token=token))
    except GitHubError as exc:
        log.error("error fetching repository content", owner=owner, repo=repo, status=exc.status)
        raise to_api_error(exc, {}, "Failed to fetch repository content",
                           fallback_status=exc.status or 500)
    return {"content": r.json()}

# -------------------------------- Fork -----------------------------------------

@router.post("/api/fork-repo")
def fork_repo(body: ForkRequest):
    owner, repo = sanitize(body.owner), sanitize(body.repo)
    if not owner or not is_valid_owner_name(owner):
        raise ValidationError("Valid owner is required")
    if not repo or not is_valid_repository_name(repo):
        raise ValidationError("Valid repository name is required")
    if not body.token or not is_valid_token(body.token):
        raise ValidationError("Valid token is required")

    organization = None
    if body.organization:
        organization = sanitize(body.organization)
        if not is_valid_owner_name(organization):
            raise ValidationError("Valid organization name is required")

    log.info("forking repository", owner=owner, repo=repo, organization=organization)
    try:
        r = gh_post(
            f"/repos/{owner}/{repo}/forks",
            GitHubCredentials(token=body.token),
            json={"organization": organization} if organization else {},
        )
    except GitHubError as exc:
        log.error("error forking repository", owner=owner, repo=repo, status=exc.status)
        raise to_api_error(
            exc,
            {
                403: "Insufficient permissions or repository already forked",
                404: "Repository not found or not accessible",
                422: "Repository already exists or cannot be forked",
            },
            "Failed to fork repository",
        )

    fork = r.json()
    log.info("repository forked", full_name=fork.get("full_name"))
    return {
        "success": True,
        "fork_url": fork.get("html_url"),
        "clone_url": fork.get("clone_url"),
        "ssh_url": fork.get("ssh_url"),
        "full_name": fork.get("full_name"),
        "message": "Repository forked successfully",
    }

# ---------------------------- Merged repository --------------------------------

def _validate_sources(repositories: Any) -> List[Dict[str, Any]]:
    if not isinstance(repositories, list) or not repositories:
        raise ValidationError("At least one repository is required")
    if len(repositories) > settings.MAX_MERGE_SOURCES:
        raise ValidationError(
            f"Maximum {settings.MAX_MERGE_SOURCES} repositories can be merged at once"
        )
    for i, src in enumerate(repositories):
        if not isinstance(src, dict):
            raise ValidationError("Each repository needs a name and clone_url", details=f"entry {i}")
        name = sanitize(src.get("name"))
        if not name or not is_valid_repository_name(name):
            raise ValidationError("Each repository needs a name and clone_url", details=f"entry {i}: name")
        if not is_valid_url(src.get("clone_url")):
            raise ValidationError("Each repository needs a name and clone_url", details=f"entry {i}: clone_url")
    return repositories

def merge_steps(new_repo: Dict[str, Any], sources: List[Dict[str, Any]]) -> List[str]:
    """Shell commands, in order, for the user to run by hand."""
    steps = [
        f"git clone {new_repo.get('clone_url')}",
        f"cd {sanitize(new_repo.get('name'))}",
    ]
    for src in sources:
        folder = sanitize(src.get("name"))
        steps += [
            f'mkdir "{folder}"',
            f'cd "{folder}"',
            f"git clone {src.get('clone_url')} .",
            "rm -rf .git",
            "cd ..",
        ]
    return steps

@router.post("/api/create-merged-repo")
def create_merged_repo(body: MergedRepoRequest):
    name = sanitize(body.name)
    if not name or not is_valid_repository_name(name):
        raise ValidationError("Valid repository name is required")
    sources = _validate_sources(body.repositories)
    if not body.token or not is_valid_token(body.token):
        raise ValidationError("Valid token is required")

    description = sanitize(body.description) or (
        "Merged repository containing: " + ", ".join(sanitize(s.get("name")) for s in sources)
    )

    log.info("creating merged repository", name=name, repo_count=len(sources))
    try:
        r = gh_post(
            "/user/repos",
            GitHubCredentials(token=body.token),
            json={
                "name": name,
                "description": description,
                "private": body.private,
                "auto_init": True,
            },
        )
    except GitHubError as exc:
        log.error("error creating merged repository", name=name, status=exc.status)
        raise to_api_error(
            exc,
            {
                422: "Repository name already exists or is invalid",
                403: "Insufficient permissions to create repository",
            },
            "Failed to create merged repository",
        )

    new_repo = r.json()
    log.info("merged repository created", full_name=new_repo.get("full_name"))
    return {
        "success": True,
        "repository": {
            "name": new_repo.get("name"),
            "full_name": new_repo.get("full_name"),
            "html_url": new_repo.get("html_url"),
            "clone_url": new_repo.get("clone_url"),
            "ssh_url": new_repo.get("ssh_url"),
        },
        "message": "Repository created successfully",
        "merge_instructions": {
            "repositories": sources,
            "note": MERGE_NOTE,
            "steps": merge_steps(new_repo, sources),
        },
    }
