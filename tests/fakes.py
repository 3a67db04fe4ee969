"""Fake GitHub API, clock and payload builders shared by the tests."""

from __future__ import annotations

import httpx

USERNAME = "octo"

PAGE_HTML = """<!DOCTYPE html>
<html>
<body>
<main>
<div class="card">
<h3>Alpha</h3>
<a href="https://github.com/octo/A">Source</a>
<div class="badges"><span>Python</span></div>
</div>
<div class="card">
<h3>Beta</h3>
<a href="https://github.com/octo/B">Source</a>
<div class="badges"><span>Go</span></div>
</div>
</main>
<footer class="site-footer"><p>&copy; octo</p></footer>
</body>
</html>
"""


class FakeClock:
    """Manually advanced replacement for ``time.time``."""

    def __init__(self, now: float = 1_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeGitHub:
    """Routes requests by URL path and records every call that reaches it."""

    def __init__(self) -> None:
        self.routes: dict[str, tuple[int, object]] = {}
        self.calls: list[str] = []
        self.requests: list[httpx.Request] = []

    def add(self, path: str, payload: object, status: int = 200) -> None:
        self.routes[path] = (status, payload)

    def fail(self, path: str, status: int = 500) -> None:
        self.routes[path] = (status, {"message": "Server Error"})

    def disconnect(self, path: str) -> None:
        self.routes[path] = (0, None)

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        self.calls.append(path)
        self.requests.append(request)
        if path not in self.routes:
            return httpx.Response(404, json={"message": "Not Found"})
        status, payload = self.routes[path]
        if status == 0:
            raise httpx.ConnectError("connection refused", request=request)
        return httpx.Response(status, json=payload)

    def count(self, path: str) -> int:
        return self.calls.count(path)


def repo_payload(stars: int = 10, forks: int = 2, issues: int = 1, **extra: object) -> dict:
    payload = {
        "name": "A",
        "stargazers_count": stars,
        "forks_count": forks,
        "open_issues_count": issues,
        "language": "Python",
        "updated_at": "2024-01-01T12:00:00Z",
        "size": 2048,
    }
    payload.update(extra)
    return payload


def release_payload(tag: str = "v1.0") -> dict:
    return {"tag_name": tag, "published_at": "2024-01-01T08:00:00Z"}


def commit_payload(sha: str = "0123456789abcdef0123456789abcdef01234567", date: str = "2024-01-01T00:00:00Z") -> dict:
    return {"sha": sha, "commit": {"author": {"name": "octo", "date": date}}}
