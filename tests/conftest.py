# Shared fixtures: an in-process fake of the repository file API.
# Created: 2026-03-08

from __future__ import annotations

import base64
import json
import posixpath

import httpx
import pytest

from hanafs.config import DEFAULT_REPOSITORY_ROOT, Settings
from hanafs.remote.credentials import CredentialStore
from hanafs.remote.filesystem import RemoteFileSystem

HOST = "host.example"
USER = "alice"
PASSWORD = "s3cret"
BASE = f"hanafs://{USER}:{PASSWORD}@{HOST}"


class FakePrompt:
    """CredentialPrompt that replays canned answers and records questions."""

    def __init__(self, *answers: str | None):
        self.answers = list(answers)
        self.calls: list[str] = []

    async def prompt(self, message: str, *, password: bool = False) -> str | None:
        self.calls.append(message)
        return self.answers.pop(0) if self.answers else None


class FakeRepository:
    """Stand-in for the HANA file API, served through ``httpx.MockTransport``.

    Nodes are kept in insertion order; ``None`` marks a directory.
    """

    def __init__(self, root: str = DEFAULT_REPOSITORY_ROOT):
        self.root = root
        self.nodes: dict[str, bytes | None] = {"/": None}
        self.users = {USER: PASSWORD}
        self.token = "token-1"
        self.issue_tokens = True
        self.fetch_status = 200
        self.reject_next = 0
        self.token_fetches = 0
        self.requests: list[httpx.Request] = []

    # -- tree helpers --

    def add_dir(self, path: str) -> None:
        self.nodes[path] = None

    def add_file(self, path: str, data: bytes) -> None:
        self.nodes[path] = data

    def children(self, path: str) -> list[str]:
        return [p for p in self.nodes if p != "/" and posixpath.dirname(p) == path]

    def rotate_token(self) -> None:
        self.token = f"token-{int(self.token.split('-')[1]) + 1}"

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    # -- request handling --

    def _authorized(self, request: httpx.Request) -> bool:
        header = request.headers.get("authorization", "")
        if not header.startswith("Basic "):
            return False
        user, _, password = base64.b64decode(header[6:]).decode().partition(":")
        return self.users.get(user) == password

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if not self._authorized(request):
            return httpx.Response(401, text="Unauthorized")

        if request.headers.get("x-csrf-token") == "fetch":
            self.token_fetches += 1
            if not self.issue_tokens:
                return httpx.Response(self.fetch_status, text="no token for you")
            return httpx.Response(
                200,
                headers={"x-csrf-token": self.token, "set-cookie": "sessionid=abc; Path=/"},
            )

        if self.reject_next:
            self.reject_next -= 1
            return _token_required()
        if request.headers.get("x-csrf-token") != self.token:
            return _token_required()

        path = request.url.path[len(self.root):] or "/"
        method = request.method
        if method == "GET":
            return self._get(request, path)
        if method == "PUT":
            return self._put(request, path)
        if method == "POST":
            return self._post(request, path)
        if method == "DELETE":
            return self._delete(path)
        return httpx.Response(405)

    def _get(self, request: httpx.Request, path: str) -> httpx.Response:
        if path not in self.nodes:
            return httpx.Response(404, text=f"{path} not found")
        node = self.nodes[path]
        name = posixpath.basename(path)

        if request.url.params.get("parts") == "meta":
            return httpx.Response(
                200,
                json={"Name": name, "Directory": node is None, "LocalTimeStamp": 1700000000000},
            )
        if node is not None:
            return httpx.Response(200, content=node)
        children = [
            {"Name": posixpath.basename(p), "Directory": self.nodes[p] is None}
            for p in self.children(path)
        ]
        return httpx.Response(200, json={"Name": name, "Directory": True, "Children": children})

    def _put(self, request: httpx.Request, path: str) -> httpx.Response:
        if self.nodes.get(posixpath.dirname(path), b"") is not None:
            return httpx.Response(404, text="parent missing")
        if path in self.nodes and self.nodes[path] is None:
            return httpx.Response(400, text="is a folder")
        self.nodes[path] = request.content
        return httpx.Response(200)

    def _post(self, request: httpx.Request, path: str) -> httpx.Response:
        if path not in self.nodes or self.nodes[path] is not None:
            return httpx.Response(404, text="collection missing")
        body = json.loads(request.content)

        if "Location" in body:
            source = body["Location"][len(self.root):]
            target = posixpath.join(path, body["Target"])
            if source not in self.nodes:
                return httpx.Response(404)
            options = request.headers.get("x-create-options", "")
            if target in self.nodes and "no-overwrite" in options:
                return httpx.Response(412, text="target exists")
            moved = {
                p: v
                for p, v in self.nodes.items()
                if p == source or p.startswith(source + "/")
            }
            for p in moved:
                del self.nodes[p]
            for p, v in moved.items():
                self.nodes[target + p[len(source):]] = v
            return httpx.Response(201)

        target = posixpath.join(path, body["Name"])
        if target in self.nodes:
            return httpx.Response(409, text="exists")
        self.nodes[target] = None if body.get("Directory") else b""
        return httpx.Response(201)

    def _delete(self, path: str) -> httpx.Response:
        if path not in self.nodes or path == "/":
            return httpx.Response(404)
        for p in [p for p in self.nodes if p == path or p.startswith(path + "/")]:
            del self.nodes[p]
        return httpx.Response(204)


def _token_required() -> httpx.Response:
    return httpx.Response(
        403, headers={"x-csrf-token": "Required"}, text="CSRF token validation failed"
    )


@pytest.fixture
def settings():
    return Settings(_env_file=None)


@pytest.fixture
def repo():
    r = FakeRepository()
    r.add_dir("/sap")
    r.add_dir("/sap/demo")
    r.add_file("/sap/demo/zeta.txt", b"last letter")
    r.add_dir("/sap/demo/alpha")
    r.add_file("/sap/demo/Mid.xsjs", b"$.response.setBody('hi');")
    return r


@pytest.fixture
def prompt():
    return FakePrompt()


@pytest.fixture
async def fs(repo, settings, prompt):
    filesystem = RemoteFileSystem(
        CredentialStore(prompt), settings, transport=repo.transport
    )
    yield filesystem
    await filesystem.aclose()
