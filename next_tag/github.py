"""GitHub adapter for the repository protocols.

Talks to the GitHub REST API through ``gh api``. Every call is a single
blocking request; failures surface as RemoteError and are never retried.
"""

from __future__ import annotations

import json
from collections.abc import Iterator
from itertools import islice
from typing import Any
from urllib.parse import quote

from .errors import RemoteError
from .models import BRANCH_REF_PREFIX, BranchRef, Commit, Issue, Tag
from .shell import gh

PAGE_SIZE = 100


class GitHubRepository:
    """Tag, ref, commit and issue access for one GitHub repository.

    Args:
        repo: Repository in "owner/name" form.
        token: Token authorizing the calls.
        history_limit: Maximum number of commits ``iter_commits`` yields.
    """

    def __init__(self, repo: str, token: str, history_limit: int = PAGE_SIZE) -> None:
        self.repo = repo
        self.token = token
        self.history_limit = history_limit

    def _api(self, path: str, *fields: str, method: str = "GET") -> Any:
        args = ["api", "--method", method, f"repos/{self.repo}/{path}"]
        for field in fields:
            args.extend(["-f", field])
        output = gh(*args, token=self.token)
        try:
            return json.loads(output) if output else None
        except json.JSONDecodeError as exc:
            raise RemoteError(f"Unexpected response from {path}: {exc}") from exc

    def _pages(self, path: str, per_page: int = PAGE_SIZE) -> Iterator[dict[str, Any]]:
        """Yield items of a list endpoint, requesting one page at a time."""
        sep = "&" if "?" in path else "?"
        page = 1
        while True:
            items = self._api(f"{path}{sep}per_page={per_page}&page={page}") or []
            yield from items
            if len(items) < per_page:
                return
            page += 1

    def list_tags(self) -> list[Tag]:
        return [
            Tag(name=item["name"], sha=item["commit"]["sha"])
            for item in self._pages("tags")
        ]

    def find_branch(self, branch: str) -> BranchRef | None:
        # matching-refs is a prefix search: heads/main also returns heads/main-old
        wanted = f"{BRANCH_REF_PREFIX}{branch}"
        for item in self._api(f"git/matching-refs/heads/{quote(branch, safe='/')}") or []:
            if item.get("ref") == wanted:
                return BranchRef(ref=item["ref"], sha=item["object"]["sha"])
        return None

    def create_ref(self, ref: str, sha: str) -> None:
        self._api("git/refs", f"ref={ref}", f"sha={sha}", method="POST")

    def iter_commits(self, sha: str) -> Iterator[Commit]:
        per_page = min(PAGE_SIZE, self.history_limit)
        pages = self._pages(f"commits?sha={quote(sha)}", per_page=per_page)
        for item in islice(pages, self.history_limit):
            yield Commit(sha=item["sha"], message=item["commit"]["message"])

    def get_issue(self, number: int) -> Issue:
        data = self._api(f"issues/{number}") or {}
        # Labels may come back as bare strings; only named objects count
        labels = [
            label["name"]
            for label in data.get("labels", [])
            if isinstance(label, dict) and label.get("name")
        ]
        return Issue(number=number, labels=labels)
