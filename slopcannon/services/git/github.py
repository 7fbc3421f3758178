"""Pull request lookup for slopcannon.

Two backends: the GitHub REST API through PyGithub when a token is
available, otherwise the ``gh`` CLI when it is installed. Without either
the lookup is disabled. Lookups are best effort and never raise.
"""

import json
import shutil
from typing import Optional, TYPE_CHECKING
from urllib.parse import urlparse

from github import Auth, Github

from slopcannon.constants import REVIEW_STATE_MERGED
from slopcannon.exceptions import ExternalCommandError
from slopcannon.logging_config import get_logger
from slopcannon.models.worktree import ReviewRequest
from slopcannon.services.git.runner import CommandRunner

if TYPE_CHECKING:
    from github.Repository import Repository

logger = get_logger(__name__)

BACKEND_API = "api"
BACKEND_GH = "gh"


def parse_github_repo(remote_url: Optional[str]) -> Optional[str]:
    """Extract ``org/repo`` from a GitHub remote URL."""
    if not remote_url or "github.com" not in remote_url:
        return None

    if remote_url.startswith("git@"):
        # Handle SSH URL format (git@github.com:org/repo.git)
        path = remote_url.split("github.com:", 1)[-1]
    else:
        # Handle HTTPS URL format (https://github.com/org/repo.git)
        path = urlparse(remote_url).path.strip("/")

    if path.endswith(".git"):
        path = path[:-4]

    return path if path.count("/") == 1 else None


class GitHubService:
    """Finds the most recent pull request opened from a branch."""

    def __init__(
        self,
        remote_url: Optional[str],
        token: Optional[str] = None,
        gh_runner: Optional[CommandRunner] = None,
        gh_available: Optional[bool] = None,
    ):
        self.github_repo = parse_github_repo(remote_url)
        self.token = token
        self.gh_runner = gh_runner or CommandRunner("gh")
        if gh_available is None:
            gh_available = shutil.which("gh") is not None
        self.gh_available = gh_available
        self.gh_repo: Optional["Repository"] = None
        self.backend: Optional[str] = None

        if self.token and self.github_repo:
            self.backend = BACKEND_API
        elif self.gh_available:
            self.backend = BACKEND_GH

        logger.debug(f"[GitHub] PR lookup backend: {self.backend or 'disabled'}")

    @property
    def enabled(self) -> bool:
        return self.backend is not None

    def _get_repo(self) -> "Repository":
        if self.gh_repo is None:
            assert self.token is not None and self.github_repo is not None
            self.gh_repo = Github(auth=Auth.Token(self.token)).get_repo(self.github_repo)
            logger.debug(f"[GitHub] GitHub integration enabled for: {self.github_repo}")
        return self.gh_repo

    def _lookup_api(self, branch: str) -> Optional[ReviewRequest]:
        assert self.github_repo is not None
        owner = self.github_repo.split("/")[0]
        pulls = self._get_repo().get_pulls(
            state="all", head=f"{owner}:{branch}", sort="created", direction="desc"
        )
        for pr in pulls:
            state = REVIEW_STATE_MERGED if pr.merged_at is not None else pr.state.upper()
            return ReviewRequest(number=pr.number, title=pr.title, state=state, url=pr.html_url)
        return None

    def _lookup_gh(self, branch: str, cwd: Optional[str]) -> Optional[ReviewRequest]:
        output = self.gh_runner.run(
            [
                "pr", "list",
                "--head", branch,
                "--state", "all",
                "--json", "number,title,state,url",
                "--limit", "1",
            ],
            cwd,
        )
        prs = json.loads(output or "[]")
        if not prs:
            return None
        pr = prs[0]
        return ReviewRequest(
            number=int(pr["number"]),
            title=pr["title"],
            state=str(pr["state"]).upper(),
            url=pr["url"],
        )

    def find_review_request(self, branch: str, cwd: Optional[str] = None) -> Optional[ReviewRequest]:
        """Most recent pull request whose head is branch, or None."""
        if not self.enabled:
            return None

        try:
            if self.backend == BACKEND_API:
                pr = self._lookup_api(branch)
            else:
                pr = self._lookup_gh(branch, cwd)
        except ExternalCommandError as e:
            logger.debug(f"[GitHub] Error looking up PR for {branch}: {e}")
            return None
        except (ValueError, KeyError, TypeError) as e:
            logger.debug(f"[GitHub] Unexpected PR data for {branch}: {e}")
            return None
        except Exception as e:
            logger.debug(f"[GitHub] Error checking PR status for {branch}: {e}")
            return None

        if pr:
            logger.debug(f"[GitHub] {branch}: PR #{pr.number} {pr.state}")
        return pr
