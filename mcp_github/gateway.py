# =============================================================================
# GitHub MCP Server - Resource Gateway
# =============================================================================
"""
One method per GitHub operation, built on :class:`GitHubClient`.

Simple operations build a path and query, issue a single request and
validate the JSON into a model. Three operations need several dependent
calls and are run strictly one step after another:

- :meth:`GitHubGateway.create_branch`: read source branch, create ref,
  re-read the new branch.
- :meth:`GitHubGateway.push_file`: look the file up, then create or update it.
- :meth:`GitHubGateway.delete_file`: look the file up, then delete it.

None of them roll back. If a later step fails, earlier remote effects stay in
place and the error propagates to the caller, who may retry the whole
operation.

Usage:
    async with GitHubGateway(token=token) as github:
        branches = await github.list_branches("octocat", "hello-world")
"""

import base64
import logging
import urllib.parse
from typing import Any, Optional, TypeVar

from pydantic import BaseModel

from .auth import CredentialGate, requires_credential
from .client import (
    DEFAULT_BASE_URL,
    GitHubApiError,
    GitHubClient,
    RemoteNotFoundError,
    RemoteRejectedError,
    RepositoryFileNotFoundError,
    SourceBranchNotFoundError,
)
from .models import (
    FILE_NOT_FOUND,
    Branch,
    Collaborator,
    Commit,
    FileCommitResponse,
    FileContent,
    FileFound,
    FileLookup,
    FileMissing,
    Fork,
    Issue,
    IssueCreate,
    PullRequest,
    PullRequestCreate,
    Ref,
    Release,
    Repository,
    SearchResult,
    UserProfile,
    WorkflowRun,
    WorkflowRunsResponse,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

DEFAULT_LIMIT = 10
MAX_PAGE_SIZE = 100


def clamp_limit(limit: Optional[int]) -> int:
    """
    Bound a requested page size to the API's page cap.

    Absent or non-positive limits become 10; anything above 100 becomes 100.
    """
    if limit is None or limit <= 0:
        return DEFAULT_LIMIT
    return min(limit, MAX_PAGE_SIZE)


def _segment(value: str) -> str:
    """Percent-encode one path segment, slashes included."""
    return urllib.parse.quote(value, safe="")


def _repo_path(owner: str, repo: str) -> str:
    return f"/repos/{_segment(owner)}/{_segment(repo)}"


def _starred_path(owner: str, repo: str) -> str:
    return f"/user/starred/{_segment(owner)}/{_segment(repo)}"


def _contents_path(owner: str, repo: str, path: str) -> str:
    encoded_path = urllib.parse.quote(path.lstrip("/"), safe="/")
    return f"{_repo_path(owner, repo)}/contents/{encoded_path}"


class GitHubGateway:
    """
    Authenticated gateway to the GitHub REST API.

    Attributes:
        credentials: Gate consulted by every write operation.
    """

    def __init__(
        self,
        token: Optional[str] = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        client: Optional[GitHubClient] = None,
    ) -> None:
        """
        Initialize the gateway.

        Args:
            token: GitHub personal access token, or None for read-only use.
            base_url: GitHub API base URL.
            timeout: Request timeout in seconds.
            client: Pre-built transport; one is created from the other
                arguments when omitted.
        """
        self.credentials = CredentialGate(token)
        self._client = client or GitHubClient(
            token=token, base_url=base_url, timeout=timeout
        )

    async def close(self) -> None:
        """Close the underlying transport."""
        await self._client.close()

    async def __aenter__(self) -> "GitHubGateway":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    def has_credential(self) -> bool:
        return self.credentials.has_credential()

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    async def _get_list(
        self,
        path: str,
        model: type[ModelT],
        params: Optional[dict] = None,
    ) -> list[ModelT]:
        # A null body is an empty result, not an error.
        data = await self._client.get(path, params=params)
        return [model.model_validate(item) for item in data or []]

    async def _get_one(
        self,
        path: str,
        model: type[ModelT],
        params: Optional[dict] = None,
    ) -> ModelT:
        data = await self._client.get(path, params=params)
        return model.model_validate(data)

    # -------------------------------------------------------------------------
    # Repository Methods
    # -------------------------------------------------------------------------

    async def list_user_repositories(self, username: str) -> list[Repository]:
        """List a user's public repositories, most recently updated first."""
        return await self._get_list(
            f"/users/{_segment(username)}/repos",
            Repository,
            params={"sort": "updated", "per_page": MAX_PAGE_SIZE},
        )

    @requires_credential
    async def list_my_repositories(self) -> list[Repository]:
        """List every repository (public and private) of the token's owner."""
        return await self._get_list(
            "/user/repos",
            Repository,
            params={"per_page": MAX_PAGE_SIZE, "type": "all"},
        )

    async def get_repository(self, owner: str, repo: str) -> Repository:
        return await self._get_one(_repo_path(owner, repo), Repository)

    @requires_credential
    async def create_repository(
        self,
        name: str,
        description: Optional[str] = None,
        private: bool = False,
    ) -> Repository:
        """
        Create a repository owned by the authenticated user.

        Args:
            name: Repository name.
            description: Optional description.
            private: Create as a private repository.

        Returns:
            The created Repository.
        """
        data = await self._client.post(
            "/user/repos",
            json={"name": name, "description": description, "private": private},
        )
        return Repository.model_validate(data)

    @requires_credential
    async def update_repository(
        self,
        owner: str,
        repo: str,
        name: Optional[str] = None,
        description: Optional[str] = None,
        private: Optional[bool] = None,
    ) -> Repository:
        """
        Rename a repository or change its description or visibility.

        Only the fields that are not None are sent.
        """
        payload = {
            key: value
            for key, value in (
                ("name", name),
                ("description", description),
                ("private", private),
            )
            if value is not None
        }
        data = await self._client.patch(_repo_path(owner, repo), json=payload)
        return Repository.model_validate(data)

    @requires_credential
    async def delete_repository(self, owner: str, repo: str) -> None:
        await self._client.delete(_repo_path(owner, repo))
        logger.info(f"Deleted repository {owner}/{repo}")

    async def search_repositories(
        self, query: str, limit: Optional[int] = None
    ) -> list[Repository]:
        """
        Search repositories, best starred first.

        Args:
            query: GitHub search syntax, e.g. ``language:python stars:>1000``.
            limit: Maximum results (default 10, max 100).

        Returns:
            The ``items`` of the search envelope; empty when the envelope is null.
        """
        data = await self._client.get(
            "/search/repositories",
            params={
                "q": query,
                "per_page": clamp_limit(limit),
                "sort": "stars",
                "order": "desc",
            },
        )
        if data is None:
            return []
        return list(SearchResult.model_validate(data).items)

    # -------------------------------------------------------------------------
    # Commit Methods
    # -------------------------------------------------------------------------

    async def list_commits(
        self, owner: str, repo: str, limit: Optional[int] = None
    ) -> list[Commit]:
        """List recent commits, newest first."""
        return await self._get_list(
            f"{_repo_path(owner, repo)}/commits",
            Commit,
            params={"per_page": clamp_limit(limit)},
        )

    async def get_last_commit(self, owner: str, repo: str) -> Optional[Commit]:
        """Return the most recent commit, or None for an empty repository."""
        commits = await self._get_list(
            f"{_repo_path(owner, repo)}/commits", Commit, params={"per_page": 1}
        )
        return commits[0] if commits else None

    # -------------------------------------------------------------------------
    # Branch Methods
    # -------------------------------------------------------------------------

    async def list_branches(self, owner: str, repo: str) -> list[Branch]:
        return await self._get_list(f"{_repo_path(owner, repo)}/branches", Branch)

    async def get_branch(self, owner: str, repo: str, branch: str) -> Branch:
        return await self._get_one(
            f"{_repo_path(owner, repo)}/branches/{_segment(branch)}", Branch
        )

    @requires_credential
    async def create_branch(
        self,
        owner: str,
        repo: str,
        branch_name: str,
        from_branch: str,
    ) -> Branch:
        """
        Create a branch pointing at the head of another branch.

        Runs three dependent calls; any failure stops the remaining ones.
        A ref created in step 2 is not removed if step 3 fails.

        Args:
            owner: Repository owner.
            repo: Repository name.
            branch_name: Name for the new branch.
            from_branch: Existing branch to branch from.

        Returns:
            The new branch, as re-read from the branches endpoint.

        Raises:
            SourceBranchNotFoundError: If ``from_branch`` does not exist.
        """
        try:
            source = await self.get_branch(owner, repo, from_branch)
        except RemoteNotFoundError as e:
            raise SourceBranchNotFoundError(
                message=f"Source branch not found: {from_branch}",
                status_code=e.status_code,
                response_data=e.response_data,
            ) from e

        source_sha = source.head_sha
        if not source_sha:
            raise SourceBranchNotFoundError(
                message=f"Source branch '{from_branch}' has no head commit"
            )

        logger.info(
            f"Creating branch '{branch_name}' in {owner}/{repo} "
            f"from '{from_branch}' at {source_sha}"
        )
        data = await self._client.post(
            f"{_repo_path(owner, repo)}/git/refs",
            json={"ref": f"refs/heads/{branch_name}", "sha": source_sha},
        )
        if isinstance(data, dict):
            created = Ref.model_validate(data)
            logger.debug(f"Created {created.ref} at {created.target_sha}")

        # The ref response is not a branch; read the branch itself.
        return await self.get_branch(owner, repo, branch_name)

    @requires_credential
    async def delete_branch(self, owner: str, repo: str, branch: str) -> None:
        ref_name = urllib.parse.quote(branch, safe="/")
        await self._client.delete(
            f"{_repo_path(owner, repo)}/git/refs/heads/{ref_name}"
        )
        logger.info(f"Deleted branch '{branch}' in {owner}/{repo}")

    # -------------------------------------------------------------------------
    # Issue and Pull Request Methods
    # -------------------------------------------------------------------------

    async def list_issues(
        self,
        owner: str,
        repo: str,
        state: str = "open",
        limit: Optional[int] = None,
    ) -> list[Issue]:
        """
        List issues filtered by state.

        Args:
            owner: Repository owner.
            repo: Repository name.
            state: open, closed or all.
            limit: Maximum results (default 10, max 100).
        """
        return await self._get_list(
            f"{_repo_path(owner, repo)}/issues",
            Issue,
            params={"state": state, "per_page": clamp_limit(limit)},
        )

    @requires_credential
    async def create_issue(
        self, owner: str, repo: str, title: str, body: Optional[str] = None
    ) -> Issue:
        payload = IssueCreate(title=title, body=body).model_dump(exclude_none=True)
        data = await self._client.post(
            f"{_repo_path(owner, repo)}/issues", json=payload
        )
        return Issue.model_validate(data)

    async def list_pull_requests(
        self,
        owner: str,
        repo: str,
        state: str = "open",
        limit: Optional[int] = None,
    ) -> list[PullRequest]:
        return await self._get_list(
            f"{_repo_path(owner, repo)}/pulls",
            PullRequest,
            params={"state": state, "per_page": clamp_limit(limit)},
        )

    @requires_credential
    async def create_pull_request(
        self,
        owner: str,
        repo: str,
        title: str,
        head: str,
        base: str,
        body: Optional[str] = None,
    ) -> PullRequest:
        """
        Open a pull request.

        Args:
            owner: Repository owner.
            repo: Repository name.
            title: Pull request title.
            head: Branch containing the changes.
            base: Branch to merge into.
            body: Optional description.
        """
        payload = PullRequestCreate(
            title=title, head=head, base=base, body=body
        ).model_dump(exclude_none=True)
        data = await self._client.post(
            f"{_repo_path(owner, repo)}/pulls", json=payload
        )
        return PullRequest.model_validate(data)

    # -------------------------------------------------------------------------
    # Release Methods
    # -------------------------------------------------------------------------

    async def list_releases(
        self, owner: str, repo: str, limit: Optional[int] = None
    ) -> list[Release]:
        return await self._get_list(
            f"{_repo_path(owner, repo)}/releases",
            Release,
            params={"per_page": clamp_limit(limit)},
        )

    async def get_latest_release(self, owner: str, repo: str) -> Release:
        return await self._get_one(
            f"{_repo_path(owner, repo)}/releases/latest", Release
        )

    # -------------------------------------------------------------------------
    # User Methods
    # -------------------------------------------------------------------------

    async def get_user_profile(self, username: str) -> UserProfile:
        return await self._get_one(f"/users/{_segment(username)}", UserProfile)

    @requires_credential
    async def get_my_profile(self) -> UserProfile:
        return await self._get_one("/user", UserProfile)

    # -------------------------------------------------------------------------
    # Actions Methods
    # -------------------------------------------------------------------------

    async def list_workflow_runs(
        self, owner: str, repo: str, limit: Optional[int] = None
    ) -> list[WorkflowRun]:
        data = await self._client.get(
            f"{_repo_path(owner, repo)}/actions/runs",
            params={"per_page": clamp_limit(limit)},
        )
        if data is None:
            return []
        return list(WorkflowRunsResponse.model_validate(data).workflow_runs)

    # -------------------------------------------------------------------------
    # File Methods
    # -------------------------------------------------------------------------

    async def get_file_content(
        self,
        owner: str,
        repo: str,
        path: str,
        ref: Optional[str] = None,
    ) -> FileContent:
        """
        Get a file from a repository.

        Args:
            owner: Repository owner.
            repo: Repository name.
            path: File path within the repository.
            ref: Branch, tag or sha. Defaults to the default branch.

        Returns:
            FileContent with base64 encoded content.

        Raises:
            RemoteNotFoundError: If nothing exists at ``path``.
            RemoteRejectedError: If ``path`` is a directory.
        """
        params = {"ref": ref} if ref else None
        data = await self._client.get(
            _contents_path(owner, repo, path), params=params
        )
        if isinstance(data, list):
            raise RemoteRejectedError(
                message=f"Path '{path}' is a directory, not a file"
            )
        return FileContent.model_validate(data)

    async def lookup_file(
        self,
        owner: str,
        repo: str,
        path: str,
        ref: Optional[str] = None,
    ) -> FileLookup:
        """
        Check whether a file exists.

        Only a 404 (or a file without a sha) counts as absence. Transport
        failures and other remote errors propagate.

        Returns:
            FileFound carrying the current sha, or FILE_NOT_FOUND.
        """
        try:
            existing = await self.get_file_content(owner, repo, path, ref=ref)
        except RemoteNotFoundError:
            return FILE_NOT_FOUND
        if not existing.sha:
            return FILE_NOT_FOUND
        return FileFound(sha=existing.sha)

    @requires_credential
    async def push_file(
        self,
        owner: str,
        repo: str,
        path: str,
        content: str,
        message: str,
        branch: Optional[str] = None,
    ) -> Optional[str]:
        """
        Create or update a file with a commit.

        The existing file's sha, looked up on ``branch``, is what tells the
        API to update rather than create.

        Args:
            owner: Repository owner.
            repo: Repository name.
            path: File path within the repository.
            content: New file body as text.
            message: Commit message.
            branch: Target branch; the default branch when None.

        Returns:
            The created commit's sha, or None when the response carries no
            commit. None means the outcome is unknown, not that it succeeded.
        """
        lookup = await self.lookup_file(owner, repo, path, ref=branch)

        payload: dict[str, Any] = {
            "message": message,
            "content": base64.b64encode(content.encode("utf-8")).decode("ascii"),
        }
        if isinstance(lookup, FileFound):
            payload["sha"] = lookup.sha
            logger.info(f"Updating {owner}/{repo}:{path} (sha {lookup.sha})")
        else:
            logger.info(f"Creating {owner}/{repo}:{path}")
        if branch:
            payload["branch"] = branch

        data = await self._client.put(
            _contents_path(owner, repo, path), json=payload
        )
        result = FileCommitResponse.model_validate(data or {})
        if result.commit is None or not result.commit.sha:
            logger.warning(f"Push to {owner}/{repo}:{path} returned no commit")
            return None
        return result.commit.sha

    @requires_credential
    async def delete_file(
        self,
        owner: str,
        repo: str,
        path: str,
        message: str,
        branch: Optional[str] = None,
    ) -> None:
        """
        Delete a file with a commit.

        Raises:
            RepositoryFileNotFoundError: If the file does not exist; no
                DELETE is issued in that case.
        """
        lookup = await self.lookup_file(owner, repo, path, ref=branch)
        if isinstance(lookup, FileMissing):
            raise RepositoryFileNotFoundError(
                message=f"File not found: {path}", status_code=404
            )

        payload: dict[str, Any] = {"message": message, "sha": lookup.sha}
        if branch:
            payload["branch"] = branch

        await self._client.delete(
            _contents_path(owner, repo, path), json=payload
        )
        logger.info(f"Deleted {owner}/{repo}:{path}")

    # -------------------------------------------------------------------------
    # Social Methods
    # -------------------------------------------------------------------------

    async def list_forks(
        self, owner: str, repo: str, limit: Optional[int] = None
    ) -> list[Fork]:
        return await self._get_list(
            f"{_repo_path(owner, repo)}/forks",
            Fork,
            params={"per_page": clamp_limit(limit), "sort": "newest"},
        )

    @requires_credential
    async def fork_repository(self, owner: str, repo: str) -> Repository:
        data = await self._client.post(f"{_repo_path(owner, repo)}/forks")
        return Repository.model_validate(data)

    @requires_credential
    async def star_repository(self, owner: str, repo: str) -> None:
        await self._client.put(_starred_path(owner, repo))

    @requires_credential
    async def unstar_repository(self, owner: str, repo: str) -> None:
        await self._client.delete(_starred_path(owner, repo))

    async def is_repository_starred(self, owner: str, repo: str) -> bool:
        """
        Check whether the authenticated user starred a repository.

        The answer comes from the call outcome alone: any 2xx is True, any
        failure is False. Without a token the answer is False and no request
        is made.
        """
        if not self.credentials.has_credential():
            return False
        try:
            await self._client.get(_starred_path(owner, repo))
        except GitHubApiError as e:
            logger.debug(f"Star check for {owner}/{repo} failed: {e.message}")
            return False
        return True

    async def list_collaborators(self, owner: str, repo: str) -> list[Collaborator]:
        return await self._get_list(
            f"{_repo_path(owner, repo)}/collaborators", Collaborator
        )
