"""
GitHub tools for the mcpbridge GitHub server.
"""
from ...mcp.models import ServerInfo
from ..base import ToolRegistry, object_schema
from .client import GitHubClient
from .schemas import (
    CreateIssueArgs,
    CreatePullRequestArgs,
    CreateRepositoryArgs,
    GetRepositoryArgs,
    GetUserArgs,
    IssueRef,
    ListIssuesArgs,
    ListPullRequestsArgs,
    ListRepositoriesArgs,
    MergePullRequestArgs,
    PullRequestRef,
    SearchIssuesArgs,
    SearchRepositoriesArgs,
    UpdateIssueArgs,
)

SERVER_INFO = ServerInfo(
    name="GitHub MCP Server",
    description="GitHub integration for Warp AI Terminal via MCP",
)

_OWNER = {"type": "string", "description": "Repository owner"}
_REPO = {"type": "string", "description": "Repository name"}
_DIRECTION = {"type": "string", "enum": ["asc", "desc"], "description": "Sort direction"}
_ORDER = {"type": "string", "enum": ["asc", "desc"], "description": "Sort order"}
_PER_PAGE = {"type": "number", "minimum": 1, "maximum": 100, "description": "Number of results per page"}
_PAGE = {"type": "number", "minimum": 1, "description": "Page number"}
_ISSUE_NUMBER = {"type": "number", "minimum": 1, "description": "Issue number"}
_PULL_NUMBER = {"type": "number", "minimum": 1, "description": "Pull request number"}
_MILESTONE = {"type": "number", "description": "Milestone number to associate"}


def register(registry: ToolRegistry) -> None:
    """Register GitHub tools with the registry."""

    @registry.tool(
        name="list_repositories",
        description="List GitHub repositories for the authenticated user or a specific owner",
        input_schema=object_schema({
            "owner": {"type": "string", "description": "Repository owner (username or organization)"},
            "type": {"type": "string", "enum": ["public", "private", "all"], "description": "Repository visibility"},
            "sort": {
                "type": "string",
                "enum": ["created", "updated", "pushed", "full_name"],
                "description": "Sort repositories by",
            },
            "direction": _DIRECTION,
            "per_page": _PER_PAGE,
            "page": _PAGE,
        }),
        arguments=ListRepositoriesArgs,
    )
    async def list_repositories(client: GitHubClient, args: ListRepositoriesArgs):
        return await client.list_repositories(**args.model_dump())

    @registry.tool(
        name="get_repository",
        description="Get details of a specific repository",
        input_schema=object_schema({"owner": _OWNER, "repo": _REPO}, ["owner", "repo"]),
        arguments=GetRepositoryArgs,
    )
    async def get_repository(client: GitHubClient, args: GetRepositoryArgs):
        return await client.get_repository(args.owner, args.repo)

    @registry.tool(
        name="create_repository",
        description="Create a new repository",
        input_schema=object_schema({
            "name": {"type": "string", "description": "Repository name"},
            "description": {"type": "string", "description": "Repository description"},
            "private": {"type": "boolean", "description": "Whether the repository is private"},
            "has_issues": {"type": "boolean", "description": "Enable issues"},
            "has_projects": {"type": "boolean", "description": "Enable projects"},
            "has_wiki": {"type": "boolean", "description": "Enable wiki"},
            "auto_init": {"type": "boolean", "description": "Initialize with README"},
            "gitignore_template": {"type": "string", "description": "Gitignore template"},
            "license_template": {"type": "string", "description": "License template"},
        }, ["name"]),
        arguments=CreateRepositoryArgs,
    )
    async def create_repository(client: GitHubClient, args: CreateRepositoryArgs):
        return await client.create_repository(**args.model_dump(exclude_none=True))

    @registry.tool(
        name="list_issues",
        description="List issues in a repository",
        input_schema=object_schema({
            "owner": _OWNER,
            "repo": _REPO,
            "state": {"type": "string", "enum": ["open", "closed", "all"], "description": "Issue state"},
            "labels": {"type": "string", "description": "Comma-separated list of labels"},
            "sort": {"type": "string", "enum": ["created", "updated", "comments"], "description": "Sort issues by"},
            "direction": _DIRECTION,
            "per_page": _PER_PAGE,
            "page": _PAGE,
        }, ["owner", "repo"]),
        arguments=ListIssuesArgs,
    )
    async def list_issues(client: GitHubClient, args: ListIssuesArgs):
        return await client.list_issues(**args.model_dump())

    @registry.tool(
        name="get_issue",
        description="Get a single issue",
        input_schema=object_schema(
            {"owner": _OWNER, "repo": _REPO, "issue_number": _ISSUE_NUMBER},
            ["owner", "repo", "issue_number"],
        ),
        arguments=IssueRef,
    )
    async def get_issue(client: GitHubClient, args: IssueRef):
        return await client.get_issue(args.owner, args.repo, args.issue_number)

    @registry.tool(
        name="create_issue",
        description="Create a new issue in a repository",
        input_schema=object_schema({
            "owner": _OWNER,
            "repo": _REPO,
            "title": {"type": "string", "description": "Issue title"},
            "body": {"type": "string", "description": "Issue description"},
            "assignees": {"type": "array", "items": {"type": "string"}, "description": "Usernames to assign"},
            "milestone": _MILESTONE,
            "labels": {"type": "array", "items": {"type": "string"}, "description": "Labels to add"},
        }, ["owner", "repo", "title"]),
        arguments=CreateIssueArgs,
    )
    async def create_issue(client: GitHubClient, args: CreateIssueArgs):
        return await client.create_issue(**args.model_dump(exclude_none=True))

    @registry.tool(
        name="update_issue",
        description="Update the title, body, state, assignees or labels of an issue",
        input_schema=object_schema({
            "owner": _OWNER,
            "repo": _REPO,
            "issue_number": _ISSUE_NUMBER,
            "title": {"type": "string", "description": "New title"},
            "body": {"type": "string", "description": "New description"},
            "state": {"type": "string", "enum": ["open", "closed"], "description": "New state"},
            "assignees": {"type": "array", "items": {"type": "string"}, "description": "Usernames to assign"},
            "milestone": _MILESTONE,
            "labels": {"type": "array", "items": {"type": "string"}, "description": "Labels to set"},
        }, ["owner", "repo", "issue_number"]),
        arguments=UpdateIssueArgs,
    )
    async def update_issue(client: GitHubClient, args: UpdateIssueArgs):
        updates = args.model_dump(exclude_none=True, exclude={"owner", "repo", "issue_number"})
        return await client.update_issue(args.owner, args.repo, args.issue_number, **updates)

    @registry.tool(
        name="close_issue",
        description="Close an issue",
        input_schema=object_schema(
            {"owner": _OWNER, "repo": _REPO, "issue_number": _ISSUE_NUMBER},
            ["owner", "repo", "issue_number"],
        ),
        arguments=IssueRef,
    )
    async def close_issue(client: GitHubClient, args: IssueRef):
        return await client.close_issue(args.owner, args.repo, args.issue_number)

    @registry.tool(
        name="list_pull_requests",
        description="List pull requests in a repository",
        input_schema=object_schema({
            "owner": _OWNER,
            "repo": _REPO,
            "state": {"type": "string", "enum": ["open", "closed", "all"], "description": "Pull request state"},
        }, ["owner", "repo"]),
        arguments=ListPullRequestsArgs,
    )
    async def list_pull_requests(client: GitHubClient, args: ListPullRequestsArgs):
        return await client.list_pull_requests(args.owner, args.repo, args.state)

    @registry.tool(
        name="get_pull_request",
        description="Get a single pull request",
        input_schema=object_schema(
            {"owner": _OWNER, "repo": _REPO, "pull_number": _PULL_NUMBER},
            ["owner", "repo", "pull_number"],
        ),
        arguments=PullRequestRef,
    )
    async def get_pull_request(client: GitHubClient, args: PullRequestRef):
        return await client.get_pull_request(args.owner, args.repo, args.pull_number)

    @registry.tool(
        name="create_pull_request",
        description="Create a new pull request",
        input_schema=object_schema({
            "owner": _OWNER,
            "repo": _REPO,
            "title": {"type": "string", "description": "Pull request title"},
            "body": {"type": "string", "description": "Pull request description"},
            "head": {"type": "string", "description": "Branch to merge from"},
            "base": {"type": "string", "description": "Branch to merge into"},
            "maintainer_can_modify": {"type": "boolean", "description": "Allow maintainers to edit the head branch"},
            "draft": {"type": "boolean", "description": "Create as draft"},
        }, ["owner", "repo", "title", "head", "base"]),
        arguments=CreatePullRequestArgs,
    )
    async def create_pull_request(client: GitHubClient, args: CreatePullRequestArgs):
        return await client.create_pull_request(**args.model_dump(exclude_none=True))

    @registry.tool(
        name="merge_pull_request",
        description="Merge a pull request",
        input_schema=object_schema({
            "owner": _OWNER,
            "repo": _REPO,
            "pull_number": _PULL_NUMBER,
            "commit_title": {"type": "string", "description": "Title for the merge commit"},
            "commit_message": {"type": "string", "description": "Extra detail for the merge commit"},
            "merge_method": {"type": "string", "enum": ["merge", "squash", "rebase"], "description": "Merge method"},
        }, ["owner", "repo", "pull_number"]),
        arguments=MergePullRequestArgs,
    )
    async def merge_pull_request(client: GitHubClient, args: MergePullRequestArgs):
        return await client.merge_pull_request(**args.model_dump())

    @registry.tool(
        name="search_repositories",
        description="Search for repositories",
        input_schema=object_schema({
            "query": {"type": "string", "description": "Search query"},
            "sort": {
                "type": "string",
                "enum": ["stars", "forks", "help-wanted-issues", "updated"],
                "description": "Sort by",
            },
            "order": _ORDER,
        }, ["query"]),
        arguments=SearchRepositoriesArgs,
    )
    async def search_repositories(client: GitHubClient, args: SearchRepositoriesArgs):
        return await client.search_repositories(args.query, args.sort, args.order)

    @registry.tool(
        name="search_issues",
        description="Search for issues and pull requests",
        input_schema=object_schema({
            "query": {"type": "string", "description": "Search query"},
            "sort": {
                "type": "string",
                "enum": ["comments", "reactions", "author-date", "committer-date", "updated"],
                "description": "Sort by",
            },
            "order": _ORDER,
        }, ["query"]),
        arguments=SearchIssuesArgs,
    )
    async def search_issues(client: GitHubClient, args: SearchIssuesArgs):
        return await client.search_issues(args.query, args.sort, args.order)

    @registry.tool(
        name="get_user",
        description="Get a GitHub user profile, or the authenticated user when no username is given",
        input_schema=object_schema({
            "username": {"type": "string", "description": "User login"},
        }),
        arguments=GetUserArgs,
    )
    async def get_user(client: GitHubClient, args: GetUserArgs):
        if args.username:
            return await client.get_user(args.username)
        return await client.get_authenticated_user()
