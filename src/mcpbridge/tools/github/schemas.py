"""
Pydantic argument models for the GitHub tools.
"""
from typing import Literal, Optional

from pydantic import Field

from ..schemas import ToolArguments

State = Literal["open", "closed", "all"]
Direction = Literal["asc", "desc"]


class RepoRef(ToolArguments):
    """Identifies one repository."""

    owner: str = Field(description="Repository owner")
    repo: str = Field(description="Repository name")


class ListRepositoriesArgs(ToolArguments):
    owner: Optional[str] = Field(default=None, description="Repository owner (username or organization)")
    type: Optional[Literal["public", "private", "all"]] = None
    sort: Optional[Literal["created", "updated", "pushed", "full_name"]] = None
    direction: Optional[Direction] = None
    per_page: Optional[int] = Field(default=None, ge=1, le=100)
    page: Optional[int] = Field(default=None, ge=1)


class GetRepositoryArgs(RepoRef):
    pass


class CreateRepositoryArgs(ToolArguments):
    name: str
    description: Optional[str] = None
    private: Optional[bool] = None
    has_issues: Optional[bool] = None
    has_projects: Optional[bool] = None
    has_wiki: Optional[bool] = None
    auto_init: Optional[bool] = None
    gitignore_template: Optional[str] = None
    license_template: Optional[str] = None


class ListIssuesArgs(RepoRef):
    state: Optional[State] = None
    labels: Optional[str] = Field(default=None, description="Comma-separated list of labels")
    sort: Optional[Literal["created", "updated", "comments"]] = None
    direction: Optional[Direction] = None
    per_page: Optional[int] = Field(default=None, ge=1, le=100)
    page: Optional[int] = Field(default=None, ge=1)


class IssueRef(RepoRef):
    issue_number: int = Field(ge=1)


class CreateIssueArgs(RepoRef):
    title: str
    body: Optional[str] = None
    assignees: Optional[list[str]] = None
    milestone: Optional[int] = None
    labels: Optional[list[str]] = None


class UpdateIssueArgs(IssueRef):
    title: Optional[str] = None
    body: Optional[str] = None
    state: Optional[Literal["open", "closed"]] = None
    assignees: Optional[list[str]] = None
    milestone: Optional[int] = None
    labels: Optional[list[str]] = None


class ListPullRequestsArgs(RepoRef):
    state: State = "open"


class PullRequestRef(RepoRef):
    pull_number: int = Field(ge=1)


class CreatePullRequestArgs(RepoRef):
    title: str
    head: str = Field(description="Branch to merge from")
    base: str = Field(description="Branch to merge into")
    body: Optional[str] = None
    maintainer_can_modify: Optional[bool] = None
    draft: Optional[bool] = None


class MergePullRequestArgs(PullRequestRef):
    commit_title: Optional[str] = None
    commit_message: Optional[str] = None
    merge_method: Literal["merge", "squash", "rebase"] = "merge"


class SearchRepositoriesArgs(ToolArguments):
    query: str
    sort: Optional[Literal["stars", "forks", "help-wanted-issues", "updated"]] = None
    order: Optional[Direction] = None


class SearchIssuesArgs(ToolArguments):
    query: str
    sort: Optional[Literal["comments", "reactions", "author-date", "committer-date", "updated"]] = None
    order: Optional[Direction] = None


class GetUserArgs(ToolArguments):
    username: Optional[str] = Field(default=None, description="Login; omit for the authenticated user")
