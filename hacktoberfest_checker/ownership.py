from __future__ import annotations

import typing

from hacktoberfest_checker import exceptions


if typing.TYPE_CHECKING:
    from collections import abc

    from hacktoberfest_checker import github_types


REPOS_SEGMENT = "/repos/"


def parse_repository_owner(repository_url: str) -> str:
    """Return the owner of a `.../repos/{owner}/{repo}` API URL."""
    # The API root may itself sit under a `/repos/` path, the last one wins
    _, found, path = repository_url.rpartition(REPOS_SEGMENT)
    if not found:
        msg = f"no `{REPOS_SEGMENT}` segment in repository URL: {repository_url!r}"
        raise exceptions.ParseError(msg)

    owner, _, rest = path.partition("/")
    repo = rest.split("/", 1)[0]
    if not owner or not repo:
        msg = f"repository URL is not `{REPOS_SEGMENT}{{owner}}/{{repo}}`: {repository_url!r}"
        raise exceptions.ParseError(msg)
    return owner


def get_user_login(user_detail: github_types.UserSearchResult) -> str:
    if not user_detail.items:
        msg = "user search returned no user"
        raise exceptions.MissingUserError(msg)
    return user_detail.items[0].login


def count_other_repos(
    items: abc.Iterable[github_types.PullRequestItem],
    user_login: str,
) -> int:
    # Every pull request counts, even several ones on the same repository
    return sum(
        1
        for item in items
        if parse_repository_owner(item.repository_url) != user_login
    )
