from __future__ import annotations

import pytest

from hacktoberfest_checker import exceptions
from hacktoberfest_checker import github_types
from hacktoberfest_checker import ownership
from hacktoberfest_checker.tests import utils as test_utils


@pytest.mark.parametrize(
    ("url", "owner"),
    [
        ("https://api.example.com/repos/acme/widget", "acme"),
        ("https://api.github.com/repos/octocat/Hello-World", "octocat"),
        ("https://ghe.example.com/api/v3/repos/Acme/widget/", "Acme"),
        ("https://api.github.com/repos/acme/widget/pulls/1", "acme"),
        ("https://ghe.example.com/repos/api/v3/repos/acme/widget", "acme"),
    ],
)
def test_parse_repository_owner(url: str, owner: str) -> None:
    assert ownership.parse_repository_owner(url) == owner


@pytest.mark.parametrize(
    "url",
    [
        "",
        "https://api.github.com/acme/widget",
        "https://api.github.com/repos/",
        "https://api.github.com/repos//widget",
        "https://api.github.com/repos/acme",
        "https://api.github.com/repos/acme/",
    ],
)
def test_parse_repository_owner_malformed(url: str) -> None:
    with pytest.raises(exceptions.ParseError):
        ownership.parse_repository_owner(url)


def test_get_user_login() -> None:
    user_detail = github_types.UserSearchResult.model_validate(
        test_utils.user_payload("octocat"),
    )
    assert ownership.get_user_login(user_detail) == "octocat"


def test_get_user_login_no_user() -> None:
    user_detail = github_types.UserSearchResult(items=[], total_count=0)
    with pytest.raises(exceptions.MissingUserError):
        ownership.get_user_login(user_detail)


def test_count_other_repos_counts_each_pull_request() -> None:
    items = [
        test_utils.pull_request("octocat"),
        test_utils.pull_request("acme", "widget"),
        test_utils.pull_request("acme", "widget"),
        test_utils.pull_request("acme", "gadget"),
        test_utils.pull_request("octocat", "other"),
    ]
    assert ownership.count_other_repos(items, "octocat") == 3


def test_count_other_repos_is_case_sensitive() -> None:
    items = [
        test_utils.pull_request("OctoCat"),
        test_utils.pull_request("octocat"),
    ]
    assert ownership.count_other_repos(items, "octocat") == 1


def test_count_other_repos_empty() -> None:
    assert ownership.count_other_repos([], "octocat") == 0


def test_count_other_repos_malformed_url() -> None:
    item = test_utils.pull_request("acme").model_copy(
        update={"repository_url": "https://api.github.com/users/acme"},
    )
    with pytest.raises(exceptions.ParseError):
        ownership.count_other_repos([item], "octocat")
