#
#  Copyright © 2021-2024 Mergify SAS
#
# Licensed under the Apache License, Version 2.0 (the "License"); you may
# not use this file except in compliance with the License. You may obtain
# a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS, WITHOUT
# WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied. See the
# License for the specific language governing permissions and limitations
# under the License.
from collections import abc
import itertools
import typing

from hacktoberfest_checker import github_types


GITHUB_API = "https://api.github.com"

_ids = itertools.count(1)


def pull_request_payload(
    owner: str,
    repo: str = "repo",
    *,
    labels: abc.Iterable[str] = (),
    title: str | None = None,
) -> dict[str, typing.Any]:
    number = next(_ids)
    return {
        "id": 1000 + number,
        "number": number,
        "title": title or f"Pull request #{number}",
        "state": "open",
        "html_url": f"https://github.com/{owner}/{repo}/pull/{number}",
        "repository_url": f"{GITHUB_API}/repos/{owner}/{repo}",
        "labels": [{"id": 1, "name": name, "color": "ededed"} for name in labels],
        "created_at": "2019-10-12T08:00:00Z",
    }


def pull_request(
    owner: str,
    repo: str = "repo",
    *,
    labels: abc.Iterable[str] = (),
) -> github_types.PullRequestItem:
    return github_types.PullRequestItem.model_validate(
        pull_request_payload(owner, repo, labels=labels),
    )


def search_payload(items: list[dict[str, typing.Any]]) -> dict[str, typing.Any]:
    return {"total_count": len(items), "incomplete_results": False, "items": items}


def user_payload(login: str) -> dict[str, typing.Any]:
    return search_payload(
        [
            {
                "login": login,
                "id": 583231,
                "avatar_url": f"https://avatars.githubusercontent.com/{login}",
                "html_url": f"https://github.com/{login}",
                "type": "User",
            },
        ],
    )
