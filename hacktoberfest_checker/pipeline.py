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

from __future__ import annotations

import asyncio
import dataclasses
import enum
import typing

from hacktoberfest_checker import exceptions
from hacktoberfest_checker import fetcher
from hacktoberfest_checker import labels
from hacktoberfest_checker import ownership
from hacktoberfest_checker import utils


if typing.TYPE_CHECKING:
    import httpx

    from hacktoberfest_checker import config
    from hacktoberfest_checker import github_types


GENERIC_ERROR_MESSAGE = "Couldn't find any data or we hit an error, try again?"


class Status(enum.Enum):
    LOADING = "loading"
    READY = "ready"
    ERRORED = "errored"


def is_completed(
    total_count: int,
    other_repos_count: int,
    thresholds: config.Thresholds,
) -> bool:
    if total_count < thresholds.min_pr_count:
        return False
    return other_repos_count >= thresholds.min_other_repos_count


def get_error_message(error: BaseException | None) -> str:
    description = getattr(error, "error_description", None)
    if description:
        return str(description)

    for search_error in getattr(error, "errors", None) or []:
        if search_error.message:
            return str(search_error.message)

    return GENERIC_ERROR_MESSAGE


@dataclasses.dataclass(frozen=True)
class PipelineResult:
    data: github_types.PullRequestSearchResult
    user_detail: github_types.UserSearchResult
    other_repos_count: int
    completed: bool

    @property
    def items(self) -> list[github_types.PullRequestItem]:
        return self.data.items

    @property
    def total_count(self) -> int:
        return self.data.total_count

    @property
    def user_login(self) -> str:
        return ownership.get_user_login(self.user_detail)

    @property
    def user_avatar(self) -> str:
        return self.user_detail.items[0].avatar_url


@dataclasses.dataclass(frozen=True)
class PipelineState:
    """Snapshot of the last pipeline run, as exposed to consumers."""

    username: str | None
    status: Status
    result: PipelineResult | None = None
    error: exceptions.CheckerError | None = None

    @classmethod
    def loading(cls, username: str | None = None) -> PipelineState:
        return cls(username, Status.LOADING)

    @classmethod
    def ready(cls, username: str, result: PipelineResult) -> PipelineState:
        return cls(username, Status.READY, result=result)

    @classmethod
    def errored(
        cls,
        username: str,
        error: exceptions.CheckerError,
    ) -> PipelineState:
        return cls(username, Status.ERRORED, error=error)

    @property
    def is_loading(self) -> bool:
        return self.status is Status.LOADING

    @property
    def data(self) -> github_types.PullRequestSearchResult | None:
        return None if self.result is None else self.result.data

    @property
    def user_detail(self) -> github_types.UserSearchResult | None:
        return None if self.result is None else self.result.user_detail

    @property
    def other_repos_count(self) -> int | None:
        return None if self.result is None else self.result.other_repos_count

    @property
    def completed(self) -> bool | None:
        return None if self.result is None else self.result.completed

    @property
    def error_message(self) -> str | None:
        if self.status is not Status.ERRORED:
            return None
        return get_error_message(self.error)

    def to_dict(self) -> dict[str, typing.Any]:
        data = self.data
        user_detail = self.user_detail
        return {
            "loading": self.is_loading,
            "data": None
            if data is None
            else {
                "items": [item.model_dump(mode="json") for item in data.items],
                "total_count": data.total_count,
            },
            "error": None
            if self.status is not Status.ERRORED
            else {
                "type": type(self.error).__name__,
                "message": self.error_message,
            },
            "userDetail": None
            if user_detail is None
            else {
                "items": [
                    item.model_dump(mode="json") for item in user_detail.items
                ],
            },
            "otherReposCount": self.other_repos_count,
        }


async def run_pipeline(
    client: httpx.AsyncClient,
    username: str,
    configuration: config.Config,
    predicate: labels.EligibilityPredicate | None = None,
) -> PipelineResult:
    if predicate is None:
        predicate = labels.make_eligibility_predicate(
            configuration.ineligible_labels,
        )

    data, user_detail = await fetcher.fetch_all(
        client,
        username,
        configuration.contest_window,
    )

    eligible = data.model_copy(
        update={"items": labels.filter_eligible(data.items, predicate)},
    )
    other_repos_count = ownership.count_other_repos(
        eligible.items,
        ownership.get_user_login(user_detail),
    )
    valid = labels.filter_valid(eligible)

    return PipelineResult(
        data=valid,
        user_detail=user_detail,
        other_repos_count=other_repos_count,
        completed=is_completed(
            valid.total_count,
            other_repos_count,
            configuration.thresholds,
        ),
    )


class Pipeline:
    """Keep the state of the current run for a single consumer.

    Each call to `fetch` supersedes the previous one: the in-flight run is
    cancelled and whatever it would have produced is thrown away.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        configuration: config.Config,
        predicate: labels.EligibilityPredicate | None = None,
    ) -> None:
        self.client = client
        self.configuration = configuration
        self.predicate = predicate
        self._state = PipelineState.loading()
        self._run_id = 0
        self._task: asyncio.Task[PipelineResult] | None = None

    @property
    def state(self) -> PipelineState:
        return self._state

    def _is_current(self, run_id: int, username: str) -> bool:
        return run_id == self._run_id and self._state.username == username

    async def fetch(self, username: str) -> PipelineState:
        if not username.strip():
            msg = "username must not be empty"
            raise ValueError(msg)

        self._run_id += 1
        run_id = self._run_id

        if self._task is not None and not self._task.done():
            utils.debug(f"cancelling stale run for {self._state.username}")
            self._task.cancel()

        self._state = PipelineState.loading(username)
        utils.debug(f"pipeline for {username}: {Status.LOADING.value}")

        task = asyncio.create_task(
            run_pipeline(self.client, username, self.configuration, self.predicate),
        )
        self._task = task

        try:
            result = await task
        except asyncio.CancelledError:
            if self._is_current(run_id, username):
                self._state = PipelineState.errored(
                    username,
                    exceptions.RunCancelledError(f"run for {username} was cancelled"),
                )
                raise
            current = asyncio.current_task()
            if current is not None and current.cancelling():
                raise
            utils.debug(f"run for {username} was superseded")
            return self._state
        except exceptions.CheckerError as e:
            outcome = PipelineState.errored(username, e)
        else:
            outcome = PipelineState.ready(username, result)

        if not self._is_current(run_id, username):
            utils.debug(f"discarding stale result for {username}")
            return self._state

        self._state = outcome
        utils.debug(f"pipeline for {username}: {outcome.status.value}")
        return outcome
