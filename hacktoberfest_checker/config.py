from __future__ import annotations

import datetime
import pathlib
import typing

import pydantic
import yaml

from hacktoberfest_checker import exceptions


DEFAULT_GITHUB_SERVER = "https://api.github.com"


class ConfigInvalidError(exceptions.CheckerError):
    pass


class ContestWindow(pydantic.BaseModel):
    model_config = pydantic.ConfigDict(extra="forbid", frozen=True)

    start: datetime.date = pydantic.Field(
        default=datetime.date(2019, 10, 1),
        description="First day (inclusive) a pull request may be created on",
    )
    end: datetime.date = pydantic.Field(
        default=datetime.date(2019, 10, 31),
        description="Last day (inclusive) a pull request may be created on",
    )

    @pydantic.model_validator(mode="after")
    def _check_order(self) -> typing.Self:
        if self.start > self.end:
            msg = f"contest window starts after it ends: {self.start} > {self.end}"
            raise ValueError(msg)
        return self

    @property
    def created_range(self) -> str:
        return f"{self.start.isoformat()}..{self.end.isoformat()}"


class Thresholds(pydantic.BaseModel):
    model_config = pydantic.ConfigDict(extra="forbid", frozen=True)

    min_pr_count: int = pydantic.Field(
        default=10,
        ge=0,
        description="Number of valid pull requests needed to complete the contest",
    )
    min_other_repos_count: int = pydantic.Field(
        default=4,
        ge=0,
        description=(
            "Number of valid pull requests that must target repositories "
            "not owned by the user"
        ),
    )


class Config(pydantic.BaseModel):
    model_config = pydantic.ConfigDict(extra="forbid")

    github_server: str = DEFAULT_GITHUB_SERVER
    contest_window: ContestWindow = pydantic.Field(default_factory=ContestWindow)
    thresholds: Thresholds = pydantic.Field(default_factory=Thresholds)
    ineligible_labels: tuple[str, ...] = pydantic.Field(
        default=("spam",),
        description=(
            "Labels that make a pull request not count toward the contest. "
            "Matching is case-insensitive."
        ),
    )

    @classmethod
    def from_dict(
        cls,
        data: dict[str, typing.Any] | typing.Any,  # noqa: ANN401
    ) -> typing.Self:
        try:
            return cls.model_validate(data)
        except pydantic.ValidationError as e:
            raise ConfigInvalidError(e)

    @classmethod
    def from_yaml(cls, path: str) -> typing.Self:
        with pathlib.Path(path).open(encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigInvalidError(e)

            return cls.from_dict(data)
