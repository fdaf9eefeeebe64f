from __future__ import annotations

import pydantic


class Label(pydantic.BaseModel):
    model_config = pydantic.ConfigDict(extra="ignore")

    name: str


class PullRequestItem(pydantic.BaseModel):
    model_config = pydantic.ConfigDict(extra="ignore")

    id: int
    repository_url: str
    labels: list[Label]
    number: int | None = None
    title: str | None = None
    html_url: str | None = None
    state: str | None = None
    created_at: str | None = None

    @property
    def label_names(self) -> frozenset[str]:
        return frozenset(label.name for label in self.labels)


class UserItem(pydantic.BaseModel):
    model_config = pydantic.ConfigDict(extra="ignore")

    login: str
    avatar_url: str
    html_url: str | None = None


class SearchError(pydantic.BaseModel):
    model_config = pydantic.ConfigDict(extra="ignore")

    message: str | None = None
    resource: str | None = None
    field: str | None = None
    code: str | None = None


class ErrorPayload(pydantic.BaseModel):
    """Body GitHub sends along a failed request."""

    model_config = pydantic.ConfigDict(extra="ignore")

    message: str | None = None
    errors: list[SearchError] | None = None
    error_description: str | None = None
    documentation_url: str | None = None


class PullRequestSearchResult(pydantic.BaseModel):
    model_config = pydantic.ConfigDict(extra="ignore")

    items: list[PullRequestItem]
    total_count: int
    errors: list[SearchError] | None = None


class UserSearchResult(pydantic.BaseModel):
    model_config = pydantic.ConfigDict(extra="ignore")

    items: list[UserItem]
    total_count: int
    errors: list[SearchError] | None = None
