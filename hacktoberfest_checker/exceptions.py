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

import dataclasses
import typing


if typing.TYPE_CHECKING:
    from hacktoberfest_checker import github_types


class CheckerError(Exception):
    pass


@dataclasses.dataclass
class TransportError(CheckerError):
    """The remote lookup failed or answered with an error payload."""

    message: str
    status_code: int | None = None
    payload: github_types.ErrorPayload | None = None

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        return f"HTTPError {self.status_code}: {self.message}"

    @property
    def error_description(self) -> str | None:
        if self.payload is None:
            return None
        return self.payload.error_description

    @property
    def errors(self) -> list[github_types.SearchError]:
        if self.payload is None or self.payload.errors is None:
            return []
        return self.payload.errors


class DecodeError(CheckerError):
    pass


class DataShapeError(CheckerError):
    pass


class MissingUserError(DataShapeError):
    pass


class ParseError(CheckerError):
    pass


class RunCancelledError(CheckerError):
    pass
