"""Base model shared by the Jira and GitHub records."""

from typing import Any

from pydantic import BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel


class ActivityModel(BaseModel):
    """Immutable record projected from provider JSON.

    Unknown fields are ignored. Attributes are snake_case in Python and
    serialize as camelCase with `model_dump(by_alias=True)`.
    """

    model_config = ConfigDict(
        extra="ignore",
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


def _none_as_empty_list(value: Any) -> Any:
    return [] if value is None else value


def _none_as_zero(value: Any) -> Any:
    return 0 if value is None else value


# Providers send explicit nulls for absent lists and counters
EmptyIfNone = BeforeValidator(_none_as_empty_list)
ZeroIfNone = BeforeValidator(_none_as_zero)
