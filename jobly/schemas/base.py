"""
Base schemas and common response models.
"""
from typing import Annotated, Any, Dict, Union
from urllib.parse import urlparse

from pydantic import AfterValidator, BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel


class BaseSchema(BaseModel):
    """
    Base schema with common configuration.

    Fields are snake_case in Python and camelCase on the wire.
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


class RequestSchema(BaseSchema):
    """
    Request body or query.

    Only the camelCase wire names are accepted; anything else, snake_case
    field names included, is an unknown key and rejected.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=False)

    def to_fields(self, *, partial: bool = False) -> Dict[str, Any]:
        """API field name -> value; ``partial`` keeps only what the client sent."""
        return self.model_dump(by_alias=True, exclude_unset=partial)


class DeletedResponse(BaseSchema):
    """Delete confirmation."""

    deleted: Union[str, int]


def check_url(value: str) -> str:
    """Accept absolute http(s) URLs unchanged."""
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError("must be an http(s) URL")
    return value


HttpUrlStr = Annotated[str, AfterValidator(check_url)]


class QuerySchema(RequestSchema):
    """Query-string filters. A blank value (``?minSalary=``) means not given."""

    @model_validator(mode="before")
    @classmethod
    def _blank_is_absent(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {
                key: None if isinstance(value, str) and not value.strip() else value
                for key, value in data.items()
            }
        return data
