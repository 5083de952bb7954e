"""Application definition: inline content or an S3 location, never both."""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from m2_lifecycle.client.errors import InvalidDefinitionError


class ContentDefinition(BaseModel):
    """Definition supplied inline as a JSON document."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["content"] = "content"
    content: str = Field(min_length=1, max_length=65000)

    def to_api(self) -> dict[str, str]:
        return {"content": self.content}


class S3LocationDefinition(BaseModel):
    """Definition stored at an external S3 location."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["s3_location"] = "s3_location"
    s3_location: str = Field(min_length=1, max_length=2000, pattern=r"^\S+$")

    def to_api(self) -> dict[str, str]:
        return {"s3Location": self.s3_location}


Definition = Annotated[
    Union[ContentDefinition, S3LocationDefinition],
    Field(discriminator="kind"),
]


def definition_from_fields(
    content: str | None = None,
    s3_location: str | None = None,
) -> ContentDefinition | S3LocationDefinition:
    """Build a definition from its two mutually exclusive source fields."""
    if content is not None and s3_location is not None:
        raise InvalidDefinitionError(
            "definition must set exactly one of 'content' or 's3_location', not both"
        )
    if content is not None:
        return ContentDefinition(content=content)
    if s3_location is not None:
        return S3LocationDefinition(s3_location=s3_location)
    raise InvalidDefinitionError(
        "definition must set exactly one of 'content' or 's3_location'"
    )


def coerce_definition(value: Any) -> Any:
    """Route untagged mappings through :func:`definition_from_fields`.

    Tagged mappings and model instances pass through to pydantic's
    discriminated-union validation.
    """
    if isinstance(value, dict) and "kind" not in value:
        unknown = set(value) - {"content", "s3_location"}
        if unknown:
            raise InvalidDefinitionError(
                f"unknown definition field(s): {', '.join(sorted(unknown))}"
            )
        return definition_from_fields(value.get("content"), value.get("s3_location"))
    return value
