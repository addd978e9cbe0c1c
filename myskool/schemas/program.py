import base64
import binascii
from datetime import date
from typing import Annotated, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel


def _decode_base64(value):
    # JSON carries blobs as base64 text, ORM rows already hold bytes
    if isinstance(value, str):
        try:
            return base64.b64decode(value, validate=True)
        except binascii.Error as exc:
            raise ValueError("must be a base64 encoded string") from exc
    return value


def _encode_base64(value: bytes) -> str:
    return base64.b64encode(value).decode("ascii")


Base64Blob = Annotated[
    bytes,
    BeforeValidator(_decode_base64),
    PlainSerializer(_encode_base64, return_type=str, when_used="json"),
]


class ProgramSchema(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProgramIn(ProgramSchema):
    """Body of POST and PUT: a whole program."""

    id: Optional[int] = None
    cover: Optional[Base64Blob] = None
    cover_content_type: Optional[str] = None
    title: str = Field(min_length=5, max_length=30)
    description: str = Field(max_length=300)
    start_date: date
    end_date: date
    tags: Optional[str] = None


class ProgramPatch(ProgramSchema):
    """Body of PATCH (merge-patch): only the fields to change."""

    id: Optional[int] = None
    cover: Optional[Base64Blob] = None
    cover_content_type: Optional[str] = None
    # same limits as the columns; absent or null still means "keep"
    title: Optional[str] = Field(None, min_length=5, max_length=30)
    description: Optional[str] = Field(None, max_length=300)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    tags: Optional[str] = None


class ProgramOut(ProgramSchema):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: int
    cover: Optional[Base64Blob] = None
    cover_content_type: Optional[str] = None
    title: str
    description: str
    start_date: date
    end_date: date
    tags: Optional[str] = None
