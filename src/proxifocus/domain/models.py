from __future__ import annotations

import uuid
from typing import Optional

from pydantic import AnyUrl, BaseModel, ConfigDict, Field, TypeAdapter, ValidationError


def _new_id() -> str:
    return str(uuid.uuid4())


class Endpoint(BaseModel):
    """A user-entered URL with an on/off switch. Never contacted."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(default_factory=_new_id)
    url: str
    enabled: bool = True


_URL = TypeAdapter(AnyUrl)
_ENDPOINT_LIST = TypeAdapter(list[Endpoint])


def clean_url(raw: str) -> Optional[str]:
    """
    Trim `raw` and check it parses as an absolute URL with a host.
    Returns the trimmed text (not the normalized form) or None.
    """
    text = raw.strip()
    if not text:
        return None
    try:
        parsed = _URL.validate_python(text)
    except ValidationError:
        return None
    if not parsed.host:
        return None
    return text


def encode_endpoints(endpoints: list[Endpoint]) -> str:
    return _ENDPOINT_LIST.dump_json(endpoints).decode("utf-8")


def decode_endpoints(blob: str) -> list[Endpoint]:
    """Raises pydantic.ValidationError on anything that is not a list of endpoints."""
    return _ENDPOINT_LIST.validate_json(blob)
