"""Base model for JSON documents exchanged with manifests and the backend."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Lenient camelCase document model with case-insensitive field binding."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

    @model_validator(mode="before")
    @classmethod
    def bind_case_insensitive(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        known: dict[str, str] = {}
        for name, field in cls.model_fields.items():
            alias = field.alias or name
            known[alias.lower()] = alias
            known[name.lower()] = alias
        bound: dict[str, Any] = {}
        for key, value in data.items():
            # null on the wire means "use the default"
            if value is None or not isinstance(key, str):
                continue
            bound[known.get(key.lower(), key)] = value
        return bound


def drop_null_items(value: Any) -> Any:
    """Remove ``null`` members from a JSON array before item validation."""
    if isinstance(value, list):
        return [item for item in value if item is not None]
    return value


__all__ = ["WireModel", "drop_null_items"]
