"""Base classes for wire beans."""

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class Bean(BaseModel):
    """Decoded JSON object; unknown server fields are ignored."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class IdBean(Bean):
    """Bean carrying the entity id. Numeric ids are normalized to strings."""

    id: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


class PropertyBean(Bean):
    name: str
    value: str | None = None
    own: bool | None = None


class PropertiesBean(Bean):
    property: list[PropertyBean] = []

    def as_dict(self) -> dict[str, str | None]:
        return {p.name: p.value for p in self.property}
