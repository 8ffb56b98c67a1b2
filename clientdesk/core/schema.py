from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, constr, field_validator
from pydantic.alias_generators import to_camel

IsoDate = constr(pattern=r"^\d{4}-\d{2}-\d{2}$")


def _stringify(value: Any) -> Any:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


class Branch(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value: Any) -> Any:
        return _stringify(value)


class ClientRecord(BaseModel):
    """A client row as reported by the client store.

    Columns this service does not edit are kept as extra fields so that an
    update writes them back unchanged.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    id: str
    name: str
    date_of_birth: IsoDate | None = None
    branch_id: str | None = None

    @field_validator("id", "branch_id", mode="before")
    @classmethod
    def coerce_ids(cls, value: Any) -> Any:
        return _stringify(value)

    def apply_edit(self, edit: ClientEdit) -> ClientRecord:
        return self.model_copy(
            update={
                "name": edit.name,
                "date_of_birth": edit.date_of_birth,
                "branch_id": edit.branch_id,
            }
        )

    def to_row(self) -> dict[str, Any]:
        """Snake-case column mapping used by the persistence backends."""

        return self.model_dump(by_alias=False)


class ClientEdit(BaseModel):
    """Fields the edit form is allowed to change."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    name: str = Field(min_length=1)
    date_of_birth: IsoDate
    branch_id: str

    @field_validator("date_of_birth", mode="before")
    @classmethod
    def date_as_string(cls, value: Any) -> Any:
        # stored as an ISO string, never a date object
        if isinstance(value, date):
            return value.isoformat()
        return value

    @field_validator("branch_id", mode="before")
    @classmethod
    def coerce_branch_id(cls, value: Any) -> Any:
        return _stringify(value)
