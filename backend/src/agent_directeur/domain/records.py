"""Value objects exchanged between the schema cache, encoder and record writer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from agent_directeur.domain.enums import FieldType, WriteAction

# A producer-side field map, keyed by the target property name.
LogicalRecord = dict[str, Any]


@dataclass(frozen=True)
class TableSchema:
    """Discovered property definitions of one external table.

    Built once per table id by the schema cache. Lookups for fields that
    the table does not define return ``None`` or an empty option set.
    """

    table_id: str
    title_field: str
    fields: dict[str, FieldType] = field(default_factory=dict)
    choice_options: dict[str, frozenset[str]] = field(default_factory=dict)

    def field_type(self, name: str) -> Optional[FieldType]:
        return self.fields.get(name)

    def has_field(self, name: str, field_type: Optional[FieldType] = None) -> bool:
        declared = self.fields.get(name)
        if declared is None:
            return False
        return field_type is None or declared == field_type

    def options(self, name: str) -> frozenset[str]:
        return self.choice_options.get(name, frozenset())


@dataclass(frozen=True)
class EncodedProperty:
    """One property ready to be sent in a create/update payload."""

    name: str
    payload: dict[str, Any]


@dataclass(frozen=True)
class WriteResult:
    """Identifier of the affected record and whether it was created or updated."""

    table_id: str
    record_id: str
    action: WriteAction
    title: str = ""

    @property
    def created(self) -> bool:
        return self.action == WriteAction.CREATED

    def to_dict(self) -> dict[str, str]:
        return {
            "table_id": self.table_id,
            "record_id": self.record_id,
            "action": self.action.value,
            "title": self.title,
        }
