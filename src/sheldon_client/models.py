"""
Data models for nodes, edges, and search options.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Sheldon is not consistent about id types: search results and most node
# lookups send strings, edge lookups and id listings send integers. The
# records keep whatever the service sent.
Identifier = Union[int, str]


class SearchIndex(str, Enum):
    """Search strategies understood by the Sheldon query engine."""

    EXACT = "exact"
    FULLTEXT = "fulltext"


class Record(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    id: Identifier
    type: str
    payload: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("payload", mode="before")
    @classmethod
    def null_payload_is_empty(cls, value: Any) -> Any:
        return {} if value is None else value

    @property
    def label(self) -> Optional[str]:
        for key in ("title", "name"):
            value = self.payload.get(key)
            if value is not None:
                return str(value)
        return None

    def to_int(self) -> int:
        return int(self.id)


class Node(Record):
    def __str__(self) -> str:
        label = self.label
        suffix = f"/{label}" if label else ""
        return f"<Node {self.id} ({self.type}{suffix})>"


class Edge(Record):
    # high score edges come without a type
    type: Optional[str] = None
    from_: Identifier = Field(alias="from")
    to: Identifier

    def __str__(self) -> str:
        kind = f"{self.type}/" if self.type else ""
        return f"<Edge {self.id} ({kind}{self.from_}->{self.to})>"


def identify(value: Any) -> Any:
    """
    Return the id of a Node or Edge, or the value itself when it already is one.
    """
    if isinstance(value, Record):
        return value.id
    return value
