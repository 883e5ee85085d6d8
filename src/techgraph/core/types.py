"""
Core type definitions for techgraph.

Nodes and edges are pydantic models so the renderer, the CLI and the
JSON export all share one validated shape.
"""

from enum import StrEnum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

COMPANY_KIND = "company"


class EdgeKind(StrEnum):
    """Edge semantics. Only one kind is active in a session at a time."""
    USAGE = "usage"
    INTEROPERABILITY = "interoperability"


class Side(StrEnum):
    """Side of a rectangular node a connector attaches to."""
    LEFT = "left"
    RIGHT = "right"
    TOP = "top"
    BOTTOM = "bottom"


class Position(BaseModel):
    x: float = 0.0
    y: float = 0.0


class Size(BaseModel):
    """Rendered size of a node, reported by the renderer once laid out."""
    width: float
    height: float


class Node(BaseModel):
    """
    A company, tool or user-defined entity in the graph.

    `id` and `kind` are fixed at creation; everything else is mutable
    session state.
    """
    id: str = Field(frozen=True)
    kind: str = Field(frozen=True)
    label: str = ""
    position: Position = Field(default_factory=Position)
    size: int = Field(default=1, ge=1)
    color: str = "#ccc"
    editable: bool = False
    description: Optional[str] = None
    website: Optional[str] = None
    designtechs: List[str] = Field(default_factory=list)
    measured: Optional[Size] = None

    model_config = ConfigDict(extra="ignore", validate_assignment=True)

    def model_post_init(self, __context) -> None:
        if not self.label:
            object.__setattr__(self, "label", self.id)

    @property
    def is_company(self) -> bool:
        return self.kind.lower() == COMPANY_KIND

    def __hash__(self):
        return hash(self.id)

    def __eq__(self, other):
        if isinstance(other, Node):
            return self.id == other.id
        return False


class Edge(BaseModel):
    """
    Undirected relationship between two nodes.

    `source`/`target` only matter for rendering; `id` is the canonical
    sorted-pair key and the sole identity.
    """
    id: str
    source: str
    target: str
    kind: EdgeKind

    model_config = ConfigDict(frozen=True)

    def touches(self, node_id: str) -> bool:
        return self.source == node_id or self.target == node_id


class DatasetRecord(BaseModel):
    """One row of the external dataset. Field names follow the data file."""
    name: str = Field(alias="Name")
    type: str = Field(default="", alias="Type")
    designtechs: Optional[List[str]] = Field(default=None, alias="Designtechs")
    interoperability: Optional[str] = Field(default=None, alias="Interoperability")
    description: Optional[str] = Field(default=None, alias="Description")
    website: Optional[str] = Field(default=None, alias="Website")

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class EdgeBuildResult(BaseModel):
    """Edges derived for one mode plus their per-node connection counts."""
    edges: List[Edge] = Field(default_factory=list)
    degree: Dict[str, int] = Field(default_factory=dict)

    @property
    def edge_ids(self) -> List[str]:
        return [edge.id for edge in self.edges]
