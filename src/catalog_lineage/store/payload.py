"""Parsing of lineage snapshot payloads returned by the metadata store."""

from datetime import datetime
from typing import Annotated, Any, Dict, List, Optional
from pydantic import BaseModel, AliasChoices, BeforeValidator, Field, ValidationError

from catalog_lineage.errors import SnapshotFormatError
from catalog_lineage.graph import (
    LineageNode, LineageEdge, LineageVersion, LineageSnapshot, NodeRole
)


def _stringify_id(value: Any) -> Any:
    # Store-generated ids arrive as integers
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


WireId = Annotated[str, BeforeValidator(_stringify_id)]


class NodePayload(BaseModel):
    """Wire shape of a lineage node."""

    id: WireId
    type: Optional[str] = None
    label: Optional[str] = Field(default=None, validation_alias=AliasChoices("label", "name"))
    metadata: Optional[Dict[str, Any]] = None

    def to_node(self) -> LineageNode:
        return LineageNode(
            node_id=self.id,
            role=NodeRole.parse(self.type),
            label=self.label if self.label is not None else f"Node {self.id}",
            metadata=self.metadata or {}
        )


class LinkPayload(BaseModel):
    """Wire shape of a lineage edge."""

    source: WireId = Field(validation_alias=AliasChoices("source", "sourceId", "source_id"))
    target: WireId = Field(validation_alias=AliasChoices("target", "targetId", "target_id"))
    transformation_logic: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("transformationLogic", "transformation_logic")
    )
    metadata: Optional[Dict[str, Any]] = None

    def to_edge(self) -> LineageEdge:
        return LineageEdge(
            source_id=self.source,
            target_id=self.target,
            transformation_logic=self.transformation_logic,
            metadata=self.metadata or {}
        )


class VersionPayload(BaseModel):
    """Wire shape of a version-history entry."""

    version: int
    timestamp: datetime
    change_message: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("changeMessage", "change_message")
    )
    created_by: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("createdBy", "created_by")
    )

    def to_version(self) -> LineageVersion:
        return LineageVersion(
            version=self.version,
            timestamp=self.timestamp,
            change_message=self.change_message,
            created_by=self.created_by
        )


class SnapshotPayload(BaseModel):
    """Wire shape of a full lineage response."""

    nodes: List[NodePayload] = Field(default_factory=list)
    links: List[LinkPayload] = Field(
        default_factory=list, validation_alias=AliasChoices("links", "edges")
    )
    version: Optional[int] = None
    versions: List[VersionPayload] = Field(default_factory=list)

    def to_snapshot(self, data_product_id: Optional[int] = None) -> LineageSnapshot:
        versions = sorted((v.to_version() for v in self.versions), key=lambda v: v.version)
        version = self.version
        if version is None:
            version = versions[-1].version if versions else 1

        return LineageSnapshot(
            nodes=[node.to_node() for node in self.nodes],
            edges=[link.to_edge() for link in self.links],
            version=version,
            versions=versions,
            data_product_id=data_product_id
        )


def parse_snapshot(data: Any, data_product_id: Optional[int] = None) -> LineageSnapshot:
    """Validate a decoded JSON payload and build a snapshot from it."""
    if not isinstance(data, dict):
        raise SnapshotFormatError(
            f"Lineage payload must be a JSON object, got {type(data).__name__}"
        )

    try:
        payload = SnapshotPayload.model_validate(data)
    except ValidationError as e:
        raise SnapshotFormatError(f"Invalid lineage payload: {e}") from e

    return payload.to_snapshot(data_product_id)
