# src/nodeimport/database/models.py

import os

from sqlalchemy import (
    Boolean, Column, ForeignKey, Integer, String, Text, UniqueConstraint
)
from sqlalchemy.orm import declarative_base, relationship

from nodeimport.core.settings import FILE_STATUS_TEMPORARY

# Create the base class for SQLAlchemy models
Base = declarative_base()


class NodeType(Base):
    """Represents a content bundle (e.g., 'page', 'article')."""
    __tablename__ = "node_types"

    type = Column(String, primary_key=True)  # machine name
    name = Column(String, nullable=False)
    description = Column(String, nullable=True)

    # Relationships
    fields = relationship(
        "FieldDefinition",
        back_populates="node_type",
        order_by="FieldDefinition.id",
    )


class FieldDefinition(Base):
    """A field attached to a bundle, with its type and cardinality."""
    __tablename__ = "field_definitions"
    __table_args__ = (UniqueConstraint("bundle", "field_name", name="uq_field_definitions_bundle_field"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    bundle = Column(String, ForeignKey("node_types.type"), nullable=False)
    field_name = Column(String, nullable=False)
    field_type = Column(String, nullable=False)  # text_long, text_with_summary, image, ...
    cardinality = Column(Integer, nullable=False, default=1)  # -1 = unlimited
    label = Column(String, nullable=True)

    node_type = relationship("NodeType", back_populates="fields")


class Node(Base):
    """A content record in the destination store."""
    __tablename__ = "nodes"

    nid = Column(Integer, primary_key=True, autoincrement=True)
    type = Column(String, ForeignKey("node_types.type"), nullable=False)
    title = Column(String, nullable=False)
    langcode = Column(String, nullable=False, default="en")
    status = Column(Boolean, nullable=False, default=True)
    uid = Column(Integer, nullable=False)
    created = Column(Integer, nullable=False)  # Unix timestamps, copied from the source
    changed = Column(Integer, nullable=False)
    source_id = Column(Integer, nullable=True)  # nid in the legacy database

    # Relationships
    text_values = relationship(
        "NodeTextValue", back_populates="node", cascade="all, delete-orphan",
        order_by="NodeTextValue.delta",
    )
    asset_references = relationship(
        "NodeAssetReference", back_populates="node", cascade="all, delete-orphan",
        order_by="NodeAssetReference.delta",
    )


class NodeTextValue(Base):
    """A formatted text value of a node field."""
    __tablename__ = "node_text_values"

    id = Column(Integer, primary_key=True, autoincrement=True)
    nid = Column(Integer, ForeignKey("nodes.nid"), nullable=False)
    field_name = Column(String, nullable=False)
    delta = Column(Integer, nullable=False, default=0)
    value = Column(Text, nullable=False)
    format = Column(String, nullable=True)

    node = relationship("Node", back_populates="text_values")


class NodeAssetReference(Base):
    """Links a node field to a managed file."""
    __tablename__ = "node_asset_references"

    id = Column(Integer, primary_key=True, autoincrement=True)
    nid = Column(Integer, ForeignKey("nodes.nid"), nullable=False)
    field_name = Column(String, nullable=False)
    delta = Column(Integer, nullable=False, default=0)
    file_id = Column(Integer, ForeignKey("files.fid"), nullable=False)

    node = relationship("Node", back_populates="asset_references")
    file = relationship("FileAsset")


class FileAsset(Base):
    """A managed file, keyed by its stream URI (e.g. public://a.jpg)."""
    __tablename__ = "files"

    fid = Column(Integer, primary_key=True, autoincrement=True)
    uri = Column(String, nullable=False, unique=True)
    filename = Column(String, nullable=True)
    status = Column(Integer, nullable=False, default=FILE_STATUS_TEMPORARY)
    created = Column(Integer, nullable=True)

    @staticmethod
    def filename_from_uri(uri: str) -> str:
        return os.path.basename(uri.split("://", 1)[-1])
