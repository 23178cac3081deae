"""
Creation of destination bundles and field definitions.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from nodeimport.core.errors import SchemaError
from nodeimport.core.settings import UNLIMITED_CARDINALITY
from nodeimport.database.models import FieldDefinition, NodeType

logger = logging.getLogger(__name__)


def create_bundle(session: Session, bundle: str, label: Optional[str] = None,
                  description: Optional[str] = None) -> NodeType:
    """Create and commit a bundle. Raises SchemaError if it already exists."""
    if session.get(NodeType, bundle) is not None:
        raise SchemaError(f"Bundle '{bundle}' already exists")
    node_type = NodeType(type=bundle, name=label or bundle, description=description)
    session.add(node_type)
    session.commit()
    logger.info(f"Created bundle {bundle}")
    return node_type


def add_field(session: Session, bundle: str, field_name: str, field_type: str,
              cardinality: int = 1, label: Optional[str] = None) -> FieldDefinition:
    """
    Attach a field definition to an existing bundle and commit it.

    Args:
        cardinality: Maximum number of values, or -1 for unlimited.

    Raises:
        SchemaError: for an unknown bundle, a duplicate field or an invalid cardinality.
    """
    if cardinality != UNLIMITED_CARDINALITY and cardinality < 1:
        raise SchemaError(f"Invalid cardinality {cardinality}; use -1 or a positive number")
    if session.get(NodeType, bundle) is None:
        raise SchemaError(f"Bundle '{bundle}' does not exist")
    existing = session.scalars(
        select(FieldDefinition)
        .where(FieldDefinition.bundle == bundle)
        .where(FieldDefinition.field_name == field_name)
    ).first()
    if existing is not None:
        raise SchemaError(f"Field '{field_name}' already exists on bundle '{bundle}'")

    definition = FieldDefinition(
        bundle=bundle,
        field_name=field_name,
        field_type=field_type,
        cardinality=cardinality,
        label=label,
    )
    session.add(definition)
    try:
        session.commit()
    except IntegrityError as e:
        session.rollback()
        raise SchemaError(str(e)) from e
    logger.info(f"Added field {bundle}.{field_name} ({field_type}, cardinality {cardinality})")
    return definition
