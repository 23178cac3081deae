"""
Destination bundle schemas and the choice of destination field for legacy values.
"""

import logging
from typing import Dict, Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import sessionmaker

from nodeimport.core.settings import (
    DEFAULT_BUNDLE, FALLBACK_TEXT_DESTINATION, TEXT_LONG, TEXT_WITH_SUMMARY
)
from nodeimport.core.utils import first_match
from nodeimport.database.models import FieldDefinition, NodeType
from nodeimport.schemas.records import BundleSchema, FieldSpec

logger = logging.getLogger(__name__)


def pick_destination_field(
    schema: BundleSchema, preferred_names: Iterable[str], required_type: str
) -> Optional[str]:
    """
    Choose the destination field for a value of required_type.

    A preferred name with the right type wins; otherwise the first field of that
    type on the bundle; otherwise None.
    """
    preferred = first_match(
        preferred_names,
        lambda name: (schema.get(name) is not None and schema.get(name).type == required_type),
    )
    if preferred is not None:
        return preferred
    candidates = schema.fields_of_type(required_type)
    return candidates[0].name if candidates else None


def pick_text_field(schema: BundleSchema, preferred_names: Iterable[str]) -> str:
    """Long text first, then text with summary, then the conventional 'body' field."""
    preferred_names = list(preferred_names)
    return (
        pick_destination_field(schema, preferred_names, TEXT_LONG)
        or pick_destination_field(schema, preferred_names, TEXT_WITH_SUMMARY)
        or FALLBACK_TEXT_DESTINATION
    )


class DestinationSchema:
    """
    Read-only view of the destination bundles and their fields.

    The bundle list and each bundle's fields are loaded once and cached for the
    lifetime of the object.
    """

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory
        self._bundles: Optional[List[str]] = None
        self._schemas: Dict[str, BundleSchema] = {}

    def bundle_names(self) -> List[str]:
        if self._bundles is None:
            with self.session_factory() as session:
                self._bundles = list(session.scalars(select(NodeType.type).order_by(NodeType.type)))
        return list(self._bundles)

    def bundle_exists(self, bundle: str) -> bool:
        return bundle in self.bundle_names()

    def resolve_bundle(self, source_type: str, fallback: str = DEFAULT_BUNDLE) -> Optional[str]:
        """Return source_type if it exists at the destination, else fallback if that exists, else None."""
        if self.bundle_exists(source_type):
            return source_type
        if self.bundle_exists(fallback):
            logger.debug(f"Bundle '{source_type}' missing at destination, using '{fallback}'")
            return fallback
        return None

    def bundle_schema(self, bundle: str) -> BundleSchema:
        if bundle not in self._schemas:
            with self.session_factory() as session:
                definitions = session.scalars(
                    select(FieldDefinition)
                    .where(FieldDefinition.bundle == bundle)
                    .order_by(FieldDefinition.id)
                ).all()
                self._schemas[bundle] = BundleSchema(
                    bundle=bundle,
                    fields={
                        definition.field_name: FieldSpec(
                            name=definition.field_name,
                            type=definition.field_type,
                            cardinality=definition.cardinality,
                        )
                        for definition in definitions
                    },
                )
        return self._schemas[bundle]
