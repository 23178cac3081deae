"""
Discovery of rich text and image fields on legacy bundles.

Legacy field configuration is optional and often incomplete, so discovery is
advisory: introspected names come first (for images) or after ``body`` (for
text), and conventional names are always merged in so that commonly named
content is still found when introspection yields nothing.
"""

import logging
from typing import Dict, List, Sequence, Tuple

from sqlalchemy import column, select, table
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from nodeimport.core.errors import IntrospectionError
from nodeimport.core.settings import (
    FALLBACK_IMAGE_FIELDS, FALLBACK_TEXT_FIELDS, IMAGE, TEXT_FIELD_TYPES
)
from nodeimport.core.utils import ordered_unique

logger = logging.getLogger(__name__)

field_config = table(
    "field_config",
    column("field_name"), column("entity_type"), column("bundle"), column("type"),
)


class SchemaProber:
    """Finds candidate legacy field names per bundle, caching results for the run."""

    def __init__(self, engine: Engine):
        self.engine = engine
        self._cache: Dict[Tuple[str, Tuple[str, ...]], List[str]] = {}

    def configured_fields(self, bundle: str, field_types: Sequence[str]) -> List[str]:
        """
        Query field_config for node fields of the given types on bundle.

        Raises:
            IntrospectionError: if the configuration cannot be queried.
        """
        query = (
            select(field_config.c.field_name)
            .where(field_config.c.entity_type == "node")
            .where(field_config.c.bundle == bundle)
            .where(field_config.c.type.in_(list(field_types)))
        )
        try:
            with self.engine.connect() as conn:
                return [row[0] for row in conn.execute(query).all()]
        except SQLAlchemyError as e:
            raise IntrospectionError(f"field_config lookup for '{bundle}' failed: {e}") from e

    def _discover(self, bundle: str, field_types: Sequence[str]) -> List[str]:
        key = (bundle, tuple(field_types))
        if key not in self._cache:
            try:
                self._cache[key] = self.configured_fields(bundle, field_types)
            except IntrospectionError as e:
                logger.warning(f"{e}; using conventional field names")
                self._cache[key] = []
        return list(self._cache[key])

    def discover_text_fields(self, bundle: str) -> List[str]:
        """Text fields for bundle; 'body' is prepended when it is not configured."""
        discovered = self._discover(bundle, TEXT_FIELD_TYPES)
        missing = [name for name in FALLBACK_TEXT_FIELDS if name not in discovered]
        return ordered_unique(missing, discovered)

    def discover_image_fields(self, bundle: str) -> List[str]:
        """Image fields for bundle, followed by the conventional image field names."""
        return ordered_unique(self._discover(bundle, (IMAGE,)), FALLBACK_IMAGE_FIELDS)
