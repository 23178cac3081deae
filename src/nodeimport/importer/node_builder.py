"""
Incremental construction of a destination node.

Values are collected on the builder and only turned into ORM objects by
``build()``, after a single validation pass against the bundle schema.
"""

from typing import List, Optional

from nodeimport.core.errors import ContentValidationError
from nodeimport.core.settings import DEFAULT_TEXT_FORMAT, IMAGE, TEXT_FIELD_TYPES
from nodeimport.database.models import Node, NodeAssetReference, NodeTextValue
from nodeimport.schemas.records import BundleSchema, DestinationAssetRecord


class NodeBuilder:
    def __init__(self, schema: BundleSchema):
        self.schema = schema
        self.title: Optional[str] = None
        self.langcode: Optional[str] = None
        self.status = True
        self.uid: Optional[int] = None
        self.created: Optional[int] = None
        self.changed: Optional[int] = None
        self.source_id: Optional[int] = None
        self.text_field: Optional[str] = None
        self.text_value: Optional[str] = None
        self.text_format = DEFAULT_TEXT_FORMAT
        self.asset_field: Optional[str] = None
        self.assets: List[DestinationAssetRecord] = []

    @property
    def bundle(self) -> str:
        return self.schema.bundle

    def with_metadata(self, title: str, langcode: str, uid: int, created: int, changed: int,
                      status: bool = True, source_id: Optional[int] = None) -> "NodeBuilder":
        self.title = title
        self.langcode = langcode
        self.uid = uid
        self.created = created
        self.changed = changed
        self.status = status
        self.source_id = source_id
        return self

    def set_text(self, field_name: str, value: str, text_format: str = DEFAULT_TEXT_FORMAT) -> "NodeBuilder":
        self.text_field = field_name
        self.text_value = value
        self.text_format = text_format
        return self

    def set_assets(self, field_name: str, assets: List[DestinationAssetRecord]) -> "NodeBuilder":
        self.asset_field = field_name
        self.assets = list(assets)
        return self

    def validate(self) -> None:
        """
        Raises:
            ContentValidationError: describing the first problem found.
        """
        if not self.bundle:
            raise ContentValidationError("Node has no bundle")
        if not self.title or not self.title.strip():
            raise ContentValidationError("Node title is empty")
        if self.uid is None or self.created is None or self.changed is None:
            raise ContentValidationError("Node metadata is incomplete")

        if self.text_field is not None:
            spec = self.schema.get(self.text_field)
            if spec is None:
                raise ContentValidationError(
                    f"Field '{self.text_field}' does not exist on bundle '{self.bundle}'"
                )
            if spec.type not in TEXT_FIELD_TYPES:
                raise ContentValidationError(
                    f"Field '{self.text_field}' is of type '{spec.type}', not a text field"
                )

        if self.asset_field is not None:
            spec = self.schema.get(self.asset_field)
            if spec is None:
                raise ContentValidationError(
                    f"Field '{self.asset_field}' does not exist on bundle '{self.bundle}'"
                )
            if spec.type != IMAGE:
                raise ContentValidationError(
                    f"Field '{self.asset_field}' is of type '{spec.type}', not an image field"
                )
            if not spec.accepts(len(self.assets)):
                raise ContentValidationError(
                    f"Field '{self.asset_field}' holds at most {spec.cardinality} value(s), "
                    f"got {len(self.assets)}"
                )

    def build(self) -> Node:
        """Validate and return an unsaved Node with its field values attached."""
        self.validate()
        node = Node(
            type=self.bundle,
            title=self.title,
            langcode=self.langcode,
            status=self.status,
            uid=self.uid,
            created=self.created,
            changed=self.changed,
            source_id=self.source_id,
        )
        if self.text_field is not None:
            node.text_values.append(NodeTextValue(
                field_name=self.text_field,
                delta=0,
                value=self.text_value,
                format=self.text_format,
            ))
        for delta, asset in enumerate(self.assets):
            node.asset_references.append(NodeAssetReference(
                field_name=self.asset_field,
                delta=delta,
                file_id=asset.fid,
            ))
        return node
