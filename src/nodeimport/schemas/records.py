"""
Pydantic schemas for legacy rows, destination schema metadata and import outcomes.
"""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from nodeimport.core.settings import UNLIMITED_CARDINALITY


class SourceRecord(BaseModel):
    """A published node row from the legacy node_field_data table."""
    model_config = ConfigDict(frozen=True)

    nid: int
    type: str
    title: Optional[str] = None
    langcode: Optional[str] = None
    status: int = 1
    created: int = 0
    changed: int = 0
    uid: Optional[int] = None


class SourceTextValue(BaseModel):
    """A single text value of a legacy field."""
    model_config = ConfigDict(frozen=True)

    record_id: int
    field_name: str
    value: str
    delta: int = 0


class SourceAssetRecord(BaseModel):
    """A legacy file_managed row."""
    model_config = ConfigDict(frozen=True)

    asset_id: int
    uri: str


class AssetReference(BaseModel):
    """An image field value on a legacy node, resolved to its file URI."""
    model_config = ConfigDict(frozen=True)

    record_id: int
    field_name: str
    target_id: int
    uri: str


class FieldSpec(BaseModel):
    """Type and cardinality of one destination field."""
    name: str
    type: str
    cardinality: int = 1

    def accepts(self, count: int) -> bool:
        return self.cardinality == UNLIMITED_CARDINALITY or count <= self.cardinality


class BundleSchema(BaseModel):
    """Field definitions of a destination bundle, in definition order."""
    bundle: str
    fields: Dict[str, FieldSpec] = Field(default_factory=dict)

    def get(self, field_name: str) -> Optional[FieldSpec]:
        return self.fields.get(field_name)

    def fields_of_type(self, field_type: str) -> List[FieldSpec]:
        return [spec for spec in self.fields.values() if spec.type == field_type]


class DestinationAssetRecord(BaseModel):
    """A managed file in the destination store."""
    model_config = ConfigDict(from_attributes=True)

    fid: int
    uri: str
    status: int


class ImportStatus(str, Enum):
    """Terminal states of a single record import."""
    IMPORTED = "imported"
    SKIPPED_NO_BUNDLE = "skipped_no_bundle"
    FAILED = "failed"


class ImportOutcome(BaseModel):
    """What happened to one legacy record."""
    source_id: int
    status: ImportStatus
    bundle: Optional[str] = None
    new_id: Optional[int] = None
    has_body: bool = False
    image_count: int = 0
    image_field: Optional[str] = None
    message: Optional[str] = None


class ImportReport(BaseModel):
    """Outcomes of an import run, in processing order."""
    outcomes: List[ImportOutcome] = Field(default_factory=list)

    @property
    def created(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.status == ImportStatus.IMPORTED)

    @property
    def failed(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.status == ImportStatus.FAILED)

    @property
    def skipped(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.status == ImportStatus.SKIPPED_NO_BUNDLE)
