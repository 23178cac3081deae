"""
Content Importer for nodeimport

Copies published legacy nodes into the destination store, one record at a time.
Each record ends in exactly one of three states (imported, skipped because no
bundle fits, failed) and a failure never stops the remaining records.
"""

import logging
from typing import Callable, List, Optional

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from nodeimport.core.errors import NodeImportError, PersistError
from nodeimport.core.settings import (
    DEFAULT_BUNDLE, DEFAULT_LANGCODE, DEFAULT_OWNER_ID, DEFAULT_TEXT_FORMAT, IMAGE
)
from nodeimport.database.session import make_session_factory
from nodeimport.importer.asset_resolver import AssetResolver
from nodeimport.importer.field_mapper import (
    DestinationSchema, pick_destination_field, pick_text_field
)
from nodeimport.importer.node_builder import NodeBuilder
from nodeimport.legacy.reader import LegacyReader
from nodeimport.legacy.schema_prober import SchemaProber
from nodeimport.schemas.records import (
    AssetReference, BundleSchema, DestinationAssetRecord, ImportOutcome,
    ImportReport, ImportStatus, SourceRecord
)

logger = logging.getLogger(__name__)

OutcomeCallback = Callable[[ImportOutcome], None]


def _non_blank(value: Optional[str]) -> Optional[str]:
    return value if value and value.strip() else None


class ContentImporter:
    """
    Orchestrates reading, mapping, asset resolution and persistence of legacy nodes.
    """

    def __init__(
        self,
        reader: LegacyReader,
        prober: SchemaProber,
        destination: DestinationSchema,
        resolver: AssetResolver,
        session_factory: sessionmaker,
        fallback_bundle: str = DEFAULT_BUNDLE,
        owner_id: int = DEFAULT_OWNER_ID,
    ):
        self.reader = reader
        self.prober = prober
        self.destination = destination
        self.resolver = resolver
        self.session_factory = session_factory
        self.fallback_bundle = fallback_bundle
        self.owner_id = owner_id

    @classmethod
    def from_engines(cls, legacy_engine: Engine, destination_engine: Engine, **kwargs) -> "ContentImporter":
        session_factory = make_session_factory(destination_engine)
        return cls(
            reader=LegacyReader(legacy_engine),
            prober=SchemaProber(legacy_engine),
            destination=DestinationSchema(session_factory),
            resolver=AssetResolver(session_factory),
            session_factory=session_factory,
            **kwargs,
        )

    def fetch_records(self, limit: Optional[int] = None) -> List[SourceRecord]:
        """Published legacy records, newest first. Raises LegacyConnectionError."""
        return self.reader.fetch_published_records(limit)

    def run(self, limit: Optional[int] = None, on_outcome: Optional[OutcomeCallback] = None) -> ImportReport:
        """Fetch up to limit records and import them in order."""
        return self.import_records(self.fetch_records(limit), on_outcome=on_outcome)

    def import_records(self, records: List[SourceRecord],
                       on_outcome: Optional[OutcomeCallback] = None) -> ImportReport:
        report = ImportReport()
        for record in records:
            outcome = self.import_record(record)
            report.outcomes.append(outcome)
            if on_outcome is not None:
                on_outcome(outcome)
        logger.info(
            f"Import finished: {report.created} created, {report.skipped} skipped, {report.failed} failed"
        )
        return report

    def import_record(self, record: SourceRecord) -> ImportOutcome:
        """Import one legacy record; every error is turned into a failed outcome."""
        bundle = None
        try:
            bundle = self.destination.resolve_bundle(record.type, fallback=self.fallback_bundle)
            if bundle is None:
                logger.info(f"Skipping nid {record.nid}: no destination bundle for '{record.type}'")
                return ImportOutcome(
                    source_id=record.nid,
                    status=ImportStatus.SKIPPED_NO_BUNDLE,
                    bundle=self.fallback_bundle,
                )

            schema = self.destination.bundle_schema(bundle)

            text_fields = self.prober.discover_text_fields(record.type)
            body = self.reader.fetch_text_value(record.nid, text_fields)

            image_fields = self.prober.discover_image_fields(record.type)
            references = self.reader.fetch_asset_references(record.nid, image_fields)

            builder = NodeBuilder(schema).with_metadata(
                title=_non_blank(record.title) or f"Imported {record.nid}",
                langcode=_non_blank(record.langcode) or DEFAULT_LANGCODE,
                uid=self.owner_id,
                created=record.created,
                changed=record.changed,
                status=True,
                source_id=record.nid,
            )

            if body:
                builder.set_text(pick_text_field(schema, text_fields), body, DEFAULT_TEXT_FORMAT)

            image_field, assets = self._attach_assets(builder, schema, image_fields, references)

            new_id = self._persist(builder)
        except (NodeImportError, SQLAlchemyError) as e:
            logger.error(f"Import of nid {record.nid} failed: {e}")
            return ImportOutcome(
                source_id=record.nid,
                status=ImportStatus.FAILED,
                bundle=bundle,
                message=str(e),
            )

        return ImportOutcome(
            source_id=record.nid,
            status=ImportStatus.IMPORTED,
            bundle=bundle,
            new_id=new_id,
            has_body=bool(body),
            image_count=len(assets),
            image_field=image_field,
        )

    def resolve_assets(self, references: List[AssetReference]) -> List[DestinationAssetRecord]:
        """Ensure file records for each reference, dropping the ones that could not be created."""
        assets = []
        for reference in references:
            asset = self.resolver.ensure_asset_record(reference.uri)
            if asset is not None:
                assets.append(asset)
        return assets

    def _attach_assets(self, builder: NodeBuilder, schema: BundleSchema, image_fields: List[str],
                       references: List[AssetReference]):
        if not references:
            return None, []
        field_name = pick_destination_field(schema, image_fields, IMAGE)
        if field_name is None:
            logger.debug(f"Bundle '{schema.bundle}' has no image field; {len(references)} image(s) not attached")
            return None, []

        assets = self.resolve_assets(references)
        if not assets:
            return None, []
        # Finite fields keep the first images up to their cardinality.
        spec = schema.get(field_name)
        if not spec.accepts(len(assets)):
            logger.debug(
                f"Field '{field_name}' holds {spec.cardinality} value(s); dropping {len(assets) - spec.cardinality}"
            )
            assets = assets[:spec.cardinality]
        builder.set_assets(field_name, assets)
        return field_name, assets

    def _persist(self, builder: NodeBuilder) -> int:
        node = builder.build()
        with self.session_factory() as session:
            try:
                session.add(node)
                session.commit()
            except SQLAlchemyError as e:
                session.rollback()
                raise PersistError(str(e)) from e
            return node.nid
