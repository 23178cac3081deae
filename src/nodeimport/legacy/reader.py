"""
Read-only queries against the legacy CMS database.

Legacy field values live in one table per field, ``node__<field>``, with the
value in ``<field>_value`` (text) or ``<field>_target_id`` (file references).
Any of those tables may be missing on a given site; a missing table means
"no value there" and is never an error.
"""

import logging
from typing import Iterable, List, Optional

from sqlalchemy import column, inspect, select, table
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from nodeimport.core.errors import LegacyConnectionError, LookupMiss
from nodeimport.core.utils import normalize_limit
from nodeimport.schemas.records import (
    AssetReference, SourceAssetRecord, SourceRecord, SourceTextValue
)

logger = logging.getLogger(__name__)

node_field_data = table(
    "node_field_data",
    column("nid"), column("type"), column("title"), column("langcode"),
    column("status"), column("created"), column("changed"), column("uid"),
)
file_managed = table("file_managed", column("fid"), column("uri"))


def field_table_name(field_name: str) -> str:
    return f"node__{field_name}"


class LegacyReader:
    """
    Reads published nodes and their field values from the legacy database.

    No method writes; connections are only ever used for SELECTs.
    """

    def __init__(self, engine: Engine):
        self.engine = engine

    def fetch_published_records(self, limit: Optional[int] = None) -> List[SourceRecord]:
        """
        Fetch published nodes, newest first.

        Args:
            limit: Maximum number of rows; missing or non-positive means the default.

        Raises:
            LegacyConnectionError: if node_field_data cannot be read.
        """
        query = (
            select(node_field_data)
            .where(node_field_data.c.status == 1)
            .order_by(node_field_data.c.created.desc())
            .limit(normalize_limit(limit))
        )
        try:
            with self.engine.connect() as conn:
                rows = conn.execute(query).mappings().all()
        except SQLAlchemyError as e:
            raise LegacyConnectionError(f"Unable to read node_field_data: {e}") from e
        return [SourceRecord.model_validate(dict(row)) for row in rows]

    def fetch_text_values(self, conn: Connection, record_id: int, field_name: str) -> List[SourceTextValue]:
        """
        Return the stored values of a text field for one node, lowest delta first.

        Raises:
            LookupMiss: if the field table is absent or the query fails.
        """
        field_table = self._field_table(conn, field_name, "value")
        value_column = field_table.c[f"{field_name}_value"]
        query = (
            select(field_table.c.delta, value_column)
            .where(field_table.c.entity_id == record_id)
            .order_by(field_table.c.delta)
        )
        try:
            rows = conn.execute(query).all()
        except SQLAlchemyError as e:
            raise LookupMiss(f"{field_table.name}: {e}") from e
        return [
            SourceTextValue(record_id=record_id, field_name=field_name, value=str(value), delta=delta or 0)
            for delta, value in rows
            if value is not None
        ]

    def fetch_text_value(self, record_id: int, candidate_fields: Iterable[str]) -> str:
        """
        Return the first non-blank text value among candidate fields, in priority order.
        """
        with self.engine.connect() as conn:
            for field_name in candidate_fields:
                try:
                    values = self.fetch_text_values(conn, record_id, field_name)
                except LookupMiss as e:
                    logger.debug(f"No text in {field_name} for nid {record_id}: {e}")
                    conn.rollback()
                    continue
                for text_value in values:
                    if text_value.value.strip():
                        return text_value.value
        return ""

    def fetch_asset_records(self, conn: Connection, asset_ids: List[int]) -> List[SourceAssetRecord]:
        """Resolve file ids to file_managed rows, keeping the order of asset_ids."""
        if not asset_ids:
            return []
        query = select(file_managed.c.fid, file_managed.c.uri).where(file_managed.c.fid.in_(asset_ids))
        try:
            uris = {fid: uri for fid, uri in conn.execute(query).all()}
        except SQLAlchemyError as e:
            raise LookupMiss(f"file_managed: {e}") from e
        return [
            SourceAssetRecord(asset_id=asset_id, uri=uris[asset_id])
            for asset_id in asset_ids
            if uris.get(asset_id)
        ]

    def fetch_asset_references(self, record_id: int, candidate_fields: Iterable[str]) -> List[AssetReference]:
        """
        Collect file references across all candidate image fields.

        References are de-duplicated by URI; the first field that mentions a URI wins.
        """
        references: List[AssetReference] = []
        seen_uris = set()
        with self.engine.connect() as conn:
            for field_name in candidate_fields:
                try:
                    field_table = self._field_table(conn, field_name, "target_id")
                    target_column = field_table.c[f"{field_name}_target_id"]
                    query = (
                        select(target_column)
                        .where(field_table.c.entity_id == record_id)
                        .order_by(field_table.c.delta)
                    )
                    try:
                        asset_ids = [row[0] for row in conn.execute(query).all() if row[0] is not None]
                    except SQLAlchemyError as e:
                        raise LookupMiss(f"{field_table.name}: {e}") from e
                    assets = self.fetch_asset_records(conn, asset_ids)
                except LookupMiss as e:
                    logger.debug(f"No images in {field_name} for nid {record_id}: {e}")
                    conn.rollback()
                    continue

                for asset in assets:
                    if asset.uri in seen_uris:
                        continue
                    seen_uris.add(asset.uri)
                    references.append(AssetReference(
                        record_id=record_id,
                        field_name=field_name,
                        target_id=asset.asset_id,
                        uri=asset.uri,
                    ))
        return references

    def _field_table(self, conn: Connection, field_name: str, suffix: str):
        name = field_table_name(field_name)
        try:
            exists = inspect(conn).has_table(name)
        except SQLAlchemyError as e:
            raise LookupMiss(f"{name}: {e}") from e
        if not exists:
            raise LookupMiss(f"{name} does not exist")
        return table(name, column("entity_id"), column("delta"), column(f"{field_name}_{suffix}"))
