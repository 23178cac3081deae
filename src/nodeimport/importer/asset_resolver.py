"""
Lookup-or-create of destination file records for legacy image URIs.

Physical files are synced separately; only the managed file records are created here.
"""

import logging
import time
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from nodeimport.core.errors import AssetCreationError
from nodeimport.core.settings import FILE_STATUS_PERMANENT
from nodeimport.database.models import FileAsset
from nodeimport.schemas.records import DestinationAssetRecord

logger = logging.getLogger(__name__)


class AssetResolver:
    """Ensures one permanent destination file record exists per URI."""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def find_asset_record(self, uri: str) -> Optional[DestinationAssetRecord]:
        with self.session_factory() as session:
            existing = session.scalars(select(FileAsset).where(FileAsset.uri == uri)).first()
            return DestinationAssetRecord.model_validate(existing) if existing else None

    def create_asset_record(self, uri: str) -> DestinationAssetRecord:
        """
        Create and commit a permanent file record for uri.

        Raises:
            AssetCreationError: if the record cannot be saved.
        """
        with self.session_factory() as session:
            try:
                file_asset = FileAsset(
                    uri=uri,
                    filename=FileAsset.filename_from_uri(uri),
                    status=FILE_STATUS_PERMANENT,
                    created=int(time.time()),
                )
                session.add(file_asset)
                session.commit()
            except SQLAlchemyError as e:
                session.rollback()
                raise AssetCreationError(str(e)) from e
            return DestinationAssetRecord.model_validate(file_asset)

    def ensure_asset_record(self, uri: str) -> Optional[DestinationAssetRecord]:
        """
        Return the file record for uri, creating it when absent.

        Existing records are returned untouched. Failures are logged and yield None,
        which callers treat as "skip this asset".
        """
        try:
            existing = self.find_asset_record(uri)
            if existing is not None:
                return existing
            return self.create_asset_record(uri)
        except (AssetCreationError, SQLAlchemyError) as e:
            logger.warning(f"File record failed for {uri}: {e}")
            return None
