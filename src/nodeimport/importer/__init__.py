"""
Import pipeline that maps legacy nodes onto the destination content store.
"""

from nodeimport.importer.content_importer import ContentImporter

__all__ = ["ContentImporter"]
