"""nodeimport exception hierarchy.

Only LegacyConnectionError ends an import run. Every other error is recovered
where it is raised or turned into a failed outcome for a single record.
"""


class NodeImportError(Exception):
    """Base exception for all nodeimport failures."""


class LegacyConnectionError(NodeImportError):
    """Raised when the legacy database cannot be reached or read."""


class IntrospectionError(NodeImportError):
    """Raised when the legacy field configuration cannot be queried."""


class LookupMiss(NodeImportError):
    """Raised when an expected legacy table or column is absent."""


class AssetCreationError(NodeImportError):
    """Raised when a destination file record cannot be created."""


class ContentValidationError(NodeImportError):
    """Raised when a node under construction is not valid for its bundle."""


class PersistError(NodeImportError):
    """Raised when saving a node to the destination store fails."""


class SchemaError(NodeImportError):
    """Raised for invalid changes to the destination bundle schema."""
