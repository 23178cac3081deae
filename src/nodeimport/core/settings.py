"""
Project-wide constants or “settings” that are unlikely to change at runtime.
"""

DEFAULT_LIMIT = 10  # Rows imported when no (or a non-positive) limit is given

DEFAULT_BUNDLE = "page"  # Destination bundle used when the legacy type has no match
DEFAULT_LANGCODE = "en"
DEFAULT_OWNER_ID = 1  # Admin account; no user mapping is performed
DEFAULT_TEXT_FORMAT = "basic_html"

# Field type machine names shared by the legacy and destination schemas
TEXT_LONG = "text_long"
TEXT_WITH_SUMMARY = "text_with_summary"
IMAGE = "image"
TEXT_FIELD_TYPES = (TEXT_LONG, TEXT_WITH_SUMMARY)

# Conventional field names that legacy sites use without configuration metadata
FALLBACK_TEXT_FIELDS = ("body",)
FALLBACK_IMAGE_FIELDS = ("field_image", "field_images", "field_hero_image")
FALLBACK_TEXT_DESTINATION = "body"

FILE_STATUS_TEMPORARY = 0
FILE_STATUS_PERMANENT = 1

UNLIMITED_CARDINALITY = -1
