"""
Read-only access to the legacy CMS database.

This package provides the connection probe, the row reader and the field-configuration
prober used to find rich text and image values on legacy nodes.
"""
