"""
nodeimport: move published content from a legacy CMS database into a destination content store.
"""

__version__ = "0.1.0"
