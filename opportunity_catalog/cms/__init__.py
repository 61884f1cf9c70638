"""CMS screen actions."""

from .editor import CatalogEditor, Notice, toggle_tag

__all__ = ["CatalogEditor", "Notice", "toggle_tag"]
