"""Tag reconciliation."""

from .reconciler import TagReconciler, normalize_tag_names

__all__ = ["TagReconciler", "normalize_tag_names"]
