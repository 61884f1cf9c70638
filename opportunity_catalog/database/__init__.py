"""Persistence layer."""

from .base import BaseStore
from .client import SupabaseStore

__all__ = ["BaseStore", "SupabaseStore"]
