"""Opportunity catalog core: filtering and tag reconciliation over Supabase."""

__version__ = "0.1.0"
