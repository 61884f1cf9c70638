"""Catalog services."""

from .opportunity_service import OpportunityService

__all__ = ["OpportunityService"]
