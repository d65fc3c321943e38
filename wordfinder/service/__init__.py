"""Lookup service — corpus access plus matching behind one call."""

from wordfinder.service.lookup import LookupOutcome, LookupService, ResultEnvelope

__all__ = ["LookupOutcome", "LookupService", "ResultEnvelope"]
