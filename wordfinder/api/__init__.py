"""FastAPI lookup endpoint."""

from wordfinder.api.app import create_app

__all__ = ["create_app"]
