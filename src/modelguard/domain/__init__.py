"""Domain layer — constraint markers, validator contract, resolution, records.

This layer depends only on stdlib, pydantic, and SQLAlchemy type objects.
It must never import from services, infrastructure, or config.
"""
