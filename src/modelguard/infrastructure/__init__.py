"""Infrastructure layer — SQLAlchemy adapters for metadata and save hooks."""

from modelguard.infrastructure.metadata import SQLAlchemyMetadataProvider
from modelguard.infrastructure.save_guard import install_save_guard

__all__ = ["SQLAlchemyMetadataProvider", "install_save_guard"]
