"""Resource services."""

from .service import ResourceService, TaggedResourceService
from .resources import ConnectionService, ExportService, IntegrationService, simplify_exports

__all__ = [
    # Base services
    "ResourceService",
    "TaggedResourceService",

    # Resources
    "ConnectionService",
    "ExportService",
    "IntegrationService",
    "simplify_exports",
]
