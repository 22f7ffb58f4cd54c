from .transport import TransportType
from .loader import TransportCatalogLoader

__all__ = ["TransportType",
           "TransportCatalogLoader"]
