from .catalog_loader import SHIPPED_CATALOG_PATH, CatalogLoader
from .colors import RGB, display_color, parse_hex_color, to_hex
from .models import Catalog, CatalogEntry, CatalogError, Variant, VariantId

__all__ = [
    "Catalog",
    "CatalogEntry",
    "CatalogError",
    "CatalogLoader",
    "RGB",
    "SHIPPED_CATALOG_PATH",
    "Variant",
    "VariantId",
    "display_color",
    "parse_hex_color",
    "to_hex",
]
