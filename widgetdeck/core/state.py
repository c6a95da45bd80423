from enum import Enum


# Catalog Status Enum
class CatalogStatus(Enum):
    NOT_LOADED = "NOT_LOADED"
    LOADING = "LOADING"
    LOADED = "LOADED"
    FAILED = "FAILED"
