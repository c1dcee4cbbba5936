from pixcache.application.use_cases.filter.apply_filter import (
    ApplyFilter,
    ApplyFilterRequest,
    ApplyFilterResponse,
)

__all__ = ["ApplyFilter", "ApplyFilterRequest", "ApplyFilterResponse"]
