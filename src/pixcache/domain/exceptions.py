class PixcacheError(Exception):
    """Base class for all errors raised by pixcache."""

    pass


class BindingNotFoundError(PixcacheError, LookupError):
    """Raise when neither a specific nor a default resolver is bound for a filter."""

    pass


class BindingFrozenError(PixcacheError):
    """Raise when a resolver is registered after the bindings were frozen."""

    pass


class FilterNotDefinedError(PixcacheError, KeyError):
    """Raise when a filter set is not present in the filter configuration."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class NotFoundError(PixcacheError):
    """Raise when a resource cannot be located."""

    pass


class PathTraversalError(NotFoundError):
    """Raise when a path tries to escape the root with a parent-directory segment."""

    def __init__(self, path: str):
        super().__init__(
            f"Source image was searched with '{path}' outside of the defined root path"
        )
        self.path = path


class RouteNotFoundError(PixcacheError, KeyError):
    """Raise when the router does not know a route name."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class SignatureMismatchError(PixcacheError):
    """Raise when a signed URL fails verification."""

    pass


class FileUploadError(PixcacheError):
    """Raise when a file cannot be written to storage."""

    pass


class FileDownloadError(PixcacheError):
    """Raise when a file cannot be read from or removed in storage."""

    pass
