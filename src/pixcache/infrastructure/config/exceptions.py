class ConfigFileNotFoundError(FileNotFoundError):
    """Raise when specified config file is not found."""

    pass


class ConfigNotRegisteredError(Exception):
    """Raise when specified config schema is not registered."""

    pass


class InvalidConfigType(Exception):
    """Raise when specified config type is invalid."""

    pass


class InvalidConfigSubtype(Exception):
    """Raise when specified config subtype is invalid."""

    pass
