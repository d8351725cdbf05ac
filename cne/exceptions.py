class CNEError(Exception):
    """Base for all CNE optimizer exceptions."""

    pass


class ConfigurationError(CNEError, ValueError):
    """Optimizer configuration is invalid."""

    pass


class ShapeMismatchError(CNEError, ValueError):
    """Arrays that must share a shape do not."""

    pass
