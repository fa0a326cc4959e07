"""Custom exceptions for autoloader.

Resolution itself never raises: a symbol that cannot be found simply loads
nothing. These errors belong to the configuration file, CLI and API layers.
"""


class AutoloaderError(Exception):
    """Base exception for all autoloader errors."""

    pass


class ConfigNotFoundError(AutoloaderError):
    """No autoload.json where the resolver settings were expected."""

    def __init__(self, path: str | None = None):
        self.path = path
        where = f" at {path}" if path else ""
        super().__init__(
            f"No resolver settings found{where}. Create them with 'autoloader init'."
        )


class ConfigExistsError(AutoloaderError):
    """'init' would replace resolver settings that are already stored."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(
            f"Resolver settings already exist at {path}; pass --force to replace them."
        )


class InvalidSchemaVersionError(AutoloaderError):
    """The settings file was written by an incompatible autoloader release."""

    def __init__(self, found: int, supported: int):
        self.found = found
        self.supported = supported
        super().__init__(
            f"Settings file has schema_version {found!r}; "
            f"autoloader {supported} layout expected."
        )


class InvalidConfigError(AutoloaderError):
    """The settings file cannot be turned into an AutoloaderConfig."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot use settings in {path}: {reason}")
