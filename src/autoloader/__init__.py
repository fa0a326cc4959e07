"""Convention-based autoloading of symbols from source files.

Typical wiring:

    registry = AutoloadRegistry()
    config = ConfigBuilder().set_root_directory("lib").enable_snake_case().build()
    resolver = Resolver(config, IncludeOnceLoader(registry.symbols))
    registry.register(resolver)
    registry.load("FooBar")  # executes lib/**/foo_bar.py
"""

__version__ = "0.1.0"

from .errors import AutoloaderError
from .hooks import AutoloadRegistry, install_module_getattr, register, unregister
from .listing import DirectoryListing, ListingState, scan_directory
from .loader import FileLoader, IncludeOnceLoader
from .models import (
    AutoloaderConfig,
    ConfigBuilder,
    ListingEntry,
    Resolution,
    ResolveOutcome,
)
from .resolver import Resolver

__all__ = [
    "__version__",
    # Configuration
    "AutoloaderConfig",
    "ConfigBuilder",
    # Resolution
    "Resolver",
    "Resolution",
    "ResolveOutcome",
    "DirectoryListing",
    "ListingEntry",
    "ListingState",
    "scan_directory",
    # Loading
    "FileLoader",
    "IncludeOnceLoader",
    # Hooks
    "AutoloadRegistry",
    "install_module_getattr",
    "register",
    "unregister",
    "AutoloaderError",
]
