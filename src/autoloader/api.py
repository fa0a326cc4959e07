"""FastAPI REST API for inspecting autoloader resolution."""

from functools import lru_cache
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from . import __version__
from .config_store import ConfigStore
from .errors import (
    AutoloaderError,
    ConfigNotFoundError,
    InvalidConfigError,
    InvalidSchemaVersionError,
)
from .models import AutoloaderConfig, ListingEntry, Resolution
from .resolver import Resolver


# --- Pydantic Schemas ---


class ConfigSchema(BaseModel):
    root_directory: str
    file_extension: str
    file_prefixes: list[str]
    uses_snake_case: bool
    underscore_to_dash: bool
    uses_namespaces: bool
    strip_root_namespace: bool
    namespace_separator: str


class SymbolRequest(BaseModel):
    symbol_name: str = Field(..., min_length=1, description="Symbol to resolve (e.g. 'Ns\\Sub\\Bar')")


class CandidatesResponse(BaseModel):
    symbol_name: str
    candidates: list[str]


class ListingEntrySchema(BaseModel):
    subpath: str
    filename: str
    path: str
    is_readable: bool


class ResolutionSchema(BaseModel):
    symbol_name: str
    outcome: str  # "no_candidates"|"no_match"|"found"|"unreadable"
    candidates: list[str]
    entry: Optional[ListingEntrySchema] = None


class ListingResponse(BaseModel):
    root: str
    entries: list[ListingEntrySchema]
    count: int


# --- Helper Functions ---


def get_config_store() -> ConfigStore:
    """Get the ConfigStore at the default location."""
    return ConfigStore()


@lru_cache(maxsize=8)
def get_resolver(config: AutoloaderConfig) -> Resolver:
    """One Resolver (and so one cached listing) per distinct configuration."""
    return Resolver(config)


def entry_to_schema(entry: ListingEntry) -> ListingEntrySchema:
    """Convert dataclass ListingEntry to Pydantic schema."""
    return ListingEntrySchema(
        subpath=entry.subpath,
        filename=entry.filename,
        path=entry.path,
        is_readable=entry.is_readable,
    )


def resolution_to_schema(result: Resolution) -> ResolutionSchema:
    return ResolutionSchema(
        symbol_name=result.symbol_name,
        outcome=result.outcome.value,
        candidates=list(result.candidates),
        entry=entry_to_schema(result.entry) if result.entry else None,
    )


def _current_resolver() -> Resolver:
    return get_resolver(get_config_store().load())


# --- FastAPI App ---


app = FastAPI(
    title="autoloader API",
    description="Read-only diagnostics for convention-based symbol resolution",
    version=__version__,
)


# --- Global Exception Handler ---


# Map exception types to HTTP status codes
ERROR_STATUS_CODES: dict[type, int] = {
    ConfigNotFoundError: 409,
    InvalidConfigError: 500,
    InvalidSchemaVersionError: 500,
}


@app.exception_handler(AutoloaderError)
async def autoloader_error_handler(request: Request, exc: AutoloaderError) -> JSONResponse:
    """Map AutoloaderError subclasses to appropriate HTTP responses."""
    status_code = ERROR_STATUS_CODES.get(type(exc), 500)
    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc), "error_type": type(exc).__name__},
    )


# --- Endpoints ---


@app.get("/api/health")
def health_check():
    """
    Health check endpoint.

    Reports whether a configuration file is present and loadable.
    """
    store = get_config_store()
    if not store.exists():
        return {"status": "ok", "config_initialized": False}
    try:
        config = store.load()
    except AutoloaderError as e:
        return {"status": "error", "config_initialized": True, "detail": str(e)}
    return {
        "status": "ok",
        "config_initialized": True,
        "root_directory": config.root_directory,
        "listing_state": get_resolver(config).listing_state.value,
    }


@app.get("/api/config", response_model=ConfigSchema)
def get_config():
    """Return the active configuration."""
    config = get_config_store().load()
    return ConfigSchema(**config.to_dict())


@app.post("/api/candidates", response_model=CandidatesResponse)
def get_candidates(request: SymbolRequest):
    """Return the candidate paths a symbol name expands to."""
    resolver = _current_resolver()
    return CandidatesResponse(
        symbol_name=request.symbol_name,
        candidates=list(resolver.candidates(request.symbol_name)),
    )


@app.post("/api/locate", response_model=ResolutionSchema)
def locate_symbol(request: SymbolRequest):
    """Find the file a symbol resolves to. The file is never executed."""
    result = _current_resolver().locate(request.symbol_name)
    return resolution_to_schema(result)


@app.get("/api/listing", response_model=ListingResponse)
def get_listing():
    """Return the cached directory listing in match-priority order."""
    listing = _current_resolver().listing()
    entries = [entry_to_schema(e) for e in listing]
    return ListingResponse(root=listing.root, entries=entries, count=len(entries))
