"""sitepkg - Shared option and configuration layer for site administration utilities."""

__version__ = "1.0.0"
__description__ = "Shared option and configuration layer for site administration utilities"

# Import modules only when needed to keep startup light for small utilities
__all__ = [
    "SitePackage",
    "OptionRegistry",
    "PackageSettings",
    "OptionKind",
]


def __getattr__(name: str):
    """Lazy import of the public API."""
    if name == "SitePackage":
        from .site import SitePackage
        return SitePackage
    elif name == "OptionRegistry":
        from .core.config.registry import OptionRegistry
        return OptionRegistry
    elif name == "PackageSettings":
        from .core.config.package_settings import PackageSettings
        return PackageSettings
    elif name == "OptionKind":
        from .core.types import OptionKind
        return OptionKind
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
