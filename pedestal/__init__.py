"""Plugin host building blocks: in-memory plugin registry, licensing, configuration and wire formats."""

__version__ = "0.1.0"

__all__ = [
    "config",
    "control",
    "enmap",
    "hostinfo",
    "jobs",
    "license",
    "pagebuffer",
    "paths",
    "pluginbase",
    "plugininfo",
    "queryfilter",
    "registry",
    "response",
    "status",
    "timefmt",
]