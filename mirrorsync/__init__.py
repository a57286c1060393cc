"""mirrorsync - rsync mirror job executor.

Turns declarative mirror configurations into rsync invocations, keeps each
job single-flight and reports the transferred data size of the last run.
"""

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "RsyncConfig",
    "CmdConfig",
    "RsyncProvider",
    "CmdProvider",
    "MirrorProvider",
    "ProviderType",
    "AlreadyRunningError",
    "CommandError",
    "build_rsync_options",
]


def __getattr__(name: str):
    """Lazy import to avoid loading dependencies during setup."""
    if name in ("RsyncConfig", "CmdConfig", "ProviderType"):
        from mirrorsync.config import schema

        return getattr(schema, name)
    if name in ("RsyncProvider", "build_rsync_options"):
        from mirrorsync.provider import rsync

        return getattr(rsync, name)
    if name == "CmdProvider":
        from mirrorsync.provider.command import CmdProvider

        return CmdProvider
    if name == "MirrorProvider":
        from mirrorsync.provider.base import MirrorProvider

        return MirrorProvider
    if name in ("AlreadyRunningError", "CommandError"):
        from mirrorsync.provider import errors

        return getattr(errors, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
