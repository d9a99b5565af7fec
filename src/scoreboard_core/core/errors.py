"""
Error taxonomy for the scoreboard core.

Plugin errors are raised by the registry, FetchError (core.http) by the
provider clients and adapters. ScoreAmbiguityWarning is a Python warning,
emitted by the score-change detectors and never raised.
"""


class ScoreboardError(Exception):
    """Base exception for all scoreboard core errors."""
    pass


class PluginError(ScoreboardError):
    """Base exception for plugin registry errors."""

    def __init__(self, plugin_id: str, message: str):
        super().__init__(message)
        self.plugin_id = plugin_id
        self.message = message


class UnknownPluginError(PluginError):
    """Raised when an id that was never registered is requested."""

    def __init__(self, plugin_id: str):
        super().__init__(plugin_id, f"Plugin {plugin_id!r} not found in registry")


class DuplicatePluginError(PluginError):
    """Raised when a manifest id is registered twice."""

    def __init__(self, plugin_id: str):
        super().__init__(plugin_id, f"Plugin {plugin_id!r} already registered")


class PluginLoadError(PluginError):
    """Raised when importing, validating or running on_load fails."""
    pass


class ActivationError(PluginError):
    """Raised when a loaded plugin's on_activate hook fails."""
    pass


class ScoreAmbiguityWarning(UserWarning):
    """Both scores moved between two polls; the result is a best guess."""
    pass
