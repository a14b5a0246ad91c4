class ConfigurationError(Exception):
    """Raised when the level catalog or config cannot produce a playable session."""


class LevelConfigError(ConfigurationError):
    """Raised when a level asks for an impossible population."""


class UnknownVariantError(ConfigurationError):
    """Raised when a level references a hazard or collectible kind that does not exist."""


__all__ = ["ConfigurationError", "LevelConfigError", "UnknownVariantError"]
