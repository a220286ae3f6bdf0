# src/realmgen/errors.py


class RealmGenError(Exception):
    """Base class for errors raised by the generators."""


class WorldGenerationError(RealmGenError):
    """The finished world cannot host a session (e.g. it has no towns)."""


class SeedDerivationError(RealmGenError):
    """No usable town seed can be derived from a save.

    The message is meant to be shown to the player as-is.
    """


class ConfigError(RealmGenError):
    pass


class TileError(RealmGenError, ValueError):
    pass
