class ColorSaverError(Exception):
    pass


class ValidationError(ColorSaverError, ValueError):
    """Bad user input: malformed color text, empty name, nothing to save."""


class PersistenceError(ColorSaverError):
    """The blob store could not be read or written. Nothing was applied."""


class DatasetError(ColorSaverError):
    """The bundled palette data is malformed. Not recoverable at runtime."""
