"""Exception hierarchy for appointment statistics."""


class StatsError(Exception):
    """Base exception for appointment statistics."""

    pass


class RecordSourceError(StatsError):
    """Record source could not be queried or loaded."""

    pass


class UnsupportedFormatError(StatsError):
    """Record file format not supported."""

    pass


class LabelCatalogError(StatsError):
    """Label catalog could not be parsed."""

    pass
