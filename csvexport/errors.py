from __future__ import annotations


class CsvExportError(Exception):
    """Base class for all export failures."""


class InvalidConfiguration(CsvExportError):
    """Options could not be resolved into a configuration."""


class MalformedInput(CsvExportError):
    """Input text could not be turned into records."""


class EmptyDocument(CsvExportError):
    """Nothing to write: no title, no header and no records."""
