"""
Document assembly.

Layout of an encoded document:
- BOM (when useBom)
- title line followed by a blank line (when showTitle)
- header line (when headers are configured)
- one line per record, in input order

Every line ends with CRLF.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

from . import rules
from .errors import EmptyDocument
from .formatting import Record, build_header, build_row
from .loaders import load_records
from .models import CsvOptions, resolve_options
from .sinks import Sink

logger = logging.getLogger(__name__)


def encode(records: Sequence[Record], options: CsvOptions) -> str:
    """
    Encode records into CSV text.

    Raises EmptyDocument when there is no title, no header and no record.
    A document holding only a title or only a header is returned as is.
    """
    header = build_header(options.headers, options.field_separator)
    if not records and header is None and not options.show_title:
        logger.warning("Nothing to encode: no title, no headers and no records")
        raise EmptyDocument("no title, no headers and no records to encode")

    parts: list[str] = []
    if options.use_bom:
        parts.append(rules.BOM)
    if options.show_title:
        parts.append(options.title + rules.EOL + rules.EOL)
    if header is not None:
        parts.append(header + rules.EOL)
    for record in records:
        parts.append(build_row(record, options) + rules.EOL)

    text = "".join(parts)
    logger.debug(
        "Encoded %d records (title=%s, header=%s, bom=%s) into %d chars",
        len(records),
        options.show_title,
        header is not None,
        options.use_bom,
        len(text),
    )
    return text


def suggested_filename(name: str) -> str:
    """Download name: spaces become underscores and the .csv suffix is appended."""
    return name.replace(" ", "_") + rules.CSV_SUFFIX


class CsvExport:
    """
    One export: resolves options, encodes the data and hands the result to a sink.

    data may be a sequence of records or JSON text holding an array of objects.
    The filename argument replaces the filename option. With noDownload set,
    or without a sink, the document is only kept for get_csv_data().
    """

    def __init__(
        self,
        data: Sequence[Record] | str,
        filename: str,
        options: Optional[Mapping[str, Any] | CsvOptions] = None,
        sink: Optional[Sink] = None,
    ):
        self.records = load_records(data) if isinstance(data, str) else list(data)
        resolved = resolve_options(options)
        if filename:
            resolved = resolved.model_copy(update={"filename": filename})
        self.options = resolved
        self.download_name = suggested_filename(self.options.filename)
        self._csv = encode(self.records, self.options)

        if self.options.no_download:
            return
        if sink is None:
            logger.debug("No sink given for %s, keeping document in memory", self.download_name)
            return
        sink.deliver(self._csv, self.download_name, rules.CSV_MEDIA_TYPE)
        logger.info("Delivered %s (%d records)", self.download_name, len(self.records))

    def get_csv_data(self) -> str:
        return self._csv
