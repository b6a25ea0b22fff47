from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from . import rules
from .errors import InvalidConfiguration


class CsvOptions(BaseModel):
    """
    Resolved export configuration.

    Accepts the camelCase option names used by export callers as well as the
    snake_case field names. Instances are frozen once validated.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    filename: str = Field(default=rules.DEFAULT_FILENAME)
    field_separator: str = Field(default=rules.DEFAULT_FIELD_SEPARATOR, alias="fieldSeparator")
    quote_strings: str = Field(default=rules.DEFAULT_QUOTE, alias="quoteStrings")
    decimal_separator: str = Field(default=rules.DEFAULT_DECIMAL_SEPARATOR, alias="decimalseparator")
    show_labels: bool = Field(default=rules.DEFAULT_SHOW_LABELS, alias="showLabels")
    show_title: bool = Field(default=rules.DEFAULT_SHOW_TITLE, alias="showTitle")
    title: str = Field(default=rules.DEFAULT_TITLE)
    use_bom: bool = Field(default=rules.DEFAULT_USE_BOM, alias="useBom")
    headers: Tuple[str, ...] = Field(default=rules.DEFAULT_HEADERS)
    use_header: bool = Field(default=rules.DEFAULT_USE_HEADER, alias="useHeader")
    no_download: bool = Field(default=rules.DEFAULT_NO_DOWNLOAD, alias="noDownload")
    null_to_empty_string: bool = Field(
        default=rules.DEFAULT_NULL_TO_EMPTY_STRING, alias="nullToEmptyString"
    )

    @property
    def quote_char(self) -> str:
        # Used for escaping and for forced wrapping when quoteStrings is empty
        return self.quote_strings or rules.DEFAULT_QUOTE

    @property
    def selects_by_header(self) -> bool:
        return self.use_header and len(self.headers) > 0


def resolve_options(overrides: Optional[Mapping[str, Any] | CsvOptions] = None) -> CsvOptions:
    """
    Fill unset options from the defaults.

    Raises InvalidConfiguration for non-mapping input, unknown option names
    or values of the wrong type.
    """
    if overrides is None:
        return CsvOptions()
    if isinstance(overrides, CsvOptions):
        return overrides
    if not isinstance(overrides, Mapping):
        raise InvalidConfiguration(
            f"options must be a mapping, got {type(overrides).__name__}"
        )
    try:
        return CsvOptions.model_validate(dict(overrides))
    except ValidationError as exc:
        raise InvalidConfiguration(str(exc)) from exc


class ExportRequest(BaseModel):
    records: List[Dict[str, Any]] = Field(default_factory=list)
    filename: str = Field(default=rules.DEFAULT_FILENAME)
    options: Dict[str, Any] = Field(default_factory=dict)


class EncodedCsv(BaseModel):
    sha256: str
    encoding: str = Field(default="utf-8")
    content_b64: str


class ExportSummary(BaseModel):
    rows: int = 0
    columns: Optional[int] = Field(default=None, examples=[None])
    bom: bool = True
    title: bool = False
    header: bool = False


class ExportResponse(BaseModel):
    csv: EncodedCsv
    summary: ExportSummary
    filename: str


class HealthResponse(BaseModel):
    ok: bool = True
