"""
Fixed encoding rules and option defaults.

Every document produced by the encoder uses these line endings and markers.
"""

EOL = "\r\n"
BOM = "\ufeff"

CSV_MEDIA_TYPE = "text/csv;charset=utf8"
CSV_SUFFIX = ".csv"

DEFAULT_FIELD_SEPARATOR = ","
DEFAULT_DECIMAL_SEPARATOR = "."
LOCALE_DECIMAL_SEPARATOR = "locale"
DEFAULT_QUOTE = '"'
DEFAULT_SHOW_TITLE = False
DEFAULT_TITLE = "My Report"
DEFAULT_FILENAME = "mycsv.csv"
DEFAULT_SHOW_LABELS = False
DEFAULT_USE_BOM = True
DEFAULT_HEADERS: tuple[str, ...] = ()
DEFAULT_USE_HEADER = False
DEFAULT_NO_DOWNLOAD = False
DEFAULT_NULL_TO_EMPTY_STRING = False

# Default textual forms for values with no digits to show
NULL_TEXT = "null"
TRUE_TEXT = "TRUE"
FALSE_TEXT = "FALSE"
