"""
Deterministic formatting rules.

This file exists to make the delimiter and quoting policy explicit.
"""

DELIMITERS = ("\n", ",")
JOIN_SEPARATOR = ","  # no space, no trailing separator

# Characters trimmed from each item: ASCII whitespace, line terminators,
# Unicode space separators and the byte-order mark. Control characters
# \x1c-\x1f and \x85 are not whitespace here and stay part of an item.
TRIM_CHARS = (
    "\t\n\v\f\r "
    "\u00a0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000"
    "\ufeff"
)

QUOTE_CHARS = {
    "single": "'",
    "double": '"',
}
DEFAULT_QUOTE_STYLE = "single"

# Upload limits belong to the API layer; the formatter itself has none.
ALLOWED_UPLOAD_EXTENSIONS = (".txt", ".csv")
MAX_UPLOAD_BYTES = 1024 * 1024
OUTPUT_ENCODING = "utf-8"
