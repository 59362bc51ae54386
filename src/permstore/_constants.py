"""Internal constants shared across the library."""

DEFAULT_SEPARATOR = ":"
ENV_PREFIX = "PERMSTORE_"

# Placeholder emitted in logs instead of values the node cannot read.
REDACTED = "<redacted>"

# Long spellings accepted wherever a permission is parsed.
PERMISSION_ALIASES: dict[str, str] = {
    "read": "r",
    "write": "w",
    "read-write": "rw",
    "readwrite": "rw",
    "read_write": "rw",
}
