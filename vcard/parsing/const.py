"""Constants for vcard parsing library."""

FOLD = r"\r?\n[ \t]"
FOLD_LEN = 75
FOLD_INDENT = " "
CRLF = "\r\n"
ATTR_BEGIN = "BEGIN"
ATTR_END = "END"
ATTR_VERSION = "VERSION"
ATTR_AGENT = "AGENT"
COMPONENT_VCARD = "VCARD"
