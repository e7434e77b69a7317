"""
Parser settings and constants.
"""


class ParserSettings:
    """
    Options that tune how strictly a document is checked. The defaults decode
    any well-formed glTF 2.0 JSON document.
    """

    # --- Class Variables (Constants and Static Defaults) ---
    HTTP_TIMEOUT: float = 30.0  # seconds
    """Timeout used by the loader when fetching a document over http(s)."""

    VALIDATE_BYTE_RANGES: bool = True
    """Whether buffer views and accessors must fit inside their parent ranges."""

    REJECT_UNSUPPORTED_EXTENSIONS: bool = False
    """Whether an entry of extensionsRequired outside supported_extensions is an error."""

    # --- Instance Variables ---
    def __init__(self,
                 validate_byte_ranges: bool | None = None,
                 reject_unsupported_extensions: bool | None = None,
                 supported_extensions=()):
        self.validate_byte_ranges: bool = (self.VALIDATE_BYTE_RANGES
                                           if validate_byte_ranges is None else validate_byte_ranges)
        """Check BufferView and Accessor byte ranges while decoding."""

        self.reject_unsupported_extensions: bool = (self.REJECT_UNSUPPORTED_EXTENSIONS
                                                    if reject_unsupported_extensions is None
                                                    else reject_unsupported_extensions)
        """Fail on required extensions the caller cannot handle."""

        self.supported_extensions: frozenset[str] = frozenset(supported_extensions)
        """Extension names the consumer of the parsed graph understands."""

    def unsupported_required(self, required: list[str]) -> list[str]:
        """Returns the entries of ``required`` that are not supported, in document order."""
        return [name for name in required if name not in self.supported_extensions]

    def __repr__(self) -> str:
        return (f"ParserSettings(validate_byte_ranges={self.validate_byte_ranges}, "
                f"reject_unsupported_extensions={self.reject_unsupported_extensions}, "
                f"supported_extensions={sorted(self.supported_extensions)})")
