"""
pump_decoder.exceptions

Exceptions raised by the pump response decoders.

Only UnsupportedCommandError is meant to abort a caller's processing; the other
decode failures (bad clock values, unknown model codes, unrecognized flag bytes)
are reported through the decoded value itself and never raise.
"""


class PumpDecodeError(Exception):
    """Base class for all pump decoding errors."""


class UnsupportedCommandError(PumpDecodeError):
    """Raised when the router has no decoder for a command type."""

    def __init__(self, command_type):
        self.command_type = command_type
        super().__init__(f"Unsupported command type: {command_type}")


class PayloadTooShortError(PumpDecodeError):
    """Raised when a payload ends before an offset the decoder has to read."""

    def __init__(self, what: str, required: int, actual: int):
        self.required = required
        self.actual = actual
        super().__init__(f"{what}: payload needs at least {required} bytes, got {actual}")


class SettingsLayoutError(PumpDecodeError):
    """Raised when the settings layout data is malformed."""
