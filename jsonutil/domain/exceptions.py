"""Duration parsing errors"""

import json


def _quote(value: object) -> str:
    """Quote strings with escapes so control characters stay visible"""
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    return f'"{value}"'


class DurationError(ValueError):
    """Base class for errors raised while reading duration text"""


class MalformedDurationTextError(DurationError):
    """Raised when a string does not match the duration grammar"""

    def __init__(self, text: object) -> None:
        super().__init__(f"not a valid duration string: {_quote(text)}")
        self.text = text


class UnrecognizedUnitError(DurationError):
    """Raised when a matched unit token has no millisecond factor.

    The grammar only admits known units, so reaching this means the grammar
    and the unit table have drifted apart.
    """

    def __init__(self, unit: str) -> None:
        super().__init__(f"invalid time unit in duration string: {_quote(unit)}")
        self.unit = unit
