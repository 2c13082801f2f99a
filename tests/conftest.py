#
# Pytest Fixtures
#

# Standard library -----------------------------------------------------------------------------------------------------
import re
from typing import Callable, NamedTuple

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

_PARENTHETICAL = re.compile(
    r"^(?P<sign>-?)\((?P<value>\S+) (?P<pm>\S+) (?P<error>\S+)\)"
    r"(?: (?P<mult>\S) 10\^(?:(?P<pos>\d+)|\((?P<neg>-\d+)\)))?$"
)
_COMPACT = re.compile(
    r"^(?P<sign>-?)(?P<value>[^(\s]+)\((?P<error>\d+)\)"
    r"(?: (?P<mult>\S) 10\^(?:(?P<pos>\d+)|\((?P<neg>-\d+)\)))?$"
)


class Shown(NamedTuple):
    negative: bool
    value: str
    error: str
    power: int


def _parse(pattern: re.Pattern, text: str) -> Shown:
    match = pattern.match(text)
    assert match, f"unexpected display grammar: {text!r}"
    power = match["pos"] or match["neg"] or "0"
    return Shown(negative=match["sign"] == "-", value=match["value"], error=match["error"], power=int(power))


# Fixtures -------------------------------------------------------------------------------------------------------------

@pytest.fixture
def parse_parenthetical() -> Callable[[str], Shown]:
    """Split a "-(value ± error) * 10^(-N)" display into its parts."""

    def _parse_parenthetical(text: str) -> Shown:
        return _parse(_PARENTHETICAL, text)

    return _parse_parenthetical


@pytest.fixture
def parse_compact() -> Callable[[str], Shown]:
    """Split a "-value(error) * 10^N" display into its parts."""

    def _parse_compact(text: str) -> Shown:
        return _parse(_COMPACT, text)

    return _parse_compact
