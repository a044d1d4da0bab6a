"""Sample constrained types, used by the CLI examples and the test suite."""

from dataclasses import dataclass
from typing import Annotated

from validforge.metadata import MaxLength, Range, Required, constrained


@constrained
@dataclass
class Device:
    """A registered device."""

    id: Annotated[str, Required("ID Property Requires Value")] = ""
    code: Annotated[int, Range(10, 100, "Code Value Must Be Within 10-100")] = 0
    description: Annotated[str, MaxLength(100, "Max of 100 Charcters are allowed")] = ""
