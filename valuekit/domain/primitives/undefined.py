"""The UNDEFINED sentinel: the "absent" value of a value graph.

``None`` is the null literal and is always rendered. ``UNDEFINED`` marks a
value that is not there at all:

- as a mapping field value it is omitted from canonical output and
  ignored by equality,
- as a patch value it means "no change",
- inside a sequence it keeps its position and renders as null.
"""

from __future__ import annotations

from typing import Any, Final


class UndefinedType:
    """Type of the UNDEFINED singleton.

    Only one instance ever exists; copying or pickling returns it.
    """

    _instance: "UndefinedType | None" = None

    def __new__(cls) -> "UndefinedType":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> "UndefinedType":
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> "UndefinedType":
        return self

    def __reduce__(self) -> str:
        return "UNDEFINED"


UNDEFINED: Final = UndefinedType()
