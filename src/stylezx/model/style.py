"""Style literal types and the compiled rule record."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

# A style literal is a closed variant: scalar or string-keyed mapping of literals.
StyleLiteral = Union[str, int, float, bool, None, "StyleObject"]
StyleObject = dict[str, StyleLiteral]


def stringify(value: object) -> str:
    """Render a scalar the way it reads in CSS and JS source.

    Booleans and None use their JavaScript spelling and integral floats drop
    the trailing ``.0``.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    return str(value)


@dataclass(frozen=True)
class CompiledRule:
    """CSS produced for one class identity.

    ``primary`` is the block for the class itself; ``siblings`` are the flat
    blocks generated from nested-selector and at-rule keys, in key order.
    """

    identity: str
    class_name: str
    primary: str
    siblings: tuple[str, ...] = ()

    @property
    def css(self) -> str:
        return "\n".join((self.primary, *self.siblings))
