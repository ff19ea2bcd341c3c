"""Expand slash/parenthesis alternative notation used by source fields.

``老師/老师`` is two alternatives; ``這(兒)`` expands to ``這`` and ``這兒``.
"""

from __future__ import annotations

import re

from sinolex.errors import MultifieldError

OPTIONAL_PART_RE = re.compile(r"^([^()]*)\(([^()]*)\)([^()]*)$")


def parse_multifield(field: str) -> list[str]:
    """Decode a multi-value field into its distinct values.

    Args:
        field: Field text such as ``這裡/這(兒)``.

    Returns:
        Values in first-seen order. For a parenthetical component the variant
        without the option comes first; an expanded variant that is already
        present is dropped.

    Raises:
        MultifieldError: If a component is empty or repeats an earlier
            component, holds more than one parenthetical, or has an empty
            option or nothing outside it.
    """

    values: list[str] = []
    components: set[str] = set()

    def add(value: str) -> None:
        if value not in values:
            values.append(value)

    for component in field.split("/"):
        component = component.strip()
        if component in components:
            raise MultifieldError(f"Duplicate component '{component}' in multifield '{field}'.")
        if component:
            components.add(component)

        if "(" not in component and ")" not in component:
            if not component:
                raise MultifieldError(f"Empty component in multifield '{field}'.")
            add(component)
            continue

        match = OPTIONAL_PART_RE.match(component)
        if not match:
            raise MultifieldError(f"Invalid parenthetical in multifield '{field}'.")
        prefix, option, suffix = (part.strip() for part in match.groups())
        if not option:
            raise MultifieldError(f"Empty optional part in multifield '{field}'.")
        if not prefix and not suffix:
            raise MultifieldError(f"Optional part without remainder in multifield '{field}'.")
        add(prefix + suffix)
        add(prefix + option + suffix)

    return values
