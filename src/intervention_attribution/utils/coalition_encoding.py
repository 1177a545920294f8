from __future__ import annotations

import json
from typing import Any, FrozenSet, Iterator, List, Sequence

EMPTY_LABEL = "∅ (empty)"
_EMPTY_MARKERS = {"", "∅", "{}", "()", "[]", EMPTY_LABEL}


def iter_coalitions(components: Sequence[str]) -> Iterator[FrozenSet[str]]:
    """Yield every subset of ``components`` exactly once.

    Subsets follow binary counting over a mask of ``len(components)`` bits,
    bit ``i`` selecting ``components[i]``. The empty set comes first and the
    full set last.
    """
    members = list(components)
    for mask in range(1 << len(members)):
        yield _from_bitmask(mask, members)


def all_coalitions(components: Sequence[str]) -> List[FrozenSet[str]]:
    return list(iter_coalitions(components))


def normalize_coalition(
    value: Any, universe: Sequence[str] | None = None
) -> FrozenSet[str]:
    if hasattr(value, "tolist"):
        # numpy scalars and arrays, e.g. from parquet
        value = value.tolist()
    if isinstance(value, (frozenset, set, list, tuple)):
        return frozenset(str(x) for x in value)
    if isinstance(value, bool):
        msg = f"Cannot interpret {value!r} as a coalition."
        raise ValueError(msg)
    if isinstance(value, int):
        if universe is None:
            msg = "Bitmask coalitions require an ordered component universe."
            raise ValueError(msg)
        if value < 0 or value >= 1 << len(universe):
            msg = f"Bitmask {value} is out of range for {len(universe)} components."
            raise ValueError(msg)
        return _from_bitmask(value, list(universe))
    if isinstance(value, str):
        s = value.strip()
        if s in _EMPTY_MARKERS:
            return frozenset()
        if s.startswith("[") and s.endswith("]"):
            parsed = json.loads(s)
            if isinstance(parsed, list):
                return frozenset(str(x) for x in parsed)
        if s[0] in "{(" and s[-1] in "})":
            s = s[1:-1]
        sep = "+" if "+" in s else ","
        parts = (p.strip().strip("'").strip('"') for p in s.split(sep))
        return frozenset(p for p in parts if p)
    if value is None:
        return frozenset()
    msg = f"Cannot interpret {value!r} as a coalition."
    raise ValueError(msg)


def format_coalition(coalition: FrozenSet[str]) -> str:
    """Short label: initials joined by ``+`` (e.g. ``R+A``)."""
    if not coalition:
        return EMPTY_LABEL
    return "+".join(c[:1].upper() for c in sorted(coalition))


def coalition_key(coalition: FrozenSet[str]) -> str:
    """Unambiguous, order-stable text form (``{A,B}``) used in tables."""
    return "{" + ",".join(sorted(coalition)) + "}"


def _from_bitmask(mask: int, members: Sequence[str]) -> FrozenSet[str]:
    picked: list[str] = []
    i = 0
    while mask:
        if mask & 1:
            picked.append(members[i])
        mask >>= 1
        i += 1
    return frozenset(picked)
