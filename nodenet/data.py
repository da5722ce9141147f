"""Built-in truth-table datasets used by the demo driver."""

from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

from .core.types import Sample

_TABLES: Dict[str, Tuple[Tuple[float, float, float], ...]] = {
    "xor": ((0, 0, 0), (1, 1, 0), (0, 1, 1), (1, 0, 1)),
    "and": ((0, 0, 0), (1, 1, 1), (0, 1, 0), (1, 0, 0)),
    "or": ((0, 0, 0), (1, 1, 1), (0, 1, 1), (1, 0, 1)),
}


def names() -> List[str]:
    return sorted(_TABLES)


def from_rows(rows: Sequence[Sequence[float]], input_dim: int) -> List[Sample]:
    """Split each row into ``input_dim`` inputs followed by the targets."""

    samples: List[Sample] = []
    for pos, row in enumerate(rows):
        if len(row) <= input_dim:
            raise ValueError(
                f"Row {pos} has {len(row)} values; expected more than input_dim={input_dim}"
            )
        values = tuple(float(v) for v in row)
        samples.append(Sample(inputs=values[:input_dim], targets=values[input_dim:]))
    return samples


def load(name: str) -> List[Sample]:
    key = name.lower()
    if key not in _TABLES:
        raise ValueError(f"Unsupported dataset: {name}. Available: {', '.join(names())}")
    return from_rows(_TABLES[key], input_dim=2)


__all__ = ["from_rows", "load", "names"]
