"""Slice model builder: raw trace data → ordered SliceData records.

Malformed values are rejected one record at a time: the record stays in the
sequence as a hidden zero-weight slice and a warning names it, so the rest of
the chart lays out normally.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from funnelarea.engine.context import SliceData

logger = logging.getLogger(__name__)


@dataclass
class SliceModel:
    slices: list[SliceData] = field(default_factory=list)
    v_total: float = 0.0
    warnings: list[str] = field(default_factory=list)

    @property
    def visible(self) -> list[SliceData]:
        return [s for s in self.slices if not s.hidden]


def _coerce_weight(value: Any) -> tuple[float | None, str]:
    """Return (weight, problem). weight is None when the value is rejected."""
    if isinstance(value, bool):
        return None, "is not numeric"
    try:
        v = float(value)
    except (TypeError, ValueError):
        return None, "is not numeric"
    if not math.isfinite(v):
        return None, "is not finite"
    if v < 0:
        return None, "is negative"
    return v, ""


def default_label(i: int, label0: float = 0, dlabel: float = 1) -> str:
    """Label for a record without one: label0 + i * dlabel."""
    v = label0 + i * dlabel
    if float(v).is_integer():
        return str(int(v))
    return f"{v:g}"


def _ratio(num: float, den: float) -> float:
    return num / den if den else 0.0


def build_slices(
    values: Sequence[Any],
    labels: Sequence[str] | None = None,
    text: Sequence[str] | None = None,
    colors: Sequence[str] | None = None,
    hidden_labels: Iterable[str] = (),
    label0: float = 0,
    dlabel: float = 1,
) -> SliceModel:
    """Build one SliceData per value, in source order."""
    model = SliceModel()
    hidden_set = {str(h) for h in hidden_labels}

    for i, raw in enumerate(values):
        weight, problem = _coerce_weight(raw)
        if labels is not None and i < len(labels) and labels[i] is not None:
            label = str(labels[i])
        else:
            label = default_label(i, label0, dlabel)

        if weight is None:
            msg = f"Value at index {i} ({raw!r}) {problem}; slice excluded"
            model.warnings.append(msg)
            logger.warning(msg)
            weight = 0.0
            hidden = True
        else:
            hidden = weight == 0 or label in hidden_set

        model.slices.append(
            SliceData(
                index=i,
                weight=weight,
                label=label,
                hidden=hidden,
                text=text[i] if text is not None and i < len(text) else None,
                color=colors[i] if colors is not None and i < len(colors) else None,
            )
        )

    visible = model.visible
    model.v_total = float(sum(s.weight for s in visible))

    first = visible[0].weight if visible else 0.0
    prev = None
    for n, s in enumerate(visible):
        s.stack_index = len(visible) - 1 - n
        s.percent_total = _ratio(s.weight, model.v_total)
        s.percent_initial = _ratio(s.weight, first)
        s.percent_previous = 1.0 if prev is None else _ratio(s.weight, prev)
        prev = s.weight

    logger.debug(
        "Slice model: %d records, %d visible, total %.4g",
        len(model.slices),
        len(visible),
        model.v_total,
    )
    return model
