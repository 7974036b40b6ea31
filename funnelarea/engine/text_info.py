"""Text / hover info content for a slice. Placement is the renderer's business."""

from __future__ import annotations

from funnelarea.engine.context import SliceData

TEXT_INFO_FLAGS = (
    "label",
    "text",
    "value",
    "percent initial",
    "percent previous",
    "percent total",
)


def format_percent(fraction: float) -> str:
    """0.3333 → '33.3%', 0.5 → '50%'."""
    s = f"{fraction * 100:.1f}".rstrip("0").rstrip(".")
    return f"{s}%"


def format_value(value: float) -> str:
    return f"{value:g}"


def parse_flags(flags: str) -> list[str]:
    """Split a '+'-joined flag string, validating each flag."""
    flags = flags.strip()
    if flags in ("", "none"):
        return []
    parts = [p.strip() for p in flags.split("+")]
    unknown = [p for p in parts if p not in TEXT_INFO_FLAGS]
    if unknown:
        raise ValueError(f"Unknown text info flag(s): {', '.join(unknown)}")
    return parts


def format_text_info(s: SliceData, flags: str = "label+value") -> str:
    parts: list[str] = []
    for flag in parse_flags(flags):
        if flag == "label":
            parts.append(s.label)
        elif flag == "text":
            if s.text:
                parts.append(s.text)
        elif flag == "value":
            parts.append(format_value(s.weight))
        elif flag == "percent initial":
            parts.append(format_percent(s.percent_initial))
        elif flag == "percent previous":
            parts.append(format_percent(s.percent_previous))
        elif flag == "percent total":
            parts.append(format_percent(s.percent_total))
    return "<br>".join(parts)
