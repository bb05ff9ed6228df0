from __future__ import annotations
import html
import json
import math
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

import pandas as pd
from pydantic import BaseModel, Field

from ..schemas import DisplaySchema

PLACEHOLDER = "-"
STAR = "★"
HALF_STAR = "½"
MAX_STARS = 5

RATING_KEYS = {"rating", "totalScore"}
REVIEW_COUNT_KEYS = {"reviewCount", "reviewsCount", "reviews"}

# columns used when the dataset carries no display schema
FALLBACK_COLUMNS = [
    ("name", "Business Name"),
    ("category", "Category"),
    ("rating", "Rating"),
    ("address", "Address"),
]


class CellKind:
    TEXT = "text"
    LINK = "link"
    RATING = "rating"
    REVIEW_COUNT = "review_count"
    COMPOUND = "compound"


class Cell(BaseModel):
    """How to present one record field. ``text`` is always a usable plain-text form."""

    kind: str = CellKind.TEXT
    text: str = PLACEHOLDER
    href: Optional[str] = None
    stars: int = 0
    half_star: bool = False
    value: Optional[float] = None
    note: Optional[str] = None
    lines: List["Cell"] = Field(default_factory=list)


Cell.model_rebuild()


class Column(BaseModel):
    key: str
    label: str


class PreviewTable(BaseModel):
    columns: List[Column] = Field(default_factory=list)
    rows: List[List[Cell]] = Field(default_factory=list)

    @property
    def headers(self) -> List[str]:
        return [c.label for c in self.columns]


def _is_blank(value: Any) -> bool:
    return value is None or value == ""


def _as_float(value: Any) -> float:
    if isinstance(value, bool):
        return float(value)
    try:
        v = float(value)
    except (TypeError, ValueError):
        return 0.0
    return v if math.isfinite(v) else 0.0


def _first(record: Dict[str, Any], *keys: str) -> Any:
    for k in keys:
        v = record.get(k)
        if v:
            return v
    return None


def text_cell(value: Any) -> Cell:
    if _is_blank(value):
        return Cell()
    if isinstance(value, (list, dict)):
        try:
            return Cell(text=json.dumps(value, ensure_ascii=False))
        except (TypeError, ValueError):
            return Cell(text=str(value))
    return Cell(text=str(value))


def link_cell(value: Any, label: str = "Link") -> Cell:
    if _is_blank(value):
        return Cell()
    return Cell(kind=CellKind.LINK, text=label, href=str(value))


def rating_cell(value: Any) -> Cell:
    """
    Star rating: floor(min(v, 5)) full stars, plus a half star when the
    fraction is >= .5 and fewer than five full stars are shown.
    A missing or zero rating renders as the placeholder.
    """
    v = max(_as_float(value), 0.0)
    whole = math.floor(v)
    stars = max(0, min(whole, MAX_STARS))
    half = whole < MAX_STARS and (v % 1) >= 0.5
    if not v:
        return Cell(kind=CellKind.RATING, value=0.0)
    glyphs = STAR * stars + (HALF_STAR if half else "")
    return Cell(
        kind=CellKind.RATING,
        text=f"{glyphs} {v:.1f}".strip(),
        stars=stars,
        half_star=half,
        value=v,
    )


def format_review_count(value: Any) -> str:
    # zero and missing look the same on purpose
    v = _as_float(value)
    if not v:
        return PLACEHOLDER
    return f"({int(round(v)):,})"


def review_count_cell(value: Any) -> Cell:
    return Cell(kind=CellKind.REVIEW_COUNT, text=format_review_count(value), value=_as_float(value) or None)


CellRule = Tuple[Callable[[str, Optional[str]], bool], Callable[[Any], Cell]]

# evaluated in order, first match wins
CELL_RULES: List[CellRule] = [
    (lambda key, fmt: fmt == "link" or key == "url", link_cell),
    (lambda key, fmt: key in RATING_KEYS, rating_cell),
    (lambda key, fmt: key in REVIEW_COUNT_KEYS, review_count_cell),
]


def render_cell(record: Dict[str, Any], key: str, fmt: Optional[str] = None) -> Cell:
    value = record.get(key)
    for matches, build in CELL_RULES:
        if matches(key, fmt):
            return build(value)
    return text_cell(value)


def _fallback_row(record: Dict[str, Any]) -> List[Cell]:
    name = Cell(text=str(_first(record, "businessName", "title") or "N/A"))
    lines = [name]
    if record.get("url"):
        lines.append(link_cell(record["url"], label="View on Map"))
    first = Cell(kind=CellKind.COMPOUND, text=" | ".join(c.text for c in lines), lines=lines)

    rating = rating_cell(_first(record, "rating", "totalScore") or 0)
    reviews = _as_float(_first(record, "reviewCount", "reviewsCount") or 0)
    rating.note = f"({int(round(reviews)):,} reviews)"
    rating.text = f"{rating.text} {rating.note}"

    return [
        first,
        text_cell(_first(record, "category", "categoryName")),
        rating,
        text_cell(_first(record, "address")),
    ]


def build_preview_table(records: Sequence[Dict[str, Any]], schema: Optional[DisplaySchema] = None) -> PreviewTable:
    """
    Project records onto table columns.

    With a schema the columns follow ``schema.fields`` exactly (an empty list
    gives a table without columns). Without one the four fallback columns
    are used.
    """
    records = [r for r in (records or []) if isinstance(r, dict)]

    if schema is None:
        columns = [Column(key=k, label=label) for k, label in FALLBACK_COLUMNS]
        return PreviewTable(columns=columns, rows=[_fallback_row(r) for r in records])

    columns = [Column(key=k, label=schema.label_for(k)) for k in schema.fields]
    formats = {k: schema.format_for(k) for k in schema.fields}
    rows = [[render_cell(r, c.key, formats[c.key]) for c in columns] for r in records]
    return PreviewTable(columns=columns, rows=rows)


# ----------------------------
# Output surfaces
# ----------------------------

def _cell_html(cell: Cell) -> str:
    if cell.kind == CellKind.LINK and cell.href:
        return (
            f'<a href="{html.escape(cell.href, quote=True)}" target="_blank" '
            f'rel="noopener noreferrer">{html.escape(cell.text)} &#8599;</a>'
        )
    if cell.kind == CellKind.RATING and cell.value:
        glyphs = STAR * cell.stars + (HALF_STAR if cell.half_star else "")
        out = f'<span class="stars">{glyphs}</span> <b>{cell.value:.1f}</b>'
    elif cell.kind == CellKind.COMPOUND:
        return "<br/>".join(_cell_html(c) for c in cell.lines)
    elif cell.kind == CellKind.RATING:
        out = PLACEHOLDER
    else:
        out = html.escape(cell.text)
    if cell.note:
        out += f' <small>{html.escape(cell.note)}</small>'
    return out


def table_to_html(table: PreviewTable) -> str:
    head = "".join(f"<th>{html.escape(c.label)}</th>" for c in table.columns)
    body = "".join(
        "<tr>" + "".join(f"<td>{_cell_html(c)}</td>" for c in row) + "</tr>"
        for row in table.rows
    )
    return f'<table class="preview"><thead><tr>{head}</tr></thead><tbody>{body}</tbody></table>'


def table_to_frame(table: PreviewTable) -> pd.DataFrame:
    return pd.DataFrame([[c.text for c in row] for row in table.rows], columns=table.headers)
