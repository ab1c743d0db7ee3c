"""
Table layout for the PDF writer.

A table is described by one header descriptor per column and a list of rows.
Each row may carry sub-rows which are laid out directly beneath it, using the
same column geometry. Every line of the table starts with a small blank
indentation cell.

Header descriptors accept either the camelCase keys used by templates
(``backgroundColor``, ``textColor``) or snake_case keys, or a ``TableHeader``.
"""

import logging
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from .exceptions import TableLayoutError

logger = logging.getLogger(__name__)

RGBColor = Tuple[int, int, int]

ALIGNMENTS = ('C', 'L', 'R')
BORDER_SIDES = ('B', 'L', 'R', 'T')
DEFAULT_ALIGNMENT = 'L'


@dataclass
class TableHeader:
    """Geometry, decoration and caption of a single table column."""
    height: Optional[float] = None
    width: float = 0
    border: Union[int, str] = 0
    alignment: str = DEFAULT_ALIGNMENT
    background_color: Optional[RGBColor] = None
    text_color: Optional[RGBColor] = None
    value: Any = ''

    @property
    def fill(self) -> bool:
        return self.background_color is not None


def parse_color(value: Any, label: str) -> RGBColor:
    """Parse an ``"r,g,b"`` string or a 3-sequence into an RGB triplet."""
    if isinstance(value, str):
        parts = value.split(',')
    elif isinstance(value, Sequence):
        parts = list(value)
    else:
        raise TableLayoutError(f"{label} is invalid")

    if len(parts) != 3:
        raise TableLayoutError(f"{label} is invalid")

    color = []
    for part in parts:
        try:
            component = int(str(part).strip())
        except ValueError:
            raise TableLayoutError(f"{label} is invalid") from None
        if component < 0 or component > 255:
            raise TableLayoutError(f"{label} is invalid")
        color.append(component)

    return tuple(color)


def normalize_alignment(alignment: Any) -> str:
    if not isinstance(alignment, str) or not alignment:
        return DEFAULT_ALIGNMENT
    alignment = alignment[0].upper()
    return alignment if alignment in ALIGNMENTS else DEFAULT_ALIGNMENT


def normalize_border(border: Any) -> Union[int, str]:
    """Return 0/1 for integer borders, a single side letter, or 1 for a full frame."""
    if border is None:
        return 0
    if isinstance(border, int):
        return 1 if border else 0
    side = str(border)[:1].upper()
    return side if side in BORDER_SIDES else 1


def _to_number(value: Any, message: str) -> float:
    if isinstance(value, bool):
        raise TableLayoutError(message)
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise TableLayoutError(message) from None
    if number < 0:
        raise TableLayoutError(message)
    return number


def _header_field(header: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in header:
            return header[key]
    return None


def normalize_header(header: Union[TableHeader, Mapping[str, Any]], index: int) -> TableHeader:
    """Validate a header descriptor and return a normalized ``TableHeader``."""
    if isinstance(header, TableHeader):
        raw = header
    elif isinstance(header, Mapping):
        raw = TableHeader(
            height=header.get('height'),
            width=header.get('width') or 0,
            border=header.get('border'),
            alignment=header.get('alignment'),
            background_color=_header_field(header, 'backgroundColor', 'background_color'),
            text_color=_header_field(header, 'textColor', 'text_color'),
            value=header.get('value'),
        )
    else:
        raise TableLayoutError(f'Table header "{index}" must be a mapping or TableHeader')

    if raw.height is None:
        raise TableLayoutError(f'Height value is missing for table header "{index}"')
    height = _to_number(raw.height, f'Height value is invalid for table header "{index}"')
    width = _to_number(raw.width or 0, f'Width value is invalid for table header "{index}"')

    background_color = None
    text_color = None
    if raw.background_color is not None:
        background_color = parse_color(raw.background_color, f'Background color for table header "{index}"')
        if raw.text_color is None:
            raise TableLayoutError(f'Text color is missing for background coloured table header "{index}"')
        text_color = parse_color(raw.text_color, f'Text color for table header "{index}"')

    return replace(
        raw,
        height=height,
        width=width,
        border=normalize_border(raw.border),
        alignment=normalize_alignment(raw.alignment),
        background_color=background_color,
        text_color=text_color,
        value='' if raw.value is None else raw.value,
    )


def _sub_rows_for(sub_table_data: Any, row_index: int) -> Sequence[Sequence[Any]]:
    if not sub_table_data:
        return ()
    if isinstance(sub_table_data, Mapping):
        return sub_table_data.get(row_index) or ()
    if row_index < len(sub_table_data):
        return sub_table_data[row_index] or ()
    return ()


def _check_row(row: Any, column_count: int, message: str) -> None:
    if isinstance(row, (str, bytes)) or not isinstance(row, Sequence):
        raise TableLayoutError(f"{message} is not a sequence of cells.")
    if len(row) != column_count:
        raise TableLayoutError(f"{message} does not match amount of table heads.")


def validate_table_data(column_count: int, table_data: Sequence[Sequence[Any]],
                        sub_table_data: Any = None) -> None:
    """Ensure every row and sub-row has exactly one cell per column."""
    for index, row in enumerate(table_data):
        _check_row(row, column_count, f'Data of table data index "{index}"')
        for sub_index, sub_row in enumerate(_sub_rows_for(sub_table_data, index)):
            _check_row(sub_row, column_count,
                       f'Sub data "{sub_index}" of table data index "{index}"')


class TableRenderer:
    """Emits a table as a grid of engine cells."""

    def __init__(self, pdf, format_text: Callable[[Any], str],
                 default_background_color: RGBColor = (255, 255, 255),
                 default_text_color: RGBColor = (0, 0, 0),
                 indent: float = 1, sub_row_indent: Optional[float] = None):
        self.pdf = pdf
        self.format_text = format_text
        self.default_background_color = tuple(default_background_color)
        self.default_text_color = tuple(default_text_color)
        self.indent = indent
        self.sub_row_indent = indent if sub_row_indent is None else sub_row_indent

    def render(self, table_header: Sequence[Union[TableHeader, Dict[str, Any]]],
               table_data: Sequence[Sequence[Any]] = (),
               sub_table_data: Any = None) -> List[TableHeader]:
        """Validate the table and draw it at the current position.

        Returns:
            List[TableHeader]: the normalized header descriptors
        """
        if not table_header:
            raise TableLayoutError("Table header must define at least one column")

        table_data = list(table_data or ())
        validate_table_data(len(table_header), table_data, sub_table_data)
        headers = [normalize_header(header, index) for index, header in enumerate(table_header)]
        line_height = max(header.height for header in headers)

        self._draw_header(headers, line_height)

        self._apply_default_colors()
        sub_row_count = 0
        for index, row in enumerate(table_data):
            self._draw_line(headers, row, self.indent, line_height)
            for sub_row in _sub_rows_for(sub_table_data, index):
                self._draw_line(headers, sub_row, self.sub_row_indent, line_height)
                sub_row_count += 1

        logger.debug(f"Rendered table with {len(headers)} columns, {len(table_data)} rows "
                     f"and {sub_row_count} sub-rows")
        return headers

    def _draw_header(self, headers: List[TableHeader], line_height: float) -> None:
        self._indent(self.indent, line_height)
        for header in headers:
            if header.fill:
                self.pdf.set_fill_color(*header.background_color)
                self.pdf.set_text_color(*header.text_color)
            else:
                self._apply_default_colors()
            self.pdf.cell(header.width, header.height, self.format_text(header.value), header.border,
                          align=header.alignment, fill=header.fill)
        self.pdf.ln(line_height)

    def _draw_line(self, headers: List[TableHeader], cells: Sequence[Any],
                   indent: float, line_height: float) -> None:
        self._indent(indent, line_height)
        for header, value in zip(headers, cells):
            self.pdf.cell(header.width, header.height, self.format_text(value), header.border,
                          align=header.alignment)
        self.pdf.ln(line_height)

    def _indent(self, width: float, line_height: float) -> None:
        if width:
            self.pdf.cell(width, line_height)

    def _apply_default_colors(self) -> None:
        self.pdf.set_fill_color(*self.default_background_color)
        self.pdf.set_text_color(*self.default_text_color)
