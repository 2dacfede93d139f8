"""Worksheet layout and formatting for the organization/task pivot.

The steps run in a fixed order because each one relies on the geometry fixed
by the previous step:

1. columns: three fixed columns followed by one column per task title,
2. rows: header row then one row per organization,
3. widths: derived from header and cell text lengths,
4. title: a banner row inserted above the header and merged across,
5. styles: fonts, heights, alignment and the website column width override.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Mapping, Sequence

from openpyxl.cell.cell import MergedCell
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from reporting.config import ReportSettings
from reporting.rows import CellState, CellStyle, ReportRow, build_cell_styles
from reporting.schema import ColumnSchema


INDEX_KEY = "index"
ORGANIZATION_KEY = "orgName"
WEBSITES_KEY = "webData"
FIXED_COLUMN_COUNT = 3

# Header position before the title banner is inserted above it.
UNSHIFTED_HEADER_ROW = 1
TITLE_ROW = 1
HEADER_ROW = 2
FIRST_DATA_ROW = 3

THIN = Side(style="thin")
THIN_BORDER = Border(left=THIN, right=THIN, top=THIN, bottom=THIN)
CENTERED = Alignment(vertical="center", horizontal="center")
CENTERED_WRAPPED = Alignment(vertical="center", horizontal="center", wrap_text=True)


@dataclass(frozen=True)
class ColumnSpec:
    key: str
    header: str
    position: int

    @property
    def letter(self) -> str:
        return get_column_letter(self.position)


def materialize_columns(schema: ColumnSchema, settings: ReportSettings) -> List[ColumnSpec]:
    headers = [
        (INDEX_KEY, settings.index_header),
        (ORGANIZATION_KEY, settings.organization_header),
        (WEBSITES_KEY, settings.websites_header),
    ]
    headers.extend(zip(schema.keys, schema.titles))
    return [ColumnSpec(key=key, header=header, position=position) for position, (key, header) in enumerate(headers, start=1)]


def write_header(sheet: Worksheet, columns: Sequence[ColumnSpec]) -> None:
    for column in columns:
        sheet.cell(row=UNSHIFTED_HEADER_ROW, column=column.position, value=column.header)


def _solid_fill(argb: str) -> PatternFill:
    return PatternFill(fill_type="solid", fgColor=argb)


def _write_task_cell(sheet: Worksheet, row: int, column: int, style: CellStyle) -> None:
    cell = sheet.cell(row=row, column=column)
    cell.value = style.text
    cell.fill = _solid_fill(style.fill)
    if style.centered:
        cell.alignment = CENTERED


def emit_rows(
    sheet: Worksheet,
    columns: Sequence[ColumnSpec],
    rows: Sequence[ReportRow],
    styles: Mapping[CellState, CellStyle],
) -> None:
    """Append one worksheet row per report row, directly below the header."""
    for row_number, report_row in enumerate(rows, start=UNSHIFTED_HEADER_ROW + 1):
        for position, value in enumerate(report_row.fixed_values(), start=1):
            sheet.cell(row=row_number, column=position, value=value)
        for position, state in enumerate(report_row.cells, start=FIXED_COLUMN_COUNT + 1):
            _write_task_cell(sheet, row_number, position, styles[state])
        for position in range(1, len(columns) + 1):
            sheet.cell(row=row_number, column=position).border = THIN_BORDER


def _text_length(value: object) -> int:
    if value is None or value == "":
        return 0
    return len(str(value))


def compute_column_widths(
    sheet: Worksheet,
    columns: Sequence[ColumnSpec],
    settings: ReportSettings,
) -> Dict[str, float]:
    widths: Dict[str, float] = {}
    for column in columns:
        size = len(column.header) if column.header else settings.empty_header_width
        for (cell,) in sheet.iter_rows(min_col=column.position, max_col=column.position):
            size = max(size, _text_length(cell.value))
        width = size + settings.width_padding
        if column.key == ORGANIZATION_KEY and width > settings.organization_padding_threshold:
            width += settings.organization_extra_padding
        sheet.column_dimensions[column.letter].width = width
        widths[column.key] = width
    return widths


def insert_title_row(
    sheet: Worksheet,
    columns: Sequence[ColumnSpec],
    title: str,
    settings: ReportSettings,
) -> None:
    """Push every row down by one and put a merged banner on top."""
    sheet.insert_rows(TITLE_ROW)
    start = _column_position(columns, ORGANIZATION_KEY)
    sheet.cell(row=TITLE_ROW, column=start, value=title)
    end = min(settings.title_merge_end_column, len(columns))
    if end > start:
        sheet.merge_cells(start_row=TITLE_ROW, start_column=start, end_row=TITLE_ROW, end_column=end)


def _column_position(columns: Sequence[ColumnSpec], key: str) -> int:
    for column in columns:
        if column.key == key:
            return column.position
    raise KeyError(key)


def _style_row(sheet: Worksheet, row: int, last_column: int, font: Font, alignment: Alignment) -> None:
    for column in range(1, last_column + 1):
        cell = sheet.cell(row=row, column=column)
        if isinstance(cell, MergedCell):
            continue
        cell.font = font
        cell.alignment = alignment


def apply_styles(sheet: Worksheet, columns: Sequence[ColumnSpec], settings: ReportSettings) -> None:
    last_column = len(columns)
    for row in range(1, sheet.max_row + 1):
        sheet.row_dimensions[row].height = settings.row_height

    sheet.row_dimensions[TITLE_ROW].height = settings.title_row_height
    _style_row(
        sheet,
        TITLE_ROW,
        last_column,
        Font(name=settings.font_name, size=settings.title_font_size, bold=True),
        Alignment(vertical="top", horizontal="left"),
    )

    sheet.row_dimensions[HEADER_ROW].height = settings.header_row_height
    _style_row(
        sheet,
        HEADER_ROW,
        last_column,
        Font(name=settings.font_name, size=settings.header_font_size, bold=True),
        Alignment(vertical="bottom", horizontal="center", wrap_text=True),
    )

    index_position = _column_position(columns, INDEX_KEY)
    websites_position = _column_position(columns, WEBSITES_KEY)
    for row in range(FIRST_DATA_ROW, sheet.max_row + 1):
        sheet.cell(row=row, column=index_position).alignment = CENTERED
        sheet.cell(row=row, column=websites_position).alignment = CENTERED_WRAPPED

    sheet.column_dimensions[get_column_letter(websites_position)].width = settings.websites_width

    sheet.sheet_properties.pageSetUpPr.fitToPage = True
    sheet.page_setup.fitToWidth = settings.fit_to_width
    sheet.page_setup.fitToHeight = settings.fit_to_height


def lay_out_report(
    sheet: Worksheet,
    schema: ColumnSchema,
    rows: Sequence[ReportRow],
    title: str,
    settings: ReportSettings,
) -> List[ColumnSpec]:
    columns = materialize_columns(schema, settings)
    write_header(sheet, columns)
    emit_rows(sheet, columns, rows, build_cell_styles(settings))
    compute_column_widths(sheet, columns, settings)
    insert_title_row(sheet, columns, title, settings)
    apply_styles(sheet, columns, settings)
    return columns
