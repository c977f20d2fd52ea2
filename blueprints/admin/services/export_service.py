"""Excel export of the admin bookings list."""

import io

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill, Alignment, Border, Side

from utils.helpers import format_date, room_type_label
from utils.messages import status_label

HEADERS = [
    "Código", "Hotel", "Usuario", "Check-in", "Check-out",
    "Habitación", "Total (MXN)", "Estado"
]


def build_bookings_workbook(bookings: list, search: str = '', status: str = 'all') -> bytes:
    """
    Build the bookings spreadsheet.

    Args:
        bookings: Booking dicts (already filtered, with nested 'user')
        search: Search term shown in the subtitle
        status: Status filter shown in the subtitle

    Returns:
        XLSX file content
    """
    wb = Workbook()
    ws = wb.active
    ws.title = "Reservaciones"

    header_font = Font(bold=True, color="FFFFFF", size=11)
    header_fill = PatternFill(start_color="10244C", end_color="10244C", fill_type="solid")
    header_alignment = Alignment(horizontal="center", vertical="center", wrap_text=True)
    thin_border = Border(
        left=Side(style='thin', color="D4D4D4"),
        right=Side(style='thin', color="D4D4D4"),
        top=Side(style='thin', color="D4D4D4"),
        bottom=Side(style='thin', color="D4D4D4")
    )
    center_alignment = Alignment(horizontal="center", vertical="center")
    alt_fill = PatternFill(start_color="F5F5F5", end_color="F5F5F5", fill_type="solid")

    last_col = chr(ord('A') + len(HEADERS) - 1)

    ws.merge_cells(f'A1:{last_col}1')
    title_cell = ws.cell(row=1, column=1, value="Reporte de Reservaciones - Noktos")
    title_cell.font = Font(bold=True, size=14, color="10244C")
    title_cell.alignment = center_alignment

    subtitle_parts = []
    if status and status != 'all':
        subtitle_parts.append(f"Estado: {status_label(status)}")
    if search:
        subtitle_parts.append(f"Búsqueda: {search}")
    subtitle_parts.append(f"Total: {len(bookings)} reservaciones")

    ws.merge_cells(f'A2:{last_col}2')
    subtitle_cell = ws.cell(row=2, column=1, value=" | ".join(subtitle_parts))
    subtitle_cell.font = Font(size=10, color="666666")
    subtitle_cell.alignment = center_alignment

    header_row = 4
    for col, header in enumerate(HEADERS, 1):
        cell = ws.cell(row=header_row, column=col, value=header)
        cell.font = header_font
        cell.fill = header_fill
        cell.alignment = header_alignment
        cell.border = thin_border

    ws.freeze_panes = f'A{header_row + 1}'

    for row_idx, booking in enumerate(bookings, header_row + 1):
        user = booking.get('user') or {}
        values = [
            booking.get('confirmation_code') or '-',
            booking.get('hotel_name') or '-',
            user.get('email') or '-',
            format_date(booking.get('check_in')),
            format_date(booking.get('check_out')),
            room_type_label(booking.get('room_type')),
            float(booking.get('total_price') or 0),
            status_label(booking.get('status')),
        ]
        is_alt = (row_idx - header_row) % 2 == 0
        for col, value in enumerate(values, 1):
            cell = ws.cell(row=row_idx, column=col, value=value)
            cell.border = thin_border
            if is_alt:
                cell.fill = alt_fill
        ws.cell(row=row_idx, column=7).number_format = '"$"#,##0.00'
        for col in (4, 5, 6, 8):
            ws.cell(row=row_idx, column=col).alignment = center_alignment

    # Widths follow the table only; the merged title rows span all columns
    for col_cells in ws.iter_cols(min_row=header_row, max_row=ws.max_row):
        max_length = 10
        for cell in col_cells:
            max_length = max(max_length, len(str(cell.value or '')))
        ws.column_dimensions[col_cells[0].column_letter].width = min(max_length + 3, 50)

    output = io.BytesIO()
    wb.save(output)
    return output.getvalue()
