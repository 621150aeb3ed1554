"""
Excel Export Utilities using Pandas
===================================

Spreadsheet exports of the payment register, the variation order register
and the dashboard. Each builder returns the ``.xlsx`` file as bytes; the
views wrap it in a download response.
"""

from io import BytesIO

import pandas as pd
from django.http import HttpResponse
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from apps.variations.models import VOStatus


XLSX_CONTENT_TYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
MONEY_FORMAT = '#,##0.00'

HEADER_FILL = PatternFill(start_color='1F2937', end_color='1F2937', fill_type='solid')
HEADER_FONT = Font(bold=True, color='FFFFFF', size=11)
TOTALS_FILL = PatternFill(start_color='E5E7EB', end_color='E5E7EB', fill_type='solid')
TOTALS_FONT = Font(bold=True, size=11)
SUMMARY_TOTAL_FILL = PatternFill(start_color='4472C4', end_color='4472C4', fill_type='solid')

STATUS_COLORS = {
    VOStatus.PENDING_WITH_FFC: 'FF8C00',
    VOStatus.PENDING_WITH_RSG: 'B8860B',
    VOStatus.PENDING_WITH_RSG_FFC: 'FFC000',
    VOStatus.APPROVED_AWAITING_DVO: '00CED1',
    VOStatus.DVO_RR_ISSUED: '00C853',
}
# Light background, dark text
DARK_TEXT_STATUSES = {VOStatus.PENDING_WITH_RSG_FFC}

PAYMENT_COLUMNS = [
    ('Payment No', 14),
    ('Description', 40),
    ('Gross Amount', 18),
    ('Advance Payment Recovery', 22),
    ('Retention', 18),
    ('VAT Recovery', 18),
    ('VAT', 18),
    ('Net Payment', 18),
    ('Payment Status', 20),
    ('Approval Status', 16),
    ('Submitted Date', 15),
    ('Invoice Date', 15),
    ('FFC Live Action', 30),
    ('RSG Live Action', 30),
    ('Remarks', 35),
]
PAYMENT_MONEY_COLUMNS = [
    'Gross Amount', 'Advance Payment Recovery', 'Retention', 'VAT Recovery', 'VAT', 'Net Payment',
]

VARIATION_COLUMNS = [
    ('ID', 8),
    ('Subject', 45),
    ('Type', 12),
    ('Submission Ref', 18),
    ('Response Ref', 18),
    ('Submission Date', 15),
    ('Assessment Value', 20),
    ('Proposal Value', 20),
    ('Approved Amount', 20),
    ('Status', 30),
    ('VOR Ref', 15),
    ('DVO Ref', 15),
    ('DVO Issued Date', 15),
    ('Remarks', 35),
    ('Action Notes', 35),
]
VARIATION_MONEY_COLUMNS = ['Assessment Value', 'Proposal Value', 'Approved Amount']


def create_excel_response(content, filename='report.xlsx'):
    """Create an HTTP response for Excel file download"""
    response = HttpResponse(content, content_type=XLSX_CONTENT_TYPE)
    response['Content-Disposition'] = f'attachment; filename="{filename}"'
    return response


def _number(value):
    """Decimal -> float for the sheet, None stays empty."""
    return float(value) if value is not None else None


def _date(value):
    return value.strftime('%Y-%m-%d') if value else ''


def _style_sheet(worksheet, df, widths, money_columns=(), totals_row=False):
    """Header colours, column widths, money formats and optional totals row styling."""
    for col_num, column in enumerate(df.columns, 1):
        cell = worksheet.cell(row=1, column=col_num)
        cell.fill = HEADER_FILL
        cell.font = HEADER_FONT
        cell.alignment = Alignment(horizontal='center', vertical='center')
        worksheet.column_dimensions[get_column_letter(col_num)].width = widths.get(column, 15)

    last_row = len(df) + 1
    for column in money_columns:
        col_num = list(df.columns).index(column) + 1
        for row in range(2, last_row + 1):
            worksheet.cell(row=row, column=col_num).number_format = MONEY_FORMAT

    if totals_row and len(df):
        for col_num in range(1, len(df.columns) + 1):
            cell = worksheet.cell(row=last_row, column=col_num)
            cell.fill = TOTALS_FILL
            cell.font = TOTALS_FONT

    worksheet.freeze_panes = 'A2'


def _to_bytes(write_sheets):
    output = BytesIO()
    with pd.ExcelWriter(output, engine='openpyxl') as writer:
        write_sheets(writer)
    return output.getvalue()


def build_payments_workbook(payments, rollups):
    """
    Payment register workbook with a totals row.

    Args:
        payments: PaymentApplication records in register order
        rollups: PaymentRollups for the same records

    Returns:
        bytes: The .xlsx file
    """
    columns = [name for name, _ in PAYMENT_COLUMNS]
    rows = []
    for payment in payments:
        rows.append({
            'Payment No': payment.payment_no,
            'Description': payment.description,
            'Gross Amount': _number(payment.gross_amount),
            'Advance Payment Recovery': _number(payment.advance_payment_recovery),
            'Retention': _number(payment.retention),
            'VAT Recovery': _number(payment.vat_recovery),
            'VAT': _number(payment.vat),
            'Net Payment': _number(payment.net_payment),
            'Payment Status': payment.payment_status,
            'Approval Status': payment.approval_status,
            'Submitted Date': _date(payment.submitted_date),
            'Invoice Date': _date(payment.invoice_date),
            'FFC Live Action': payment.ffc_live_action,
            'RSG Live Action': payment.rsg_live_action,
            'Remarks': payment.remarks,
        })

    df = pd.DataFrame(rows, columns=columns)
    if rows:
        totals = {column: '' for column in columns}
        totals.update({
            'Payment No': 'TOTAL',
            'Gross Amount': float(rollups.total_gross),
            'Advance Payment Recovery': float(sum((p.advance_payment_recovery for p in payments), start=0)),
            'Retention': float(sum((p.retention for p in payments), start=0)),
            'VAT Recovery': float(sum((p.vat_recovery for p in payments), start=0)),
            'VAT': float(rollups.total_vat),
            'Net Payment': float(rollups.total_net_payment),
        })
        df = pd.concat([df, pd.DataFrame([totals], columns=columns)], ignore_index=True)

    def write_sheets(writer):
        df.to_excel(writer, sheet_name='Payment Applications', index=False)
        _style_sheet(
            writer.sheets['Payment Applications'], df, dict(PAYMENT_COLUMNS),
            money_columns=PAYMENT_MONEY_COLUMNS, totals_row=bool(rows),
        )

    return _to_bytes(write_sheets)


def _solid(color):
    return PatternFill(start_color=color, end_color=color, fill_type='solid')


def _status_font(vo_status):
    return Font(bold=True, color='000000' if vo_status in DARK_TEXT_STATUSES else 'FFFFFF')


def _write_status_summary(worksheet, statuses, start_row):
    """
    STATUS SUMMARY block under the register: one colour-coded count per
    status in workflow order, then the number of submitted VOs.
    """
    title = worksheet.cell(row=start_row, column=1, value='STATUS SUMMARY')
    worksheet.merge_cells(start_row=start_row, start_column=1, end_row=start_row, end_column=3)
    title.font = Font(bold=True, size=14)
    title.alignment = Alignment(horizontal='center')

    for col_num, heading in enumerate(('Status', 'Count'), 1):
        cell = worksheet.cell(row=start_row + 1, column=col_num, value=heading)
        cell.fill = HEADER_FILL
        cell.font = HEADER_FONT
        cell.alignment = Alignment(horizontal='center')

    row_num = start_row + 2
    for vo_status in VOStatus:
        label = worksheet.cell(row=row_num, column=1, value=vo_status.label)
        count = worksheet.cell(row=row_num, column=2, value=statuses.count(vo_status))
        for cell in (label, count):
            cell.fill = _solid(STATUS_COLORS[vo_status])
            cell.font = _status_font(vo_status)
        label.alignment = Alignment(horizontal='left', vertical='center')
        count.alignment = Alignment(horizontal='center', vertical='center')
        row_num += 1

    label = worksheet.cell(row=row_num, column=1, value='Total Submitted VO')
    count = worksheet.cell(row=row_num, column=2, value=len(statuses))
    for cell in (label, count):
        cell.fill = SUMMARY_TOTAL_FILL
        cell.font = Font(bold=True, color='FFFFFF', size=12)
    label.alignment = Alignment(horizontal='left', vertical='center')
    count.alignment = Alignment(horizontal='center', vertical='center')


def build_variations_workbook(variation_orders):
    """
    Variation order register workbook.

    Status cells are coloured per status, a TOTALS row sums the three value
    columns (blank values count as zero) and a STATUS SUMMARY block follows
    two rows below the register.

    Returns:
        bytes: The .xlsx file
    """
    columns = [name for name, _ in VARIATION_COLUMNS]
    statuses = []
    rows = []
    for vo in variation_orders:
        statuses.append(vo.status)
        rows.append({
            'ID': vo.id,
            'Subject': vo.subject,
            'Type': vo.get_submission_type_display(),
            'Submission Ref': vo.submission_reference,
            'Response Ref': vo.response_reference,
            'Submission Date': _date(vo.submission_date),
            'Assessment Value': _number(vo.assessment_value),
            'Proposal Value': _number(vo.proposal_value),
            'Approved Amount': _number(vo.approved_amount),
            'Status': vo.get_status_display(),
            'VOR Ref': vo.vor_reference,
            'DVO Ref': vo.dvo_reference,
            'DVO Issued Date': _date(vo.dvo_issued_date),
            'Remarks': vo.remarks,
            'Action Notes': vo.action_notes,
        })

    totals = {column: '' for column in columns}
    totals['Subject'] = 'TOTALS'
    for column in VARIATION_MONEY_COLUMNS:
        totals[column] = sum(row[column] or 0 for row in rows)
    df = pd.DataFrame(rows + [totals], columns=columns)

    def write_sheets(writer):
        df.to_excel(writer, sheet_name='Variation Orders', index=False)
        worksheet = writer.sheets['Variation Orders']
        _style_sheet(
            worksheet, df, dict(VARIATION_COLUMNS),
            money_columns=VARIATION_MONEY_COLUMNS, totals_row=True,
        )

        status_col = columns.index('Status') + 1
        for row_num, vo_status in enumerate(statuses, 2):
            color = STATUS_COLORS.get(vo_status)
            if color is None:
                continue
            cell = worksheet.cell(row=row_num, column=status_col)
            cell.fill = _solid(color)
            cell.font = _status_font(vo_status)
            cell.alignment = Alignment(horizontal='center', vertical='center')

        # Header + register + totals, then two blank rows
        _write_status_summary(worksheet, statuses, start_row=len(df) + 4)

    return _to_bytes(write_sheets)


def build_dashboard_workbook(payment_summary, variation_summary):
    """
    Two-sheet dashboard workbook: VO status summary and payment rollups.

    Args:
        payment_summary: DashboardQueries.payment_summary() result
        variation_summary: DashboardQueries.variation_summary() result

    Returns:
        bytes: The .xlsx file
    """
    vo_rows = [
        {'Status': item['label'], 'Count': item['count'], 'Amount': float(item['amount'])}
        for item in variation_summary['status_breakdown']
    ]
    vo_rows.append({
        'Status': 'TOTAL',
        'Count': variation_summary['total'],
        'Amount': float(variation_summary['total_submitted_value']),
    })
    vo_df = pd.DataFrame(vo_rows, columns=['Status', 'Count', 'Amount'])

    constants = payment_summary['constants']
    rollups = payment_summary['rollups']
    metric_rows = [
        ('Original Contract Value', constants['original_contract_value']),
        ('Revised Contract Value', constants['revised_contract_value']),
        ('Advance Payment Paid', constants['advance_payment_paid_total']),
        ('Retention Cap', constants['retention_cap_value']),
        ('Total Work Done', rollups['total_work_done']),
        ('Work Done %', rollups['work_done_percentage']),
        ('Balance Work Done', rollups['balance_work_done']),
        ('Advance Recovered', rollups['total_advance_recovered']),
        ('Advance Recovery %', rollups['advance_recovery_percentage']),
        ('Advance Balance', rollups['advance_balance']),
        ('Retention Held', rollups['total_retention_held']),
        ('Retention %', rollups['retention_percentage']),
        ('Retention Balance', rollups['retention_balance']),
        ('Total Net Payment', rollups['total_net_payment']),
        ('Total VAT', rollups['total_vat']),
        ('Payment Applications', rollups['record_count']),
    ]
    payment_df = pd.DataFrame(
        [{'Metric': name, 'Value': float(value)} for name, value in metric_rows],
        columns=['Metric', 'Value'],
    )

    def write_sheets(writer):
        vo_df.to_excel(writer, sheet_name='VO Summary', index=False)
        _style_sheet(
            writer.sheets['VO Summary'], vo_df, {'Status': 30, 'Count': 10, 'Amount': 20},
            money_columns=['Amount'], totals_row=True,
        )
        payment_df.to_excel(writer, sheet_name='Payment Summary', index=False)
        _style_sheet(
            writer.sheets['Payment Summary'], payment_df, {'Metric': 28, 'Value': 20},
            money_columns=['Value'],
        )

    return _to_bytes(write_sheets)
