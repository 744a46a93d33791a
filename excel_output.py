"""
Excel quote sheet generation with header styling and auto-sized columns.
"""
import pandas as pd
import logging
import io
from openpyxl.styles import PatternFill, Font, Alignment, Border, Side
from openpyxl.utils import get_column_letter

logger = logging.getLogger(__name__)

SHEET_NAME = 'QUOTE'

COLUMNS = [
    'DRAWING NUMBER',
    'MATERIAL',
    'DENSITY (G/CM3)',
    'PRICE PER KG',
    'FORM',
    'DIMENSIONS (MM)',
    'VOLUME (CM3)',
    'WEIGHT (KG)',
    'QUANTITY',
    'COST POLICY',
    'SETUP COST',
    'PROGRAMMING COST',
    'MATERIAL COST',
    'MACHINING COST',
    'FINAL PRICE',
    'REMARK',
]


def build_quote_row(result):
    """Flatten an ExtractionResult into one spreadsheet row."""
    cost = result.cost
    return {
        'DRAWING NUMBER': result.drawing_number or 'Not Found',
        'MATERIAL': result.material.designation,
        'DENSITY (G/CM3)': result.material.density_g_cm3,
        'PRICE PER KG': result.material.price_per_kg,
        'FORM': result.form.value,
        'DIMENSIONS (MM)': ', '.join(d.format() for d in result.dimensions) or 'Not Found',
        'VOLUME (CM3)': round(result.volume_cm3, 2),
        'WEIGHT (KG)': round(result.weight_kg, 3),
        'QUANTITY': result.quantity,
        'COST POLICY': cost.policy.value,
        'SETUP COST': round(cost.setup_cost, 2),
        'PROGRAMMING COST': round(cost.programming_cost, 2),
        'MATERIAL COST': round(cost.material_cost, 2),
        'MACHINING COST': round(cost.machining_cost, 2),
        'FINAL PRICE': round(cost.final_price, 2),
        'REMARK': ' '.join(result.warnings) if result.warnings else 'No specific remarks.',
    }


def _style_sheet(worksheet, df):
    header_fill = PatternFill(start_color='CCE5FF', end_color='CCE5FF', fill_type='solid')
    header_font = Font(bold=True)
    border = Border(
        left=Side(style='thin'),
        right=Side(style='thin'),
        top=Side(style='thin'),
        bottom=Side(style='thin')
    )

    for col_idx, column in enumerate(df.columns, 1):
        cell = worksheet.cell(row=1, column=col_idx)
        cell.fill = header_fill
        cell.font = header_font
        cell.border = border
        cell.alignment = Alignment(horizontal='center', vertical='center', wrap_text=True)

        # Auto-fit column width
        max_length = max([len(str(column))] + [len(str(v)) for v in df[column]])
        adjusted_width = min(max_length + 2, 50)  # Cap width at 50 characters
        worksheet.column_dimensions[get_column_letter(col_idx)].width = adjusted_width

    for row in worksheet.iter_rows(min_row=2, max_row=worksheet.max_row):
        for cell in row:
            cell.border = border
            cell.alignment = Alignment(vertical='center')


def generate_quote_sheet(result):
    """
    Generate the quote workbook for one analyzed drawing.

    Args:
        result (ExtractionResult): Output of drawing_analysis.analyze

    Returns:
        BytesIO: Excel file data
    """
    try:
        df = pd.DataFrame([build_quote_row(result)], columns=COLUMNS)
        logger.info("Prepared quote row for Excel write:\n%s",
                    df[['DRAWING NUMBER', 'MATERIAL', 'FORM', 'FINAL PRICE']].to_string(index=False))

        output = io.BytesIO()
        with pd.ExcelWriter(output, engine='openpyxl') as writer:
            df.to_excel(writer, sheet_name=SHEET_NAME, index=False)
            _style_sheet(writer.sheets[SHEET_NAME], df)

        output.seek(0)
        return output

    except (AttributeError, TypeError, ValueError) as e:
        logger.error(f"Error generating Excel sheet: {e}", exc_info=True)
        # Create a minimal error sheet
        error_df = pd.DataFrame([{
            'DRAWING NUMBER': 'ERROR',
            'REMARK': f'Excel generation failed: {str(e)}'
        }], columns=COLUMNS)
        error_output = io.BytesIO()
        error_df.to_excel(error_output, sheet_name=SHEET_NAME, index=False, engine='openpyxl')
        error_output.seek(0)
        return error_output
