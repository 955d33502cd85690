"""
Utilities for exporting and processing place data.
"""
import io
import pandas as pd
from pathlib import Path
from typing import Union

from .config import SHEET_NAME

# Column name -> width, in export order
EXPORT_COLUMNS = {
    'Name': 30,
    'Address': 40,
    'Rating': 12,
    'Rating Count': 20,
    'Has Website': 12,
    'Website': 40,
    'Phone': 20,
    'Business Type': 30,
}

HEADER_FILL = '#E0E0E0'
RATING_FORMAT = '0.0'
NOT_AVAILABLE = 'N/A'


def place_to_row(place) -> dict:
    """
    Flatten a Place into one export row.

    Args:
        place: Place instance

    Returns:
        Dictionary keyed by export column name
    """
    return {
        'Name': place.name,
        'Address': place.address,
        'Rating': place.rating if place.rating is not None else NOT_AVAILABLE,
        'Rating Count': place.user_ratings_total or 0,
        'Has Website': 'Yes' if place.has_website else 'No',
        'Website': place.website or NOT_AVAILABLE,
        'Phone': place.phone or NOT_AVAILABLE,
        'Business Type': place.business_type or NOT_AVAILABLE,
    }


def places_to_dataframe(places: list) -> pd.DataFrame:
    """
    Convert a list of Place objects to a DataFrame with the export schema.

    Args:
        places: List of Place objects

    Returns:
        DataFrame with one row per place, columns in export order
    """
    return pd.DataFrame(
        [place_to_row(place) for place in places],
        columns=list(EXPORT_COLUMNS)
    )


def _write_places_sheet(writer: pd.ExcelWriter, df: pd.DataFrame):
    """Write the sheet and apply header styling, filter and frozen row."""
    df.to_excel(writer, index=False, sheet_name=SHEET_NAME)

    workbook = writer.book
    worksheet = writer.sheets[SHEET_NAME]

    header_format = workbook.add_format({
        'bold': True,
        'bg_color': HEADER_FILL,
        'pattern': 1,
    })
    rating_format = workbook.add_format({'num_format': RATING_FORMAT})

    for idx, (col, width) in enumerate(EXPORT_COLUMNS.items()):
        cell_format = rating_format if col == 'Rating' else None
        worksheet.set_column(idx, idx, width, cell_format)
        # Rewrite the header so our format replaces pandas' default one
        worksheet.write(0, idx, col, header_format)

    last_col = len(EXPORT_COLUMNS) - 1
    worksheet.autofilter(0, 0, 0, last_col)
    worksheet.freeze_panes(1, 0)


def export_to_excel(
    df: pd.DataFrame,
    filepath: Union[str, Path] = None,
    return_bytes: bool = False
) -> Union[None, bytes]:
    """
    Export DataFrame to Excel file.

    Args:
        df: DataFrame to export (see places_to_dataframe)
        filepath: Output file path (ignored if return_bytes=True)
        return_bytes: If True, return bytes instead of writing to file

    Returns:
        None if writing to file, bytes if return_bytes=True
    """
    if return_bytes:
        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine='xlsxwriter') as writer:
            _write_places_sheet(writer, df)
        return buffer.getvalue()

    with pd.ExcelWriter(filepath, engine='xlsxwriter') as writer:
        _write_places_sheet(writer, df)
    return None


def export_to_csv(
    df: pd.DataFrame,
    filepath: Union[str, Path] = None,
    return_bytes: bool = False
) -> Union[None, bytes]:
    """
    Export DataFrame to CSV file.

    Args:
        df: DataFrame to export
        filepath: Output file path (ignored if return_bytes=True)
        return_bytes: If True, return bytes instead of writing to file

    Returns:
        None if writing to file, bytes if return_bytes=True
    """
    if return_bytes:
        return df.to_csv(index=False).encode('utf-8')
    else:
        df.to_csv(filepath, index=False)
        return None


def get_summary_stats(df: pd.DataFrame) -> dict:
    """
    Get summary statistics for a places DataFrame.

    Args:
        df: DataFrame with place data

    Returns:
        Dictionary of summary statistics
    """
    if df.empty:
        return {
            'total_places': 0,
            'with_phone': 0,
            'with_website': 0,
            'avg_rating': 'N/A'
        }

    stats = {
        'total_places': len(df),
        'with_phone': int((df['Phone'] != NOT_AVAILABLE).sum()),
        'with_website': int((df['Has Website'] == 'Yes').sum()),
    }

    numeric_ratings = pd.to_numeric(df['Rating'], errors='coerce')
    stats['avg_rating'] = round(numeric_ratings.mean(), 2) if not numeric_ratings.isna().all() else 'N/A'

    return stats
