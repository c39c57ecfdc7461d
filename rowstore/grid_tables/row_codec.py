#!/usr/bin/env python3
"""
Conversion between positional grid rows and keyed row objects.

A raw row is a list of cell values aligned by position with the table's
column list. A row object is a dict keyed by column name in schema order.

Functions:
    pad_row, to_object, to_raw, to_raw_from_partial
"""

from rowstore.grid_tables.schemas import ID_COLUMN, EMPTY_VALUE


def pad_row( raw_row, width ):
    """
    Extend a raw row with empty cells up to width.

    Requires:
        - raw_row is a list or tuple of cell values
        - width is a non-negative int

    Ensures:
        - Returns a new list of at least width cells
        - Cells beyond the original length are EMPTY_VALUE
        - Rows already at or past width are copied unchanged
    """
    row = list( raw_row )
    if len( row ) < width:
        row.extend( [ EMPTY_VALUE ] * ( width - len( row ) ) )
    return row


def to_object( raw_row, columns ):
    """
    Zip a raw row with the column list.

    Requires:
        - columns is the table's ordered column list

    Ensures:
        - Returns dict with exactly the schema's keys, in schema order
        - Missing trailing cells map to EMPTY_VALUE
        - Cells beyond the schema width are dropped
    """
    row = pad_row( raw_row, len( columns ) )
    return { col: row[ index ] for index, col in enumerate( columns ) }


def to_raw_from_partial( object_row, columns ):
    """
    Build a raw row from caller-supplied data.

    The identifier cell is always EMPTY_VALUE here; ids are assigned by the
    session at insert time.

    Requires:
        - object_row is a dict of column_name: value pairs (any subset)
        - columns is the table's ordered column list

    Ensures:
        - Returns list aligned with columns
        - Keys absent from object_row, or set to None, become EMPTY_VALUE
        - Keys not in columns are ignored
    """
    raw = []
    for col in columns:
        if col == ID_COLUMN:
            raw.append( EMPTY_VALUE )
            continue
        value = object_row.get( col )
        raw.append( EMPTY_VALUE if value is None else value )

    return raw


def to_raw( object_row, columns ):
    """
    Build a raw row from a complete row object, identifier included.

    Ensures:
        - Returns list aligned with columns
        - Missing keys become EMPTY_VALUE
    """
    raw = to_raw_from_partial( object_row, columns )
    if columns and columns[ 0 ] == ID_COLUMN and object_row.get( ID_COLUMN ) is not None:
        raw[ 0 ] = object_row[ ID_COLUMN ]

    return raw
