#!/usr/bin/env python3
"""
Column schema helpers for grid tables.

A table's schema is the ordered list of column names stored in row 0 of its
grid. Position decides both the object-key order and the grid column index.
The first column is always the identifier column, ID_COLUMN.

Column lists may be given as plain strings or as mappings with a "name" key,
e.g. [ { "name": "Id" }, { "name": "Name" } ].
"""

from rowstore.grid_tables.exceptions import SchemaError

# Fixed name of the identifier column, always at position 0
ID_COLUMN = "Id"

# Value written for cells the caller did not supply
EMPTY_VALUE = ""


def normalize_columns( columns ):
    """
    Flatten a column list into a list of column name strings.

    Requires:
        - columns is an iterable of strings or dicts with a "name" key

    Ensures:
        - Returns a new list of names in the given order
        - Surrounding whitespace is not altered (names are positional keys)

    Raises:
        - SchemaError if an entry is neither a string nor a dict with "name"
    """
    names = []
    for column in columns:
        if isinstance( column, dict ):
            if "name" not in column:
                raise SchemaError( f"Column definition {column} has no 'name' key", found=column )
            names.append( column[ "name" ] )
        elif isinstance( column, str ):
            names.append( column )
        else:
            raise SchemaError( f"Column definition must be a string or a dict, got {type( column ).__name__}", found=column )

    return names


def validate_columns( columns, table_name=None ):
    """
    Validate a column list for a new table.

    Requires:
        - columns is a list of column name strings

    Ensures:
        - Returns None when the list is usable as a schema

    Raises:
        - SchemaError if the list is empty, contains blank or duplicate
          names, or does not start with ID_COLUMN
    """
    if not columns:
        raise SchemaError( "A table needs at least the identifier column", table_name=table_name )

    blank = [ i for i, name in enumerate( columns ) if not str( name ).strip() ]
    if blank:
        raise SchemaError( f"Blank column name at position(s) {blank}", table_name=table_name )

    seen       = set()
    duplicates = []
    for name in columns:
        if name in seen and name not in duplicates:
            duplicates.append( name )
        seen.add( name )
    if duplicates:
        raise SchemaError( f"Duplicate column name(s) {duplicates}", table_name=table_name, found=duplicates )

    check_header( columns, table_name )


def check_header( header, table_name=None ):
    """
    Confirm a header row is led by the identifier column.

    Requires:
        - header is a list (possibly empty) read from row 0 of a grid

    Ensures:
        - Returns the header as a list of column names

    Raises:
        - SchemaError if the header is empty or its first cell is not ID_COLUMN
    """
    if not header:
        raise SchemaError( "Table has no header row", table_name=table_name )

    if header[ 0 ] != ID_COLUMN:
        raise SchemaError(
            f'First column must be "{ID_COLUMN}". Found "{header[ 0 ]}" instead.',
            table_name = table_name,
            found      = header[ 0 ]
        )

    return list( header )


def column_index( columns, name ):
    """
    Get the grid position of a column.

    Ensures:
        - Returns the integer position, or None when name is not in columns
    """
    try:
        return columns.index( name )
    except ValueError:
        return None


def quick_smoke_test():
    """Module-level smoke test following the package convention."""

    print( "Testing schemas module..." )
    passed = True

    try:
        columns = normalize_columns( [ { "name": "Id" }, "Name", { "name": "Age" } ] )
        assert columns == [ "Id", "Name", "Age" ]
        print( f"  ✓ normalize_columns: {columns}" )

        validate_columns( columns, "People" )
        print( "  ✓ validate_columns accepts Id-led schema" )

        try:
            validate_columns( [ "Name", "Id" ], "People" )
            passed = False
            print( "  ✗ Should have raised SchemaError" )
        except SchemaError as e:
            print( f"  ✓ Non-Id first column rejected: {e}" )

        assert column_index( columns, "Age" ) == 2
        assert column_index( columns, "Missing" ) is None
        print( "  ✓ column_index" )

        print( "✓ schemas module smoke test PASSED" )

    except Exception as e:
        print( f"✗ schemas module smoke test FAILED: {e}" )
        passed = False

    return passed


if __name__ == "__main__":
    success = quick_smoke_test()
    exit( 0 if success else 1 )
