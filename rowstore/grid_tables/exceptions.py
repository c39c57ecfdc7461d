"""
Grid Tables Custom Exceptions

Hierarchical exception types for the table registry, table sessions and
criteria translation. All exceptions inherit from GridTableError so callers
can catch any package-specific error with a single except clause.

Exception Hierarchy:
    GridTableError (base)
    ├── DuplicateTableError (create on an existing table name)
    ├── TableNotFoundError (operate on an unknown or dropped table)
    ├── SchemaError (header row does not start with the identifier column)
    └── ColumnNotFoundError (criteria names a column the schema lacks)

Usage:
    from rowstore.grid_tables.exceptions import TableNotFoundError

    try:
        session = engine.select_table( "Contacts" )
    except TableNotFoundError as e:
        print( f"No such table: {e.table_name}" )
"""


class GridTableError( Exception ):
    """
    Base exception for all grid table errors.

    Attributes:
        message (str): Human-readable error message
        context (dict): Optional context information
    """

    def __init__( self, message, context=None ):
        """
        Initialize base exception.

        Requires:
            - message is non-empty string
            - context is None or dict

        Ensures:
            - Exception initialized with message and optional context
        """
        super().__init__( message )
        self.message = message
        self.context = context or {}

    def __str__( self ):
        """
        String representation of exception.

        Ensures:
            - Returns formatted error message with context if available
        """
        if self.context:
            context_str = ", ".join( f"{k}={v}" for k, v in self.context.items() )
            return f"{self.message} (Context: {context_str})"
        return self.message


class DuplicateTableError( GridTableError ):
    """
    Raised by create_table when a grid with the same name already exists.

    Attributes:
        table_name (str): The name that is already taken
    """

    def __init__( self, table_name ):
        super().__init__( f'Table "{table_name}" already exists.', { "table_name": table_name } )
        self.table_name = table_name


class TableNotFoundError( GridTableError ):
    """
    Raised when selecting, dropping or writing to a table that has no grid.

    Attributes:
        table_name (str): The name that could not be resolved
    """

    def __init__( self, table_name ):
        super().__init__( f'Table "{table_name}" not found.', { "table_name": table_name } )
        self.table_name = table_name


class SchemaError( GridTableError ):
    """
    Raised when a table's column schema is unusable.

    Covers a header row whose first cell is not the identifier column, an
    empty header, and duplicate or blank column names at create time.

    Attributes:
        message (str): Human-readable error message
        table_name (str): Table whose schema was rejected (if known)
        found (any): The offending value (if applicable)

    Example:
        raise SchemaError(
            message    = 'First column must be "Id". Found "Name" instead.',
            table_name = "Contacts",
            found      = "Name"
        )
    """

    def __init__( self, message, table_name=None, found=None ):
        """
        Initialize schema error.

        Requires:
            - message is non-empty string
            - table_name is None or string

        Ensures:
            - Exception initialized with schema context
        """
        context = {
            "table_name" : table_name,
            "found"      : str( found )[ :100 ] if found is not None else None
        }
        # Remove None values
        context = { k: v for k, v in context.items() if v is not None }

        super().__init__( message, context )
        self.table_name = table_name
        self.found      = found


class ColumnNotFoundError( GridTableError ):
    """
    Raised when criteria reference a column absent from the table schema.

    Finds raise this before any row is scanned; update and delete treat
    unknown columns as never matching.

    Attributes:
        column: The unknown column name (a header cell value)
        table_name (str): Table being queried (if known)
    """

    def __init__( self, column, table_name=None ):
        context = { "table_name": table_name } if table_name is not None else None

        super().__init__( f'Column "{column}" not found.', context )
        self.column     = column
        self.table_name = table_name
