#!/usr/bin/env python3
"""
Table registry: binds table names to their grids and column schemas.

The registry is the only component that creates or destroys grids. It keeps
a TableEntry per table created or looked up through it, and defers to the
grid store for existence, so tables created by another process are visible.
"""

from dataclasses import dataclass, field
from typing import List

from rowstore.grid_tables.exceptions import DuplicateTableError, TableNotFoundError
from rowstore.grid_tables.schemas import normalize_columns, validate_columns
from rowstore.grid_tables.storage import GridHandle


@dataclass
class TableEntry:
    """Registry record for one table."""
    grid    : GridHandle
    columns : List[ str ] = field( default_factory=list )


class TableRegistry:
    """
    Create, drop and look up tables in a grid store.

    Constructor args:
        store: GridStore holding the grids
        log_hook: Callable taking one string, used for debug messages
    """

    def __init__( self, store, log_hook=None ):
        self.store    = store
        self.log_hook = log_hook if log_hook is not None else ( lambda message: None )
        self.tables   = { }

    def create_table( self, table_name, columns ):
        """
        Create a new table with the given columns.

        Requires:
            - table_name is a non-empty string
            - columns is a list of names or { "name": ... } dicts, "Id" first

        Ensures:
            - A new grid exists whose only row is the column header
            - self.tables[ table_name ] holds the grid handle and column list
            - Returns the TableEntry

        Raises:
            - DuplicateTableError if the store already has a grid named table_name
            - SchemaError if the columns are not a valid schema
        """
        if table_name in self.store.list_table_names():
            raise DuplicateTableError( table_name )

        names = normalize_columns( columns )
        validate_columns( names, table_name )

        grid = self.store.create_grid( table_name )
        self.store.clear( grid )
        self.store.append_row( grid, names )

        entry = TableEntry( grid=grid, columns=names )
        self.tables[ table_name ] = entry

        self.log_hook( f"Created table: {table_name}" )
        return entry

    def drop_table( self, table_name ):
        """
        Drop a table and destroy its grid.

        Ensures:
            - The grid is deleted from the store
            - The registry entry, if any, is removed

        Raises:
            - TableNotFoundError if the store has no grid named table_name
        """
        grid = self.resolve( table_name )

        self.store.delete_grid( grid )
        self.tables.pop( table_name, None )

        self.log_hook( f"Dropped table: {table_name}" )

    def exists( self, table_name ):
        """
        Check whether a table has a grid.

        Ensures:
            - Returns True or False without side effects
        """
        return table_name in self.store.list_table_names()

    def list_tables( self ):
        """Return the names of all tables in the store."""
        return list( self.store.list_table_names() )

    def get_entry( self, table_name ):
        """
        Get the registry entry recorded for a table.

        Ensures:
            - Returns the TableEntry, or None when this registry has no record of it
        """
        return self.tables.get( table_name )

    def resolve( self, table_name ):
        """
        Get the grid handle for a table.

        Ensures:
            - Returns the GridHandle from the store

        Raises:
            - TableNotFoundError if the store has no grid named table_name
        """
        grid = self.store.get_grid( table_name )
        if grid is None:
            raise TableNotFoundError( table_name )

        return grid

    def record( self, table_name, grid, columns ):
        """Remember the grid and schema read for a table at selection time."""
        entry = TableEntry( grid=grid, columns=list( columns ) )
        self.tables[ table_name ] = entry
        return entry
