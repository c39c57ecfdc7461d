#!/usr/bin/env python3
"""
Table sessions: CRUD over one selected grid table.

select_table reads a table's grid once and returns a TableSession holding
the column schema and a snapshot of the data rows. Reads (find_all,
find_one, find_where) work on that snapshot; writes (insert, update,
delete) go to the live grid and leave the snapshot untouched. Call
refresh() or select the table again to see writes.

Operations:
    find_all, find_one, find_where, insert, update, delete, count, refresh
"""

import copy

from rowstore.config.grid_tables_config import GridTablesConfig
from rowstore.grid_tables.criteria import build_predicate
from rowstore.grid_tables.exceptions import TableNotFoundError
from rowstore.grid_tables.instrumentation import measure_execution_time
from rowstore.grid_tables.query_evaluator import PandasQueryEvaluator
from rowstore.grid_tables.row_codec import pad_row, to_object, to_raw_from_partial
from rowstore.grid_tables.schemas import check_header, ID_COLUMN


def select_table( store, table_name, evaluator=None, config=None, log_hook=None ):
    """
    Read a table's grid and bind a session to it.

    Requires:
        - store is a GridStore
        - table_name is a string

    Ensures:
        - Returns a TableSession whose columns are row 0 of the grid
        - The session's cached rows are rows 1..n of the grid at this moment

    Raises:
        - TableNotFoundError if the store has no grid named table_name
        - SchemaError if the header is empty or does not start with "Id"
    """
    grid = store.get_grid( table_name )
    if grid is None:
        raise TableNotFoundError( table_name )

    data    = store.read_all( grid )
    columns = check_header( data[ 0 ] if data else [], table_name )

    session = TableSession(
        store      = store,
        table_name = table_name,
        grid       = grid,
        columns    = columns,
        rows       = data[ 1: ],
        evaluator  = evaluator,
        config     = config,
        log_hook   = log_hook
    )
    session.log( f"Switched to table: {table_name}" )
    return session


class TableSession:
    """
    Cached, bound context of one selected table.

    Constructor args:
        store: GridStore holding the table's grid
        table_name: Name of the selected table
        grid: GridHandle for the table
        columns: Column schema read from the header row
        rows: Snapshot of data rows (header excluded)
        evaluator: QueryEvaluator for translated criteria (PandasQueryEvaluator when None)
        config: GridTablesConfig (defaults when None)
        log_hook: Callable taking one string (silent when None)
    """

    def __init__( self, store, table_name, grid, columns, rows, evaluator=None, config=None, log_hook=None ):

        self.store      = store
        self.table_name = table_name
        self.grid       = grid
        self.config     = config if config is not None else GridTablesConfig()
        self.evaluator  = evaluator if evaluator is not None else PandasQueryEvaluator( debug=self.config.debug )
        self.log_hook   = log_hook if log_hook is not None else ( lambda message: None )

        self._columns   = tuple( columns )
        self._rows      = [ list( row ) for row in rows ]

    # Accessors

    @property
    def name( self ):
        return self.table_name

    @property
    def columns( self ):
        return list( self._columns )

    @property
    def rows( self ):
        """Copy of the cached raw rows, header excluded."""
        return copy.deepcopy( self._rows )

    def count( self ):
        """Number of cached data rows."""
        return len( self._rows )

    def log( self, message ):
        self.log_hook( message )

    def refresh( self ):
        """
        Re-read the live grid.

        Ensures:
            - Returns a new TableSession for the same table with a fresh snapshot
            - This session is left unchanged
        """
        return select_table( self.store, self.table_name, evaluator=self.evaluator, config=self.config, log_hook=self.log_hook )

    # Reads, served from the snapshot

    def find_all( self ):
        """
        Retrieve all cached rows.

        Ensures:
            - Returns list of row objects in grid order
        """
        return self._measure( lambda: [ to_object( row, self._columns ) for row in self._rows ], "findAll" )

    def find_one( self, criteria ):
        """
        Find the first cached row matching criteria.

        Requires:
            - criteria is a dict of column_name: value pairs

        Ensures:
            - Returns the first matching row object, or None

        Raises:
            - ColumnNotFoundError if a criteria key is not a column
        """
        def _find_one():
            matched = self._match_cached( criteria, limit=1 )
            return to_object( matched[ 0 ], self._columns ) if matched else None

        return self._measure( _find_one, "findOne" )

    def find_where( self, criteria ):
        """
        Find every cached row matching criteria.

        Ensures:
            - Returns list of matching row objects, relative order preserved

        Raises:
            - ColumnNotFoundError if a criteria key is not a column
        """
        return self._measure( lambda: [ to_object( row, self._columns ) for row in self._match_cached( criteria ) ], "findWhere" )

    # Writes, applied to the live grid

    def insert( self, data ):
        """
        Append a new row to the table.

        Requires:
            - data is a dict of column_name: value pairs

        Ensures:
            - One row [ new_id, ...values ] is appended to the grid
            - Missing columns are written as ""; a caller-supplied "Id" is ignored
            - The cached snapshot is NOT updated
            - Returns { "Id": new_id, **data }

        Raises:
            - TableNotFoundError if the table's grid is gone
        """
        def _insert():
            grid    = self._live_grid()
            new_id  = self._next_id( grid )
            new_row = to_raw_from_partial( data, self._columns )
            new_row[ 0 ] = new_id

            self.store.append_row( grid, new_row )
            self.log( f"Inserted row with Id: {new_id}" )

            inserted = { ID_COLUMN: new_id }
            inserted.update( { key: value for key, value in data.items() if key != ID_COLUMN } )
            return inserted

        return self._measure( _insert, "insert" )

    def update( self, criteria, new_data ):
        """
        Update live rows matching criteria.

        Requires:
            - criteria is a dict of column_name: value pairs
            - new_data is a dict of column_name: new value pairs

        Ensures:
            - Every matching row gets new_data's values for schema columns other than "Id"
            - Criteria keys unknown to the schema never match
            - The whole grid is written back in one write_all
            - Returns the number of rows updated

        Raises:
            - TableNotFoundError if the table's grid is gone
        """
        def _update():
            grid      = self._live_grid()
            values    = self.store.read_all( grid )
            predicate = build_predicate( criteria, self._columns, strict=False, table_name=self.table_name )
            width     = len( self._columns )

            updated_count = 0
            for position in range( 1, len( values ) ):
                if not predicate.matches( to_object( values[ position ], self._columns ) ):
                    continue

                row = pad_row( values[ position ], width )
                for index, col in enumerate( self._columns ):
                    if col in new_data and col != ID_COLUMN:
                        row[ index ] = new_data[ col ]
                values[ position ] = row
                updated_count += 1

            self.store.write_all( grid, values )
            self.log( f"Updated {updated_count} rows" )
            return updated_count

        return self._measure( _update, "update" )

    def delete( self, criteria ):
        """
        Delete live rows matching criteria.

        Ensures:
            - The grid is cleared and rewritten as header + non-matching rows, in order
            - With no matches the grid content is unchanged
            - Returns the number of rows removed

        Raises:
            - TableNotFoundError if the table's grid is gone
        """
        def _delete():
            grid      = self._live_grid()
            values    = self.store.read_all( grid )
            predicate = build_predicate( criteria, self._columns, strict=False, table_name=self.table_name )
            header    = values[ 0 ] if values else list( self._columns )

            kept          = []
            deleted_count = 0
            for row in values[ 1: ]:
                if predicate.matches( to_object( row, self._columns ) ):
                    deleted_count += 1
                else:
                    kept.append( row )

            self.store.clear( grid )
            self.store.write_all( grid, [ header ] + kept )
            self.log( f"Deleted {deleted_count} rows" )
            return deleted_count

        return self._measure( _delete, "delete" )

    # Helpers

    def _match_cached( self, criteria, limit=None ):
        """
        Select cached raw rows matching criteria via the configured path.

        Raises:
            - ColumnNotFoundError before any row is scanned if a key is not a column
        """
        predicate = build_predicate( criteria, self._columns, strict=True, table_name=self.table_name )

        if self.config.criteria_mode == "predicate":
            matched = [ row for row in self._rows if predicate.matches( to_object( row, self._columns ) ) ]
            return matched[ :limit ] if limit is not None else matched

        expression = predicate.to_expression()
        self.log( f"Query: {expression or '(all rows)'}" )
        return self.evaluator.evaluate( expression, self._rows, len( self._columns ), limit=limit )

    def _live_grid( self ):
        grid = self.store.get_grid( self.table_name )
        if grid is None:
            raise TableNotFoundError( self.table_name )
        return grid

    def _next_id( self, grid ):
        """
        Compute the identifier for a new row.

        Ensures:
            - "row_count": returns the grid's current row count, header included
            - "monotonic": returns one more than the largest integer id present (1 when none)
        """
        if self.config.id_policy == "monotonic":
            largest = 0
            for row in self.store.read_all( grid )[ 1: ]:
                try:
                    largest = max( largest, int( row[ 0 ] ) )
                except ( IndexError, TypeError, ValueError ):
                    continue
            return largest + 1

        return self.store.row_count( grid )

    def _measure( self, func, name ):
        return measure_execution_time( func, name, enabled=self.config.instrumentation_enabled, log_hook=self.log_hook )

    def __repr__( self ):
        return f"TableSession(table_name={self.table_name!r}, columns={list( self._columns )}, rows={len( self._rows )})"
