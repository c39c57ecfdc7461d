#!/usr/bin/env python3
"""
Grid tables engine: the caller-facing entry point.

GridTables ties a grid store, a table registry and a query evaluator
together. Table management goes through the engine; row operations go
through the TableSession returned by select_table():

    engine  = load( MemoryGridStore(), debug=True )
    engine.create_table( "People", [ "Id", "Name", "Age" ] )
    people  = engine.select_table( "People" )
    people.insert( { "Name": "A", "Age": 1 } )
    people  = people.refresh()
    people.find_where( { "Age": 1 } )

The engine also remembers the last selected session as engine.current, and
table() is an alias of select_table() for chained calls.
"""

import dataclasses

from rowstore.config.grid_tables_config import GridTablesConfig, make_store
from rowstore.grid_tables.instrumentation import make_log_hook
from rowstore.grid_tables.query_evaluator import PandasQueryEvaluator
from rowstore.grid_tables.registry import TableRegistry
from rowstore.grid_tables.session import select_table


class GridTables:
    """
    Table-level operations over one grid store.

    Constructor args:
        store: GridStore (built from config when None)
        evaluator: QueryEvaluator (PandasQueryEvaluator when None)
        config: GridTablesConfig (defaults when None)
        debug: Turn on logging; overrides config.debug when True
        log_hook: Callable taking one string; replaces the logging hook
    """

    def __init__( self, store=None, evaluator=None, config=None, debug=False, log_hook=None ):

        self.config = config if config is not None else GridTablesConfig()
        if debug and not self.config.debug:
            self.config = dataclasses.replace( self.config, debug=True )

        self.debug     = self.config.debug
        self.log_hook  = make_log_hook( debug=self.debug, log_hook=log_hook )
        self.store     = store if store is not None else make_store( self.config )
        self.evaluator = evaluator if evaluator is not None else PandasQueryEvaluator( debug=self.debug )
        self.registry  = TableRegistry( self.store, log_hook=self.log_hook )
        self.current   = None

    def create_table( self, table_name, columns ):
        """
        Create a table whose header row is columns.

        Raises:
            - DuplicateTableError if the table already exists
            - SchemaError if columns do not start with "Id"
        """
        return self.registry.create_table( table_name, columns )

    def drop_table( self, table_name ):
        """
        Drop a table and its grid.

        Ensures:
            - engine.current is cleared when it was bound to this table

        Raises:
            - TableNotFoundError if the table does not exist
        """
        self.registry.drop_table( table_name )

        if self.current is not None and self.current.table_name == table_name:
            self.current = None

    def exists( self, table_name ):
        return self.registry.exists( table_name )

    def list_tables( self ):
        return self.registry.list_tables()

    def select_table( self, table_name ):
        """
        Select a table and snapshot its rows.

        Ensures:
            - Returns a new TableSession and stores it as engine.current
            - Any previous session stays usable but is no longer engine.current

        Raises:
            - TableNotFoundError if the table does not exist
            - SchemaError if the header does not start with "Id"
        """
        session = select_table( self.store, table_name, evaluator=self.evaluator, config=self.config, log_hook=self.log_hook )
        self.registry.record( table_name, session.grid, session.columns )
        self.current = session

        return session

    def table( self, table_name ):
        """Alias of select_table() for chained calls."""
        return self.select_table( table_name )


def load( store=None, debug=False, config=None ):
    """
    Factory for a GridTables engine.

    Requires:
        - store is None or a GridStore

    Ensures:
        - Returns a GridTables bound to store, or to the store named by config
    """
    return GridTables( store=store, config=config, debug=debug )
