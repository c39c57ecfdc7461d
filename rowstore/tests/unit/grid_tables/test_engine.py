"""
Unit tests for the GridTables engine.

Tests the caller-facing surface including:
- The create / insert / find / update / delete / re-select scenario
- load() factory and engine.current tracking
- Engines over parquet storage
"""

import shutil
import tempfile
import unittest
from unittest.mock import Mock

from rowstore.config.grid_tables_config import GridTablesConfig
from rowstore.grid_tables.engine import GridTables, load
from rowstore.grid_tables.exceptions import DuplicateTableError, GridTableError, TableNotFoundError
from rowstore.grid_tables.storage import MemoryGridStore, ParquetGridStore


class TestGridTablesScenario( unittest.TestCase ):
    """
    End-to-end scenario over each grid store.

    Ensures:
        - Ids follow the grid's row count
        - Reads after writes need a fresh selection
    """

    def setUp( self ):
        self.tmp_dir = tempfile.mkdtemp()

    def tearDown( self ):
        shutil.rmtree( self.tmp_dir, ignore_errors=True )

    def run_scenario( self, store ):
        engine = load( store )
        engine.create_table( "T", [ "Id", "Name", "Age" ] )

        self.assertEqual( engine.table( "T" ).insert( { "Name": "A", "Age": 1 } ), { "Id": 1, "Name": "A", "Age": 1 } )
        self.assertEqual( engine.table( "T" ).insert( { "Name": "B", "Age": 2 } ), { "Id": 2, "Name": "B", "Age": 2 } )

        self.assertEqual( engine.table( "T" ).find_where( { "Age": 1 } ), [ { "Id": 1, "Name": "A", "Age": 1 } ] )

        self.assertEqual( engine.table( "T" ).update( { "Name": "A" }, { "Age": 9 } ), 1 )
        grid = store.read_all( store.get_grid( "T" ) )
        self.assertEqual( grid[ 1 ], [ 1, "A", 9 ] )

        self.assertEqual( engine.table( "T" ).delete( { "Name": "B" } ), 1 )
        self.assertEqual( engine.table( "T" ).find_all(), [ { "Id": 1, "Name": "A", "Age": 9 } ] )

    def test_scenario_in_memory( self ):
        self.run_scenario( MemoryGridStore() )

    def test_scenario_on_parquet( self ):
        self.run_scenario( ParquetGridStore( base_path=self.tmp_dir ) )


class TestGridTables( unittest.TestCase ):
    """
    Unit tests for GridTables table management.
    """

    def setUp( self ):
        self.store    = MemoryGridStore()
        self.log_hook = Mock()
        self.engine   = GridTables( store=self.store, log_hook=self.log_hook )

    def test_create_exists_list_drop( self ):
        """
        Test table lifecycle through the engine.

        Ensures:
            - exists / list_tables reflect creates and drops
            - Duplicate creates and unknown drops raise
        """
        self.engine.create_table( "People", [ "Id", "Name" ] )

        self.assertTrue( self.engine.exists( "People" ) )
        self.assertEqual( self.engine.list_tables(), [ "People" ] )
        with self.assertRaises( DuplicateTableError ):
            self.engine.create_table( "People", [ "Id" ] )

        self.engine.drop_table( "People" )
        self.assertFalse( self.engine.exists( "People" ) )
        with self.assertRaises( TableNotFoundError ):
            self.engine.drop_table( "People" )

    def test_select_replaces_current( self ):
        """
        Test engine.current tracking.

        Ensures:
            - Each selection becomes engine.current
            - Earlier sessions keep working on their own snapshot
            - Dropping the current table clears engine.current
        """
        self.engine.create_table( "People", [ "Id", "Name" ] )
        self.engine.create_table( "Pets", [ "Id", "Species" ] )

        people = self.engine.select_table( "People" )
        self.assertIs( self.engine.current, people )

        pets = self.engine.table( "Pets" )
        self.assertIs( self.engine.current, pets )
        self.assertEqual( people.columns, [ "Id", "Name" ] )
        self.assertEqual( self.engine.registry.get_entry( "Pets" ).columns, [ "Id", "Species" ] )

        self.engine.drop_table( "Pets" )
        self.assertIsNone( self.engine.current )

    def test_errors_share_base_class( self ):
        with self.assertRaises( GridTableError ):
            self.engine.select_table( "Missing" )

    def test_log_hook_receives_engine_messages( self ):
        self.engine.create_table( "People", [ "Id", "Name" ] )
        self.engine.table( "People" ).insert( { "Name": "A" } )

        messages = [ call.args[ 0 ] for call in self.log_hook.call_args_list ]
        self.assertIn( "Created table: People", messages )
        self.assertIn( "Inserted row with Id: 1", messages )
        self.assertTrue( any( message.startswith( "insert executed in " ) for message in messages ) )

    def test_debug_flag_does_not_mutate_config( self ):
        config = GridTablesConfig()
        engine = GridTables( store=self.store, config=config, debug=True )

        self.assertTrue( engine.config.debug )
        self.assertFalse( config.debug )

    def test_store_built_from_config( self ):
        engine = GridTables( config=GridTablesConfig( storage_backend="memory" ) )
        self.assertIsInstance( engine.store, MemoryGridStore )


if __name__ == "__main__":
    unittest.main()
