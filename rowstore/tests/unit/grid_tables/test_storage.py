"""
Unit tests for grid stores.

Tests MemoryGridStore and ParquetGridStore including:
- Grid lifecycle (create, get, list, delete)
- Row operations (read_all, append_row, write_all, clear)
- Isolation of stored rows from caller mutation
- Parquet round trips of mixed cell types and ragged rows
"""

import os
import shutil
import tempfile
import unittest

from rowstore.grid_tables.storage import GridHandle, MemoryGridStore, ParquetGridStore, validate_table_name


class GridStoreContract:
    """
    Behavior every grid store must share; mixed into one TestCase per store.

    Requires:
        - make_store() returns an empty store
    """

    def test_lifecycle( self ):
        """
        Test create, get, list and delete.

        Ensures:
            - A created grid is empty and listed
            - A deleted grid is gone
        """
        store = self.make_store()
        grid  = store.create_grid( "People" )

        self.assertIsInstance( grid, GridHandle )
        self.assertEqual( grid.name, "People" )
        self.assertEqual( store.get_grid( "People" ), grid )
        self.assertIn( "People", store.list_table_names() )
        self.assertEqual( store.read_all( grid ), [] )

        store.delete_grid( grid )
        self.assertIsNone( store.get_grid( "People" ) )
        self.assertNotIn( "People", store.list_table_names() )

    def test_duplicate_create_raises( self ):
        store = self.make_store()
        store.create_grid( "People" )

        with self.assertRaises( ValueError ):
            store.create_grid( "People" )

    def test_row_operations( self ):
        """
        Test append_row, write_all, clear and row_count.

        Ensures:
            - Rows come back in order, header first
            - write_all replaces everything
            - clear leaves an empty but existing grid
        """
        store = self.make_store()
        grid  = store.create_grid( "People" )

        store.append_row( grid, [ "Id", "Name", "Age" ] )
        store.append_row( grid, [ 1, "A", 1 ] )
        self.assertEqual( store.read_all( grid ), [ [ "Id", "Name", "Age" ], [ 1, "A", 1 ] ] )
        self.assertEqual( store.row_count( grid ), 2 )

        store.write_all( grid, [ [ "Id", "Name" ], [ 5, "E" ] ] )
        self.assertEqual( store.read_all( grid ), [ [ "Id", "Name" ], [ 5, "E" ] ] )

        store.clear( grid )
        self.assertEqual( store.read_all( grid ), [] )
        self.assertIsNotNone( store.get_grid( "People" ) )

    def test_cell_types_and_ragged_rows( self ):
        """
        Test that mixed cell types and row lengths survive storage.
        """
        store = self.make_store()
        grid  = store.create_grid( "Mixed" )
        rows  = [ [ "Id", "Name", "Score" ], [ 1, "Zoë", 2.5 ], [ 2, None ], [ 3, "", True ] ]

        store.write_all( grid, rows )
        self.assertEqual( store.read_all( grid ), rows )

    def test_reads_are_copies( self ):
        """
        Test caller mutation does not reach the stored grid.
        """
        store = self.make_store()
        grid  = store.create_grid( "People" )
        row   = [ 1, "A" ]
        store.append_row( grid, row )

        row[ 1 ] = "changed"
        read = store.read_all( grid )
        read[ 0 ][ 1 ] = "changed again"

        self.assertEqual( store.read_all( grid ), [ [ 1, "A" ] ] )

    def test_invalid_names_raise( self ):
        store = self.make_store()
        for bad_name in ( "", "a/b", "..", "a\\b" ):
            with self.assertRaises( ValueError ):
                store.create_grid( bad_name )


class TestMemoryGridStore( GridStoreContract, unittest.TestCase ):
    """Unit tests for MemoryGridStore."""

    def make_store( self ):
        return MemoryGridStore()


class TestParquetGridStore( GridStoreContract, unittest.TestCase ):
    """
    Unit tests for ParquetGridStore.

    Ensures:
        - Each table is one parquet file under base_path
    """

    def setUp( self ):
        self.tmp_dir = tempfile.mkdtemp()

    def tearDown( self ):
        shutil.rmtree( self.tmp_dir, ignore_errors=True )

    def make_store( self ):
        return ParquetGridStore( base_path=os.path.join( self.tmp_dir, "tables" ) )

    def test_file_layout( self ):
        """
        Test parquet file placement and listing.

        Ensures:
            - create_grid writes {base_path}/{name}.parquet
            - list_table_names is sorted and ignores other files
            - A store over a missing directory lists nothing
        """
        store = self.make_store()
        self.assertEqual( store.list_table_names(), [] )

        store.create_grid( "b" )
        store.create_grid( "a" )
        with open( os.path.join( store.base_path, "notes.txt" ), "w" ) as f:
            f.write( "not a table" )

        self.assertTrue( os.path.exists( os.path.join( store.base_path, "a.parquet" ) ) )
        self.assertEqual( store.list_table_names(), [ "a", "b" ] )

    def test_visible_to_second_store( self ):
        """
        Test another store over the same directory sees the same grids.
        """
        first = self.make_store()
        grid  = first.create_grid( "People" )
        first.write_all( grid, [ [ "Id" ], [ 1 ] ] )

        second = self.make_store()
        self.assertEqual( second.read_all( second.get_grid( "People" ) ), [ [ "Id" ], [ 1 ] ] )

    def test_missing_file_raises( self ):
        store  = self.make_store()
        handle = GridHandle( name="Ghost", location=store.get_parquet_path( "Ghost" ) )

        with self.assertRaises( FileNotFoundError ):
            store.read_all( handle )

    def test_requires_base_path( self ):
        with self.assertRaises( ValueError ):
            ParquetGridStore( base_path="" )


class TestValidateTableName( unittest.TestCase ):

    def test_valid_name_returned( self ):
        self.assertEqual( validate_table_name( "People 2024" ), "People 2024" )


if __name__ == "__main__":
    unittest.main()
