"""
Unit tests for GridTablesConfig and load_config.

Tests configuration handling including:
- Dataclass defaults and validation
- INI file blocks read with configparser
- Environment variable overrides
- Store construction from config
"""

import os
import shutil
import tempfile
import unittest

from rowstore.config.grid_tables_config import GridTablesConfig, load_config, make_store
from rowstore.grid_tables.storage import MemoryGridStore, ParquetGridStore


class TestGridTablesConfig( unittest.TestCase ):
    """
    Unit tests for the GridTablesConfig dataclass.
    """

    def test_defaults( self ):
        config = GridTablesConfig()

        self.assertFalse( config.debug )
        self.assertTrue( config.instrumentation_enabled )
        self.assertEqual( config.criteria_mode, "query" )
        self.assertEqual( config.id_policy, "row_count" )
        self.assertEqual( config.storage_backend, "memory" )

    def test_invalid_values_raise( self ):
        """
        Test validation in __post_init__.

        Ensures:
            - Unknown criteria modes, id policies and backends raise ValueError
        """
        with self.assertRaises( ValueError ):
            GridTablesConfig( criteria_mode="sql" )
        with self.assertRaises( ValueError ):
            GridTablesConfig( id_policy="uuid" )
        with self.assertRaises( ValueError ):
            GridTablesConfig( storage_backend="sheets" )


class TestLoadConfig( unittest.TestCase ):
    """
    Unit tests for load_config.

    Ensures:
        - Environment > INI block > defaults
    """

    def setUp( self ):
        self.tmp_dir     = tempfile.mkdtemp()
        self.config_path = os.path.join( self.tmp_dir, "rowstore.ini" )

        with open( self.config_path, "w" ) as f:
            f.write( "[default]\n" )
            f.write( "criteria mode = predicate\n" )
            f.write( "instrumentation enabled = false\n" )
            f.write( "unrelated key = ignored\n" )
            f.write( "\n[monotonic]\n" )
            f.write( "id policy = monotonic\n" )
            f.write( "storage backend = parquet\n" )
            f.write( "storage path = /tmp/tables\n" )

    def tearDown( self ):
        shutil.rmtree( self.tmp_dir, ignore_errors=True )

    def test_defaults_without_file( self ):
        self.assertEqual( load_config( environ={} ), GridTablesConfig() )

    def test_ini_block( self ):
        """
        Test reading INI blocks.

        Ensures:
            - Keys written with spaces map to dataclass fields
            - Boolean strings are parsed
            - Unknown keys are ignored
        """
        config = load_config( self.config_path, environ={} )

        self.assertEqual( config.criteria_mode, "predicate" )
        self.assertFalse( config.instrumentation_enabled )
        self.assertEqual( config.id_policy, "row_count" )

        config = load_config( self.config_path, config_block_id="monotonic", environ={} )

        self.assertEqual( config.id_policy, "monotonic" )
        self.assertEqual( config.storage_backend, "parquet" )
        self.assertEqual( config.storage_path, "/tmp/tables" )

    def test_environment_overrides_ini( self ):
        environ = { "ROWSTORE_CRITERIA_MODE": "query", "ROWSTORE_DEBUG": "yes" }
        config  = load_config( self.config_path, environ=environ )

        self.assertEqual( config.criteria_mode, "query" )
        self.assertTrue( config.debug )
        self.assertFalse( config.instrumentation_enabled )

    def test_bad_values_raise( self ):
        with self.assertRaises( ValueError ):
            load_config( environ={ "ROWSTORE_DEBUG": "maybe" } )
        with self.assertRaises( ValueError ):
            load_config( environ={ "ROWSTORE_ID_POLICY": "random" } )

    def test_missing_file_or_block( self ):
        with self.assertRaises( FileNotFoundError ):
            load_config( os.path.join( self.tmp_dir, "missing.ini" ), environ={} )
        with self.assertRaises( ValueError ):
            load_config( self.config_path, config_block_id="nope", environ={} )


class TestMakeStore( unittest.TestCase ):

    def test_memory_store( self ):
        self.assertIsInstance( make_store( GridTablesConfig() ), MemoryGridStore )

    def test_parquet_store( self ):
        tmp_dir = tempfile.mkdtemp()
        try:
            store = make_store( GridTablesConfig( storage_backend="parquet", storage_path=tmp_dir ) )
            self.assertIsInstance( store, ParquetGridStore )
            self.assertEqual( store.base_path, tmp_dir )
        finally:
            shutil.rmtree( tmp_dir, ignore_errors=True )


if __name__ == "__main__":
    unittest.main()
