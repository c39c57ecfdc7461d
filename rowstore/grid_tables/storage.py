#!/usr/bin/env python3
"""
Grid stores: the backing storage behind grid tables.

A grid is an ordered list of rows, row 0 being the header. Every grid store
offers the same capability set, so the registry and sessions never know
which one they are talking to:

    list_table_names, create_grid, delete_grid, get_grid,
    read_all, append_row, write_all, clear

Implementations:
    MemoryGridStore   in-process dict of row lists
    ParquetGridStore  one parquet file per table

Parquet layout:
    {base_path}/{table_name}.parquet, one JSON-encoded grid row per record
    in a single "row" column, so cell types and ragged rows survive a round trip.
"""

import copy
import json
import logging
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass

import pandas as pd

logger = logging.getLogger( __name__ )

PARQUET_SUFFIX = ".parquet"
ROW_COLUMN     = "row"


@dataclass( frozen=True )
class GridHandle:
    """
    Reference to one grid inside a store.

    Attributes:
        name: Table name the grid backs
        location: Store-specific address (file path for parquet, name in memory)
    """
    name     : str
    location : str


def validate_table_name( table_name ):
    """
    Validate a table name before it is used as a grid key or file name.

    Requires:
        - table_name is a string

    Ensures:
        - Returns the name unchanged when it is usable

    Raises:
        - ValueError if the name is empty or contains a path separator
    """
    if not table_name or not str( table_name ).strip():
        raise ValueError( "table_name is required and cannot be empty" )

    if "/" in table_name or "\\" in table_name or table_name in ( ".", ".." ):
        raise ValueError( f"Invalid table name '{table_name}': path separators are not allowed" )

    return table_name


class GridStore( ABC ):
    """Capability interface every grid backend implements."""

    @abstractmethod
    def list_table_names( self ):
        """Return the names of all grids in the store."""

    @abstractmethod
    def create_grid( self, table_name ):
        """Create an empty grid and return its GridHandle."""

    @abstractmethod
    def delete_grid( self, handle ):
        """Destroy the grid behind handle."""

    @abstractmethod
    def get_grid( self, table_name ):
        """Return the GridHandle for table_name, or None when absent."""

    @abstractmethod
    def read_all( self, handle ):
        """Return every row of the grid as a list of lists, header first."""

    @abstractmethod
    def append_row( self, handle, raw_row ):
        """Append one row after the last row of the grid."""

    @abstractmethod
    def write_all( self, handle, rows ):
        """Replace the grid contents with rows, header included."""

    @abstractmethod
    def clear( self, handle ):
        """Remove every row from the grid, leaving it empty but present."""

    def row_count( self, handle ):
        """
        Count the grid's rows, header included.

        Ensures:
            - Returns len( read_all( handle ) ); stores may override with something cheaper
        """
        return len( self.read_all( handle ) )


class MemoryGridStore( GridStore ):
    """
    In-process grid store.

    Rows are deep-copied on the way in and out, so a caller mutating a row it
    read never changes the stored grid.

    Constructor args:
        debug: Log every grid operation
    """

    def __init__( self, debug=False ):
        self.debug  = debug
        self._grids = { }

    def _rows( self, handle ):
        if handle.location not in self._grids:
            raise KeyError( f"Grid '{handle.location}' does not exist" )
        return self._grids[ handle.location ]

    def list_table_names( self ):
        return list( self._grids.keys() )

    def create_grid( self, table_name ):
        validate_table_name( table_name )
        if table_name in self._grids:
            raise ValueError( f"Grid '{table_name}' already exists" )

        self._grids[ table_name ] = [ ]
        if self.debug: logger.debug( f"MemoryGridStore.create_grid: {table_name}" )
        return GridHandle( name=table_name, location=table_name )

    def delete_grid( self, handle ):
        self._rows( handle )
        del self._grids[ handle.location ]
        if self.debug: logger.debug( f"MemoryGridStore.delete_grid: {handle.name}" )

    def get_grid( self, table_name ):
        if table_name not in self._grids:
            return None
        return GridHandle( name=table_name, location=table_name )

    def read_all( self, handle ):
        return copy.deepcopy( self._rows( handle ) )

    def append_row( self, handle, raw_row ):
        self._rows( handle ).append( list( copy.deepcopy( raw_row ) ) )

    def write_all( self, handle, rows ):
        self._rows( handle )
        self._grids[ handle.location ] = [ list( row ) for row in copy.deepcopy( rows ) ]
        if self.debug: logger.debug( f"MemoryGridStore.write_all: {len( rows )} rows to {handle.name}" )

    def clear( self, handle ):
        self._rows( handle ).clear()

    def row_count( self, handle ):
        return len( self._rows( handle ) )


class ParquetGridStore( GridStore ):
    """
    Parquet-backed grid store, one file per table under base_path.

    Constructor args:
        base_path: Directory holding the parquet files (created on first write)
        debug: Log file reads and writes
    """

    def __init__( self, base_path, debug=False ):
        """
        Initialize ParquetGridStore.

        Requires:
            - base_path is a non-empty path string

        Ensures:
            - self.base_path is set
            - No file is touched until the first write
        """
        if not base_path or not str( base_path ).strip():
            raise ValueError( "base_path is required and cannot be empty" )

        self.base_path = str( base_path )
        self.debug     = debug

        if self.debug: logger.debug( f"ParquetGridStore: base_path={self.base_path}" )

    def get_parquet_path( self, table_name ):
        """
        Get the parquet file path for a table.

        Ensures:
            - Returns path string: {base_path}/{table_name}.parquet

        Raises:
            - ValueError if table_name is not a valid table name
        """
        validate_table_name( table_name )
        return os.path.join( self.base_path, f"{table_name}{PARQUET_SUFFIX}" )

    def _path( self, handle ):
        if not os.path.exists( handle.location ):
            raise FileNotFoundError( f"Grid file {handle.location} does not exist" )
        return handle.location

    def _save_rows( self, path, rows ):
        """
        Write rows to parquet, one JSON-encoded row per record.

        Ensures:
            - base_path exists
            - The file holds exactly len( rows ) records
        """
        os.makedirs( self.base_path, exist_ok=True )

        encoded = [ json.dumps( list( row ) ) for row in rows ]
        df      = pd.DataFrame( { ROW_COLUMN: pd.Series( encoded, dtype="string" ) } )

        if self.debug: logger.debug( f"ParquetGridStore: Writing {len( df )} rows to {path}" )
        df.to_parquet( path, index=False )

    def _load_rows( self, path ):
        if self.debug: logger.debug( f"ParquetGridStore: Reading {path}" )
        df = pd.read_parquet( path )
        return [ json.loads( encoded ) for encoded in df[ ROW_COLUMN ].tolist() ]

    def list_table_names( self ):
        if not os.path.isdir( self.base_path ):
            return []

        return sorted(
            file_name[ :-len( PARQUET_SUFFIX ) ]
            for file_name in os.listdir( self.base_path )
            if file_name.endswith( PARQUET_SUFFIX )
        )

    def create_grid( self, table_name ):
        path = self.get_parquet_path( table_name )
        if os.path.exists( path ):
            raise ValueError( f"Grid file {path} already exists" )

        self._save_rows( path, [] )
        return GridHandle( name=table_name, location=path )

    def delete_grid( self, handle ):
        os.remove( self._path( handle ) )
        if self.debug: logger.debug( f"ParquetGridStore: Deleted {handle.location}" )

    def get_grid( self, table_name ):
        path = self.get_parquet_path( table_name )
        if not os.path.exists( path ):
            return None
        return GridHandle( name=table_name, location=path )

    def read_all( self, handle ):
        return self._load_rows( self._path( handle ) )

    def append_row( self, handle, raw_row ):
        path = self._path( handle )
        rows = self._load_rows( path )
        rows.append( list( raw_row ) )
        self._save_rows( path, rows )

    def write_all( self, handle, rows ):
        self._save_rows( self._path( handle ), rows )

    def clear( self, handle ):
        self._save_rows( self._path( handle ), [] )
