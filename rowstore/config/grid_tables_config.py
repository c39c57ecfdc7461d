#!/usr/bin/env python3
"""
Configuration for grid tables.

Precedence when loading:
    1. Environment variables (ROWSTORE_DEBUG, ROWSTORE_CRITERIA_MODE, ...)
    2. INI file block (configparser, keys written with spaces: "criteria mode = query")
    3. Dataclass defaults
"""

import os
from configparser import ConfigParser
from dataclasses import dataclass, fields
from typing import Optional

VALID_CRITERIA_MODES   = [ "query", "predicate" ]
VALID_ID_POLICIES      = [ "row_count", "monotonic" ]
VALID_STORAGE_BACKENDS = [ "memory", "parquet" ]

ENV_PREFIX = "ROWSTORE_"

_BOOLEAN_STATES = { "1": True, "yes": True, "true": True, "on": True, "0": False, "no": False, "false": False, "off": False }


@dataclass
class GridTablesConfig:
    """
    Configuration for the grid tables engine and its sessions.

    Requires:
        - criteria_mode is one of VALID_CRITERIA_MODES
        - id_policy is one of VALID_ID_POLICIES
        - storage_backend is one of VALID_STORAGE_BACKENDS

    Ensures:
        - Defaults select query matching, row-count ids and in-memory storage
    """

    # === Logging ===
    debug                   : bool = False
    instrumentation_enabled : bool = True    # Timing lines, emitted through the log hook

    # === Matching ===
    criteria_mode : str = "query"        # "query" (translated expression) or "predicate" (in-process)

    # === Identifiers ===
    id_policy : str = "row_count"        # "row_count" (grid row count) or "monotonic" (max id + 1)

    # === Storage ===
    storage_backend : str = "memory"
    storage_path    : str = "io/grid-tables"

    def __post_init__( self ):
        if self.criteria_mode not in VALID_CRITERIA_MODES:
            raise ValueError( f"Unknown criteria mode '{self.criteria_mode}'. Valid: {VALID_CRITERIA_MODES}" )
        if self.id_policy not in VALID_ID_POLICIES:
            raise ValueError( f"Unknown id policy '{self.id_policy}'. Valid: {VALID_ID_POLICIES}" )
        if self.storage_backend not in VALID_STORAGE_BACKENDS:
            raise ValueError( f"Unknown storage backend '{self.storage_backend}'. Valid: {VALID_STORAGE_BACKENDS}" )


def _to_bool( value ):
    """Parse a configparser-style boolean string."""
    if isinstance( value, bool ):
        return value
    key = str( value ).strip().lower()
    if key not in _BOOLEAN_STATES:
        raise ValueError( f"Not a boolean: '{value}'" )
    return _BOOLEAN_STATES[ key ]


def _coerce( field_type, value ):
    if field_type in ( bool, "bool" ):
        return _to_bool( value )
    return str( value ).strip()


def load_config( config_path: Optional[str]=None, config_block_id: str="default", environ: Optional[dict]=None ) -> GridTablesConfig:
    """
    Build a GridTablesConfig from defaults, an optional INI file and the environment.

    Requires:
        - config_path is None or a path to an INI file
        - environ is None (use os.environ) or a dict of environment variables

    Ensures:
        - Returns a validated GridTablesConfig
        - Environment variables override INI values, which override defaults
        - Unknown INI keys are ignored

    Raises:
        - FileNotFoundError if config_path is given but does not exist
        - ValueError if config_block_id is missing from the file or a value is invalid
    """
    environ = os.environ if environ is None else environ
    values  = { }
    types   = { f.name: f.type for f in fields( GridTablesConfig ) }

    if config_path is not None:
        if not os.path.exists( config_path ):
            raise FileNotFoundError( f"Config file not found: {config_path}" )

        parser = ConfigParser()
        parser.read( config_path )
        if config_block_id not in parser:
            raise ValueError( f"Config block '{config_block_id}' not found in {config_path}" )

        for key, value in parser[ config_block_id ].items():
            name = key.strip().replace( " ", "_" )
            if name in types:
                values[ name ] = _coerce( types[ name ], value )

    for name, field_type in types.items():
        env_value = environ.get( ENV_PREFIX + name.upper() )
        if env_value is not None:
            values[ name ] = _coerce( field_type, env_value )

    return GridTablesConfig( **values )


def make_store( config: GridTablesConfig ):
    """
    Build the grid store named by config.storage_backend.

    Ensures:
        - Returns MemoryGridStore for "memory"
        - Returns ParquetGridStore rooted at config.storage_path for "parquet"
    """
    from rowstore.grid_tables.storage import MemoryGridStore, ParquetGridStore

    if config.storage_backend == "parquet":
        return ParquetGridStore( config.storage_path, debug=config.debug )

    return MemoryGridStore( debug=config.debug )
