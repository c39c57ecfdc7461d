#!/usr/bin/env python3
"""
Command line access to parquet-backed grid tables.

Usage:
    python3 -m rowstore.cli.grid_tables_cli --path io/tables create People Id Name Age
    python3 -m rowstore.cli.grid_tables_cli --path io/tables insert People '{"Name": "A", "Age": 1}'
    python3 -m rowstore.cli.grid_tables_cli --path io/tables find People --where '{"Age": 1}'
    python3 -m rowstore.cli.grid_tables_cli --path io/tables update People '{"Name": "A"}' '{"Age": 9}'
    python3 -m rowstore.cli.grid_tables_cli --path io/tables delete People '{"Name": "B"}'
    python3 -m rowstore.cli.grid_tables_cli --path io/tables export People

Environment Variables:
    ROWSTORE_STORAGE_PATH: Table directory used when --path is not given
    ROWSTORE_DEBUG: Log operations and timings to stderr
"""

import argparse
import dataclasses
import json
import logging
import sys

from rowstore.config.grid_tables_config import load_config, VALID_CRITERIA_MODES, VALID_ID_POLICIES
from rowstore.grid_tables.engine import GridTables
from rowstore.grid_tables.exceptions import GridTableError
from rowstore.grid_tables.row_codec import to_raw
from rowstore.grid_tables.storage import ParquetGridStore


def _parse_json_object( text, label ):
    """
    Parse a JSON object argument.

    Ensures:
        - Returns the decoded dict

    Raises:
        - ValueError if text is not valid JSON or not an object
    """
    try:
        value = json.loads( text )
    except json.JSONDecodeError as e:
        raise ValueError( f"{label} is not valid JSON: {e}" )

    if not isinstance( value, dict ):
        raise ValueError( f"{label} must be a JSON object, got {type( value ).__name__}" )

    return value


def build_parser():
    """
    Build the argument parser.

    Ensures:
        - Returns an ArgumentParser with one sub-command per table operation
    """
    parser = argparse.ArgumentParser(
        description="Create, query and modify grid tables stored as parquet files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --path io/tables create People Id Name Age
  %(prog)s --path io/tables find People --where '{"Name": "A"}' --one
  %(prog)s --path io/tables list
        """
    )

    parser.add_argument( "--path", help="Directory holding the table files (overrides ROWSTORE_STORAGE_PATH)" )
    parser.add_argument( "--config", help="INI file with a grid tables config block" )
    parser.add_argument( "--config-block", default="default", help="Config block id (default: default)" )
    parser.add_argument( "--criteria-mode", choices=VALID_CRITERIA_MODES, help="Matching path used by find" )
    parser.add_argument( "--id-policy", choices=VALID_ID_POLICIES, help="Identifier assignment policy for insert" )
    parser.add_argument( "--debug", action="store_true", help="Log operations and timings to stderr" )

    commands = parser.add_subparsers( dest="command", required=True )

    create = commands.add_parser( "create", help="Create a table" )
    create.add_argument( "table" )
    create.add_argument( "columns", nargs="+", help="Column names, the first must be Id" )

    drop = commands.add_parser( "drop", help="Drop a table" )
    drop.add_argument( "table" )

    commands.add_parser( "list", help="List tables" )

    find = commands.add_parser( "find", help="Find rows" )
    find.add_argument( "table" )
    find.add_argument( "--where", help="JSON object of column: value criteria" )
    find.add_argument( "--one", action="store_true", help="Return only the first match" )

    insert = commands.add_parser( "insert", help="Insert a row" )
    insert.add_argument( "table" )
    insert.add_argument( "data", help="JSON object of column: value pairs" )

    update = commands.add_parser( "update", help="Update matching rows" )
    update.add_argument( "table" )
    update.add_argument( "where", help="JSON object of column: value criteria" )
    update.add_argument( "values", help="JSON object of column: new value pairs" )

    delete = commands.add_parser( "delete", help="Delete matching rows" )
    delete.add_argument( "table" )
    delete.add_argument( "where", help="JSON object of column: value criteria" )

    export = commands.add_parser( "export", help="Print a table as a header row plus raw rows" )
    export.add_argument( "table" )

    return parser


def build_engine( args ):
    """
    Build a parquet-backed engine from parsed arguments.

    Ensures:
        - Config precedence: command line > environment > INI file > defaults
        - Returns a GridTables over a ParquetGridStore
    """
    config    = load_config( config_path=args.config, config_block_id=args.config_block )
    overrides = { "storage_backend": "parquet" }

    if args.path:          overrides[ "storage_path" ]  = args.path
    if args.criteria_mode: overrides[ "criteria_mode" ] = args.criteria_mode
    if args.id_policy:     overrides[ "id_policy" ]     = args.id_policy
    if args.debug:         overrides[ "debug" ]         = True

    config = dataclasses.replace( config, **overrides )
    store  = ParquetGridStore( config.storage_path, debug=config.debug )

    return GridTables( store=store, config=config )


def run_command( engine, args ):
    """
    Execute one sub-command.

    Requires:
        - engine is a GridTables
        - args is the namespace from build_parser().parse_args()

    Ensures:
        - Returns a JSON-serializable result

    Raises:
        - GridTableError subclasses from the engine
        - ValueError for malformed JSON arguments
    """
    if args.command == "create":
        entry = engine.create_table( args.table, args.columns )
        return { "status": "created", "table": args.table, "columns": entry.columns }

    if args.command == "drop":
        engine.drop_table( args.table )
        return { "status": "dropped", "table": args.table }

    if args.command == "list":
        return { "status": "ok", "tables": engine.list_tables() }

    session = engine.select_table( args.table )

    if args.command == "find":
        criteria = _parse_json_object( args.where, "--where" ) if args.where else None
        if args.one:
            return session.find_one( criteria or {} )
        return session.find_where( criteria ) if criteria else session.find_all()

    if args.command == "insert":
        return session.insert( _parse_json_object( args.data, "data" ) )

    if args.command == "update":
        count = session.update( _parse_json_object( args.where, "where" ), _parse_json_object( args.values, "values" ) )
        return { "status": "updated", "updated_count": count }

    if args.command == "delete":
        count = session.delete( _parse_json_object( args.where, "where" ) )
        return { "status": "deleted", "deleted_count": count }

    if args.command == "export":
        rows = [ to_raw( row, session.columns ) for row in session.find_all() ]
        return { "status": "ok", "table": args.table, "rows": [ session.columns ] + rows }

    raise ValueError( f"Unknown command '{args.command}'" )


def main( argv=None ):
    """
    CLI entry point.

    Ensures:
        - Prints the command result as JSON on stdout
        - Prints library and argument errors on stderr
        - Returns 0 on success, 1 on failure
    """
    parser = build_parser()
    args   = parser.parse_args( argv )

    if args.debug:
        logging.basicConfig( level=logging.DEBUG, stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s" )

    try:
        engine = build_engine( args )
        result = run_command( engine, args )
    except ( GridTableError, ValueError ) as e:
        print( f"✗ {e}", file=sys.stderr )
        return 1

    print( json.dumps( result, indent=2, default=str ) )
    return 0


if __name__ == "__main__":
    sys.exit( main() )
