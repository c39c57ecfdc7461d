"""
Grid Tables.

Named tables over row-and-column grids: create and drop tables, select one
into a cached session, and find, insert, update and delete rows by criteria.
    Layer 1: Grid stores, column schemas, row codec (storage boundary)
    Layer 2: Criteria translation and query evaluation
    Layer 3: Table registry, table sessions and the GridTables engine
"""

__version__ = "0.1.0"

from rowstore.grid_tables.exceptions import (
    GridTableError,
    DuplicateTableError,
    TableNotFoundError,
    SchemaError,
    ColumnNotFoundError,
)

from rowstore.grid_tables.schemas import ID_COLUMN, EMPTY_VALUE

from rowstore.grid_tables.row_codec import to_object, to_raw, to_raw_from_partial

from rowstore.grid_tables.criteria import Clause, Predicate, build_predicate, loose_equals

from rowstore.grid_tables.storage import GridHandle, GridStore, MemoryGridStore, ParquetGridStore

from rowstore.grid_tables.query_evaluator import QueryEvaluator, PandasQueryEvaluator

from rowstore.grid_tables.registry import TableRegistry, TableEntry

from rowstore.grid_tables.session import TableSession, select_table

from rowstore.grid_tables.engine import GridTables, load
