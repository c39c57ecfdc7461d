"""
rowstore: named tables over row-and-column grids.

Subpackages:
    grid_tables  registry, sessions, criteria translation and grid stores
    config       GridTablesConfig and its loader
    cli          command line access to parquet-backed tables
    utils        shared utilities (Stopwatch)
"""

__version__ = "0.1.0"
