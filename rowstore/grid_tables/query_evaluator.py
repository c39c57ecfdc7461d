#!/usr/bin/env python3
"""
Query evaluators for translated criteria expressions.

A QueryEvaluator takes an expression produced by Predicate.to_expression()
and a list of raw rows, and returns the rows that satisfy it. It reads no
state beyond the rows it is given.

PandasQueryEvaluator loads the rows into a DataFrame whose columns are
named c0..c<width-1>, renders every cell through cell_text, and runs
DataFrame.query over the text frame.
"""

import logging
from abc import ABC, abstractmethod

import pandas as pd

from rowstore.grid_tables.criteria import cell_text
from rowstore.grid_tables.row_codec import pad_row

logger = logging.getLogger( __name__ )


class QueryEvaluator( ABC ):
    """Interface for evaluating a criteria expression over a row set."""

    @abstractmethod
    def evaluate( self, expression, rows, width, limit=None ):
        """
        Select the rows matching expression.

        Requires:
            - expression is a string from Predicate.to_expression()
            - rows is a list of raw rows
            - width is the schema width (number of columns)

        Ensures:
            - Returns the matching raw rows in their original order
            - Returns at most limit rows when limit is given
            - An empty expression matches every row
        """


class PandasQueryEvaluator( QueryEvaluator ):
    """
    DataFrame.query-backed evaluator.

    Constructor args:
        debug: Log each expression and its match count
    """

    def __init__( self, debug=False ):
        self.debug = debug

    @staticmethod
    def column_label( index ):
        """Column label used for grid position index inside query expressions."""
        return f"c{index}"

    def to_frame( self, rows, width ):
        """
        Build a text DataFrame from raw rows.

        Ensures:
            - Returns DataFrame with columns c0..c<width-1> and a 0-based RangeIndex
            - Short rows are padded, long rows truncated to width
            - Every cell is a cell_text string
        """
        labels = [ self.column_label( i ) for i in range( width ) ]
        padded = [ pad_row( row, width )[ :width ] for row in rows ]
        frame  = pd.DataFrame( padded, columns=labels, dtype=object )

        return frame.map( cell_text )

    def evaluate( self, expression, rows, width, limit=None ):

        if not rows:
            return []

        if not expression or not expression.strip():
            matched = [ list( row ) for row in rows ]
        else:
            frame   = self.to_frame( rows, width )
            result  = frame.query( expression, engine="python" )
            matched = [ list( rows[ position ] ) for position in result.index ]

        if self.debug: logger.debug( f"PandasQueryEvaluator: [{expression}] matched {len( matched )} of {len( rows )} rows" )

        if limit is not None:
            matched = matched[ :limit ]

        return matched
