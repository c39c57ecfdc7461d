#!/usr/bin/env python3
"""
Criteria translation for grid table lookups.

A criteria dict such as { "Name": "A", "Age": 1 } becomes a Predicate: a
list of tagged Clause models (column, index, operator, value). One
Predicate drives both evaluation paths:

    Predicate.matches( row_object )  in-process loose equality
    Predicate.to_expression()        "c1 == 'A' and c2 == '1'" for a QueryEvaluator

Both paths coerce cells through cell_text, so a number and its string form
select the same rows either way. A numeric string that is not in canonical
form ("1.0" against 1) only matches in-process.
"""

from typing import Any, ClassVar, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from rowstore.grid_tables.exceptions import ColumnNotFoundError
from rowstore.grid_tables.schemas import column_index, EMPTY_VALUE


def cell_text( value ):
    """
    Render a cell value as the text used for comparisons.

    Ensures:
        - None renders as EMPTY_VALUE
        - Booleans render as "true" / "false"
        - Integral floats render without a fractional part (1.0 -> "1")
        - Everything else renders with str()
    """
    if value is None:
        return EMPTY_VALUE
    if isinstance( value, bool ):
        return "true" if value else "false"
    if isinstance( value, float ) and value.is_integer():
        return str( int( value ) )
    return str( value )


def _as_number( value ):
    """Return value as a float when it is numeric or a numeric string, else None."""
    if isinstance( value, bool ):
        return None
    if isinstance( value, ( int, float ) ):
        return float( value )
    if isinstance( value, str ) and value.strip():
        try:
            return float( value.strip() )
        except ValueError:
            return None
    return None


def loose_equals( left, right ):
    """
    Compare two cell values the way grid cells compare.

    Requires:
        - left and right are cell values (str, int, float, bool or None)

    Ensures:
        - Returns True when the text forms are equal
        - Returns True when one side is a number and the other parses to the same number
        - Empty strings never equal zero
    """
    if cell_text( left ) == cell_text( right ):
        return True

    if isinstance( left, str ) == isinstance( right, str ):
        return False

    left_number  = _as_number( left )
    right_number = _as_number( right )
    return left_number is not None and left_number == right_number


class Clause( BaseModel ):
    """
    One equality test against one column.

    Fields:
        column: Column name from the criteria dict (any header cell value, usually a string)
        index: Grid position of the column, None when the schema lacks it
        operator: Comparison operator, always "=="
        value: Expected cell value
    """

    model_config = ConfigDict( frozen=True )

    column   : Any           = Field( ..., description="Column name, as found in the header row" )
    index    : Optional[int] = Field( default=None, description="Grid position, None if unknown" )
    operator : str           = Field( default="==", description="Comparison operator" )
    value    : Any           = Field( default=EMPTY_VALUE, description="Expected cell value" )

    VALID_OPERATORS: ClassVar[ List[ str ] ] = [ "==" ]

    @field_validator( "operator" )
    @classmethod
    def validate_operator( cls, v ):
        """Validate operator is a supported comparison."""
        if v not in cls.VALID_OPERATORS:
            raise ValueError( f"operator must be one of {cls.VALID_OPERATORS}, got '{v}'" )
        return v

    def holds( self, row_object ):
        """
        Evaluate this clause against a row object.

        Ensures:
            - Returns False when the column is unknown to the schema
            - Returns loose_equals( row value, clause value ) otherwise
        """
        if self.index is None or self.column not in row_object:
            return False
        return loose_equals( row_object[ self.column ], self.value )

    def to_expression( self ):
        """
        Render this clause for a QueryEvaluator.

        Requires:
            - self.index is not None

        Ensures:
            - Returns "c<index> == '<text>'" with the text quoted as a Python literal
        """
        return f"c{self.index} {self.operator} {cell_text( self.value )!r}"


class Predicate( BaseModel ):
    """
    Conjunction of clauses built from one criteria dict.

    An empty predicate matches every row.
    """

    model_config = ConfigDict( frozen=True )

    clauses : List[ Clause ] = Field( default_factory=list )

    def is_empty( self ):
        return not self.clauses

    def matches( self, row_object ):
        """
        Check a row object against every clause.

        Requires:
            - row_object is a dict produced by row_codec.to_object

        Ensures:
            - Returns True only if all clauses hold
            - Returns True for an empty predicate
        """
        return all( clause.holds( row_object ) for clause in self.clauses )

    def to_expression( self ):
        """
        Render the conjunction for a QueryEvaluator.

        Ensures:
            - Returns clause expressions joined with " and "
            - Returns "" for an empty predicate

        Raises:
            - ColumnNotFoundError if any clause has no grid position
        """
        for clause in self.clauses:
            if clause.index is None:
                raise ColumnNotFoundError( clause.column )

        return " and ".join( clause.to_expression() for clause in self.clauses )


def build_predicate( criteria, columns, strict=True, table_name=None ):
    """
    Translate a criteria dict into a Predicate over a column list.

    Requires:
        - criteria is a dict of column_name: expected value (may be empty or None)
        - columns is the table's ordered column list

    Ensures:
        - Returns a Predicate with one Clause per criteria key, in key order
        - With strict=False, unknown columns get index=None and never match

    Raises:
        - ColumnNotFoundError when strict and a key is not in columns
    """
    clauses = []
    for column, value in ( criteria or {} ).items():
        index = column_index( columns, column )
        if index is None and strict:
            raise ColumnNotFoundError( column, table_name )
        clauses.append( Clause( column=column, index=index, value=value ) )

    return Predicate( clauses=clauses )
