"""
SQL functions that need a different spelling per database dialect.
"""
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.sql.functions import FunctionElement
from sqlalchemy.types import Integer


class day_span(FunctionElement):
    """Whole days between two dates: ``day_span(later, earlier)``."""

    type = Integer()
    name = "day_span"
    inherit_cache = True


def _operands(element, compiler, **kw):
    later, earlier = list(element.clauses)
    return compiler.process(later, **kw), compiler.process(earlier, **kw)


@compiles(day_span)
def _compile_day_span(element, compiler, **kw):
    return "DATEDIFF(%s, %s)" % _operands(element, compiler, **kw)


@compiles(day_span, "sqlite")
def _compile_day_span_sqlite(element, compiler, **kw):
    return "CAST(julianday(%s) - julianday(%s) AS INTEGER)" % _operands(element, compiler, **kw)


@compiles(day_span, "postgresql")
def _compile_day_span_postgresql(element, compiler, **kw):
    return "(CAST(%s AS DATE) - CAST(%s AS DATE))" % _operands(element, compiler, **kw)
