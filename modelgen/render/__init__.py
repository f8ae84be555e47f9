"""Renderers for the storage schema, wire schema and model diagram."""

from .diagram import render_diagram
from .sdl import render_sdl
from .sql import render_sql, sql_statements

__all__ = [
    "render_diagram",
    "render_sdl",
    "render_sql",
    "sql_statements",
]
