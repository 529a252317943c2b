"""Utility functions."""

from .projection import (
    QueryShape,
    ResolvedQuery,
    page_props_generator,
    projection_and_page_props_generator,
    projection_generator,
    resolve_query_shape,
)
from .random import number_generator, string_generator

__all__ = [
    "QueryShape",
    "ResolvedQuery",
    "page_props_generator",
    "projection_and_page_props_generator",
    "projection_generator",
    "resolve_query_shape",
    "number_generator",
    "string_generator",
]
