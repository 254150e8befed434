"""
Store accessor package.

Public API:
- StoreClient / StoreError: HTTP access to /routes, /markers, /route-state
- RouteCollection / MarkerCollection: optimistic local lists with rollback
- parse_export / build_export: browser-storage export conversion
"""
from .client import StoreClient, StoreError
from .collections import MarkerCollection, RouteCollection
from .migration import build_export, parse_export

__all__ = ["StoreClient",
           "StoreError",
             "RouteCollection",
               "MarkerCollection",
               "parse_export",
               "build_export",
               ]
