"""routegen route table parser.

Reads the ``routesConfig`` literal from ``lib/route_config.dart`` and returns
validated route entries in source order.

Usage::

    from routegen.parser import load_route_table

    table = await load_route_table("lib/route_config.dart")
    for route in table.routes:
        print(route.full_path, route.page)
"""

from routegen.parser.extractor import (
    DEFAULT_TABLE_NAME,
    RouteNamingError,
    load_route_table,
    parse_route_table,
    validate_page_name,
)
from routegen.parser.models import AUTH_GROUP, RouteEntry, RouteTable

__all__ = [
    "AUTH_GROUP",
    "DEFAULT_TABLE_NAME",
    "RouteEntry",
    "RouteNamingError",
    "RouteTable",
    "load_route_table",
    "parse_route_table",
    "validate_page_name",
]
