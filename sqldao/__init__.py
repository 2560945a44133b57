"""sqldao: DAO helpers over DB-API connections.

Mapped queries, indexed/named parameter binding, cross-vendor pagination,
and stored-procedure calls.
"""

from .core import *  # noqa: F401,F403
from .core import __all__ as _core_all
from .ports import *  # noqa: F401,F403
from .ports import __all__ as _ports_all
from .ports.db_api import connection_product_name, dialect_for_connection, dialect_for_vendor

__all__ = [
    *_core_all,
    *_ports_all,
    "connection_product_name",
    "dialect_for_connection",
    "dialect_for_vendor",
]
