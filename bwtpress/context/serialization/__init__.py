"""
Serialization context: the BWTJS1 container format.
"""

from bwtpress.context.serialization.container import (
    MAGIC_HEADER,
    serialize,
    parse,
    read_container,
    write_container,
    validate_serialization,
)

__all__ = [
    'MAGIC_HEADER',
    'serialize',
    'parse',
    'read_container',
    'write_container',
    'validate_serialization',
]
