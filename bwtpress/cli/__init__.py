"""
CLI layer - user interface.
"""

from bwtpress.cli.commands import compress, decompress, info, bench, save, list_items, load, delete

__all__ = [
    'compress',
    'decompress',
    'info',
    'bench',
    'save',
    'list_items',
    'load',
    'delete',
]
