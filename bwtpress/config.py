"""
Configuration for bwtpress.

CompressionOptions selects the pipeline stages for one compress call.
Settings holds process-wide defaults for the command line and the
archive store, read from the environment.
"""

import os
from dataclasses import dataclass, field as dataclass_field
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional, Tuple

from bwtpress.models import STAGE_BWT, STAGE_MTF, STAGE_RLE

__all__ = [
    'DEFAULT_STAGES',
    'KNOWN_STAGES',
    'CompressionOptions',
    'Settings',
    'parse_stage_list',
]

# Canonical application order
DEFAULT_STAGES: Tuple[str, ...] = (STAGE_BWT, STAGE_MTF, STAGE_RLE)
KNOWN_STAGES = frozenset(DEFAULT_STAGES)

ENV_STORE_DIR = 'BWTPRESS_STORE_DIR'
ENV_VERBOSE = 'BWTPRESS_VERBOSE'
DEFAULT_STORE_DIR = Path.home() / '.bwtpress' / 'saved'


def parse_stage_list(text: str) -> Tuple[str, ...]:
    """
    Parse a comma separated stage list such as "bwt,mtf,rle"

    Examples:
        >>> parse_stage_list('rle, bwt')
        ('rle', 'bwt')
    """
    return tuple(part.strip().lower() for part in text.split(',') if part.strip())


@dataclass(frozen=True)
class CompressionOptions:
    """
    Options for one compress call.

    stages may be given in any order and with repeats; it is stored as
    the canonical BWT, MTF, RLE order. An empty selection compresses
    nothing and records the pass-through stage list.
    """
    stages: Tuple[str, ...] = DEFAULT_STAGES

    def __post_init__(self):
        requested = tuple(self.stages)
        unknown = [s for s in requested if s not in KNOWN_STAGES]
        if unknown:
            raise ValueError(f"Unknown pipeline stage(s): {', '.join(map(str, unknown))}")
        ordered = tuple(s for s in DEFAULT_STAGES if s in requested)
        object.__setattr__(self, 'stages', ordered)

    @classmethod
    def from_mapping(cls, options: Optional[Mapping[str, Any]]) -> 'CompressionOptions':
        """Build from a plain mapping ({'stages': [...]}, or the legacy 'pipeline' key)"""
        if not options:
            return cls()
        stages: Optional[Iterable[str]] = options.get('stages', options.get('pipeline'))
        if stages is None:
            return cls()
        if isinstance(stages, str):
            return cls(parse_stage_list(stages))
        return cls(tuple(stages))


def _env_flag(value: Optional[str]) -> bool:
    return (value or '').strip().lower() in ('1', 'true', 'yes', 'on')


@dataclass
class Settings:
    """Process-wide settings"""
    store_dir: Path = dataclass_field(default_factory=lambda: DEFAULT_STORE_DIR)
    verbose: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'Settings':
        environ = os.environ if environ is None else environ
        store_dir = environ.get(ENV_STORE_DIR)
        return cls(
            store_dir=Path(store_dir).expanduser() if store_dir else DEFAULT_STORE_DIR,
            verbose=_env_flag(environ.get(ENV_VERBOSE)),
        )
