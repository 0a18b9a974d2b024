"""
Archive store: saved container blobs keyed by name

Each item is one MessagePack file in the store directory:

    bwt_compressed_<key>.msgpack = {
        'data': <container bytes>,   # msgpack bin, no base64
        'meta': <metadata dict>,
        'savedAt': <ISO-8601 UTC>,
        'size': <len(data)>,
    }

The store only moves opaque blobs around; it never parses or
decompresses them.
"""

import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

import msgpack

from bwtpress.exceptions import ItemNotFoundError, StoreError
from bwtpress.models import SavedItem

logger = logging.getLogger(__name__)

ITEM_PREFIX = 'bwt_compressed_'
ITEM_SUFFIX = '.msgpack'
KEY_PATTERN = re.compile(r'^[A-Za-z0-9._-]{1,128}$')


def validate_key(key: str) -> str:
    if not isinstance(key, str) or not KEY_PATTERN.match(key) or key in ('.', '..'):
        raise ValueError(f"Invalid store key: {key!r} (use letters, digits, '.', '_' or '-')")
    return key


class ArchiveStore:
    """
    Directory-backed key/value store for compressed blobs.

    Example:
        store = ArchiveStore(Path('~/.bwtpress/saved').expanduser())
        store.save('report', blob, meta)
        blob, meta = store.load('report')
    """

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)

    def _path(self, key: str) -> Path:
        return self.root / f"{ITEM_PREFIX}{validate_key(key)}{ITEM_SUFFIX}"

    def save(self, key: str, blob: bytes, meta: Optional[Mapping[str, Any]] = None) -> SavedItem:
        """
        Save a blob under key, replacing any previous item

        Returns:
            The index entry of the saved item
        """
        path = self._path(key)
        data = bytes(blob)
        record = {
            'data': data,
            'meta': dict(meta or {}),
            'savedAt': datetime.now(timezone.utc).isoformat(),
            'size': len(data),
        }
        try:
            packed = msgpack.packb(record, use_bin_type=True)
        except (TypeError, ValueError, OverflowError) as e:
            raise StoreError(f"Failed to save {key!r}: {e}") from e

        self.root.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_suffix(path.suffix + '.tmp')
        try:
            with open(tmp_path, 'wb') as f:
                f.write(packed)
            tmp_path.replace(path)
        except OSError as e:
            tmp_path.unlink(missing_ok=True)
            raise StoreError(f"Failed to save {key!r}: {e}") from e

        logger.debug("store: saved %s (%d bytes)", key, len(data))
        return SavedItem(key=key, meta=record['meta'], saved_at=record['savedAt'], size=record['size'])

    def _read_record(self, path: Path) -> Dict[str, Any]:
        with open(path, 'rb') as f:
            record = msgpack.unpackb(f.read(), raw=False, strict_map_key=False)
        if not isinstance(record, dict) or not isinstance(record.get('data'), bytes):
            raise StoreError(f"Malformed store record: {path.name}")
        return record

    def load(self, key: str) -> Tuple[bytes, Dict[str, Any]]:
        """
        Load the blob and metadata saved under key

        Raises:
            ItemNotFoundError: No item under key
            StoreError: The record cannot be decoded
        """
        path = self._path(key)
        if not path.exists():
            raise ItemNotFoundError(key)
        try:
            record = self._read_record(path)
        except (ValueError, msgpack.UnpackException) as e:
            raise StoreError(f"Failed to load {key!r}: {e}") from e
        return record['data'], record.get('meta') or {}

    def list_items(self) -> List[SavedItem]:
        """All saved items, newest first; unreadable records are skipped"""
        if not self.root.is_dir():
            return []

        items = []
        for path in self.root.glob(f"{ITEM_PREFIX}*{ITEM_SUFFIX}"):
            key = path.name[len(ITEM_PREFIX):-len(ITEM_SUFFIX)]
            try:
                record = self._read_record(path)
                meta = record.get('meta') or {}
                if not isinstance(meta, dict):
                    raise StoreError(f"Malformed store record: {path.name} (meta is not a map)")
                item = SavedItem(
                    key=key,
                    meta=meta,
                    saved_at=str(record.get('savedAt', '')),
                    size=int(record.get('size', len(record['data']))),
                )
            except (TypeError, ValueError, StoreError, msgpack.UnpackException) as e:
                logger.warning("store: skipping unreadable item %s: %s", path.name, e)
                continue
            items.append(item)

        return sorted(items, key=lambda item: item.saved_at, reverse=True)

    def delete(self, key: str) -> bool:
        """Remove the item under key; returns False when there was none"""
        path = self._path(key)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        logger.debug("store: deleted %s", key)
        return True

    def __contains__(self, key: str) -> bool:
        return self._path(key).exists()
