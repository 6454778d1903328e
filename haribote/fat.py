"""Reading files from a FAT12 floppy image."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

_ENTRY = struct.Struct("<8s3sB10sHHHI")
_FAT_ENTRIES = 2880
_CLUSTER = 512


@dataclass(frozen=True)
class FileInfo:
    """One 32-byte directory entry."""

    name: bytes
    ext: bytes
    type: int
    time: int
    date: int
    clustno: int
    size: int

    @classmethod
    def from_bytes(cls, data: bytes) -> "FileInfo":
        if len(data) < _ENTRY.size:
            raise ValueError("directory entry needs 32 bytes")
        name, ext, typ, _reserve, time, date, clustno, size = _ENTRY.unpack_from(data)
        return cls(name, ext, typ, time, date, clustno, size)


def read_fat(img: bytes) -> List[int]:
    """Unpack the 12-bit FAT entries (up to 2880) from packed bytes."""
    data = bytes(img[: _FAT_ENTRIES * 3 // 2])
    fat: List[int] = []
    triples = zip(data[0::3], data[1::3], data[2::3])
    for a, b, c in triples:
        fat.append((a | b << 8) & 0xFFF)
        fat.append((b >> 4 | c << 4) & 0xFFF)
    return fat


def parse_directory(data: bytes, max_entries: int = 224) -> List[FileInfo]:
    """Read directory entries until an unused one or ``max_entries``."""
    entries: List[FileInfo] = []
    for offset in range(0, min(len(data), max_entries * _ENTRY.size), _ENTRY.size):
        chunk = data[offset:offset + _ENTRY.size]
        if len(chunk) < _ENTRY.size or chunk[0] == 0x00:
            break
        entries.append(FileInfo.from_bytes(chunk))
    return entries


def load_file(clustno: int, size: int, fat: Sequence[int], img: bytes) -> bytes:
    """Follow the cluster chain from ``clustno`` and return ``size`` bytes."""
    parts: List[bytes] = []
    while size > _CLUSTER:
        start = clustno * _CLUSTER
        parts.append(bytes(img[start:start + _CLUSTER]))
        size -= _CLUSTER
        clustno = fat[clustno]
    start = clustno * _CLUSTER
    parts.append(bytes(img[start:start + max(size, 0)]))
    return b"".join(parts)


def _directory_key(name: bytes) -> Optional[bytes]:
    key = bytearray(b" " * 11)
    j = 0
    for ch in name:
        if j >= 11:
            return None
        if ch == ord(".") and j <= 8:
            j = 8
        else:
            if ord("a") <= ch <= ord("z"):
                ch -= 0x20
            key[j] = ch
            j += 1
    return bytes(key)


def search_file(name: Union[str, bytes], entries: Sequence[FileInfo]) -> Optional[FileInfo]:
    """Find the regular file called ``name``, case-insensitively; None if absent."""
    raw = name.encode("latin-1") if isinstance(name, str) else bytes(name)
    key = _directory_key(raw)
    if key is None:
        return None
    for entry in entries:
        if entry.type & 0x18 == 0 and entry.name + entry.ext == key:
            return entry
    return None