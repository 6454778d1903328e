"""Packing of x86 segment and gate descriptors."""

from __future__ import annotations

import struct
from dataclasses import dataclass


@dataclass(frozen=True)
class SegmentDescriptor:
    limit_low: int
    base_low: int
    base_mid: int
    access_right: int
    limit_high: int
    base_high: int

    def to_bytes(self) -> bytes:
        """The eight bytes of the descriptor as stored in the table."""
        return struct.pack(
            "<HHBBBB",
            self.limit_low,
            self.base_low,
            self.base_mid,
            self.access_right,
            self.limit_high,
            self.base_high,
        )


@dataclass(frozen=True)
class GateDescriptor:
    offset_low: int
    selector: int
    dw_count: int
    access_right: int
    offset_high: int

    def to_bytes(self) -> bytes:
        """The eight bytes of the descriptor as stored in the table."""
        return struct.pack(
            "<HHBBH",
            self.offset_low,
            self.selector,
            self.dw_count,
            self.access_right,
            self.offset_high,
        )


def segment_descriptor(limit: int, base: int, ar: int) -> SegmentDescriptor:
    """Build a segment descriptor; limits above 1 MiB switch to 4 KiB granularity."""
    limit &= 0xFFFFFFFF
    if limit > 0xFFFFF:
        ar |= 0x8000
        limit //= 0x1000
    return SegmentDescriptor(
        limit_low=limit & 0xFFFF,
        base_low=base & 0xFFFF,
        base_mid=(base >> 16) & 0xFF,
        access_right=ar & 0xFF,
        limit_high=((limit >> 16) & 0x0F) | ((ar >> 8) & 0xF0),
        base_high=(base >> 24) & 0xFF,
    )


def gate_descriptor(offset: int, selector: int, ar: int) -> GateDescriptor:
    """Build an interrupt gate descriptor."""
    return GateDescriptor(
        offset_low=offset & 0xFFFF,
        selector=selector & 0xFFFF,
        dw_count=(ar >> 8) & 0xFF,
        access_right=ar & 0xFF,
        offset_high=(offset >> 16) & 0xFFFF,
    )