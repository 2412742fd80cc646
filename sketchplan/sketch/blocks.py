"""Block Type Registry

Default colors of the blocks the sketch recognizer can emit. The editor
collaborator owns the full palette, sizes and labels; this registry only
covers the recognized subset (rooms and tables).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class BlockType(str, Enum):
    ROOM = "block_room"
    TABLE_ROUND = "block_table_round"
    TABLE_2 = "block_table_2"
    TABLE_4 = "block_table_4"
    TABLE_6 = "block_table_6"


@dataclass(frozen=True)
class BlockDefinition:
    type: BlockType
    default_fill: str
    default_stroke: str


_TABLE_STROKE = "#A78B71"

BLOCK_REGISTRY: dict[BlockType, BlockDefinition] = {
    BlockType.ROOM: BlockDefinition(BlockType.ROOM, default_fill="#FFF8F0", default_stroke="#5C4033"),
    BlockType.TABLE_ROUND: BlockDefinition(
        BlockType.TABLE_ROUND, default_fill="#F5E6D3", default_stroke=_TABLE_STROKE
    ),
    BlockType.TABLE_2: BlockDefinition(BlockType.TABLE_2, default_fill="#E8D5C0", default_stroke=_TABLE_STROKE),
    BlockType.TABLE_4: BlockDefinition(BlockType.TABLE_4, default_fill="#E8D5C0", default_stroke=_TABLE_STROKE),
    BlockType.TABLE_6: BlockDefinition(BlockType.TABLE_6, default_fill="#E8D5C0", default_stroke=_TABLE_STROKE),
}


def get_block(block_type: BlockType | str) -> BlockDefinition:
    """Look up a block definition by enum member or its string value."""
    return BLOCK_REGISTRY[BlockType(block_type)]
