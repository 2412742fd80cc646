"""Map detected furniture outlines onto table block types."""

from __future__ import annotations

from dataclasses import dataclass

from sketchplan.geometry.contract import (
    ROUND_TABLE_MAX_ASPECT,
    ROUND_TABLE_MAX_DIM,
    TABLE_2_MAX_DIM,
    TABLE_4_MAX_DIM,
)
from sketchplan.sketch.blocks import BlockType, get_block
from sketchplan.sketch.schema import DetectedObject


@dataclass(frozen=True)
class FurnitureStyle:
    block_type: BlockType
    fill_color: str
    stroke_color: str


def classify_table_type(obj: DetectedObject) -> FurnitureStyle:
    """
    Rule order: squarish and small is a round table, otherwise the longest
    drawn side picks the seat count.
    """
    max_dim = obj.bounding_box.max_dim

    if obj.aspect_ratio <= ROUND_TABLE_MAX_ASPECT and max_dim < ROUND_TABLE_MAX_DIM:
        block_type = BlockType.TABLE_ROUND
    elif max_dim < TABLE_2_MAX_DIM:
        block_type = BlockType.TABLE_2
    elif max_dim < TABLE_4_MAX_DIM:
        block_type = BlockType.TABLE_4
    else:
        block_type = BlockType.TABLE_6

    block = get_block(block_type)
    return FurnitureStyle(
        block_type=block_type,
        fill_color=block.default_fill,
        stroke_color=block.default_stroke,
    )
