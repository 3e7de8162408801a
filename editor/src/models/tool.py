"""Selection and insert-tool state."""
from dataclasses import dataclass
from typing import Optional

from models.block import InsertKind


@dataclass(frozen=True)
class ToolState:
    """Either idle, or armed to insert one kind of block on the next click."""
    mode: str = 'idle'  # 'idle' | 'insert'
    kind: Optional[InsertKind] = None

    @property
    def is_inserting(self) -> bool:
        return self.mode == 'insert' and self.kind is not None

    @classmethod
    def idle(cls) -> 'ToolState':
        return cls()

    @classmethod
    def insert(cls, kind) -> 'ToolState':
        return cls('insert', InsertKind(kind))


@dataclass(frozen=True)
class Selection:
    """Selected template block (guide/values) and selected user block."""
    block_id: Optional[str] = None
    user_block_id: Optional[str] = None


@dataclass(frozen=True)
class GuideState:
    enabled: bool = False
    step_index: int = 0
