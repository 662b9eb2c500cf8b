"""Serializable shadow of a path's checkpoints for planners and persistence layers."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from path_editor.checkpoint import CheckpointLike


@dataclass
class CheckpointRecord:
    name: str
    active: int = 0
    pos_x: float = 0.0
    pos_y: float = 0.0
    pos_z: float = 0.0
    orientation: float = 0.0

    @classmethod
    def from_checkpoint(cls, checkpoint: CheckpointLike) -> "CheckpointRecord":
        record = cls(name=checkpoint.name)
        record.update_from(checkpoint)
        return record

    def update_from(self, checkpoint: CheckpointLike) -> None:
        self.pos_x = float(checkpoint.position[0])
        self.pos_y = float(checkpoint.position[1])
        self.pos_z = float(checkpoint.position[2])
        self.orientation = float(checkpoint.get_orientation())

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "active": self.active,
            "posX": self.pos_x,
            "posY": self.pos_y,
            "posZ": self.pos_z,
            "orientation": self.orientation,
        }


@dataclass
class PathData:
    index: int
    checkpoints: list[CheckpointRecord] = field(default_factory=list)

    def find(self, name: str) -> Optional[CheckpointRecord]:
        for record in self.checkpoints:
            if record.name == name:
                return record
        return None

    def sync(self, checkpoint: CheckpointLike) -> bool:
        """Update or append the record for ``checkpoint``. Returns True when appended."""
        record = self.find(checkpoint.name)
        if record is not None:
            record.update_from(checkpoint)
            return False
        self.checkpoints.append(CheckpointRecord.from_checkpoint(checkpoint))
        return True

    def clear(self) -> None:
        self.checkpoints = []

    def to_dict(self) -> dict[str, object]:
        return {
            "index": self.index,
            "checkpoints": [record.to_dict() for record in self.checkpoints],
        }
