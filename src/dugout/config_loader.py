"""Persist and load CLI lineup profiles (battery assignments and blocks)."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List


@dataclass
class LineupProfile:
    pitcher_assignments: Dict[int, str] = field(default_factory=dict)
    catcher_assignments: Dict[int, str] = field(default_factory=dict)
    position_blocks: Dict[str, List[str]] = field(default_factory=dict)

    @classmethod
    def load(cls, path: Path) -> "LineupProfile":
        data = json.loads(path.read_text(encoding="utf-8"))
        return cls(
            pitcher_assignments={int(k): v for k, v in data.get("pitcher_assignments", {}).items()},
            catcher_assignments={int(k): v for k, v in data.get("catcher_assignments", {}).items()},
            position_blocks={k: list(v) for k, v in data.get("position_blocks", {}).items()},
        )

    def save(self, path: Path) -> None:
        payload = {
            "pitcher_assignments": {str(k): v for k, v in sorted(self.pitcher_assignments.items())},
            "catcher_assignments": {str(k): v for k, v in sorted(self.catcher_assignments.items())},
            "position_blocks": self.position_blocks,
        }
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    def merged_with(self, other: "LineupProfile") -> "LineupProfile":
        """Entries in ``other`` win over this profile's."""

        return LineupProfile(
            pitcher_assignments=self.pitcher_assignments | other.pitcher_assignments,
            catcher_assignments=self.catcher_assignments | other.catcher_assignments,
            position_blocks=self.position_blocks | other.position_blocks,
        )
