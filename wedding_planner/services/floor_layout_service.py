"""
Floor plan positions for the tables, stored as a JSON file
"""

import json
import logging
import math
import os
import tempfile
from typing import Any, Dict, Optional

from wedding_planner.core.config import settings
from wedding_planner.core.exceptions import ValidationError

logger = logging.getLogger(__name__)

Layout = Dict[int, Dict[str, float]]

class FloorLayoutStore:
    """Loads and replaces the whole layout; the last save wins.

    Positions are normalized to the unit square. Files written before that
    hold absolute coordinates on the legacy canvas and are converted on load.
    """

    def __init__(self, path: Optional[str] = None):
        self.path = path or settings.FLOOR_LAYOUT_FILE

    def load(self) -> Layout:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable floor layout {self.path}: {e}")
            return {}

        if not isinstance(raw, dict):
            logger.warning(f"Ignoring floor layout {self.path}: expected an object")
            return {}

        layout: Layout = {}
        for key, pos in raw.items():
            try:
                number = int(key)
                x = float(pos["x"])
                y = float(pos["y"])
            except (TypeError, KeyError, ValueError):
                logger.warning(f"Skipping malformed floor layout entry {key!r}")
                continue
            if not (math.isfinite(x) and math.isfinite(y)):
                logger.warning(f"Skipping non-finite floor layout entry {key!r}")
                continue
            if not 1 <= number <= settings.TABLE_COUNT:
                continue
            if x > 1 or y > 1:
                x, y = self._from_legacy(x, y)
            layout[number] = {"x": _clamp(x), "y": _clamp(y)}
        return layout

    def save(self, layout: Dict[Any, Any]) -> Layout:
        cleaned = self.validate(layout)

        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=directory, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump({str(n): pos for n, pos in sorted(cleaned.items())}, f, indent=2)
            os.replace(tmp_path, self.path)
        except OSError:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

        logger.info(f"Saved floor layout with {len(cleaned)} tables to {self.path}")
        return cleaned

    @staticmethod
    def validate(layout: Dict[Any, Any]) -> Layout:
        if not isinstance(layout, dict):
            raise ValidationError("Invalid layout data", ["layout must be an object"])

        errors = []
        cleaned: Layout = {}
        for key, pos in layout.items():
            try:
                number = int(key)
            except (TypeError, ValueError):
                errors.append(f"{key!r} is not a table number")
                continue
            if not 1 <= number <= settings.TABLE_COUNT:
                errors.append(f"Table {number} is outside 1-{settings.TABLE_COUNT}")
                continue

            if hasattr(pos, "x") and hasattr(pos, "y"):
                x, y = pos.x, pos.y
            elif isinstance(pos, dict) and "x" in pos and "y" in pos:
                x, y = pos["x"], pos["y"]
            else:
                errors.append(f"Table {number} needs x and y")
                continue

            if isinstance(x, bool) or isinstance(y, bool):
                errors.append(f"Table {number} has non-numeric coordinates")
                continue
            try:
                x, y = float(x), float(y)
            except (TypeError, ValueError):
                errors.append(f"Table {number} has non-numeric coordinates")
                continue
            if not (0 <= x <= 1 and 0 <= y <= 1):
                errors.append(f"Table {number} position must be within [0, 1]")
                continue
            cleaned[number] = {"x": x, "y": y}

        if errors:
            raise ValidationError("Invalid layout data", errors)
        return cleaned

    @staticmethod
    def _from_legacy(x: float, y: float):
        return x / settings.LEGACY_LAYOUT_WIDTH, y / settings.LEGACY_LAYOUT_HEIGHT

def _clamp(value: float) -> float:
    return min(max(value, 0.0), 1.0)

def get_floor_layout_store() -> FloorLayoutStore:
    return FloorLayoutStore()
