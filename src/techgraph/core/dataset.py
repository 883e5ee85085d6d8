"""
Dataset loading and initial node construction.

The dataset is a JSON array of records with `Name`, `Type` and optional
`Designtechs`, `Interoperability`, `Description` and `Website` fields.
It is read-only input: nodes are derived from it once per session.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Sequence

from pydantic import ValidationError

from ..config import DatasetSettings, ViewportSettings
from .arrange import ArrangeCriterion, arrange_circle
from .exceptions import DatasetError
from .types import COMPANY_KIND, DatasetRecord, Node

logger = logging.getLogger(__name__)


def parse_records(raw: Any, source: str = "<memory>") -> List[DatasetRecord]:
    """Validate raw JSON data into dataset records."""
    if not isinstance(raw, list):
        raise DatasetError(source, "expected a JSON array of records")
    try:
        return [DatasetRecord.model_validate(item) for item in raw]
    except ValidationError as e:
        raise DatasetError(source, str(e)) from e


def load_dataset(path: str | Path) -> List[DatasetRecord]:
    """Read and validate a dataset file."""
    dataset_path = Path(path)
    if not dataset_path.exists():
        raise DatasetError(str(dataset_path), "file not found")

    try:
        raw = json.loads(dataset_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise DatasetError(str(dataset_path), str(e)) from e

    records = parse_records(raw, str(dataset_path))
    logger.info(f"Loaded {len(records)} records from {dataset_path}")
    return records


def color_map(types: Sequence[str], settings: DatasetSettings) -> Dict[str, str]:
    """
    Assign a color per record type, in first-seen order.

    Companies always get the company color. Other types walk the palette,
    then fall back to evenly spaced HSL hues once it runs out.
    """
    colors: Dict[str, str] = {}
    index = 0
    for kind in dict.fromkeys(types):
        if kind.lower() == COMPANY_KIND:
            colors[kind] = settings.company_color
            continue
        if index < len(settings.palette):
            colors[kind] = settings.palette[index]
        else:
            hue = (10 + index * 50) % 360
            colors[kind] = f"hsl({hue}, 55%, 70%)"
        index += 1
    return colors


def build_nodes(
    records: Sequence[DatasetRecord],
    dataset_settings: DatasetSettings | None = None,
    viewport: ViewportSettings | None = None,
) -> List[Node]:
    """
    Create the initial node list from dataset records.

    Excluded types are skipped, the first record wins when names repeat,
    and nodes start on a circle sorted by label. Dataset `Designtechs` stay
    in the records; `Node.designtechs` is reserved for explicit overrides.
    """
    dataset_settings = dataset_settings or DatasetSettings()
    viewport = viewport or ViewportSettings()
    excluded = {t.lower() for t in dataset_settings.excluded_types}

    kept = [r for r in records if r.type.lower() not in excluded]
    colors = color_map([r.type for r in kept], dataset_settings)

    nodes: Dict[str, Node] = {}
    for record in kept:
        if record.name in nodes:
            logger.debug(f"Duplicate record name, keeping first: {record.name}")
            continue
        nodes[record.name] = Node(
            id=record.name,
            kind=record.type,
            label=record.name,
            color=colors.get(record.type, dataset_settings.fallback_color),
            description=record.description,
            website=record.website,
        )

    positions = arrange_circle(
        list(nodes.values()),
        viewport.width,
        viewport.height,
        ArrangeCriterion.LABEL,
        viewport.arrange_radius,
    )
    for node_id, position in positions.items():
        nodes[node_id].position = position

    return list(nodes.values())
