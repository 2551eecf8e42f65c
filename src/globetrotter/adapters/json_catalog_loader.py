"""Destination catalog loaded from the JSON seed dataset."""

import json
from dataclasses import dataclass
from pathlib import Path

from globetrotter.domain.destinations import Destination
from globetrotter.services.catalog import CatalogLoader

SEED_DATASET_PATH = Path(__file__).resolve().parents[1] / "data" / "destinations.json"


@dataclass
class JsonCatalogLoader(CatalogLoader):
    """Reads destinations from a JSON array file.

    Entries without an ``id`` are numbered by their 1-based position. Both
    ``fun_fact`` and ``fun_facts`` are accepted for the fun fact list.
    """

    path: Path = SEED_DATASET_PATH

    def load_all(self) -> list[Destination]:
        """Parse every destination from the file."""
        with Path(self.path).open(encoding="utf-8") as handle:
            payload = json.load(handle)
        if not isinstance(payload, list):
            raise ValueError(f"Catalog file {self.path} must contain a JSON array")
        return [
            parse_destination(entry, default_id=index)
            for index, entry in enumerate(payload, start=1)
        ]


def parse_destination(entry: dict[str, object], default_id: int) -> Destination:
    """Build a destination from a seed or database row."""
    fun_facts = entry.get("fun_facts", entry.get("fun_fact"))
    return Destination(
        id=int(entry.get("id") or default_id),
        city=str(entry["city"]),
        country=str(entry["country"]),
        clues=_string_tuple(entry.get("clues")),
        fun_facts=_string_tuple(fun_facts),
        trivia=_string_tuple(entry.get("trivia")),
    )


def _string_tuple(value: object) -> tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(str(item) for item in value if str(item).strip())
