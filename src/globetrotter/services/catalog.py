"""In-process destination catalog."""

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import Protocol

from globetrotter.domain.destinations import Destination

_logger = logging.getLogger(__name__)


class CatalogLoader(Protocol):
    """Source of the destination catalog."""

    def load_all(self) -> list[Destination]:
        """Return every destination."""


@dataclass
class DestinationCatalog:
    """Immutable set of destinations indexed by id."""

    destinations: tuple[Destination, ...]
    _by_id: dict[int, Destination] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._by_id = {item.id: item for item in self.destinations}

    @classmethod
    def from_destinations(
        cls, destinations: Sequence[Destination]
    ) -> "DestinationCatalog":
        return cls(destinations=tuple(destinations))

    def __len__(self) -> int:
        return len(self.destinations)

    def __iter__(self) -> Iterator[Destination]:
        return iter(self.destinations)

    def get(self, destination_id: int) -> Destination | None:
        """Return a destination by id, if present."""
        return self._by_id.get(destination_id)

    def others(self, target: Destination) -> list[Destination]:
        """Return every destination except the target."""
        return [item for item in self.destinations if item.id != target.id]


def load_catalog(loader: CatalogLoader) -> DestinationCatalog:
    """Load the catalog once at startup; loader errors propagate."""
    catalog = DestinationCatalog.from_destinations(loader.load_all())
    _logger.info("Loaded destination catalog: size=%s", len(catalog))
    return catalog
