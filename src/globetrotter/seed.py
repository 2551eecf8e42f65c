"""Load the destination seed dataset into Supabase."""

import logging
import sys
from pathlib import Path

from supabase import create_client

from globetrotter.adapters.json_catalog_loader import (
    SEED_DATASET_PATH,
    JsonCatalogLoader,
)
from globetrotter.adapters.supabase_destination_repository import (
    SupabaseDestinationRepository,
)
from globetrotter.app_logging import configure_logging
from globetrotter.config import Settings

_logger = logging.getLogger(__name__)


def seed_destinations(
    repository: SupabaseDestinationRepository, path: Path = SEED_DATASET_PATH
) -> int:
    """Upsert every destination in the dataset and return the count."""
    destinations = JsonCatalogLoader(path).load_all()
    count = repository.upsert_all(destinations)
    _logger.info("Seeded %s destinations from %s", count, path)
    return count


def main(argv: list[str] | None = None) -> None:
    """Seed destinations from an optional dataset path argument."""
    configure_logging()
    args = sys.argv[1:] if argv is None else argv
    path = Path(args[0]) if args else SEED_DATASET_PATH
    settings = Settings()
    client = create_client(settings.supabase_url, settings.supabase_service_key)
    seed_destinations(SupabaseDestinationRepository(client), path)


if __name__ == "__main__":
    main()
