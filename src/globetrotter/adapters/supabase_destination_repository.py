"""Supabase-backed destination catalog."""

from dataclasses import dataclass

from supabase import Client

from globetrotter.adapters.json_catalog_loader import parse_destination
from globetrotter.domain.destinations import Destination
from globetrotter.services.catalog import CatalogLoader


@dataclass
class SupabaseDestinationRepository(CatalogLoader):
    """Supabase implementation for the destinations table."""

    client: Client

    def load_all(self) -> list[Destination]:
        """Return every destination ordered by id."""
        response = (
            self.client.table("destinations")
            .select("id, city, country, clues, fun_facts, trivia")
            .order("id")
            .execute()
        )
        return [
            parse_destination(row, default_id=index)
            for index, row in enumerate(response.data or [], start=1)
        ]

    def upsert_all(self, destinations: list[Destination]) -> int:
        """Insert or update destinations by id and return the row count."""
        payload = [
            {
                "id": destination.id,
                "city": destination.city,
                "country": destination.country,
                "clues": list(destination.clues),
                "fun_facts": list(destination.fun_facts),
                "trivia": list(destination.trivia),
            }
            for destination in destinations
        ]
        if not payload:
            return 0
        self.client.table("destinations").upsert(payload).execute()
        return len(payload)
