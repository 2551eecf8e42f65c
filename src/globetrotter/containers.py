"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from globetrotter.adapters.json_catalog_loader import JsonCatalogLoader
from globetrotter.adapters.pexels_client import HttpxPexelsImageClient, ImageClient
from globetrotter.adapters.supabase_destination_repository import (
    SupabaseDestinationRepository,
)
from globetrotter.adapters.supabase_session_repository import (
    SupabaseSessionRepository,
)
from globetrotter.adapters.supabase_user_repository import SupabaseUserRepository
from globetrotter.config import Settings
from globetrotter.services.catalog import CatalogLoader, load_catalog
from globetrotter.services.game import GameService
from globetrotter.services.randomness import SharedRandom
from globetrotter.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    image_client: ImageClient
    user_service: UserService
    game_service: GameService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container.

    The destination catalog is loaded here, once; a failing load aborts
    startup.
    """
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    user_repository = SupabaseUserRepository(supabase_client)
    session_repository = SupabaseSessionRepository(supabase_client)
    catalog_loader: CatalogLoader = SupabaseDestinationRepository(supabase_client)
    if resolved_settings.catalog_path is not None:
        catalog_loader = JsonCatalogLoader(resolved_settings.catalog_path)
    catalog = load_catalog(catalog_loader)
    image_client = HttpxPexelsImageClient.create(
        api_key=resolved_settings.pexels_api_key,
        base_url=resolved_settings.pexels_base_url,
        fallback_url=resolved_settings.fallback_image_url,
        timeout_seconds=resolved_settings.image_timeout_seconds,
    )
    game_service = GameService(
        catalog=catalog,
        user_repository=user_repository,
        session_repository=session_repository,
        image_client=image_client,
        rng=SharedRandom.create(resolved_settings.random_seed),
    )

    async def close_resources() -> None:
        await image_client.close()

    return AppContainer(
        settings=resolved_settings,
        image_client=image_client,
        user_service=UserService(user_repository),
        game_service=game_service,
        close_resources=close_resources,
    )
