"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from fresco_guard.adapters.mock_ocr_client import MockOcrClient
from fresco_guard.adapters.mock_recipe_generator import MockRecipeGenerator
from fresco_guard.adapters.openai_ocr_client import OpenAIOcrClient
from fresco_guard.adapters.supabase_auth_gateway import SupabaseAuthGateway
from fresco_guard.adapters.supabase_food_repository import SupabaseFoodRepository
from fresco_guard.adapters.supabase_notification_repository import (
    SupabaseNotificationRepository,
)
from fresco_guard.adapters.supabase_recipe_repository import (
    SupabaseRecipeRepository,
)
from fresco_guard.adapters.supabase_user_repository import SupabaseUserRepository
from fresco_guard.config import Settings, is_production
from fresco_guard.services.auth import AuthService
from fresco_guard.services.camera import CameraService
from fresco_guard.services.dashboard import DashboardService
from fresco_guard.services.foods import FoodService
from fresco_guard.services.notifications import (
    NotificationProcessor,
    NotificationScheduler,
)
from fresco_guard.services.ocr import OcrClient, OcrService
from fresco_guard.services.profiles import ProfileService
from fresco_guard.services.recipes import RecipeService

OCR_OPENAI = "openai"


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    auth_service: AuthService
    food_service: FoodService
    notification_scheduler: NotificationScheduler
    notification_processor: NotificationProcessor
    recipe_service: RecipeService
    ocr_service: OcrService
    camera_service: CameraService
    dashboard_service: DashboardService
    profile_service: ProfileService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    user_repository = SupabaseUserRepository(supabase_client)
    food_repository = SupabaseFoodRepository(supabase_client)
    notification_repository = SupabaseNotificationRepository(supabase_client)
    recipe_repository = SupabaseRecipeRepository(supabase_client)
    auth_gateway = SupabaseAuthGateway(
        supabase_url=resolved_settings.supabase_url,
        anon_key=resolved_settings.supabase_anon_key,
    )
    recipe_generator = MockRecipeGenerator()
    ocr_client = _build_ocr_client(resolved_settings)

    scheduler = NotificationScheduler(
        repository=notification_repository,
        timezone_name=resolved_settings.timezone,
    )
    processor = NotificationProcessor(
        repository=notification_repository,
        foods=food_repository,
        recipes=recipe_generator,
        timezone_name=resolved_settings.timezone,
    )
    food_service = FoodService(
        repository=food_repository,
        users=user_repository,
        scheduler=scheduler,
        timezone_name=resolved_settings.timezone,
        free_food_limit=resolved_settings.free_food_limit,
    )

    async def close_resources() -> None:
        if isinstance(ocr_client, OpenAIOcrClient):
            await ocr_client.close()

    return AppContainer(
        settings=resolved_settings,
        auth_service=AuthService(
            gateway=auth_gateway,
            users=user_repository,
            site_url=resolved_settings.site_url,
        ),
        food_service=food_service,
        notification_scheduler=scheduler,
        notification_processor=processor,
        recipe_service=RecipeService(
            generator=recipe_generator,
            repository=recipe_repository,
            foods=food_repository,
        ),
        ocr_service=OcrService(ocr_client),
        camera_service=CameraService(
            repository=user_repository,
            free_photo_limit=resolved_settings.free_photo_limit,
            production=is_production(resolved_settings),
        ),
        dashboard_service=DashboardService(food_service),
        profile_service=ProfileService(user_repository),
        close_resources=close_resources,
    )


def _build_ocr_client(settings: Settings) -> OcrClient:
    if settings.ocr_provider.strip().lower() != OCR_OPENAI:
        return MockOcrClient()
    if not settings.openai_api_key:
        raise ValueError("OPENAI_API_KEY is required when OCR_PROVIDER=openai")
    return OpenAIOcrClient.create(
        api_key=settings.openai_api_key, model=settings.openai_model
    )
