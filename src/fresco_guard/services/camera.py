"""Photo usage tracking for the free-tier camera cap."""

import logging
from dataclasses import dataclass

from fresco_guard.domain.models import PLAN_FREE, CurrentUser, is_premium
from fresco_guard.errors import (
    MISSING_COLUMN,
    ForbiddenError,
    LimitReachedError,
    NotAuthenticatedError,
    StorageError,
)
from fresco_guard.services.profiles import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CameraUsage:
    """Photo counter with plan limits; ``None`` limits mean unlimited."""

    photos_taken: int
    limit: int | None
    remaining: int | None
    can_take_photo: bool
    plan: str

    def to_dict(self) -> dict[str, object]:
        return {
            "photosTaken": self.photos_taken,
            "limit": self.limit,
            "remaining": self.remaining,
            "canTakePhoto": self.can_take_photo,
            "plan": self.plan,
        }


def usage_for(plan: str, photos_taken: int, free_limit: int) -> CameraUsage:
    """Compute limits for a plan and a photo count."""
    if is_premium(plan):
        return CameraUsage(photos_taken, None, None, True, plan)
    return CameraUsage(
        photos_taken=photos_taken,
        limit=free_limit,
        remaining=max(0, free_limit - photos_taken),
        can_take_photo=photos_taken < free_limit,
        plan=plan,
    )


@dataclass
class CameraService:
    """Reads and updates the per-user photo counter."""

    repository: UserRepository
    free_photo_limit: int
    production: bool

    def get_usage(self, user: CurrentUser | None) -> CameraUsage:
        """Return photo usage; anonymous callers get the free defaults."""
        if user is None:
            return usage_for(PLAN_FREE, 0, self.free_photo_limit)
        profile = self.repository.get_profile(user.id)
        if profile is None:
            raise StorageError("Error al obtener el conteo de fotos")
        return usage_for(profile.plan, profile.photos_taken, self.free_photo_limit)

    def register_photo(self, user: CurrentUser) -> CameraUsage:
        """Count a new photo, refusing once the free cap is reached."""
        profile = self.repository.get_profile(user.id)
        if profile is None:
            raise StorageError("Error al obtener el perfil")
        current = usage_for(profile.plan, profile.photos_taken, self.free_photo_limit)
        if not current.can_take_photo:
            raise LimitReachedError(
                "Has alcanzado el límite de fotos para el plan gratuito"
            )
        new_count = profile.photos_taken + 1
        try:
            self.repository.set_photos_taken(user.id, new_count)
        except StorageError as exc:
            if exc.code != MISSING_COLUMN:
                raise StorageError(
                    "Error al actualizar el conteo de fotos", code=exc.code
                ) from exc
            logger.warning("Column photos_taken does not exist, skipping update")
        return usage_for(profile.plan, new_count, self.free_photo_limit)

    def reset(self, user: CurrentUser | None) -> None:
        """Reset the photo counter; only available outside production."""
        if self.production:
            raise ForbiddenError("Esta ruta solo está disponible en desarrollo")
        if user is None:
            raise NotAuthenticatedError()
        try:
            self.repository.set_photos_taken(user.id, 0)
        except StorageError as exc:
            if exc.code == MISSING_COLUMN:
                raise StorageError(
                    "La columna photos_taken no existe. "
                    "Ejecuta el script de migración primero.",
                    code=exc.code,
                ) from exc
            raise StorageError("Error al resetear el contador", code=exc.code) from exc
