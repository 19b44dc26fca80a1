"""Request bodies accepted by the HTTP API."""

import re
from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from fresco_guard.domain.recipes import GeneratedRecipe

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
PASSWORD_MIN_LENGTH = 7
NAME_MIN_LENGTH = 2
NOTES_MAX_LENGTH = 500


def _invalid(message: str) -> ValueError:
    return ValueError(message)


def _require_text(value: str | None, message: str) -> str:
    if value is None or not value.strip():
        raise _invalid(message)
    return value.strip()


def _check_name(value: str | None) -> str | None:
    if value is not None and len(value.strip()) < NAME_MIN_LENGTH:
        raise _invalid("El nombre debe tener al menos 2 caracteres")
    return value.strip() if value is not None else None


def _check_notes(value: str | None) -> str | None:
    if value is not None and len(value) > NOTES_MAX_LENGTH:
        raise _invalid("Las notas no pueden exceder 500 caracteres")
    return value


def parse_expiry_date(value: str | None) -> date:
    """Parse an ISO date or datetime string into a calendar date."""
    text = _require_text(value, "La fecha de vencimiento es requerida")
    try:
        if "T" in text:
            return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        return date.fromisoformat(text)
    except ValueError as exc:
        raise _invalid("Fecha de vencimiento inválida") from exc


def _parse_ids(values: list[str] | None) -> list[UUID] | None:
    if values is None:
        return None
    try:
        return [UUID(str(value)) for value in values]
    except ValueError as exc:
        raise _invalid("Identificador inválido") from exc


class LoginInput(BaseModel):
    """Credentials for email sign-in."""

    email: str | None = Field(default=None, validate_default=True)
    password: str | None = Field(default=None, validate_default=True)

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str | None) -> str:
        if value is None or not _EMAIL_PATTERN.match(value.strip()):
            raise _invalid("Email inválido")
        return value.strip().lower()

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str | None) -> str:
        if value is None or len(value) < PASSWORD_MIN_LENGTH:
            raise _invalid("La contraseña debe tener al menos 7 caracteres")
        return value


class RegisterInput(LoginInput):
    """Sign-up payload."""

    name: str | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str | None) -> str | None:
        return _check_name(value)


class FoodInput(BaseModel):
    """Payload for tracking a new food."""

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = Field(default=None, validate_default=True)
    expiry_date: date | str | None = Field(
        default=None, alias="expiryDate", validate_default=True
    )
    category: str | None = None
    notes: str | None = None
    image_url: str | None = Field(default=None, alias="imageUrl")

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str | None) -> str:
        return _require_text(value, "El nombre es requerido")

    @field_validator("expiry_date", mode="before")
    @classmethod
    def validate_expiry_date(cls, value: object) -> date:
        if isinstance(value, date):
            return value
        if value is not None and not isinstance(value, str):
            raise _invalid("Fecha de vencimiento inválida")
        return parse_expiry_date(value)

    @field_validator("notes")
    @classmethod
    def validate_notes(cls, value: str | None) -> str | None:
        return _check_notes(value)


class UpdateFoodInput(BaseModel):
    """Partial update of a food; only the keys sent are changed."""

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = None
    expiry_date: date | str | None = Field(default=None, alias="expiryDate")
    category: str | None = None
    notes: str | None = None
    image_url: str | None = Field(default=None, alias="imageUrl")

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str | None) -> str:
        return _require_text(value, "El nombre es requerido")

    @field_validator("expiry_date", mode="before")
    @classmethod
    def validate_expiry_date(cls, value: object) -> date:
        if isinstance(value, date):
            return value
        if value is not None and not isinstance(value, str):
            raise _invalid("Fecha de vencimiento inválida")
        return parse_expiry_date(value)

    @field_validator("notes")
    @classmethod
    def validate_notes(cls, value: str | None) -> str | None:
        return _check_notes(value)

    def changes(self) -> dict[str, object]:
        """Return the column changes requested by the client."""
        return {field: getattr(self, field) for field in self.model_fields_set}


class OcrInput(BaseModel):
    """Image to read, as a data URL or raw base64."""

    image: str | None = Field(default=None, validate_default=True)

    @field_validator("image")
    @classmethod
    def validate_image(cls, value: str | None) -> str:
        return _require_text(value, "Imagen no proporcionada")


class GenerateRecipeInput(BaseModel):
    """Ingredients and/or owned foods to cook with."""

    model_config = ConfigDict(populate_by_name=True)

    ingredients: list[str] | None = None
    food_ids: list[str] | None = Field(default=None, alias="foodIds")
    preferences: str | None = None
    save: bool = False

    @field_validator("food_ids")
    @classmethod
    def validate_food_ids(cls, value: list[str] | None) -> list[str] | None:
        _parse_ids(value)
        return value

    def parsed_food_ids(self) -> list[UUID] | None:
        return _parse_ids(self.food_ids)


class SaveRecipeInput(BaseModel):
    """A generated recipe the user wants to keep."""

    model_config = ConfigDict(populate_by_name=True)

    title: str | None = Field(default=None, validate_default=True)
    description: str = ""
    ingredients: list[str] | None = Field(default=None, validate_default=True)
    steps: list[str] = Field(default_factory=list)
    cooking_time: int | None = Field(default=None, alias="cookingTime", ge=0)
    difficulty: str | None = None
    food_ids: list[str] | None = Field(default=None, alias="foodIds")

    @field_validator("title")
    @classmethod
    def validate_title(cls, value: str | None) -> str:
        return _require_text(value, "El título es requerido")

    @field_validator("ingredients")
    @classmethod
    def validate_ingredients(cls, value: list[str] | None) -> list[str]:
        if not value:
            raise _invalid("Se requieren ingredientes válidos")
        return value

    @field_validator("food_ids")
    @classmethod
    def validate_food_ids(cls, value: list[str] | None) -> list[str] | None:
        _parse_ids(value)
        return value

    def to_recipe(self) -> GeneratedRecipe:
        return GeneratedRecipe(
            title=self.title or "",
            description=self.description,
            ingredients=self.ingredients or [],
            steps=self.steps,
            cooking_time=self.cooking_time,
            difficulty=self.difficulty,
            food_ids=_parse_ids(self.food_ids) or [],
        )


class UpdateProfileInput(BaseModel):
    """Editable profile fields."""

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = None
    notifications_enabled: bool | None = Field(
        default=None, alias="notificationsEnabled"
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str | None) -> str | None:
        return _check_name(value)
