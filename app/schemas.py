# schemas.py
# Defines the Pydantic models (schemas) for data validation and serialization.

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import List, Optional, Any
from datetime import datetime

# Largest value an INTEGER column holds on PostgreSQL
MAX_INTEGER = 2**31 - 1


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


# --- RecipeIngredient Schemas ---
class RecipeIngredientCreate(BaseModel):
    name: str
    amount: float = Field(..., gt=0, allow_inf_nan=False)
    unit: Optional[str] = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Ingredient name must not be empty")
        return value

    @field_validator("unit", mode="before")
    @classmethod
    def strip_unit(cls, value: Any) -> Any:
        value = _blank_to_none(value)
        if isinstance(value, str):
            return value.strip()
        return value


class RecipeIngredient(BaseModel):
    name: str
    amount: float
    unit: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


# --- Step Schemas ---
class RecipeStepCreate(BaseModel):
    instruction: str

    @field_validator("instruction")
    @classmethod
    def strip_instruction(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Step instruction must not be empty")
        return value


class RecipeStep(BaseModel):
    step_number: int
    instruction: str

    model_config = ConfigDict(from_attributes=True)


# --- Main Recipe Schemas ---

class RecipeCreate(BaseModel):
    """
    A full recipe submission. Steps are numbered by their position in the list.
    """
    name: str
    ingredients: List[RecipeIngredientCreate]
    steps: List[RecipeStepCreate]
    cooking_time: Optional[int] = Field(None, gt=0, le=MAX_INTEGER)
    estimated_price: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    rating: Optional[int] = Field(None, ge=1, le=5)

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Recipe name must not be empty")
        return value

    @field_validator("cooking_time", "estimated_price", "rating", mode="before")
    @classmethod
    def empty_as_missing(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @model_validator(mode="after")
    def check_unique_ingredients(self) -> "RecipeCreate":
        seen = set()
        for item in self.ingredients:
            if item.name in seen:
                raise ValueError(f"Ingredient '{item.name}' is listed more than once")
            seen.add(item.name)
        return self


class RecipeSummary(BaseModel):
    id: int
    name: str
    picture_path: Optional[str] = None
    cooking_time: Optional[int] = None
    estimated_price: Optional[float] = None
    rating: Optional[int] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class RecipeDetail(RecipeSummary):
    updated_at: Optional[datetime] = None
    ingredients: List[RecipeIngredient]
    steps: List[RecipeStep]


class RecipeCreated(BaseModel):
    message: str
    id: int


# --- Health Schemas ---
class HealthStatus(BaseModel):
    status: str
    database: Optional[str] = None
