# crud.py
# Contains the functions for Create and Read operations on recipes.

import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app import models
from app import schemas
from app.core.errors import RecipeIntegrityError, RecipeStorageError, RecipeValidationError

# Get a logger instance
logger = logging.getLogger(__name__)

# Dialects whose insert construct supports ON CONFLICT ... RETURNING
UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


# --- Ingredient CRUD Functions ---
def upsert_ingredient(db: Session, name: str, unit: Optional[str]) -> int:
    """
    Insert an ingredient, or update the unit of the existing row with that name.
    Returns the ingredient id. The most recent caller's unit wins.
    """
    dialect = db.get_bind().dialect.name
    try:
        insert = UPSERT_INSERTS[dialect]
    except KeyError:
        raise RecipeStorageError(f"Ingredient upsert is not supported on {dialect}")

    stmt = insert(models.Ingredient).values(name=name, unit=unit)
    stmt = stmt.on_conflict_do_update(
        index_elements=[models.Ingredient.name],
        set_={"unit": stmt.excluded.unit},
    ).returning(models.Ingredient.id)
    return db.execute(stmt).scalar_one()


# --- Recipe CRUD Functions ---
def _link_ingredients(db: Session, recipe_id: int, ingredients: List[schemas.RecipeIngredientCreate]):
    for item in ingredients:
        ingredient_id = upsert_ingredient(db, item.name, item.unit)
        db.add(models.RecipeIngredient(
            recipe_id=recipe_id,
            ingredient_id=ingredient_id,
            amount=item.amount,
            unit=item.unit,
        ))


def _add_steps(db: Session, recipe_id: int, steps: List[schemas.RecipeStepCreate]):
    for number, item in enumerate(steps, start=1):
        db.add(models.RecipeStep(
            recipe_id=recipe_id,
            step_number=number,
            instruction=item.instruction,
        ))


def _translate_integrity_error(error: IntegrityError):
    message = str(error.orig).lower()
    if "check constraint" in message:
        return RecipeValidationError("Recipe data violates a database constraint")
    return RecipeIntegrityError("Recipe data conflicts with existing data")


def create_recipe(db: Session, recipe: schemas.RecipeCreate, picture_path: Optional[str] = None) -> int:
    """
    Create a recipe together with its ingredient links and steps.
    Everything is written in one transaction; on failure nothing is kept.
    """
    logger.debug(f"Creating recipe: {recipe}")
    now = datetime.now(timezone.utc)

    try:
        db_recipe = models.Recipe(
            name=recipe.name,
            picture_path=picture_path,
            cooking_time=recipe.cooking_time,
            estimated_price=recipe.estimated_price,
            rating=recipe.rating,
            created_at=now,
            updated_at=now,
        )
        db.add(db_recipe)
        db.flush()  # Need ID
        recipe_id = db_recipe.id

        _link_ingredients(db, recipe_id, recipe.ingredients)
        _add_steps(db, recipe_id, recipe.steps)

        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Rejected recipe '{recipe.name}': {e.orig}")
        raise _translate_integrity_error(e) from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Database error while creating recipe '{recipe.name}': {e}")
        raise RecipeStorageError("Failed to add recipe") from e
    except Exception:
        db.rollback()
        raise

    logger.info(f"Created recipe {recipe_id} with {len(recipe.ingredients)} ingredients and {len(recipe.steps)} steps")
    return recipe_id


def get_recipe(db: Session, recipe_id: int) -> Optional[schemas.RecipeDetail]:
    """
    Retrieve a single recipe with its ingredients and steps.
    Ingredient units fall back to the ingredient's default unit.
    """
    logger.debug(f"Retrieving recipe with id {recipe_id}")
    db_recipe = db.query(models.Recipe).filter(models.Recipe.id == recipe_id).first()
    if db_recipe is None:
        return None

    ingredients = (
        db.query(
            models.Ingredient.name,
            models.RecipeIngredient.amount,
            func.coalesce(models.RecipeIngredient.unit, models.Ingredient.unit).label("unit"),
        )
        .join(models.Ingredient, models.RecipeIngredient.ingredient_id == models.Ingredient.id)
        .filter(models.RecipeIngredient.recipe_id == recipe_id)
        .order_by(models.Ingredient.name)
        .all()
    )

    steps = (
        db.query(models.RecipeStep.step_number, models.RecipeStep.instruction)
        .filter(models.RecipeStep.recipe_id == recipe_id)
        .order_by(models.RecipeStep.step_number)
        .all()
    )

    summary = schemas.RecipeSummary.model_validate(db_recipe)
    return schemas.RecipeDetail(
        **summary.model_dump(),
        updated_at=db_recipe.updated_at,
        ingredients=[schemas.RecipeIngredient.model_validate(row) for row in ingredients],
        steps=[schemas.RecipeStep.model_validate(row) for row in steps],
    )


def get_recipes(db: Session) -> List[models.Recipe]:
    """
    Retrieve all recipes, newest first.
    """
    logger.debug("Retrieving all recipes")
    return (
        db.query(models.Recipe)
        .order_by(models.Recipe.created_at.desc(), models.Recipe.id.desc())
        .all()
    )
