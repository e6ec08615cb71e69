# api/recipes.py
# Handles all API endpoints related to recipes.

import json
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile, status
from pydantic import ValidationError
from sqlalchemy.orm import Session

# Import local modules
from app import crud
from app import schemas
from app import uploads
from app.core.errors import RecipeNotFoundError, RecipeValidationError
from app.db.session import get_db

# Create an API router
router = APIRouter()

# Get a logger instance
logger = logging.getLogger(__name__)


def format_validation_errors(error: ValidationError) -> str:
    messages = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"])
        messages.append(f"{location}: {item['msg']}" if location else item["msg"])
    return "; ".join(messages)


def parse_recipe_form(
        name: Optional[str],
        ingredients: Optional[str],
        steps: Optional[str],
        cooking_time: Optional[str],
        estimated_price: Optional[str],
        rating: Optional[str],
) -> schemas.RecipeCreate:
    """
    Turn the raw multipart fields into a validated RecipeCreate.
    Ingredients and steps arrive as JSON-encoded arrays.
    """
    if not name or not name.strip() or not ingredients or not steps:
        raise RecipeValidationError("Missing required fields: name, ingredients, and steps")

    try:
        parsed_ingredients = json.loads(ingredients)
        parsed_steps = json.loads(steps)
    except json.JSONDecodeError:
        raise RecipeValidationError("Invalid JSON format for ingredients or steps")
    if not isinstance(parsed_ingredients, list) or not isinstance(parsed_steps, list):
        raise RecipeValidationError("Invalid JSON format for ingredients or steps")

    try:
        return schemas.RecipeCreate.model_validate({
            "name": name,
            "ingredients": parsed_ingredients,
            "steps": parsed_steps,
            "cooking_time": cooking_time,
            "estimated_price": estimated_price,
            "rating": rating,
        })
    except ValidationError as e:
        raise RecipeValidationError(format_validation_errors(e))


@router.get("", response_model=List[schemas.RecipeSummary])
def read_recipes(db: Session = Depends(get_db)):
    """
    Retrieve summaries of all recipes, newest first.
    """
    logger.debug("Fetching all recipes.")
    return crud.get_recipes(db)


@router.get("/{recipe_id}", response_model=schemas.RecipeDetail)
def read_recipe(recipe_id: int, db: Session = Depends(get_db)):
    """
    Retrieve a single recipe by its ID, with ingredients and steps.
    """
    logger.debug(f"Fetching recipe with ID: {recipe_id}")
    db_recipe = crud.get_recipe(db, recipe_id=recipe_id)
    if db_recipe is None:
        logger.warning(f"Recipe with ID {recipe_id} not found.")
        raise RecipeNotFoundError("Recipe not found")
    return db_recipe


@router.post("", response_model=schemas.RecipeCreated, status_code=status.HTTP_201_CREATED)
def create_recipe(
        request: Request,
        name: Optional[str] = Form(None),
        ingredients: Optional[str] = Form(None),
        steps: Optional[str] = Form(None),
        cooking_time: Optional[str] = Form(None),
        estimated_price: Optional[str] = Form(None),
        rating: Optional[str] = Form(None),
        picture: Optional[UploadFile] = File(None),
        db: Session = Depends(get_db),
):
    """
    Create a recipe from a multipart form with an optional picture.
    """
    recipe = parse_recipe_form(name, ingredients, steps, cooking_time, estimated_price, rating)

    picture_path = None
    if picture is not None and picture.filename:
        picture_path = uploads.save_picture(picture)

    try:
        recipe_id = crud.create_recipe(db=db, recipe=recipe, picture_path=picture_path)
    except Exception:
        uploads.discard_picture(picture_path)
        raise

    request.state.recipe_id = recipe_id
    return {"message": "Recipe added successfully", "id": recipe_id}
