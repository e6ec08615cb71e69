# models.py
# Defines the SQLAlchemy ORM models for the database tables.

from sqlalchemy import (
    CheckConstraint, Column, DateTime, Float, ForeignKey, Integer, Text, UniqueConstraint, func
)
from sqlalchemy.orm import relationship
from app.db.session import Base


class Recipe(Base):
    """
    Recipe model for the 'recipes' table.
    """
    __tablename__ = "recipes"
    __table_args__ = (
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_recipes_rating_range"),
        CheckConstraint("cooking_time > 0", name="ck_recipes_cooking_time_positive"),
        CheckConstraint("estimated_price >= 0", name="ck_recipes_estimated_price_non_negative"),
    )

    id = Column(Integer, primary_key=True, index=True)

    # Core fields
    name = Column(Text, nullable=False)
    picture_path = Column(Text, nullable=True)
    cooking_time = Column(Integer, nullable=True)
    estimated_price = Column(Float, nullable=True)
    rating = Column(Integer, nullable=True)

    # Audit
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    # Relationships
    ingredients = relationship(
        "RecipeIngredient",
        back_populates="recipe",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    steps = relationship(
        "RecipeStep",
        back_populates="recipe",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="RecipeStep.step_number",
    )

    def __str__(self):
        return f"{self.id}: {self.name}"


class Ingredient(Base):
    """
    Master list of ingredients, shared by every recipe.
    """
    __tablename__ = "ingredients"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(Text, unique=True, nullable=False)
    # Default unit; tracks the most recent recipe that used the ingredient
    unit = Column(Text, nullable=True)


class RecipeIngredient(Base):
    """
    Association object between Recipe and Ingredient.
    """
    __tablename__ = "recipe_ingredients"
    __table_args__ = (
        UniqueConstraint("recipe_id", "ingredient_id", name="uq_recipe_ingredients_recipe_ingredient"),
        CheckConstraint("amount > 0", name="ck_recipe_ingredients_amount_positive"),
    )

    id = Column(Integer, primary_key=True, index=True)

    recipe_id = Column(Integer, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False, index=True)
    ingredient_id = Column(Integer, ForeignKey("ingredients.id"), nullable=False)

    amount = Column(Float, nullable=False)
    # Overrides Ingredient.unit for this recipe when set
    unit = Column(Text, nullable=True)

    recipe = relationship("Recipe", back_populates="ingredients")
    ingredient = relationship("Ingredient")


class RecipeStep(Base):
    """
    An instruction step for a recipe.
    """
    __tablename__ = "recipe_steps"
    __table_args__ = (
        UniqueConstraint("recipe_id", "step_number", name="uq_recipe_steps_recipe_step_number"),
    )

    id = Column(Integer, primary_key=True, index=True)
    recipe_id = Column(Integer, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False, index=True)
    step_number = Column(Integer, nullable=False)
    instruction = Column(Text, nullable=False)

    recipe = relationship("Recipe", back_populates="steps")
    step_ingredients = relationship(
        "StepIngredient",
        back_populates="step",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class StepIngredient(Base):
    """
    Ingredient usage attached to a single step. Not populated by the API yet.
    """
    __tablename__ = "step_ingredients"
    __table_args__ = (
        UniqueConstraint("step_id", "ingredient_id", name="uq_step_ingredients_step_ingredient"),
    )

    id = Column(Integer, primary_key=True, index=True)
    step_id = Column(Integer, ForeignKey("recipe_steps.id", ondelete="CASCADE"), nullable=False, index=True)
    ingredient_id = Column(Integer, ForeignKey("ingredients.id"), nullable=False)
    amount = Column(Float, nullable=False)
    unit = Column(Text, nullable=True)

    step = relationship("RecipeStep", back_populates="step_ingredients")
    ingredient = relationship("Ingredient")
