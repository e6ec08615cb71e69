from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

PROJECT_ROOT = Path(__file__).resolve().parents[1]

CATALOG_TABLES = {"recipes", "ingredients", "recipe_ingredients", "recipe_steps", "step_ingredients"}


def alembic_config(url: str) -> Config:
    config = Config(str(PROJECT_ROOT / "alembic.ini"))
    config.set_main_option("sqlalchemy.url", url)
    return config


def test_upgrade_creates_catalog_schema(tmp_path):
    url = f"sqlite:///{tmp_path / 'migrated.db'}"
    command.upgrade(alembic_config(url), "head")

    engine = create_engine(url)
    try:
        inspector = inspect(engine)
        assert CATALOG_TABLES <= set(inspector.get_table_names())

        ingredient_uniques = [c["column_names"] for c in inspector.get_unique_constraints("ingredients")]
        assert ["name"] in ingredient_uniques

        link_uniques = [c["column_names"] for c in inspector.get_unique_constraints("recipe_ingredients")]
        assert ["recipe_id", "ingredient_id"] in link_uniques

        step_foreign_keys = inspector.get_foreign_keys("recipe_steps")
        assert step_foreign_keys[0]["referred_table"] == "recipes"
        assert step_foreign_keys[0]["options"].get("ondelete") == "CASCADE"

        step_indexes = {index["name"] for index in inspector.get_indexes("recipe_steps")}
        assert "ix_recipe_steps_recipe_id" in step_indexes
    finally:
        engine.dispose()


def test_downgrade_removes_catalog_schema(tmp_path):
    url = f"sqlite:///{tmp_path / 'migrated.db'}"
    config = alembic_config(url)
    command.upgrade(config, "head")
    command.downgrade(config, "base")

    engine = create_engine(url)
    try:
        assert not CATALOG_TABLES & set(inspect(engine).get_table_names())
    finally:
        engine.dispose()
