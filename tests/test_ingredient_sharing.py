import json

from fastapi.testclient import TestClient

from app import crud, models
from tests.test_recipes import create_recipe


def ingredient_by_name(db, name):
    return db.query(models.Ingredient).filter(models.Ingredient.name == name).first()


def test_shared_ingredient_is_stored_once(client: TestClient, db):
    soup_id = create_recipe(
        client,
        name="Soup",
        ingredients=json.dumps([{"name": "Salt", "amount": 1, "unit": "tsp"}]),
    )
    fries_id = create_recipe(
        client,
        name="Fries",
        ingredients=json.dumps([
            {"name": "Potatoes", "amount": 4, "unit": "pcs"},
            {"name": "Salt", "amount": 2, "unit": "tsp"},
        ]),
    )

    salt_rows = db.query(models.Ingredient).filter(models.Ingredient.name == "Salt").all()
    assert len(salt_rows) == 1
    salt_id = salt_rows[0].id

    links = db.query(models.RecipeIngredient).filter(models.RecipeIngredient.ingredient_id == salt_id).all()
    assert sorted(link.recipe_id for link in links) == sorted([soup_id, fries_id])

    soup = client.get(f"/api/recipes/{soup_id}").json()
    fries = client.get(f"/api/recipes/{fries_id}").json()
    assert soup["ingredients"] == [{"name": "Salt", "amount": 1.0, "unit": "tsp"}]
    assert {"name": "Salt", "amount": 2.0, "unit": "tsp"} in fries["ingredients"]


def test_ingredient_names_are_case_sensitive(client: TestClient, db):
    create_recipe(
        client,
        ingredients=json.dumps([
            {"name": "salt", "amount": 1, "unit": "g"},
            {"name": "Salt", "amount": 1, "unit": "g"},
        ]),
    )
    names = sorted(row.name for row in db.query(models.Ingredient).all())
    assert names == ["Salt", "salt"]


def test_latest_recipe_sets_default_unit(client: TestClient, db):
    create_recipe(client, name="A", ingredients=json.dumps([{"name": "Butter", "amount": 50, "unit": "g"}]))
    create_recipe(client, name="B", ingredients=json.dumps([{"name": "Butter", "amount": 2, "unit": "tbsp"}]))

    butter = ingredient_by_name(db, "Butter")
    assert butter.unit == "tbsp"


def test_recipe_without_unit_falls_back_to_default_unit(client: TestClient):
    plain_id = create_recipe(
        client,
        name="Plain",
        ingredients=json.dumps([{"name": "Pepper", "amount": 1}]),
    )
    assert client.get(f"/api/recipes/{plain_id}").json()["ingredients"][0]["unit"] is None

    # A later recipe gives Pepper a default unit, which the first recipe now shows
    create_recipe(
        client,
        name="Seasoned",
        ingredients=json.dumps([{"name": "Pepper", "amount": 1, "unit": "pinch"}]),
    )
    assert client.get(f"/api/recipes/{plain_id}").json()["ingredients"] == [
        {"name": "Pepper", "amount": 1.0, "unit": "pinch"}
    ]


def test_recipe_unit_overrides_default_unit(client: TestClient):
    grams_id = create_recipe(client, name="Grams", ingredients=json.dumps([{"name": "Sugar", "amount": 100, "unit": "g"}]))
    create_recipe(client, name="Cups", ingredients=json.dumps([{"name": "Sugar", "amount": 0.5, "unit": "cup"}]))

    assert client.get(f"/api/recipes/{grams_id}").json()["ingredients"] == [
        {"name": "Sugar", "amount": 100.0, "unit": "g"}
    ]


def test_upsert_ingredient_returns_existing_id(db):
    first_id = crud.upsert_ingredient(db, "Garlic", "clove")
    second_id = crud.upsert_ingredient(db, "Garlic", None)
    db.commit()

    assert first_id == second_id
    garlic = ingredient_by_name(db, "Garlic")
    assert garlic.id == first_id
    # Last writer wins, even when it has no unit
    assert garlic.unit is None
    assert db.query(models.Ingredient).count() == 1
