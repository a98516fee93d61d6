"""Tests for the recipe service."""

from uuid import uuid4

import pytest

from eato.domain.errors import InvalidInputError
from eato.domain.recipes import IngredientInput
from eato.services.recipes import RecipeService
from tests.conftest import InMemoryRecipeRepository


def _ingredients() -> list[IngredientInput]:
    return [
        IngredientInput(
            id="oats",
            name="Oats",
            quantity=400,
            calories_per_100g=380,
            protein_per_100g=13,
        ),
        IngredientInput(
            name="Milk",
            quantity=0.6,
            unit="l",
            calories_per_100g=50,
            protein_per_100g=3.5,
        ),
    ]


def test_preview_defaults_yield_to_total_weight() -> None:
    service = RecipeService(InMemoryRecipeRepository())

    preview = service.preview(_ingredients())

    assert preview.total_weight == 1000
    assert preview.yield_weight == 1000
    assert preview.totals.calories == pytest.approx(1820)
    assert preview.per_100g.calories_per_100g == 182.0
    assert preview.per_100g.protein_per_100g == 7.3


def test_save_and_log_portion() -> None:
    repository = InMemoryRecipeRepository()
    service = RecipeService(repository)
    user_id = uuid4()

    recipe = service.save_recipe(user_id, "  Porridge ", _ingredients(), 800)
    portion = service.log_portion(recipe.id, 200)

    assert recipe.name == "Porridge"
    assert recipe.nutrition.calories_per_100g == 227.5
    assert len(repository.ingredients[recipe.id]) == 2
    assert portion is not None
    assert portion.calories == 455


def test_log_portion_unknown_recipe() -> None:
    service = RecipeService(InMemoryRecipeRepository())

    assert service.log_portion(uuid4(), 100) is None


def test_save_recipe_requires_name_and_ingredients() -> None:
    service = RecipeService(InMemoryRecipeRepository())

    with pytest.raises(InvalidInputError):
        service.save_recipe(uuid4(), " ", _ingredients())
    with pytest.raises(InvalidInputError):
        service.save_recipe(uuid4(), "Empty", [])
