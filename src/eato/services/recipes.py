"""Recipe service."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from eato.domain.errors import InvalidInputError
from eato.domain.recipes import (
    IngredientInput,
    NutritionPer100g,
    NutritionTotals,
    RecipeRecord,
    ResolvedIngredient,
    calculate_per_100g_nutrition,
    calculate_portion_nutrition,
    calculate_total_nutrition,
    resolve_percentages,
)

_logger = logging.getLogger(__name__)


class RecipeRepository(Protocol):
    """Persistence interface for recipes."""

    def create_recipe(
        self,
        user_id: UUID,
        name: str,
        yield_weight: float,
        nutrition: NutritionPer100g,
    ) -> UUID:
        """Create a recipe row and return its id."""

    def create_recipe_ingredients(
        self, recipe_id: UUID, ingredients: list[ResolvedIngredient]
    ) -> None:
        """Create the ingredient rows of a recipe."""

    def get_recipe(self, recipe_id: UUID) -> RecipeRecord | None:
        """Return a recipe by id."""


@dataclass(frozen=True)
class RecipePreview:
    """Calculated nutrition of a recipe before it is saved."""

    ingredients: list[ResolvedIngredient]
    totals: NutritionTotals
    total_weight: float
    yield_weight: float
    per_100g: NutritionPer100g


@dataclass
class RecipeService:
    """Service for calculating, saving and portioning recipes."""

    repository: RecipeRepository

    def preview(
        self, ingredients: list[IngredientInput], yield_weight: float | None = None
    ) -> RecipePreview:
        """Calculate a recipe; the yield defaults to the total ingredient weight."""
        resolved = resolve_percentages(ingredients)
        totals = calculate_total_nutrition(resolved)
        total_weight = sum(ingredient.resolved_grams for ingredient in resolved)
        final_yield = total_weight if yield_weight is None else yield_weight
        return RecipePreview(
            ingredients=resolved,
            totals=totals,
            total_weight=total_weight,
            yield_weight=final_yield,
            per_100g=calculate_per_100g_nutrition(totals, final_yield),
        )

    def save_recipe(
        self,
        user_id: UUID,
        name: str,
        ingredients: list[IngredientInput],
        yield_weight: float | None = None,
    ) -> RecipeRecord:
        """Calculate and persist a recipe with its resolved ingredients."""
        if not name.strip():
            raise InvalidInputError("Recipe name must not be empty")
        if not ingredients:
            raise InvalidInputError("A recipe needs at least one ingredient")
        preview = self.preview(ingredients, yield_weight)
        recipe_id = self.repository.create_recipe(
            user_id, name.strip(), preview.yield_weight, preview.per_100g
        )
        self.repository.create_recipe_ingredients(recipe_id, preview.ingredients)
        _logger.info(
            "Recipe saved user_id=%s recipe_id=%s ingredients=%s",
            user_id,
            recipe_id,
            len(preview.ingredients),
        )
        return RecipeRecord(
            id=recipe_id,
            user_id=user_id,
            name=name.strip(),
            yield_weight=preview.yield_weight,
            nutrition=preview.per_100g,
        )

    def log_portion(
        self, recipe_id: UUID, consumed_weight: float
    ) -> NutritionTotals | None:
        """Return the nutrition of a portion, or None for an unknown recipe."""
        recipe = self.repository.get_recipe(recipe_id)
        if recipe is None:
            return None
        return calculate_portion_nutrition(recipe.nutrition, consumed_weight)
