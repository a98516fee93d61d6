"""Supabase repository for recipes."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from eato.domain.recipes import NutritionPer100g, RecipeRecord, ResolvedIngredient
from eato.services.recipes import RecipeRepository


@dataclass
class SupabaseRecipeRepository(RecipeRepository):
    """Supabase implementation for recipes."""

    client: Client

    def create_recipe(
        self,
        user_id: UUID,
        name: str,
        yield_weight: float,
        nutrition: NutritionPer100g,
    ) -> UUID:
        """Create a recipe row and return its id."""
        response = (
            self.client.table("recipes")
            .insert(
                {
                    "user_id": str(user_id),
                    "name": name,
                    "yield_weight": yield_weight,
                    "calories_per_100g": nutrition.calories_per_100g,
                    "protein_per_100g": nutrition.protein_per_100g,
                    "carbs_per_100g": nutrition.carbs_per_100g,
                    "fat_per_100g": nutrition.fat_per_100g,
                    "fiber_per_100g": nutrition.fiber_per_100g,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create recipe")
        return UUID(response.data[0]["id"])

    def create_recipe_ingredients(
        self, recipe_id: UUID, ingredients: list[ResolvedIngredient]
    ) -> None:
        """Create ingredient rows with their resolved weights."""
        payload = [
            {
                "recipe_id": str(recipe_id),
                "position": position,
                "name": ingredient.name,
                "quantity": ingredient.quantity,
                "unit": ingredient.unit,
                "is_percentage": ingredient.is_percentage,
                "base_ingredient_ref": ingredient.base_ingredient_id,
                "resolved_grams": ingredient.resolved_grams,
                "calories_per_100g": ingredient.calories_per_100g,
                "protein_per_100g": ingredient.protein_per_100g,
                "carbs_per_100g": ingredient.carbs_per_100g,
                "fat_per_100g": ingredient.fat_per_100g,
                "fiber_per_100g": ingredient.fiber_per_100g,
            }
            for position, ingredient in enumerate(ingredients)
        ]
        if payload:
            self.client.table("recipe_ingredients").insert(payload).execute()

    def get_recipe(self, recipe_id: UUID) -> RecipeRecord | None:
        """Return a recipe by id."""
        response = (
            self.client.table("recipes")
            .select(
                "id, user_id, name, yield_weight, calories_per_100g, "
                "protein_per_100g, carbs_per_100g, fat_per_100g, fiber_per_100g"
            )
            .eq("id", str(recipe_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return RecipeRecord(
            id=UUID(row["id"]),
            user_id=UUID(row["user_id"]),
            name=row["name"],
            yield_weight=float(row.get("yield_weight") or 0.0),
            nutrition=NutritionPer100g(
                calories_per_100g=float(row.get("calories_per_100g") or 0.0),
                protein_per_100g=float(row.get("protein_per_100g") or 0.0),
                carbs_per_100g=float(row.get("carbs_per_100g") or 0.0),
                fat_per_100g=float(row.get("fat_per_100g") or 0.0),
                fiber_per_100g=float(row.get("fiber_per_100g") or 0.0),
            ),
        )
