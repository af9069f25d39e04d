"""Suggest recipe raw materials for a flavor name."""

import logging
from typing import List

from pydantic import AliasChoices, BaseModel, Field

from app.ai.client import GenerativeClient, parse_model_output
from app.core.errors import ValidationError

logger = logging.getLogger("app")

RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "suggestedMaterialIds": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "description": "IDs of the suggested raw materials from the available list.",
        },
    },
    "required": ["suggestedMaterialIds"],
}


class CandidateMaterial(BaseModel):
    id: str
    description: str


class RecipeSuggestionInput(BaseModel):
    flavor_name: str = Field(..., min_length=1, description='The product flavor, e.g. "Carrot cake with chocolate".')
    available_materials: List[CandidateMaterial] = []


class RecipeSuggestionOutput(BaseModel):
    suggested_material_ids: List[str] = Field(
        ...,
        validation_alias=AliasChoices("suggestedMaterialIds", "suggested_material_ids"),
    )


def build_prompt(data: RecipeSuggestionInput) -> str:
    lines = [
        "You are a confectionery and food production specialist.",
        "",
        "Your task is to analyze a product flavor name and, based on a list of available "
        "raw materials, suggest which of them should make up the recipe for that flavor.",
        "",
        "Analyze the following flavor name:",
        f"- Flavor: {data.flavor_name}",
        "",
        "Consider the following list of raw materials available in stock:",
    ]

    for material in data.available_materials:
        lines.append(f'- ID: {material.id}, Description: "{material.description}"')

    lines += [
        "",
        "Based on the flavor name, identify the most likely ingredients from the list. "
        "Return ONLY the IDs of the raw materials you suggest including in the recipe.",
        "",
        'For example, if the flavor is "Corn cake with guava paste" and the list includes '
        '"Wheat flour", "Corn meal", "Guava paste" and "Eggs", your answer should contain the '
        'IDs of "Corn meal" and "Guava paste". Do not include generic ingredients such as '
        '"Eggs" or "Flour" unless they are explicitly mentioned or strongly implied.',
        "",
        "Respond in a structured JSON format.",
    ]

    return "\n".join(lines)


def suggest_recipe_items(
    data: RecipeSuggestionInput,
    client: GenerativeClient,
) -> RecipeSuggestionOutput:
    if not data.available_materials:
        raise ValidationError("No raw materials available to suggest a recipe from.")

    raw = client.generate_json(build_prompt(data), RESPONSE_SCHEMA)
    output = parse_model_output(RecipeSuggestionOutput, raw)

    candidate_ids = {material.id for material in data.available_materials}
    known = [i for i in output.suggested_material_ids if i in candidate_ids]

    if len(known) != len(output.suggested_material_ids):
        logger.warning(
            f"AI suggested unknown material ids: "
            f"{sorted(set(output.suggested_material_ids) - candidate_ids)}"
        )

    # Keep model order, drop duplicates
    return RecipeSuggestionOutput(suggested_material_ids=list(dict.fromkeys(known)))
