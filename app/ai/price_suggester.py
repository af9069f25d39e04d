"""Suggest a retail price for a finished product."""

from pydantic import AliasChoices, BaseModel, Field

from app.ai.client import GenerativeClient, parse_model_output
from app.core.config import settings

RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "suggestedPrice": {
            "type": "NUMBER",
            "description": "The suggested retail price for the product.",
        },
        "justification": {
            "type": "STRING",
            "description": "A brief explanation of how the price was determined, considering cost, market, and value.",
        },
    },
    "required": ["suggestedPrice", "justification"],
}


class PriceSuggestionInput(BaseModel):
    product_name: str = Field(..., min_length=1, description="The name of the finished product.")
    product_cost: float = Field(..., gt=0, description="The total cost to produce the product.")
    recipe_items: str = Field("", description="A summary of the raw materials used in the product.")


class PriceSuggestionOutput(BaseModel):
    suggested_price: float = Field(
        ...,
        gt=0,
        validation_alias=AliasChoices("suggestedPrice", "suggested_price"),
    )
    justification: str = Field(..., min_length=1)


def build_prompt(data: PriceSuggestionInput) -> str:
    currency = settings.CURRENCY_SYMBOL

    return (
        "You are a pricing specialist for small food and beverage businesses.\n\n"
        "Analyze the following product details:\n"
        f"- Product Name: {data.product_name}\n"
        f"- Production Cost: {currency} {data.product_cost:.2f}\n"
        f"- Main Ingredients: {data.recipe_items or 'not informed'}\n\n"
        "Your job is to suggest a final sale price for the customer. The price must ensure "
        "a healthy profit margin (usually between 200% and 400% over cost for this sector), "
        "but also be competitive and fair to the consumer.\n\n"
        "Provide the suggested sale price and a brief justification explaining the margin "
        "applied and why the price is adequate.\n"
        "Respond in a structured JSON format."
    )


def suggest_price(
    data: PriceSuggestionInput,
    client: GenerativeClient,
) -> PriceSuggestionOutput:
    raw = client.generate_json(build_prompt(data), RESPONSE_SCHEMA)

    return parse_model_output(PriceSuggestionOutput, raw)
