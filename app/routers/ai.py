# =========================================================
# AI ROUTER
#
# Thin actions over the suggestion flows in app/ai:
# - success: {"result": {...}, "error": null}
# - provider failure: 502 {"result": null, "error": "..."}
# =========================================================

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.database import get_db
from app.core.auth import get_current_user
from app.core.errors import ExternalServiceError
from app.core.rate_limiter import limiter
from app.ai.client import GenerativeClient, get_generative_client
from app.ai.appointment_summary import AppointmentSummaryInput, generate_appointment_summary
from app.ai.price_suggester import PriceSuggestionInput, suggest_price
from app.ai.recipe_suggester import CandidateMaterial, RecipeSuggestionInput, suggest_recipe_items
from app.models.raw_materials import RawMaterial

logger = logging.getLogger("app")

router = APIRouter(prefix="/ai", tags=["AI"])


def run_ai_action(action, *args):
    try:
        output = action(*args)
    except ExternalServiceError as exc:
        logger.error("AI action %s failed: %s", action.__name__, exc.message)
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"result": None, "error": exc.message},
        )

    return {"result": output.model_dump(), "error": None}


@router.post("/appointment-summary")
@limiter.limit("10/minute")
def appointment_summary(
    request: Request,
    data: AppointmentSummaryInput,
    client: GenerativeClient = Depends(get_generative_client),
    current_user=Depends(get_current_user),
):
    return run_ai_action(generate_appointment_summary, data, client)


@router.post("/price-suggestion")
@limiter.limit("10/minute")
def price_suggestion(
    request: Request,
    data: PriceSuggestionInput,
    client: GenerativeClient = Depends(get_generative_client),
    current_user=Depends(get_current_user),
):
    return run_ai_action(suggest_price, data, client)


@router.post("/recipe-suggestion")
@limiter.limit("10/minute")
def recipe_suggestion(
    request: Request,
    data: RecipeSuggestionInput,
    db: Session = Depends(get_db),
    client: GenerativeClient = Depends(get_generative_client),
    current_user=Depends(get_current_user),
):
    if not data.available_materials:
        materials = (
            db.query(RawMaterial)
            .filter(RawMaterial.business_id == current_user.business_id)
            .order_by(RawMaterial.id)
            .all()
        )
        data = data.model_copy(
            update={
                "available_materials": [
                    CandidateMaterial(id=str(m.id), description=m.description)
                    for m in materials
                ]
            }
        )

    return run_ai_action(suggest_recipe_items, data, client)
