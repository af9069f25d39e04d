# app/routers/raw_materials.py

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.core.auth import get_current_user
from app.core.errors import ConflictError, NotFoundError
from app.models.raw_materials import RawMaterial
from app.models.recipe_items import RecipeItem
from app.schemas.raw_material import (
    RawMaterialCreate,
    RawMaterialUpdate,
    RawMaterialResponse,
)

router = APIRouter(
    prefix="/raw-materials",
    tags=["Raw Materials"],
)


def _get_raw_material(db: Session, business_id: int, raw_material_id: int) -> RawMaterial:
    material = (
        db.query(RawMaterial)
        .filter(
            RawMaterial.id == raw_material_id,
            RawMaterial.business_id == business_id,
        )
        .first()
    )

    if not material:
        raise NotFoundError("Raw material not found")

    return material


def _ensure_unique_code(db: Session, business_id: int, code: str, exclude_id: int | None = None):
    query = db.query(RawMaterial).filter(
        RawMaterial.code == code,
        RawMaterial.business_id == business_id,
    )

    if exclude_id is not None:
        query = query.filter(RawMaterial.id != exclude_id)

    if query.first():
        raise ConflictError("Raw material with this code already exists")


@router.post(
    "",
    response_model=RawMaterialResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_raw_material(
    material_data: RawMaterialCreate,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    _ensure_unique_code(db, current_user.business_id, material_data.code)

    material = RawMaterial(
        business_id=current_user.business_id,
        **material_data.model_dump(),
    )

    db.add(material)
    db.commit()
    db.refresh(material)

    return material


@router.get("", response_model=list[RawMaterialResponse])
def list_raw_materials(
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    return (
        db.query(RawMaterial)
        .filter(RawMaterial.business_id == current_user.business_id)
        .order_by(RawMaterial.description)
        .all()
    )


@router.get("/low-stock", response_model=list[RawMaterialResponse])
def list_low_stock(
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    return (
        db.query(RawMaterial)
        .filter(
            RawMaterial.business_id == current_user.business_id,
            RawMaterial.quantity <= RawMaterial.min_stock,
        )
        .order_by(RawMaterial.description)
        .all()
    )


@router.get("/{raw_material_id}", response_model=RawMaterialResponse)
def get_raw_material(
    raw_material_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    return _get_raw_material(db, current_user.business_id, raw_material_id)


@router.put("/{raw_material_id}", response_model=RawMaterialResponse)
def update_raw_material(
    raw_material_id: int,
    material_data: RawMaterialUpdate,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    material = _get_raw_material(db, current_user.business_id, raw_material_id)

    if material_data.code is not None and material_data.code != material.code:
        _ensure_unique_code(db, current_user.business_id, material_data.code, exclude_id=material.id)

    for field, value in material_data.model_dump(exclude_unset=True).items():
        if value is None and field != "supplier":
            continue
        setattr(material, field, value)

    db.commit()
    db.refresh(material)

    return material


@router.delete("/{raw_material_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_raw_material(
    raw_material_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    material = _get_raw_material(db, current_user.business_id, raw_material_id)

    in_recipe = (
        db.query(RecipeItem)
        .filter(RecipeItem.raw_material_id == material.id)
        .first()
    )
    if in_recipe:
        raise ConflictError("Raw material is used in a product recipe")

    db.delete(material)
    db.commit()

    return None
