import pytest
from sqlalchemy.exc import OperationalError

from app.core.errors import InsufficientStockError, NotFoundError, StoreError
from app.core.transactions import lock_many, lock_one, run_atomic
from app.models.business import Business
from app.models.raw_materials import RawMaterial


@pytest.fixture
def business(db):
    business = Business(name="Atomic Bakery")
    db.add(business)
    db.commit()
    return business


def _material(db, business, code, quantity):
    material = RawMaterial(
        business_id=business.id,
        code=code,
        description=code,
        unit="KG",
        cost=1,
        quantity=quantity,
        min_stock=0,
    )
    db.add(material)
    db.commit()
    return material


def test_run_atomic_commits_on_success(db, business):
    material = _material(db, business, "FLOUR", 10)

    def work(session):
        row = lock_one(session, RawMaterial, RawMaterial.id == material.id)
        row.quantity = row.quantity - 4
        return row

    result = run_atomic(db, work)

    db.expire_all()
    assert result.id == material.id
    assert float(db.get(RawMaterial, material.id).quantity) == 6


def test_run_atomic_rolls_back_every_write_on_domain_error(db, business):
    first = _material(db, business, "A", 5)
    second = _material(db, business, "B", 1)

    def work(session):
        rows = lock_many(session, RawMaterial, RawMaterial.business_id == business.id)
        rows[0].quantity = 0
        session.flush()
        raise InsufficientStockError(rows[1].description, 3, rows[1].quantity)

    with pytest.raises(InsufficientStockError) as exc:
        run_atomic(db, work)

    assert exc.value.message == 'Insufficient stock for "B". Required: 3, Available: 1.'
    db.expire_all()
    assert float(db.get(RawMaterial, first.id).quantity) == 5
    assert float(db.get(RawMaterial, second.id).quantity) == 1


def test_run_atomic_translates_store_failures(db, business):
    def work(session):
        raise OperationalError("UPDATE raw_materials", {}, Exception("database is locked"))

    with pytest.raises(StoreError) as exc:
        run_atomic(db, work)

    assert exc.value.status_code == 503


def test_run_atomic_propagates_not_found(db):
    def work(session):
        if lock_one(session, RawMaterial, RawMaterial.id == 42) is None:
            raise NotFoundError("Raw material not found.")

    with pytest.raises(NotFoundError):
        run_atomic(db, work)


def test_lock_many_returns_rows_in_id_order(db, business):
    ids = [_material(db, business, code, 1).id for code in ("Z", "M", "A")]

    rows = lock_many(db, RawMaterial, RawMaterial.id.in_(ids))

    assert [r.id for r in rows] == sorted(ids)
