import threading
import time

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.core import transactions
from app.core.errors import InsufficientStockError
from app.database import Base, use_immediate_transactions
from app.models.business import Business
from app.models.finished_products import FinishedProduct
from app.models.flavors import Flavor
from app.models.sales import Sale
from app.schemas.sale import SaleCreate
from app.services import stock


@pytest.fixture
def file_sessions(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'bizview.db'}",
        connect_args={"check_same_thread": False},
    )
    use_immediate_transactions(engine)
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(bind=engine, autocommit=False, autoflush=False)
    engine.dispose()


def _seed(Session, stock_level):
    with Session() as db:
        business = Business(name="Concurrent Bakery")
        db.add(business)
        db.flush()

        product = FinishedProduct(business_id=business.id, name="Bolo", sale_price=40)
        product.flavors = [Flavor(name="Chocolate", stock=stock_level)]
        db.add(product)
        db.commit()

        return business.id, product.id, product.flavors[0].id


def test_concurrent_sales_cannot_oversell(file_sessions, monkeypatch):
    business_id, product_id, flavor_id = _seed(file_sessions, 5)

    # Hold the flavor row long enough for the other sale to try reading it
    def slow_lock_one(db, model, *criteria):
        row = transactions.lock_one(db, model, *criteria)
        time.sleep(0.3)
        return row

    monkeypatch.setattr(stock, "lock_one", slow_lock_one)

    start = threading.Barrier(2)
    results = []

    def sell_three():
        start.wait()
        with file_sessions() as db:
            try:
                stock.sell(
                    db,
                    business_id,
                    SaleCreate(product_id=product_id, flavor_id=flavor_id, quantity=3),
                )
                results.append("ok")
            except InsufficientStockError:
                results.append("insufficient")

    threads = [threading.Thread(target=sell_three) for _ in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=10)

    assert sorted(results) == ["insufficient", "ok"]

    with file_sessions() as db:
        assert db.get(Flavor, flavor_id).stock == 2
        assert sum(s.quantity for s in db.query(Sale).all()) == 3


def test_immediate_transactions_still_roll_back(file_sessions):
    business_id, product_id, flavor_id = _seed(file_sessions, 1)

    with file_sessions() as db:
        with pytest.raises(InsufficientStockError):
            stock.sell(
                db,
                business_id,
                SaleCreate(product_id=product_id, flavor_id=flavor_id, quantity=2),
            )

    with file_sessions() as db:
        assert db.get(Flavor, flavor_id).stock == 1
        assert db.query(Sale).count() == 0
