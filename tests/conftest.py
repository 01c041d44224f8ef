"""Shared product catalog graph used by accessor and tracker tests."""

from datetime import date
from types import SimpleNamespace

import pytest

from modelpath import Collection, Model


@pytest.fixture
def catalog():
    manufacturer1 = Model(
        code="M1",
        name="Manufacturer 1",
        address=Model(number=1, street="Larch Grove", country_code="GB"),
        phones=[
            Model(type="phone", number="0181 123 567"),
            Model(type="fax", number="0181 123 569"),
        ],
        tags=["tag1", "tag2", "tag3"],
    )
    manufacturer2 = Model(
        code="M2",
        name="Manufacturer 2",
        address=Model(number=8, street="Leopards Parade", country_code="GB"),
    )
    review1 = Model(title="Review 1", date=date(2012, 2, 1))
    review2 = Model(title="Review 2", date=date(2012, 2, 10))
    review3 = Model(title="Review 3", date=date(2012, 2, 20))
    reviews = Collection(
        [review3, review1, review2], comparator=lambda r: r.get("date")
    )
    product = Model(
        code="P1",
        name="Product 1",
        manufacturer=manufacturer1,
        reviews=reviews,
        tags=["tag1", "tag2", "tag3"],
        dimensions={"width": 10},
    )
    return SimpleNamespace(
        product=product,
        manufacturer1=manufacturer1,
        manufacturer2=manufacturer2,
        review1=review1,
        review2=review2,
        review3=review3,
        reviews=reviews,
    )
