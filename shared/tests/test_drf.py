from decimal import Decimal

import pytest
from rest_framework.exceptions import ValidationError

from shared.domain.exceptions import (
    BookingStateError,
    DataAccessError,
    InsufficientCapacityError,
    InvalidDiscountError,
    InvalidRangeError,
    QuantityOutOfRangeError,
    UnsupportedResourceError,
    WarehouseNotFoundError,
)
from shared.infrastructure.drf import domain_exception_handler


@pytest.mark.parametrize(
    "exc, expected",
    [
        (InvalidRangeError("bad"), 400),
        (QuantityOutOfRangeError(Decimal(5), minimum=Decimal(10)), 400),
        (InvalidDiscountError("bad"), 400),
        (WarehouseNotFoundError("missing"), 404),
        (UnsupportedResourceError("no area"), 404),
        (InsufficientCapacityError(Decimal(41), Decimal(40)), 409),
        (BookingStateError("done"), 409),
        (DataAccessError("db down"), 503),
    ],
)
def test_domain_errors_map_to_http_status(exc, expected):
    response = domain_exception_handler(exc, {})
    assert response.status_code == expected
    assert response.data["code"] == exc.code
    assert response.data["detail"] == str(exc)


def test_capacity_conflict_reports_numbers():
    response = domain_exception_handler(InsufficientCapacityError(Decimal(41), Decimal(40)), {})
    assert response.data["requested"] == "41"
    assert response.data["available"] == "40"


def test_other_errors_fall_back_to_drf():
    response = domain_exception_handler(ValidationError({"quantity": ["required"]}), {})
    assert response.status_code == 400
    assert response.data == {"quantity": ["required"]}
    assert domain_exception_handler(RuntimeError("boom"), {}) is None
