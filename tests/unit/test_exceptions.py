from chainflow.core.exceptions import (
    AuthenticationException,
    ConflictException,
    DuplicateEntityException,
    EntityNotFoundException,
    InsufficientStockException,
    to_http_exception,
)


def test_insufficient_stock_message_and_details() -> None:
    exc = InsufficientStockException("Widget", available=10, requested=140, inventory_id=3)

    assert exc.status_code == 400
    assert exc.code == "INSUFFICIENT_STOCK"
    assert exc.message == "Insufficient stock for Widget. Available: 10, Requested: 140"
    assert exc.details["available"] == 10
    assert exc.details["requested"] == 140


def test_not_found_maps_to_404() -> None:
    http_exc = to_http_exception(EntityNotFoundException("Order", 99))
    assert http_exc.status_code == 404
    assert http_exc.detail["code"] == "NOT_FOUND"
    assert http_exc.detail["message"] == "Order not found"


def test_duplicate_is_a_conflict() -> None:
    exc = DuplicateEntityException("Inventory item", "sku", "WGT-001")
    assert isinstance(exc, ConflictException)
    assert exc.status_code == 409
    assert exc.code == "DUPLICATE"


def test_details_can_be_hidden() -> None:
    http_exc = to_http_exception(ConflictException("locked", details={"status": "delivered"}), include_details=False)
    assert "details" not in http_exc.detail


def test_authentication_error_advertises_bearer() -> None:
    http_exc = to_http_exception(AuthenticationException("Invalid credentials"))
    assert http_exc.status_code == 401
    assert http_exc.headers == {"WWW-Authenticate": "Bearer"}
