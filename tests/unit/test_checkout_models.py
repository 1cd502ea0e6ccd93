import pytest
from pydantic import ValidationError as PydanticValidationError

from storefront.checkout.models import AddonKind, CartItem, CheckoutRequest, Product

def test_addon_kind_parse():
    assert AddonKind.parse("electrical") is AddonKind.ELECTRICAL
    assert AddonKind.parse("ELECTRICAL") is None
    assert AddonKind.parse(" electrical ") is None
    assert AddonKind.parse("pool") is None
    assert AddonKind.parse(None) is None
    assert AddonKind.SANITARY.price_field == "price_sanitary"
    assert AddonKind.HYDRAULIC.label == "Projeto Hidráulico"

@pytest.mark.parametrize("bad_id", ["", " ", "-p1", "p 1", "p1;drop", "x" * 65])
def test_cart_item_rejects_malformed_ids(bad_id):
    with pytest.raises(PydanticValidationError):
        CartItem(id=bad_id)

def test_cart_item_accepts_uuid_like_ids():
    item = CartItem(id="3f2b8c1e-9a4d-4e1b-8c7a-2d5e6f7a8b9c")
    assert item.id.startswith("3f2b")

def test_checkout_request_aliases_and_blank_email():
    req = CheckoutRequest.model_validate({
        "items": [{"id": "p1"}, {"id": "p2"}, {"id": "p1", "addons": ["electrical"]}],
        "customerEmail": "  ",
        "returnUrl": "https://shop.test/carrinho",
    })
    assert req.customer_email is None
    assert req.return_url == "https://shop.test/carrinho"
    assert req.product_ids() == ["p1", "p2"]

def test_checkout_request_requires_items_and_return_url():
    with pytest.raises(PydanticValidationError):
        CheckoutRequest.model_validate({"items": [], "returnUrl": "x"})
    with pytest.raises(PydanticValidationError):
        CheckoutRequest.model_validate({"items": [{"id": "p1"}]})

def test_product_addon_price_defaults_to_zero():
    p = Product.model_validate({"id": 1, "title": "A", "price": "10.5", "extra_col": True})
    assert p.id == "1"
    assert p.price == 10.5
    assert p.addon_price(AddonKind.STRUCTURAL) == 0.0

@pytest.mark.parametrize("addons", [5, "electrical", {"kind": "electrical"}])
def test_cart_item_rejects_non_list_addons(addons):
    with pytest.raises(PydanticValidationError):
        CartItem(id="p1", addons=addons)

def test_cart_item_null_addons_is_empty():
    assert CartItem.model_validate({"id": "p1", "addons": None}).addons == []
