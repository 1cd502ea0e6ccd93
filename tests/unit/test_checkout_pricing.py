import pytest

from storefront.checkout import pricing
from storefront.checkout.errors import UpstreamDataError, ValidationError
from storefront.checkout.models import AddonKind, CartItem, LineItemKind

def _catalog(rows):
    return pricing.products_by_id(rows)

@pytest.mark.parametrize("amount,expected", [
    (650, 65000),
    (180, 18000),
    ("99.90", 9990),
    (12.345, 1235),
    (0.005, 1),
    (None, 0),
    ("abc", 0),
])
def test_to_minor_units(amount, expected):
    assert pricing.to_minor_units(amount) == expected

def test_product_and_addon_lines_use_server_prices(project_rows):
    items = [CartItem(id="p1", addons=["electrical"])]
    lines, missing = pricing.build_line_items(items, _catalog(project_rows))

    assert missing == []
    assert [li.unit_amount_minor for li in lines] == [65000, 18000]
    assert lines[0].kind is LineItemKind.PRODUCT
    assert lines[0].name == "Casa Térrea 3Q"
    assert lines[0].description == "Código: CT-01"
    assert lines[1].kind is LineItemKind.ADDON
    assert lines[1].addon_type is AddonKind.ELECTRICAL
    assert lines[1].name == "Projeto Elétrico - Casa Térrea 3Q"

def test_client_supplied_prices_are_ignored(project_rows):
    # Champs inconnus (price) ignorés par CartItem
    item = CartItem.model_validate({"id": "p1", "addons": [], "price": 1})
    lines, _ = pricing.build_line_items([item], _catalog(project_rows))
    assert lines[0].unit_amount_minor == 65000

def test_unknown_product_is_skipped_by_default(project_rows):
    items = [CartItem(id="ghost"), CartItem(id="p2")]
    lines, missing = pricing.build_line_items(items, _catalog(project_rows))
    assert missing == ["ghost"]
    assert len(lines) == 1
    assert lines[0].product_id == "p2"

def test_unknown_product_rejected_in_strict_mode(project_rows):
    items = [CartItem(id="ghost"), CartItem(id="gone-2"), CartItem(id="p1")]
    with pytest.raises(ValidationError) as exc:
        pricing.build_line_items(items, _catalog(project_rows), strict=True)
    assert "ghost" in exc.value.message
    assert "gone-2" in exc.value.message

def test_addons_without_price_or_unknown_are_skipped(project_rows):
    # hydraulic = 0, sanitary = None, "pool" inconnu
    items = [CartItem(id="p1", addons=["hydraulic", "sanitary", "pool", "structural"])]
    lines, _ = pricing.build_line_items(items, _catalog(project_rows))
    assert [li.kind for li in lines] == [LineItemKind.PRODUCT, LineItemKind.ADDON]
    assert lines[1].addon_type is AddonKind.STRUCTURAL
    assert lines[1].unit_amount_minor == 22050

def test_duplicate_addons_collapse():
    item = CartItem(id="p1", addons=["electrical", "structural", "electrical"])
    assert item.addons == ["electrical", "structural"]

def test_description_falls_back_to_slug(project_rows):
    lines, _ = pricing.build_line_items([CartItem(id="p2")], _catalog(project_rows))
    assert lines[0].description == "Código: sobrado-moderno"

def test_empty_cart_gives_no_lines(project_rows):
    lines, missing = pricing.build_line_items([], _catalog(project_rows))
    assert lines == [] and missing == []

def test_line_metadata_for_addon(project_rows):
    lines, _ = pricing.build_line_items([CartItem(id="p1", addons=["electrical"])], _catalog(project_rows))
    assert lines[0].metadata() == {"project_id": "p1", "type": "project", "project_code": "CT-01"}
    assert lines[1].metadata() == {
        "project_id": "p1", "type": "addon", "addon_type": "electrical", "project_code": "CT-01",
    }

def test_products_by_id_coerces_ids_and_skips_rows_without_id():
    catalog = pricing.products_by_id([{"id": 7, "title": "x", "price": 1}, {"title": "no id"}, None])
    assert list(catalog) == ["7"]

def test_make_metadata_guest_and_truncation():
    items = [CartItem(id=f"p{i}", addons=["electrical", "hydraulic"], code="C" * 40) for i in range(100)]
    meta = pricing.make_metadata(items)
    assert meta["user_id"] == "guest"
    assert len(meta["cart"]) == 4500

    meta = pricing.make_metadata([CartItem(id="p1")], user_id="u-1")
    assert meta == {"user_id": "u-1", "cart": '[{"id": "p1", "addons": [], "code": null}]'}

@pytest.mark.parametrize("return_url,success,cancel", [
    ("https://shop.test/carrinho", "https://shop.test/carrinho?session_id={CHECKOUT_SESSION_ID}",
     "https://shop.test/carrinho?canceled=true"),
    ("https://shop.test/c?ref=x", "https://shop.test/c?ref=x&session_id={CHECKOUT_SESSION_ID}",
     "https://shop.test/c?ref=x&canceled=true"),
])
def test_redirect_urls(return_url, success, cancel):
    assert pricing.redirect_urls(return_url) == (success, cancel)

@pytest.mark.parametrize("amount", ["nan", float("inf"), "Infinity"])
def test_to_minor_units_non_finite_is_zero(amount):
    assert pricing.to_minor_units(amount) == 0

def test_products_by_id_malformed_row_is_upstream_error():
    with pytest.raises(UpstreamDataError):
        pricing.products_by_id([{"id": "p1", "price": "not-a-number"}])

def test_addon_ids_must_match_exactly(project_rows):
    items = [CartItem(id="p1", addons=["ELECTRICAL", "Structural"])]
    lines, _ = pricing.build_line_items(items, _catalog(project_rows))
    assert [li.kind for li in lines] == [LineItemKind.PRODUCT]
