from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
import stripe

from storefront.checkout.errors import PaymentProviderError
from storefront.checkout.models import CheckoutSessionRequest, LineItem, LineItemKind, AddonKind
from storefront.checkout.stripe_client import StripeCheckoutGateway, to_session_params

def _request(**overrides):
    data = dict(
        line_items=[
            LineItem(name="Casa", unit_amount_minor=65000, description="Código: CT-01",
                     product_id="p1", kind=LineItemKind.PRODUCT, product_code="CT-01"),
            LineItem(name="Projeto Elétrico - Casa", unit_amount_minor=18000, product_id="p1",
                     kind=LineItemKind.ADDON, addon_type=AddonKind.ELECTRICAL),
        ],
        success_url="https://shop.test/ok?session_id={CHECKOUT_SESSION_ID}",
        cancel_url="https://shop.test/ok?canceled=true",
        currency="brl",
        payment_method_types=["card", "boleto"],
        metadata={"user_id": "guest", "cart": "[]"},
    )
    data.update(overrides)
    return CheckoutSessionRequest(**data)

def test_session_params_shape():
    params = to_session_params(_request())
    assert params["mode"] == "payment"
    assert params["payment_method_types"] == ["card", "boleto"]
    assert "customer_email" not in params
    first, second = params["line_items"]
    assert first == {
        "price_data": {
            "currency": "brl",
            "unit_amount": 65000,
            "product_data": {
                "name": "Casa",
                "description": "Código: CT-01",
                "metadata": {"project_id": "p1", "type": "project", "project_code": "CT-01"},
            },
        },
        "quantity": 1,
    }
    assert "description" not in second["price_data"]["product_data"]
    assert second["price_data"]["product_data"]["metadata"]["addon_type"] == "electrical"

def test_session_params_customer_email():
    params = to_session_params(_request(customer_email="buyer@example.com"))
    assert params["customer_email"] == "buyer@example.com"

def test_create_session_passes_api_key_per_call():
    sessions = MagicMock()
    sessions.create.return_value = SimpleNamespace(id="cs_1", url="https://checkout.stripe.com/c/cs_1")
    gateway = StripeCheckoutGateway("sk_test_abc", sessions=sessions)

    assert gateway.create_session(_request()) == {"id": "cs_1", "url": "https://checkout.stripe.com/c/cs_1"}
    kwargs = sessions.create.call_args.kwargs
    assert kwargs["api_key"] == "sk_test_abc"
    assert kwargs["success_url"].endswith("session_id={CHECKOUT_SESSION_ID}")

def test_create_session_without_key():
    sessions = MagicMock()
    with pytest.raises(PaymentProviderError):
        StripeCheckoutGateway("", sessions=sessions).create_session(_request())
    sessions.create.assert_not_called()

def test_create_session_stripe_rejection_is_not_retried():
    sessions = MagicMock()
    sessions.create.side_effect = stripe.InvalidRequestError("Missing required param: line_items.", "line_items")
    gateway = StripeCheckoutGateway("sk_test_abc", sessions=sessions)
    with pytest.raises(PaymentProviderError) as exc:
        gateway.create_session(_request(line_items=[]))
    assert "line_items" in exc.value.message
    assert sessions.create.call_count == 1

def test_create_session_network_failure():
    sessions = MagicMock()
    sessions.create.side_effect = ConnectionError("network down")
    with pytest.raises(PaymentProviderError) as exc:
        StripeCheckoutGateway("sk_test_abc", sessions=sessions).create_session(_request())
    assert exc.value.message == "network down"

def test_create_session_without_url():
    sessions = MagicMock()
    sessions.create.return_value = {"id": "cs_1", "url": None}
    with pytest.raises(PaymentProviderError):
        StripeCheckoutGateway("sk_test_abc", sessions=sessions).create_session(_request())
