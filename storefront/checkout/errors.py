"""
Taxonomie d'erreurs du checkout.
Toutes sont converties par la vue en réponse 400 {"error": message}.
"""

class CheckoutError(Exception):
    """Erreur de base du checkout: porte un message destiné au client."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(CheckoutError):
    """Corps de requête illisible, incomplet ou panier invalide."""


class UpstreamDataError(CheckoutError):
    """Lecture des projets (prix de référence) impossible."""


class PaymentProviderError(CheckoutError):
    """Création de la session de paiement refusée ou échec réseau."""
