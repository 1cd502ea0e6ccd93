"""
Accès aux données pour la feature 'checkout': lecture des prix de référence (table 'projects').
"""
from typing import Any, Callable, Dict, List, Optional
import logging

from tenacity import Retrying, stop_after_attempt, wait_fixed, retry_if_exception_type

from storefront.infra import supabase_client
from .errors import UpstreamDataError

logger = logging.getLogger(__name__)

PRICE_COLUMNS = "id, title, slug, code, price, price_electrical, price_hydraulic, price_sanitary, price_structural"

class _ReadFailed(Exception):
    pass

# module storefront.checkout.repository
class SupabaseProjectStore:
    """
    Lecture par lot des projets pour la tarification.
    - L'en-tête Authorization entrant est transmis tel quel au client Supabase (RLS).
    - La lecture est idempotente: retry borné (read_retries), puis UpstreamDataError.
    """

    def __init__(
        self,
        url: str,
        key: str,
        *,
        read_retries: int = 1,
        retry_wait: float = 0.2,
        client_factory: Callable[..., Any] = supabase_client.create_supabase_client,
    ):
        self.url = url
        self.key = key
        self.read_retries = max(0, int(read_retries))
        self.retry_wait = retry_wait
        self._client_factory = client_factory

    def _select(self, ids: List[str], authorization: Optional[str]) -> List[Dict[str, Any]]:
        try:
            client = self._client_factory(self.url, self.key, supabase_client.bearer_token(authorization))
            res = (
                client
                .table("projects")
                .select(PRICE_COLUMNS)
                .in_("id", ids)
                .execute()
            )
        except Exception as e:
            logger.warning("checkout.repository.fetch_projects attempt failed ids=%s error=%s", ids, e)
            raise _ReadFailed(str(e)) from e
        data = getattr(res, "data", None)
        if data is None:
            raise _ReadFailed("no data")
        return list(data)

    def fetch_projects(self, ids: List[str], authorization: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        Récupère les projets par leurs IDs en une seule lecture.
        - Retourne [] si ids vide (aucun appel réseau).
        - Soulève UpstreamDataError si toutes les tentatives échouent.
        """
        if not ids:
            return []
        retrying = Retrying(
            stop=stop_after_attempt(1 + self.read_retries),
            wait=wait_fixed(self.retry_wait),
            retry=retry_if_exception_type(_ReadFailed),
            reraise=True,
        )
        try:
            return retrying(self._select, [str(i) for i in ids], authorization)
        except _ReadFailed:
            logger.exception("checkout.repository.fetch_projects failed ids=%s", ids)
            raise UpstreamDataError("Failed to fetch products")
