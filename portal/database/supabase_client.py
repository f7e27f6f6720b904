from supabase import create_client, Client
from portal.config import settings
from portal.core.exceptions import ConfigurationError
import logging

logger = logging.getLogger(__name__)


class SupabaseClient:
    """Process-wide Supabase clients, created lazily on first use."""
    _client: Client = None
    _service_client: Client = None

    @classmethod
    def _create(cls, key: str) -> Client:
        if not settings.supabase_url or not key:
            logger.error("SUPABASE_URL and a Supabase key must be configured")
            raise ConfigurationError("Database access not configured")
        return create_client(settings.supabase_url, key)

    @classmethod
    def get_client(cls) -> Client:
        """Anon-key client; resolves bearer tokens through Supabase Auth."""
        if cls._client is None:
            cls._client = cls._create(settings.supabase_key)
        return cls._client

    @classmethod
    def get_service_client(cls) -> Client:
        """
        Client with service_role key; bypasses RLS. Membership, permission and
        auth.admin calls need it, so there is no fallback to the anon client.
        """
        if cls._service_client is None:
            cls._service_client = cls._create(settings.supabase_service_role_key)
        return cls._service_client

    @classmethod
    def reset_client(cls):
        cls._client = None
        cls._service_client = None


def get_supabase() -> Client:
    return SupabaseClient.get_client()


def get_service_supabase() -> Client:
    return SupabaseClient.get_service_client()
