from __future__ import annotations

from threading import Lock
from typing import Any, Callable, Literal, Mapping

from googleapiclient.discovery import build

from .config import (
    GOOGLE_SCOPE_ANALYTICS,
    GOOGLE_SCOPE_INDEXING,
    GOOGLE_SCOPE_WEBMASTERS,
    Settings,
    get_settings,
    service_account_credentials,
    validate_settings,
)

ClientFamily = Literal["analytics_data", "search_console", "indexing"]
CLIENT_FAMILIES: tuple[ClientFamily, ...] = ("analytics_data", "search_console", "indexing")

ClientBuilder = Callable[[Settings], Any]


class CredentialError(RuntimeError):
    """Required credentials are missing from the environment."""


def build_analytics_data(settings: Settings) -> Any:
    credentials = service_account_credentials(settings, scopes=[GOOGLE_SCOPE_ANALYTICS])
    return build("analyticsdata", "v1beta", credentials=credentials, cache_discovery=False)


def build_search_console(settings: Settings) -> Any:
    credentials = service_account_credentials(settings, scopes=[GOOGLE_SCOPE_WEBMASTERS])
    return build("searchconsole", "v1", credentials=credentials, cache_discovery=False)


def build_indexing(settings: Settings) -> Any:
    credentials = service_account_credentials(settings, scopes=[GOOGLE_SCOPE_INDEXING])
    return build("indexing", "v3", credentials=credentials, cache_discovery=False)


DEFAULT_BUILDERS: dict[ClientFamily, ClientBuilder] = {
    "analytics_data": build_analytics_data,
    "search_console": build_search_console,
    "indexing": build_indexing,
}


class ClientRegistry:
    """Lazily built, process-lifetime API services, one per family.

    A service is built on first request and the same object is returned until
    :meth:`reset` drops it. Presence of credentials is checked before building;
    whether the key material is usable is left to google-auth.
    """

    def __init__(
        self,
        *,
        settings_loader: Callable[[], Settings] = get_settings,
        builders: Mapping[ClientFamily, ClientBuilder] | None = None,
    ) -> None:
        self._settings_loader = settings_loader
        self._builders: dict[ClientFamily, ClientBuilder] = dict(DEFAULT_BUILDERS)
        if builders:
            self._builders.update(builders)
        self._clients: dict[ClientFamily, Any] = {}
        self._lock = Lock()

    def get(self, family: ClientFamily) -> Any:
        client = self._clients.get(family)
        if client is not None:
            return client

        with self._lock:
            client = self._clients.get(family)
            if client is not None:
                return client

            settings = self._settings_loader()
            validation = validate_settings(settings)
            if not validation.valid:
                raise CredentialError(f"Invalid GA4 credentials: {', '.join(validation.errors)}")

            client = self._builders[family](settings)
            self._clients[family] = client
            return client

    def analytics_data(self) -> Any:
        return self.get("analytics_data")

    def search_console(self) -> Any:
        return self.get("search_console")

    def indexing(self) -> Any:
        return self.get("indexing")

    def property_id(self) -> str:
        return f"properties/{self._settings_loader().property_id}"

    def site_url(self) -> str:
        return self._settings_loader().site_url

    def reset(self, family: ClientFamily | None = None) -> None:
        with self._lock:
            if family is None:
                self._clients.clear()
            else:
                self._clients.pop(family, None)


default_registry = ClientRegistry()


def resolve_registry(registry: ClientRegistry | None) -> ClientRegistry:
    return registry if registry is not None else default_registry


def get_client() -> Any:
    return default_registry.analytics_data()


def get_search_console_client() -> Any:
    return default_registry.search_console()


def get_indexing_client() -> Any:
    return default_registry.indexing()


def get_property_id() -> str:
    return default_registry.property_id()


def get_site_url() -> str:
    return default_registry.site_url()


def reset_client() -> None:
    default_registry.reset()
