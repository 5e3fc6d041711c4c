"""Settings providers."""

from dishka import Scope, provide

from skylogin.config import Settings, StorageSettings
from skylogin.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Settings are read once per container, from the environment and ``.env``."""

    scope = Scope.APP

    @provide
    def provide_settings(self) -> Settings:
        return Settings()

    @provide
    def provide_storage_settings(self, settings: Settings) -> StorageSettings:
        return settings.storage
