"""URLs of the configuration back end."""

from __future__ import annotations

import uuid
from dataclasses import dataclass

_MAX_LENGTH = 999


def _limit(url: str) -> str:
    encoded = url.encode("utf-8")
    if len(encoded) <= _MAX_LENGTH:
        return url
    return encoded[:_MAX_LENGTH].decode("utf-8", errors="ignore")


@dataclass
class UrlBuilder:
    """Builds back-end URLs on the local host for a given port.

    URLs are cut to at most 999 bytes.
    """

    port: int = -1

    def _url(self, path: str) -> str:
        return _limit(f"http://127.0.0.1:{self.port}/{path}")

    def project_url(self) -> str:
        return self._url("project")

    def sub_entities_url(self, entity_id: uuid.UUID | str) -> str:
        return self._url(f"subEntities/{entity_id}")

    def entity_url(self, entity_id: uuid.UUID | str) -> str:
        return self._url(f"entity/{entity_id}")

    def property_url(self, entity_id: uuid.UUID | str, property_name: str) -> str:
        return self._url(f"property/{entity_id}/{property_name}")