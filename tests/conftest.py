"""
Shared fixtures: a Catalog over the in-memory source from catalog_fakes.
"""

from __future__ import annotations

import pytest
from catalog_fakes import ALBUMS, ASSET_BASE, PAGES, PLAYER_SONGS, PLAYERS, FakeCatalogSource

from clave.core.catalog import Catalog


@pytest.fixture
def source() -> FakeCatalogSource:
    return FakeCatalogSource(albums=ALBUMS, players=PLAYERS, pages=PAGES, songs=PLAYER_SONGS)


@pytest.fixture
def catalog(source: FakeCatalogSource) -> Catalog:
    return Catalog(source, asset_base_url=ASSET_BASE)
