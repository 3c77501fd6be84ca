"""
Fixtures pytest partagees pour les tests move2jelly.

Ce module contient les fixtures communes utilisees dans les tests:
- Mocks des ports (ICatalogClient, IFileSystem) et de la sortie operateur
- Arborescence temporaire incoming / movies / series
- Fabrique de RunConfig
"""

from pathlib import Path
from typing import Callable
from unittest.mock import AsyncMock, MagicMock

import pytest
from rich.console import Console

from move2jelly.core.ports.api_clients import ICatalogClient
from move2jelly.core.ports.file_system import IFileSystem
from move2jelly.core.value_objects.run_config import RunConfig
from move2jelly.utils.output import RunOutput


@pytest.fixture
def mock_catalog() -> AsyncMock:
    """
    Mock de ICatalogClient.

    Les recherches retournent une liste vide et les lectures par ID None
    par defaut ; configurer les retours dans chaque test.
    """
    catalog = AsyncMock(spec=ICatalogClient)
    catalog.search_movies.return_value = []
    catalog.search_shows.return_value = []
    catalog.get_movie_by_id.return_value = None
    catalog.get_show_by_id.return_value = None
    catalog.get_episode.return_value = None
    return catalog


@pytest.fixture
def mock_file_system() -> MagicMock:
    """Mock de IFileSystem : aucune destination n'existe par defaut."""
    fs = MagicMock(spec=IFileSystem)
    fs.exists.return_value = False
    fs.list_names.return_value = []
    fs.list_files.return_value = []
    return fs


@pytest.fixture
def mock_output() -> MagicMock:
    """Mock de RunOutput pour verifier les messages operateur."""
    return MagicMock(spec=RunOutput)


@pytest.fixture
def make_recording_output() -> Callable[[], RunOutput]:
    """Fabrique de RunOutput reels sur une console qui enregistre le texte affiche."""

    def _make() -> RunOutput:
        return RunOutput(Console(record=True, width=300, color_system=None))

    return _make


@pytest.fixture
def recording_output(make_recording_output: Callable[[], RunOutput]) -> RunOutput:
    """RunOutput enregistreur pour un test."""
    return make_recording_output()


@pytest.fixture
def library(tmp_path: Path) -> dict[str, Path]:
    """Arborescence temporaire : repertoire d'arrivee, films et series."""
    dirs = {
        "incoming": tmp_path / "incoming",
        "movies": tmp_path / "movies",
        "series": tmp_path / "series",
    }
    for path in dirs.values():
        path.mkdir()
    return dirs


@pytest.fixture
def make_run_config(library: dict[str, Path]) -> Callable[..., RunConfig]:
    """Fabrique de RunConfig pointant sur l'arborescence temporaire."""

    def _make(**overrides) -> RunConfig:
        values = {
            "incoming_dir": library["incoming"],
            "movies_dir": library["movies"],
            "series_dir": library["series"],
        }
        values.update(overrides)
        return RunConfig(**values)

    return _make
