"""
Tests unitaires pour TransfererService et LinkedInodeIndex.

Ces tests verifient:
- Le deplacement du fichier video et de ses annexes
- La creation de liens physiques (mode lien)
- Le mode simulation (aucune modification)
- Le refus d'ecraser une destination existante
- La conversion des OSError en TransferError
- La verification de toutes les destinations avant le premier transfert
- L'index des inodes en mode lien
"""

import os
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from move2jelly.adapters.file_system import FileSystemAdapter
from move2jelly.core.entities.video import ParsedVideo
from move2jelly.core.exceptions import TransferError
from move2jelly.core.value_objects.parsed_info import MediaType
from move2jelly.core.value_objects.run_config import TransferMode
from move2jelly.services.transferer import LinkedInodeIndex, TransfererService


@pytest.fixture
def matrix() -> ParsedVideo:
    return ParsedVideo(
        source_filename="The Matrix (1999).mkv",
        destination_folder=Path("The Matrix (1999) [tmdbid-603]"),
        destination_filename="The Matrix (1999) [tmdbid-603] - .mkv",
        media_type=MediaType.MOVIE,
    )


@pytest.fixture
def incoming(library: dict[str, Path]) -> Path:
    source = library["incoming"]
    (source / "The Matrix (1999).mkv").write_bytes(b"video")
    return source


def _service(mode: TransferMode = TransferMode.MOVE, dry_run: bool = False, **kwargs):
    return TransfererService(
        FileSystemAdapter(),
        transfer_mode=mode,
        dry_run=dry_run,
        output=MagicMock(),
        **kwargs,
    )


class TestPlaceMove:
    """Tests du placement par deplacement."""

    def test_moves_primary_file(
        self, matrix: ParsedVideo, incoming: Path, library: dict[str, Path]
    ) -> None:
        destination = _service().place(matrix, incoming, library["movies"])

        expected = library["movies"] / "The Matrix (1999) [tmdbid-603]" / "The Matrix (1999) [tmdbid-603] - .mkv"
        assert destination == expected
        assert expected.read_bytes() == b"video"
        assert not (incoming / "The Matrix (1999).mkv").exists()

    def test_moves_sidecars_with_movie_names(
        self, matrix: ParsedVideo, incoming: Path, library: dict[str, Path]
    ) -> None:
        (incoming / "The Matrix (1999).en.srt").write_text("subs")
        (incoming / "The Matrix (1999).nfo").write_text("<movie/>")
        (incoming / "The Matrix (1999)-poster.jpg").write_bytes(b"jpg")
        (incoming / "Other Movie (2000).srt").write_text("other")

        _service().place(matrix, incoming, library["movies"])

        folder = library["movies"] / "The Matrix (1999) [tmdbid-603]"
        assert (folder / "The Matrix (1999) [tmdbid-603] - .en.srt").read_text() == "subs"
        assert (folder / "movie.nfo").read_text() == "<movie/>"
        assert (folder / "poster.jpg").exists()
        assert (incoming / "Other Movie (2000).srt").exists()

    def test_actions_are_reported(
        self, matrix: ParsedVideo, incoming: Path, library: dict[str, Path]
    ) -> None:
        (incoming / "The Matrix (1999).en.srt").write_text("subs")
        service = _service()

        service.place(matrix, incoming, library["movies"])

        messages = [c.args[0] for c in service._output.action.call_args_list]
        assert messages[0].startswith("Create folder: ")
        assert messages[1].startswith("Move file to: ")
        assert messages[2].startswith("Move .en.srt to: ")

    def test_existing_destination_is_not_overwritten(
        self, matrix: ParsedVideo, incoming: Path, library: dict[str, Path]
    ) -> None:
        folder = library["movies"] / "The Matrix (1999) [tmdbid-603]"
        folder.mkdir()
        (folder / "The Matrix (1999) [tmdbid-603] - .mkv").write_bytes(b"old")

        with pytest.raises(TransferError, match="already exists"):
            _service().place(matrix, incoming, library["movies"])

        assert (folder / "The Matrix (1999) [tmdbid-603] - .mkv").read_bytes() == b"old"
        assert (incoming / "The Matrix (1999).mkv").exists()


class TestPlaceChecksFirst:
    """Un element refuse ne laisse rien a moitie range."""

    def test_existing_sidecar_destination_keeps_video_in_incoming(
        self, matrix: ParsedVideo, incoming: Path, library: dict[str, Path]
    ) -> None:
        (incoming / "The Matrix (1999).nfo").write_text("<movie/>")
        folder = library["movies"] / "The Matrix (1999) [tmdbid-603]"
        folder.mkdir()
        (folder / "movie.nfo").write_text("old")

        with pytest.raises(TransferError, match="movie.nfo"):
            _service().place(matrix, incoming, library["movies"])

        assert (incoming / "The Matrix (1999).mkv").exists()
        assert (incoming / "The Matrix (1999).nfo").exists()
        assert sorted(p.name for p in folder.iterdir()) == ["movie.nfo"]
        assert (folder / "movie.nfo").read_text() == "old"

    def test_sidecar_name_too_long_is_a_transfer_error(
        self, incoming: Path, library: dict[str, Path]
    ) -> None:
        title = "r" * 225
        video = ParsedVideo(
            source_filename="The Matrix (1999).mkv",
            destination_folder=Path(f"{title} (2000) [tmdbid-1]"),
            destination_filename=f"{title} (2000) [tmdbid-1] - .mkv",
            media_type=MediaType.MOVIE,
        )
        (incoming / "The Matrix (1999).en.forced.srt").write_text("subs")

        with pytest.raises(TransferError, match="Invalid name"):
            _service().place(video, incoming, library["movies"])

        assert (incoming / "The Matrix (1999).mkv").exists()
        assert list(library["movies"].iterdir()) == []

    def test_plan_lists_video_then_sidecars(
        self, matrix: ParsedVideo, incoming: Path, library: dict[str, Path]
    ) -> None:
        (incoming / "The Matrix (1999).en.srt").write_text("subs")
        (incoming / "The Matrix (1999).nfo").write_text("<movie/>")

        transfers = _service().plan(matrix, incoming, library["movies"])

        assert [t.label for t in transfers] == ["file", ".en.srt", ".nfo"]
        assert transfers[2].destination.name == "movie.nfo"
        assert list(library["movies"].iterdir()) == []


class TestPlaceLink:
    """Tests du placement par lien physique."""

    def test_links_primary_file(
        self, matrix: ParsedVideo, incoming: Path, library: dict[str, Path]
    ) -> None:
        destination = _service(TransferMode.LINK).place(matrix, incoming, library["movies"])

        source = incoming / "The Matrix (1999).mkv"
        assert source.exists()
        assert os.path.samefile(source, destination)
        assert source.stat().st_nlink == 2

    def test_link_index_is_updated(
        self, matrix: ParsedVideo, incoming: Path, library: dict[str, Path]
    ) -> None:
        fs = FileSystemAdapter()
        index = LinkedInodeIndex(fs, [library["movies"], library["series"]])
        source = incoming / "The Matrix (1999).mkv"
        assert index.is_linked(source) is False

        _service(TransferMode.LINK, link_index=index).place(matrix, incoming, library["movies"])

        assert index.is_linked(source) is True


class TestPlaceDryRun:
    """Tests du mode simulation."""

    def test_nothing_changes(
        self, matrix: ParsedVideo, incoming: Path, library: dict[str, Path]
    ) -> None:
        (incoming / "The Matrix (1999).en.srt").write_text("subs")
        before = sorted(p.name for p in incoming.iterdir())

        destination = _service(dry_run=True).place(matrix, incoming, library["movies"])

        assert destination.name == "The Matrix (1999) [tmdbid-603] - .mkv"
        assert sorted(p.name for p in incoming.iterdir()) == before
        assert list(library["movies"].iterdir()) == []


class TestTransferErrors:
    """Conversion des erreurs systeme."""

    def test_make_dirs_failure(self, matrix: ParsedVideo, mock_file_system: MagicMock) -> None:
        mock_file_system.make_dirs.side_effect = PermissionError("denied")
        service = TransfererService(mock_file_system, output=MagicMock())

        with pytest.raises(TransferError, match="Cannot create folder"):
            service.place(matrix, Path("/incoming"), Path("/movies"))

    def test_move_failure(self, matrix: ParsedVideo, mock_file_system: MagicMock) -> None:
        mock_file_system.move.side_effect = OSError(28, "No space left on device")
        service = TransfererService(mock_file_system, output=MagicMock())

        with pytest.raises(TransferError) as exc_info:
            service.place(matrix, Path("/incoming"), Path("/movies"))

        assert exc_info.value.source == Path("/incoming/The Matrix (1999).mkv")

    def test_link_failure(self, matrix: ParsedVideo, mock_file_system: MagicMock) -> None:
        mock_file_system.hard_link.side_effect = OSError(18, "Invalid cross-device link")
        service = TransfererService(
            mock_file_system, transfer_mode=TransferMode.LINK, output=MagicMock()
        )

        with pytest.raises(TransferError, match="Link failed"):
            service.place(matrix, Path("/incoming"), Path("/movies"))


class TestLinkedInodeIndex:
    """Tests pour LinkedInodeIndex."""

    def test_single_link_skips_scan(self, mock_file_system: MagicMock) -> None:
        from move2jelly.core.ports.file_system import FileIdentity

        mock_file_system.stat.return_value = FileIdentity(link_count=1, inode=1, device=1)
        index = LinkedInodeIndex(mock_file_system, [Path("/movies")])

        assert index.is_linked(Path("/incoming/a.mkv")) is False
        mock_file_system.walk_files.assert_not_called()

    def test_link_outside_roots_is_ignored(self, tmp_path: Path, library: dict[str, Path]) -> None:
        source = library["incoming"] / "a.mkv"
        source.write_bytes(b"x")
        os.link(source, tmp_path / "elsewhere.mkv")
        index = LinkedInodeIndex(FileSystemAdapter(), [library["movies"]])

        assert index.is_linked(source) is False

    def test_link_inside_roots(self, library: dict[str, Path]) -> None:
        source = library["incoming"] / "a.mkv"
        source.write_bytes(b"x")
        (library["series"] / "Show").mkdir()
        os.link(source, library["series"] / "Show" / "a.mkv")
        index = LinkedInodeIndex(FileSystemAdapter(), [library["movies"], library["series"]])

        assert index.is_linked(source) is True

    def test_source_in_ignored_dir_is_not_linked(
        self, tmp_path: Path, library: dict[str, Path]
    ) -> None:
        seed = tmp_path / "seed"
        seed.mkdir()
        (seed / "a.mkv").write_bytes(b"x")
        source = library["incoming"] / "a.mkv"
        os.link(seed / "a.mkv", source)
        index = LinkedInodeIndex(
            FileSystemAdapter(), [library["incoming"]], ignored_dir=library["incoming"]
        )

        assert index.is_linked(source) is False

    def test_link_below_ignored_dir_counts(self, library: dict[str, Path]) -> None:
        source = library["incoming"] / "a.mkv"
        source.write_bytes(b"x")
        (library["incoming"] / "A (2000)").mkdir()
        os.link(source, library["incoming"] / "A (2000)" / "a.mkv")
        index = LinkedInodeIndex(
            FileSystemAdapter(), [library["incoming"]], ignored_dir=library["incoming"]
        )

        assert index.is_linked(source) is True
