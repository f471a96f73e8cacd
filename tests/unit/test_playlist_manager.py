"""Tests for the playlist resource manager against a mocked store."""

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from playlist_service.application.services import (
    CREATION_ERROR,
    DELETION_ERROR,
    REQUEST_ERROR,
    UPDATING_ERROR,
)
from playlist_service.domain.errors import (
    ConflictError,
    DuplicateMembershipError,
    InvalidInputError,
    NotFoundError,
    StoreError,
    UnauthorizedError,
)

OWNER = "0xabc"
INTRUDER = "0xdef"


def store_failure():
    return OperationalError("SELECT 1", {}, Exception("database is locked"))


class TestOwnership:
    """Mutating operations are refused before any store access."""

    @pytest.mark.parametrize("caller", [INTRUDER, None, ""])
    async def test_create_requires_owner(self, manager, mock_uow, caller):
        """Test that a foreign or missing caller cannot create."""
        with pytest.raises(UnauthorizedError) as exc_info:
            await manager.create_playlist(OWNER, caller, "My Mix!")

        assert exc_info.value.message == "Unauthorized"
        mock_uow.__aenter__.assert_not_awaited()
        mock_uow.get_playlist_repository.assert_not_called()

    async def test_ownership_checked_before_payload(self, manager, mock_uow):
        """Test that an intruder with a bad payload still gets Unauthorized."""
        with pytest.raises(UnauthorizedError):
            await manager.create_playlist(OWNER, INTRUDER, "")

    @pytest.mark.parametrize(
        ("operation", "args"),
        [
            ("rename_playlist", ("my-mix", "New Title")),
            ("delete_playlist", ("my-mix",)),
            ("add_track", ("my-mix", "t1")),
            ("remove_track", ("my-mix", "t1")),
        ],
    )
    async def test_every_write_requires_owner(
        self, manager, mock_playlist_repository, operation, args
    ):
        """Test that each mutating operation checks the caller."""
        with pytest.raises(UnauthorizedError):
            await getattr(manager, operation)(OWNER, INTRUDER, *args)

        assert mock_playlist_repository.mock_calls == []

    async def test_reads_need_no_caller(self, manager):
        """Test that list and get run without a caller."""
        assert len(await manager.list_playlists(OWNER)) == 1
        assert (await manager.get_playlist(OWNER, "my-mix")).slug == "my-mix"


class TestValidation:
    """Payload checks run after ownership, before the store."""

    @pytest.mark.parametrize("title", [None, "", "!!!", 42])
    async def test_create_rejects_unusable_titles(
        self, manager, mock_playlist_repository, title
    ):
        """Test missing, empty, slugless and non-string titles."""
        with pytest.raises(InvalidInputError) as exc_info:
            await manager.create_playlist(OWNER, OWNER, title)

        assert exc_info.value.message == "Invalid data"
        mock_playlist_repository.create.assert_not_called()

    async def test_rename_rejects_empty_title(self, manager, mock_playlist_repository):
        """Test rename validation."""
        with pytest.raises(InvalidInputError):
            await manager.rename_playlist(OWNER, OWNER, "my-mix", "")

        mock_playlist_repository.rename.assert_not_called()

    @pytest.mark.parametrize("track_id", [None, ""])
    async def test_add_track_requires_track_id(
        self, manager, mock_playlist_repository, track_id
    ):
        """Test that a missing track ID is invalid."""
        with pytest.raises(InvalidInputError) as exc_info:
            await manager.add_track(OWNER, OWNER, "my-mix", track_id)

        assert exc_info.value.field == "trackId"
        mock_playlist_repository.add_track.assert_not_called()


class TestResults:
    """Shapes returned by each operation."""

    async def test_create_derives_slug_and_returns_empty_tracks(
        self, manager, mock_playlist_repository
    ):
        """Test the repository call and the response shape of create."""
        view = await manager.create_playlist(OWNER, OWNER, "My Mix!")

        mock_playlist_repository.create.assert_awaited_once_with(
            owner_address=OWNER, title="My Mix!", slug="my-mix"
        )
        assert view.to_dict()["tracks"] == []

    async def test_rename_returns_metadata_only(
        self, manager, mock_playlist_repository
    ):
        """Test that rename leaves the tracks key out."""
        view = await manager.rename_playlist(OWNER, OWNER, "my-mix", "Road Trip")

        mock_playlist_repository.rename.assert_awaited_once_with(
            owner_address=OWNER,
            old_slug="my-mix",
            new_title="Road Trip",
            new_slug="road-trip",
        )
        assert "tracks" not in view.to_dict()

    async def test_reads_project_tracks(self, manager):
        """Test that play counts and tags are computed on read."""
        view = await manager.get_playlist(OWNER, "my-mix")

        track = view.to_dict()["tracks"][0]
        assert track["playCount"] == 3
        assert track["tags"] == ["rock", "live"]

    async def test_add_track_returns_projected_playlist(self, manager):
        """Test the add-track response."""
        view = await manager.add_track(OWNER, OWNER, "my-mix", "t1")
        assert [t.id for t in view.tracks] == ["t1"]

    async def test_delete_commits_through_unit_of_work(self, manager, mock_uow):
        """Test that writes run inside the unit of work."""
        await manager.delete_playlist(OWNER, OWNER, "my-mix")

        mock_uow.__aenter__.assert_awaited_once()
        mock_uow.__aexit__.assert_awaited_once()


class TestErrorTranslation:
    """Store failures become domain errors with client-safe messages."""

    @pytest.mark.parametrize(
        ("operation", "args", "repo_method", "message"),
        [
            ("list_playlists", (OWNER,), "list_by_owner", REQUEST_ERROR),
            ("get_playlist", (OWNER, "my-mix"), "get_by_owner_and_slug", REQUEST_ERROR),
            ("create_playlist", (OWNER, OWNER, "My Mix!"), "create", CREATION_ERROR),
            ("rename_playlist", (OWNER, OWNER, "my-mix", "X"), "rename", UPDATING_ERROR),
            ("delete_playlist", (OWNER, OWNER, "my-mix"), "delete", DELETION_ERROR),
            ("add_track", (OWNER, OWNER, "my-mix", "t1"), "add_track", UPDATING_ERROR),
            ("remove_track", (OWNER, OWNER, "my-mix", "t1"), "remove_track", UPDATING_ERROR),
        ],
    )
    async def test_store_errors_carry_operation_message(
        self, manager, mock_playlist_repository, operation, args, repo_method, message
    ):
        """Test the per-operation message and the preserved store code."""
        failure = store_failure()
        getattr(mock_playlist_repository, repo_method).side_effect = failure

        with pytest.raises(StoreError) as exc_info:
            await getattr(manager, operation)(*args)

        assert exc_info.value.message == message
        assert exc_info.value.code == failure.code
        assert "locked" not in exc_info.value.message

    async def test_untranslated_integrity_error_is_a_store_error(
        self, manager, mock_playlist_repository
    ):
        """Test that a non-unique integrity failure is not reported as a conflict."""
        mock_playlist_repository.add_track.side_effect = IntegrityError(
            "INSERT", {}, Exception("FOREIGN KEY constraint failed")
        )

        with pytest.raises(StoreError) as exc_info:
            await manager.add_track(OWNER, OWNER, "my-mix", "t1")

        assert exc_info.value.message == UPDATING_ERROR

    async def test_store_error_prefers_driver_code(
        self, manager, mock_playlist_repository
    ):
        """Test that the driver's error name replaces SQLAlchemy's doc code."""

        class BusyError(Exception):
            sqlite_errorname = "SQLITE_BUSY"

        mock_playlist_repository.delete.side_effect = OperationalError(
            "DELETE", {}, BusyError("database is locked")
        )

        with pytest.raises(StoreError) as exc_info:
            await manager.delete_playlist(OWNER, OWNER, "my-mix")

        assert exc_info.value.code == "SQLITE_BUSY"
        assert exc_info.value.message == DELETION_ERROR

    @pytest.mark.parametrize(
        "error", [NotFoundError(), ConflictError(), DuplicateMembershipError()]
    )
    async def test_domain_errors_pass_through(
        self, manager, mock_playlist_repository, error
    ):
        """Test that repository outcomes reach the caller unchanged."""
        mock_playlist_repository.add_track.side_effect = error

        with pytest.raises(type(error)) as exc_info:
            await manager.add_track(OWNER, OWNER, "my-mix", "t1")

        assert exc_info.value is error

    async def test_failed_write_rolls_back(
        self, manager, mock_uow, mock_playlist_repository
    ):
        """Test that the unit of work sees the exception on exit."""
        mock_playlist_repository.create.side_effect = ConflictError()

        with pytest.raises(ConflictError):
            await manager.create_playlist(OWNER, OWNER, "My Mix!")

        exc_type = mock_uow.__aexit__.await_args.args[0]
        assert exc_type is ConflictError
