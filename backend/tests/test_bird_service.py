"""
Aviary Backend: Bird Service Unit Tests
========================================

What:  Tests for BirdService business logic (create, get, list).
How:   Mock DB sessions and a patched repository; no database needed.

What we test:
    ✅ create_bird passes the payload's name and species to the repository
    ✅ create_bird commits before returning; a failed commit raises PersistenceError
    ✅ Required-field policy: off by default, rejects missing/blank fields when set
    ✅ get_bird raises NotFoundError("Bird not found") for unknown ids
    ✅ Ids outside the primary key range are not found without a query
    ✅ list_birds returns what the repository returns
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from sqlalchemy.exc import OperationalError

from aviary.exceptions import NotFoundError, PersistenceError, ValidationError
from aviary.models.bird import Bird
from aviary.schemas.bird import BirdCreate
from aviary.services.bird_service import BirdService


class TestBirdServiceCreate:
    """Tests for the create_bird workflow."""

    def setup_method(self):
        self.service = BirdService()

    @pytest.mark.asyncio
    async def test_create_bird_persists_payload_fields(self, mock_db_session, sample_bird_data):
        with patch("aviary.services.bird_service.BirdRepository") as mock_repo_cls:
            mock_repo_cls.return_value.create = AsyncMock(return_value=Bird(**sample_bird_data))
            mock_repo_cls.return_value.commit = AsyncMock()

            bird = await self.service.create_bird(
                mock_db_session,
                BirdCreate(name="Monk Parakeet", species="Myiopsitta monachus"),
            )

            mock_repo_cls.assert_called_once_with(mock_db_session)
            mock_repo_cls.return_value.create.assert_awaited_once_with(
                name="Monk Parakeet",
                species="Myiopsitta monachus",
            )
            mock_repo_cls.return_value.commit.assert_awaited_once()
            assert bird.id == 1

    @pytest.mark.asyncio
    async def test_create_bird_without_species_passes_none(self, mock_db_session, sample_bird_data):
        with patch("aviary.services.bird_service.BirdRepository") as mock_repo_cls:
            mock_repo_cls.return_value.create = AsyncMock(
                return_value=Bird(**{**sample_bird_data, "species": None})
            )
            mock_repo_cls.return_value.commit = AsyncMock()

            bird = await self.service.create_bird(mock_db_session, BirdCreate(name="Monk Parakeet"))

            mock_repo_cls.return_value.create.assert_awaited_once_with(name="Monk Parakeet", species=None)
            assert bird.species is None

    @pytest.mark.asyncio
    async def test_required_field_missing_raises_before_persisting(self, mock_db_session):
        with patch("aviary.services.bird_service.settings") as mock_settings, \
             patch("aviary.services.bird_service.BirdRepository") as mock_repo_cls:
            mock_settings.required_bird_fields_list = ["name", "species"]

            with pytest.raises(ValidationError) as exc_info:
                await self.service.create_bird(mock_db_session, BirdCreate(name="Monk Parakeet"))

            assert exc_info.value.context == {"fields": ["species"]}
            mock_repo_cls.assert_not_called()

    @pytest.mark.asyncio
    async def test_commit_failure_propagates(self, mock_db_session):
        mock_db_session.commit = AsyncMock(
            side_effect=OperationalError("COMMIT", {}, Exception("disk I/O error"))
        )

        with pytest.raises(PersistenceError):
            await self.service.create_bird(mock_db_session, BirdCreate(name="Kea"))


class TestRequiredFieldPolicy:

    def setup_method(self):
        self.service = BirdService()

    def test_no_required_fields_accepts_empty_payload(self):
        with patch("aviary.services.bird_service.settings") as mock_settings:
            mock_settings.required_bird_fields_list = []
            self.service.check_required_fields(BirdCreate())

    def test_blank_string_counts_as_missing(self):
        with patch("aviary.services.bird_service.settings") as mock_settings:
            mock_settings.required_bird_fields_list = ["name"]
            with pytest.raises(ValidationError, match="name"):
                self.service.check_required_fields(BirdCreate(name="   "))

    def test_all_missing_fields_are_reported(self):
        with patch("aviary.services.bird_service.settings") as mock_settings:
            mock_settings.required_bird_fields_list = ["name", "species"]
            with pytest.raises(ValidationError) as exc_info:
                self.service.check_required_fields(BirdCreate())

            assert exc_info.value.message == "Missing required field(s): name, species"
            assert exc_info.value.status_code == 422


class TestBirdServiceGet:
    """Tests for get_bird retrieval."""

    def setup_method(self):
        self.service = BirdService()

    @pytest.mark.asyncio
    async def test_get_bird_found(self, mock_db_session, sample_bird_data):
        with patch("aviary.services.bird_service.BirdRepository") as mock_repo_cls:
            mock_repo_cls.return_value.find_by_id = AsyncMock(return_value=Bird(**sample_bird_data))

            bird = await self.service.get_bird(mock_db_session, 1)

            assert bird.name == "Monk Parakeet"
            mock_repo_cls.return_value.find_by_id.assert_awaited_once_with(1)

    @pytest.mark.asyncio
    async def test_get_bird_not_found(self, mock_db_session):
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = None
        mock_db_session.execute.return_value = mock_result

        with pytest.raises(NotFoundError) as exc_info:
            await self.service.get_bird(mock_db_session, 404)

        assert exc_info.value.message == "Bird not found"
        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    @pytest.mark.parametrize("bird_id", [0, -5, 2**31, 2**63])
    async def test_get_bird_outside_column_range_is_not_found(self, mock_db_session, bird_id):
        with pytest.raises(NotFoundError) as exc_info:
            await self.service.get_bird(mock_db_session, bird_id)

        assert exc_info.value.message == "Bird not found"
        mock_db_session.execute.assert_not_called()


class TestBirdServiceList:

    @pytest.mark.asyncio
    async def test_list_birds_empty(self, mock_db_session):
        mock_result = MagicMock()
        mock_result.scalars.return_value.all.return_value = []
        mock_db_session.execute.return_value = mock_result

        assert await BirdService().list_birds(mock_db_session) == []
