"""Tests for the artist repository."""

import pytest

from streamvault.config.constants import Genre
from streamvault.core.exceptions import ValidationError
from streamvault.features.artists import ArtistRepository


class TestArtistRepository:
    """Artist repository operations."""

    @pytest.fixture
    def repository(self, mock_db):
        return ArtistRepository(mock_db)

    @pytest.mark.asyncio
    async def test_find_by_user_id(self, repository, mock_db, artist_row, sample_user_id):
        mock_db.query.return_value = [artist_row]

        artist = await repository.find_by_user_id(sample_user_id)

        assert artist.user_id == sample_user_id
        assert artist.genres == [Genre.ROCK, Genre.ELECTRONIC]
        sql, params = mock_db.query.call_args[0]
        assert sql == "SELECT * FROM artists WHERE user_id = $1 AND deleted_at IS NULL LIMIT $2"
        assert params == [sample_user_id.value, 1]

    @pytest.mark.asyncio
    async def test_find_by_user_id_missing(self, repository, mock_db, sample_user_id):
        assert await repository.find_by_user_id(sample_user_id) is None

    @pytest.mark.asyncio
    async def test_find_by_genre(self, repository, mock_db):
        mock_db.query_one.return_value = {"count": 0}

        await repository.find_by_genre("rock")

        count_sql, count_params = mock_db.query_one.call_args[0]
        assert "genres && $1" in count_sql
        assert count_params == (["rock"],)
        assert "ORDER BY follower_count DESC" in mock_db.query.call_args[0][0]

    @pytest.mark.asyncio
    async def test_find_by_unknown_genre(self, repository, mock_db):
        with pytest.raises(ValidationError):
            await repository.find_by_genre("polka")

    @pytest.mark.asyncio
    async def test_search_columns(self, repository, mock_db):
        mock_db.query_one.return_value = {"count": 0}

        await repository.find_many({"search": "engine"})

        count_sql = mock_db.query_one.call_args[0][0]
        assert "(artist_name ILIKE $1 OR biography ILIKE $2)" in count_sql

    @pytest.mark.asyncio
    async def test_find_trending(self, repository, mock_db):
        await repository.find_trending(limit=10)

        sql, params = mock_db.query.call_args[0]
        assert "is_verified = TRUE" in sql
        assert "ORDER BY monthly_listeners DESC" in sql
        assert params == [10]

    @pytest.mark.asyncio
    async def test_exists_by_name_for_different_user(self, repository, mock_db, sample_user_id):
        mock_db.query_one.return_value = None

        assert await repository.exists_by_name_for_different_user(" Engines ", sample_user_id) is False

        sql, params = mock_db.query_one.call_args[0]
        assert "LOWER(artist_name) = LOWER($1)" in sql
        assert "user_id != $2" in sql
        assert params == ["Engines", sample_user_id.value]

    @pytest.mark.asyncio
    async def test_update_monthly_listeners(self, repository, mock_db, sample_artist_id):
        assert await repository.update_monthly_listeners(sample_artist_id, 9000) is True

        sql, params = mock_db.execute.call_args[0]
        assert "SET monthly_listeners = $2" in sql
        assert params == [sample_artist_id.value, 9000]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", [-1, "10", True])
    async def test_update_follower_count_rejects_bad_values(self, repository, mock_db, sample_artist_id, value):
        with pytest.raises(ValidationError):
            await repository.update_follower_count(sample_artist_id, value)

        mock_db.execute.assert_not_called()

    @pytest.mark.asyncio
    async def test_follower_counters(self, repository, mock_db, sample_artist_id):
        await repository.increment_followers(sample_artist_id)
        assert "follower_count + $2" in mock_db.execute.call_args[0][0]

        await repository.decrement_followers(sample_artist_id)
        assert "GREATEST(follower_count - $2, 0)" in mock_db.execute.call_args[0][0]

    @pytest.mark.asyncio
    async def test_only_counter_columns_can_be_adjusted(self, repository, sample_artist_id):
        with pytest.raises(ValidationError):
            await repository._adjust_counter(sample_artist_id, "monthly_listeners")

    @pytest.mark.asyncio
    async def test_find_verified(self, repository, mock_db):
        mock_db.query_one.return_value = {"count": 0}

        await repository.find_verified({"page": 2, "pageSize": 10})

        count_sql, count_params = mock_db.query_one.call_args[0]
        assert "is_verified = $1" in count_sql
        assert count_params == (True,)
        assert mock_db.query.call_args[0][1] == (True, 10, 10)

    @pytest.mark.asyncio
    async def test_find_popular_by_genre(self, repository, mock_db):
        await repository.find_popular(limit=3, genre="jazz")

        sql, params = mock_db.query.call_args[0]
        assert "genres && $1" in sql
        assert "ORDER BY follower_count DESC" in sql
        assert params == [["jazz"], 3]

    @pytest.mark.asyncio
    async def test_count_verified(self, repository, mock_db):
        mock_db.query_one.return_value = {"count": 4}

        assert await repository.count_verified() == 4
