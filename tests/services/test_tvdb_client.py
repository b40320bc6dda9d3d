"""Tests for the aiohttp TheTVDB client."""

from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from tvdbmeta.config.models.api_settings import TvdbSettings
from tvdbmeta.services.tvdb.tvdb_client import TvdbClient
from tvdbmeta.shared.errors import AuthenticationError, ErrorCode, RemoteServiceError
from tvdbmeta.shared.models.metadata import ArtworkFilters, EpisodeQuery, SearchFilters


def _response(status: int = 200, payload=None, text: str = "") -> MagicMock:
    response = MagicMock()
    response.status = status
    response.json = AsyncMock(return_value=payload)
    response.text = AsyncMock(return_value=text)
    return response


@pytest.fixture
def http_session():
    """Mock aiohttp session; set ``respond`` to choose the response."""
    session = MagicMock()
    session.closed = False
    session.close = AsyncMock()

    def respond(response: MagicMock) -> None:
        session.request.return_value.__aenter__.return_value = response

    session.respond = respond
    return session


@pytest.fixture
def client(http_session):
    return TvdbClient(base_url="https://api.example/v4/", session=http_session)


class TestRequest:
    """Test cases for the request and envelope handling."""

    @pytest.mark.asyncio
    async def test_data_unwrapped(self, client, http_session):
        """Test that the data member of the envelope is returned."""
        http_session.respond(_response(payload={"status": "success", "data": {"id": 1}}))

        data = await client.get_series_detail("tok", 1, "en")

        assert data == {"id": 1}
        args, kwargs = http_session.request.call_args
        assert args == ("GET", "https://api.example/v4/series/1/extended")
        assert kwargs["headers"] == {"Authorization": "Bearer tok", "Accept-Language": "en"}
        assert kwargs["params"] == {"meta": "translations"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [401, 403])
    async def test_rejected_credentials(self, client, http_session, status):
        """Test that 401 and 403 are authentication errors."""
        http_session.respond(_response(status=status))

        with pytest.raises(AuthenticationError) as exc_info:
            await client.login("bad-key")

        assert exc_info.value.code == ErrorCode.TVDB_API_AUTHENTICATION_ERROR

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("status", "code"),
        [
            (404, ErrorCode.TVDB_API_MEDIA_NOT_FOUND),
            (429, ErrorCode.TVDB_API_RATE_LIMIT_EXCEEDED),
            (503, ErrorCode.TVDB_API_SERVER_ERROR),
            (400, ErrorCode.TVDB_API_REQUEST_FAILED),
        ],
    )
    async def test_http_failures(self, client, http_session, status, code):
        """Test that other failing statuses are remote service errors."""
        http_session.respond(_response(status=status, text="nope"))

        with pytest.raises(RemoteServiceError) as exc_info:
            await client.get_episode_detail("tok", 5, "en")

        assert exc_info.value.status_code == status
        assert exc_info.value.code == code

    @pytest.mark.asyncio
    async def test_transport_failure(self, client, http_session):
        """Test that a connection failure has status 0."""
        http_session.request.side_effect = aiohttp.ClientConnectionError("refused")

        with pytest.raises(RemoteServiceError) as exc_info:
            await client.get_languages("tok")

        assert exc_info.value.status_code == 0
        assert exc_info.value.code == ErrorCode.TVDB_API_CONNECTION_ERROR
        assert isinstance(exc_info.value.original_error, aiohttp.ClientConnectionError)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [{"status": "success"}, ["not", "an", "envelope"]])
    async def test_missing_envelope(self, client, http_session, payload):
        """Test that a body without the data envelope is an invalid response."""
        http_session.respond(_response(payload=payload))

        with pytest.raises(RemoteServiceError) as exc_info:
            await client.get_artwork_categories("tok")

        assert exc_info.value.code == ErrorCode.TVDB_API_INVALID_RESPONSE

    @pytest.mark.asyncio
    async def test_non_json_body(self, client, http_session):
        """Test that an undecodable body is an invalid response."""
        response = _response()
        response.json.side_effect = ValueError("Expecting value")
        http_session.respond(response)

        with pytest.raises(RemoteServiceError) as exc_info:
            await client.get_languages("tok")

        assert exc_info.value.code == ErrorCode.TVDB_API_INVALID_RESPONSE


class TestEndpoints:
    """Test cases for the individual endpoint calls."""

    @pytest.mark.asyncio
    async def test_login(self, client, http_session):
        """Test the login body and the returned token."""
        http_session.respond(_response(payload={"data": {"token": "abc"}}))

        token = await client.login("key", pin="1234")

        assert token == "abc"
        args, kwargs = http_session.request.call_args
        assert args == ("POST", "https://api.example/v4/login")
        assert kwargs["json"] == {"apikey": "key", "pin": "1234"}
        assert "Authorization" not in kwargs["headers"]

    @pytest.mark.asyncio
    async def test_login_without_token(self, client, http_session):
        """Test that a login answer without token yields an empty string."""
        http_session.respond(_response(payload={"data": {}}))

        assert await client.login("key") == ""

    @pytest.mark.asyncio
    async def test_search_params(self, client, http_session):
        """Test that search filters become query parameters."""
        http_session.respond(_response(payload={"data": None}))

        results = await client.search("tok", SearchFilters(query="office", language="en"))

        assert results == []
        _, kwargs = http_session.request.call_args
        assert kwargs["params"] == {"query": "office", "type": "series", "language": "en"}

    @pytest.mark.asyncio
    async def test_series_episodes(self, client, http_session):
        """Test the season type path and episode query parameters."""
        http_session.respond(_response(payload={"data": {"episodes": []}}))

        await client.get_series_episodes(
            "tok", 73244, "dvd", EpisodeQuery(season=1, episode_number=2), "en"
        )

        args, kwargs = http_session.request.call_args
        assert args[1] == "https://api.example/v4/series/73244/episodes/dvd"
        assert kwargs["params"] == {"page": "0", "season": "1", "episodeNumber": "2"}

    @pytest.mark.asyncio
    async def test_artwork_and_translation_paths(self, client, http_session):
        """Test artwork filters and the translation path."""
        http_session.respond(_response(payload={"data": {}}))

        await client.get_artwork("tok", 1, ArtworkFilters(type=2, lang="de"), "de")
        _, kwargs = http_session.request.call_args
        assert kwargs["params"] == {"type": "2", "lang": "de"}

        await client.get_episode_translation("tok", 7, "eng")
        args, _ = http_session.request.call_args
        assert args[1] == "https://api.example/v4/episodes/7/translations/eng"


class TestLifecycle:
    """Test cases for session ownership."""

    @pytest.mark.asyncio
    async def test_external_session_not_closed(self, client, http_session):
        """Test that a caller's session is left open."""
        async with client:
            pass

        http_session.close.assert_not_awaited()

    def test_from_settings(self):
        """Test construction from settings."""
        client = TvdbClient.from_settings(
            TvdbSettings(base_url="https://api.example/v4", timeout=5)
        )

        assert client.base_url == "https://api.example/v4"
        assert client.timeout == 5
