"""Tests for the GitHub releases client using httpx.MockTransport."""

import httpx
import pytest

from release_library.errors import SourceUnavailable
from release_library.sources import GitHubReleaseSource

API = "https://api.github.test"


def make_source(handler, token: str | None = None) -> GitHubReleaseSource:
    return GitHubReleaseSource(
        owner="AdoptOpenJDK",
        token=token,
        api_url=API,
        per_page=2,
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.unit
class TestGitHubReleaseSource:
    """Test pagination, auth headers and error mapping."""

    @pytest.mark.asyncio
    async def test_concatenates_all_pages(self) -> None:
        requested: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requested.append(str(request.url))
            if request.url.params.get("page") == "2":
                return httpx.Response(200, json=[{"tag_name": "c"}])
            next_url = f"{API}/repositories/1/releases?per_page=2&page=2"
            return httpx.Response(
                200,
                json=[{"tag_name": "a"}, {"tag_name": "b"}],
                headers={"Link": f'<{next_url}>; rel="next", <{next_url}>; rel="last"'},
            )

        source = make_source(handler)
        try:
            releases = await source.fetch_all("openjdk8-binaries")
        finally:
            await source.aclose()

        assert [r["tag_name"] for r in releases] == ["a", "b", "c"]
        assert requested[0] == f"{API}/repos/AdoptOpenJDK/openjdk8-binaries/releases?per_page=2"
        assert len(requested) == 2

    @pytest.mark.asyncio
    async def test_sends_token_when_authenticated(self) -> None:
        seen: dict[str, str | None] = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["authorization"] = request.headers.get("authorization")
            return httpx.Response(200, json=[])

        source = make_source(handler, token="secret")
        try:
            await source.fetch_all("openjdk8-binaries")
        finally:
            await source.aclose()

        assert source.authenticated is True
        assert seen["authorization"] == "token secret"

    @pytest.mark.asyncio
    async def test_anonymous_sends_no_authorization(self) -> None:
        seen: dict[str, str | None] = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["authorization"] = request.headers.get("authorization")
            return httpx.Response(200, json=[])

        source = make_source(handler)
        try:
            await source.fetch_all("openjdk8-binaries")
        finally:
            await source.aclose()

        assert seen["authorization"] is None

    @pytest.mark.asyncio
    async def test_rate_limit_raises_source_unavailable(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                403,
                json={"message": "API rate limit exceeded"},
                headers={"X-RateLimit-Remaining": "0", "X-RateLimit-Reset": "1700000000"},
            )

        source = make_source(handler)
        try:
            with pytest.raises(SourceUnavailable) as exc_info:
                await source.fetch_all("openjdk8-nightly")
        finally:
            await source.aclose()

        assert exc_info.value.repository_key == "openjdk8-nightly"
        assert exc_info.value.status_code == 403
        assert "rate limit" in exc_info.value.reason

    @pytest.mark.asyncio
    async def test_missing_repository_raises_source_unavailable(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, json={"message": "Not Found"})

        source = make_source(handler)
        try:
            with pytest.raises(SourceUnavailable) as exc_info:
                await source.fetch_all("openjdk50-binaries")
        finally:
            await source.aclose()

        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_failure_on_later_page_returns_nothing(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.params.get("page") == "2":
                return httpx.Response(502)
            next_url = f"{API}/repositories/1/releases?page=2"
            return httpx.Response(200, json=[{"tag_name": "a"}], headers={"Link": f'<{next_url}>; rel="next"'})

        source = make_source(handler)
        try:
            with pytest.raises(SourceUnavailable):
                await source.fetch_all("openjdk8-binaries")
        finally:
            await source.aclose()

    @pytest.mark.asyncio
    async def test_transport_error_raises_source_unavailable(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        source = make_source(handler)
        try:
            with pytest.raises(SourceUnavailable) as exc_info:
                await source.fetch_all("openjdk8-binaries")
        finally:
            await source.aclose()

        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_non_list_payload_raises_source_unavailable(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"message": "unexpected"})

        source = make_source(handler)
        try:
            with pytest.raises(SourceUnavailable):
                await source.fetch_all("openjdk8-binaries")
        finally:
            await source.aclose()
