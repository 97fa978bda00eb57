import pytest

from library_transfer.spotify import RemoteApiError, fetch_all_pages, with_page_size

from conftest import API, FakeResponse


def test_with_page_size_uses_question_mark_without_query() -> None:
    assert with_page_size(f"{API}/me/tracks", 50) == f"{API}/me/tracks?limit=50"


def test_with_page_size_appends_to_existing_query() -> None:
    url = f"{API}/me/following?type=artist"

    assert with_page_size(url, 50) == f"{url}&limit=50"


def test_fetch_all_pages_returns_every_item_in_order(fake_spotify) -> None:
    pages = [
        [{"n": i} for i in range(0, 50)],
        [{"n": i} for i in range(50, 100)],
        [{"n": i} for i in range(100, 107)],
    ]
    urls = fake_spotify.paginate(f"{API}/me/tracks", pages)

    items = fetch_all_pages(f"{API}/me/tracks", "tok")

    assert [item["n"] for item in items] == list(range(107))
    assert [c.url for c in fake_spotify.calls] == urls
    assert all(c.method == "GET" and c.token == "tok" for c in fake_spotify.calls)


def test_fetch_all_pages_custom_page_size(fake_spotify) -> None:
    url = f"{API}/playlists/p1/tracks"
    fake_spotify.paginate(url, [[{"n": 1}]], page_size=100)

    items = fetch_all_pages(url, "tok", page_size=100)

    assert items == [{"n": 1}]
    assert fake_spotify.calls[0].url == f"{url}?limit=100"


def test_fetch_all_pages_missing_items_is_empty(fake_spotify) -> None:
    fake_spotify.ok("GET", f"{API}/me/shows?limit=50", {"next": None})

    assert fetch_all_pages(f"{API}/me/shows", "tok") == []


def test_fetch_all_pages_follows_container_key(fake_spotify) -> None:
    url = f"{API}/me/following?type=artist"
    fake_spotify.paginate(url, [[{"id": "a1"}], [{"id": "a2"}]], container="artists")

    items = fetch_all_pages(url, "tok", container="artists")

    assert [a["id"] for a in items] == ["a1", "a2"]


def test_fetch_all_pages_raises_with_remote_message(fake_spotify) -> None:
    fake_spotify.error("GET", f"{API}/me/albums?limit=50", 401, "The access token expired")

    with pytest.raises(RemoteApiError) as exc_info:
        fetch_all_pages(f"{API}/me/albums", "tok")

    assert str(exc_info.value) == "The access token expired"
    assert exc_info.value.status_code == 401


def test_fetch_all_pages_unexpected_error_shape_uses_fallback(fake_spotify) -> None:
    fake_spotify.add("GET", f"{API}/me/albums?limit=50", FakeResponse(500, {"oops": 1}))

    with pytest.raises(RemoteApiError, match="Failed to fetch data"):
        fetch_all_pages(f"{API}/me/albums", "tok")


def test_fetch_all_pages_error_mid_way_is_never_partial(fake_spotify) -> None:
    first = f"{API}/me/tracks?limit=50"
    second = f"{first}&offset=50"
    fake_spotify.ok("GET", first, {"items": [{"n": 1}], "next": second})
    fake_spotify.error("GET", second, 502, "Bad gateway")

    with pytest.raises(RemoteApiError, match="Bad gateway"):
        fetch_all_pages(f"{API}/me/tracks", "tok")


def test_fetch_all_pages_rejects_a_page_that_is_not_an_object(fake_spotify) -> None:
    fake_spotify.ok("GET", f"{API}/me/tracks?limit=50", ["not", "a", "page"])

    with pytest.raises(RemoteApiError, match="expected an object"):
        fetch_all_pages(f"{API}/me/tracks", "tok")


def test_fetch_all_pages_rejects_items_that_are_not_a_list(fake_spotify) -> None:
    fake_spotify.ok("GET", f"{API}/me/tracks?limit=50", {"items": "nope", "next": None})

    with pytest.raises(RemoteApiError, match="Unexpected page items"):
        fetch_all_pages(f"{API}/me/tracks", "tok")


def test_fetch_all_pages_skips_entries_that_are_not_objects(fake_spotify) -> None:
    fake_spotify.paginate(f"{API}/me/albums", [[{"n": 1}, None, "x", {"n": 2}]])

    assert fetch_all_pages(f"{API}/me/albums", "tok") == [{"n": 1}, {"n": 2}]
