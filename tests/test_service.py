import requests

from library_transfer.transfer import get_user_data, transfer_data

from conftest import API


def test_get_user_data_without_token() -> None:
    assert get_user_data("") == {"error": "Missing access token."}


def test_get_user_data_network_error(fake_spotify) -> None:
    for path in ("/me/playlists", "/me/tracks", "/me/albums", "/me/shows"):
        fake_spotify.add("GET", f"{API}{path}?limit=50", requests.ConnectionError("offline"))
    fake_spotify.add(
        "GET", f"{API}/me/following?type=artist&limit=50", requests.ConnectionError("offline")
    )

    assert get_user_data("tok") == {"error": "offline"}


def test_transfer_data_missing_source() -> None:
    result = transfer_data(None, "tgt", {"tracks": True, "trackIds": ["t1"]})

    assert result == {"error": "No source account is logged in."}


def test_transfer_data_invalid_options() -> None:
    result = transfer_data("src", "tgt", {"trackIds": "t1"})

    assert result == {"error": "trackIds must be a list of ids."}


def test_transfer_data_transport_error_aborts(fake_spotify) -> None:
    fake_spotify.add("PUT", f"{API}/me/albums", requests.ConnectionError("reset"))

    result = transfer_data("src", "tgt", {"albums": True, "albumIds": ["al1"]})

    assert result == {"error": "reset"}


def test_transfer_data_reports_progress(fake_spotify) -> None:
    fake_spotify.ok("PUT", f"{API}/me/shows")
    seen = []

    result = transfer_data(
        "src", "tgt", {"podcasts": True, "showIds": ["s1", "s2"]}, on_progress=seen.append
    )

    assert result == {"success": [{"type": "podcasts", "count": 2}], "failed": []}
    assert [p.percent for p in seen] == [100.0]


def test_transfer_data_turns_malformed_me_into_playlist_failures(fake_spotify) -> None:
    fake_spotify.ok("GET", f"{API}/me", {"display_name": "no id"})

    result = transfer_data("src", "tgt", {"playlists": True, "playlistIds": ["p1"]})

    assert result == {
        "success": [],
        "failed": [
            {
                "type": "playlist",
                "error": "Could not resolve target account id.",
                "id": "p1",
            }
        ],
    }
