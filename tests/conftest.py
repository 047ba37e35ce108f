"""Test configuration and fixtures"""

import json
import pytest
import tempfile
from pathlib import Path
from unittest.mock import Mock

from requests.cookies import RequestsCookieJar, create_cookie


def make_cookie(name, value, domain=".youtube.com"):
    return create_cookie(name, value, domain=domain, path="/")


def runs(*texts):
    return {"runs": [{"text": text} for text in texts]}


def thumbnails(*widths):
    return [
        {"url": f"https://i.ytimg.com/{width}.jpg", "width": width, "height": width}
        for width in widths
    ]


def two_row_item(title, subtitle=(), video_id=None, playlist_id=None, browse_id=None,
                 menu_browse_id=None, widths=(226, 544)):
    """Build a musicTwoRowItemRenderer entry"""
    endpoint = {}
    if video_id or (playlist_id and not browse_id):
        watch = {}
        if video_id:
            watch["videoId"] = video_id
        if playlist_id:
            watch["playlistId"] = playlist_id
        endpoint["watchEndpoint"] = watch
    if browse_id:
        endpoint["browseEndpoint"] = {"browseId": browse_id}

    renderer = {
        "title": runs(title),
        "subtitle": runs(*subtitle),
        "thumbnailRenderer": {
            "musicThumbnailRenderer": {"thumbnail": {"thumbnails": thumbnails(*widths)}}
        },
        "navigationEndpoint": endpoint,
    }
    if menu_browse_id:
        renderer["menu"] = {"menuRenderer": {"items": [
            {"menuNavigationItemRenderer": {
                "navigationEndpoint": {"browseEndpoint": {"browseId": menu_browse_id}}
            }}
        ]}}
    return {"musicTwoRowItemRenderer": renderer}


def list_item(title, subtitle=(), video_id=None, playlist_item_video_id=None, widths=(60, 120)):
    """Build a musicResponsiveListItemRenderer entry"""
    renderer = {
        "flexColumns": [
            {"musicResponsiveListItemFlexColumnRenderer": {"text": runs(title)}},
            {"musicResponsiveListItemFlexColumnRenderer": {"text": runs(*subtitle)}},
        ],
        "thumbnail": {
            "musicThumbnailRenderer": {"thumbnail": {"thumbnails": thumbnails(*widths)}}
        },
    }
    if video_id:
        renderer["overlay"] = {"musicItemThumbnailOverlayRenderer": {"content": {
            "musicPlayButtonRenderer": {"playNavigationEndpoint": {"watchEndpoint": {"videoId": video_id}}}
        }}}
    if playlist_item_video_id:
        renderer["playlistItemData"] = {"videoId": playlist_item_video_id}
    return {"musicResponsiveListItemRenderer": renderer}


def tab_sections(sections):
    return {"tabs": [{"tabRenderer": {"content": {"sectionListRenderer": {"contents": sections}}}}]}


def carousel(title, items):
    shelf = {"contents": items}
    if title is not None:
        shelf["header"] = {"musicCarouselShelfBasicHeaderRenderer": {"title": runs(title)}}
    return {"musicCarouselShelfRenderer": shelf}


def make_response(status_code=200, body=None, text=None):
    """Mock of a requests.Response"""
    response = Mock()
    response.status_code = status_code
    response.text = text if text is not None else json.dumps(body or {})
    return response


@pytest.fixture
def temp_dir():
    """Create temporary directory for tests"""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def logged_in_jar():
    """Cookie jar of a logged-in browser session"""
    jar = RequestsCookieJar()
    jar.set_cookie(make_cookie("SID", "sid-value"))
    jar.set_cookie(make_cookie("SAPISID", "legacy-key"))
    jar.set_cookie(make_cookie("__Secure-3PAPISID", "secure-key"))
    jar.set_cookie(make_cookie("NID", "other", domain=".google.com"))
    return jar


@pytest.fixture
def mock_session():
    """requests.Session stand-in answering every POST with an empty JSON object"""
    session = Mock()
    session.post.return_value = make_response(body={})
    return session


@pytest.fixture
def home_response():
    """Home feed with a titled shelf, an untitled shelf and an empty shelf"""
    return {"contents": {"singleColumnBrowseResultsRenderer": tab_sections([
        carousel("Quick picks", [
            list_item("Gülpembe", ("Barış Manço", " • ", "Sarı Çizmeli Mehmet Ağa"), video_id="vid00000001"),
            two_row_item("Dönence", ("Albüm", " • ", "Barış Manço"), browse_id="MPREb_abc"),
        ]),
        carousel(None, [
            two_row_item("Chill Mix", ("Mix", " • ", "Various"), video_id="vid00000002", playlist_id="RDCLAK5uy"),
        ]),
        carousel("Nothing here", [{"unknownRenderer": {}}]),
        {"musicTastebuilderShelfRenderer": {}},
    ])}}


@pytest.fixture
def search_response():
    """Songs search response with two shelves"""
    return {"contents": {"tabbedSearchResultsRenderer": tab_sections([
        {"musicShelfRenderer": {"contents": [
            list_item("Kış Güneşi", ("Tarkan", " • ", "Karma", " • ", "4:12"), video_id="vid00000003"),
            list_item("Şımarık", ("Tarkan",), playlist_item_video_id="vid00000004"),
        ]}},
        {"itemSectionRenderer": {}},
        {"musicShelfRenderer": {"contents": [
            list_item("Kuzu Kuzu", ("Tarkan",), video_id="vid00000005"),
            {"musicResponsiveListItemRenderer": {"flexColumns": []}},
        ]}},
    ])}}


@pytest.fixture
def album_response():
    """Album browse response (detail header, single-column track shelf)"""
    return {
        "header": {"musicDetailHeaderRenderer": {
            "title": runs("Karma"),
            "subtitle": runs("Albüm", " • ", "Tarkan", " • ", "2001"),
            "thumbnail": {"croppedSquareThumbnailRenderer": {"thumbnail": {"thumbnails": thumbnails(60, 226, 544)}}},
        }},
        "contents": {"singleColumnBrowseResultsRenderer": tab_sections([
            {"musicShelfRenderer": {"contents": [
                list_item("Kuzu Kuzu", ("Tarkan",), playlist_item_video_id="vid00000005"),
                list_item("Verme", ("Tarkan",), playlist_item_video_id="vid00000006"),
            ]}},
        ])},
    }
