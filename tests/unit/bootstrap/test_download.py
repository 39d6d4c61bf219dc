"""Tests for xynginc.bootstrap.download."""

from __future__ import annotations

import io
from typing import Dict, Optional
from unittest.mock import MagicMock, patch
from urllib.error import HTTPError

import pytest

from xynginc.bootstrap.download import _open_once, secure_urlopen
from xynginc.core.errors import DownloadError

ASSET_URL = "https://github.com/Nehonix-Team/xynginc/releases/latest/download/xynginc-linux-x64"


class _FakeResponse(io.BytesIO):
    def __init__(self, status: int, body: bytes = b"", headers: Optional[Dict[str, str]] = None):
        super().__init__(body)
        self.status = status
        self.headers = headers or {}

    def getcode(self) -> int:
        return self.status


class TestSecureUrlopen:
    def test_returns_200_response(self) -> None:
        response = _FakeResponse(200, b"data")
        with patch("xynginc.bootstrap.download._open_once", return_value=response) as mock_once:
            result = secure_urlopen(ASSET_URL)
        assert result is response
        mock_once.assert_called_once_with(ASSET_URL, 60)

    @pytest.mark.parametrize("status", [301, 302])
    def test_follows_one_redirect(self, status: int) -> None:
        redirect = _FakeResponse(status, headers={"Location": "https://objects.example.com/a?sig=1"})
        final = _FakeResponse(200, b"data")
        with patch(
            "xynginc.bootstrap.download._open_once", side_effect=[redirect, final]
        ) as mock_once:
            result = secure_urlopen(ASSET_URL, timeout=5)

        assert result is final
        assert redirect.closed
        assert mock_once.call_args_list[1][0] == ("https://objects.example.com/a?sig=1", 5)

    def test_relative_location_resolved_against_request(self) -> None:
        redirect = _FakeResponse(302, headers={"Location": "/assets/xynginc"})
        final = _FakeResponse(200)
        with patch(
            "xynginc.bootstrap.download._open_once", side_effect=[redirect, final]
        ) as mock_once:
            secure_urlopen(ASSET_URL)
        assert mock_once.call_args_list[1][0][0] == "https://github.com/assets/xynginc"

    def test_second_redirect_is_not_followed(self) -> None:
        first = _FakeResponse(302, headers={"Location": "https://a.example.com/"})
        second = _FakeResponse(302, headers={"Location": "https://b.example.com/"})
        with patch(
            "xynginc.bootstrap.download._open_once", side_effect=[first, second]
        ) as mock_once:
            with pytest.raises(DownloadError, match="HTTP 302") as exc_info:
                secure_urlopen(ASSET_URL)

        assert mock_once.call_count == 2
        assert exc_info.value.status_code == 302
        assert second.closed

    def test_redirect_without_location(self) -> None:
        with patch(
            "xynginc.bootstrap.download._open_once",
            return_value=_FakeResponse(301),
        ):
            with pytest.raises(DownloadError, match="without Location") as exc_info:
                secure_urlopen(ASSET_URL)
        assert exc_info.value.status_code == 301

    @pytest.mark.parametrize("status", [403, 404, 500])
    def test_error_status(self, status: int) -> None:
        response = _FakeResponse(status)
        with patch("xynginc.bootstrap.download._open_once", return_value=response):
            with pytest.raises(DownloadError) as exc_info:
                secure_urlopen(ASSET_URL)

        assert str(exc_info.value) == f"Failed to download: HTTP {status}"
        assert exc_info.value.status_code == status
        assert response.closed

    def test_redirect_to_error_status(self) -> None:
        redirect = _FakeResponse(302, headers={"Location": "https://objects.example.com/a"})
        with patch(
            "xynginc.bootstrap.download._open_once",
            side_effect=[redirect, _FakeResponse(404)],
        ):
            with pytest.raises(DownloadError) as exc_info:
                secure_urlopen(ASSET_URL)
        assert exc_info.value.status_code == 404


class TestOpenOnce:
    def test_rejects_plain_http(self) -> None:
        with patch("xynginc.bootstrap.download.build_opener") as mock_build:
            with pytest.raises(DownloadError, match="Invalid download URL"):
                _open_once("http://github.com/file", 10)
        mock_build.assert_not_called()

    def test_http_error_returned_as_response(self) -> None:
        error = HTTPError(ASSET_URL, 404, "Not Found", {}, io.BytesIO(b""))
        opener = MagicMock()
        opener.open.side_effect = error
        with patch("xynginc.bootstrap.download.build_opener", return_value=opener):
            result = _open_once(ASSET_URL, 10)
        assert result is error
        assert result.getcode() == 404

    def test_sends_user_agent(self) -> None:
        opener = MagicMock()
        with patch("xynginc.bootstrap.download.build_opener", return_value=opener):
            _open_once(ASSET_URL, 10)
        request = opener.open.call_args[0][0]
        assert request.get_header("User-agent") == "xynginc-plugin"
        assert opener.open.call_args[1] == {"timeout": 10}
