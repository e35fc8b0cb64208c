"""Tests for PreviewService — nonce issuing and authorized previews."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta

import pytest

from ksdate.config.settings import KsdateSettings
from ksdate.services.preview import PreviewService


@pytest.fixture
def service(preview_settings: KsdateSettings, clock: Callable[[], datetime]) -> PreviewService:
    return PreviewService(preview_settings, clock)


@pytest.fixture
def nonce(service: PreviewService) -> str:
    return str(service.issue_nonce().data["nonce"])


class TestIssueNonce:
    def test_issues_expiring_nonce(self, service: PreviewService, reference: datetime) -> None:
        result = service.issue_nonce()
        assert result.ok
        assert result.op == "issue_nonce"
        assert result.data["expires"] == "2025-10-24T13:00:00+09:00"
        expires, _, _mac = result.data["nonce"].partition("-")
        assert int(expires) == int(reference.timestamp()) + 3600

    def test_disabled_without_secret(self, settings: KsdateSettings, clock) -> None:
        result = PreviewService(settings, clock).issue_nonce()
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "PREVIEW_DISABLED"


class TestPreview:
    def test_offset_preview(self, service: PreviewService, nonce: str) -> None:
        result = service.preview(format="Y/m/d", offset="-6m", nonce=nonce)
        assert result.ok
        assert result.data == {
            "result": "2025/04/24",
            "shortcode": '[ksdate format="Y/m/d" offset="-6m"]',
            "mode": "date",
        }

    def test_default_format_omitted_from_shortcode(
        self, service: PreviewService, nonce: str
    ) -> None:
        result = service.preview(format="Y年m月d日", nonce=nonce)
        assert result.data["result"] == "2025年10月24日"
        assert result.data["shortcode"] == "[ksdate]"

    def test_diff_preview(self, service: PreviewService, nonce: str) -> None:
        result = service.preview(format="年", diff="2030", nonce=nonce)
        assert result.data["result"] == "4年"
        assert result.data["shortcode"] == '[ksdate format="年" diff="2030"]'
        assert result.data["mode"] == "diff"

    def test_inputs_sanitized(self, service: PreviewService, nonce: str) -> None:
        result = service.preview(format=" Y ", offset=" <i>+1d</i> ", nonce=nonce)
        assert result.data["shortcode"] == '[ksdate format="Y" offset="+1d"]'

    def test_invalid_diff(self, service: PreviewService, nonce: str) -> None:
        result = service.preview(format="年", diff="1999-13", nonce=nonce)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "INVALID_DIFF"
        assert result.error.message == "invalid date format"
        assert result.error.detail == {"diff": "1999-13"}

    def test_unrepresentable_value(self, service: PreviewService, nonce: str) -> None:
        result = service.preview(format="Y]", nonce=nonce)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "UNREPRESENTABLE"

    def test_bad_nonce(self, service: PreviewService) -> None:
        result = service.preview(format="Y", nonce="123-deadbeef")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "UNAUTHORIZED"

    def test_expired_nonce(self, preview_settings: KsdateSettings, nonce: str) -> None:
        later = datetime(2025, 10, 24, 12, 0) + timedelta(hours=2)
        result = PreviewService(preview_settings, lambda: later).preview(format="Y", nonce=nonce)
        assert result.error is not None
        assert result.error.code == "UNAUTHORIZED"

    def test_nonce_from_other_secret(self, clock, nonce: str) -> None:
        other = KsdateSettings(date={"timezone": "Asia/Tokyo"}, preview={"secret": "other"})
        result = PreviewService(other, clock).preview(format="Y", nonce=nonce)
        assert result.error is not None
        assert result.error.code == "UNAUTHORIZED"

    def test_disabled_without_secret(self, settings: KsdateSettings, clock) -> None:
        result = PreviewService(settings, clock).preview(format="Y", nonce="anything")
        assert result.error is not None
        assert result.error.code == "PREVIEW_DISABLED"
