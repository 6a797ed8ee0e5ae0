"""Tests for Themepush data models."""

from __future__ import annotations

import json
from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from themepush.models import (
    DeliveryLogEntry,
    DeliveryOutcome,
    DeliveryResult,
    Project,
    PushSummary,
    Theme,
    WebhookPayload,
    generate_id,
    utc_timestamp,
)


class TestHelpers:
    """Tests for id and timestamp helpers."""

    def test_generate_id_prefix(self) -> None:
        assert generate_id("dlv").startswith("dlv_")
        assert generate_id("dlv") != generate_id("dlv")

    def test_utc_timestamp_shape(self) -> None:
        moment = datetime(2025, 1, 2, 3, 4, 5, 678000, tzinfo=UTC)
        assert utc_timestamp(moment) == "2025-01-02T03:04:05.678Z"

    def test_utc_timestamp_defaults_to_now(self) -> None:
        stamp = utc_timestamp()
        assert stamp.endswith("Z")
        assert len(stamp) == len("2025-01-02T03:04:05.678Z")


class TestTheme:
    """Tests for Theme."""

    def test_data_snapshot(self, sample_theme: Theme) -> None:
        data = sample_theme.data
        assert data.colors["primary"] == "#0ea5e9"
        assert data.radius == {"sm": 4, "md": 8, "lg": 12.5}
        assert data.effects == {"shadows": True, "animations": False}

    def test_from_record_decodes_json_columns(self) -> None:
        """Rows storing blocks as JSON text should be decoded."""
        theme = Theme.from_record(
            {
                "id": "thm_1",
                "name": "Sunset",
                "colors": '{"primary": "#f97316"}',
                "radius": '{"md": 6}',
                "effects": '{"glow": true}',
                "userId": "usr_1",
                "isPublic": False,
            }
        )
        assert theme.colors == {"primary": "#f97316"}
        assert theme.radius == {"md": 6}
        assert theme.effects == {"glow": True}

    def test_is_immutable(self, sample_theme: Theme) -> None:
        with pytest.raises(ValidationError):
            sample_theme.name = "Other"  # type: ignore[misc]


class TestProject:
    """Tests for Project."""

    def test_requires_absolute_url(self) -> None:
        with pytest.raises(ValidationError):
            Project(webhook_url="/relative/path")

    def test_api_key_hidden_from_repr(self, signed_project: Project) -> None:
        assert "sk_test_secret" not in repr(signed_project)
        assert "sk_test_secret" not in signed_project.model_dump_json()
        assert signed_project.signing_key == "sk_test_secret"

    def test_empty_key_means_unsigned(self) -> None:
        project = Project(webhook_url="https://example.com/hook", api_key="")
        assert project.signing_key is None

    def test_defaults(self, unsigned_project: Project) -> None:
        assert unsigned_project.is_active is True
        assert unsigned_project.platform == "CUSTOM"
        assert unsigned_project.signing_key is None


class TestWebhookPayload:
    """Tests for WebhookPayload serialization."""

    def test_unsigned_json_is_compact_and_ordered(self) -> None:
        theme = Theme(
            id="thm_1",
            name="Mint",
            colors={"primary": "#10b981"},
            radius={"md": 8},
            effects={"blur": True},
        )
        payload = WebhookPayload.for_theme(theme, timestamp="2025-01-01T00:00:00.000Z")

        assert payload.unsigned_json() == (
            '{"theme":{"colors":{"primary":"#10b981"},"radius":{"md":8},'
            '"effects":{"blur":true}},"themeId":"thm_1","themeName":"Mint",'
            '"timestamp":"2025-01-01T00:00:00.000Z"}'
        )

    def test_whole_float_radius_rendered_as_int(self) -> None:
        theme = Theme(id="thm_1", name="Mint", radius={"xl": 16.0, "lg": 12.5})
        payload = WebhookPayload.for_theme(theme, timestamp="2025-01-01T00:00:00.000Z")

        assert '"radius":{"xl":16,"lg":12.5}' in payload.unsigned_json()
        assert isinstance(theme.radius["xl"], int)

    def test_whole_float_radius_from_json_column(self) -> None:
        theme = Theme.from_record({"id": "thm_1", "name": "Mint", "radius": '{"md": 8.0}'})
        assert theme.data.model_dump_json() == '{"colors":{},"radius":{"md":8},"effects":{}}'

    def test_to_json_includes_signature_last(self, sample_theme: Theme) -> None:
        payload = WebhookPayload.for_theme(sample_theme).with_signature("abc123")
        data = json.loads(payload.to_json())
        assert list(data)[-1] == "signature"
        assert data["signature"] == "abc123"

    def test_unsigned_json_ignores_signature(self, sample_theme: Theme) -> None:
        payload = WebhookPayload.for_theme(sample_theme)
        assert payload.with_signature("abc").unsigned_json() == payload.unsigned_json()

    def test_parses_wire_format(self, sample_theme: Theme) -> None:
        payload = WebhookPayload.for_theme(sample_theme).with_signature("abc")
        parsed = WebhookPayload.model_validate_json(payload.to_json())
        assert parsed == payload


class TestDeliveryTypes:
    """Tests for delivery outcomes, log entries and summaries."""

    def test_outcome_constructors(self) -> None:
        ok = DeliveryOutcome.ok(200, {"a": 1})
        failed = DeliveryOutcome.failed("HTTP 500: Internal Server Error - ", 500)
        assert ok.success and ok.error is None
        assert not failed.success and failed.status_code == 500

    def test_log_entry_is_frozen(self) -> None:
        entry = DeliveryLogEntry(project_id="prj_1", status="SUCCESS")
        assert entry.id.startswith("dlv_")
        with pytest.raises(ValidationError):
            entry.status = "FAILED"  # type: ignore[misc]

    def test_log_entry_rejects_unknown_status(self) -> None:
        with pytest.raises(ValidationError):
            DeliveryLogEntry(project_id="prj_1", status="PENDING")  # type: ignore[arg-type]

    def test_summary_counts(self) -> None:
        summary = PushSummary(
            theme_id="thm_1",
            results=[
                DeliveryResult(project_id="a", success=True, attempts=1),
                DeliveryResult(project_id="b", success=False, error="down", attempts=3),
                DeliveryResult(project_id="c", success=True, attempts=2),
            ],
        )
        assert summary.total_count == 3
        assert summary.success_count == 2
        assert summary.failure_count == 1
        assert summary.message == "Theme updated on 2/3 websites"

    def test_summary_dump_includes_counts(self) -> None:
        summary = PushSummary(theme_id="thm_1")
        dumped = summary.model_dump()
        assert dumped["total_count"] == 0
        assert dumped["success_count"] == 0
