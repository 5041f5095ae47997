# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Unit tests for ModelQueryObservation and ModelQueryHandle."""

from __future__ import annotations

from datetime import timedelta

import pytest
from pydantic import ValidationError

from querywatch.enums import (
    EnumFilterOperator,
    EnumQueryOperation,
    EnumQueryResultMode,
)
from querywatch.models import ModelQueryHandle, ModelQueryObservation


def _observation(**overrides: object) -> ModelQueryObservation:
    fields: dict[str, object] = {
        "client_label": "client",
        "table": "profiles",
        "operation": EnumQueryOperation.SELECT,
        "duration_ms": 12,
        "success": True,
    }
    fields.update(overrides)
    return ModelQueryObservation(**fields)


class TestModelQueryObservation:
    def test_metric_key(self) -> None:
        observation = _observation(client_label="admin", operation="upsert")

        assert observation.metric_key == "admin:profiles:upsert"

    def test_timestamp_is_utc(self) -> None:
        assert _observation().timestamp.utcoffset() == timedelta(0)

    def test_is_frozen(self) -> None:
        observation = _observation()

        with pytest.raises(ValidationError):
            observation.duration_ms = 99  # type: ignore[misc]

    @pytest.mark.parametrize(
        "overrides",
        [
            {"duration_ms": -1},
            {"client_label": ""},
            {"table": ""},
            {"operation": "merge"},
            {"unexpected": "field"},
        ],
        ids=["negative_duration", "empty_label", "empty_table", "bad_operation", "extra"],
    )
    def test_rejects_invalid_fields(self, overrides: dict[str, object]) -> None:
        with pytest.raises(ValidationError):
            _observation(**overrides)


class TestModelQueryHandle:
    def test_defaults(self) -> None:
        handle = ModelQueryHandle(table="profiles", operation=EnumQueryOperation.SELECT)

        assert handle.columns == "*"
        assert handle.filters == ()
        assert handle.rows == ()
        assert handle.values is None
        assert handle.limit is None
        assert handle.mode is EnumQueryResultMode.MANY

    def test_refinements_copy(self) -> None:
        base = ModelQueryHandle(table="profiles", operation=EnumQueryOperation.SELECT)

        refined = (
            base.with_filter("tier", EnumFilterOperator.EQ, "pro")
            .with_order("id", descending=True)
            .with_limit(3)
            .with_columns("id")
            .with_mode(EnumQueryResultMode.SINGLE)
        )

        assert base == ModelQueryHandle(table="profiles", operation=EnumQueryOperation.SELECT)
        assert refined.filters[0].column == "tier"
        assert refined.order[0].descending is True
        assert refined.limit == 3
        assert refined.columns == "id"
        assert refined.mode is EnumQueryResultMode.SINGLE

    def test_payload_is_copied(self) -> None:
        row = {"id": 1}
        handle = ModelQueryHandle(
            table="profiles", operation=EnumQueryOperation.INSERT
        ).with_payload(rows=(row,))
        row["id"] = 2

        assert handle.rows == ({"id": 1},)

    def test_negative_limit_rejected(self) -> None:
        handle = ModelQueryHandle(table="profiles", operation=EnumQueryOperation.SELECT)

        with pytest.raises(ValueError, match="limit"):
            handle.with_limit(-5)

    def test_is_write(self) -> None:
        assert EnumQueryOperation.SELECT.is_write is False
        assert all(
            op.is_write for op in EnumQueryOperation if op is not EnumQueryOperation.SELECT
        )
