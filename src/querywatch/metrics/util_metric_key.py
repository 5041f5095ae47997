# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Helpers for ``"<client_label>:<table>:<operation>"`` metric keys."""

from __future__ import annotations

from typing import NamedTuple

UNKNOWN_LABEL = "unknown"


class MetricKeyParts(NamedTuple):
    client_label: str
    table: str
    operation: str


def split_metric_key(metric_key: str) -> MetricKeyParts:
    """Split a metric key into its parts.

    The client label is the first segment, the operation the last, and
    everything in between is the table. Keys with fewer than three
    segments are padded on the left with ``"unknown"``.
    """
    parts = metric_key.rsplit(":", 1)
    if len(parts) == 1:
        return MetricKeyParts(UNKNOWN_LABEL, UNKNOWN_LABEL, parts[0] or UNKNOWN_LABEL)
    head, operation = parts
    client_label, sep, table = head.partition(":")
    if not sep:
        return MetricKeyParts(UNKNOWN_LABEL, head or UNKNOWN_LABEL, operation)
    return MetricKeyParts(client_label, table, operation)


__all__ = ["MetricKeyParts", "UNKNOWN_LABEL", "split_metric_key"]
