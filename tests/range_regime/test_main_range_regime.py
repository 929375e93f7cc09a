"""
Tests for main_range_regime.py

Tests the subcommands end to end on small CSV files:
- Classify with threshold overrides and export
- Stream replay
- Calibration
- Threshold validation errors
"""

import sys
from pathlib import Path

# Add parent directory to path to allow imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

import pandas as pd
import pytest
from unittest.mock import patch

from modules.range_regime.cli.argument_parser import parse_args

RANGE_THEN_TREND = [100.0, 100.5] * 4 + [105.0, 110.0, 115.0, 120.0, 125.0]


def _write_csv(path, items):
    """Write a multi-item raw price history CSV."""
    rows = []
    for item_id, prices in items.items():
        timestamps = pd.date_range("2024-01-01", periods=len(prices), freq="1h")
        for ts, price in zip(timestamps, prices):
            rows.append({"item_id": item_id, "synced_at": ts, "high_price": price, "low_price": price - 1})
    pd.DataFrame(rows).to_csv(path, index=False)
    return path


def test_parse_args_threshold_flags():
    """Test that threshold flags are parsed onto the namespace."""
    args = parse_args(["classify", "prices.csv", "--chop-max", "0.3", "--window-size", "12"])
    assert args.command == "classify"
    assert args.paths == ["prices.csv"]
    assert args.chop_max == "0.3"
    assert args.window_size == "12"
    assert args.range_norm_max is None


def test_parse_args_requires_command():
    """Test that a subcommand is required."""
    with pytest.raises(SystemExit):
        parse_args([])


def test_main_classify_with_export(tmp_path):
    """Test classify stores segments and writes per-point exports."""
    from main_range_regime import main

    csv_path = _write_csv(tmp_path / "prices.csv", {"a": RANGE_THEN_TREND, "b": RANGE_THEN_TREND})
    export = tmp_path / "out" / "features.csv"

    with patch("main_range_regime.display_segments") as mock_display:
        main(["classify", str(csv_path), "--window-size", "5", "--export", str(export)])

    assert mock_display.call_count == 2
    item_id, segments, current = mock_display.call_args_list[0].args
    assert item_id == "a"
    assert len(segments) == 2
    assert current is not None
    assert (tmp_path / "out" / "features_a.csv").exists()
    assert (tmp_path / "out" / "features_b.csv").exists()


def test_main_classify_single_item(tmp_path):
    """Test classify restricted to one item."""
    from main_range_regime import main

    csv_path = _write_csv(tmp_path / "prices.csv", {"1": RANGE_THEN_TREND, "2": RANGE_THEN_TREND})

    with patch("main_range_regime.display_segments") as mock_display, \
            patch("main_range_regime.display_recalculation_summary") as mock_summary:
        main(["classify", str(csv_path), "--window-size", "5", "--item", "2"])

    assert mock_display.call_count == 1
    assert mock_summary.call_args.args[0]["items_processed"] == 1


def test_main_stream(tmp_path):
    """Test stream replays every item and reports transitions."""
    from main_range_regime import main

    csv_path = _write_csv(tmp_path / "prices.csv", {"a": RANGE_THEN_TREND})

    with patch("main_range_regime.display_stream_transitions") as mock_display:
        main(["stream", str(csv_path), "--window-size", "5"])

    item_id, segments, open_segment = mock_display.call_args.args
    assert item_id == "a"
    assert [s.label.value for s in segments] == ["RANGE_BOUND"]
    assert open_segment.label.value == "TRENDING"


def test_main_calibrate(tmp_path):
    """Test calibrate reports suggestions over every loaded file."""
    from main_range_regime import main

    first = _write_csv(tmp_path / "first.csv", {"a": RANGE_THEN_TREND})
    second = _write_csv(tmp_path / "second.csv", {"b": RANGE_THEN_TREND})

    with patch("main_range_regime.display_calibration_report") as mock_display:
        main(["calibrate", str(first), str(second), "--window-size", "5"])

    report = mock_display.call_args.args[0]
    assert report["meta"]["items_sampled"] == 2
    assert report["meta"]["window_size"] == 5


def test_main_invalid_threshold_exits(tmp_path):
    """Test that invalid threshold flags exit with status 2."""
    from main_range_regime import main

    csv_path = _write_csv(tmp_path / "prices.csv", {"a": RANGE_THEN_TREND})

    with pytest.raises(SystemExit) as exc_info:
        main(["classify", str(csv_path), "--chop-max", "2"])
    assert exc_info.value.code == 2
