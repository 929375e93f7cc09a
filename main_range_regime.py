"""
Range Regime Classification Main Program

Classifies item price histories into RANGE_BOUND / TRENDING regimes:
- Loads price history CSV files (one or more items per file)
- Classifies and stores regime segments per item
- Replays histories through the streaming classifier
- Suggests thresholds from observed feature distributions
"""

import sys
from pathlib import Path
from typing import List, Optional

from modules.common.utils import configure_windows_stdio

# Fix encoding issues on Windows for interactive CLI runs only
configure_windows_stdio()

from colorama import Fore, init as colorama_init

from modules.common.ProgressBar import ProgressBar
from modules.common.utils import (
    color_text,
    extract_dict_from_namespace,
    log_analysis,
    log_data,
    log_error,
    log_progress,
    log_success,
    log_warn,
)
from modules.range_regime.cli import (
    THRESHOLD_ARGUMENTS,
    display_calibration_report,
    display_recalculation_summary,
    display_segments,
    display_stream_transitions,
    display_thresholds,
    parse_args,
)
from modules.range_regime.config.recalculation_config import RecalculationConfig
from modules.range_regime.core.export import export_to_csv
from modules.range_regime.core.streaming import close_stream, replay_stream
from modules.range_regime.exceptions import ThresholdValidationError
from modules.range_regime.service import RegimeClassificationService
from modules.range_regime.storage.item_store import InMemoryItemStore
from modules.range_regime.utils.price_points import build_price_points, load_price_history_frame

colorama_init(autoreset=True)


class RangeRegimeAnalyzer:
    """
    Range Regime Analysis Orchestrator.

    Loads price history into the item store, applies threshold overrides and
    runs the requested subcommand.
    """

    def __init__(self, args):
        self.args = args
        config = RecalculationConfig(
            use_threads=getattr(args, "threads", False),
            max_workers=getattr(args, "max_workers", None),
        )
        self.service = RegimeClassificationService(item_store=InMemoryItemStore(), config=config)

    def apply_threshold_overrides(self) -> None:
        """Validate and apply threshold flags to the global thresholds."""
        overrides = extract_dict_from_namespace(self.args, THRESHOLD_ARGUMENTS)
        self.service.update_thresholds(overrides)

    def load_history(self, paths: List[str]) -> int:
        """Load every CSV into the item store. Returns the number of items loaded."""
        loaded = 0
        for path in paths:
            frame = load_price_history_frame(path)
            count = self.service.item_store.load_price_history_frame(frame)
            log_data(f"  Loaded {len(frame)} rows ({count} items) from {Path(path).name}")
            loaded += count
        return loaded

    def display_config(self, title: str) -> None:
        log_analysis("=" * 80)
        log_analysis(title)
        log_analysis("=" * 80)
        display_thresholds(self.service.get_thresholds())

    def resolve_item(self, item: Optional[str]):
        """Map a command-line item id onto the stored id (CSV ids may be numeric)."""
        if item is None:
            return None
        for item_id in self.service.item_store.item_ids():
            if str(item_id) == item:
                return item_id
        return item

    def _export_path(self, base: str, item_id, multiple: bool) -> Path:
        path = Path(base)
        if not multiple:
            return path
        return path.with_name(f"{path.stem}_{item_id}{path.suffix or '.csv'}")

    def run_classify(self) -> None:
        """Classify and store segments for every loaded item, then display them."""
        self.display_config("RANGE REGIME CLASSIFICATION")
        self.load_history(self.args.paths)

        item = self.resolve_item(self.args.item)
        summary = self.service.recalculate(item_id=item)
        display_recalculation_summary(summary.to_dict())

        item_ids = [item] if item is not None else self.service.item_store.item_ids_with_prices()
        for item_id in item_ids:
            display_segments(
                item_id,
                self.service.get_segments(item_id),
                self.service.get_current_regime(item_id),
            )

        if self.args.export:
            multiple = len(item_ids) > 1
            for item_id in item_ids:
                target = export_to_csv(
                    self.service.export_item(item_id),
                    self._export_path(self.args.export, item_id, multiple),
                )
                log_success(f"Exported per-point features for {item_id} to {target}")

    def run_stream(self) -> None:
        """Replay every loaded item through the streaming classifier."""
        self.display_config("RANGE REGIME STREAM REPLAY")
        self.load_history(self.args.paths)

        thresholds = self.service.get_thresholds()
        item_ids = self.service.item_store.item_ids_with_prices()
        progress = ProgressBar(len(item_ids), label="Replaying")
        results = []

        for item_id in item_ids:
            points = build_price_points(self.service.item_store.get_recent_prices(item_id))
            segments, state = replay_stream(points, thresholds.window_size, thresholds)
            results.append((item_id, segments, close_stream(state)))
            progress.update()
        progress.finish()

        for item_id, segments, open_segment in results:
            display_stream_transitions(item_id, segments, open_segment)

    def run_calibrate(self) -> None:
        """Suggest thresholds from every loaded item."""
        self.display_config("RANGE REGIME AUTO-CALIBRATION")
        loaded = self.load_history(self.args.paths)
        if loaded == 0:
            log_warn("No price history loaded")
            return

        log_progress(f"Calibrating thresholds over {loaded} items...")
        report = self.service.calibrate(max_items=self.args.max_items)
        display_calibration_report(report.to_dict())


def main(argv: Optional[List[str]] = None) -> None:
    """
    Main function for range regime analysis.

    Orchestrates the workflow:
    1. Parse command-line arguments
    2. Apply threshold overrides
    3. Run the selected subcommand
    """
    args = parse_args(argv)
    analyzer = RangeRegimeAnalyzer(args)

    try:
        analyzer.apply_threshold_overrides()
    except ThresholdValidationError as e:
        for message in e.errors:
            log_error(message)
        sys.exit(2)

    if args.command == "classify":
        analyzer.run_classify()
    elif args.command == "stream":
        analyzer.run_stream()
    elif args.command == "calibrate":
        analyzer.run_calibrate()


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print(color_text("\nExiting program by user request.", Fore.YELLOW))
        sys.exit(0)
    except Exception as e:
        log_error(f"Error: {type(e).__name__}: {e}")
        import traceback
        log_error(f"Traceback: {traceback.format_exc()}")
        sys.exit(1)
