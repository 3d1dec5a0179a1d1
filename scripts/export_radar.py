"""Export the radar comparison and per-model means for evaluation batch files."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from eval_radar_core.charts import build_radar_figure
from eval_radar_core.schema import BatchLoadError, load_batch
from eval_radar_core.use_cases.aggregation import (
    aggregate_model_metrics,
    count_scored_records,
    metrics_summary_frame,
)
from eval_radar_core.use_cases.radar import build_radar_chart
from eval_radar_core.viewer_config import load_config

OUTPUT_DIR = Path("docs/radar")


def export_batch(batch_path: Path, output_dir: Path) -> bool:
    """Write <stem>.html (radar chart) and <stem>_summary.csv for one batch file."""
    try:
        batch = load_batch(batch_path)
    except (OSError, BatchLoadError) as e:
        print(f"  Skipped {batch_path}: {e}", file=sys.stderr)
        return False

    config = load_config()
    records = batch.responses
    chart = build_radar_chart(
        records,
        preferred_models=config.display.preferred_models,
        include_other_models=config.display.include_other_models,
        normalization=config.normalization,
    )
    if chart.is_empty:
        print(f"  Skipped {batch_path}: {chart.empty_message}", file=sys.stderr)
        return False

    output_dir.mkdir(parents=True, exist_ok=True)

    fig = build_radar_figure(chart, title=f"Model Performance Comparison: {batch_path.stem}")
    fig.add_annotation(
        text=f"{chart.scale_caption}<br>{chart.items_caption}",
        showarrow=False,
        xref="paper", yref="paper",
        x=0.5, y=-0.12,
        font=dict(size=11, color="#5f6368"),
    )
    html_path = output_dir / f"{batch_path.stem}.html"
    fig.write_html(str(html_path), include_plotlyjs="cdn")
    print(f"  Generated: {html_path}")

    summary_df = metrics_summary_frame(
        aggregate_model_metrics(records),
        counts=count_scored_records(records),
        models=chart.models,
    )
    csv_path = output_dir / f"{batch_path.stem}_summary.csv"
    summary_df.to_csv(csv_path, index=False)
    print(f"  Generated: {csv_path}")
    return True


def main() -> None:
    parser = argparse.ArgumentParser(description="Export radar charts for evaluation batches")
    parser.add_argument("batches", nargs="+", help="Evaluation batch JSON files")
    parser.add_argument("--output-dir", default=str(OUTPUT_DIR))
    args = parser.parse_args()

    print("Exporting radar charts...")
    results = [export_batch(Path(p), Path(args.output_dir)) for p in args.batches]
    print("Done!")
    if not all(results):
        sys.exit(1)


if __name__ == "__main__":
    main()
