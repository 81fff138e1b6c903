"""CSV writing for per-frame detection results."""

import csv
import io
import sys
from typing import List, Optional

from .frame_data import FrameResult

HEADER = ["frame", "is_stop", "stop_votes", "stop_percent", "guidance_found", "distance"]


def format_results_csv(results: List[FrameResult]) -> str:
    """
    Format detection results as CSV content.

    CSV format:
    - Header row: frame, is_stop, stop_votes, stop_percent, guidance_found, distance
    - One data row per frame; stop_percent has two decimals, unknown
      values are left empty

    Args:
        results: Results in the order they should be written

    Returns:
        CSV content as a string
    """
    output = io.StringIO(newline='')
    writer = csv.writer(output, lineterminator='\n')
    writer.writerow(HEADER)

    for result in results:
        percentage = result.stop.percentage
        percent_str = f"{percentage / 100:.2f}" if percentage is not None else ""
        distance = result.guidance.distance
        writer.writerow([
            result.name,
            int(result.stop.is_stop),
            result.stop.votes,
            percent_str,
            int(result.guidance.found),
            distance if distance is not None else "",
        ])

    return output.getvalue()


def write_results_csv(results: List[FrameResult], output_path: Optional[str] = None) -> str:
    """
    Write detection results to a CSV file.

    Args:
        results: Results to write
        output_path: Optional output file path

    Returns:
        CSV content as string
    """
    content = format_results_csv(results)
    if output_path:
        with open(output_path, "w") as f:
            f.write(content)
        print(f"\nResults CSV saved to: {output_path}", file=sys.stderr)
    return content
