"""Command-line interface for lineguide.

Usage:
    lineguide analyze <frame_or_dir>... [options]   # Classify camera frames
    lineguide colorbars <output> [options]          # Write a color bar test frame
"""

import argparse
import os
import sys
from typing import List, Optional

import cv2

from .clip_exporter import ClipExporter
from .color_model import frame_to_rgb
from .compositor import compose_masks, side_by_side
from .frame_data import FrameResult
from .frame_loader import (
    FORMATS,
    find_frame_files,
    format_compact_hex,
    generate_color_bars,
    load_frames,
)
from .models import DEFAULT_CONFIG, DetectorConfig
from .pipeline import classify_frames
from .results_writer import write_results_csv

FRAME_EXTENSIONS = (".bin", ".hex", ".txt", ".raw", ".rgb565")


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog='lineguide',
        description='Classify line-follower camera frames into stop and steering signals.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Classify every dump in a directory and save debug images
    lineguide analyze ./hex_images --output-dir ./out

    # Classify two frames and write a results CSV
    lineguide analyze a.bin b.bin --csv results.csv

    # Write a color bar test frame
    lineguide colorbars bars.bin
        """
    )
    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # 'analyze' subcommand
    analyze_parser = subparsers.add_parser(
        'analyze',
        help='Run stop and guidance detection on frames',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Interactive view of each frame next to its masks
    lineguide analyze ./hex_images --show

    # Stitch the debug views into a preview clip
    lineguide analyze ./hex_images --video preview.mp4 --fps 4

    # Tune the stop threshold
    lineguide analyze frame.bin --percent-to-stop 30
        """
    )
    analyze_parser.add_argument(
        'inputs', nargs='+',
        help='Frame files or directories containing frame files'
    )
    analyze_parser.add_argument(
        '--format', default='auto', choices=('auto',) + FORMATS,
        help='Frame file format (default: auto)'
    )
    analyze_parser.add_argument('--rows', type=int, default=DEFAULT_CONFIG.frame_rows,
                                help='Frame height (default: 96)')
    analyze_parser.add_argument('--cols', type=int, default=DEFAULT_CONFIG.frame_cols,
                                help='Frame width (default: 96)')
    analyze_parser.add_argument('--output-dir', help='Write frame and mask PNGs here')
    analyze_parser.add_argument('--csv', help='Write per-frame results to this CSV file')
    analyze_parser.add_argument('--video', help='Write a preview clip of the debug views')
    analyze_parser.add_argument('--fps', type=float, default=2.0,
                                help='Preview clip frame rate (default: 2.0)')
    analyze_parser.add_argument('--show', action='store_true',
                                help='Step through frames in an OpenCV window')
    analyze_parser.add_argument('--scale', type=int, default=4,
                                help='Upscale factor for debug views (default: 4)')

    tuning = analyze_parser.add_argument_group('detector tuning')
    tuning.add_argument('--percent-to-stop', type=int,
                        help=f'Stop box coverage needed to stop (default: {DEFAULT_CONFIG.percent_to_stop})')
    tuning.add_argument('--stop-green-tolerance', type=int,
                        help=f'Red over green margin (default: {DEFAULT_CONFIG.stop_green_tolerance})')
    tuning.add_argument('--stop-blue-tolerance', type=int,
                        help=f'Red over blue margin (default: {DEFAULT_CONFIG.stop_blue_tolerance})')
    tuning.add_argument('--track-thresh', type=int,
                        help=f'Minimum R, G and B for track pixels (default: {DEFAULT_CONFIG.track_red_thresh})')
    tuning.add_argument('--min-size', type=int,
                        help=f'Minimum guidance contour area (default: {DEFAULT_CONFIG.white_min_size})')
    tuning.add_argument('--center-pos', type=int,
                        help=f'Target track column (default: {DEFAULT_CONFIG.center_pos})')
    tuning.add_argument('--vertical-crop', type=int,
                        help=f'First guidance row (default: {DEFAULT_CONFIG.vertical_crop})')
    tuning.add_argument('--horizontal-crop', type=int,
                        help=f'Guidance column limit (default: {DEFAULT_CONFIG.horizontal_crop})')

    # 'colorbars' subcommand
    bars_parser = subparsers.add_parser(
        'colorbars',
        help='Write a six-bar color test frame',
    )
    bars_parser.add_argument('output', help='Output file')
    bars_parser.add_argument(
        '--format', default='binary', choices=('binary', 'compact-hex'),
        help='Output format (default: binary)'
    )
    bars_parser.add_argument('--rows', type=int, default=DEFAULT_CONFIG.frame_rows)
    bars_parser.add_argument('--cols', type=int, default=DEFAULT_CONFIG.frame_cols)

    return parser


def build_config(args: argparse.Namespace) -> DetectorConfig:
    """Apply command-line tuning flags to the default configuration."""
    changes = {'frame_rows': args.rows, 'frame_cols': args.cols}
    simple = {
        'percent_to_stop': args.percent_to_stop,
        'stop_green_tolerance': args.stop_green_tolerance,
        'stop_blue_tolerance': args.stop_blue_tolerance,
        'white_min_size': args.min_size,
        'center_pos': args.center_pos,
        'vertical_crop': args.vertical_crop,
        'horizontal_crop': args.horizontal_crop,
    }
    changes.update({k: v for k, v in simple.items() if v is not None})
    if args.track_thresh is not None:
        changes.update(
            track_red_thresh=args.track_thresh,
            track_green_thresh=args.track_thresh,
            track_blue_thresh=args.track_thresh,
        )
    return DEFAULT_CONFIG.with_overrides(**changes)


def collect_inputs(inputs: List[str]) -> List[str]:
    """Expand directories into the frame files they contain."""
    paths = []
    for item in inputs:
        if os.path.isdir(item):
            paths.extend(find_frame_files(item, FRAME_EXTENSIONS))
        else:
            paths.append(item)
    return paths


def format_summary(result: FrameResult) -> str:
    """One-line human readable summary of a frame's decisions."""
    stop = "STOP" if result.stop.is_stop else "go"
    if result.stop.percentage is not None:
        stop += f" ({result.stop.percentage / 100:.2f}%)"
    if result.guidance.found:
        guidance = f"distance {result.guidance.distance:+d}"
    else:
        guidance = "no line"
    return f"{result.name}: {stop}, {guidance}"


def run_analyze_mode(args: argparse.Namespace) -> List[FrameResult]:
    """
    Classify frames and emit the requested outputs.

    This mode:
    1. Loads every frame file
    2. Runs both detectors on each frame
    3. Prints a summary line per frame
    4. Optionally writes PNGs, a CSV, a preview clip, or shows a window
    """
    try:
        config = build_config(args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    paths = collect_inputs(args.inputs)
    if not paths:
        print("Error: no frame files found", file=sys.stderr)
        sys.exit(1)

    print(f"Loading {len(paths)} frame(s)...", file=sys.stderr)
    try:
        frames = load_frames(paths, args.format, config.frame_rows, config.frame_cols)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    results = classify_frames(frames, config)
    for result in results:
        print(format_summary(result))

    views = []
    for frame, result in zip(frames, results):
        rgb = frame_to_rgb(frame)
        masks = compose_masks(result)
        views.append(side_by_side(rgb, masks, args.scale))

        if args.output_dir:
            os.makedirs(args.output_dir, exist_ok=True)
            base = os.path.join(args.output_dir, result.name)
            cv2.imwrite(f"{base}_frame.png", cv2.cvtColor(rgb, cv2.COLOR_RGB2BGR))
            cv2.imwrite(f"{base}_masks.png", cv2.cvtColor(masks, cv2.COLOR_RGB2BGR))

    if args.output_dir:
        print(f"Debug images saved to: {os.path.abspath(args.output_dir)}", file=sys.stderr)

    if args.csv:
        write_results_csv(results, args.csv)

    if args.video:
        exporter = ClipExporter()
        clip = exporter.build_clip(views, fps=args.fps)
        exporter.export(clip, args.video, fps=args.fps)
        print(f"Preview clip saved to: {args.video}", file=sys.stderr)

    if args.show:
        show_views(views, [r.name for r in results])

    return results


def show_views(views: list, names: List[str]) -> None:
    """Step through debug views; arrow keys navigate, ESC exits."""
    print("\nControls:", file=sys.stderr)
    print("  → (Right Arrow): Next frame", file=sys.stderr)
    print("  ← (Left Arrow): Previous frame", file=sys.stderr)
    print("  ESC: Exit", file=sys.stderr)

    current_idx = 0
    while True:
        display = cv2.cvtColor(views[current_idx], cv2.COLOR_RGB2BGR)
        cv2.imshow("lineguide", display)
        cv2.setWindowTitle("lineguide", f"lineguide - {names[current_idx]}")

        key = cv2.waitKey(0) & 0xFF
        if key == 27:  # ESC
            break
        elif key == 83 or key == 3:  # Right arrow
            current_idx = min(current_idx + 1, len(views) - 1)
        elif key == 81 or key == 2:  # Left arrow
            current_idx = max(current_idx - 1, 0)

    cv2.destroyAllWindows()


def run_colorbars_mode(args: argparse.Namespace) -> None:
    """Write a color bar test frame in the requested format."""
    frame = generate_color_bars(args.rows, args.cols)
    if args.format == 'binary':
        with open(args.output, "wb") as f:
            f.write(frame.to_bytes())
    else:
        with open(args.output, "w") as f:
            f.write(format_compact_hex(frame))
    print(f"Color bars saved to: {args.output}", file=sys.stderr)


def main(argv: Optional[list] = None) -> None:
    """Main entry point."""
    argv = argv if argv is not None else sys.argv[1:]
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.command == 'analyze':
        run_analyze_mode(args)
    elif args.command == 'colorbars':
        run_colorbars_mode(args)


if __name__ == "__main__":
    main()
