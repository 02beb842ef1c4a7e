"""
passfilter — CLI entry point.

Zero-phase lowpass / highpass filtering of audio files.

Usage:
    python main.py input.wav --type lowpass --passband 1500
    python main.py input.flac -t highpass -p 300 --quality sharp --plot
    python main.py ./my_music_folder/ -t lowpass -p 8000 -o ./filtered/
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
import time

import soundfile as sf

from passfilter.analyzer import analyse
from passfilter.config import PRESETS, SUBTYPE_WAV
from passfilter.exceptions import FilterError
from passfilter.filters import highpass, lowpass


SUPPORTED_EXTENSIONS = {".wav", ".flac", ".ogg", ".aiff", ".aif"}

FILTERS = {
    "lowpass": lowpass,
    "highpass": highpass,
}

logger = logging.getLogger("passfilter.cli")


def process_file(
    input_path: str,
    output_dir: str | None,
    filter_type: str,
    passband_hz: float,
    steepness: float,
    attenuation_db: float,
    impulse_response: str,
    plot: bool,
) -> str:
    """Filter a single audio file and write the result next to it."""
    start_time = time.time()
    filename = os.path.basename(input_path)
    base_name = os.path.splitext(filename)[0]

    if output_dir is None:
        output_dir = os.path.dirname(input_path) or "."

    os.makedirs(output_dir, exist_ok=True)

    print(f"\n{'='*60}")
    print(f"Processing: {filename}")
    print(f"Filter: {filter_type} @ {passband_hz:g} Hz | Steepness: {steepness} | "
          f"Attenuation: {attenuation_db:g} dB | Impulse response: {impulse_response}")
    print(f"{'='*60}")

    # --- Step 1: Read input ---
    audio, sample_rate = sf.read(input_path, dtype="float64")
    print(f"  {audio.shape[0]} samples @ {sample_rate} Hz, "
          f"{1 if audio.ndim == 1 else audio.shape[1]} channel(s)")

    # --- Step 2: Design & filter ---
    filtered, design = FILTERS[filter_type](
        audio, passband_hz, sample_rate,
        steepness=steepness,
        stopband_attenuation=attenuation_db,
        impulse_response=impulse_response,
    )
    if design.diagnostic is not None:
        logger.warning("%s: %s", filename, design.diagnostic.message)

    analysis = analyse(design)
    print(f"  Design: {analysis.description}")
    if analysis.passband_ripple_db is not None:
        print(f"  Passband ripple: {analysis.passband_ripple_db:.3f} dB")

    # --- Step 3: Write output ---
    out_path = os.path.join(output_dir, f"{base_name}_{filter_type}.wav")
    sf.write(out_path, filtered, sample_rate, subtype=SUBTYPE_WAV)

    if plot:
        import matplotlib.pyplot as plt

        from passfilter.plotting import plot_filtering

        fig = plot_filtering(audio, filtered, design, title=f"{filename}: {filter_type}")
        png_path = os.path.join(output_dir, f"{base_name}_{filter_type}.png")
        fig.savefig(png_path, dpi=120)
        plt.close(fig)
        print(f"  Plot: {png_path}")

    elapsed = time.time() - start_time
    size_mb = os.path.getsize(out_path) / (1024 * 1024)
    print(f"  Output: {out_path} ({size_mb:.1f} MB) in {elapsed:.1f}s")
    return out_path


def main() -> None:
    parser = argparse.ArgumentParser(
        description="passfilter — zero-phase lowpass / highpass filtering of audio files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py song.wav -t lowpass -p 1500              # Default preset, auto FIR/IIR
  python main.py song.wav -t highpass -p 300 -q sharp     # Narrow transition, 80 dB
  python main.py song.wav -t lowpass -p 1500 -r iir       # Force elliptic IIR
  python main.py ./music/ -t lowpass -p 8000 -o ./out/    # Batch process a folder
  python main.py song.wav -t lowpass -p 1500 --plot       # Also save a before/after plot
        """,
    )

    parser.add_argument(
        "input",
        help="Path to input audio file or directory (batch mode)",
    )
    parser.add_argument(
        "-o", "--output",
        help="Output directory (default: same as input)",
        default=None,
    )
    parser.add_argument(
        "-t", "--type",
        choices=list(FILTERS.keys()),
        default="lowpass",
        help="Filter type (default: lowpass)",
    )
    parser.add_argument(
        "-p", "--passband",
        type=float,
        required=True,
        help="Passband edge frequency in Hz",
    )
    parser.add_argument(
        "-q", "--quality",
        choices=list(PRESETS.keys()),
        default="default",
        help="Design preset (default: default)",
    )
    parser.add_argument(
        "-s", "--steepness",
        type=float,
        default=None,
        help="Transition band steepness in [0.5, 1) (overrides the preset)",
    )
    parser.add_argument(
        "-a", "--attenuation",
        type=float,
        default=None,
        help="Stopband attenuation in dB (overrides the preset)",
    )
    parser.add_argument(
        "-r", "--impulse-response",
        choices=["auto", "fir", "iir"],
        default=None,
        help="Filter family (overrides the preset)",
    )
    parser.add_argument(
        "--plot",
        action="store_true",
        help="Save a before/after plot next to each output file",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log design decisions",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    # Validate input
    if not os.path.exists(args.input):
        print(f"Error: '{args.input}' not found.")
        sys.exit(1)

    preset = PRESETS[args.quality]
    steepness = args.steepness if args.steepness is not None else preset.steepness
    attenuation = args.attenuation if args.attenuation is not None else preset.stopband_attenuation_db
    impulse_response = args.impulse_response or preset.impulse_response

    options = dict(
        filter_type=args.type,
        passband_hz=args.passband,
        steepness=steepness,
        attenuation_db=attenuation,
        impulse_response=impulse_response,
        plot=args.plot,
    )

    # Process
    if os.path.isdir(args.input):
        # Batch mode
        files = sorted(
            f for f in os.listdir(args.input)
            if os.path.splitext(f)[1].lower() in SUPPORTED_EXTENSIONS
        )
        if not files:
            print(f"No supported audio files found in {args.input}")
            sys.exit(1)

        print(f"Found {len(files)} audio files")
        output_dir = args.output or args.input

        failures = 0
        for i, f in enumerate(files, 1):
            print(f"\n[{i}/{len(files)}]")
            try:
                process_file(os.path.join(args.input, f), output_dir, **options)
            except (FilterError, RuntimeError) as e:
                failures += 1
                print(f"Error processing {f}: {e}")
        if failures:
            sys.exit(1)
    else:
        # Single file
        try:
            process_file(args.input, args.output, **options)
        except FilterError as e:
            print(f"Error: {e}")
            sys.exit(1)


if __name__ == "__main__":
    main()
