import argparse
import logging
import sys
from importlib import metadata
from pathlib import Path

import note_stream
import performance_calculator
from memory_skill import MemorySkill


def main():
    parser = argparse.ArgumentParser(description="Calculate taiko pp for a play, with optional memory strain.")
    parser.add_argument("play_path", nargs='?', type=Path, help='Path to a play JSON file (score and difficulty attributes).')
    parser.add_argument("--notes", "-n", type=Path, default=None, help='CSV note stream to run the memory skill over.')
    parser.add_argument("--verbose", "-v", action="store_true", help="Log intermediate values.")
    parser.add_argument("--version", "-V", action="store_true", help="Show version and exit.")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(levelname)s %(name)s: %(message)s")

    try:
        version_str = metadata.version("taiko-reading-pp")
    except metadata.PackageNotFoundError:
        version_str = "dev"

    if args.version:
        print(f"taiko-reading-pp {version_str}")
        sys.exit(0)

    if args.play_path is None:
        print("Error: no play file given.")
        sys.exit(1)
    if not args.play_path.is_file():
        print(f"Error: {args.play_path} is not a valid file.")
        sys.exit(1)
    if args.notes is not None and not args.notes.is_file():
        print(f"Error: {args.notes} is not a valid file.")
        sys.exit(1)

    try:
        score, attributes = note_stream.load_play(args.play_path)
        notes = note_stream.load_notes(args.notes) if args.notes is not None else None
    except (ValueError, OSError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    mods = "".join(sorted(m.value for m in score.mods)) or "NM"
    print(f"Play: {args.play_path.stem}, Mods: {mods}, Accuracy: {score.accuracy * 100:.2f}%\n")

    result = performance_calculator.calculate_performance(score, attributes)
    ur = "-" if result.estimated_unstable_rate is None else f"{result.estimated_unstable_rate:.2f}"
    print(f"Difficulty | {result.difficulty:.4f}")
    print(f"Accuracy   | {result.accuracy:.4f}")
    print(f"Est. UR    | {ur}")
    print(f"Eff. misses| {result.effective_miss_count:.2f}")
    print(f"Total      | {result.total:.4f}")

    if notes is not None:
        skill = MemorySkill.from_mods(score.mods)
        skill.process_all(notes)
        table = skill.strain_table()
        peak = table['strain'].max() if len(table) else 0.0
        print(f"\nMemory     | {skill.difficulty_value():.4f} (peak strain {peak:.4f}, {len(table)} notes)")


if __name__ == "__main__":
    main()
