#!/usr/bin/env python
"""
Skyburst CLI - Particle fireworks shows with a message finale

Usage:
    python main.py [options]

Examples:
    python main.py                              # Render the classic show to GIF
    python main.py --preset anime -o anime.gif  # Rocket launch show
    python main.py --preset finale --preview    # Watch it live
    python main.py --list-presets               # Show all presets
"""

import argparse
import logging
import sys
from pathlib import Path


def main():
    parser = argparse.ArgumentParser(
        description="Particle fireworks shows with a scripted message finale",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Built-in Presets:
  classic   - Eight classic bursts, two-part message
  anime     - Rocket launch, star-burst cluster, full mixed show
  finale    - Dense overlapping waves of both variants

User presets are YAML files in ~/.skyburst/presets (or --presets-dir).

Examples:
  %(prog)s                                   # classic show -> classic_show.gif
  %(prog)s --preset anime --seed 7           # reproducible anime show
  %(prog)s --preset classic --format frames  # PNG sequence
  %(prog)s --preset anime --preview          # live pygame window
  %(prog)s --preset-info anime               # show preset details
        """
    )

    parser.add_argument(
        '-p', '--preset',
        type=str,
        default='classic',
        help='Show preset (default: classic)'
    )

    parser.add_argument(
        '-o', '--output',
        type=str,
        default=None,
        help='Output path (auto-generated if not specified)'
    )

    parser.add_argument(
        '--format',
        type=str,
        default='gif',
        choices=['gif', 'frames'],
        help='Output format (default: gif)'
    )

    parser.add_argument(
        '-d', '--duration',
        type=float,
        default=None,
        help='Seconds to render (default: until the final message appears)'
    )

    parser.add_argument(
        '--frame-step',
        type=int,
        default=2,
        help='Keep every Nth simulated frame (default: 2)'
    )

    parser.add_argument(
        '--width',
        type=int,
        default=None,
        help='Canvas width override'
    )

    parser.add_argument(
        '--height',
        type=int,
        default=None,
        help='Canvas height override'
    )

    parser.add_argument(
        '--seed',
        type=int,
        default=None,
        help='Random seed for a reproducible show'
    )

    parser.add_argument(
        '--presets-dir',
        type=str,
        default=None,
        help='Directory of user YAML presets'
    )

    parser.add_argument(
        '--preview',
        action='store_true',
        help='Open a live preview window instead of exporting (requires pygame)'
    )

    parser.add_argument(
        '--auto-launch',
        action='store_true',
        help='With --preview: launch immediately instead of waiting for a click'
    )

    parser.add_argument(
        '--list-presets',
        action='store_true',
        help='List available show presets'
    )

    parser.add_argument(
        '--preset-info',
        type=str,
        default=None,
        metavar='NAME',
        help='Show details for a preset'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Log show events'
    )

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.INFO, format='%(asctime)s %(name)s: %(message)s')

    from skyburst.show.presets import PresetManager, get_preset_manager

    manager = PresetManager(Path(args.presets_dir)) if args.presets_dir else get_preset_manager()

    if args.list_presets:
        print("Available Show Presets:\n")
        for name in manager.list_all():
            preset = manager.get(name)
            desc = preset.description[:50] + "..." if len(preset.description) > 50 else preset.description
            print(f"  {name:<16} - {desc}")
        print(f"\nTotal: {len(manager.list_all())} presets")
        print("\nUsage: --preset <name>")
        print("Details: --preset-info <name>")
        sys.exit(0)

    if args.preset_info:
        info = manager.get_preset_info(args.preset_info)
        if not info:
            print(f"Error: Preset '{args.preset_info}' not found")
            print("Use --list-presets to see available presets")
            sys.exit(1)

        print(f"Preset: {info['name']}")
        print(f"Description: {info['description']}")
        print(f"\nCanvas: {info['size']}")
        print(f"Bursts: {info['bursts']}" + (" (rocket launch)" if info['rocket'] else ""))
        print("\nWaves:")
        for wave in info['waves']:
            print(f"  - {wave}")
        print("\nMessages:")
        for i, text in enumerate(info['messages'], 1):
            print(f"  {i}. {text}")
        print(f"\nTags: {', '.join(info['tags'])}")
        sys.exit(0)

    preset = manager.get(args.preset)
    if not preset:
        print(f"Error: Preset '{args.preset}' not found")
        print("Use --list-presets to see available presets")
        sys.exit(1)

    try:
        if args.preview:
            from skyburst.core.preview import preview_show, check_pygame_available

            if not check_pygame_available():
                print("Error: Preview requires pygame. Install with: pip install pygame")
                sys.exit(1)

            if args.width or args.height:
                from dataclasses import replace
                preset = replace(preset, width=args.width or preset.width, height=args.height or preset.height)

            print(f"Opening preview: {preset.name} ({preset.description})")
            print("Controls: SPACE/CLICK=launch, F=info, H=help, ESC=quit")
            preview_show(preset, seed=args.seed, auto_launch=args.auto_launch)
            print("Preview closed.")
            return

        from skyburst import ShowExporter, ShowRunner

        print(f"Rendering: {preset.name} ({preset.description})")
        runner = ShowRunner(preset, seed=args.seed, width=args.width, height=args.height)
        frames = runner.run(
            duration_ms=args.duration * 1000 if args.duration is not None else None,
            frame_step=args.frame_step,
        )
        print(f"Captured {len(frames)} frames ({runner.show.director.ignited_count} bursts)")

        output_path = args.output
        if output_path is None:
            output_path = f"{preset.name}_show.gif" if args.format == 'gif' else f"{preset.name}_frames"

        if args.format == 'gif':
            output = ShowExporter.to_gif(frames, output_path, duration=runner.frame_duration_ms)
        else:
            output = ShowExporter.to_frames(frames, output_path)
            output = Path(output_path)

        print(f"Output: {output}")
        print("Done!")

    except Exception as e:
        print(f"Error: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        sys.exit(1)


if __name__ == '__main__':
    main()
