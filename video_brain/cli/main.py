"""Main CLI entry point for the video brain.

Usage:
    python -m video_brain.cli generate "<prompt>"                  # Generate a video spec
    python -m video_brain.cli generate "<prompt>" --style social_short
    python -m video_brain.cli generate "<prompt>" --image app:screenshot:"Dashboard view"
    python -m video_brain.cli generate "<prompt>" --mock -o video.json
    python -m video_brain.cli generate "<prompt>" --stream         # NDJSON progress events
    python -m video_brain.cli styles                              # List style profiles
    python -m video_brain.cli palettes                            # List preset palettes
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from ..models import GenerationRequest, ImageInput, ImageKind, VideoStyle


def parse_image_arg(value: str) -> ImageInput:
    """Parse an ``id:kind[:description]`` image argument."""
    parts = value.split(":", 2)
    if len(parts) < 2 or not parts[0]:
        raise argparse.ArgumentTypeError(f"Image must look like id:kind[:description], got {value!r}")
    try:
        kind = ImageKind(parts[1].lower())
    except ValueError:
        choices = ", ".join(k.value for k in ImageKind)
        raise argparse.ArgumentTypeError(f"Unknown image kind {parts[1]!r} (choose from {choices})")
    description = parts[2] if len(parts) == 3 else None
    return ImageInput(id=parts[0], kind=kind, description=description)


def _build_request(args: argparse.Namespace) -> GenerationRequest:
    return GenerationRequest(
        prompt=args.prompt,
        product_description=args.product,
        target_audience=args.audience,
        images=list(args.image or []),
        language=args.language,
        force_style=VideoStyle(args.style) if args.style else None,
    )


def _write_output(payload: dict, output: str | None) -> None:
    text = json.dumps(payload, indent=2, ensure_ascii=False)
    if output:
        path = Path(output)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text + "\n")
    else:
        print(text)


async def _stream(brain, request: GenerationRequest) -> int:
    from ..pipeline.progress import stream_generation

    exit_code = 0
    async for line in stream_generation(lambda callback: brain.generate(request, callback)):
        sys.stdout.write(line)
        sys.stdout.flush()
        if json.loads(line)["type"] == "error":
            exit_code = 1
    return exit_code


def cmd_generate(args: argparse.Namespace) -> int:
    """Generate a video specification from a prompt."""
    from ..config import load_config
    from ..pipeline.brain import VideoBrain
    from ..understanding.llm_provider import VideoBrainError

    config = load_config(args.config)
    if args.mock:
        config.llm.provider = "mock"

    try:
        # Console output would interleave with the event stream
        brain = VideoBrain(config=config, verbose=args.verbose and not args.stream)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    request = _build_request(args)

    if args.stream:
        return asyncio.run(_stream(brain, request))

    try:
        result = asyncio.run(brain.generate(request))
    except VideoBrainError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    _write_output(result.to_render_payload(), args.output)

    if args.output:
        report = result.quality_report
        print(f"Style: {result.style.value}")
        print(f"Scenes: {len(result.scenes)}")
        print(f"Duration: {result.total_duration_frames} frames ({result.total_duration_frames / config.video.fps:.1f}s)")
        print(f"Quality: {'all scenes valid' if report.all_scenes_valid else f'{len(report.invalid_scenes)} invalid scene(s)'}")
        for warning in [*report.warnings, *result.breathing_issues, *result.parse_issues]:
            print(f"  - {warning}")
        print(f"Saved to {args.output}")

    return 0


def cmd_styles(args: argparse.Namespace) -> int:
    """List the available style profiles."""
    from ..profiles import STYLE_PROFILES

    for style, profile in STYLE_PROFILES.items():
        print(f"  {style.value}")
        print(f"    Base rhythm: {profile.base_rhythm} frames/beat")
        print(f"    Beats per scene: {profile.beats_per_scene.min}-{profile.beats_per_scene.max}")
        print(f"    Scene duration: {profile.scene_duration.min}-{profile.scene_duration.max} frames")
        print(f"    Pacing: {profile.pacing.value}, motion: {profile.motion_intensity.value}")
        print()
    return 0


def cmd_palettes(args: argparse.Namespace) -> int:
    """List the preset palettes."""
    from ..profiles import PRESET_PALETTES
    from ..visual.palette import gradient_css

    for name, palette in PRESET_PALETTES.items():
        colors = palette.colors
        print(f"  {name} ({palette.style.value})")
        print(f"    Primary: {colors.primary}  Accent: {colors.accent or '-'}")
        print(f"    Neutral: {colors.neutral.dark} / {colors.neutral.mid} / {colors.neutral.light}")
        print(f"    Background: {gradient_css(palette)}")
        print()
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    # Load .env before the Anthropic provider reads ANTHROPIC_API_KEY
    load_dotenv(find_dotenv(usecwd=True))

    parser = argparse.ArgumentParser(
        description="Video Brain CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--config", default=None, help="Path to config.yaml (default: search)")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # generate command
    generate_parser = subparsers.add_parser("generate", help="Generate a video specification")
    generate_parser.add_argument("prompt", help="Marketing brief for the video")
    generate_parser.add_argument(
        "--style",
        choices=[s.value for s in VideoStyle],
        help="Force a style instead of detecting it from the prompt",
    )
    generate_parser.add_argument(
        "--image",
        action="append",
        type=parse_image_arg,
        metavar="ID:KIND[:DESC]",
        help="Image available to the video (repeatable)",
    )
    generate_parser.add_argument("--product", help="Product description")
    generate_parser.add_argument("--audience", help="Target audience")
    generate_parser.add_argument("--language", help="Language for on-screen text")
    generate_parser.add_argument("--mock", action="store_true", help="Use the mock LLM provider")
    generate_parser.add_argument("--stream", action="store_true", help="Print NDJSON progress events")
    generate_parser.add_argument("-o", "--output", help="Write the video spec to this file")
    generate_parser.add_argument("-v", "--verbose", action="store_true", help="Print progress")
    generate_parser.set_defaults(func=cmd_generate)

    # styles command
    styles_parser = subparsers.add_parser("styles", help="List style profiles")
    styles_parser.set_defaults(func=cmd_styles)

    # palettes command
    palettes_parser = subparsers.add_parser("palettes", help="List preset palettes")
    palettes_parser.set_defaults(func=cmd_palettes)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
