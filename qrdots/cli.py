"""QR-Dots CLI — render QR codes with neighbour-aware dot styles."""

import argparse
import sys
from pathlib import Path

from qrdots.dot import DotType
from qrdots.logging import audit, get_logger, setup_logging

log = get_logger("cli")


def _parse_hex_color(s: str) -> tuple[int, int, int]:
    """Parse a hex colour string (with or without '#') to an RGB tuple."""
    s = s.lstrip("#")
    if len(s) != 6:
        raise argparse.ArgumentTypeError(f"invalid hex colour: {s!r}")
    try:
        return tuple(int(s[i : i + 2], 16) for i in (0, 2, 4))
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid hex colour: {s!r}") from None


def cmd_render(args):
    """Render a QR code with styled dots."""
    from qrdots.renderer import RenderOptions, render_qr

    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)

    options = RenderOptions(
        dot_type=args.style,
        box_size=args.box_size,
        border=args.border,
        color=args.color,
        bg_color=args.bg_color,
        supersample=args.supersample,
    )
    img = render_qr(
        args.data,
        options,
        version=args.version,
        ecc=args.ecc,
        mask=args.mask,
    )
    img.save(output)
    print(f"Rendered: {output} ({img.size[0]}x{img.size[1]}, style={args.style})")


def cmd_styles(args):
    """List the available dot styles."""
    for dot_type in DotType:
        print(dot_type.value)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="qrdots", description="QR-Dots: neighbour-aware QR module styling")

    # Global logging flags
    parser.add_argument("-V", "--verbose", action="store_true", help="Enable DEBUG-level logging")
    parser.add_argument("--log-file", default=None, help="Write JSON logs to file")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- render ---
    p_render = subparsers.add_parser("render", help="Render a QR code with styled dots")
    p_render.add_argument("data", help="URL or data to encode")
    p_render.add_argument("-o", "--output", default="output/qr.png", help="Output file path")
    p_render.add_argument("-s", "--style", default=DotType.ROUNDED.value,
                          choices=[t.value for t in DotType] + ["dots"], help="Dot style ('dots' = filled-circle)")
    p_render.add_argument("-v", "--version", type=int, default=None, help="QR version 1-40 (auto if omitted)")
    p_render.add_argument("-e", "--ecc", default="H", choices=["L", "M", "Q", "H"], help="Error correction level")
    p_render.add_argument("-m", "--mask", type=int, default=None, choices=range(8), help="Mask pattern 0-7")
    p_render.add_argument("--box-size", type=int, default=20, help="Module pixel size")
    p_render.add_argument("--border", type=int, default=4, help="Quiet zone modules")
    p_render.add_argument("--color", type=_parse_hex_color, default=(0, 0, 0),
                          help="Dot colour (hex e.g. '000000')")
    p_render.add_argument("--bg-color", type=_parse_hex_color, default=(255, 255, 255),
                          help="Background colour (hex)")
    p_render.add_argument("--supersample", type=int, default=4, help="Anti-aliasing render scale (1 = off)")

    # --- styles ---
    subparsers.add_parser("styles", help="List available dot styles")

    return parser


def main(argv: list[str] | None = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    # Setup logging before any command runs
    level = "DEBUG" if args.verbose else "INFO"
    setup_logging(level=level, log_file=args.log_file)
    audit("cli.start", logger=log, command=args.command, verbose=args.verbose)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    commands = {
        "render": cmd_render,
        "styles": cmd_styles,
    }
    commands[args.command](args)
    audit("cli.done", logger=log, command=args.command)


if __name__ == "__main__":
    main()
