import argparse
import logging
import sys

from guidekit.cli import archive, listing, samples
from guidekit.cli.exitcodes import EXIT_CONFIG_ERROR, exit_code_for_error


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="guidekit", description="Guidekit: package guide samples into zip archives")
    p.add_argument("-v", "--verbose", action="store_true", help="Log every archive entry to stderr.")

    sub = p.add_subparsers(dest="cmd", required=True)

    # zip
    zip_p = sub.add_parser("zip", help="Zip one sample.")
    zip_p.add_argument("--source", action="append", required=True, help="Source root (repeatable).")
    zip_p.add_argument(
        "--main", dest="main_sources", action="append", default=None, help="Main source root (default: sources)."
    )
    zip_p.add_argument("--exclude", action="append", default=None, help="Exclusion glob (repeatable).")
    zip_p.add_argument("--readme", required=True, help="File name stored as README in the archive.")
    zip_p.add_argument("--output", "-o", required=True, help="Archive file to (re)create.")
    zip_p.add_argument(
        "--no-reproducible",
        dest="reproducible",
        action="store_false",
        help="Keep file modification times instead of a fixed timestamp.",
    )
    zip_p.add_argument(
        "--no-default-excludes",
        dest="default_excludes",
        action="store_false",
        help="Also pack VCS metadata and editor backups (.git, .DS_Store, *~, ...).",
    )
    zip_p.add_argument("--format", choices=["text", "json"], default="text", help="Output format.")

    # samples
    samples_p = sub.add_parser("samples", help="Zip every sample declared in a manifest.")
    samples_p.add_argument("path", nargs="?", default=".", help="Guide root (default: .)")
    samples_p.add_argument("--manifest", default=None, help="Manifest file (default: <path>/samples.yaml).")
    samples_p.add_argument("--only", action="append", default=None, help="Only zip this sample (repeatable).")
    samples_p.add_argument("--format", choices=["text", "json"], default="text", help="Output format.")

    # list
    list_p = sub.add_parser("list", help="List archive entries with their Unix modes.")
    list_p.add_argument("archive", help="Zip archive to inspect.")
    list_p.add_argument("--format", choices=["text", "json"], default="text", help="Output format.")

    return p


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        if args.cmd == "zip":
            return archive.run(
                sources=args.source,
                main_sources=args.main_sources,
                excludes=args.exclude,
                readme=args.readme,
                output=args.output,
                reproducible=args.reproducible,
                default_excludes=args.default_excludes,
                fmt=args.format,
            )

        if args.cmd == "samples":
            return samples.run(path=args.path, manifest=args.manifest, only=args.only, fmt=args.format)

        if args.cmd == "list":
            return listing.run(archive=args.archive, fmt=args.format)

        print("Unknown command.", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    except Exception as e:
        print(f"guidekit: error: {e}", file=sys.stderr)
        return exit_code_for_error(e)


if __name__ == "__main__":
    raise SystemExit(main())
