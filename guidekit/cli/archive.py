from pathlib import Path

from guidekit.cli._io import dumps_json
from guidekit.cli.exitcodes import EXIT_OK
from guidekit.samples.archiver import zip_sample
from guidekit.samples.types import ArchiveResult


def describe(result: ArchiveResult, label: str | None = None) -> str:
    prefix = f"{label}: " if label else ""
    if result.skipped:
        return f"{prefix}skipped {result.archive_file} (main source has no files)"
    return f"{prefix}wrote {result.archive_file} ({len(result.entries)} entries)"


def run(
    *,
    sources: list[str],
    main_sources: list[str] | None,
    excludes: list[str] | None,
    readme: str,
    output: str,
    reproducible: bool = True,
    default_excludes: bool = True,
    fmt: str = "text",
) -> int:
    main_roots = main_sources if main_sources else sources

    result = zip_sample(
        [Path(s) for s in sources],
        [Path(m) for m in main_roots],
        tuple(excludes or ()),
        readme,
        Path(output),
        reproducible=reproducible,
        default_excludes=default_excludes,
    )

    if fmt == "json":
        print(dumps_json(result.to_dict()), end="")
    else:
        print(describe(result))

    return EXIT_OK
