from pathlib import Path

from guidekit.cli._io import dumps_json
from guidekit.cli.exitcodes import EXIT_OK
from guidekit.samples.inspect import read_entries


def run(*, archive: str, fmt: str = "text") -> int:
    entries = read_entries(Path(archive))

    if fmt == "json":
        print(dumps_json([e.to_dict() for e in entries]), end="")
        return EXIT_OK

    for e in entries:
        print(f"{e.mode:06o} {e.size:>10} {e.path}")
    return EXIT_OK
