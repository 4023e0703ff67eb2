from pathlib import Path

from guidekit.cli._io import default_manifest_file, dumps_json, ensure_root
from guidekit.cli.exitcodes import EXIT_OK
from guidekit.cli.archive import describe
from guidekit.manifest.loader import DefaultManifestLoader
from guidekit.manifest.planner import plan_jobs
from guidekit.samples.archiver import SampleArchiver


def run(
    *,
    path: str,
    manifest: str | None,
    only: list[str] | None,
    fmt: str = "text",
) -> int:
    root = ensure_root(path)
    manifest_file = Path(manifest) if manifest is not None else default_manifest_file(root)

    loaded = DefaultManifestLoader().load(manifest_file)
    jobs = plan_jobs(loaded, only=only)

    results = []
    for job in jobs:
        result = SampleArchiver(job.config).archive()
        results.append((job, result))
        if fmt != "json":
            print(describe(result, label=job.label))

    if fmt == "json":
        payload = [{"sample": job.sample, "dsl": job.dsl, **result.to_dict()} for job, result in results]
        print(dumps_json(payload), end="")
    elif not jobs:
        print("No samples declared.")

    return EXIT_OK
