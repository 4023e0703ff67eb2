"""Tests for guidekit CLI commands."""

import json
import zipfile
from pathlib import Path
from unittest.mock import patch

import pytest
from guidekit.cli.exitcodes import EXIT_ARCHIVE_ERROR, EXIT_CONFIG_ERROR, EXIT_OK, exit_code_for_error
from guidekit.cli.main import main
from guidekit.core.errors import ArchiveIOError, ConfigurationError
from guidekit.manifest.loader import ManifestLoadError
from guidekit.samples.types import ArchiveResult, ArchiveStatus


def _w(p: Path, text: str = "x") -> Path:
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(text, encoding="utf-8")
    return p


@pytest.fixture()
def guide(tmp_path) -> Path:
    """A guide with one two-DSL sample and a manifest."""
    root = tmp_path / "guide"
    _w(root / "samples" / "code" / "common" / "README.adoc", "= Code\n")
    _w(root / "samples" / "code" / "groovy" / "build.gradle", "// tag::p[]\nplugins { id 'java' }\n// end::p[]\n")
    _w(root / "samples" / "code" / "kotlin" / "build.gradle.kts", "plugins { java }\n")
    _w(
        root / "samples.yaml",
        """
excludes: ["**/build/**"]
samples:
  - name: code
    dir: samples/code
""",
    )
    return root


class TestZipCommand:
    def test_writes_archive(self, tmp_path, capsys):
        src = tmp_path / "src"
        _w(src / "README.md", "hi\n")
        _w(src / "build.gradle", "// tag::a[]\nfoo\n// end::a[]\n")
        out = tmp_path / "out" / "s.zip"

        code = main(["zip", "--source", str(src), "--readme", "README.md", "-o", str(out)])

        assert code == EXIT_OK
        assert "wrote" in capsys.readouterr().out
        with zipfile.ZipFile(out) as zf:
            assert sorted(zf.namelist()) == ["README", "build.gradle"]
            assert zf.read("build.gradle") == b"foo\n"

    def test_skip_is_success(self, tmp_path, capsys):
        src = tmp_path / "src"
        _w(src / "README.md")
        (tmp_path / "kotlin").mkdir()
        out = tmp_path / "s.zip"

        code = main(
            ["zip", "--source", str(src), "--main", str(tmp_path / "kotlin"), "--readme", "README.md", "-o", str(out)]
        )

        assert code == EXIT_OK
        assert "skipped" in capsys.readouterr().out
        assert not out.exists()

    def test_json_format(self, tmp_path, capsys):
        src = tmp_path / "src"
        _w(src / "a" / "b.txt")
        out = tmp_path / "s.zip"

        code = main(["zip", "--source", str(src), "--readme", "README.md", "-o", str(out), "--format", "json"])

        assert code == EXIT_OK
        data = json.loads(capsys.readouterr().out)
        assert data["status"] == "written"
        assert [e["path"] for e in data["entries"]] == ["a/", "a/b.txt"]
        assert data["entries"][0]["kind"] == "directory"

    def test_main_defaults_to_sources_and_flags_are_forwarded(self, tmp_path):
        result = ArchiveResult(status=ArchiveStatus.SKIPPED, archive_file=tmp_path / "s.zip")

        with patch("guidekit.cli.archive.zip_sample", return_value=result) as m:
            code = main(
                [
                    "zip",
                    "--source",
                    "a",
                    "--source",
                    "b",
                    "--exclude",
                    "**/build/**",
                    "--readme",
                    "README.md",
                    "-o",
                    str(tmp_path / "s.zip"),
                    "--no-reproducible",
                    "--no-default-excludes",
                ]
            )

        assert code == EXIT_OK
        args, kwargs = m.call_args
        assert args[0] == [Path("a"), Path("b")]
        assert args[1] == [Path("a"), Path("b")]
        assert args[2] == ("**/build/**",)
        assert args[3] == "README.md"
        assert kwargs == {"reproducible": False, "default_excludes": False}

    def test_configuration_error_exit_code(self, tmp_path, capsys):
        src = tmp_path / "src"
        _w(src / "a.txt")

        code = main(["zip", "--source", str(src), "--readme", "", "-o", str(tmp_path / "s.zip")])

        assert code == EXIT_CONFIG_ERROR
        assert "guidekit: error:" in capsys.readouterr().err

    def test_io_error_exit_code(self, tmp_path, capsys):
        src = tmp_path / "src"
        _w(src / "a.txt")

        with patch("guidekit.samples.archiver.shutil.copyfileobj", side_effect=OSError("disk full")):
            code = main(["zip", "--source", str(src), "--readme", "README.md", "-o", str(tmp_path / "s.zip")])

        assert code == EXIT_ARCHIVE_ERROR
        assert "disk full" in capsys.readouterr().err

    def test_missing_required_arguments(self):
        with pytest.raises(SystemExit) as exc:
            main(["zip", "--readme", "README.md"])
        assert exc.value.code == 2


class TestSamplesCommand:
    def test_zips_every_dsl(self, guide, capsys):
        code = main(["samples", str(guide)])

        assert code == EXIT_OK
        out = capsys.readouterr().out
        assert "code-groovy: wrote" in out
        assert "code-kotlin: wrote" in out
        groovy_zip = guide / "build" / "samples" / "code-groovy.zip"
        with zipfile.ZipFile(groovy_zip) as zf:
            assert sorted(zf.namelist()) == ["README", "build.gradle"]
            assert zf.read("build.gradle") == b"plugins { id 'java' }\n"

    def test_only_and_json(self, guide, capsys):
        _w(guide / "samples" / "other" / "README.adoc")
        manifest = guide / "samples.yaml"
        manifest.write_text(manifest.read_text(encoding="utf-8") + "  - name: other\n    dir: samples/other\n")

        code = main(["samples", str(guide), "--only", "other", "--format", "json"])

        assert code == EXIT_OK
        data = json.loads(capsys.readouterr().out)
        assert [(d["sample"], d["dsl"], d["status"]) for d in data] == [("other", None, "written")]

    def test_explicit_manifest(self, guide, tmp_path):
        moved = guide / "conf" / "guide-samples.yml"
        moved.parent.mkdir()
        moved.write_text("samples:\n  - name: code\n    dir: ../samples/code\n", encoding="utf-8")

        code = main(["samples", str(guide), "--manifest", str(moved)])

        assert code == EXIT_OK
        assert (guide / "conf" / "build" / "samples" / "code-kotlin.zip").is_file()

    def test_missing_manifest(self, tmp_path, capsys):
        code = main(["samples", str(tmp_path)])

        assert code == EXIT_CONFIG_ERROR
        assert "No samples manifest" in capsys.readouterr().err

    def test_missing_path(self, tmp_path):
        assert main(["samples", str(tmp_path / "nope")]) == EXIT_CONFIG_ERROR

    def test_no_samples_declared(self, tmp_path, capsys):
        _w(tmp_path / "samples.yaml", "samples: []\n")

        assert main(["samples", str(tmp_path)]) == EXIT_OK
        assert "No samples declared." in capsys.readouterr().out


class TestListCommand:
    def test_lists_modes(self, guide, capsys):
        main(["samples", str(guide)])
        capsys.readouterr()

        code = main(["list", str(guide / "build" / "samples" / "code-groovy.zip")])

        assert code == EXIT_OK
        lines = capsys.readouterr().out.splitlines()
        assert any(line.startswith("100") and line.endswith(" README") for line in lines)
        assert any(line.endswith(" build.gradle") for line in lines)

    def test_json(self, tmp_path, capsys):
        archive = tmp_path / "a.zip"
        with zipfile.ZipFile(archive, "w") as zf:
            info = zipfile.ZipInfo("bin/")
            info.external_attr = (0o40755 << 16) | 0x10
            zf.writestr(info, b"")

        assert main(["list", str(archive), "--format", "json"]) == EXIT_OK
        data = json.loads(capsys.readouterr().out)
        assert data == [{"path": "bin/", "size": 0, "mode": "40755", "kind": "directory"}]

    def test_unreadable_archive(self, tmp_path, capsys):
        bogus = _w(tmp_path / "a.zip", "not a zip")

        assert main(["list", str(bogus)]) == EXIT_ARCHIVE_ERROR
        assert "Cannot read archive" in capsys.readouterr().err


class TestExitCodes:
    def test_policy(self):
        assert exit_code_for_error(ConfigurationError("x")) == EXIT_CONFIG_ERROR
        assert exit_code_for_error(ManifestLoadError("x")) == EXIT_CONFIG_ERROR
        assert exit_code_for_error(ArchiveIOError("x")) == EXIT_ARCHIVE_ERROR
        assert exit_code_for_error(RuntimeError("x")) == EXIT_ARCHIVE_ERROR
