"""
Tests for app.backend.process (file writing) and app.cli (entry point).
"""
import json
import math
import os
from pathlib import Path

import pytest

from app.backend.process import process_snapshot, render_document, write_documents
from app.cli import main, parse_args
from extractor.errors import MalformedIdentifierError

SAMPLE_SNAPSHOT = Path(__file__).resolve().parents[1] / "app" / "snapshots" / "vanilla_sample.yaml"

BROKEN_SNAPSHOT = """
chunk_status:
  - minecraft:empty
worldgen/multi_noise_biome_source_parameter_list:
  minecraft:overworld:
    - biome: null
      parameters: {temperature: 0, humidity: 0, continentalness: 0, erosion: 0, depth: 0, weirdness: 0}
"""


def _published(output_dir: Path):
    return sorted(p.name for p in output_dir.iterdir())


class TestWriteDocuments:

    def test_writes_one_file_per_document(self, tmp_path):
        written = write_documents({"a.json": [1, 2], "b.json": {"k": "v"}}, str(tmp_path))
        assert [Path(p).name for p in written] == ["a.json", "b.json"]
        assert json.loads((tmp_path / "a.json").read_text(encoding="utf-8")) == [1, 2]
        assert _published(tmp_path) == ["a.json", "b.json"]

    def test_failure_publishes_nothing(self, tmp_path):
        with pytest.raises(ValueError):
            write_documents({"a.json": [1], "b.json": [math.nan]}, str(tmp_path))
        assert _published(tmp_path) == []

    def test_creates_output_dir(self, tmp_path):
        target = tmp_path / "nested" / "out"
        write_documents({"a.json": []}, str(target))
        assert (target / "a.json").exists()

    def test_failed_publish_restores_previous_files(self, tmp_path, monkeypatch):
        (tmp_path / "a.json").write_text("old-a", encoding="utf-8")
        (tmp_path / "b.json").write_text("old-b", encoding="utf-8")
        real_replace = os.replace

        def _replace(src, dst):
            src = Path(src)
            if src.parent.name.startswith(".staging-") and src.name == "b.json":
                raise OSError("disk full")
            real_replace(src, dst)

        monkeypatch.setattr("app.backend.process.os.replace", _replace)
        with pytest.raises(OSError):
            write_documents({"a.json": [1], "b.json": [2]}, str(tmp_path))
        assert _published(tmp_path) == ["a.json", "b.json"]
        assert (tmp_path / "a.json").read_text(encoding="utf-8") == "old-a"
        assert (tmp_path / "b.json").read_text(encoding="utf-8") == "old-b"

    def test_failed_publish_removes_new_files(self, tmp_path, monkeypatch):
        real_replace = os.replace

        def _replace(src, dst):
            if Path(src).name == "b.json":
                raise OSError("disk full")
            real_replace(src, dst)

        monkeypatch.setattr("app.backend.process.os.replace", _replace)
        with pytest.raises(OSError):
            write_documents({"a.json": [1], "b.json": [2]}, str(tmp_path))
        assert _published(tmp_path) == []

    def test_overwrites_previous_output(self, tmp_path):
        (tmp_path / "a.json").write_text("old", encoding="utf-8")
        write_documents({"a.json": [1]}, str(tmp_path))
        assert json.loads((tmp_path / "a.json").read_text(encoding="utf-8")) == [1]
        assert _published(tmp_path) == ["a.json"]

    def test_render_keeps_key_order(self):
        text = render_document({"temperature": [0.0, 1.0], "offset": 0.0, "depth": [0.0, 0.0]})
        assert list(json.loads(text)) == ["temperature", "offset", "depth"]

    def test_render_compact(self):
        assert render_document({"a": [1]}, indent=0) == '{"a": [1]}\n'


class TestProcessSnapshot:

    def test_sample_snapshot(self, tmp_path):
        written = process_snapshot(str(SAMPLE_SNAPSHOT), str(tmp_path))
        assert len(written) == 3
        assert _published(tmp_path) == ["chunk_status.json", "multi_noise.json", "noise_parameters.json"]
        multi_noise = json.loads((tmp_path / "multi_noise.json").read_text(encoding="utf-8"))
        assert list(multi_noise["nether"]["minecraft:nether_wastes"]) == [
            "temperature", "humidity", "continentalness", "erosion", "depth", "weirdness", "offset",
        ]

    def test_only(self, tmp_path):
        process_snapshot(str(SAMPLE_SNAPSHOT), str(tmp_path), only=["chunk_status.json"])
        assert _published(tmp_path) == ["chunk_status.json"]

    def test_fatal_error_writes_nothing(self, tmp_path):
        snapshot = tmp_path / "broken.yaml"
        snapshot.write_text(BROKEN_SNAPSHOT, encoding="utf-8")
        out = tmp_path / "out"
        with pytest.raises(MalformedIdentifierError):
            process_snapshot(str(snapshot), str(out), only=["chunk_status.json", "multi_noise.json"])
        assert not out.exists() or _published(out) == []


class TestCli:

    def test_main_success(self, tmp_path, capsys):
        code = main(["--snapshot", str(SAMPLE_SNAPSHOT), "--output-dir", str(tmp_path), "--indent", "0"])
        assert code == 0
        assert (tmp_path / "chunk_status.json").read_text(encoding="utf-8").startswith('["empty", ')
        assert "multi_noise.json" in capsys.readouterr().out

    def test_main_list(self, capsys):
        assert main(["--list"]) == 0
        assert capsys.readouterr().out.split() == ["chunk_status.json", "noise_parameters.json", "multi_noise.json"]

    def test_main_missing_snapshot(self, tmp_path):
        assert main(["--snapshot", str(tmp_path / "missing.yaml"), "--output-dir", str(tmp_path)]) == 1

    def test_main_unknown_extractor(self, tmp_path):
        code = main(["--snapshot", str(SAMPLE_SNAPSHOT), "--output-dir", str(tmp_path), "--only", "biomes.json"])
        assert code == 1
        assert _published(tmp_path) == []

    def test_main_fatal_error(self, tmp_path):
        snapshot = tmp_path / "broken.yaml"
        snapshot.write_text(BROKEN_SNAPSHOT, encoding="utf-8")
        out = tmp_path / "out"
        assert main(["--snapshot", str(snapshot), "--output-dir", str(out)]) == 1
        assert not out.exists()

    def test_main_bad_log_level(self, tmp_path):
        assert main(["--snapshot", str(SAMPLE_SNAPSHOT), "--log-level", "chatty"]) == 1


class TestStrictKeysFlag:

    @pytest.fixture(autouse=True)
    def _fresh_settings(self, monkeypatch):
        monkeypatch.setattr("extractor.config._settings_instance", None)
        monkeypatch.setenv("STRICT_KEYS", "true")

    def test_env_default(self):
        assert parse_args(["--snapshot", "x"]).strict_keys is True

    def test_flag_turns_strict_mode_off(self):
        assert parse_args(["--snapshot", "x", "--no-strict-keys"]).strict_keys is False

    def test_flag_turns_strict_mode_on(self, monkeypatch):
        monkeypatch.setenv("STRICT_KEYS", "false")
        assert parse_args(["--snapshot", "x", "--strict-keys"]).strict_keys is True
        assert parse_args(["--snapshot", "x"]).strict_keys is False
