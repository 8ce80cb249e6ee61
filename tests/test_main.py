"""Tests for the command-line entry point."""

import json

import pytest

from workmatch.main import (
    EXIT_BAD_REQUEST,
    EXIT_ERROR,
    EXIT_OK,
    build_parser,
    load_runtime_config,
    main,
)


@pytest.fixture
def cli(tmp_path, monkeypatch, restore_root_logger):
    """Run main() from an empty directory against a throwaway database."""
    monkeypatch.chdir(tmp_path)
    db_url = f"sqlite:///{tmp_path / 'cli.db'}"

    def run(*args):
        return main(["--log-level", "WARNING", "--database-url", db_url, *args])

    return run


class TestParser:
    def test_match_requires_a_target(self):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["match"])
        assert exc_info.value.code == 2

    def test_match_targets_are_exclusive(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["match", "--job", "j-1", "--worker", "w-1"])

    def test_match_defaults(self):
        args = build_parser().parse_args(["match", "--job", "j-1"])

        assert args.job_id == "j-1"
        assert args.worker_id is None
        assert args.output_format == "json"
        assert args.details is False


class TestLoadRuntimeConfig:
    def test_cli_level_wins(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("LOG_LEVEL", "ERROR")

        _, env_config = load_runtime_config(None, "debug")

        assert env_config.log_level == "DEBUG"

    def test_environment_level_beats_config(self, tmp_path, monkeypatch):
        (tmp_path / "config.yaml").write_text("logging:\n  level: INFO\n")
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("LOG_LEVEL", "ERROR")

        _, env_config = load_runtime_config(None, None)

        assert env_config.log_level == "ERROR"

    def test_config_level_is_the_fallback(self, tmp_path, monkeypatch):
        (tmp_path / "config.yaml").write_text("logging:\n  level: warning\n")
        monkeypatch.chdir(tmp_path)

        _, env_config = load_runtime_config(None, None)

        assert env_config.log_level == "WARNING"


class TestCommands:
    def test_seed_then_match_job(self, cli, demo_dataset_path, capsys):
        assert cli("seed", str(demo_dataset_path)) == EXIT_OK
        summary = json.loads(capsys.readouterr().out)
        assert summary == {"workers": 3, "jobs": 3, "skills": 5}

        assert cli("match", "--job", "j-cook-mumbai") == EXIT_OK
        payload = json.loads(capsys.readouterr().out)

        assert payload["target"] == {"type": "job", "id": "j-cook-mumbai"}
        assert payload["candidates_considered"] == 2
        assert [m["subjectId"] for m in payload["matches"]] == ["w-rajesh"]
        assert payload["matches"][0]["score"] == 100
        assert "subject" not in payload["matches"][0]

    def test_match_worker_with_details(self, cli, demo_dataset_path, capsys):
        cli("seed", str(demo_dataset_path))
        capsys.readouterr()

        assert cli("match", "--worker", "w-priya", "--details") == EXIT_OK
        payload = json.loads(capsys.readouterr().out)

        assert [m["subjectId"] for m in payload["matches"]] == ["j-nanny-bangalore"]
        assert payload["matches"][0]["subject"]["work_type"] == "LIVE_IN"

    def test_text_output(self, cli, demo_dataset_path, capsys):
        cli("seed", str(demo_dataset_path))
        capsys.readouterr()

        assert cli("match", "--worker", "w-lakshmi", "--format", "text") == EXIT_OK
        out = capsys.readouterr().out

        assert 'Top jobs for worker w-lakshmi "Lakshmi Iyer" (0 of 2 candidates)' in out
        assert "No candidates scored above the match threshold." in out

    def test_unknown_job(self, cli, demo_dataset_path, capsys):
        cli("seed", str(demo_dataset_path))
        capsys.readouterr()

        assert cli("match", "--job", "missing") == EXIT_BAD_REQUEST
        assert "Job not found: missing" in capsys.readouterr().err

    def test_config_from_file_changes_threshold(self, cli, tmp_path, demo_dataset_path, capsys):
        (tmp_path / "config.yaml").write_text("matching:\n  min_score: 20\n  max_results: 5\n")
        cli("seed", str(demo_dataset_path))
        capsys.readouterr()

        assert cli("match", "--worker", "w-rajesh") == EXIT_OK
        payload = json.loads(capsys.readouterr().out)

        assert [(m["subjectId"], m["score"]) for m in payload["matches"]] == [
            ("j-cook-mumbai", 100),
            ("j-nanny-bangalore", 30),
        ]

    def test_missing_config_file(self, cli, capsys):
        assert cli("--config", "nope.yaml", "match", "--job", "j-1") == EXIT_ERROR
        assert "Configuration Error" in capsys.readouterr().err

    def test_missing_dataset(self, cli, capsys):
        assert cli("seed", "missing.yaml") == EXIT_ERROR
        assert "Dataset file not found" in capsys.readouterr().err

    def test_invalid_dataset(self, cli, tmp_path, capsys):
        dataset = tmp_path / "bad.yaml"
        dataset.write_text("workers:\n  - id: w-1\n    hourly_rate: -5\n")

        assert cli("seed", str(dataset)) == EXIT_ERROR
        err = capsys.readouterr().err
        assert "Dataset validation failed" in err
        assert "workers -> 0 -> hourly_rate" in err
