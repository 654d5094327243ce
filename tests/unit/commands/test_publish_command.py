"""Unit tests for the publish command."""

import json

from typer.testing import CliRunner

from pipedef.cli import app

DEFINITIONS = """
from pipedef import InlineBashTask, PipelineDefinition, TargetPathType


class BuildPipeline(PipelineDefinition):
    target_file = "out/build.yml"
    target_path_type = TargetPathType.RELATIVE_TO_CURRENT_DIR
    header = []

    @property
    def pipeline(self):
        return {"steps": [InlineBashTask("make build", display_name="Build")]}


class BrokenPipeline(PipelineDefinition):
    target_file = "out/broken.yml"
    target_path_type = TargetPathType.RELATIVE_TO_CURRENT_DIR
    schema = {"type": "object", "required": ["stages"]}

    @property
    def pipeline(self):
        return {"steps": []}
"""

SINGLE_DEFINITION = """
from pipedef import PipelineDefinition, TargetPathType


class DeployPipeline(PipelineDefinition):
    target_file = "deploy.yml"
    target_path_type = TargetPathType.RELATIVE_TO_CURRENT_DIR
    header = []

    @property
    def pipeline(self):
        return {"steps": ["deploy"]}
"""


class TestPublishCommand:
    """Test cases for the publish command."""

    def test_publish_writes_valid_definitions(self, workdir, write_module):
        module = write_module("publish_cmd_defs.py", DEFINITIONS)

        result = CliRunner().invoke(app, ["publish", "--module", module])

        assert result.exit_code == 0
        assert (workdir / "out" / "build.yml").read_text() == (
            "steps:\n  - bash: |-\n      make build\n    displayName: Build\n"
        )
        assert not (workdir / "out" / "broken.yml").exists()
        assert "Validation of pipeline BrokenPipeline failed" in result.output
        assert "Processed 2 definition(s): 1 validation failed, 1 created" in result.output
        assert "✅ Publish completed" in result.output

    def test_fail_if_changed_on_first_publish(self, workdir, write_module):
        module = write_module("publish_cmd_single.py", SINGLE_DEFINITION)

        result = CliRunner().invoke(
            app, ["publish", "--module", module, "--fail-if-changed"]
        )

        assert result.exit_code == 1
        assert (workdir / "deploy.yml").read_text() == "steps:\n  - deploy\n"
        assert "This pipeline hasn't been published yet!" in result.output
        assert "1 definition(s) were not published before this run" in result.output

    def test_fail_if_changed_passes_when_up_to_date(self, workdir, write_module):
        module = write_module("publish_cmd_single.py", SINGLE_DEFINITION)
        (workdir / "deploy.yml").write_text("steps:\n  - deploy\n")

        result = CliRunner().invoke(
            app, ["publish", "--module", module, "--fail-if-changed"]
        )

        assert result.exit_code == 0
        assert "No new changes to publish" in result.output

    def test_changed_file_is_rewritten(self, workdir, write_module):
        module = write_module("publish_cmd_single.py", SINGLE_DEFINITION)
        (workdir / "deploy.yml").write_text("steps:\n  - old\n")

        result = CliRunner().invoke(
            app, ["publish", "--module", module, "--fail-if-changed"]
        )

        assert result.exit_code == 1
        assert "Changes detected between DeployPipeline" in result.output
        assert (workdir / "deploy.yml").read_text() == "steps:\n  - deploy\n"

    def test_json_output(self, workdir, write_module):
        module = write_module("publish_cmd_defs.py", DEFINITIONS)

        result = CliRunner().invoke(
            app,
            ["--log-level", "CRITICAL", "publish", "--module", module, "--output", "JSON"],
        )

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["success"] is True
        assert data["summary"]["created"] == 1
        assert data["summary"]["validation_failed"] == 1
        assert [d["name"] for d in data["definitions"]] == [
            "BuildPipeline",
            "BrokenPipeline",
        ]

    def test_json_output_with_drift(self, workdir, write_module):
        module = write_module("publish_cmd_single.py", SINGLE_DEFINITION)

        result = CliRunner().invoke(
            app,
            [
                "--log-level",
                "CRITICAL",
                "publish",
                "--module",
                module,
                "--fail-if-changed",
                "--output",
                "JSON",
            ],
        )

        assert result.exit_code == 1
        data = json.loads(result.stdout)
        assert data["success"] is False
        assert data["failIfChanged"] is True
        assert data["definitions"][0]["outcome"] == "created"

    def test_settings_file(self, workdir, write_module):
        write_module("publish_cmd_single.py", SINGLE_DEFINITION)
        (workdir / "pipedef.yaml").write_text(
            "module: publish_cmd_single.py\nfailIfChanged: true\n"
        )

        result = CliRunner().invoke(app, ["publish"])

        assert result.exit_code == 1
        assert (workdir / "deploy.yml").exists()

    def test_no_fail_if_changed_overrides_settings(self, workdir, write_module):
        write_module("publish_cmd_single.py", SINGLE_DEFINITION)
        (workdir / "pipedef.yaml").write_text(
            "module: publish_cmd_single.py\nfailIfChanged: true\n"
        )

        result = CliRunner().invoke(app, ["publish", "--no-fail-if-changed"])

        assert result.exit_code == 0

    def test_missing_module(self, workdir):
        result = CliRunner().invoke(app, ["publish", "--module", "nope.py"])

        assert result.exit_code == 1
        assert "❌ Error: Definitions module not found: nope.py" in result.output

    def test_no_module_given(self, workdir):
        result = CliRunner().invoke(app, ["publish"])

        assert result.exit_code == 1
        assert "No definitions module given" in result.output

    def test_module_without_definitions(self, workdir, write_module):
        module = write_module("publish_cmd_empty.py", "class Helper:\n    pass\n")

        result = CliRunner().invoke(app, ["publish", "--module", module])

        assert result.exit_code == 1
        assert "❌ Error:" in result.output

    def test_missing_module_json(self, workdir):
        result = CliRunner().invoke(
            app, ["publish", "--module", "nope.py", "--output", "JSON"]
        )

        assert result.exit_code == 1
        data = json.loads(result.stdout)
        assert data["success"] is False
        assert "not found" in data["error"]


class TestLogLevel:
    def test_unknown_log_level(self, workdir):
        result = CliRunner().invoke(
            app, ["--log-level", "LOUD", "publish", "--module", "ci.py"]
        )

        assert result.exit_code == 1
        assert "Unknown log level 'LOUD'" in result.output

    def test_log_level_from_environment(self, workdir, write_module, monkeypatch):
        monkeypatch.setenv("PIPEDEF_LOG_LEVEL", "ERROR")
        module = write_module("publish_cmd_single.py", SINGLE_DEFINITION)

        result = CliRunner().invoke(app, ["publish", "--module", module])

        assert result.exit_code == 0
        assert "Validating pipeline" not in result.output
        assert "✅ Publish completed" in result.output
