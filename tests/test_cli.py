import json
from pathlib import Path
from unittest.mock import patch

from click.testing import CliRunner

from api_blueprint.cli import main
from api_blueprint.exceptions import MissingOperationError

FIXTURES = Path(__file__).parent / "fixtures"


class TestCliBuild:
    @patch("api_blueprint.cli.setup_logging")
    def test_build_writes_blueprint(self, mock_logging, tmp_path):
        output_file = tmp_path / "out" / "blueprint.json"
        runner = CliRunner()
        result = runner.invoke(main, [
            "build", str(FIXTURES / "types.yaml"),
            "-o", str(output_file),
        ])

        assert result.exit_code == 0, result.output
        assert "Blueprint saved to" in result.output
        data = json.loads(output_file.read_text(encoding="utf-8"))
        assert data["title"] == "Foo"
        assert data["routes"][0]["path"] == "/foos"
        mock_logging.assert_called_once_with("INFO")

    @patch("api_blueprint.cli.setup_logging")
    def test_build_indent(self, mock_logging, tmp_path):
        output_file = tmp_path / "blueprint.json"
        runner = CliRunner()
        result = runner.invoke(main, [
            "build", str(FIXTURES / "types.yaml"),
            "-o", str(output_file),
            "--indent", "4",
            "--log-level", "debug",
        ])

        assert result.exit_code == 0, result.output
        assert output_file.read_text(encoding="utf-8").startswith('{\n    "title"')
        mock_logging.assert_called_once_with("DEBUG")

    @patch("api_blueprint.cli.setup_logging")
    @patch("api_blueprint.cli.create_blueprint")
    def test_build_error(self, mock_create, mock_logging, tmp_path):
        mock_create.side_effect = MissingOperationError("/foos/get", ["GET"])
        output_file = tmp_path / "blueprint.json"
        runner = CliRunner()
        result = runner.invoke(main, [
            "build", str(FIXTURES / "types.yaml"),
            "-o", str(output_file),
        ])

        assert result.exit_code == 1
        assert "POST method is missing for /foos/get" in result.output
        assert not output_file.exists()

    def test_build_missing_input(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(main, ["build", str(tmp_path / "nope.yaml"), "-o", str(tmp_path / "b.json")])
        assert result.exit_code == 2


class TestCliFlatten:
    def test_flatten_schema(self, tmp_path):
        path = tmp_path / "types.yaml"
        path.write_text(
            "openapi:\n"
            "  components:\n"
            "    schemas:\n"
            "      status:\n"
            "        oneOf:\n"
            "          - {type: string, enum: [a, b]}\n"
            "          - {type: string, enum: [b, c]}\n"
        )
        runner = CliRunner()
        result = runner.invoke(main, ["flatten", str(path), "status"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == {"type": "string", "enum": ["a", "b", "c"]}

    def test_flatten_unknown_schema(self):
        runner = CliRunner()
        result = runner.invoke(main, ["flatten", str(FIXTURES / "types.yaml"), "nope"])
        assert result.exit_code == 1
        assert "Schema 'nope' not found" in result.output

    def test_flatten_malformed_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("openapi: [unclosed\n")
        runner = CliRunner()
        result = runner.invoke(main, ["flatten", str(path), "status"])
        assert result.exit_code == 1
        assert "Error:" in result.output
        assert "bad.yaml" in result.output


class TestCliBuildInput:
    @patch("api_blueprint.cli.setup_logging")
    def test_build_malformed_yaml(self, mock_logging, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("openapi:\n  info: {title: [\n")
        runner = CliRunner()
        result = runner.invoke(main, ["build", str(path), "-o", str(tmp_path / "b.json")])

        assert result.exit_code == 1
        assert "Error:" in result.output
        assert "bad.yaml" in result.output
        assert not (tmp_path / "b.json").exists()
