"""Tests for the command-line interface."""

import json

from click.testing import CliRunner

from json_processor import __version__
from json_processor.cli import main

from sample_models import user_json


class TestCLI:
    """Tests for the json-processor commands."""

    def setup_method(self):
        """Set up test fixtures."""
        self.runner = CliRunner()

    def test_version(self):
        """Test --version."""
        result = self.runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_describe(self):
        """Test the field table."""
        result = self.runner.invoke(main, ["describe", "sample_models:User"])

        assert result.exit_code == 0
        assert result.output.startswith("sample_models.User")
        assert "aliases" in result.output
        assert "container=deque" in result.output
        assert "mapper=UUIDMapper" in result.output

    def test_describe_invalid_class(self):
        """Test a class with invalid declarations."""
        result = self.runner.invoke(main, ["describe", "test_metadata_resolver:StaticField"])

        assert result.exit_code == 1
        assert "Error:" in result.output
        assert "is static" in result.output

    def test_unknown_target(self):
        """Test an unimportable target."""
        result = self.runner.invoke(main, ["describe", "sample_models:Missing"])
        assert result.exit_code == 2
        assert "cannot import" in result.output

    def test_malformed_target(self):
        """Test a target without a class part."""
        result = self.runner.invoke(main, ["describe", "sample_models"])
        assert result.exit_code == 2
        assert "MODULE:CLASS" in result.output

    def test_roundtrip_to_stdout(self, temp_dir):
        """Test a document round trip printed to stdout."""
        input_file = temp_dir / "user.json"
        input_file.write_text(json.dumps(user_json()), encoding="utf-8")

        result = self.runner.invoke(main, ["roundtrip", "sample_models:User", str(input_file)])

        assert result.exit_code == 0
        assert json.loads(result.output) == user_json()

    def test_roundtrip_to_file(self, temp_dir):
        """Test a document round trip written to a file."""
        input_file = temp_dir / "user.json"
        output_file = temp_dir / "out" / "user.json"
        input_file.write_text(json.dumps(user_json()), encoding="utf-8")

        result = self.runner.invoke(main, [
            "roundtrip", "sample_models:User", str(input_file),
            "-o", str(output_file), "--indent", "4"
        ])

        assert result.exit_code == 0
        assert "Wrote" in result.output
        assert json.loads(output_file.read_text(encoding="utf-8")) == user_json()
        assert '    "name"' in output_file.read_text(encoding="utf-8")

    def test_roundtrip_conversion_error(self, temp_dir):
        """Test that conversion failures exit with status 1."""
        input_file = temp_dir / "counter.json"
        input_file.write_text('{"count": "abc"}', encoding="utf-8")

        result = self.runner.invoke(main, ["roundtrip", "sample_models:Counter", str(input_file)])

        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_roundtrip_invalid_json(self, temp_dir):
        """Test malformed input documents."""
        input_file = temp_dir / "broken.json"
        input_file.write_text('{"count": ', encoding="utf-8")

        result = self.runner.invoke(main, ["roundtrip", "sample_models:Counter", str(input_file)])

        assert result.exit_code == 1
        assert "Invalid JSON" in result.output

    def test_roundtrip_with_profile(self, temp_dir):
        """Test the profile report."""
        input_file = temp_dir / "counter.json"
        output_file = temp_dir / "counter.out.json"
        input_file.write_text('{"count": 3}', encoding="utf-8")

        result = self.runner.invoke(main, [
            "roundtrip", "sample_models:Counter", str(input_file), "-o", str(output_file), "--profile"
        ])

        assert result.exit_code == 0
        assert "2 operations" in result.output

    def test_convert_all_array(self, temp_dir):
        """Test bulk conversion of an array document."""
        input_file = temp_dir / "users.json"
        documents = [user_json("Alice"), user_json("Bob")]
        input_file.write_text(json.dumps(documents), encoding="utf-8")

        result = self.runner.invoke(main, ["convert-all", "sample_models:User", str(input_file)])

        assert result.exit_code == 0
        assert json.loads(result.output) == documents

    def test_convert_all_object(self, temp_dir):
        """Test bulk conversion of an object document."""
        input_file = temp_dir / "counters.json"
        input_file.write_text('{"a": {"count": 1}, "b": {"count": "2"}}', encoding="utf-8")

        result = self.runner.invoke(main, ["convert-all", "sample_models:Counter", str(input_file),
                                           "--indent", "0"])

        assert result.exit_code == 0
        assert json.loads(result.output) == {"a": {"count": 1}, "b": {"count": 2}}

    def test_convert_all_bad_element(self, temp_dir):
        """Test bulk conversion with a non-object element."""
        input_file = temp_dir / "counters.json"
        input_file.write_text('[{"count": 1}, 2]', encoding="utf-8")

        result = self.runner.invoke(main, ["convert-all", "sample_models:Counter", str(input_file)])

        assert result.exit_code == 1
        assert "Error:" in result.output
