"""Unit tests for the validate command."""

import pytest
from safepath.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()


class TestValidateCommand:
    """Tests for safepath validate."""

    def test_valid_unix_file(self) -> None:
        """A legal absolute UNIX path passes."""
        result = runner.invoke(
            app, ["validate", "/var/log/app.log", "--os", "linux", "--root-required"]
        )

        assert result.exit_code == 0
        assert "Valid file" in result.stdout

    def test_relative_path_with_root_required(self) -> None:
        """A relative path fails when a root is required."""
        result = runner.invoke(app, ["validate", "log/app.log", "--os", "linux", "--root-required"])

        assert result.exit_code == 1
        assert "Not a valid file" in result.output

    @pytest.mark.parametrize(
        ("args", "exit_code"),
        [
            (["C:\\Temp", "--os", "windows", "--kind", "directory"], 0),
            (["C:\\Temp?", "--os", "windows", "-k", "directory"], 1),
            (["CON", "--os", "non_standard", "-k", "filename"], 1),
            (["CON?", "--os", "linux", "-k", "filename"], 0),
        ],
    )
    def test_kinds(self, args: list[str], exit_code: int) -> None:
        """Each kind uses its own grammar."""
        result = runner.invoke(app, ["validate", *args])

        assert result.exit_code == exit_code
