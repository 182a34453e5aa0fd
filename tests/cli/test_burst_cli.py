"""Tests for the bgubench-burst command."""

from pathlib import Path

import cv2
import pytest

from bgubench.cli.burst import main
from bgubench.driver import EXIT_SUCCESS, EXIT_USAGE


@pytest.fixture
def small_burst_config(tmp_path: Path) -> Path:
    path = tmp_path / "burst.toml"
    path.write_text(
        "[burst]\nwidth = 24\nheight = 12\nnum_frames = 2\n\n"
        '[operators.burst]\nauto_scheduled = "tests.test_common.operators:burst_mean"\n'
    )
    return path


class TestBurstCommand:
    def test_too_many_arguments(self, capsys):
        assert main(["a.png", "b.png"]) == EXIT_USAGE
        assert capsys.readouterr().out.startswith("usage: bgubench-burst")

    @pytest.mark.end_to_end
    def test_writes_output(self, small_burst_config, tmp_path, capsys):
        output = tmp_path / "burst.png"

        assert main([str(output), "--config", str(small_burst_config)]) == EXIT_SUCCESS

        assert "burst_camera_pipe Auto-scheduled" in capsys.readouterr().out
        assert cv2.imread(str(output), cv2.IMREAD_UNCHANGED).shape == (12, 24, 3)

    @pytest.mark.end_to_end
    def test_environment_override(self, small_burst_config, tmp_path, monkeypatch):
        monkeypatch.setenv("BGUBENCH_BURST__WIDTH", "16")
        output = tmp_path / "burst.png"

        assert main([str(output), "-c", str(small_burst_config)]) == EXIT_SUCCESS

        assert cv2.imread(str(output), cv2.IMREAD_UNCHANGED).shape == (12, 16, 3)
