"""Tests for CLI argument parsing and command handlers."""

import cv2
import pytest

from scandeskew.cli import _config_from_args, build_parser, main
from scandeskew.services.image_buffer import load_image
from scandeskew.services.skew import rotate_image

from synthetic import make_stripes


@pytest.fixture
def tilted_file(tmp_path):
    path = tmp_path / "tilted.png"
    cv2.imwrite(str(path), rotate_image(make_stripes(), 4.0))
    return path


class TestBuildParser:
    """Tests for build_parser."""

    def test_deskew_defaults(self):
        args = build_parser().parse_args(["deskew", "in.png", "-o", "out.png"])
        assert args.command == "deskew"
        assert args.method == "search"
        assert args.preprocessing == "simple"
        assert args.min_angle == -45.0
        assert args.max_angle == 45.0
        assert args.step == 0.5
        assert args.verbose is False

    def test_deskew_requires_output(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["deskew", "in.png"])

    def test_invalid_method_rejected(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["angle", "in.png", "--method", "fourier"])

    def test_search_options(self):
        args = build_parser().parse_args(
            [
                "-v",
                "scores",
                "in.png",
                "--method",
                "hough",
                "--preprocessing",
                "enhanced",
                "--min-angle",
                "-10",
                "--max-angle",
                "10",
                "--step",
                "0.25",
                "--ink-threshold",
                "100",
                "--roi-fraction",
                "0.8",
            ]
        )
        config = _config_from_args(args)
        assert args.verbose is True
        assert config.method == "hough"
        assert config.preprocessing == "enhanced"
        assert (config.min_angle, config.max_angle, config.step) == (-10.0, 10.0, 0.25)
        assert config.ink_threshold == 100
        assert config.roi_fraction == 0.8


class TestMain:
    """Tests for the CLI entry point and command handlers."""

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "usage" in capsys.readouterr().out

    def test_missing_input(self, tmp_path, capsys):
        assert main(["angle", str(tmp_path / "missing.png")]) == 1
        assert "not found" in capsys.readouterr().err

    def test_angle_command(self, tilted_file, capsys):
        assert main(["angle", str(tilted_file), "--min-angle", "-10", "--max-angle", "10"]) == 0
        assert abs(float(capsys.readouterr().out.strip()) + 4.0) <= 0.5

    def test_deskew_command(self, tilted_file, tmp_path, capsys):
        output = tmp_path / "out" / "straight.png"
        code = main(["deskew", str(tilted_file), "-o", str(output), "--step", "1"])
        assert code == 0
        assert output.exists()
        assert load_image(output).shape == (400, 400, 3)
        assert "Rotated" in capsys.readouterr().out

    def test_scores_command(self, tilted_file, capsys):
        code = main(["scores", str(tilted_file), "--min-angle", "-2", "--max-angle", "2", "--step", "1"])
        assert code == 0
        lines = capsys.readouterr().out.strip().splitlines()
        assert len(lines) == 6  # header + 5 candidates

    def test_invalid_config_reported(self, tilted_file, capsys):
        assert main(["angle", str(tilted_file), "--step", "0"]) == 1
        assert "Error: Configuration error for 'step'" in capsys.readouterr().err

    def test_unwritable_output_reported(self, tilted_file, tmp_path, capsys):
        output = tmp_path / "straight.unknownext"
        assert main(["deskew", str(tilted_file), "-o", str(output)]) == 1
        assert capsys.readouterr().err.startswith("Error:")
