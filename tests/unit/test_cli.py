"""Unit tests for cli.py."""
import json

import pytest
from click.testing import CliRunner

from streamvariant.cli import describe_variant, main
from streamvariant import StreamOutputVariant


def test_cli_missing_source(tmp_path):
    """Test CLI with missing source file."""
    runner = CliRunner()
    result = runner.invoke(main, [str(tmp_path / "nonexistent.json")])
    assert result.exit_code == 2
    assert "Invalid value" in result.output


def test_cli_variant_list(variant_file):
    """Test CLI resolving a list of variants from a file."""
    runner = CliRunner()
    result = runner.invoke(main, [str(variant_file), "--log-level", "ERROR"])

    assert result.exit_code == 0
    output = json.loads(result.output)
    assert len(output) == 2
    assert output[0]["scaledWidth"] == 640
    assert output[0]["audioPassthrough"] is True
    assert output[0]["effective"] == {
        "framerate": 24,
        "encoderPreset": "veryfast",
        "cpuUsageLevel": 3,
        "audioPassthrough": True,
    }
    assert output[1]["videoPassthrough"] is True
    assert output[1]["effective"]["framerate"] == 0
    assert output[1]["effective"]["encoderPreset"] == ""


def test_cli_stdin_single_variant():
    """Test CLI reading one variant from stdin."""
    runner = CliRunner()
    result = runner.invoke(
        main,
        ["--no-effective", "--log-level", "ERROR"],
        input='{"videoBitrate": 2000, "framerate": 0}'
    )

    assert result.exit_code == 0
    output = json.loads(result.output)
    assert "effective" not in output
    assert output["framerate"] == 24
    assert output["videoPassthrough"] is False


def test_cli_decode_error():
    """Test CLI reporting a wrongly typed field."""
    runner = CliRunner()
    result = runner.invoke(main, ["-"], input='{"cpuUsageLevel": "bad"}')

    assert result.exit_code == 1
    assert "Error: Field 'cpuUsageLevel' must be an integer, got string" in result.output


def test_cli_decode_error_in_list():
    """Test CLI naming the failing variant in a list."""
    runner = CliRunner()
    result = runner.invoke(main, input='[{"videoBitrate": 1000}, {"audioPassthrough": "no"}]')

    assert result.exit_code == 1
    assert "Variant 1: Field 'audioPassthrough'" in result.output


def test_cli_invalid_json():
    """Test CLI with unparsable input."""
    runner = CliRunner()
    result = runner.invoke(main, input="{not json")

    assert result.exit_code == 1
    assert "Error: Invalid JSON document" in result.output


def test_cli_invalid_utf8(tmp_path):
    """Test CLI with a source file that is not valid UTF-8."""
    source = tmp_path / "broken.json"
    source.write_bytes(b'{"encoderPreset": "\xff"}')

    runner = CliRunner()
    result = runner.invoke(main, [str(source)])

    assert result.exit_code == 1
    assert "Error: Invalid JSON document" in result.output


def test_cli_configures_logging(variant_file, tmp_path, mocker):
    """Test CLI passes logging options through."""
    mock_setup = mocker.patch("streamvariant.cli.setup_logging")
    log_file = tmp_path / "variants.log"

    runner = CliRunner()
    result = runner.invoke(
        main, [str(variant_file), "--log-level", "debug", "--log-file", str(log_file)]
    )

    assert result.exit_code == 0
    mock_setup.assert_called_once_with("DEBUG", str(log_file))


@pytest.mark.parametrize("effective", [True, False])
def test_describe_variant(transcoded_variant, effective):
    """Test describing a variant with and without effective values."""
    data = describe_variant(transcoded_variant, effective)
    assert ("effective" in data) is effective
    if effective:
        assert data["effective"]["cpuUsageLevel"] == 3
        assert data["effective"]["audioPassthrough"] is False


def test_describe_variant_unknown_preset():
    """Test unknown presets show as the unspecified level."""
    variant = StreamOutputVariant(video_bitrate=800, encoder_preset="slow")
    assert describe_variant(variant)["effective"]["cpuUsageLevel"] == 0
