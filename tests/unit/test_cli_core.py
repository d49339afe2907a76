import pytest

from refuel_radar.cli import parse_args


def test_parse_args_defaults():
    args = parse_args(["transform"])
    assert args.command == "transform"
    assert args.input == "./feeds"
    assert args.overlay_config_dir is None
    assert args.workers is None
    assert args.strict is False


def test_parse_args_accepts_overlay_config_dir_and_workers():
    args = parse_args(["transform", "--overlay-config-dir", "config/live", "--workers", "4"])
    assert args.overlay_config_dir == "config/live"
    assert args.workers == 4


def test_parse_args_rejects_non_positive_workers():
    with pytest.raises(SystemExit):
        parse_args(["transform", "--workers", "0"])
