import pytest

from gridpath.app.config import ViewerConfig, as_dict, resolve_config


def test_defaults():
    cfg = resolve_config([], {})
    assert cfg == ViewerConfig()
    assert (cfg.cols, cfg.rows) == (25, 20)
    assert as_dict(cfg)["steps_per_sec"] == 8


def test_environment_values():
    cfg = resolve_config([], {"GRIDPATH_COLS": "30", "GRIDPATH_ALGO": "Dijkstra",
                              "GRIDPATH_LOG_LEVEL": "debug"})
    assert cfg.cols == 30
    assert cfg.algo == "Dijkstra"
    assert cfg.log_level == "DEBUG"


def test_cli_beats_environment():
    cfg = resolve_config(["--rows=12", "--speed=20", "--selection=scan"],
                         {"GRIDPATH_ROWS": "40"})
    assert cfg.rows == 12
    assert cfg.steps_per_sec == 20
    assert cfg.selection == "scan"


@pytest.mark.parametrize("argv", [
    ["--cols=abc"],
    ["--cols=0"],
    ["--speed=-3"],
    ["--algo=greedy"],
    ["--selection=fib"],
    ["--log-level=LOUD"],
])
def test_bad_values(argv):
    with pytest.raises(ValueError):
        resolve_config(argv, {})


def test_unrelated_arguments_ignored():
    cfg = resolve_config(["--verbose", "map.json"], {"HOME": "/tmp"})
    assert cfg == ViewerConfig()
