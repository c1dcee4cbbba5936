import pytest
from typer.testing import CliRunner

from pixcache.cli import app


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def test_browser_path_prints_filter_url(runner, configs_dir):
    result = runner.invoke(
        app, ["browser-path", "a.jpg", "thumbnail", "--configs-dir", str(configs_dir)]
    )

    assert result.exit_code == 0, result.output
    assert "/media/cache/resolve/thumbnail/a.png" in result.output


def test_browser_path_unknown_filter_fails(runner, configs_dir):
    result = runner.invoke(
        app, ["browser-path", "a.jpg", "missing", "--configs-dir", str(configs_dir)]
    )

    assert result.exit_code == 1
    assert "Could not find configuration" in result.output


def test_remove(runner, configs_dir):
    result = runner.invoke(
        app,
        ["remove", "-p", "a.jpg", "-f", "banner", "--configs-dir", str(configs_dir)],
    )

    assert result.exit_code == 0, result.output
    assert "Removed" in result.output
    assert "banner" in result.output


def test_remove_everything(runner, configs_dir):
    result = runner.invoke(app, ["remove", "--configs-dir", str(configs_dir)])

    assert result.exit_code == 0, result.output
    assert "all paths" in result.output


def test_filters_lists_filter_sets(runner, configs_dir):
    result = runner.invoke(app, ["filters", "--configs-dir", str(configs_dir)])

    assert result.exit_code == 0, result.output
    assert "thumbnail" in result.output
    assert "banner" in result.output


def test_init_configs(runner, tmp_path):
    configs = tmp_path / "fresh"

    result = runner.invoke(app, ["init-configs", "--configs-dir", str(configs)])

    assert result.exit_code == 0, result.output
    assert (configs / "filters" / "default.yaml").exists()
    assert (configs / "resolvers" / "default.yaml").exists()

    again = runner.invoke(app, ["init-configs", "--configs-dir", str(configs)])
    assert again.exit_code == 1

    forced = runner.invoke(app, ["init-configs", "--overwrite", "--configs-dir", str(configs)])
    assert forced.exit_code == 0, forced.output


@pytest.mark.parametrize("command", [["browser-path", "a.jpg", "thumbnail"], ["remove"], ["filters"]])
def test_missing_config_fails_cleanly(runner, configs_dir, command):
    result = runner.invoke(app, [*command, "-c", "missing", "--configs-dir", str(configs_dir)])

    assert result.exit_code == 1
    assert "Config file not found" in result.output
    assert result.exception is None or isinstance(result.exception, SystemExit)


def test_invalid_config_fails_cleanly(runner, configs_dir):
    (configs_dir / "filters" / "broken.yaml").write_text(
        "filter_sets:\n  thumbnail:\n    quality: 1000\n"
    )

    result = runner.invoke(app, ["filters", "-c", "broken", "--configs-dir", str(configs_dir)])

    assert result.exit_code == 1
    assert "quality" in result.output
