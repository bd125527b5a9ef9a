import pytest

from ethkit import cli


def test_get_version_default():
    assert cli.get_version() == "0.1.3"


def test_get_version_with_prerelease(monkeypatch):
    monkeypatch.setattr(cli, "VERSION_PRERELEASE", "dev")
    assert cli.get_version() == "0.1.3-dev"


def test_get_version_with_prerelease_and_commit(monkeypatch):
    monkeypatch.setattr(cli, "VERSION_PRERELEASE", "dev")
    monkeypatch.setattr(cli, "GIT_COMMIT", "abc123")
    assert cli.get_version() == "0.1.3-dev (abc123)"


def test_commit_ignored_without_prerelease(monkeypatch):
    monkeypatch.setattr(cli, "GIT_COMMIT", "abc123")
    assert cli.get_version() == "0.1.3"


def test_version_command_prints_version(capsys):
    code = cli.main(["version"])
    out = capsys.readouterr().out
    assert code == 0
    assert out.strip() == cli.get_version()


def test_ens_command_returns_zero(capsys):
    assert cli.main(["ens"]) == 0
    assert capsys.readouterr().out == ""


def test_no_arguments_prints_usage(capsys):
    code = cli.main([])
    err = capsys.readouterr().err
    assert code == 127
    assert "version" in err
    assert "Display the Ethgo version" in err


def test_unknown_command(capsys):
    code = cli.main(["nope"])
    err = capsys.readouterr().err
    assert code == 127
    assert "Interact with ens" in err


@pytest.mark.parametrize("flag", ["-h", "--help"])
def test_top_level_help(flag, capsys):
    code = cli.main([flag])
    err = capsys.readouterr().err
    assert code == 0
    assert "ens" in err


def test_command_help(capsys):
    code = cli.main(["version", "--help"])
    captured = capsys.readouterr()
    assert code == 0
    assert "Usage: ethgo version" in captured.err
    assert captured.out == ""


def test_ens_help(capsys):
    code = cli.main(["ens", "-h"])
    err = capsys.readouterr().err
    assert code == 0
    assert "Usage: ethgo ens" in err