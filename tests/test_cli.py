"""
CLI tests using click's CliRunner.

GitClient is patched where each command module imports it, so no real
repository is touched.
"""

import json
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from gittagger.cli import cli
from gittagger.domain import Commit
from gittagger.exceptions import GitCommandError, TagNotFoundError
from gittagger.infra.git_client import GitClient


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    monkeypatch.setenv('HOME', str(tmp_path))
    monkeypatch.delenv('GITTAGGER_CONFIG', raising=False)
    monkeypatch.delenv('GIT_POST_COMMIT', raising=False)
    return tmp_path


@pytest.fixture
def runner():
    return CliRunner()


def fake_git(messages=(), branches=("main",), current="main"):
    git = MagicMock(spec=GitClient)
    ids = [f"c{i}" for i in range(len(messages))]
    by_id = dict(zip(ids, messages))
    git.is_git_repo.return_value = True
    git.list_branches.return_value = list(branches)
    git.current_branch.return_value = current
    git.find_untagged.return_value = [Commit(id=i) for i in ids]
    git.message.side_effect = lambda commit_id: by_id[commit_id]
    git.short_id.side_effect = lambda commit_id: "h" + commit_id[1:]
    git.latest_tag.side_effect = TagNotFoundError("no semantic version tags found")
    git.tags_containing.return_value = set()
    return git


def json_lines(output):
    return [json.loads(line) for line in output.splitlines() if line.strip()]


class TestCLIBasics:
    """Tests for the command group itself."""

    def test_help(self, runner):
        result = runner.invoke(cli, ['--help'])
        assert result.exit_code == 0
        for name in ['tag', 'install', 'clean', 'branches', 'describe', 'config']:
            assert name in result.output

    def test_version(self, runner):
        result = runner.invoke(cli, ['--version'])
        assert result.exit_code == 0
        assert "gittagger" in result.output

    def test_unknown_option_is_usage_error(self, runner):
        result = runner.invoke(cli, ['tag', '--no-such-flag'])
        assert result.exit_code == 2

    def test_bad_config_file_exits_66(self, runner, isolated_env):
        config_dir = isolated_env / '.gittagger'
        config_dir.mkdir()
        (config_dir / 'config.json').write_text("{broken")

        result = runner.invoke(cli, ['branches'])

        assert result.exit_code == 66


class TestTagCommand:
    """Tests for `gittagger tag`."""

    def test_tag_explicit_branch(self, runner):
        git = fake_git(["feat: add x", "fix: bug", "chore: misc"])
        with patch('gittagger.commands.tag.GitClient', return_value=git):
            result = runner.invoke(cli, ['tag', '--branch', 'main'])

        assert result.exit_code == 0, result.output
        assert [c.args[0] for c in git.create_tag.call_args_list] == [
            "v0.1.0-h0", "v0.1.1-h1", "v0.1.2-h2"
        ]
        assert "Successfully tagged 3 commits" in result.output
        git.list_branches.assert_not_called()

    def test_tag_prompts_for_branch(self, runner):
        git = fake_git(["fix: a"], branches=["main", "develop"])
        with patch('gittagger.commands.tag.GitClient', return_value=git):
            result = runner.invoke(cli, ['tag'], input="2\n")

        assert result.exit_code == 0, result.output
        assert "Select a branch" in result.output
        git.find_untagged.assert_called_once_with("develop")

    def test_tag_prompt_rejects_out_of_range(self, runner):
        git = fake_git(["fix: a"], branches=["main", "develop"])
        with patch('gittagger.commands.tag.GitClient', return_value=git):
            result = runner.invoke(cli, ['tag'], input="5\n1\n")

        assert result.exit_code == 0, result.output
        git.find_untagged.assert_called_once_with("main")

    def test_tag_no_branches_exits_64(self, runner):
        git = fake_git(branches=[])
        with patch('gittagger.commands.tag.GitClient', return_value=git):
            result = runner.invoke(cli, ['tag'])

        assert result.exit_code == 64
        assert "No branches found" in result.output

    def test_hook_mode_uses_current_branch(self, runner, monkeypatch):
        monkeypatch.setenv('GIT_POST_COMMIT', 'true')
        git = fake_git(["fix: a"], branches=["main", "develop"], current="develop")
        with patch('gittagger.commands.tag.GitClient', return_value=git):
            result = runner.invoke(cli, ['tag'])

        assert result.exit_code == 0, result.output
        assert "non-interactive" in result.output
        git.list_branches.assert_not_called()
        git.find_untagged.assert_called_once_with("develop")

    def test_hook_mode_detached_head_exits_65(self, runner, monkeypatch):
        monkeypatch.setenv('GIT_POST_COMMIT', 'true')
        git = fake_git()
        git.current_branch.side_effect = GitCommandError("detached HEAD state")
        with patch('gittagger.commands.tag.GitClient', return_value=git):
            result = runner.invoke(cli, ['tag'])

        assert result.exit_code == 65

    def test_hook_mode_outside_repo_exits_65(self, runner, monkeypatch):
        monkeypatch.setenv('GIT_POST_COMMIT', 'true')
        git = fake_git()
        git.is_git_repo.return_value = False
        with patch('gittagger.commands.tag.GitClient', return_value=git):
            result = runner.invoke(cli, ['tag'])

        assert result.exit_code == 65
        assert "No Git repository found" in result.output

    def test_nothing_to_tag(self, runner):
        git = fake_git([])
        with patch('gittagger.commands.tag.GitClient', return_value=git):
            result = runner.invoke(cli, ['tag', '-b', 'main'])

        assert result.exit_code == 0
        assert "No untagged commits found." in result.output
        git.create_tag.assert_not_called()

    def test_dry_run(self, runner):
        git = fake_git(["feat: a"])
        with patch('gittagger.commands.tag.GitClient', return_value=git):
            result = runner.invoke(cli, ['tag', '-b', 'main', '--dry-run'])

        assert result.exit_code == 0
        assert "Would tag h0 with v0.1.0-h0" in result.output
        git.create_tag.assert_not_called()

    def test_json_output(self, runner):
        git = fake_git(["feat: a", "fix: b"])
        with patch('gittagger.commands.tag.GitClient', return_value=git):
            result = runner.invoke(cli, ['tag', '-b', 'main', '--json'])

        assert result.exit_code == 0
        lines = json_lines(result.output)
        assert [line['tag'] for line in lines[:2]] == ["v0.1.0-h0", "v0.1.1-h1"]
        assert lines[-1]['type'] == 'summary'
        assert lines[-1]['tagged'] == 2

    def test_partial_failure_exits_71(self, runner):
        git = fake_git(["feat: a", "fix: b"])
        git.create_tag.side_effect = [None, GitCommandError("git tag failed")]
        with patch('gittagger.commands.tag.GitClient', return_value=git):
            result = runner.invoke(cli, ['tag', '-b', 'main'])

        assert result.exit_code == 71
        assert "Failed to update" in result.output
        assert "were kept" in result.output

    def test_failure_before_any_tag_exits_65(self, runner):
        git = fake_git(["feat: a"])
        git.create_tag.side_effect = GitCommandError("git tag failed")
        with patch('gittagger.commands.tag.GitClient', return_value=git):
            result = runner.invoke(cli, ['tag', '-b', 'main'])

        assert result.exit_code == 65

    def test_unknown_branch_exits_65(self, runner):
        git = fake_git()
        git.find_untagged.side_effect = GitCommandError("git rev-list failed")
        with patch('gittagger.commands.tag.GitClient', return_value=git):
            result = runner.invoke(cli, ['tag', '-b', 'nope'])

        assert result.exit_code == 65


class TestBranchesCommand:
    """Tests for `gittagger branches`."""

    def test_branches_json(self, runner):
        git = fake_git(branches=["main", "develop"], current="develop")
        with patch('gittagger.commands.branches.GitClient', return_value=git):
            result = runner.invoke(cli, ['branches', '--json'])

        assert result.exit_code == 0
        assert json_lines(result.output) == [
            {'branch': "main", 'current': False},
            {'branch': "develop", 'current': True},
        ]

    def test_branches_table(self, runner):
        git = fake_git(branches=["main"])
        with patch('gittagger.commands.branches.GitClient', return_value=git):
            result = runner.invoke(cli, ['branches'])

        assert result.exit_code == 0
        assert "main" in result.output

    def test_branches_none_exits_64(self, runner):
        git = fake_git(branches=[])
        with patch('gittagger.commands.branches.GitClient', return_value=git):
            result = runner.invoke(cli, ['branches'])

        assert result.exit_code == 64


class TestDescribeCommand:
    """Tests for `gittagger describe`."""

    def test_describe_json(self, runner):
        git = fake_git(["release v5.0.0"])
        git.tags_containing.return_value = {"v5.0.0-h0"}
        with patch('gittagger.commands.describe.GitClient', return_value=git):
            result = runner.invoke(cli, ['describe', 'c0', '--json'])

        assert result.exit_code == 0
        data = json_lines(result.output)[0]
        assert data['short_id'] == "h0"
        assert data['increment'] == "explicit v5.0.0"
        assert data['reason'] == "explicit_version"
        assert data['tags'] == ["v5.0.0-h0"]

    def test_describe_untagged(self, runner):
        git = fake_git(["feat: a"])
        with patch('gittagger.commands.describe.GitClient', return_value=git):
            result = runner.invoke(cli, ['describe', 'c0'])

        assert result.exit_code == 0
        assert "minor" in result.output
        assert "untagged" in result.output

    def test_describe_bad_revision_exits_65(self, runner):
        git = fake_git()
        git.message.side_effect = GitCommandError("git show failed")
        with patch('gittagger.commands.describe.GitClient', return_value=git):
            result = runner.invoke(cli, ['describe', 'nope'])

        assert result.exit_code == 65


class TestHookCommands:
    """Tests for `gittagger install` and `gittagger clean`."""

    def test_install_and_clean(self, runner, tmp_path):
        repo = tmp_path / "repo"
        (repo / ".git" / "hooks").mkdir(parents=True)
        git = fake_git()
        git.toplevel.return_value = repo

        with patch('gittagger.commands.hook.GitClient', return_value=git):
            installed = runner.invoke(cli, ['install', '--executable', '/opt/bin/gittagger'])
            again = runner.invoke(cli, ['install', '--executable', '/opt/bin/gittagger'])
            cleaned = runner.invoke(cli, ['clean'])

        hook = repo / ".git" / "hooks" / "post-commit"
        assert installed.exit_code == 0, installed.output
        assert "installed" in installed.output
        assert again.exit_code == 0
        assert "already installed" in again.output
        assert cleaned.exit_code == 0
        assert "uninstalled" in cleaned.output
        assert not hook.exists()

    def test_install_outside_repo_exits_65(self, runner):
        git = fake_git()
        git.toplevel.side_effect = GitCommandError("git rev-parse failed")
        with patch('gittagger.commands.hook.GitClient', return_value=git):
            result = runner.invoke(cli, ['install'])

        assert result.exit_code == 65

    def test_install_uses_gittagger_on_path(self, runner, tmp_path):
        git = fake_git()
        git.toplevel.return_value = tmp_path
        with patch('gittagger.commands.hook.GitClient', return_value=git), \
                patch('gittagger.commands.hook.shutil.which', return_value="/usr/bin/gittagger"):
            result = runner.invoke(cli, ['install'])

        assert result.exit_code == 0, result.output
        hook = tmp_path / ".git" / "hooks" / "post-commit"
        assert '"/usr/bin/gittagger" tag' in hook.read_text()

    def test_install_without_executable_on_path_exits_72(self, runner, tmp_path):
        git = fake_git()
        git.toplevel.return_value = tmp_path
        with patch('gittagger.commands.hook.GitClient', return_value=git), \
                patch('gittagger.commands.hook.shutil.which', return_value=None):
            result = runner.invoke(cli, ['install'])

        assert result.exit_code == 72
        assert "--executable" in result.output
        assert not (tmp_path / ".git" / "hooks" / "post-commit").exists()

    def test_clean_without_hook_exits_72(self, runner, tmp_path):
        git = fake_git()
        git.toplevel.return_value = tmp_path
        with patch('gittagger.commands.hook.GitClient', return_value=git):
            result = runner.invoke(cli, ['clean'])

        assert result.exit_code == 72


class TestConfigCommands:
    """Tests for `gittagger config`."""

    def test_show(self, runner):
        result = runner.invoke(cli, ['config', 'show'])
        assert result.exit_code == 0
        config = json.loads(result.output)
        assert config['tagging']['default_baseline'] == "v0.0.0"

    def test_init_writes_file(self, runner, isolated_env):
        result = runner.invoke(cli, ['config', 'init', '--format', 'yaml'])

        assert result.exit_code == 0
        assert (isolated_env / '.gittagger' / 'config.yaml').exists()

    def test_init_does_not_overwrite(self, runner, isolated_env):
        runner.invoke(cli, ['config', 'init'])
        result = runner.invoke(cli, ['config', 'init'])

        assert result.exit_code == 0
        assert "already exists" in result.output

    def test_init_write_failure_exits_66(self, runner, isolated_env):
        (isolated_env / '.gittagger').write_text("not a directory")

        result = runner.invoke(cli, ['config', 'init'])

        assert result.exit_code == 66
        assert "Failed to write configuration" in result.output
        assert "Traceback" not in result.output
