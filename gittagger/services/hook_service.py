"""
Post-commit hook management for gittagger.

Installs a block of shell lines into the repository's post-commit hook
that re-runs `gittagger tag` after every commit. The block exports a
marker variable so the re-invoked tagger knows it is running from the
hook and must not prompt.

Existing hook content is preserved: installing appends the block,
cleaning removes only the block.
"""

import logging
import os
import re
import stat
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Union

from ..exceptions import HookError

logger = logging.getLogger(__name__)

SHEBANG = "#!/bin/sh"
RUN_COMMENT = "# Execute the versioning tool"
RUN_LINE_PATTERN = re.compile(r'^".*" tag$')


@dataclass(frozen=True)
class HookConfig:
    """Where the hook lives and how the block is marked."""
    hook_path: str = ".git/hooks/post-commit"
    marker_env: str = "GIT_POST_COMMIT"
    header: str = "# Added by gittagger"

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> 'HookConfig':
        hooks = config.get('hooks', {})
        defaults = cls()
        return cls(
            hook_path=hooks.get('hook_path', defaults.hook_path),
            marker_env=hooks.get('marker_env', defaults.marker_env),
            header=hooks.get('header', defaults.header),
        )


class HookResult(Enum):
    """What install/clean did to the hook file."""
    INSTALLED = "installed"
    APPENDED = "appended"
    UNCHANGED = "unchanged"
    REMOVED = "removed"


def convert_to_unix_path(path: str) -> str:
    """
    Convert a Windows path to the form a POSIX shell (WSL) understands.

    Examples:
        convert_to_unix_path("C:\\tools\\gittagger.exe") -> "/mnt/c/tools/gittagger.exe"
        convert_to_unix_path("/usr/bin/gittagger")      -> "/usr/bin/gittagger"
    """
    if len(path) > 1 and path[1] == ':':
        path = "/mnt/" + path[0].lower() + path[2:]
    return path.replace('\\', '/')


class HookManager:
    """
    Installs and removes the gittagger post-commit hook block.

    Example:
        manager = HookManager(Path("/path/to/repo"), HookConfig())
        manager.install("/usr/local/bin/gittagger")
        manager.clean()
    """

    def __init__(self, repo_root: Union[str, Path], config: HookConfig = HookConfig()):
        """
        Initialize HookManager.

        Args:
            repo_root: Repository root directory
            config: Hook location and marker settings
        """
        self.repo_root = Path(repo_root)
        self.config = config

    @property
    def hook_file(self) -> Path:
        return self.repo_root / self.config.hook_path

    def generate_content(self, executable_path: Union[str, Path]) -> str:
        """Hook block that runs the given executable with the marker set."""
        executable = convert_to_unix_path(str(executable_path))
        return (
            f"{self.config.header}\n"
            f"\n"
            f"export {self.config.marker_env}=\"true\"\n"
            f"\n"
            f"{RUN_COMMENT}\n"
            f"\"{executable}\" tag\n"
        )

    def _read(self) -> str:
        try:
            return self.hook_file.read_text()
        except OSError as e:
            raise HookError(f"failed to read post-commit hook: {e}", self.hook_file) from e

    def _write(self, content: str) -> None:
        try:
            self.hook_file.parent.mkdir(parents=True, exist_ok=True)
            self.hook_file.write_text(content)
            mode = self.hook_file.stat().st_mode
            os.chmod(self.hook_file, mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        except OSError as e:
            raise HookError(f"failed to write post-commit hook: {e}", self.hook_file) from e

    def is_installed(self) -> bool:
        """True if the hook file carries the gittagger block header."""
        if not self.hook_file.exists():
            return False
        return any(line.strip() == self.config.header for line in self._read().splitlines())

    def install(self, executable_path: Union[str, Path]) -> HookResult:
        """
        Install the hook block, creating the hook file if needed.

        Args:
            executable_path: gittagger executable the hook should run

        Returns:
            HookResult.INSTALLED, APPENDED, or UNCHANGED

        Raises:
            HookError: the hook file could not be read or written
        """
        executable = Path(executable_path).expanduser().absolute()
        block = self.generate_content(executable)

        if self.hook_file.exists():
            logger.info("A post-commit hook already exists. Checking for required content...")
            existing = self._read()
            if block.strip() in existing:
                logger.info("The post-commit hook already contains the necessary content.")
                return HookResult.UNCHANGED

            if not existing.endswith('\n'):
                existing += '\n'
            self._write(existing + '\n' + block)
            logger.info(f"Appended gittagger block to {self.hook_file}")
            return HookResult.APPENDED

        logger.info("No existing post-commit hook found. Installing new hook.")
        self._write(f"{SHEBANG}\n\n{block}")
        return HookResult.INSTALLED

    def _block_length(self, lines: List[str], start: int) -> int:
        """
        Number of lines of the generated block starting at lines[start].

        The header is always consumed; the lines after it are consumed
        only while they follow generate_content() in order, ending at the
        first run line.
        """
        expected = ["", f"export {self.config.marker_env}=\"true\"", "", RUN_COMMENT]
        length = 1
        for want in expected:
            index = start + length
            if index >= len(lines) or lines[index].strip() != want:
                return length
            length += 1
        index = start + length
        if index < len(lines) and RUN_LINE_PATTERN.match(lines[index].strip()):
            length += 1
        return length

    def clean(self) -> HookResult:
        """
        Remove the gittagger block and keep every other line.

        A hook file left with nothing but the shebang is deleted.

        Returns:
            HookResult.REMOVED, or UNCHANGED if no block was present

        Raises:
            HookError: the hook file does not exist or cannot be rewritten
        """
        if not self.hook_file.exists():
            raise HookError(f"no post-commit hook at {self.hook_file}", self.hook_file)
        if not self.is_installed():
            return HookResult.UNCHANGED

        lines = self._read().splitlines()
        kept = []
        i = 0
        while i < len(lines):
            if lines[i].strip() == self.config.header:
                i += self._block_length(lines, i)
                continue
            kept.append(lines[i])
            i += 1

        remaining = "\n".join(kept).strip()
        if remaining in ("", SHEBANG):
            try:
                self.hook_file.unlink()
            except OSError as e:
                raise HookError(f"failed to remove post-commit hook: {e}", self.hook_file) from e
            logger.info(f"Removed {self.hook_file}")
        else:
            self._write("\n".join(kept).rstrip('\n') + '\n')
            logger.info(f"Removed gittagger block from {self.hook_file}")

        return HookResult.REMOVED
