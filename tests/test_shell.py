import shutil

import pytest

from clam.cli.shell import SubprocessShell

pytestmark = pytest.mark.skipif(shutil.which("bash") is None, reason="bash not available")


@pytest.mark.asyncio
async def test_exec_captures_output_and_exit_code(tmp_path) -> None:
    result = await SubprocessShell().exec("echo hello; echo oops >&2; exit 3", cwd=str(tmp_path))
    assert result.stdout == "hello\n"
    assert result.stderr == "oops\n"
    assert result.exit_code == 3
    assert result.signal is None


@pytest.mark.asyncio
async def test_exec_runs_in_cwd(tmp_path) -> None:
    (tmp_path / "marker.txt").write_text("")
    result = await SubprocessShell().exec("ls", cwd=str(tmp_path))
    assert "marker.txt" in result.stdout


@pytest.mark.asyncio
async def test_exec_timeout_kills_process() -> None:
    result = await SubprocessShell(timeout_seconds=0.2).exec("sleep 5")
    assert result.exit_code == -1
    assert result.signal == "SIGKILL"
    assert "timed out" in result.stderr
