import os
import subprocess
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]


def subsets(*sets) -> list[frozenset]:
    """Build a list of frozensets from literal collections."""
    return [frozenset(s) for s in sets]


def run_cli(args: list[str], cwd=None) -> subprocess.CompletedProcess:
    """Run the python_powerset CLI with the given arguments, without checking the exit code."""
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(
        p for p in [str(ROOT_DIR), env.get("PYTHONPATH")] if p)
    cmd = [sys.executable, "-m", "python_powerset.main"] + args
    return subprocess.run(
        cmd,
        cwd=cwd if cwd is not None else ROOT_DIR,
        env=env,
        capture_output=True,
        text=True)
