import subprocess
from typing import List

from utils.errors import GitAIException

# Field layout consumed by core.history.parser: hash|author|subject|body|date
LOG_FORMAT = "%H|%an|%s|%b|%ad%x00"
RECORD_SEPARATOR = "\x00"
NO_COMMITS_MESSAGE = "does not have any commits"


def run_git(*args: str, check: bool = True) -> subprocess.CompletedProcess:
    """
    Runs `git <args>` in the current directory and captures its UTF-8 output.

    Raises:
        GitAIException: If git is not installed.
        subprocess.CalledProcessError: If `check` is set and git exits with a non-zero status.
    """
    try:
        return subprocess.run(["git", *args], capture_output=True, encoding="utf-8", check=check)
    except FileNotFoundError:
        raise GitAIException("Git is not installed or not in PATH.")


def is_git_repository() -> bool:
    try:
        return run_git("rev-parse", "--is-inside-work-tree").stdout.strip() == "true"
    except (subprocess.CalledProcessError, GitAIException):
        return False


def has_staged_changes() -> bool:
    # --quiet exits with 1 when the index differs from HEAD
    return run_git("diff", "--cached", "--quiet", check=False).returncode != 0


def get_current_branch_name() -> str:
    try:
        return run_git("rev-parse", "--abbrev-ref", "HEAD").stdout.strip()
    except subprocess.CalledProcessError as e:
        raise GitAIException(f"Failed to get current branch name: {e.stderr}") from e


def get_staged_diff() -> str:
    """
    Returns the unified diff of the staged changes, empty when nothing is staged.

    Raises:
        GitAIException: If git is missing or the command fails.
    """
    result = run_git("diff", "--cached", check=False)
    if result.returncode not in (0, 1):
        raise GitAIException(f"Failed to get git diff: {result.stderr}")
    return result.stdout


def get_commit_log(limit: int) -> List[str]:
    """
    Returns the last `limit` commits as raw pipe-delimited records, newest first.

    Records are NUL-separated in git's output so that multi-line bodies stay
    inside their own record. A repository without commits yields an empty list.

    Raises:
        GitAIException: If git is missing or the command fails.
    """
    try:
        result = run_git("log", f"-n{limit}", f"--pretty=format:{LOG_FORMAT}", "--date=iso")
    except subprocess.CalledProcessError as e:
        if NO_COMMITS_MESSAGE in (e.stderr or ""):
            return []
        raise GitAIException(f"Failed to get git log: {e.stderr}") from e

    records = (record.strip() for record in result.stdout.split(RECORD_SEPARATOR))
    return [record for record in records if record]
