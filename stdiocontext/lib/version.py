from __future__ import annotations

import os
import subprocess


def build_id() -> str:
    """
    Returns the stdiocontext commit id if running from a git checkout.
    """
    root_dir = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
    git_path = os.path.join(root_dir, ".git")
    # Installed into site-packages, there is no checkout to ask
    if not os.path.exists(git_path):
        return ""

    try:
        cmd = ["git", "--git-dir", git_path, "rev-parse", "--short", "HEAD"]

        commit_id = subprocess.check_output(cmd, stderr=subprocess.STDOUT)

        return "build: %s" % commit_id.decode("utf-8").strip("\n")

    except (OSError, subprocess.CalledProcessError):
        # OSError -> no git in $PATH
        # CalledProcessError -> git return code != 0
        return ""


__version__ = "0.1.0"

b_id = build_id()

if b_id:
    __version__ += f" {b_id}"
