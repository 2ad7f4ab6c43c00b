from __future__ import annotations

from github import Auth, Github


def get_client(token: str) -> Github:
    return Github(auth=Auth.Token(token))


def get_repo(gh: Github, owner: str, repo: str):
    return gh.get_repo(f"{owner}/{repo}")
