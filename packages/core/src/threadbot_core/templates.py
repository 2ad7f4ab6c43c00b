"""User-visible comment templates.

Wording is free to change; what matters is that every turn state has its
message: acknowledgment, signed answer, signed help, welcome and apology.
Apologies never include error details.
"""

ANSWER_SIGNATURE = (
    "\n\n---\n*I am an AI assistant. My answer is based on the repository's content "
    "and may not be perfect. Please verify important information.*"
)

FOLLOW_UP_SIGNATURE = (
    "\n\n---\n*I am an AI assistant. My answer is based on the repository's content and may not be perfect.*"
)

HELP_SIGNATURE = "\n\n---\n*I am an AI assistant for this repository.*"


def discussion_acknowledgment(user: str, title: str) -> str:
    return (
        f"Hello @{user}! I'm an AI assistant for this repository. 🤖\n\n"
        "I'm currently analyzing the repository's documentation and code to find an answer "
        f'to your question: **"{title}"**\n\n'
        "I'll be back with a response shortly."
    )


def follow_up_acknowledgment(user: str) -> str:
    return f"Thanks for the follow-up, @{user}! I'm looking into that for you. 🤖"


def discussion_apology(user: str) -> str:
    return (
        f"Sorry, @{user}. I encountered an error while trying to answer your question. "
        "A human collaborator will have to take a look."
    )


def follow_up_apology(user: str) -> str:
    return f"Sorry, @{user}. I encountered an error while trying to answer your follow-up question."


def help_message(user: str, handle: str) -> str:
    return (
        f"Hi @{user}! Here is how I can help in this repository's discussions:\n\n"
        "- **New discussions:** I read every new discussion and reply with an answer "
        "based on the repository's documentation and code.\n"
        f"- **Follow-up questions:** mention me with `@{handle}` followed by your question "
        "in any discussion comment and I'll answer it using the discussion as context.\n"
        f"- **This message:** mention me with `@{handle} help`.\n\n"
        "I can make mistakes, so please double-check anything important." + HELP_SIGNATURE
    )


def welcome_message(user: str, owner: str, repo: str) -> str:
    return f"""Hi @{user}! 👋 Welcome to the `{repo}` repository, and thank you so much for your contribution! 🎉

We really appreciate you taking the time to submit this pull request. A maintainer will review it as soon as possible.

In the meantime, please make sure you've:
- Read our [CONTRIBUTING.md](https://github.com/{owner}/{repo}/blob/HEAD/CONTRIBUTING.md) guide (if it exists).
- Added or updated tests for your changes.
- Updated any relevant documentation.

Thanks again!
"""
