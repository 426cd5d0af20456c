"""Slack mention markup removal."""

import re

# Slack encodes user mentions as <@U012ABCDEF>.
MENTION_PATTERN = re.compile(r"<@[A-Za-z0-9]+>")


def strip_mentions(text: str) -> str:
    """Remove every ``<@ID>`` mention from ``text``.

    Surrounding whitespace is left alone, so ``"<@U1> hi"`` becomes ``" hi"``.
    Substitution repeats until nothing matches: removing the inner mention of
    ``"<<@U1>@U2>>"`` leaves a new mention behind.
    """
    while True:
        text, count = MENTION_PATTERN.subn("", text)
        if not count:
            return text
