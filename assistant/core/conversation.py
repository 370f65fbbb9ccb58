from __future__ import annotations

"""Turn a client-supplied chat history into a transcript a provider accepts.

The frontend owns the history and sends it whole with every chat request, so
nothing here is kept between calls.
"""

from typing import Any, List, Mapping, Sequence

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage

from assistant.core.errors import ValidationError


CLIENT_ROLES = ("user", "model")


def _is_eligible(item: Any) -> bool:
    if not isinstance(item, Mapping):
        return False
    text = item.get("text")
    return item.get("role") in CLIENT_ROLES and isinstance(text, str) and bool(text.strip())


def to_lc_messages(history: Sequence[Any]) -> List[BaseMessage]:
    messages: List[BaseMessage] = []
    for item in history or []:
        if not _is_eligible(item):
            continue
        if item["role"] == "user":
            messages.append(HumanMessage(content=item["text"]))
        else:
            messages.append(AIMessage(content=item["text"]))
    return messages


def normalize_conversation(history: Sequence[Any]) -> List[BaseMessage]:
    """Filter out unusable entries, then trim the head until a user turn leads.

    Order is otherwise preserved as submitted.
    """
    messages = to_lc_messages(history)
    if not messages:
        raise ValidationError("No valid messages provided")

    # Providers require the transcript to open with the user.
    while messages and not isinstance(messages[0], HumanMessage):
        messages.pop(0)

    if not messages:
        raise ValidationError("Conversation must include a user message")
    return messages
