"""Message, action and plugin data contracts shared with the host runtime.

Architectural role:
    Defines the minimal structural schema exchanged between a host agent
    runtime and the actions in this package. Hosts hand a `Memory` to the
    action, the action answers through a `HandlerCallback` with `Content`
    payloads that may carry `Attachment` records.

Determinism:
    Pure data containers. Identifiers default to fresh `uuid4` values, so
    instances built without explicit ids are not reproducible.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Protocol


class ModelClass(str, Enum):
    """Coarse model-size buckets resolved to concrete model names by settings."""

    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


@dataclass
class Attachment:
    """Structured media payload returned alongside a text response.

    Attributes:
        url: Remote URL or local file path of the media.
        title: Short human-readable label.
        source: Producer tag consumed by host clients.
        description: Longer text describing the media (the image prompt).
        text: Text alternative for clients that cannot render the media.
        content_type: MIME type of the media.
        id: Unique attachment identifier.
    """

    url: str
    title: str = ""
    source: str = ""
    description: str = ""
    text: str = ""
    content_type: str = "image/png"
    id: str = field(default_factory=lambda: str(uuid.uuid4()))


@dataclass
class Content:
    text: str = ""
    action: str | None = None
    attachments: list[Attachment] = field(default_factory=list)


@dataclass
class Memory:
    """One inbound message as handed over by the host."""

    content: Content
    user: str = "user"
    room_id: str | None = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))


State = dict[str, Any]

# Hosts may hand in plain functions or coroutine functions.
HandlerCallback = Callable[[Content], "Awaitable[Any] | Any"]


class RuntimeProtocol(Protocol):
    """Host surface consumed by actions and provider adapters."""

    def get_setting(self, key: str) -> str | None:
        ...


Validator = Callable[[RuntimeProtocol, Memory], Awaitable[bool]]
Handler = Callable[
    [RuntimeProtocol, Memory, "State | None", "dict[str, Any] | None", HandlerCallback],
    Awaitable[bool],
]


@dataclass
class Action:
    """Named, host-invoked unit of agent behaviour.

    Attributes:
        name: Canonical action name used by hosts and model output.
        similes: Alternative names the host may resolve to this action.
        description: One-line summary presented to the host's planner.
        validate: Async predicate deciding whether the action is offered.
        handler: Async callable performing the action, returning success.
        examples: Conversation snippets (lists of user/content dicts).
        suppress_initial_message: Host should not send its own reply first.
    """

    name: str
    description: str
    validate: Validator
    handler: Handler
    similes: list[str] = field(default_factory=list)
    examples: list[list[dict[str, Any]]] = field(default_factory=list)
    suppress_initial_message: bool = False

    def matches(self, name: str) -> bool:
        wanted = name.strip().upper()
        return wanted == self.name.upper() or wanted in {s.upper() for s in self.similes}


@dataclass
class Plugin:
    name: str
    description: str
    actions: list[Action] = field(default_factory=list)
    evaluators: list[Any] = field(default_factory=list)
    providers: list[Any] = field(default_factory=list)
