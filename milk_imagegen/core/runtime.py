"""Minimal agent runtime hosting plugin actions.

Architectural role:
    Stands in for the surrounding agent framework: resolves settings, keeps the
    registered plugins and dispatches one action per request.

Dispatch model:
    `run_action` resolves an action by name or simile, awaits its `validate`
    predicate and only then awaits its `handler`. A failed validation means the
    action is not offered, so the handler is never called.

Determinism:
    Action lookup is deterministic in registration order.
"""

from __future__ import annotations

import logging
import os
from typing import Any

from milk_imagegen.core.types import Action, HandlerCallback, Memory, Plugin, State

logger = logging.getLogger(__name__)


class AgentRuntime:
    """Settings lookup plus action registry for one agent."""

    def __init__(self, settings: dict[str, str] | None = None, plugins: list[Plugin] | None = None) -> None:
        self.settings = dict(settings or {})
        self.plugins: list[Plugin] = []
        for plugin in plugins or []:
            self.register_plugin(plugin)

    def get_setting(self, key: str) -> str | None:
        """Return an explicit setting, falling back to the environment."""
        value = self.settings.get(key)
        if value:
            return value
        return os.getenv(key) or None

    def register_plugin(self, plugin: Plugin) -> None:
        self.plugins.append(plugin)
        logger.debug("Registered plugin %s (%d action(s))", plugin.name, len(plugin.actions))

    @property
    def actions(self) -> list[Action]:
        return [action for plugin in self.plugins for action in plugin.actions]

    def find_action(self, name: str) -> Action | None:
        for action in self.actions:
            if action.matches(name):
                return action
        return None

    async def run_action(
        self,
        name: str,
        message: Memory,
        callback: HandlerCallback,
        state: State | None = None,
        options: dict[str, Any] | None = None,
    ) -> bool:
        """Validate and run one action.

        Returns:
            Handler result, or `False` when no action matches or validation fails.

        Raises:
            Whatever the handler raises.
        """
        action = self.find_action(name)
        if action is None:
            logger.warning("No action registered for %s", name)
            return False

        if not await action.validate(self, message):
            logger.info("Action %s is not available for message %s", action.name, message.id)
            return False

        return await action.handler(self, message, state, options, callback)
