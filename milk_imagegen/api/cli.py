"""
Minimal interactive CLI entrypoint for the milk image-generation plugin.

Architectural role:
- Provides a terminal-only host over `AgentRuntime`.
- Delegates every prompt to the `MILK_IMAGE_GENERATION` action.

Request lifecycle (per user turn):
1. Read a single line from stdin.
2. Handle local control commands (`exit`/`quit`).
3. Wrap the line in a `Memory` and run the action.
4. Print each callback payload (text plus attachment URLs) as it arrives.

Error handling strategy:
- Missing credential is reported once at startup (exit status 1).
- EOF and keyboard interrupts end the session without traceback output.
- Prompt-generation errors are logged and the loop continues.
"""

import asyncio
import logging
import os
import sys

from milk_imagegen.core.runtime import AgentRuntime
from milk_imagegen.core.types import Content, Memory
from milk_imagegen.plugin import milk_image_generation_plugin

ACTION_NAME = "MILK_IMAGE_GENERATION"

logger = logging.getLogger(__name__)


def print_content(content: Content) -> None:
    """Render one callback payload to stdout."""
    print(content.text)
    for attachment in content.attachments:
        print(f"  [{attachment.title}] {attachment.url}")
        print(f"  prompt: {attachment.description}")


def main():
    """
    Run the interactive terminal session.

    Returns:
        Process exit status.
    """
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "WARNING").upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    runtime = AgentRuntime(plugins=[milk_image_generation_plugin])
    action = runtime.find_action(ACTION_NAME)

    if not asyncio.run(action.validate(runtime, Memory(content=Content()))):
        print("OPENAI_API_KEY is not set. Add it to your environment or .env file.")
        return 1

    print("Milk image generation started. (Type 'exit' to quit)\n")
    print("-" * 60)

    while True:

        try:
            request = input("Describe an image: ").strip()

        except EOFError:
            print()
            break

        except KeyboardInterrupt:
            print("\nInterrupted.")
            break

        if not request:
            continue

        if request.lower() in ("exit", "quit"):
            print("Shutting down.")
            break

        message = Memory(content=Content(text=request))
        try:
            asyncio.run(runtime.run_action(ACTION_NAME, message, print_content))
        except Exception:
            logger.exception("Image action failed")
            print("Sorry, image generation failed")

        print("\n" + "-" * 60 + "\n")

    return 0


if __name__ == "__main__":
    sys.exit(main())
