"""
app/cli.py

Command-line chat interface over the same turn orchestrator as the HTTP API.
- Reads user input until 'exit'/'quit' or EOF
- Each line is one turn on a single session key
- Model failures are printed and the loop continues

Environment:
- CLI_SESSION_ID: session key to use (default "cli")
- LOG_LEVEL: logging level (default WARNING so logs do not interleave with the chat)
"""

import logging
import os

from dotenv import load_dotenv

from assistant.errors import ModelProviderFailure
from assistant.gateway import TravelGateway
from assistant.orchestrator import ChatOrchestrator
from assistant.session import SessionStore
from util.config import Settings


EXIT_WORDS = {"exit", "quit", "bye"}


def build_orchestrator(settings=None):
    settings = settings or Settings.from_env()
    store = SessionStore(ttl_seconds=settings.session_ttl_seconds, max_sessions=settings.max_sessions)
    return ChatOrchestrator(store, TravelGateway(settings), settings=settings)


def main(orchestrator=None, input_fn=input, output_fn=print):
    load_dotenv()
    logging.basicConfig(level=os.getenv("LOG_LEVEL", "WARNING").upper())
    orchestrator = orchestrator or build_orchestrator()
    session_id = os.getenv("CLI_SESSION_ID", "cli")

    output_fn("Travel Assistant (type 'exit' to quit)\n")
    while True:
        try:
            raw = input_fn("You: ")
        except (EOFError, KeyboardInterrupt):
            output_fn("Bye!")
            return
        user = raw.strip()
        if not user:
            continue
        if user.lower() in EXIT_WORDS:
            output_fn("Bye!")
            return
        try:
            reply = orchestrator.handle_turn(session_id, user)
        except ModelProviderFailure as exc:
            output_fn(f"Error: {exc}\n")
            continue
        output_fn(f"Assistant: {reply}\n")


if __name__ == "__main__":
    main()
