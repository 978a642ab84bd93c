# Role: Local developer CLI to interact with ChatOrchestrator without the web API.
# Useful for trying prompts by hand and seeing debug logs in the terminal.

from __future__ import annotations
import uuid

import backend.config
backend.config.load_env()

from backend.core.chat_orchestrator import ChatOrchestrator


def _new_session_id() -> str:
    return str(uuid.uuid4())


def main() -> None:
    # 1) Create ChatOrchestrator
    # 2) Maintain a session_id across turns
    # 3) Route user input -> ChatOrchestrator -> print reply (+ matched posts)
    print("Ceylon Trails Chat CLI")
    print("Commands: /new (new session), /session (show session_id), /clear (forget history), /exit")
    print("-" * 50)

    chat = ChatOrchestrator()
    session_id = _new_session_id()
    print(f"session_id: {session_id}")

    while True:
        try:
            user_message = input("\nYou: ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nBye!")
            return

        if not user_message:
            continue

        cmd = user_message.lower()

        if cmd in {"/exit", "exit", "quit", "/quit"}:
            print("Bye!")
            return

        if cmd in {"/new", "new"}:
            session_id = _new_session_id()
            print(f"New session_id: {session_id}")
            continue

        if cmd in {"/session", "session"}:
            print(f"session_id: {session_id}")
            continue

        if cmd in {"/clear", "clear"}:
            chat.clear(session_id)
            print("Conversation cleared.")
            continue

        result = chat.handle(session_id, user_message)
        print(f"\nAssistant: {result.reply}")

        if result.content_message:
            print(f"\n{result.content_message}")
            for post in result.matched_content:
                if not isinstance(post, dict):
                    print(f"  - {post}")
                    continue
                caption = post.get("caption") or "(no caption)"
                location = post.get("location") or ""
                print(f"  - {caption} [{location}]")


if __name__ == "__main__":
    main()
