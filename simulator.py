"""Interactive CLI chat simulator — try the front desk without WhatsApp."""

import asyncio
import itertools

from frontdesk_agent.models.events import AuthorRole, InboundEvent
from frontdesk_agent.services.message_router import MessageRouter
from frontdesk_agent.services.session_store import SessionStore

BLUE = "\033[94m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
CYAN = "\033[96m"
DIM = "\033[2m"
BOLD = "\033[1m"
RESET = "\033[0m"

SIMULATOR_SESSIONS_FILE = "./simulator_sessions.json"


class ConsoleSender:
    """Prints replies instead of sending them."""

    async def send_text(self, conversation_id: str, text: str) -> bool:
        print(f"{GREEN}{BOLD}Agent → {conversation_id}:{RESET} {text}\n")
        return True


async def main() -> None:
    print(f"\n{BOLD}{'=' * 52}")
    print(f"  🤖  Front Desk Agent — Chat Simulator")
    print(f"{'=' * 52}{RESET}\n")

    print(f"{DIM}Type 'quit' to exit, 'switch' to change chat, 'state' to show sessions{RESET}")
    print(f"{DIM}     Prefix a line with '/op ' to send it as the office operator{RESET}\n")

    chat_id = input(f"{YELLOW}Enter chat id to simulate: {RESET}").strip()
    if not chat_id:
        chat_id = "5511999999999@c.us"
    print(f"{DIM}Simulating as {chat_id}{RESET}\n")

    # ── Set up the pipeline ──────────────────────────────
    store = SessionStore(SIMULATOR_SESSIONS_FILE)
    store.load()
    router = MessageRouter(store, ConsoleSender())
    message_ids = itertools.count(1)

    while True:
        try:
            user_input = input(f"{BLUE}{BOLD}You:{RESET} ").strip()
        except (KeyboardInterrupt, EOFError):
            print(f"\n{DIM}Goodbye!{RESET}")
            break

        if not user_input:
            continue

        if user_input.lower() == "quit":
            print(f"{DIM}Goodbye!{RESET}")
            break

        if user_input.lower() == "switch":
            chat_id = input(f"{YELLOW}New chat id: {RESET}").strip()
            print(f"{DIM}Switched to {chat_id}{RESET}\n")
            continue

        if user_input.lower() == "state":
            for cid, session in store.snapshot().items():
                print(f"{CYAN}{cid}: {session.to_dict()}{RESET}")
            print()
            continue

        role = AuthorRole.CUSTOMER
        if user_input.startswith("/op "):
            role = AuthorRole.OPERATOR
            user_input = user_input[4:]

        # ── Route the message through the pipeline ───────
        await router.route(
            InboundEvent(
                conversation_id=chat_id,
                author_role=role,
                body=user_input,
                message_id=f"sim-{next(message_ids)}",
            )
        )

        session = store.get(chat_id)
        state = session.to_dict() if session else "no session"
        print(f"{DIM}[{state}]{RESET}")


if __name__ == "__main__":
    asyncio.run(main())
