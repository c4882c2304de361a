import logging
import uuid
from typing import List, Optional

from mindwell.ai_client import ModelGateway
from mindwell.models import ChatMessage, Sender

logger = logging.getLogger(__name__)

SYSTEM_INSTRUCTION = (
    "You are MindWell, a friendly and empathetic AI wellness assistant. "
    "Your goal is to provide a safe space for users to express their feelings. "
    "Offer supportive words, calming suggestions like breathing exercises or journaling prompts, "
    "and be a good listener. If a user asks for music, suggest a type of relaxing music. "
    "If they ask to journal, encourage them and perhaps offer a prompt. "
    "Keep your responses concise and gentle."
)
GREETING = "Hello! I'm your MindWell assistant. How can I support you right now?"
CONNECTION_TROUBLE = "I'm having a little trouble connecting right now. Please try again in a moment."

QUICK_PICKS = [
    "I'm feeling anxious",
    "Suggest a breathing exercise",
    "I want to journal",
]

# Turns sent with each request; older turns stay on screen but leave the prompt
HISTORY_LIMIT = 20

_ROLES = {Sender.USER: "user", Sender.AI: "assistant"}


def _new_id(sender: Sender) -> str:
    return f"{sender.value}-{uuid.uuid4().hex[:12]}"


class ChatSession:
    """One open-ended conversation, strictly ordered, one send at a time."""

    def __init__(self, gateway: ModelGateway, system_instruction: str = SYSTEM_INSTRUCTION):
        self.gateway = gateway
        self.system_instruction = system_instruction
        self.messages: List[ChatMessage] = [ChatMessage(id="init-1", text=GREETING, sender=Sender.AI)]

    def show_quick_picks(self) -> bool:
        return len(self.messages) <= 1

    def _conversation(self):
        return [{"role": _ROLES[m.sender], "content": m.text} for m in self.messages[-HISTORY_LIMIT:]]

    def send(self, text: str) -> Optional[ChatMessage]:
        """Append the user's message and the assistant's reply; returns the reply."""
        text = (text or "").strip()
        if not text:
            return None

        self.messages.append(ChatMessage(id=_new_id(Sender.USER), text=text, sender=Sender.USER))
        result = self.gateway.chat(self.system_instruction, self._conversation())
        if result.ok:
            reply = result.value
        else:
            logger.info("Chat reply unavailable (%s)", result.failure.value)
            reply = CONNECTION_TROUBLE

        message = ChatMessage(id=_new_id(Sender.AI), text=reply, sender=Sender.AI)
        self.messages.append(message)
        return message
