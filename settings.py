# settings.py
import os
from pydantic import BaseModel

DEFAULT_GREETING = "Hello! How can I assist you today?"
DEFAULT_FALLBACK_REPLY = "Thank you for your message. This is a simulated response."

class Settings(BaseModel):
    CHAT_ENDPOINT_URL: str = os.getenv("CHAT_ENDPOINT_URL", "http://localhost:8000/chat")
    GREETING_TEXT: str = os.getenv("GREETING_TEXT", DEFAULT_GREETING)
    FALLBACK_REPLY: str = os.getenv("FALLBACK_REPLY", DEFAULT_FALLBACK_REPLY)
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "WARNING")
