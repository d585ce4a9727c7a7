"""
Greeting detection and greeting replies.
"""

import random
from typing import Optional

# Substring match on purpose: "hi" also fires inside "history" or "this".
GREETING_PHRASES = [
    "hello",
    "hi",
    "hey",
    "hiya",
    "greetings",
    "good morning",
    "good afternoon",
    "good evening",
    "howdy",
]

GREETING_RESPONSES = [
    "Hello! 👋 I'm really glad you're here. How are you feeling today?",
    "Hi there! 😊 This is a safe space to talk. What's on your mind?",
    "Hey! 💙 Thanks for reaching out. Is there something you'd like to talk through today?",
    "Hello, and welcome. 🌿 Whether it's stress, anxiety, sleep or something else, I'm here to listen. Where would you like to start?",
    "Hi! 🌟 It's good to hear from you. How has your day been so far?",
]


def is_greeting(text: Optional[str]) -> bool:
    if not text:
        return False
    lower = text.strip().lower()
    return any(lower == phrase or phrase in lower for phrase in GREETING_PHRASES)


def greet(rng: Optional[random.Random] = None) -> str:
    return (rng or random).choice(GREETING_RESPONSES)
