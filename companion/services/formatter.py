"""
Reply rendering for matched topics, plus the generic fallbacks.

Normal mode picks one of a few short conversational templates at random.
Detailed mode builds a fixed-order report and never uses randomness, so the
same record always renders the same text.
"""

import random
from typing import List, Optional, Sequence

from companion.models.topic import TopicRecord

DEFAULT_RELIEF = "taking a few slow, deep breaths"
DEFAULT_SOLUTION = "talking things through with someone you trust"
DEFAULT_CAUSE = "a build-up of everyday pressure"

# Section caps for the detailed report
MAX_TYPES = 3
MAX_ROOT_CAUSES = 4
MAX_IMPACTS = 4
MAX_RELIEF = 3
MAX_SOLUTIONS = 4
MAX_RESOURCES = 2

NORMAL_TEMPLATES = [
    "I hear you. {definition} Something that often helps in the moment: {relief}. Would you like to try that together?",
    "What you're describing sounds really hard. {definition} A common trigger is {cause}. For right now, try this: {relief}. What do you think might be behind it for you?",
    "Thank you for sharing that. {definition} Right now, try: {relief}. Longer term, many people find this helps: {solution}. Does that sound like something you could try?",
    "You're not alone in this. {definition} A small step you can take today: {relief}. And for the bigger picture: {solution}. How do you feel about taking that first step?",
]

NORMAL_FALLBACKS = [
    "I'm here to listen. 💙 Could you tell me a little more about what you're going through?",
    "Thank you for opening up. It sounds like a lot is on your mind. What's been weighing on you the most lately?",
    "I want to make sure I understand. Could you describe how you've been feeling, for example stressed, anxious, low or unable to sleep?",
]

DETAILED_FALLBACK = """**General Wellbeing Guidance**

I couldn't find a specific topic for what you shared, but here is some guidance that helps with most kinds of emotional difficulty.

**Immediate Steps:**
1. Pause and take five slow breaths, breathing out for longer than you breathe in
2. Name what you are feeling, even if it is only "tense" or "tired"
3. Step away from the situation for a few minutes if you can

**Everyday Habits:**
1. Keep a regular sleep and wake time
2. Move your body for at least 20 minutes a day
3. Stay in touch with at least one person you trust
4. Limit alcohol, caffeine and late-night screen time

**When to Seek Help:**
If these feelings last more than two weeks, get in the way of work, study or relationships, or you have any thoughts of harming yourself, please contact a doctor or mental health professional.

**Resources:**
• Crisis line: call or text 988 (US)
• Find a therapist through your doctor or local health service

Would you like to tell me more about what's going on, so I can give more specific guidance?"""


def _first(items: Sequence[str], default: str) -> str:
    return items[0].rstrip(".") if items else default


def format_normal(record: TopicRecord, rng: Optional[random.Random] = None) -> str:
    template = (rng or random).choice(NORMAL_TEMPLATES)
    return template.format(
        definition=record.definition,
        relief=_first(record.immediate_relief, DEFAULT_RELIEF),
        solution=_first(record.long_term_solutions, DEFAULT_SOLUTION),
        cause=_first(record.root_causes, DEFAULT_CAUSE),
    )


def _bullets(items: Sequence[str], limit: int) -> List[str]:
    return [f"• {item}" for item in items[:limit]]


def _numbered(items: Sequence[str], limit: int) -> List[str]:
    return [f"{i}. {item}" for i, item in enumerate(items[:limit], start=1)]


def format_detailed(record: TopicRecord, title: Optional[str] = None) -> str:
    heading = f"**Understanding {title}**" if title else "**Understanding**"
    sections = [
        (heading, [record.definition]),
        ("**Common Types:**", _bullets(record.types, MAX_TYPES)),
        ("**Root Causes:**", _bullets(record.root_causes, MAX_ROOT_CAUSES)),
        ("**How It Can Affect You:**", _bullets(record.impacts, MAX_IMPACTS)),
        ("**Immediate Relief:**", _numbered(record.immediate_relief, MAX_RELIEF)),
        ("**Long-Term Solutions:**", _numbered(record.long_term_solutions, MAX_SOLUTIONS)),
        ("**When to Seek Help:**", [record.when_to_seek_help] if record.when_to_seek_help else []),
        ("**Resources:**", _bullets(record.resources, MAX_RESOURCES)),
    ]
    return "\n\n".join("\n".join([header, *body]) for header, body in sections)


def normal_fallback(rng: Optional[random.Random] = None) -> str:
    return (rng or random).choice(NORMAL_FALLBACKS)


def detailed_fallback() -> str:
    return DETAILED_FALLBACK
