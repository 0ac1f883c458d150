from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from agent.core.catalog import WordEntry


DAILY_WORD_TEMPLATE = (
    "🇫🇷 *Word of the day*: *{word}*\n"
    "Pronunciation: {pronunciation}\n"
    "Meaning: {meaning}\n"
    "Example: {example}\n\n"
    "Can you write a sentence using *{word}*? Reply here and I'll give feedback!"
)

CORRECT_USAGE_TEMPLATE = (
    'Amazing, you used the word "{word}" correctly! Très bien 🎉\n'
    "Would you like another word tomorrow?"
)

TRY_AGAIN_TEMPLATE = (
    'Thanks, nice try! Here\'s a tip: include the word "{word}" in your sentence '
    '(e.g., "{example}").'
)

TRY_AGAIN_NO_WORD_TEMPLATE = (
    "Thanks, nice try! Here's a tip: include the new word in your sentence "
    '(e.g., "{example}").'
)

GENERIC_EXAMPLE = "example"


class SuggestedAction(BaseModel):
    type: str = "button"
    title: str
    payload: str


class OutboundPayload(BaseModel):
    type: str = "message"
    text: str
    actions: List[SuggestedAction] = Field(default_factory=list)


DAILY_WORD_ACTIONS = (
    SuggestedAction(title="I'll use it now", payload="I used the word: "),
    SuggestedAction(title="Send a sentence later", payload="send later"),
)


def compose_daily_word(entry: WordEntry) -> OutboundPayload:
    text = DAILY_WORD_TEMPLATE.format(
        word=entry.word,
        pronunciation=entry.pronunciation,
        meaning=entry.meaning,
        example=entry.example,
    )
    return OutboundPayload(
        text=text,
        actions=[action.model_copy() for action in DAILY_WORD_ACTIONS],
    )


def uses_word(text: str, word: str) -> bool:
    return word.strip().lower() in text.strip().lower()


def compose_acknowledgement(text: str, last_entry: Optional[WordEntry]) -> OutboundPayload:
    """Reply to a practice sentence.

    Praise the user when the sentence contains the word that was last sent to
    the conversation, otherwise nudge them to include it.
    """
    if last_entry is None:
        reply = TRY_AGAIN_NO_WORD_TEMPLATE.format(example=GENERIC_EXAMPLE)
    elif uses_word(text, last_entry.word):
        reply = CORRECT_USAGE_TEMPLATE.format(word=last_entry.word)
    else:
        reply = TRY_AGAIN_TEMPLATE.format(word=last_entry.word, example=last_entry.example)
    return OutboundPayload(text=reply, actions=[])
