"""Pydantic models for the subset of Slack Block Kit used in messages."""
from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel


class SlackText(BaseModel):
    """A Block Kit text object."""
    type: Literal["plain_text", "mrkdwn"] = "mrkdwn"
    text: str
    emoji: Optional[bool] = None


class SlackBlock(BaseModel):
    """A header, section, divider or context block."""
    type: Literal["header", "section", "divider", "context"]
    text: Optional[SlackText] = None
    elements: Optional[list[SlackText]] = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the JSON shape the Slack API expects."""
        return self.model_dump(exclude_none=True)


def header_block(text: str) -> SlackBlock:
    return SlackBlock(type="header", text=SlackText(type="plain_text", text=text, emoji=True))


def section_block(text: str) -> SlackBlock:
    return SlackBlock(type="section", text=SlackText(text=text))


def divider_block() -> SlackBlock:
    return SlackBlock(type="divider")


def context_block(text: str) -> SlackBlock:
    return SlackBlock(type="context", elements=[SlackText(text=text)])
