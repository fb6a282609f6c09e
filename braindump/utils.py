"""Utility functions for Slack integration.

Helpers for canvas markdown, idea formatting and Block Kit payloads.
"""

from datetime import datetime
from typing import Dict, List

CANVAS_WEB_URL = "https://app.slack.com/canvas/{canvas_id}"
CANVAS_APP_URL = "slack://canvas/{canvas_id}"

IDEA_PLACEHOLDER = "*Ideas will appear here as they're captured...*\n\n"


def canvas_url(canvas_id: str) -> str:
    """Browser link to a canvas.

    Example:
        >>> canvas_url("F123CANVAS")
        'https://app.slack.com/canvas/F123CANVAS'
    """
    return CANVAS_WEB_URL.format(canvas_id=canvas_id)


def canvas_app_url(canvas_id: str) -> str:
    """Deep link that opens a canvas in the Slack desktop app."""
    return CANVAS_APP_URL.format(canvas_id=canvas_id)


def build_canvas_title(prefix: str, year: int) -> str:
    """Canvas title, e.g. '🧠 Team Brain Dump - 2026'."""
    return f"{prefix} - {year}"


def build_canvas_markdown(include_placeholder: bool = True) -> str:
    """Markdown a fresh brain dump canvas starts with.

    Args:
        include_placeholder: Add the "Ideas will appear here" line. The plain
            file fallback leaves it out.

    Returns:
        Markdown text ending in a blank line so appended ideas start cleanly
    """
    markdown = (
        "# 🧠 Team Brain Dump\n\n"
        "*Automatically capturing your brilliant ideas!*\n\n"
        "---\n\n"
        "## 💡 Recent Ideas\n\n"
    )
    if include_placeholder:
        markdown += IDEA_PLACEHOLDER
    return markdown


def format_idea_timestamp(moment: datetime) -> str:
    """Human-readable capture time.

    Example:
        >>> format_idea_timestamp(datetime(2026, 10, 19, 14, 5))
        'Oct 19, 2026, 02:05 PM'
    """
    return f"{moment.strftime('%b')} {moment.day}, {moment.year}, {moment.strftime('%I:%M %p')}"


def format_idea_entry(text: str, author: str, channel_id: str, timestamp: str) -> str:
    """Render one idea as a canvas markdown fragment.

    Example:
        >>> format_idea_entry("Ship it", "U1", "C1", "Oct 19, 2026, 02:05 PM")
        '### 💡 Oct 19, 2026, 02:05 PM\\n**From:** <@U1> in <#C1>\\n**Idea:** Ship it\\n\\n---\\n\\n'
    """
    return (
        f"### 💡 {timestamp}\n"
        f"**From:** <@{author}> in <#{channel_id}>\n"
        f"**Idea:** {text}\n\n"
        f"---\n\n"
    )


def create_announcement_blocks(canvas_id: str, reaction: str = "bulb") -> List[Dict]:
    """Blocks for the message announcing a newly created canvas.

    Args:
        canvas_id: ID of the created canvas
        reaction: Emoji name that captures ideas

    Returns:
        Section block plus an actions block with a "View Canvas" link button
    """
    return [
        {
            "type": "section",
            "text": {
                "type": "mrkdwn",
                "text": (
                    "🧠 *Brain Dump Canvas Created!*\n\n"
                    f"Add a :{reaction}: reaction to any message to automatically capture it as an idea."
                ),
            },
        },
        {
            "type": "actions",
            "elements": [
                {
                    "type": "button",
                    "text": {"type": "plain_text", "text": "📄 View Canvas"},
                    "url": canvas_url(canvas_id),
                }
            ],
        },
    ]


def announcement_text(reaction: str = "bulb") -> str:
    """Notification fallback text for the canvas announcement."""
    return f"🧠 Brain Dump Canvas created! Add a :{reaction}: reaction to any message to capture ideas automatically."


def create_canvas_link_blocks(canvas_id: str) -> List[Dict]:
    """Blocks for the /canvas reply: a section with an "Open Canvas" button."""
    return [
        {
            "type": "section",
            "text": {
                "type": "mrkdwn",
                "text": "🧠 *Brain Dump Canvas*\nView all captured ideas in one place!",
            },
            "accessory": {
                "type": "button",
                "text": {"type": "plain_text", "text": "📄 Open Canvas"},
                "url": canvas_url(canvas_id),
            },
        }
    ]


def create_test_canvas_blocks(canvas_id: str, canvas_type: str) -> List[Dict]:
    """Blocks reporting a successful /testcanvas run."""
    if canvas_type == "channel":
        visibility = "✅ Should be visible to all channel members"
    else:
        visibility = "⚠️ Standalone canvas - visibility depends on sharing settings"

    return [
        {
            "type": "section",
            "text": {
                "type": "mrkdwn",
                "text": (
                    "✅ *Canvas Created Successfully!*\n\n"
                    f"Canvas ID: `{canvas_id}`\n"
                    f"Type: `{canvas_type}`\n\n"
                    f"{visibility}"
                ),
            },
        },
        {
            "type": "actions",
            "elements": [
                {
                    "type": "button",
                    "text": {"type": "plain_text", "text": "🔗 View in Browser"},
                    "url": canvas_url(canvas_id),
                },
                {
                    "type": "button",
                    "text": {"type": "plain_text", "text": "📱 Open in App"},
                    "url": canvas_app_url(canvas_id),
                },
            ],
        },
    ]


def create_error_blocks(title: str, detail: str) -> List[Dict]:
    """Single section block showing an error title and a code-formatted detail."""
    return [
        {
            "type": "section",
            "text": {
                "type": "mrkdwn",
                "text": f"❌ *{title}*\n\n```{detail}```",
            },
        }
    ]
