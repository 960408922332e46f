"""
LINE Notification Module

Formats found slots into a LINE Flex message and pushes it to one user
through the Messaging API.
"""

import logging
import requests

from config.models import Slot
from config.settings import BASE_URL, LINE_API_URL, LINE_REQUEST_TIMEOUT

logger = logging.getLogger(__name__)

ACCENT_COLOR = "#1DB446"
MUTED_COLOR = "#666666"


class NotificationError(Exception):
    """A LINE push could not be delivered."""


def _text(text, size, color, weight=None, margin=None):
    component = {"type": "text", "text": text, "size": size, "color": color}
    if weight:
        component["weight"] = weight
    if margin:
        component["margin"] = margin
    return component


def _slot_box(slot):
    return {
        "type": "box",
        "layout": "vertical",
        "contents": [
            {
                "type": "box",
                "layout": "vertical",
                "contents": [
                    _text("📍 " + slot.location, "md", ACCENT_COLOR, weight="bold"),
                    _text("👥 " + slot.category, "sm", MUTED_COLOR, margin="sm"),
                    _text("📅 " + slot.date, "sm", MUTED_COLOR, margin="sm"),
                ],
                "spacing": "sm",
            },
            {"type": "separator", "margin": "md"},
        ],
    }


def build_flex_message(slots, reserve_url=BASE_URL):
    """
    Build the Flex message content for a list of slots.

    Args:
        slots (list[Slot]): Slots to list, one box each
        reserve_url (str): Target of the "予約する" button

    Returns:
        dict: A LINE message object of type "flex"
    """
    boxes = [_slot_box(slot) for slot in slots]
    boxes.append(
        {
            "type": "box",
            "layout": "vertical",
            "contents": [
                {
                    "type": "button",
                    "style": "primary",
                    "action": {"type": "uri", "label": "予約する", "uri": reserve_url},
                    "color": ACCENT_COLOR,
                }
            ],
            "margin": "md",
        }
    )

    return {
        "type": "flex",
        "altText": f"空き枠が見つかりました！({len(slots)}件)",
        "contents": {
            "type": "bubble",
            "header": {
                "type": "box",
                "layout": "vertical",
                "contents": [_text("🎉 空き枠発見！", "xl", ACCENT_COLOR, weight="bold")],
            },
            "body": {
                "type": "box",
                "layout": "vertical",
                "contents": boxes,
                "spacing": "md",
            },
        },
    }


class LineNotifier:
    def __init__(self, channel_token, user_id, no_notify=False, timeout=LINE_REQUEST_TIMEOUT,
                 session=None):
        self.channel_token = channel_token
        self.user_id = user_id
        self.no_notify = no_notify
        self.timeout = timeout
        self.session = session or requests.Session()

    def notify_available_slots(self, slots):
        """
        Push a message listing the slots, unless notifications are off.

        Returns:
            bool: True if a message was sent

        Raises:
            NotificationError: Configuration incomplete or the push failed
        """
        if not slots:
            return False

        if self.no_notify:
            logger.info("📱 Notification skipped (--no-notify)")
            return False

        self.send_message(build_flex_message(slots))
        return True

    def send_test_notification(self, location, category):
        """
        Send a message with two sample slots to verify the credentials.
        """
        logger.info("🧪 Testing notification system with sample data...")
        test_slots = [
            Slot(location=location, category=category, date="08/01 (Fri)"),
            Slot(location=location, category=category, date="08/02 (Sat)"),
        ]
        return self.notify_available_slots(test_slots)

    def send_message(self, content):
        """
        POST one message object to the push endpoint.

        Args:
            content (dict): LINE message object
        """
        if not self.channel_token or not self.user_id:
            raise NotificationError("LINE configuration is incomplete")

        payload = {"to": self.user_id, "messages": [content]}
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.channel_token}",
        }

        try:
            resp = self.session.post(
                LINE_API_URL, json=payload, headers=headers, timeout=self.timeout
            )
        except requests.RequestException as e:
            raise NotificationError(f"Failed to send message: {e}") from e

        if resp.status_code != 200:
            raise NotificationError(
                f"Message failed with status: {resp.status_code} {resp.text[:200]}"
            )

        logger.info("📱 Notification sent")
